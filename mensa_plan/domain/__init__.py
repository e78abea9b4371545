"""
Mensa Domain Layer

Immutable value objects and entities describing a weekly meal plan.
All domain objects are frozen dataclasses with ZERO external dependencies.
"""
