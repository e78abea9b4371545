"""
Mensa Application Layer

Orchestrates query building, transport and decoding into typed plans.
"""
