"""
Mensa Plan

Typed client for the SWFR weekly cafeteria (Mensa) meal plan API.
"""
