"""
Test suite for dutch_orders

Contains:
- tests/unit/          : Unit tests for individual modules
"""
