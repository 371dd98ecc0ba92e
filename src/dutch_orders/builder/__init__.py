"""
Order builders.
"""

from .dutch_order_builder import DutchOrderBuilder

__all__ = [
    "DutchOrderBuilder",
]
