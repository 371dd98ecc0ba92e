"""
Contract Validation Module

Validation of the canonical JSON order contract against its JSON Schema.
"""

from .validators import DutchOrderValidator, SchemaLoader

__all__ = [
    "SchemaLoader",
    "DutchOrderValidator",
]
