"""
Domain models and value objects.

Amount pairs, validation extension variants and the DutchOrder itself.
"""

from dutch_orders.core.domain.amounts import DutchInput, DutchOutput, decay
from dutch_orders.core.domain.order import (
    DutchOrder,
    DutchOrderInfo,
    ResolvedAmount,
    ResolvedDutchOrder,
    assemble_order,
)
from dutch_orders.core.domain.validation import (
    EXCLUSIVE_FILLER_DISCRIMINANT,
    NONE_ENCODED,
    NONE_VALIDATION,
    EncodedValidation,
    ExclusiveFillerData,
    ExclusiveFillerValidation,
    NoneValidation,
    UnknownValidation,
    ValidationInfo,
    decode_validation,
    encode_exclusive_filler_data,
    encode_validation,
)
from dutch_orders.core.types import ValidationType

__all__ = [
    # Amounts
    "DutchInput",
    "DutchOutput",
    "decay",
    # Validation
    "ValidationType",
    "ValidationInfo",
    "NoneValidation",
    "ExclusiveFillerValidation",
    "ExclusiveFillerData",
    "UnknownValidation",
    "EncodedValidation",
    "NONE_ENCODED",
    "NONE_VALIDATION",
    "EXCLUSIVE_FILLER_DISCRIMINANT",
    "encode_exclusive_filler_data",
    "encode_validation",
    "decode_validation",
    # Order
    "DutchOrder",
    "DutchOrderInfo",
    "ResolvedAmount",
    "ResolvedDutchOrder",
    "assemble_order",
]
