"""
dutch_orders — Dutch auction order model, validation codec and builder.

Orders whose input/output amounts decay linearly over a time window,
with an optional pluggable validation extension (exclusive filler).
"""

from dutch_orders.builder import DutchOrderBuilder
from dutch_orders.core.config import DEFAULT_CHAIN_CONFIGS, ChainConfig, ChainConfigTable
from dutch_orders.core.domain import (
    DutchInput,
    DutchOrder,
    DutchOrderInfo,
    DutchOutput,
    EncodedValidation,
    ExclusiveFillerValidation,
    NoneValidation,
    UnknownValidation,
    ValidationType,
    decode_validation,
    encode_exclusive_filler_data,
)
from dutch_orders.core.errors import (
    ConfigError,
    DeadlineError,
    DecodeError,
    DutchOrderError,
    InvalidAmountError,
    InvariantError,
)

__all__ = [
    "DutchOrderBuilder",
    # Config
    "ChainConfig",
    "ChainConfigTable",
    "DEFAULT_CHAIN_CONFIGS",
    # Domain
    "DutchInput",
    "DutchOutput",
    "DutchOrder",
    "DutchOrderInfo",
    "EncodedValidation",
    "ExclusiveFillerValidation",
    "NoneValidation",
    "UnknownValidation",
    "ValidationType",
    "decode_validation",
    "encode_exclusive_filler_data",
    # Errors
    "DutchOrderError",
    "ConfigError",
    "DeadlineError",
    "DecodeError",
    "InvalidAmountError",
    "InvariantError",
]
