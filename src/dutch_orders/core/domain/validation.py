"""
Validation extension — typed variants and their (contract, bytes) encoding.

An order carries its validation extension as an opaque pair
(validation_contract, validation_data). The contract address tells which
decoder owns the bytes:

- zero address + empty bytes            -> NoneValidation
- registered ExclusiveFiller contract   -> ExclusiveFillerValidation
- other address, ExclusiveFiller payload -> ExclusiveFillerValidation
- anything else                         -> UnknownValidation (kept opaque)

ExclusiveFiller wire format: three ABI words
(uint256 discriminant, address filler, uint256 last_exclusive_timestamp).
"""

from typing import Annotated, Final, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field

from dutch_orders.core.abi import (
    WORD,
    WordReader,
    bytes_to_hex,
    encode_address,
    encode_uint,
    hex_to_bytes,
)
from dutch_orders.core.config import DEFAULT_CHAIN_CONFIGS, ChainConfig, ChainConfigTable
from dutch_orders.core.errors import ConfigError, DecodeError
from dutch_orders.core.types import (
    EMPTY_BYTES,
    ZERO_ADDRESS,
    Address,
    HexBytes,
    Uint256,
    ValidationType,
    normalize_address,
)

# Discriminant word embedded in every ExclusiveFiller payload
EXCLUSIVE_FILLER_DISCRIMINANT: Final[int] = 1

_EXCLUSIVE_FILLER_PAYLOAD_LEN: Final[int] = 3 * WORD


# =============================================================================
# ENCODED PAIR
# =============================================================================


class EncodedValidation(BaseModel):
    """Validation extension as embedded in the order"""

    validation_contract: Address = Field(ZERO_ADDRESS, description="Owning validation contract")
    validation_data: HexBytes = Field(EMPTY_BYTES, description="Payload, opaque outside the codec")

    model_config = {"frozen": True}

    def is_none(self) -> bool:
        return self.validation_contract == ZERO_ADDRESS and self.validation_data == EMPTY_BYTES


NONE_ENCODED: Final[EncodedValidation] = EncodedValidation()


# =============================================================================
# TYPED VARIANTS
# =============================================================================


class ExclusiveFillerData(BaseModel):
    filler: Address = Field(..., description="Filler holding exclusive rights")
    last_exclusive_timestamp: Uint256 = Field(
        ..., description="Last unix timestamp at which exclusivity applies"
    )

    model_config = {"frozen": True}


class NoneValidation(BaseModel):
    type: Literal[ValidationType.NONE] = ValidationType.NONE

    model_config = {"frozen": True}


class ExclusiveFillerValidation(BaseModel):
    """Only `data.filler` may fill until `data.last_exclusive_timestamp` (inclusive)"""

    type: Literal[ValidationType.EXCLUSIVE_FILLER] = ValidationType.EXCLUSIVE_FILLER
    data: ExclusiveFillerData

    model_config = {"frozen": True}


class UnknownValidation(BaseModel):
    """Validation contract not recognized for this chain; payload passed through"""

    type: Literal[ValidationType.UNKNOWN] = ValidationType.UNKNOWN
    validation_contract: Address
    validation_data: HexBytes

    model_config = {"frozen": True}


ValidationInfo = Annotated[
    Union[NoneValidation, ExclusiveFillerValidation, UnknownValidation],
    Field(discriminator="type"),
]

NONE_VALIDATION: Final[NoneValidation] = NoneValidation()


# =============================================================================
# ENCODING
# =============================================================================


def encode_exclusive_filler_data(
    filler: str,
    last_exclusive_timestamp: int,
    chain_id: Optional[int] = None,
    validation_contract: Optional[str] = None,
    config: ChainConfigTable = DEFAULT_CHAIN_CONFIGS,
) -> EncodedValidation:
    """
    Encode exclusive-filler rights.

    An explicit validation_contract wins; otherwise the chain's registered
    ExclusiveFiller contract is used.

    Args:
        filler: Filler address with exclusive rights
        last_exclusive_timestamp: Last unix timestamp of exclusivity
        chain_id: Chain to look the contract up on
        validation_contract: Explicit contract address
        config: Chain configuration table

    Returns:
        EncodedValidation pair

    Raises:
        ConfigError: If no contract is given and none is registered for the chain
    """
    if validation_contract is None:
        contract = None
        if chain_id is not None and chain_id in config:
            contract = config.resolve(chain_id).validation_contract(ValidationType.EXCLUSIVE_FILLER)
        if contract is None:
            raise ConfigError("ExclusiveFillerValidation", chain_id)
        validation_contract = contract

    payload = (
        encode_uint(EXCLUSIVE_FILLER_DISCRIMINANT)
        + encode_address(normalize_address(filler))
        + encode_uint(last_exclusive_timestamp)
    )
    return EncodedValidation(
        validation_contract=validation_contract,
        validation_data=bytes_to_hex(payload),
    )


def encode_validation(info: ValidationInfo, chain_config: ChainConfig) -> EncodedValidation:
    """
    Encode a typed variant into its embedded pair.

    Raises:
        ConfigError: ExclusiveFiller on a chain without a registered contract
    """
    if isinstance(info, NoneValidation):
        return NONE_ENCODED
    if isinstance(info, UnknownValidation):
        return EncodedValidation(
            validation_contract=info.validation_contract,
            validation_data=info.validation_data,
        )
    contract = chain_config.validation_contract(ValidationType.EXCLUSIVE_FILLER)
    if contract is None:
        raise ConfigError("ExclusiveFillerValidation", chain_config.chain_id)
    return encode_exclusive_filler_data(
        info.data.filler,
        info.data.last_exclusive_timestamp,
        validation_contract=contract,
    )


# =============================================================================
# DECODING
# =============================================================================


def _decode_exclusive_filler(data: bytes) -> ExclusiveFillerValidation:
    if len(data) != _EXCLUSIVE_FILLER_PAYLOAD_LEN:
        raise DecodeError(
            f"ExclusiveFiller payload must be {_EXCLUSIVE_FILLER_PAYLOAD_LEN} bytes, "
            f"got {len(data)}"
        )
    reader = WordReader(data)
    discriminant = reader.uint(0)
    if discriminant != EXCLUSIVE_FILLER_DISCRIMINANT:
        raise DecodeError(f"Unexpected ExclusiveFiller discriminant: {discriminant}")
    return ExclusiveFillerValidation(
        data=ExclusiveFillerData(filler=reader.address(1), last_exclusive_timestamp=reader.uint(2))
    )


def _is_exclusive_filler_payload(data: bytes) -> bool:
    """96 bytes, discriminant word 1, clean address word"""
    return (
        len(data) == _EXCLUSIVE_FILLER_PAYLOAD_LEN
        and int.from_bytes(data[:WORD], "big") == EXCLUSIVE_FILLER_DISCRIMINANT
        and not any(data[WORD : WORD + 12])
    )


def decode_validation(
    validation_contract: str,
    validation_data: str,
    known_contracts: Mapping[ValidationType, str],
) -> ValidationInfo:
    """
    Decode an embedded pair into its typed variant.

    A registered ExclusiveFiller contract must carry a valid payload. Any
    other contract carrying a well-formed ExclusiveFiller payload is decoded
    too; everything else is passed through as UnknownValidation.

    Args:
        validation_contract: Contract address owning the payload
        validation_data: "0x" hex payload
        known_contracts: Registered contracts by kind (ChainConfig.validation_contracts)

    Returns:
        NoneValidation, ExclusiveFillerValidation or UnknownValidation

    Raises:
        DecodeError: Malformed payload for a registered contract
    """
    encoded = EncodedValidation(
        validation_contract=validation_contract, validation_data=validation_data
    )
    if encoded.is_none():
        return NONE_VALIDATION

    filler_contract = known_contracts.get(ValidationType.EXCLUSIVE_FILLER)
    if (
        filler_contract is not None
        and normalize_address(filler_contract) == encoded.validation_contract
    ):
        return _decode_exclusive_filler(hex_to_bytes(encoded.validation_data))

    # Unregistered contract: decode only a well-formed ExclusiveFiller payload,
    # keep anything else opaque
    data = hex_to_bytes(encoded.validation_data)
    if _is_exclusive_filler_payload(data):
        return _decode_exclusive_filler(data)

    return UnknownValidation(
        validation_contract=encoded.validation_contract,
        validation_data=encoded.validation_data,
    )
