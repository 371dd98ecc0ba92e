"""
Primitive on-chain value types shared by the domain models.

Address  — lower-case "0x" + 40 hex chars
Uint256  — unsigned 256-bit integer
HexBytes — lower-case "0x"-prefixed hex string with an even number of digits
"""

import re
from enum import Enum
from typing import Annotated, Final

from pydantic import AfterValidator, Field


# =============================================================================
# CONSTANTS
# =============================================================================

UINT256_MAX: Final[int] = 2**256 - 1

ZERO_ADDRESS: Final[str] = "0x" + "0" * 40

EMPTY_BYTES: Final[str] = "0x"

_ADDRESS_RE: Final = re.compile(r"^0x[0-9a-fA-F]{40}$")
_HEX_RE: Final = re.compile(r"^0x([0-9a-fA-F]{2})*$")


# =============================================================================
# ENUMS
# =============================================================================


class ValidationType(str, Enum):
    """Validation extension kinds"""

    NONE = "None"
    EXCLUSIVE_FILLER = "ExclusiveFiller"
    UNKNOWN = "Unknown"  # Contract not recognized, payload kept opaque


# =============================================================================
# NORMALIZERS
# =============================================================================


def normalize_address(value: str) -> str:
    """
    Normalize an address to lower-case hex.

    Raises:
        ValueError: If value is not a 20-byte hex address
    """
    if not isinstance(value, str) or not _ADDRESS_RE.match(value):
        raise ValueError(f"Invalid address: {value!r}")
    return value.lower()


def normalize_hex(value: str) -> str:
    """
    Normalize a hex byte string to lower-case.

    Raises:
        ValueError: If value is not "0x"-prefixed whole-byte hex
    """
    if not isinstance(value, str) or not _HEX_RE.match(value):
        raise ValueError(f"Invalid hex bytes: {value!r}")
    return value.lower()


Address = Annotated[str, AfterValidator(normalize_address)]
HexBytes = Annotated[str, AfterValidator(normalize_hex)]
Uint256 = Annotated[int, Field(ge=0, le=UINT256_MAX)]
