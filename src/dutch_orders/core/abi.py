"""
Minimal Ethereum ABI word codec.

Covers exactly what orders and validation payloads need: uint256 and
address words, dynamic `bytes`, and offsets into a tail section.
All words are 32 bytes, big-endian.
"""

from typing import Final

from dutch_orders.core.errors import DecodeError
from dutch_orders.core.types import UINT256_MAX

WORD: Final[int] = 32


# =============================================================================
# ENCODING
# =============================================================================


def encode_uint(value: int) -> bytes:
    if not 0 <= value <= UINT256_MAX:
        raise ValueError(f"uint256 out of range: {value}")
    return value.to_bytes(WORD, "big")


def encode_address(address: str) -> bytes:
    return bytes.fromhex(address[2:]).rjust(WORD, b"\x00")


def encode_bytes(data: bytes) -> bytes:
    """Length word followed by data right-padded to a word boundary"""
    padded_len = -(-len(data) // WORD) * WORD
    return encode_uint(len(data)) + data.ljust(padded_len, b"\x00")


def hex_to_bytes(value: str) -> bytes:
    return bytes.fromhex(value[2:])


def bytes_to_hex(data: bytes) -> str:
    return "0x" + data.hex()


# =============================================================================
# DECODING
# =============================================================================


class WordReader:
    """Random-access reader over an ABI-encoded buffer."""

    def __init__(self, data: bytes, base: int = 0):
        self.data = data
        self.base = base

    def _word(self, index: int) -> bytes:
        start = self.base + index * WORD
        end = start + WORD
        if start < 0 or end > len(self.data):
            raise DecodeError(f"ABI data too short: need {end} bytes, have {len(self.data)}")
        return self.data[start:end]

    def uint(self, index: int) -> int:
        return int.from_bytes(self._word(index), "big")

    def address(self, index: int) -> str:
        word = self._word(index)
        if any(word[:12]):
            raise DecodeError(f"Dirty address word at {index}: 0x{word.hex()}")
        return "0x" + word[12:].hex()

    def at_offset(self, index: int) -> "WordReader":
        """Reader positioned at the offset stored in word `index`"""
        offset = self.uint(index)
        if self.base + offset > len(self.data):
            raise DecodeError(f"ABI offset out of range: {offset}")
        return WordReader(self.data, self.base + offset)

    def dynamic_bytes(self, index: int) -> bytes:
        tail = self.at_offset(index)
        length = tail.uint(0)
        start = tail.base + WORD
        if start + length > len(self.data):
            raise DecodeError(f"ABI bytes length out of range: {length}")
        return self.data[start : start + length]
