"""
Amount pairs — token amounts that decay linearly between start and end.

DutchInput:  start_amount <= end_amount (cost to the swapper rises over time)
DutchOutput: start_amount >= end_amount (value to the swapper falls over time)

Monotonicity is not enforced at model construction: the builder checks it
at build time, in input-then-outputs order, so that errors surface in a
fixed sequence together with the other order invariants.
"""

from pydantic import BaseModel, Field

from dutch_orders.core.errors import InvalidAmountError
from dutch_orders.core.types import Address, Uint256


def decay(
    start_amount: int, end_amount: int, start_time: int, end_time: int, timestamp: int
) -> int:
    """
    Linearly decayed amount at a timestamp.

    Rounds down. At or before start_time the start amount applies, at or
    after end_time the end amount applies.

    Args:
        start_amount: Amount at start_time
        end_amount: Amount at end_time
        start_time: Decay window start (unix seconds)
        end_time: Decay window end (unix seconds)
        timestamp: Evaluation time (unix seconds)

    Returns:
        Decayed amount
    """
    if start_amount == end_amount or timestamp >= end_time:
        return end_amount
    if timestamp <= start_time:
        return start_amount

    elapsed = timestamp - start_time
    duration = end_time - start_time
    if end_amount < start_amount:
        return start_amount - (start_amount - end_amount) * elapsed // duration
    return start_amount + (end_amount - start_amount) * elapsed // duration


class DutchInput(BaseModel):
    """Input token amount pair (what the swapper gives)"""

    token: Address = Field(..., description="Input token address")
    start_amount: Uint256 = Field(..., description="Amount at start_time")
    end_amount: Uint256 = Field(..., description="Amount at end_time")

    model_config = {"frozen": True}

    def check_decay(self) -> None:
        """
        Raises:
            InvalidAmountError: If start_amount > end_amount
        """
        if self.start_amount > self.end_amount:
            raise InvalidAmountError(
                "startAmount must be less than or equal to endAmount", self.start_amount
            )

    def decayed(self, start_time: int, end_time: int, timestamp: int) -> int:
        return decay(self.start_amount, self.end_amount, start_time, end_time, timestamp)

    def to_json(self) -> dict:
        return {
            "token": self.token,
            "startAmount": str(self.start_amount),
            "endAmount": str(self.end_amount),
        }


class DutchOutput(BaseModel):
    """Output token amount pair (what the recipient receives)"""

    token: Address = Field(..., description="Output token address")
    start_amount: Uint256 = Field(..., description="Amount at start_time")
    end_amount: Uint256 = Field(..., description="Amount at end_time")
    recipient: Address = Field(..., description="Receiver of the output tokens")

    model_config = {"frozen": True}

    def check_decay(self) -> None:
        """
        Raises:
            InvalidAmountError: If start_amount < end_amount
        """
        if self.start_amount < self.end_amount:
            raise InvalidAmountError(
                "startAmount must be greater than endAmount", self.start_amount
            )

    def decayed(self, start_time: int, end_time: int, timestamp: int) -> int:
        return decay(self.start_amount, self.end_amount, start_time, end_time, timestamp)

    def to_json(self) -> dict:
        return {
            "token": self.token,
            "startAmount": str(self.start_amount),
            "endAmount": str(self.end_amount),
            "recipient": self.recipient,
        }
