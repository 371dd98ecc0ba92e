"""
Error taxonomy for order construction, decoding and configuration.

All errors are raised synchronously at the point of violation:
- ConfigError        — unknown chain id / missing contract configuration
- DeadlineError      — deadline not in the future when set on the builder
- InvariantError     — required field missing or cross-field rule violated
- InvalidAmountError — start/end amount monotonicity violated
- DecodeError        — malformed bytes for a known validation contract or ABI payload
"""


class DutchOrderError(Exception):
    """Base class for all dutch_orders errors"""


class ConfigError(DutchOrderError):
    """Missing chain configuration"""

    def __init__(self, key: str, chain_id: int | None):
        self.key = key
        self.chain_id = chain_id
        super().__init__(f"Missing configuration for {key}: {chain_id}")


class DeadlineError(DutchOrderError):
    """Deadline is not strictly in the future at the time it is set"""

    def __init__(self, deadline: int):
        self.deadline = deadline
        super().__init__(f"Deadline must be in the future: {deadline}")


class InvariantError(DutchOrderError):
    """Required field missing or cross-field invariant violated"""

    def __init__(self, message: str):
        super().__init__(f"Invariant failed: {message}")


class InvalidAmountError(DutchOrderError):
    """Amount pair violates its decay direction"""

    def __init__(self, message: str, start_amount: int):
        self.start_amount = start_amount
        super().__init__(f"{message}: {start_amount}")


class DecodeError(DutchOrderError):
    """Bytes could not be decoded"""
