"""
DutchOrderBuilder — fluent, mutable accumulator for DutchOrder

Setters only record values; all invariants are checked together by build().
The one exception is deadline(): it must be strictly in the future at the
moment it is called and raises DeadlineError right there. This check is not
repeated by build(), from_order() or DutchOrder.from_json(), so historical
orders can still be rebuilt.

build() does not consume the draft: it may be called repeatedly, and the
draft may be changed between calls. Every returned DutchOrder is an
independent snapshot.
"""

import logging
import time
from typing import Callable, List, Optional, Union

from dutch_orders.core.config import DEFAULT_CHAIN_CONFIGS, ChainConfig, ChainConfigTable
from dutch_orders.core.domain.amounts import DutchInput, DutchOutput
from dutch_orders.core.domain.order import DutchOrder, assemble_order
from dutch_orders.core.domain.validation import (
    NONE_ENCODED,
    EncodedValidation,
    ValidationInfo,
    encode_validation,
)
from dutch_orders.core.errors import DeadlineError

logger = logging.getLogger(__name__)


class DutchOrderBuilder:
    """
    Builder for DutchOrder.

    Example:
        order = (
            DutchOrderBuilder(1)
            .deadline(deadline)
            .start_time(deadline - 100)
            .offerer(offerer)
            .nonce(100)
            .input(DutchInput(token=usdc, start_amount=10**6, end_amount=10**6))
            .output(
                DutchOutput(token=weth, start_amount=10**18, end_amount=10**17, recipient=offerer)
            )
            .build()
        )
    """

    def __init__(
        self,
        chain_id: int,
        config: ChainConfigTable = DEFAULT_CHAIN_CONFIGS,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            chain_id: Chain the order is built for
            config: Chain configuration table
            clock: Current unix time source, used by deadline()

        Raises:
            ConfigError: If chain_id is not configured
        """
        self.chain_id = chain_id
        self.chain_config: ChainConfig = config.resolve(chain_id)
        self._clock = clock

        self._offerer: Optional[str] = None
        self._nonce: Optional[int] = None
        self._deadline: Optional[int] = None
        self._start_time: Optional[int] = None
        self._end_time: Optional[int] = None
        self._input: Optional[DutchInput] = None
        self._outputs: List[DutchOutput] = []
        self._validation: Union[ValidationInfo, EncodedValidation] = NONE_ENCODED

    @classmethod
    def from_order(cls, order: DutchOrder) -> "DutchOrderBuilder":
        """
        Builder pre-populated with every field of an existing order.

        build() on the result reproduces an equivalent order; each further
        setter call overrides exactly that field. The deadline is copied
        without the future check.
        """
        builder = cls(
            order.chain_id,
            config=ChainConfigTable({order.chain_id: order.chain_config}),
        )
        info = order.info
        builder._offerer = info.offerer
        builder._nonce = info.nonce
        builder._deadline = info.deadline
        builder._start_time = info.start_time
        builder._end_time = info.end_time
        builder._input = info.input
        builder._outputs = list(info.outputs)
        builder._validation = EncodedValidation(
            validation_contract=info.validation_contract,
            validation_data=info.validation_data,
        )
        return builder

    # =========================================================================
    # SETTERS
    # =========================================================================

    def offerer(self, offerer: str) -> "DutchOrderBuilder":
        self._offerer = offerer
        return self

    def nonce(self, nonce: int) -> "DutchOrderBuilder":
        self._nonce = nonce
        return self

    def deadline(self, deadline: int) -> "DutchOrderBuilder":
        """
        Set the deadline.

        Checked immediately, unlike every other field.

        Raises:
            DeadlineError: If deadline <= current time
        """
        if deadline <= self._clock():
            raise DeadlineError(deadline)
        self._deadline = deadline
        return self

    def start_time(self, start_time: int) -> "DutchOrderBuilder":
        self._start_time = start_time
        return self

    def end_time(self, end_time: int) -> "DutchOrderBuilder":
        self._end_time = end_time
        return self

    def input(self, input: DutchInput) -> "DutchOrderBuilder":
        """Set the input, replacing any previous one"""
        self._input = input
        return self

    def output(self, output: DutchOutput) -> "DutchOrderBuilder":
        """Append an output; outputs keep call order"""
        self._outputs.append(output)
        return self

    def validation(
        self, validation: Union[ValidationInfo, EncodedValidation]
    ) -> "DutchOrderBuilder":
        """
        Set the validation extension, replacing any previous one.

        Accepts a typed variant or an already-encoded (contract, data) pair.
        Typed variants are encoded with this chain's contracts by build().
        """
        self._validation = validation
        return self

    # =========================================================================
    # BUILD
    # =========================================================================

    def build(self) -> DutchOrder:
        """
        Check all invariants and return a new immutable order.

        Returns:
            DutchOrder

        Raises:
            InvariantError: Required field missing, endTime or startTime after deadline
            ConfigError: Typed ExclusiveFiller validation on a chain without a
                registered ExclusiveFiller contract
            InvalidAmountError: Input or output decay direction violated
            DecodeError: Malformed validation payload for a known contract
        """
        validation = self._validation
        if not isinstance(validation, EncodedValidation):
            validation = encode_validation(validation, self.chain_config)

        order = assemble_order(
            self.chain_id,
            self.chain_config,
            offerer=self._offerer,
            nonce=self._nonce,
            deadline=self._deadline,
            start_time=self._start_time,
            end_time=self._end_time,
            input=self._input,
            outputs=list(self._outputs),
            validation=validation,
        )
        logger.debug(
            "Built dutch order: chain=%s offerer=%s nonce=%s outputs=%d",
            self.chain_id,
            order.info.offerer,
            order.info.nonce,
            len(order.info.outputs),
        )
        return order
