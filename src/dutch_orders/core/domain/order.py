"""
DutchOrder — immutable, fully-resolved Dutch auction order

Orders are produced by DutchOrderBuilder.build(), DutchOrder.from_json()
or DutchOrder.parse(). All three go through assemble_order(), which applies
the same defaults and invariant checks in the same order:

1. required fields (offerer, nonce, endTime/deadline, startTime, input, outputs)
2. endTime <= deadline
3. startTime <= deadline
4. input decay direction
5. each output's decay direction, in output order

The "deadline in the future" rule is NOT part of this list: it is checked
only when a deadline is set on a builder.

Canonical JSON (all keys required):
    reactor, offerer, nonce (decimal str), deadline, startTime, endTime (int),
    input {token, startAmount, endAmount}, outputs [{token, startAmount, endAmount, recipient}],
    validationContract, validationData ("0x" hex)
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Final, Optional, Sequence, Tuple

from pydantic import BaseModel, Field, ValidationError

from dutch_orders.core.abi import (
    WORD,
    WordReader,
    bytes_to_hex,
    encode_address,
    encode_bytes,
    encode_uint,
    hex_to_bytes,
)
from dutch_orders.core.config import DEFAULT_CHAIN_CONFIGS, ChainConfig, ChainConfigTable
from dutch_orders.core.contracts import DutchOrderValidator
from dutch_orders.core.domain.amounts import DutchInput, DutchOutput
from dutch_orders.core.domain.validation import (
    NONE_ENCODED,
    EncodedValidation,
    ExclusiveFillerValidation,
    ValidationInfo,
    decode_validation,
)
from dutch_orders.core.errors import DecodeError, InvariantError
from dutch_orders.core.types import Address, HexBytes, Uint256

logger = logging.getLogger(__name__)

# JSON keys in the order they are reported when missing
REQUIRED_JSON_FIELDS: Final[Tuple[str, ...]] = (
    "reactor",
    "offerer",
    "nonce",
    "deadline",
    "startTime",
    "endTime",
    "input",
    "outputs",
    "validationContract",
    "validationData",
)

# Words in the head of the encoded order tuple:
# info offset, startTime, endTime, input (3 words), outputs offset
_ORDER_HEAD_WORDS: Final[int] = 7
# reactor, offerer, nonce, deadline, validationContract, validationData offset
_INFO_HEAD_WORDS: Final[int] = 6
_OUTPUT_WORDS: Final[int] = 4


def _invariant_error(error: ValidationError, *prefix: Any) -> InvariantError:
    """First pydantic field error as an InvariantError"""
    first = error.errors()[0]
    location = ".".join(str(p) for p in (*prefix, *first["loc"])) or "order"
    return InvariantError(f"{location}: {first['msg']}")


# =============================================================================
# MODELS
# =============================================================================


class DutchOrderInfo(BaseModel):
    """
    Fully-resolved order fields.

    Immutable model (frozen=True). Outputs are kept as a tuple so that the
    sequence itself cannot be mutated either.
    """

    reactor: Address = Field(..., description="Reactor contract settling the order")
    offerer: Address = Field(..., description="Swapper whose input tokens are sold")
    nonce: Uint256 = Field(..., description="Replay protection value")
    deadline: Uint256 = Field(..., description="Unix timestamp after which the order is void")
    start_time: Uint256 = Field(..., description="Decay start (unix seconds)")
    end_time: Uint256 = Field(..., description="Decay end (unix seconds)")
    input: DutchInput
    outputs: Tuple[DutchOutput, ...] = Field(..., min_length=1)
    validation_contract: Address
    validation_data: HexBytes

    model_config = {"frozen": True}


@dataclass(frozen=True)
class ResolvedAmount:
    token: str
    amount: int
    recipient: Optional[str] = None


@dataclass(frozen=True)
class ResolvedDutchOrder:
    """Amounts of an order evaluated at a single timestamp."""

    timestamp: int
    input: ResolvedAmount
    outputs: Tuple[ResolvedAmount, ...]


@dataclass(frozen=True)
class DutchOrder:
    """
    Built order: resolved fields plus the decoded validation extension.

    Instances are independent snapshots: nothing done to the builder that
    produced them (or to a builder derived from them) changes them.
    """

    chain_id: int
    chain_config: ChainConfig
    info: DutchOrderInfo
    validation: ValidationInfo

    # -------------------------------------------------------------------------
    # JSON
    # -------------------------------------------------------------------------

    def to_json(self) -> Dict[str, Any]:
        """Canonical JSON object (see module docstring)"""
        info = self.info
        return {
            "reactor": info.reactor,
            "offerer": info.offerer,
            "nonce": str(info.nonce),
            "deadline": info.deadline,
            "startTime": info.start_time,
            "endTime": info.end_time,
            "input": info.input.to_json(),
            "outputs": [output.to_json() for output in info.outputs],
            "validationContract": info.validation_contract,
            "validationData": info.validation_data,
        }

    @classmethod
    def from_json(
        cls,
        data: Dict[str, Any],
        chain_id: int,
        config: ChainConfigTable = DEFAULT_CHAIN_CONFIGS,
    ) -> "DutchOrder":
        """
        Rebuild an order from its canonical JSON.

        The reactor is re-resolved for chain_id and must match the recorded
        one. The validation pair is decoded through the validation codec.

        Args:
            data: Canonical JSON object
            chain_id: Chain the order belongs to
            config: Chain configuration table

        Returns:
            DutchOrder

        Raises:
            ConfigError: Unknown chain_id
            InvariantError: Missing field, schema violation, reactor mismatch
                or cross-field invariant violated
            InvalidAmountError: Amount decay direction violated
            DecodeError: Malformed validation payload for a known contract
        """
        chain_config = config.resolve(chain_id)

        for key in REQUIRED_JSON_FIELDS:
            if key not in data or data[key] is None:
                raise InvariantError(f"{key} not set")

        error = DutchOrderValidator().first_error(data)
        if error is not None:
            location = ".".join(str(p) for p in error.path) or "order"
            raise InvariantError(f"{location}: {error.message}")

        logger.debug("Parsing order JSON for chain %s, offerer=%s", chain_id, data["offerer"])

        try:
            order_input = DutchInput(
                token=data["input"]["token"],
                start_amount=int(data["input"]["startAmount"]),
                end_amount=int(data["input"]["endAmount"]),
            )
        except ValidationError as e:
            raise _invariant_error(e, "input") from e

        outputs = []
        for i, output in enumerate(data["outputs"]):
            try:
                outputs.append(
                    DutchOutput(
                        token=output["token"],
                        start_amount=int(output["startAmount"]),
                        end_amount=int(output["endAmount"]),
                        recipient=output["recipient"],
                    )
                )
            except ValidationError as e:
                raise _invariant_error(e, "outputs", i) from e

        return assemble_order(
            chain_id,
            chain_config,
            reactor=data["reactor"],
            offerer=data["offerer"],
            nonce=int(data["nonce"]),
            deadline=data["deadline"],
            start_time=data["startTime"],
            end_time=data["endTime"],
            input=order_input,
            outputs=outputs,
            validation=EncodedValidation(
                validation_contract=data["validationContract"],
                validation_data=data["validationData"],
            ),
        )

    # -------------------------------------------------------------------------
    # ABI
    # -------------------------------------------------------------------------

    def serialize(self) -> str:
        """
        ABI-encode the order as a single tuple argument.

        Layout: ((reactor, offerer, nonce, deadline, validationContract,
        validationData), startTime, endTime, (token, startAmount, endAmount),
        (token, startAmount, endAmount, recipient)[])

        Returns:
            "0x" hex string
        """
        info = self.info

        info_enc = (
            encode_address(info.reactor)
            + encode_address(info.offerer)
            + encode_uint(info.nonce)
            + encode_uint(info.deadline)
            + encode_address(info.validation_contract)
            + encode_uint(_INFO_HEAD_WORDS * WORD)
            + encode_bytes(hex_to_bytes(info.validation_data))
        )

        outputs_enc = encode_uint(len(info.outputs))
        for output in info.outputs:
            outputs_enc += (
                encode_address(output.token)
                + encode_uint(output.start_amount)
                + encode_uint(output.end_amount)
                + encode_address(output.recipient)
            )

        head = (
            encode_uint(_ORDER_HEAD_WORDS * WORD)
            + encode_uint(info.start_time)
            + encode_uint(info.end_time)
            + encode_address(info.input.token)
            + encode_uint(info.input.start_amount)
            + encode_uint(info.input.end_amount)
            + encode_uint(_ORDER_HEAD_WORDS * WORD + len(info_enc))
        )

        # Single dynamic tuple argument: leading offset word
        return bytes_to_hex(encode_uint(WORD) + head + info_enc + outputs_enc)

    @classmethod
    def parse(
        cls,
        encoded: str,
        chain_id: int,
        config: ChainConfigTable = DEFAULT_CHAIN_CONFIGS,
    ) -> "DutchOrder":
        """
        Inverse of serialize().

        Raises:
            DecodeError: Malformed ABI payload
            ConfigError / InvariantError / InvalidAmountError: as for from_json
        """
        chain_config = config.resolve(chain_id)
        if not encoded.startswith("0x"):
            raise DecodeError(f"Order encoding must be 0x-prefixed hex: {encoded[:10]!r}")
        try:
            data = hex_to_bytes(encoded)
        except ValueError as e:
            raise DecodeError(f"Invalid hex order encoding: {e}") from e

        order = WordReader(data).at_offset(0)
        info = order.at_offset(0)
        outputs_reader = order.at_offset(6)

        outputs = []
        for i in range(outputs_reader.uint(0)):
            base = 1 + i * _OUTPUT_WORDS
            outputs.append(
                DutchOutput(
                    token=outputs_reader.address(base),
                    start_amount=outputs_reader.uint(base + 1),
                    end_amount=outputs_reader.uint(base + 2),
                    recipient=outputs_reader.address(base + 3),
                )
            )

        return assemble_order(
            chain_id,
            chain_config,
            reactor=info.address(0),
            offerer=info.address(1),
            nonce=info.uint(2),
            deadline=info.uint(3),
            start_time=order.uint(1),
            end_time=order.uint(2),
            input=DutchInput(
                token=order.address(3),
                start_amount=order.uint(4),
                end_amount=order.uint(5),
            ),
            outputs=outputs,
            validation=EncodedValidation(
                validation_contract=info.address(4),
                validation_data=bytes_to_hex(info.dynamic_bytes(5)),
            ),
        )

    # -------------------------------------------------------------------------
    # DECAY / FILLING
    # -------------------------------------------------------------------------

    def resolve(self, timestamp: int) -> ResolvedDutchOrder:
        """
        Evaluate input and output amounts at a timestamp.

        Args:
            timestamp: Unix seconds

        Returns:
            ResolvedDutchOrder with decayed amounts (rounded down)
        """
        info = self.info
        start, end = info.start_time, info.end_time
        return ResolvedDutchOrder(
            timestamp=timestamp,
            input=ResolvedAmount(
                token=info.input.token,
                amount=info.input.decayed(start, end, timestamp),
            ),
            outputs=tuple(
                ResolvedAmount(
                    token=output.token,
                    amount=output.decayed(start, end, timestamp),
                    recipient=output.recipient,
                )
                for output in info.outputs
            ),
        )

    def allows_filler(self, filler: str, timestamp: int) -> bool:
        """
        Whether `filler` may fill the order at `timestamp`.

        Only ExclusiveFiller validation is enforced here; orders with no
        validation or an unrecognized one are open to any filler.
        """
        if not isinstance(self.validation, ExclusiveFillerValidation):
            return True
        data = self.validation.data
        return timestamp > data.last_exclusive_timestamp or filler.lower() == data.filler


# =============================================================================
# ASSEMBLY
# =============================================================================


def assemble_order(
    chain_id: int,
    chain_config: ChainConfig,
    *,
    offerer: Optional[str],
    nonce: Optional[int],
    deadline: Optional[int],
    start_time: Optional[int],
    end_time: Optional[int],
    input: Optional[DutchInput],
    outputs: Sequence[DutchOutput],
    validation: EncodedValidation = NONE_ENCODED,
    reactor: Optional[str] = None,
) -> DutchOrder:
    """
    Apply defaults, check invariants and produce a DutchOrder.

    deadline and end_time default to each other. The first failing check
    raises; nothing is returned partially.

    Raises:
        InvariantError: Missing field, reactor mismatch, endTime/startTime after deadline
            or a field value out of range (uint256 bound, malformed address)
        InvalidAmountError: Input or output decay direction violated
        DecodeError: Malformed validation payload for a known contract
    """
    if deadline is None:
        deadline = end_time
    if end_time is None:
        end_time = deadline

    if offerer is None:
        raise InvariantError("offerer not set")
    if nonce is None:
        raise InvariantError("nonce not set")
    if end_time is None:
        raise InvariantError("endTime not set")
    if start_time is None:
        raise InvariantError("startTime not set")
    if input is None:
        raise InvariantError("input not set")
    if not outputs:
        raise InvariantError("outputs not set")

    if end_time > deadline:
        raise InvariantError(f"endTime must be before or same as deadline: {end_time}")
    if start_time > deadline:
        raise InvariantError(f"startTime must be before or same as deadline: {start_time}")

    input.check_decay()
    for output in outputs:
        output.check_decay()

    if reactor is not None and reactor.lower() != chain_config.reactor:
        raise InvariantError(
            f"reactor {reactor.lower()} does not match chain {chain_id} "
            f"reactor {chain_config.reactor}"
        )

    try:
        info = DutchOrderInfo(
            reactor=chain_config.reactor,
            offerer=offerer,
            nonce=nonce,
            deadline=deadline,
            start_time=start_time,
            end_time=end_time,
            input=input,
            outputs=tuple(outputs),
            validation_contract=validation.validation_contract,
            validation_data=validation.validation_data,
        )
    except ValidationError as e:
        raise _invariant_error(e) from e
    decoded = decode_validation(
        info.validation_contract,
        info.validation_data,
        chain_config.validation_contracts,
    )
    return DutchOrder(chain_id=chain_id, chain_config=chain_config, info=info, validation=decoded)
