"""
Tests for JSON Schema Contract Validators

Covers:
- Validity of the shipped schema itself
- Built orders conform to the canonical order contract
- Detection of missing required fields, type and pattern violations
"""

import pytest
from dutch_orders.builder import DutchOrderBuilder
from dutch_orders.core.contracts import DutchOrderValidator, SchemaLoader
from dutch_orders.core.domain import DutchInput, DutchOutput, encode_exclusive_filler_data

NOW = 1_700_000_000
OFFERER = "0x0000000000000000000000000000000000000001"
FILLER = "0x1111111111111111111111111111111111111111"


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_order_json():
    """Canonical JSON of a built order with exclusive-filler validation."""
    order = (
        DutchOrderBuilder(1, clock=lambda: NOW)
        .deadline(NOW + 1000)
        .start_time(NOW + 100)
        .offerer(OFFERER)
        .nonce(2**255)
        .input(
            DutchInput(
                token="0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
                start_amount=1_000_000,
                end_amount=1_000_000,
            )
        )
        .output(
            DutchOutput(
                token="0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2",
                start_amount=10**18,
                end_amount=9 * 10**17,
                recipient=OFFERER,
            )
        )
        .validation(encode_exclusive_filler_data(FILLER, NOW + 200, chain_id=1))
        .build()
    )
    return order.to_json()


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    def test_loads_and_caches(self) -> None:
        loader = SchemaLoader()
        schema = loader.load_schema("dutch_order")
        assert schema["title"] == "DutchOrder"
        assert loader.load_schema("dutch_order") is schema

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("no_such_schema")

    def test_invalid_schema(self, tmp_path) -> None:
        (tmp_path / "broken.json").write_text('{"type": 5}', encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema in broken.json"):
            SchemaLoader(tmp_path).load_schema("broken")

    def test_validator_uses_given_loader(self, tmp_path) -> None:
        (tmp_path / "dutch_order.json").write_text('{"type": "object"}', encoding="utf-8")
        validator = DutchOrderValidator(SchemaLoader(tmp_path))
        assert validator.first_error({"anything": 1}) is None
        assert validator.first_error([]) is not None


# =============================================================================
# DUTCH ORDER CONTRACT
# =============================================================================


class TestDutchOrderContract:
    def test_built_order_is_valid(self, valid_order_json) -> None:
        assert DutchOrderValidator().first_error(valid_order_json) is None
        assert list(DutchOrderValidator().iter_errors(valid_order_json)) == []

    def test_large_nonce_is_decimal_string(self, valid_order_json) -> None:
        assert valid_order_json["nonce"] == str(2**255)
        assert DutchOrderValidator().first_error(valid_order_json) is None

    @pytest.mark.parametrize(
        "field",
        ["reactor", "offerer", "nonce", "deadline", "startTime", "endTime", "input", "outputs"],
    )
    def test_missing_required_field(self, valid_order_json, field: str) -> None:
        del valid_order_json[field]
        assert DutchOrderValidator().first_error(valid_order_json) is not None

    def test_nonce_must_be_string(self, valid_order_json) -> None:
        valid_order_json["nonce"] = 100
        error = DutchOrderValidator().first_error(valid_order_json)
        assert list(error.path) == ["nonce"]

    def test_timestamp_must_be_integer(self, valid_order_json) -> None:
        valid_order_json["deadline"] = str(valid_order_json["deadline"])
        assert DutchOrderValidator().first_error(valid_order_json) is not None

    def test_negative_amount_rejected(self, valid_order_json) -> None:
        valid_order_json["input"]["startAmount"] = "-1"
        assert DutchOrderValidator().first_error(valid_order_json) is not None

    def test_leading_zero_amount_rejected(self, valid_order_json) -> None:
        valid_order_json["outputs"][0]["endAmount"] = "0100"
        assert DutchOrderValidator().first_error(valid_order_json) is not None

    def test_bad_address_rejected(self, valid_order_json) -> None:
        valid_order_json["offerer"] = "0x123"
        assert DutchOrderValidator().first_error(valid_order_json) is not None

    def test_odd_length_validation_data_rejected(self, valid_order_json) -> None:
        valid_order_json["validationData"] = "0x123"
        assert DutchOrderValidator().first_error(valid_order_json) is not None

    def test_output_missing_recipient(self, valid_order_json) -> None:
        del valid_order_json["outputs"][0]["recipient"]
        assert DutchOrderValidator().first_error(valid_order_json) is not None

    def test_empty_outputs_rejected(self, valid_order_json) -> None:
        valid_order_json["outputs"] = []
        assert DutchOrderValidator().first_error(valid_order_json) is not None

    def test_unknown_field_rejected(self, valid_order_json) -> None:
        valid_order_json["signature"] = "0x"
        errors = list(DutchOrderValidator().iter_errors(valid_order_json))
        assert len(errors) == 1
