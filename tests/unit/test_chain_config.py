"""
Tests for chain configuration resolution
"""

import dataclasses

import pytest

from dutch_orders.core.config import (
    DEFAULT_CHAIN_CONFIGS,
    LOCAL_TEST,
    MAINNET,
    ChainConfig,
    ChainConfigTable,
)
from dutch_orders.core.errors import ConfigError
from dutch_orders.core.types import ValidationType

REACTOR = "0x00000000000000000000000000000000000000aa"
FILLER_CONTRACT = "0x2222222222222222222222222222222222222222"


@pytest.fixture
def table() -> ChainConfigTable:
    return ChainConfigTable(
        {
            777: ChainConfig(
                chain_id=777,
                reactor="0x00000000000000000000000000000000000000AA",
                validation_contracts={ValidationType.EXCLUSIVE_FILLER: FILLER_CONTRACT},
            )
        }
    )


class TestChainConfigTable:
    def test_resolve_known_chain(self, table: ChainConfigTable) -> None:
        cfg = table.resolve(777)
        assert cfg.chain_id == 777
        assert cfg.reactor == REACTOR

    def test_resolve_unknown_chain(self, table: ChainConfigTable) -> None:
        with pytest.raises(ConfigError, match="Missing configuration for reactor: 99999999") as exc_info:
            table.resolve(99999999)
        assert exc_info.value.chain_id == 99999999

    def test_contains(self, table: ChainConfigTable) -> None:
        assert 777 in table
        assert 1 not in table
        assert len(table) == 1
        assert list(table) == [777]

    def test_mismatched_key_rejected(self) -> None:
        with pytest.raises(ValueError, match="declares chain_id 2"):
            ChainConfigTable({1: ChainConfig(chain_id=2, reactor=REACTOR)})

    def test_default_table_has_mainnet(self) -> None:
        cfg = DEFAULT_CHAIN_CONFIGS.resolve(MAINNET)
        assert cfg.reactor.startswith("0x")
        assert cfg.validation_contract(ValidationType.EXCLUSIVE_FILLER) is not None

    def test_default_table_local_test_chain(self) -> None:
        cfg = DEFAULT_CHAIN_CONFIGS.resolve(LOCAL_TEST)
        assert cfg.validation_contract(ValidationType.EXCLUSIVE_FILLER) == FILLER_CONTRACT


class TestChainConfig:
    def test_invalid_reactor_rejected(self) -> None:
        with pytest.raises(ValueError, match="Invalid address"):
            ChainConfig(chain_id=1, reactor="not-an-address")

    def test_validation_kind_reverse_lookup(self, table: ChainConfigTable) -> None:
        cfg = table.resolve(777)
        upper = "0x" + FILLER_CONTRACT[2:].upper()
        assert cfg.validation_kind(upper) == ValidationType.EXCLUSIVE_FILLER
        assert cfg.validation_kind(REACTOR) is None

    def test_missing_validation_contract(self) -> None:
        cfg = ChainConfig(chain_id=1, reactor=REACTOR)
        assert cfg.validation_contract(ValidationType.EXCLUSIVE_FILLER) is None

    def test_frozen(self, table: ChainConfigTable) -> None:
        cfg = table.resolve(777)
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.reactor = FILLER_CONTRACT  # type: ignore

    def test_validation_contracts_read_only(self, table: ChainConfigTable) -> None:
        cfg = table.resolve(777)
        with pytest.raises(TypeError):
            cfg.validation_contracts[ValidationType.EXCLUSIVE_FILLER] = REACTOR  # type: ignore
