"""
Chain configuration — reactor and validation contract addresses per chain.

The table is read-only and injected explicitly into builders and parsers.
It is resolved exactly once per builder, at construction time.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final, Mapping, Optional

from dutch_orders.core.types import ValidationType, normalize_address
from dutch_orders.core.errors import ConfigError

logger = logging.getLogger(__name__)


# =============================================================================
# CHAIN IDS
# =============================================================================

MAINNET: Final[int] = 1
GOERLI: Final[int] = 5
POLYGON: Final[int] = 137
LOCAL_TEST: Final[int] = 12341234


# =============================================================================
# CONFIG OBJECTS
# =============================================================================


@dataclass(frozen=True)
class ChainConfig:
    """Addresses of the contracts an order depends on, for one chain.

    reactor — settlement contract for dutch orders
    validation_contracts — validation contract address by validation kind
    """

    chain_id: int
    reactor: str
    validation_contracts: Mapping[ValidationType, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "reactor", normalize_address(self.reactor))
        object.__setattr__(
            self,
            "validation_contracts",
            MappingProxyType(
                {kind: normalize_address(addr) for kind, addr in self.validation_contracts.items()}
            ),
        )

    def validation_contract(self, kind: ValidationType) -> Optional[str]:
        """Contract address registered for a validation kind, if any"""
        return self.validation_contracts.get(kind)

    def validation_kind(self, contract: str) -> Optional[ValidationType]:
        """Reverse lookup: which validation kind owns a contract address"""
        contract = normalize_address(contract)
        for kind, addr in self.validation_contracts.items():
            if addr == contract:
                return kind
        return None


class ChainConfigTable:
    """Read-only mapping chain_id -> ChainConfig."""

    def __init__(self, configs: Mapping[int, ChainConfig]):
        for chain_id, cfg in configs.items():
            if cfg.chain_id != chain_id:
                raise ValueError(
                    f"ChainConfig keyed by {chain_id} declares chain_id {cfg.chain_id}"
                )
        self._configs = MappingProxyType(dict(configs))

    def __contains__(self, chain_id: object) -> bool:
        return chain_id in self._configs

    def __iter__(self):
        return iter(self._configs)

    def __len__(self) -> int:
        return len(self._configs)

    def resolve(self, chain_id: int) -> ChainConfig:
        """
        Resolve configuration for a chain.

        Args:
            chain_id: Chain identifier

        Returns:
            ChainConfig for the chain

        Raises:
            ConfigError: If the chain is not configured
        """
        try:
            cfg = self._configs[chain_id]
        except KeyError:
            raise ConfigError("reactor", chain_id) from None
        logger.debug("Resolved chain %s: reactor=%s", chain_id, cfg.reactor)
        return cfg


# =============================================================================
# DEFAULT TABLE
# =============================================================================

_MAINNET_REACTOR: Final[str] = "0xe80bf394d190851e215d5f67b67f8f5a52783f1e"
_MAINNET_EXCLUSIVE_FILLER: Final[str] = "0x8a66a74e15544db9688b68b06e116f5d19e5df90"

DEFAULT_CHAIN_CONFIGS: Final[ChainConfigTable] = ChainConfigTable(
    {
        MAINNET: ChainConfig(
            chain_id=MAINNET,
            reactor=_MAINNET_REACTOR,
            validation_contracts={ValidationType.EXCLUSIVE_FILLER: _MAINNET_EXCLUSIVE_FILLER},
        ),
        GOERLI: ChainConfig(
            chain_id=GOERLI,
            reactor=_MAINNET_REACTOR,
            validation_contracts={ValidationType.EXCLUSIVE_FILLER: _MAINNET_EXCLUSIVE_FILLER},
        ),
        POLYGON: ChainConfig(
            chain_id=POLYGON,
            reactor=_MAINNET_REACTOR,
            validation_contracts={ValidationType.EXCLUSIVE_FILLER: _MAINNET_EXCLUSIVE_FILLER},
        ),
        # Local test chain (anvil / hardhat fork)
        LOCAL_TEST: ChainConfig(
            chain_id=LOCAL_TEST,
            reactor="0xbc7f2cbd2c0bbf42b3d1e06e4a6f0f2e3a0f3e5b",
            validation_contracts={
                ValidationType.EXCLUSIVE_FILLER: "0x2222222222222222222222222222222222222222"
            },
        ),
    }
)
