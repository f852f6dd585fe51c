"""Test helpers module for shared test utilities.

- constants: Denoms, addresses and pool identifiers
- factories: Pool, fee and config factory functions
- chain: FakeChain executing operations and their messages
"""

from tests.helpers.chain import FakeChain
from tests.helpers.constants import (
    ALICE,
    BOB,
    CAROL,
    CONTRACT,
    FARM_MANAGER,
    FEE_COLLECTOR,
    OM_USDC_POOL,
    STABLE_POOL,
    TRIPLE_POOL,
    UOM,
    USDC_USDT_POOL,
    UUSDC,
    UUSDT,
    UWETH,
)
from tests.helpers.factories import (
    make_config,
    make_fees,
    make_pool,
    make_stable_pool,
    write_pools_file,
)

__all__ = [
    # Constants
    "UOM",
    "UUSDC",
    "UUSDT",
    "UWETH",
    "OM_USDC_POOL",
    "USDC_USDT_POOL",
    "STABLE_POOL",
    "TRIPLE_POOL",
    "CONTRACT",
    "FEE_COLLECTOR",
    "FARM_MANAGER",
    "ALICE",
    "BOB",
    "CAROL",
    # Factories
    "make_pool",
    "make_stable_pool",
    "make_fees",
    "make_config",
    "write_pools_file",
    # Chain
    "FakeChain",
]
