"""Pytest configuration and fixtures."""

import pytest

from pool_manager.context import ManagerContext
from pool_manager.ledger import InMemoryLedger, build_in_memory_context
from pool_manager.liquidity import provide_liquidity
from pool_manager.models import Pool, coin
from tests.helpers import (
    BOB,
    CONTRACT,
    OM_USDC_POOL,
    STABLE_POOL,
    UOM,
    USDC_USDT_POOL,
    UUSDC,
    UUSDT,
    FakeChain,
    make_config,
    make_fees,
    make_pool,
    make_stable_pool,
)


@pytest.fixture
def standard_fees():
    """Fees used across swap tests: 0.3% swap, 0.1% protocol, 0.05% burn."""
    return make_fees(swap_fee="0.003", protocol_fee="0.001", burn_fee="0.0005")


@pytest.fixture
def ledger() -> InMemoryLedger:
    return InMemoryLedger()


@pytest.fixture
def ctx(ledger: InMemoryLedger) -> ManagerContext:
    """Context over empty in-memory stores."""
    return build_in_memory_context(
        config=make_config(), ledger=ledger, contract_address=CONTRACT
    )


@pytest.fixture
def om_usdc_pool() -> Pool:
    """Balanced 1:1 constant product pool without fees."""
    return make_pool(OM_USDC_POOL, assets=[(UOM, 1_000_000), (UUSDC, 1_000_000)])


@pytest.fixture
def usdc_usdt_pool() -> Pool:
    return make_pool(USDC_USDT_POOL, assets=[(UUSDC, 1_000_000), (UUSDT, 1_000_000)])


@pytest.fixture
def stable_pool() -> Pool:
    return make_stable_pool(
        STABLE_POOL,
        assets=[(UUSDC, 1_000_000_000_000), (UUSDT, 1_000_000_000_000)],
        amp=100,
    )


@pytest.fixture
def chain() -> FakeChain:
    """Chain with an empty uom/uusdc pool."""
    return FakeChain(pools=[make_pool(OM_USDC_POOL)])


@pytest.fixture
def seeded_chain(standard_fees) -> FakeChain:
    """Chain whose uom/uusdc pool BOB seeded with 1_000_000 of each asset."""
    chain = FakeChain(pools=[make_pool(OM_USDC_POOL, pool_fees=standard_fees)])
    deposit = [coin(1_000_000, UOM), coin(1_000_000, UUSDC)]
    chain.fund(BOB, deposit)
    chain.execute(BOB, deposit, provide_liquidity, OM_USDC_POOL)
    return chain
