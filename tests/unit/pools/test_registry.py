"""Tests for PoolRegistry and InMemoryPoolStore."""

import pytest

from pool_manager.errors import AssetMismatch, SameAsset, UnExistingPool
from pool_manager.models import coin
from pool_manager.pools import InMemoryPoolStore, PoolRegistry, get_asset_indexes_in_pool
from tests.helpers import (
    OM_USDC_POOL,
    STABLE_POOL,
    UOM,
    USDC_USDT_POOL,
    UUSDC,
    UUSDT,
    UWETH,
    make_pool,
)


@pytest.fixture
def registry(om_usdc_pool, usdc_usdt_pool, stable_pool) -> PoolRegistry:
    return PoolRegistry(InMemoryPoolStore([om_usdc_pool, usdc_usdt_pool, stable_pool]))


class TestPoolRegistryLookup:
    def test_get(self, registry):
        pool = registry.get(OM_USDC_POOL)
        assert pool.pool_identifier == OM_USDC_POOL
        assert pool.asset_denoms == [UOM, UUSDC]

    def test_get_unknown_pool(self, registry):
        with pytest.raises(UnExistingPool) as exc_info:
            registry.get("o.unknown")
        assert exc_info.value.pool_identifier == "o.unknown"


class TestPoolRegistrySnapshots:
    """Reads are snapshots: only save() changes stored state."""

    def test_mutating_a_read_does_not_change_the_store(self, registry):
        pool = registry.get(OM_USDC_POOL)
        pool.assets[0] = coin(1, UOM)
        assert registry.get(OM_USDC_POOL).assets[0].amount == 1_000_000

    def test_save_persists(self, registry):
        pool = registry.get(OM_USDC_POOL)
        pool.assets[0] = coin(42, UOM)
        registry.save(pool)
        assert registry.get(OM_USDC_POOL).assets[0].amount == 42

    def test_save_new_pool(self, registry):
        registry.save(make_pool("o.uweth.uusdc", assets=[(UWETH, 1), (UUSDC, 1)]))
        assert registry.get("o.uweth.uusdc").asset_denoms == [UWETH, UUSDC]


class TestPoolRegistryList:
    def test_sorted_by_identifier(self, registry):
        identifiers = [pool.pool_identifier for pool in registry.list()]
        assert identifiers == sorted([OM_USDC_POOL, USDC_USDT_POOL, STABLE_POOL])

    def test_start_after(self, registry):
        identifiers = [pool.pool_identifier for pool in registry.list(start_after=OM_USDC_POOL)]
        assert OM_USDC_POOL not in identifiers
        assert all(identifier > OM_USDC_POOL for identifier in identifiers)

    def test_limit(self, registry):
        assert len(registry.list(limit=1)) == 1

    def test_limit_is_capped(self):
        pools = [make_pool(f"o.pool{i:03d}") for i in range(120)]
        registry = PoolRegistry(InMemoryPoolStore(pools))
        assert len(registry.list()) == 10
        assert len(registry.list(limit=500)) == 100


class TestAssetIndexes:
    def test_locates_offer_and_ask(self, usdc_usdt_pool):
        pair = get_asset_indexes_in_pool(usdc_usdt_pool, UUSDT, UUSDC)
        assert (pair.offer_index, pair.ask_index) == (1, 0)
        assert pair.offer_pool == pair.ask_pool == 1_000_000
        assert pair.offer_decimals == pair.ask_decimals == 6

    def test_same_asset(self, usdc_usdt_pool):
        with pytest.raises(SameAsset):
            get_asset_indexes_in_pool(usdc_usdt_pool, UUSDC, UUSDC)

    def test_unknown_denom(self, usdc_usdt_pool):
        with pytest.raises(AssetMismatch):
            get_asset_indexes_in_pool(usdc_usdt_pool, UOM, UUSDC)
