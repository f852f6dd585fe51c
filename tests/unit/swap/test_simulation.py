"""Tests for single-pool swap simulation queries."""

import pytest

from pool_manager.errors import AssetMismatch, SameAsset, UnExistingPool
from pool_manager.models import coin
from pool_manager.swap import query_reverse_simulation, query_simulation
from tests.helpers import OM_USDC_POOL, STABLE_POOL, UOM, UUSDC, UUSDT, make_fees, make_pool


@pytest.fixture
def fee_pool():
    return make_pool(
        "o.fees",
        assets=[(UOM, 1_000_000), (UUSDC, 1_000_000)],
        pool_fees=make_fees(
            swap_fee="0.003", protocol_fee="0.001", burn_fee="0.0005", extra_fees=["0.0002"]
        ),
    )


@pytest.fixture
def pools_ctx(ctx, om_usdc_pool, stable_pool, fee_pool):
    for pool in (om_usdc_pool, stable_pool, fee_pool):
        ctx.registry.save(pool)
    return ctx


class TestQuerySimulation:
    def test_constant_product(self, pools_ctx):
        result = query_simulation(pools_ctx, coin(10_000, UOM), UUSDC, OM_USDC_POOL)
        assert result.return_amount == 9_900
        assert result.spread_amount == 100

    def test_fees_are_reported(self, pools_ctx):
        result = query_simulation(pools_ctx, coin(10_000, UOM), UUSDC, "o.fees")
        assert result.return_amount == 9_857
        assert result.swap_fee_amount == 29
        assert result.protocol_fee_amount == 9
        assert result.burn_fee_amount == 4
        assert result.extra_fees_amount == 1

    def test_either_direction(self, pools_ctx):
        forward = query_simulation(pools_ctx, coin(10_000, UOM), UUSDC, OM_USDC_POOL)
        backward = query_simulation(pools_ctx, coin(10_000, UUSDC), UOM, OM_USDC_POOL)
        assert forward == backward

    def test_stableswap(self, pools_ctx):
        result = query_simulation(pools_ctx, coin(1_000_000, UUSDC), UUSDT, STABLE_POOL)
        assert 999_000 < result.return_amount < 1_000_000

    def test_does_not_change_the_pool(self, pools_ctx, om_usdc_pool):
        query_simulation(pools_ctx, coin(10_000, UOM), UUSDC, OM_USDC_POOL)
        assert pools_ctx.registry.get(OM_USDC_POOL) == om_usdc_pool

    def test_unknown_pool(self, pools_ctx):
        with pytest.raises(UnExistingPool):
            query_simulation(pools_ctx, coin(1, UOM), UUSDC, "o.missing")

    def test_same_asset(self, pools_ctx):
        with pytest.raises(SameAsset):
            query_simulation(pools_ctx, coin(1, UOM), UOM, OM_USDC_POOL)

    def test_denom_not_in_pool(self, pools_ctx):
        with pytest.raises(AssetMismatch):
            query_simulation(pools_ctx, coin(1, UUSDT), UUSDC, OM_USDC_POOL)


class TestQueryReverseSimulation:
    def test_constant_product(self, pools_ctx):
        result = query_reverse_simulation(pools_ctx, coin(9_900, UUSDC), UOM, OM_USDC_POOL)
        # ceil(1e12 / 990_100) - 1e6
        assert result.offer_amount == 9_999
        assert result.spread_amount == 99

    def test_with_fees(self, pools_ctx):
        result = query_reverse_simulation(pools_ctx, coin(9_857, UUSDC), UOM, "o.fees")
        assert result.offer_amount == 10_004

    def test_reverse_then_forward_covers_the_ask(self, pools_ctx):
        reverse = query_reverse_simulation(pools_ctx, coin(123_456, UUSDC), UOM, "o.fees")
        forward = query_simulation(
            pools_ctx, coin(reverse.offer_amount, UOM), UUSDC, "o.fees"
        )
        assert forward.return_amount >= 123_456

    def test_stableswap(self, pools_ctx):
        result = query_reverse_simulation(pools_ctx, coin(1_000_000, UUSDT), UUSDC, STABLE_POOL)
        forward = query_simulation(
            pools_ctx, coin(result.offer_amount, UUSDC), UUSDT, STABLE_POOL
        )
        assert abs(forward.return_amount - 1_000_000) <= 3

    def test_same_asset(self, pools_ctx):
        with pytest.raises(SameAsset):
            query_reverse_simulation(pools_ctx, coin(1, UOM), UOM, OM_USDC_POOL)
