"""Tests for pool, fee and coin models."""

import pydantic
import pytest

from pool_manager.errors import AssetMismatch, InvalidPoolFees
from pool_manager.math.fixed_point import Ratio
from pool_manager.models import (
    Coin,
    Fee,
    Pool,
    SimulationResponse,
    StableSwap,
    add_coins,
    aggregate_coins,
    coin,
)
from pool_manager.safe_int import UINT128_MAX, Overflow
from tests.helpers import OM_USDC_POOL, UOM, UUSDC, UUSDT, make_fees, make_pool


class TestFees:
    def test_fee_compute_rounds_down(self):
        assert Fee(share="0.003").compute(999) == 2

    def test_fee_above_one_rejected(self):
        with pytest.raises(InvalidPoolFees):
            Fee(share="1.5")

    def test_total_share(self):
        fees = make_fees(swap_fee="0.003", protocol_fee="0.001", extra_fees=["0.0002"])
        assert fees.total_share() == Ratio.from_str("0.0042")

    def test_total_at_one_rejected(self):
        """Fees summing to 100% would leave nothing to return."""
        with pytest.raises(InvalidPoolFees):
            make_fees(swap_fee="0.5", protocol_fee="0.5")

    def test_share_serialises_as_string(self):
        assert Fee(share="0.003").model_dump(mode="json") == {"share": "0.003"}

    def test_float_share_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            Fee(share=0.003)


class TestPool:
    def test_asset_index(self):
        pool = make_pool(assets=[(UOM, 1), (UUSDC, 2)])
        assert pool.asset_index(UUSDC) == 1
        assert pool.has_denom(UOM)
        assert not pool.has_denom(UUSDT)

    def test_asset_index_unknown(self):
        with pytest.raises(AssetMismatch):
            make_pool().asset_index(UUSDT)

    def test_single_asset_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            make_pool(assets=[(UOM, 1)])

    def test_duplicate_denoms_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            make_pool(assets=[(UOM, 1), (UOM, 2)])

    def test_decimals_length_must_match(self):
        with pytest.raises(pydantic.ValidationError):
            make_pool(asset_decimals=[6])

    def test_invalid_identifier_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            make_pool("bad pool!")

    def test_amp_bounds(self):
        with pytest.raises(pydantic.ValidationError):
            StableSwap(amp=0)

    def test_pool_type_round_trips_through_json(self):
        pool = make_pool(OM_USDC_POOL, pool_type=StableSwap(amp=50))
        restored = Pool.model_validate_json(pool.model_dump_json())
        assert restored.pool_type == StableSwap(amp=50)


class TestCoins:
    def test_amount_accepts_string(self):
        assert Coin(denom=UOM, amount="100").amount == 100

    def test_amount_rejects_negative_and_overflow(self):
        with pytest.raises(pydantic.ValidationError):
            coin(-1, UOM)
        with pytest.raises(pydantic.ValidationError):
            coin(UINT128_MAX + 1, UOM)

    def test_aggregate_coins(self):
        merged = aggregate_coins([coin(1, UUSDC), coin(2, UOM), coin(3, UUSDC)])
        assert merged == [coin(2, UOM), coin(4, UUSDC)]

    def test_aggregate_overflow(self):
        with pytest.raises(Overflow):
            aggregate_coins([coin(UINT128_MAX, UOM), coin(1, UOM)])

    def test_add_coins_keeps_base_order(self):
        result = add_coins([coin(1, UUSDC), coin(1, UOM)], [coin(2, UOM), coin(5, UUSDT)])
        assert result == [coin(1, UUSDC), coin(3, UOM), coin(5, UUSDT)]


def test_simulation_response_rejects_negative_amounts():
    with pytest.raises(pydantic.ValidationError):
        SimulationResponse(
            return_amount=-1,
            spread_amount=0,
            swap_fee_amount=0,
            protocol_fee_amount=0,
            burn_fee_amount=0,
            extra_fees_amount=0,
        )
