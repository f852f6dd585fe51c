"""Tests for forward and reverse swap pricing."""

import pytest

from pool_manager.math.fixed_point import Ratio
from pool_manager.math.swap import (
    compute_fees,
    compute_offer_amount,
    compute_stableswap_offer_amount,
    compute_swap,
    scale_down,
    scale_down_ceil,
    scale_up,
)
from pool_manager.models import ConstantProduct, StableSwap
from pool_manager.safe_int import ConversionOverflow, S, Underflow
from tests.helpers import make_fees


@pytest.fixture
def fees():
    return make_fees(
        swap_fee="0.003", protocol_fee="0.001", burn_fee="0.0005", extra_fees=["0.0002"]
    )


def total_out(computation) -> int:
    return (
        computation.return_amount
        + computation.spread_amount
        + computation.swap_fee_amount
        + computation.protocol_fee_amount
        + computation.burn_fee_amount
        + computation.extra_fees_amount
    )


def value_at_pool_price(
    amount: int, offer_pool: int, ask_pool: int, offer_decimals: int, ask_decimals: int
) -> int:
    """Offer valued at the pool's balance ratio, never below the offer itself.

    Computed at the larger precision and returned in the ask precision.
    """
    precision = max(offer_decimals, ask_decimals)
    amount_p = scale_up(amount, offer_decimals, precision)
    offer_pool_p = scale_up(offer_pool, offer_decimals, precision)
    ask_pool_p = scale_up(ask_pool, ask_decimals, precision)
    at_price = amount_p * ask_pool_p // offer_pool_p
    return scale_down(max(amount_p, at_price), precision, ask_decimals)


class TestScaling:
    def test_scale_up(self):
        assert scale_up(5, 6, 18) == 5 * 10**12

    def test_scale_down_rounds_down(self):
        assert scale_down(1_999_999_999_999, 18, 6) == 1

    def test_scale_down_ceil_rounds_up(self):
        assert scale_down_ceil(1_000_000_000_001, 18, 6) == 2
        assert scale_down_ceil(2 * 10**12, 18, 6) == 2

    def test_wrong_direction_rejected(self):
        with pytest.raises(ValueError):
            scale_up(1, 18, 6)
        with pytest.raises(ValueError):
            scale_down(1, 6, 18)


class TestComputeFees:
    def test_each_fee_rounds_down(self, fees):
        result = compute_fees(fees, 9_900)
        assert result.swap_fee_amount == 29
        assert result.protocol_fee_amount == 9
        assert result.burn_fee_amount == 4
        assert result.extra_fees_amount == 1
        assert result.total == 43

    def test_extra_fees_are_summed(self):
        result = compute_fees(make_fees(extra_fees=["0.01", "0.02"]), 1_000)
        assert result.extra_fees_amount == 30


class TestConstantProductSwap:
    def test_without_fees(self):
        result = compute_swap(2, 1_000, 1_000, 100, make_fees(), ConstantProduct(), 6, 6)
        assert result.return_amount == 90
        assert result.spread_amount == 10
        assert result.swap_fee_amount == 0

    def test_with_fees(self, fees):
        result = compute_swap(
            2, 1_000_000, 1_000_000, 10_000, fees, ConstantProduct(), 6, 6
        )
        assert result.return_amount == 9_857
        assert result.spread_amount == 100
        assert result.swap_fee_amount == 29
        assert result.protocol_fee_amount == 9
        assert result.burn_fee_amount == 4
        assert result.extra_fees_amount == 1

    @pytest.mark.parametrize(
        ("offer_pool", "ask_pool", "offer_decimals", "ask_decimals"),
        [
            (1_000_000, 1_000_000, 6, 6),
            (1_000, 4_000, 6, 6),
            (4_000_000, 1_000_000, 6, 6),
            (10**6 * 10**6, 3 * 10**6 * 10**18, 6, 18),
            (3 * 10**6 * 10**18, 10**6 * 10**6, 18, 6),
        ],
    )
    def test_rounding_favours_pool(
        self, fees, offer_pool, ask_pool, offer_decimals, ask_decimals
    ):
        """return + fees + spread never exceeds the offer valued at the pool price."""
        for amount in (1, 2, 7, 999, 12_345, 250_000):
            result = compute_swap(
                2, offer_pool, ask_pool, amount, fees, ConstantProduct(), offer_decimals, ask_decimals
            )
            assert total_out(result) <= S(amount).multiply_ratio(ask_pool, offer_pool).value

    def test_ask_heavy_pool_values_the_offer_at_the_pool_price(self):
        """On a 1:4 pool, 100 offered is worth 400 of the ask asset."""
        result = compute_swap(
            2,
            1_000,
            4_000,
            100,
            make_fees(swap_fee="0.003", protocol_fee="0.001"),
            ConstantProduct(),
            6,
            6,
        )
        assert result.return_amount == 362
        assert result.spread_amount == 37
        assert result.swap_fee_amount == 1
        assert total_out(result) == 400

    def test_decimals_do_not_matter(self):
        """x * y = k is unit-free, so decimals leave the result unchanged."""
        a = compute_swap(2, 10**6, 10**6, 10**4, make_fees(), ConstantProduct(), 6, 6)
        b = compute_swap(2, 10**6, 10**6, 10**4, make_fees(), ConstantProduct(), 6, 18)
        assert a == b

    def test_zero_offer(self):
        result = compute_swap(2, 1_000, 1_000, 0, make_fees(), ConstantProduct(), 6, 6)
        assert result.return_amount == 0

    def test_unknown_pool_type(self):
        with pytest.raises(TypeError):
            compute_swap(2, 1_000, 1_000, 1, make_fees(), object(), 6, 6)  # type: ignore


class TestStableSwap:
    POOL = 10**12

    def test_balanced_pool_returns_close_to_offer(self):
        result = compute_swap(
            2, self.POOL, self.POOL, 10**9, make_fees(), StableSwap(amp=100), 6, 6
        )
        assert 999 * 10**6 < result.return_amount < 10**9
        assert result.return_amount + result.spread_amount == 10**9

    @pytest.mark.parametrize(
        ("offer_pool", "ask_pool", "offer_decimals", "ask_decimals"),
        [
            (POOL, POOL, 6, 6),
            (POOL, 3 * POOL, 6, 6),
            (3 * POOL, POOL, 6, 6),
            (POOL, 3 * POOL * 10**12, 6, 18),
        ],
    )
    def test_rounding_favours_pool(
        self, fees, offer_pool, ask_pool, offer_decimals, ask_decimals
    ):
        """return + fees + spread never exceeds the offer valued at the pool price."""
        for amount in (10, 10**6, 10**9, 10**11):
            result = compute_swap(
                2,
                offer_pool,
                ask_pool,
                amount,
                fees,
                StableSwap(amp=100),
                offer_decimals,
                ask_decimals,
            )
            assert total_out(result) <= value_at_pool_price(
                amount, offer_pool, ask_pool, offer_decimals, ask_decimals
            )

    def test_ask_heavy_pool_returns_more_than_offered(self):
        """The ask asset is cheaper on a 1:3 pool, so the return exceeds the offer."""
        amount = 10**9
        result = compute_swap(
            2, self.POOL, 3 * self.POOL, amount, make_fees(), StableSwap(amp=100), 6, 6
        )
        assert result.return_amount > amount
        assert result.spread_amount == 0

    def test_heterogeneous_decimals(self):
        """Offer with 6 decimals, ask with 18: amounts are normalised first."""
        result = compute_swap(
            2,
            10**6 * 10**6,
            10**6 * 10**18,
            1_000 * 10**6,
            make_fees(),
            StableSwap(amp=100),
            6,
            18,
        )
        assert 999 * 10**18 < result.return_amount < 1_000 * 10**18
        assert result.spread_amount > 0

    def test_ask_to_fewer_decimals_rounds_down(self):
        """Returning a 6-decimal asset for an 18-decimal offer floors the result."""
        result = compute_swap(
            2,
            10**6 * 10**18,
            10**6 * 10**6,
            1_000 * 10**18,
            make_fees(),
            StableSwap(amp=100),
            18,
            6,
        )
        assert 999 * 10**6 < result.return_amount < 1_000 * 10**6


class TestConstantProductOfferAmount:
    def test_without_fees(self):
        result = compute_offer_amount(1_000, 1_000, 90, make_fees())
        assert result.offer_amount == 99
        assert result.spread_amount == 9

    def test_forward_delivers_at_least_the_ask(self, fees):
        reverse = compute_offer_amount(1_000_000, 1_000_000, 9_857, fees)
        assert reverse.offer_amount == 10_004
        forward = compute_swap(
            2, 1_000_000, 1_000_000, reverse.offer_amount, fees, ConstantProduct(), 6, 6
        )
        assert forward.return_amount >= 9_857

    def test_fees_are_charged_on_the_gross_amount(self, fees):
        result = compute_offer_amount(1_000_000, 1_000_000, 9_857, fees)
        # gross = ceil(9857 / 0.9953) = 9904
        assert result.swap_fee_amount == 29
        assert result.protocol_fee_amount == 9

    def test_ask_exceeding_pool_raises(self):
        with pytest.raises(Underflow):
            compute_offer_amount(1_000, 1_000, 1_001, make_fees())

    def test_offer_beyond_uint128_raises(self):
        pool = 2**127
        with pytest.raises(ConversionOverflow):
            compute_offer_amount(pool, pool, pool - 1, make_fees())


class TestStableswapOfferAmount:
    POOL = 10**12

    def test_forward_matches_reverse(self, fees):
        ask_amount = 10**9
        reverse = compute_stableswap_offer_amount(
            2, self.POOL, self.POOL, ask_amount, fees, 100, 6, 6
        )
        forward = compute_swap(
            2, self.POOL, self.POOL, reverse.offer_amount, fees, StableSwap(amp=100), 6, 6
        )
        # each of the four fees rounds down separately
        assert abs(forward.return_amount - ask_amount) <= 10

    def test_offer_in_fewer_decimals_rounds_up(self):
        """Offer converted to 6 decimals from an 18-decimal solve is rounded up."""
        reverse = compute_stableswap_offer_amount(
            2,
            10**6 * 10**6,
            10**6 * 10**18,
            10**18,
            make_fees(),
            100,
            6,
            18,
        )
        assert 10**6 <= reverse.offer_amount <= 10**6 + 1

    def test_fee_share_applies_to_gross(self):
        reverse = compute_stableswap_offer_amount(
            2,
            self.POOL,
            self.POOL,
            10**9,
            make_fees(swap_fee="0.5"),
            100,
            6,
            6,
        )
        assert reverse.swap_fee_amount == 10**9
        assert reverse.offer_amount > 2 * 10**9 - 10**6

    def test_whole_ask_balance_raises(self):
        with pytest.raises(Underflow):
            compute_stableswap_offer_amount(
                2, self.POOL, self.POOL, self.POOL, make_fees(), 100, 6, 6
            )


def test_fee_share_helpers_agree():
    keep = make_fees(swap_fee="0.003").total_share().complement()
    assert keep == Ratio.from_str("0.997")
