"""Tests for loading pool snapshots from a pools file."""

import json

import pydantic
import pytest

from pool_manager.models import StableSwap
from pool_manager.pools import load_pools_file
from tests.helpers import (
    OM_USDC_POOL,
    STABLE_POOL,
    UUSDC,
    UUSDT,
    make_fees,
    make_pool,
    make_stable_pool,
    write_pools_file,
)


class TestLoadPoolsFile:
    def test_loads_pools_and_supply(self, tmp_path, om_usdc_pool, stable_pool):
        path = write_pools_file(
            tmp_path / "pools.json",
            [(om_usdc_pool, 1_000_000), (stable_pool, 2 * 10**12)],
        )

        snapshots = load_pools_file(path)

        assert [snapshot.pool for snapshot in snapshots] == [om_usdc_pool, stable_pool]
        assert [snapshot.total_share for snapshot in snapshots] == [1_000_000, 2 * 10**12]
        assert snapshots[1].pool.pool_type == StableSwap(amp=100)

    def test_fees_survive_the_file(self, tmp_path):
        pool = make_pool(OM_USDC_POOL, pool_fees=make_fees(swap_fee="0.003", extra_fees=["0.001"]))
        (snapshot,) = load_pools_file(write_pools_file(tmp_path / "pools.json", [(pool, 0)]))
        assert snapshot.pool.pool_fees == pool.pool_fees

    def test_total_share_defaults_to_zero(self, tmp_path, om_usdc_pool):
        path = tmp_path / "pools.json"
        path.write_text(json.dumps({"pools": [{"pool": om_usdc_pool.model_dump(mode="json")}]}))
        (snapshot,) = load_pools_file(path)
        assert snapshot.total_share == 0

    def test_empty_file(self, tmp_path):
        path = tmp_path / "pools.json"
        path.write_text("{}")
        assert load_pools_file(path) == []

    def test_invalid_pool_rejected(self, tmp_path):
        pool = make_stable_pool(STABLE_POOL, [(UUSDC, 1), (UUSDT, 1)]).model_dump(mode="json")
        pool["asset_decimals"] = [6]
        path = tmp_path / "pools.json"
        path.write_text(json.dumps({"pools": [{"pool": pool}]}))
        with pytest.raises(pydantic.ValidationError):
            load_pools_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_pools_file(tmp_path / "missing.json")
