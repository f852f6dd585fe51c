"""Load pool snapshots from a JSON file.

The file holds the pools a read-only deployment serves, each with the LP
supply outstanding at the time of the snapshot:

    {
        "pools": [
            {
                "pool": {"pool_identifier": "o.uom.uusdc", "assets": [...], ...},
                "total_share": "1000000"
            }
        ]
    }
"""

from __future__ import annotations

import json
from pathlib import Path

import structlog
from pydantic import BaseModel, Field

from pool_manager.models.pool import Pool
from pool_manager.models.types import Uint128

logger = structlog.get_logger()


class PoolSnapshot(BaseModel):
    """A pool and its LP supply."""

    pool: Pool
    total_share: Uint128 = 0


class PoolsFile(BaseModel):
    pools: list[PoolSnapshot] = Field(default_factory=list)


def load_pools_file(path: str | Path) -> list[PoolSnapshot]:
    """Read and validate a pools file.

    Raises:
        OSError: If the file cannot be read
        json.JSONDecodeError: If the file is not JSON
        pydantic.ValidationError: If a pool record is invalid
    """
    with open(path) as f:
        data = json.load(f)
    snapshots = PoolsFile.model_validate(data).pools

    logger.info(
        "pools_file_loaded",
        path=str(path),
        pools=[snapshot.pool.pool_identifier for snapshot in snapshots],
    )
    return snapshots
