"""Pool registry package.

Provides the PoolStore port, an in-memory store, the PoolRegistry used
by every operation to read and persist pools, and the pools file loader.
"""

from .loader import PoolSnapshot, PoolsFile, load_pools_file
from .registry import AssetPair, PoolRegistry, get_asset_indexes_in_pool
from .store import InMemoryPoolStore, PoolStore

__all__ = [
    "PoolRegistry",
    "PoolStore",
    "InMemoryPoolStore",
    "AssetPair",
    "get_asset_indexes_in_pool",
    "PoolSnapshot",
    "PoolsFile",
    "load_pools_file",
]
