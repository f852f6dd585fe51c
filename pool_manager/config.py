"""Pool manager configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from pool_manager.math.stableswap import DEFAULT_SOLVER_SETTINGS, SolverSettings

_TRUE_VALUES = ("true", "1", "yes")


def _env_flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    return raw.lower() in _TRUE_VALUES


@dataclass(frozen=True)
class FeatureToggle:
    """Switches for the user-facing operations."""

    deposits_enabled: bool = True
    withdrawals_enabled: bool = True
    swaps_enabled: bool = True


@dataclass(frozen=True)
class ManagerConfig:
    """Configuration of the pool manager.

    Attributes:
        fee_collector_addr: Receives protocol and extra fees
        farm_manager_addr: Position-lock service receiving locked LP shares
        feature_toggle: Which operations are enabled
        provision_drift_tolerance: Largest difference, in base units, allowed
            between the expected and realised contract balances when a
            single-sided deposit resumes. 0 means they must match exactly.
        solver_settings: Newton solver bounds for stableswap math
        pools_file: JSON file of pool snapshots served by the query API
    """

    fee_collector_addr: str = "fee_collector"
    farm_manager_addr: str = "farm_manager"
    feature_toggle: FeatureToggle = field(default_factory=FeatureToggle)
    provision_drift_tolerance: int = 0
    solver_settings: SolverSettings = DEFAULT_SOLVER_SETTINGS
    pools_file: str | None = None

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> ManagerConfig:
        """Build a config from POOL_MANAGER_* environment variables.

        Variables (all optional):
        - POOL_MANAGER_FEE_COLLECTOR_ADDR
        - POOL_MANAGER_FARM_MANAGER_ADDR
        - POOL_MANAGER_DEPOSITS_ENABLED / _WITHDRAWALS_ENABLED / _SWAPS_ENABLED
        - POOL_MANAGER_PROVISION_DRIFT_TOLERANCE
        - POOL_MANAGER_SOLVER_MAX_ITERATIONS / _SOLVER_TOLERANCE
        - POOL_MANAGER_POOLS_FILE
        """
        if env is None:
            env = os.environ
        defaults = cls()

        return cls(
            fee_collector_addr=env.get(
                "POOL_MANAGER_FEE_COLLECTOR_ADDR", defaults.fee_collector_addr
            ),
            farm_manager_addr=env.get("POOL_MANAGER_FARM_MANAGER_ADDR", defaults.farm_manager_addr),
            feature_toggle=FeatureToggle(
                deposits_enabled=_env_flag(env, "POOL_MANAGER_DEPOSITS_ENABLED", True),
                withdrawals_enabled=_env_flag(env, "POOL_MANAGER_WITHDRAWALS_ENABLED", True),
                swaps_enabled=_env_flag(env, "POOL_MANAGER_SWAPS_ENABLED", True),
            ),
            provision_drift_tolerance=int(
                env.get("POOL_MANAGER_PROVISION_DRIFT_TOLERANCE", defaults.provision_drift_tolerance)
            ),
            solver_settings=SolverSettings(
                max_iterations=int(
                    env.get(
                        "POOL_MANAGER_SOLVER_MAX_ITERATIONS",
                        DEFAULT_SOLVER_SETTINGS.max_iterations,
                    )
                ),
                tolerance=int(
                    env.get("POOL_MANAGER_SOLVER_TOLERANCE", DEFAULT_SOLVER_SETTINGS.tolerance)
                ),
            ),
            pools_file=env.get("POOL_MANAGER_POOLS_FILE") or None,
        )


DEFAULT_MANAGER_CONFIG = ManagerConfig()
