"""Protocol constants for the pool manager.

Centralizes protocol parameters shared by the math engine, the liquidity
controller and the query layer.
"""

# LP units permanently withheld from the first liquidity provider and minted
# to the pool manager itself
MINIMUM_LIQUIDITY_AMOUNT = 1_000

# Maximum number of assets a single pool can hold
MAX_ASSETS_PER_POOL = 4

# Maximum amplification accepted when a stableswap pool is configured
MAX_AMP = 1_000_000

# Pool identifiers: alphanumeric, "." and "/" only
MAX_POOL_IDENTIFIER_LENGTH = 64
POOL_IDENTIFIER_PATTERN = r"^[a-zA-Z0-9./]+$"

# Swap spread guardrails, as decimal strings (parsed into Ratio where used)
DEFAULT_MAX_SPREAD = "0.01"  # 1%
MAX_ALLOWED_SPREAD = "0.5"  # 50%

# Pagination for pool listings
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
