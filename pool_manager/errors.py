"""Pool manager error classes.

Every failure surfaced by the core is a subclass of PoolManagerError,
grouped by the kind of guardrail that tripped:

- ValidationError: malformed input or pool configuration
- MathError: integer arithmetic or numerical solver failures
- EconomicError: slippage, spread and share guardrails
- Unauthorized / OperationDisabled: permission and feature toggles
"""


class PoolManagerError(Exception):
    """Base error for pool manager operations."""

    pass


# =============================================================================
# Input validation
# =============================================================================


class ValidationError(PoolManagerError):
    """Input or configuration rejected before any computation."""

    pass


class EmptyAssets(ValidationError):
    """Trying to provide liquidity without any assets."""

    def __init__(self) -> None:
        super().__init__("Trying to provide liquidity without any assets")


class AssetMismatch(ValidationError):
    """A denom does not match the assets stored in the pool."""

    def __init__(self, detail: str | None = None) -> None:
        message = "The asset doesn't match the assets stored in the pool"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class SameAsset(ValidationError):
    """Offer and ask denoms are the same."""

    def __init__(self) -> None:
        super().__init__("The provided assets are both the same")


class UnExistingPool(ValidationError):
    """No pool is stored under the given identifier."""

    def __init__(self, pool_identifier: str) -> None:
        self.pool_identifier = pool_identifier
        super().__init__(f"Pool {pool_identifier} does not exist")


class InvalidPoolAssetsForSingleSideLiquidityProvision(ValidationError):
    """Single-sided deposits need a pool of exactly two assets."""

    def __init__(self) -> None:
        super().__init__("Cannot provide single-side liquidity on a pool without exactly 2 assets")


class EmptyPoolForSingleSideLiquidityProvision(ValidationError):
    """Single-sided deposits need both pool balances to be non-zero."""

    def __init__(self) -> None:
        super().__init__("Cannot provide single-side liquidity when the pool is empty")


class NoSwapOperationsProvided(ValidationError):
    """A swap chain was requested with an empty hop list."""

    def __init__(self) -> None:
        super().__init__("Must provide swap operations to simulate")


class InvalidPoolAssetsLength(ValidationError):
    """Number of assets differs from what the computation expects."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid pool assets length, expected {expected} got {actual}")


class InvalidPoolFees(ValidationError):
    """Fee shares out of range or summing to one or more."""

    pass


class InvalidFunds(ValidationError):
    """Funds attached to an operation are not what it requires."""

    pass


class InvalidSlippageTolerance(ValidationError):
    """Slippage tolerance above 1."""

    def __init__(self) -> None:
        super().__init__("Slippage tolerance must be between 0 and 1")


class InvalidBeliefPrice(ValidationError):
    """A belief price of zero was given for a spread check."""

    def __init__(self) -> None:
        super().__init__("Belief price can't be zero")


class NoPendingProvision(ValidationError):
    """A swap confirmation arrived for which no buffer is pending."""

    def __init__(self, provision_id: str) -> None:
        self.provision_id = provision_id
        super().__init__(f"No single-side liquidity provision pending for {provision_id}")


class ProvisionAlreadyPending(ValidationError):
    """A second single-sided deposit was started under a pending id."""

    def __init__(self, provision_id: str) -> None:
        self.provision_id = provision_id
        super().__init__(f"A single-side liquidity provision is already pending for {provision_id}")


# =============================================================================
# Arithmetic
# =============================================================================


class MathError(PoolManagerError, ArithmeticError):
    """Integer arithmetic or solver failure."""

    pass


class ConvergeError(MathError):
    """Newton's method did not converge within the iteration bound."""

    def __init__(self, detail: str = "Failed to converge when performing newtons method") -> None:
        super().__init__(detail)


class StableInvariantError(MathError):
    """The stableswap invariant could not be computed."""

    def __init__(self) -> None:
        super().__init__("Error computing the stableswap invariant")


class StableLpMintError(MathError):
    """The deposit did not grow the stableswap invariant."""

    def __init__(self) -> None:
        super().__init__("Error computing the LP mint amount for the stable pool")


class LiquidityShareComputationFailed(MathError):
    """The LP share for a deposit could not be computed."""

    def __init__(self) -> None:
        super().__init__("Failed to compute the LP share with the given deposit")


# =============================================================================
# Economic guardrails
# =============================================================================


class EconomicError(PoolManagerError):
    """An economic guardrail rejected the operation."""

    pass


class MaxSlippageAssertion(EconomicError):
    """Deposit ratio deviates from the pool ratio beyond the tolerance."""

    def __init__(self) -> None:
        super().__init__("Slippage tolerance exceeded")


class MaxSpreadAssertion(EconomicError):
    """Swap spread exceeds the allowed maximum."""

    def __init__(self) -> None:
        super().__init__("Spread limit exceeded")


class InvalidInitialLiquidityAmount(EconomicError):
    """First deposit does not clear the minimum liquidity amount."""

    def __init__(self, minimum: int) -> None:
        self.minimum = minimum
        super().__init__(f"Initial liquidity amount must be over {minimum}")


class InvalidLpShareToWithdraw(EconomicError):
    """LP amount to withdraw is zero or exceeds the total share."""

    def __init__(self) -> None:
        super().__init__("The amount of LP shares to withdraw is invalid")


class InvalidSingleSideLiquidityProvisionSwap(EconomicError):
    """Realised balances after the half-swap differ from the expected ones."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid single side liquidity provision swap, expected {expected} got {actual}"
        )


# =============================================================================
# Permissions
# =============================================================================


class Unauthorized(PoolManagerError):
    """Caller is not allowed to perform the operation."""

    def __init__(self, detail: str = "Unauthorized") -> None:
        super().__init__(detail)


class OperationDisabled(PoolManagerError):
    """The feature toggle for the operation is off."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Operation disabled, {operation}")
