"""Pending single-sided liquidity provisions.

A single-sided deposit is a two-phase continuation. Phase 1 records a
SingleSideProvisionBuffer and issues a deferred half-swap; phase 2 consumes
the buffer when the swap is confirmed. Per provision id the store is in one
of two states:

    IDLE --save--> AWAITING_SWAP_CONFIRMATION --take--> IDLE

take() removes the buffer whatever the outcome of phase 2.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from pool_manager.errors import ProvisionAlreadyPending
from pool_manager.math.fixed_point import Ratio


class ProvisionState(Enum):
    IDLE = "idle"
    AWAITING_SWAP_CONFIRMATION = "awaiting_swap_confirmation"


@dataclass(frozen=True)
class ProvisionRequest:
    """Parameters of the deposit, replayed by phase 2."""

    pool_identifier: str
    slippage_tolerance: Ratio | None = None
    max_spread: Ratio | None = None
    unlocking_duration: int | None = None
    lock_position_identifier: str | None = None


@dataclass(frozen=True)
class SingleSideProvisionBuffer:
    """Everything phase 2 needs to finish a single-sided deposit.

    Attributes:
        sender: Address that sent the deposit
        receiver: Address that receives the LP shares
        offer_denom: Denom deposited
        ask_denom: The pool's other denom, obtained through the half-swap
        expected_offer_balance: Contract balance of offer_denom after the swap
        expected_ask_balance: Contract balance of ask_denom after the swap
        offer_half: Amount swapped, floor(deposit / 2)
        provide_offer_amount: Offer amount kept for the deposit
        expected_ask_amount: Ask amount the swap is expected to return
        request: Deposit parameters
    """

    sender: str
    receiver: str
    offer_denom: str
    ask_denom: str
    expected_offer_balance: int
    expected_ask_balance: int
    offer_half: int
    provide_offer_amount: int
    expected_ask_amount: int
    request: ProvisionRequest


class ProvisionBufferStore(Protocol):
    """Storage for buffers of pending single-sided deposits."""

    def save(self, provision_id: str, buffer: SingleSideProvisionBuffer) -> None:
        """Store a buffer, raising ProvisionAlreadyPending if one is pending."""
        ...

    def take(self, provision_id: str) -> SingleSideProvisionBuffer | None:
        """Remove and return the pending buffer, or None."""
        ...

    def state(self, provision_id: str) -> ProvisionState:
        ...


class InMemoryProvisionBufferStore:
    def __init__(self) -> None:
        self._buffers: dict[str, SingleSideProvisionBuffer] = {}

    def __len__(self) -> int:
        return len(self._buffers)

    def save(self, provision_id: str, buffer: SingleSideProvisionBuffer) -> None:
        if provision_id in self._buffers:
            raise ProvisionAlreadyPending(provision_id)
        self._buffers[provision_id] = buffer

    def take(self, provision_id: str) -> SingleSideProvisionBuffer | None:
        return self._buffers.pop(provision_id, None)

    def state(self, provision_id: str) -> ProvisionState:
        if provision_id in self._buffers:
            return ProvisionState.AWAITING_SWAP_CONFIRMATION
        return ProvisionState.IDLE
