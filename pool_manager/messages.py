"""Instructions emitted by pool manager operations.

Operations never move tokens themselves. They return a Response listing
what the surrounding chain must execute: bank transfers, LP mints and
burns, position updates on the lock service and the deferred half-swap of
single-sided deposits.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pool_manager.math.fixed_point import Ratio
from pool_manager.models.coin import Coin


@dataclass(frozen=True)
class BankSend:
    """Transfer coins from the pool manager to an address."""

    to_address: str
    amount: list[Coin]


@dataclass(frozen=True)
class Burn:
    """Burn coins held by the pool manager."""

    amount: list[Coin]


@dataclass(frozen=True)
class MintLp:
    """Mint LP shares to recipient."""

    denom: str
    amount: int
    recipient: str


@dataclass(frozen=True)
class BurnLp:
    """Burn LP shares returned to the pool manager."""

    denom: str
    amount: int


class PositionAction(Enum):
    CREATE = "create"
    EXPAND = "expand"


@dataclass(frozen=True)
class ManagePosition:
    """Lock LP shares in the position-lock service on behalf of receiver."""

    contract_addr: str
    action: PositionAction
    receiver: str
    funds: list[Coin]
    identifier: str | None = None
    unlocking_duration: int | None = None


@dataclass(frozen=True)
class DeferredSwap:
    """Half-swap of a single-sided deposit, executed by the pool manager itself.

    Its outcome must be reported back through handle_swap_confirmation with
    the same provision_id.
    """

    provision_id: str
    pool_identifier: str
    offer: Coin
    ask_denom: str
    max_spread: Ratio | None = None


Message = BankSend | Burn | MintLp | BurnLp | ManagePosition | DeferredSwap


@dataclass
class Response:
    """Outcome of an operation: messages to execute, in order, plus attributes."""

    messages: list[Message] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)

    def add_message(self, message: Message) -> Response:
        self.messages.append(message)
        return self

    def add_attribute(self, key: str, value: object) -> Response:
        self.attributes[key] = str(value)
        return self

    def messages_of(self, kind: type) -> list[Message]:
        return [message for message in self.messages if isinstance(message, kind)]
