"""Domain models representing persisted state and workflow outcomes.

These are pure domain objects with no API input rules.
Django ORM models are in ticketing/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime

from ticketing.domain.errors import ErrorCode
from ticketing.domain.value_objects import AccountId, EventId, EventWindow, Money, OrderId


@dataclass(frozen=True)
class Account:
    """Domain representation of a buyer or organizer."""

    id: AccountId
    first_name: str
    last_name: str

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    title: str
    window: EventWindow
    organizer_id: AccountId

    @property
    def starts_at(self) -> datetime:
        return self.window.starts_at

    @property
    def ends_at(self) -> datetime:
        return self.window.ends_at


@dataclass(frozen=True)
class Order:
    """Domain representation of an Order (one ticket to one event)."""

    id: OrderId
    event_id: EventId
    buyer_id: AccountId
    total_amount: Money
    created_at: datetime
    used: bool = False


@dataclass(frozen=True)
class OrderDetail:
    """An order joined with its event and buyer."""

    order: Order
    event: Event
    buyer: Account


@dataclass(frozen=True)
class Credential:
    """Reference to a ticket carried in a scannable code.

    Holds the raw identifiers as transported; they are not validated here.
    """

    event_id: str
    order_id: str
    organizer_id: str


@dataclass(frozen=True)
class TicketView:
    """Read-only projection of an order shown to a validator's caller."""

    event_id: EventId
    event_title: str
    starts_at: datetime
    ends_at: datetime
    attendee_name: str
    order_id: OrderId
    organizer_id: AccountId
    used: bool
    valid: bool


@dataclass(frozen=True)
class Invalid:
    """Outcome of a validation that did not resolve to a ticket."""

    reason: ErrorCode


@dataclass(frozen=True)
class RedeemedOrder:
    """Outcome of a redemption that flipped the order to used."""

    order: Order


@dataclass(frozen=True)
class Rejected:
    """Outcome of a refused redemption or issuance.

    ``order`` carries the current state for ALREADY_USED only.
    """

    reason: ErrorCode
    order: Order | None = None


@dataclass(frozen=True)
class IssuedTicket:
    """A credential handed to the buyer or organizer of an order."""

    credential: Credential
    token: str
    url: str
