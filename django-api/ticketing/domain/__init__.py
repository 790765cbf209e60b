from ticketing.domain.models import (
    Account,
    Credential,
    Event,
    Invalid,
    IssuedTicket,
    Order,
    OrderDetail,
    RedeemedOrder,
    Rejected,
    TicketView,
)
from ticketing.domain.value_objects import AccountId, EventId, EventWindow, Money, OrderId

__all__ = [
    "Account",
    "Event",
    "Order",
    "OrderDetail",
    "Credential",
    "TicketView",
    "Invalid",
    "RedeemedOrder",
    "Rejected",
    "IssuedTicket",
    "AccountId",
    "EventId",
    "OrderId",
    "Money",
    "EventWindow",
]
