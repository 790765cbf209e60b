"""Django ORM implementation of the OrderStore."""

import logging
from functools import wraps

from django.db import DatabaseError

from ticketing import models
from ticketing.domain import (
    Account,
    AccountId,
    Event,
    EventId,
    EventWindow,
    Money,
    Order,
    OrderDetail,
    OrderId,
)
from ticketing.domain.errors import TransientStoreError
from ticketing.stores.interfaces import OrderStore

logger = logging.getLogger(__name__)


def _transient_on_database_error(method):
    @wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except DatabaseError as exc:
            logger.warning("Order store call %s failed: %s", method.__name__, exc)
            raise TransientStoreError() from exc

    return wrapper


def to_domain_order(row: models.Order) -> Order:
    return Order(
        id=OrderId(row.id),
        event_id=EventId(row.event_id),
        buyer_id=AccountId(row.buyer_id),
        total_amount=Money(row.total_amount),
        created_at=row.created_at,
        used=row.used,
    )


def to_domain_event(row: models.Event) -> Event:
    return Event(
        id=EventId(row.id),
        title=row.title,
        window=EventWindow(starts_at=row.starts_at, ends_at=row.ends_at),
        organizer_id=AccountId(row.organizer_id),
    )


def to_domain_account(row: models.Account) -> Account:
    return Account(
        id=AccountId(row.id),
        first_name=row.first_name,
        last_name=row.last_name,
    )


class DjangoOrderStore(OrderStore):
    """Database-backed order store using Django ORM."""

    @_transient_on_database_error
    def get_order_detail(self, order_id: OrderId) -> OrderDetail | None:
        row = (
            models.Order.objects.select_related("event", "buyer")
            .filter(id=order_id.value)
            .first()
        )
        if row is None:
            return None
        try:
            event = to_domain_event(row.event)
        except ValueError:
            # ends_at >= starts_at is checked by Event.clean(), not the database.
            logger.warning("Event %s has an invalid time window", row.event_id)
            return None
        return OrderDetail(
            order=to_domain_order(row),
            event=event,
            buyer=to_domain_account(row.buyer),
        )

    @_transient_on_database_error
    def get_order(self, order_id: OrderId) -> Order | None:
        row = models.Order.objects.filter(id=order_id.value).first()
        return to_domain_order(row) if row is not None else None

    @_transient_on_database_error
    def mark_used(self, order_id: OrderId) -> bool:
        # Single conditional UPDATE; the database serializes concurrent calls.
        updated = models.Order.objects.filter(id=order_id.value, used=False).update(
            used=True
        )
        return updated == 1
