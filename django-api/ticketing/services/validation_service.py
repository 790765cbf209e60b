"""Ticket validation - resolve a credential against current order state.

Read-only. Every outcome is returned as a TicketView or an Invalid result;
no domain or store error escapes ``validate``.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from django.utils import timezone

from ticketing.domain import AccountId, Credential, EventId, Invalid, OrderId, TicketView
from ticketing.domain import credentials
from ticketing.domain.errors import ErrorCode, MalformedCredentialError, TransientStoreError
from ticketing.stores.interfaces import OrderStore

logger = logging.getLogger(__name__)


class TicketValidator:
    """Service for checking scanned ticket credentials."""

    def __init__(self, store: OrderStore, clock: Callable[[], datetime] = timezone.now) -> None:
        self._store = store
        self._clock = clock

    def validate(
        self, token: str | Credential, viewer: AccountId | None = None
    ) -> TicketView | Invalid:
        """Return the ticket view for a credential.

        ``viewer`` does not affect the result; view selection happens in
        services.access.present.
        """
        try:
            credential = token if isinstance(token, Credential) else credentials.decode(token)
            order_id = OrderId.from_string(credential.order_id)
            event_id = EventId.from_string(credential.event_id)
            organizer_id = AccountId.from_string(credential.organizer_id)
        except (MalformedCredentialError, ValueError):
            return Invalid(ErrorCode.MALFORMED_CREDENTIAL)

        try:
            detail = self._store.get_order_detail(order_id)
        except TransientStoreError:
            return Invalid(ErrorCode.TRANSIENT_FAILURE)

        if (
            detail is None
            or detail.order.event_id != event_id
            or detail.event.organizer_id != organizer_id
        ):
            logger.info("Ticket %s did not resolve", order_id)
            return Invalid(ErrorCode.NOT_FOUND)

        return TicketView(
            event_id=detail.event.id,
            event_title=detail.event.title,
            starts_at=detail.event.starts_at,
            ends_at=detail.event.ends_at,
            attendee_name=detail.buyer.display_name,
            order_id=detail.order.id,
            organizer_id=detail.event.organizer_id,
            used=detail.order.used,
            valid=not detail.event.window.has_ended(self._clock()),
        )
