"""Ticket issuance - hand out the credential for an order."""

from ticketing.domain import AccountId, Credential, IssuedTicket, OrderId, Rejected
from ticketing.domain import credentials
from ticketing.domain.errors import ErrorCode, TransientStoreError
from ticketing.services.access import is_organizer
from ticketing.stores.interfaces import OrderStore


class TicketIssuer:
    """Service building credentials and ticket URLs for buyers and organizers."""

    def __init__(self, store: OrderStore, origin: str) -> None:
        self._store = store
        self._origin = origin

    def issue(self, order_id: str, viewer: AccountId | None) -> IssuedTicket | Rejected:
        """Return the credential for an order.

        Only the order's buyer and the event's organizer may obtain it.
        """
        try:
            oid = OrderId.from_string(order_id)
        except (TypeError, ValueError):
            return Rejected(ErrorCode.INVALID_INPUT)

        if viewer is None:
            return Rejected(ErrorCode.UNAUTHORIZED)

        try:
            detail = self._store.get_order_detail(oid)
        except TransientStoreError:
            return Rejected(ErrorCode.TRANSIENT_FAILURE)
        if detail is None:
            return Rejected(ErrorCode.NOT_FOUND)

        if viewer != detail.order.buyer_id and not is_organizer(viewer, detail.event.organizer_id):
            return Rejected(ErrorCode.UNAUTHORIZED)

        credential = Credential(
            event_id=str(detail.event.id),
            order_id=str(detail.order.id),
            organizer_id=str(detail.event.organizer_id),
        )
        return IssuedTicket(
            credential=credential,
            token=credentials.encode_credential(credential),
            url=credentials.ticket_url(self._origin, credential),
        )
