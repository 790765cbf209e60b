"""Redemption - the one-way Unused -> Used transition of an order.

Authorization is re-derived from the store on every call. The transition
itself is a single conditional update in the store, so concurrent attempts
on one order produce exactly one RedeemedOrder.
"""

import logging
from dataclasses import replace

from ticketing.domain import AccountId, OrderId, RedeemedOrder, Rejected
from ticketing.domain.errors import ErrorCode, TransientStoreError
from ticketing.services.access import can_redeem
from ticketing.stores.interfaces import OrderStore

logger = logging.getLogger(__name__)


class RedemptionService:
    """Service for marking tickets as used."""

    def __init__(self, store: OrderStore) -> None:
        self._store = store

    def redeem(self, order_id: str, viewer: AccountId | None) -> RedeemedOrder | Rejected:
        try:
            oid = OrderId.from_string(order_id)
        except (TypeError, ValueError):
            return Rejected(ErrorCode.INVALID_INPUT)

        if viewer is None:
            return Rejected(ErrorCode.UNAUTHORIZED)

        try:
            return self._redeem(oid, viewer)
        except TransientStoreError:
            logger.warning("Redemption of order %s failed on the store", oid)
            return Rejected(ErrorCode.TRANSIENT_FAILURE)

    def _redeem(self, order_id: OrderId, viewer: AccountId) -> RedeemedOrder | Rejected:
        detail = self._store.get_order_detail(order_id)
        if detail is None:
            return Rejected(ErrorCode.NOT_FOUND)

        if not can_redeem(viewer, detail.event):
            logger.warning("Account %s may not redeem order %s", viewer, order_id)
            return Rejected(ErrorCode.UNAUTHORIZED)

        if detail.order.used:
            return Rejected(ErrorCode.ALREADY_USED, order=detail.order)

        if not self._store.mark_used(order_id):
            # Lost the race to a concurrent redemption.
            current = self._store.get_order(order_id)
            if current is None:
                return Rejected(ErrorCode.NOT_FOUND)
            return Rejected(ErrorCode.ALREADY_USED, order=current)

        logger.info("Order %s redeemed by %s", order_id, viewer)
        return RedeemedOrder(order=replace(detail.order, used=True))
