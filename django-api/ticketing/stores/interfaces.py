"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Implementations raise
TransientStoreError when the backing database fails or times out.
"""

from abc import ABC, abstractmethod

from ticketing.domain import Order, OrderDetail, OrderId


class OrderStore(ABC):
    """Interface for order persistence operations."""

    @abstractmethod
    def get_order_detail(self, order_id: OrderId) -> OrderDetail | None:
        """Return an order joined with its event and buyer.

        Returns None if the order is not found or its event row cannot be
        read as a valid event.
        """
        ...

    @abstractmethod
    def get_order(self, order_id: OrderId) -> Order | None:
        """Return an order by ID, or None if not found."""
        ...

    @abstractmethod
    def mark_used(self, order_id: OrderId) -> bool:
        """Atomically set used=True where the order exists and is unused.

        Returns True if this call performed the transition, False if the
        order was already used or does not exist.
        """
        ...
