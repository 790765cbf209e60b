from ticketing.handlers.views import (
    OrderTicketQRView,
    OrderTicketView,
    RedeemOrderView,
    TicketInfoView,
    ValidateTicketView,
)

__all__ = [
    "ValidateTicketView",
    "TicketInfoView",
    "RedeemOrderView",
    "OrderTicketView",
    "OrderTicketQRView",
]
