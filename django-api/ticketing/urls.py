from django.urls import path

from ticketing.handlers import (
    OrderTicketQRView,
    OrderTicketView,
    RedeemOrderView,
    TicketInfoView,
    ValidateTicketView,
)

api_urlpatterns = [
    path("validate-ticket", ValidateTicketView.as_view(), name="validate-ticket"),
    path("orders/<str:order_id>/redeem", RedeemOrderView.as_view(), name="order-redeem"),
    path("orders/<str:order_id>/ticket", OrderTicketView.as_view(), name="order-ticket"),
    path("orders/<str:order_id>/qr.png", OrderTicketQRView.as_view(), name="order-ticket-qr"),
]

page_urlpatterns = [
    path("ticket-info", TicketInfoView.as_view(), name="ticket-info"),
]
