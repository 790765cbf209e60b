"""Serializers for request bodies and domain models in API responses."""

from rest_framework import serializers


class CredentialSerializer(serializers.Serializer):
    """Body of POST /api/validate-ticket."""

    orderId = serializers.CharField()
    eventId = serializers.CharField()
    organizerId = serializers.CharField()


class TicketInfoSerializer(serializers.Serializer):
    """Serializer for TicketView domain model."""

    eventId = serializers.CharField(source="event_id")
    eventName = serializers.CharField(source="event_title")
    eventDate = serializers.DateTimeField(source="starts_at")
    eventEndDateTime = serializers.DateTimeField(source="ends_at")
    attendeeName = serializers.CharField(source="attendee_name")
    orderId = serializers.CharField(source="order_id")
    used = serializers.BooleanField()
    valid = serializers.BooleanField()


class OrderSerializer(serializers.Serializer):
    """Serializer for Order domain model."""

    id = serializers.CharField()
    eventId = serializers.CharField(source="event_id")
    buyerId = serializers.CharField(source="buyer_id")
    totalAmount = serializers.CharField(source="total_amount")
    createdAt = serializers.DateTimeField(source="created_at")
    used = serializers.BooleanField()


class TicketPageSerializer(serializers.Serializer):
    """Serializer for TicketPage (what the viewer is shown)."""

    mode = serializers.CharField(source="mode.value")
    status = serializers.CharField(source="status.value")
    canRedeem = serializers.BooleanField(source="can_redeem")
    showQrCode = serializers.BooleanField(source="show_qr_code")
    ticketInfo = TicketInfoSerializer(source="ticket")


class IssuedTicketSerializer(serializers.Serializer):
    eventId = serializers.CharField(source="credential.event_id")
    orderId = serializers.CharField(source="credential.order_id")
    organizerId = serializers.CharField(source="credential.organizer_id")
    token = serializers.CharField()
    url = serializers.CharField()
