"""Integration tests for the ticket HTTP endpoints.

Run with: pytest tests/test_api.py -v
"""

import uuid
from urllib.parse import quote

import pytest
from fakes import UnavailableOrderStore
from rest_framework.test import APIClient

from ticketing import models
from ticketing.domain import credentials
from ticketing.handlers import dependencies
from ticketing.services.redemption_service import RedemptionService
from ticketing.services.validation_service import TicketValidator


def credential_body(order: models.Order) -> dict:
    return {
        "orderId": str(order.id),
        "eventId": str(order.event_id),
        "organizerId": str(order.event.organizer_id),
    }


@pytest.mark.django_db
class TestValidateTicket:
    """Tests for POST /api/validate-ticket"""

    def test_valid_ticket_returns_ticket_info(self, api_client: APIClient, order):
        response = api_client.post("/api/validate-ticket", credential_body(order), format="json")

        assert response.status_code == 200
        body = response.json()
        assert body["isValid"] is True
        info = body["ticketInfo"]
        assert info["eventName"] == "Spring Gala"
        assert info["attendeeName"] == "Alan Turing"
        assert info["orderId"] == str(order.id)
        assert info["eventId"] == str(order.event_id)
        assert info["used"] is False
        assert info["valid"] is True
        assert "eventDate" in info and "eventEndDateTime" in info

    def test_expired_ticket_is_resolved_but_not_valid(self, api_client: APIClient, expired_order):
        response = api_client.post("/api/validate-ticket", credential_body(expired_order), format="json")

        assert response.status_code == 200
        assert response.json()["ticketInfo"]["valid"] is False
        assert response.json()["ticketInfo"]["used"] is False

    def test_event_mismatch_returns_400(self, api_client: APIClient, order, past_event):
        body = {**credential_body(order), "eventId": str(past_event.id)}

        response = api_client.post("/api/validate-ticket", body, format="json")

        assert response.status_code == 400
        assert response.json()["isValid"] is False
        assert response.json()["code"] == "NOT_FOUND"

    def test_unknown_order_returns_400(self, api_client: APIClient, order):
        body = {**credential_body(order), "orderId": str(uuid.uuid4())}

        response = api_client.post("/api/validate-ticket", body, format="json")

        assert response.status_code == 400

    def test_missing_field_returns_400(self, api_client: APIClient, order):
        body = credential_body(order)
        del body["organizerId"]

        response = api_client.post("/api/validate-ticket", body, format="json")

        assert response.status_code == 400
        assert response.json()["code"] == "MALFORMED_CREDENTIAL"

    def test_event_ending_before_start_returns_400(self, api_client: APIClient, inverted_order):
        response = api_client.post("/api/validate-ticket", credential_body(inverted_order), format="json")

        assert response.status_code == 400
        assert response.json()["code"] == "NOT_FOUND"

    def test_unexpected_error_returns_500(self, api_client: APIClient, order, monkeypatch):
        class Broken(TicketValidator):
            def validate(self, token, viewer=None):
                raise RuntimeError("connection reset")

        monkeypatch.setattr(dependencies, "get_validator", lambda: Broken(store=None))

        response = api_client.post("/api/validate-ticket", credential_body(order), format="json")

        assert response.status_code == 500
        assert response.json() == {"isValid": False, "error": "Internal Server Error"}


@pytest.mark.django_db
class TestRedeemOrder:
    """Tests for POST /api/orders/{order_id}/redeem"""

    def test_organizer_redeems(self, as_account, order, organizer):
        response = as_account(organizer).post(f"/api/orders/{order.id}/redeem")

        assert response.status_code == 200
        assert response.json()["order"]["used"] is True
        order.refresh_from_db()
        assert order.used is True

    def test_second_redeem_returns_conflict_with_state(self, as_account, order, organizer):
        client = as_account(organizer)
        client.post(f"/api/orders/{order.id}/redeem")

        response = client.post(f"/api/orders/{order.id}/redeem")

        assert response.status_code == 409
        assert response.json()["code"] == "ALREADY_USED"
        assert response.json()["order"]["used"] is True

    def test_buyer_is_forbidden(self, as_account, order, buyer):
        response = as_account(buyer).post(f"/api/orders/{order.id}/redeem")

        assert response.status_code == 403
        assert response.json() == {"code": "UNAUTHORIZED", "error": "Not authorized"}
        order.refresh_from_db()
        assert order.used is False

    def test_anonymous_is_unauthorized(self, as_account, order):
        response = as_account(None).post(f"/api/orders/{order.id}/redeem")

        assert response.status_code == 401

    def test_invalid_order_id(self, as_account, organizer):
        response = as_account(organizer).post("/api/orders/abc/redeem")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"

    def test_unknown_order(self, as_account, organizer):
        response = as_account(organizer).post(f"/api/orders/{uuid.uuid4()}/redeem")

        assert response.status_code == 404

    def test_transient_failure_returns_503(self, as_account, order, organizer, monkeypatch):
        monkeypatch.setattr(
            dependencies, "get_redemption_service", lambda: RedemptionService(UnavailableOrderStore())
        )

        response = as_account(organizer).post(f"/api/orders/{order.id}/redeem")

        assert response.status_code == 503
        assert response.json()["code"] == "TRANSIENT_FAILURE"

    def test_event_ending_before_start_is_not_found(self, as_account, inverted_order, organizer):
        response = as_account(organizer).post(f"/api/orders/{inverted_order.id}/redeem")

        assert response.status_code == 404
        inverted_order.refresh_from_db()
        assert inverted_order.used is False

    def test_validate_after_redeem_shows_used(self, as_account, order, organizer):
        client = as_account(organizer)
        client.post(f"/api/orders/{order.id}/redeem")

        response = client.post("/api/validate-ticket", credential_body(order), format="json")

        assert response.json()["ticketInfo"]["used"] is True


@pytest.mark.django_db
class TestTicketInfo:
    """Tests for GET /ticket-info?data=..."""

    def url_for(self, order: models.Order) -> str:
        token = credentials.encode(order.event_id, order.id, order.event.organizer_id)
        return f"/ticket-info?data={quote(token, safe='')}"

    def test_organizer_gets_scanner_view(self, as_account, order, organizer):
        response = as_account(organizer).get(self.url_for(order))

        assert response.status_code == 200
        body = response.json()
        assert body["mode"] == "organizer"
        assert body["status"] == "valid"
        assert body["canRedeem"] is True
        assert body["ticketInfo"]["attendeeName"] == "Alan Turing"

    def test_attendee_gets_ticket_view(self, as_account, order, buyer):
        body = as_account(buyer).get(self.url_for(order)).json()

        assert body["mode"] == "attendee"
        assert body["canRedeem"] is False
        assert body["showQrCode"] is True

    def test_used_ticket_shows_used_before(self, as_account, order, organizer):
        models.Order.objects.filter(id=order.id).update(used=True)

        body = as_account(organizer).get(self.url_for(order)).json()

        assert body["status"] == "used_before"
        assert body["canRedeem"] is False

    def test_expired_ticket(self, as_account, expired_order, organizer):
        body = as_account(organizer).get(self.url_for(expired_order)).json()

        assert body["status"] == "expired"

    def test_missing_data(self, api_client: APIClient):
        assert api_client.get("/ticket-info").status_code == 400

    def test_garbage_data(self, api_client: APIClient):
        response = api_client.get("/ticket-info?data=%7Bnope")

        assert response.status_code == 400
        assert response.json()["code"] == "MALFORMED_CREDENTIAL"

    def test_deeply_nested_data_is_malformed(self, api_client: APIClient):
        response = api_client.get("/ticket-info", {"data": "[" * 100000})

        assert response.status_code == 400
        assert response.json()["code"] == "MALFORMED_CREDENTIAL"

    def test_event_ending_before_start_is_not_found(self, as_account, inverted_order, organizer):
        response = as_account(organizer).get(self.url_for(inverted_order))

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_unknown_ticket(self, api_client: APIClient, order):
        token = credentials.encode(order.event_id, uuid.uuid4(), order.event.organizer_id)

        response = api_client.get(f"/ticket-info?data={quote(token, safe='')}")

        assert response.status_code == 404


@pytest.mark.django_db
class TestOrderTicket:
    """Tests for GET /api/orders/{order_id}/ticket and qr.png"""

    def test_buyer_gets_ticket_url(self, as_account, order, buyer):
        response = as_account(buyer).get(f"/api/orders/{order.id}/ticket")

        assert response.status_code == 200
        body = response.json()
        assert body["orderId"] == str(order.id)
        assert body["url"].startswith("https://tickets.example.com/ticket-info?data=")
        assert credentials.credential_from_url(body["url"]).organizer_id == str(order.event.organizer_id)

    def test_stranger_is_forbidden(self, as_account, order, db):
        stranger = models.Account.objects.create(email="x@example.com", first_name="X", last_name="Y")

        response = as_account(stranger).get(f"/api/orders/{order.id}/ticket")

        assert response.status_code == 403

    def test_qr_png(self, as_account, order, buyer):
        response = as_account(buyer).get(f"/api/orders/{order.id}/qr.png")

        assert response.status_code == 200
        assert response["Content-Type"] == "image/png"
        assert response.content.startswith(b"\x89PNG")
