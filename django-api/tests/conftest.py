"""Pytest configuration and shared fixtures."""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from ticketing import models


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def ticketing_settings(settings, tmp_path):
    settings.TICKETING = {
        "ORIGIN": "https://tickets.example.com",
        "IDENTITY_HEADER": "X-Identity-Subject",
        "PREFERENCES_FILE": str(tmp_path / "preferences.json"),
    }
    return settings.TICKETING


@pytest.fixture
def as_account(api_client: APIClient):
    """Return a helper that sends requests as the given account."""

    def _as(account: models.Account | None) -> APIClient:
        if account is None:
            api_client.credentials()
        else:
            api_client.credentials(HTTP_X_IDENTITY_SUBJECT=str(account.id))
        return api_client

    return _as


@pytest.fixture
def organizer(db) -> models.Account:
    return models.Account.objects.create(
        email="host@example.com", first_name="Grace", last_name="Hopper"
    )


@pytest.fixture
def buyer(db) -> models.Account:
    return models.Account.objects.create(
        email="fan@example.com", first_name="Alan", last_name="Turing"
    )


@pytest.fixture
def upcoming_event(organizer) -> models.Event:
    now = timezone.now()
    return models.Event.objects.create(
        title="Spring Gala",
        starts_at=now + timedelta(days=1),
        ends_at=now + timedelta(days=1, hours=4),
        organizer=organizer,
    )


@pytest.fixture
def past_event(organizer) -> models.Event:
    now = timezone.now()
    return models.Event.objects.create(
        title="Winter Gala",
        starts_at=now - timedelta(days=10, hours=4),
        ends_at=now - timedelta(days=10),
        organizer=organizer,
    )


@pytest.fixture
def order(upcoming_event, buyer) -> models.Order:
    return models.Order.objects.create(
        event=upcoming_event, buyer=buyer, total_amount=Decimal("40.00")
    )


@pytest.fixture
def expired_order(past_event, buyer) -> models.Order:
    return models.Order.objects.create(
        event=past_event, buyer=buyer, total_amount=Decimal("40.00")
    )


@pytest.fixture
def inverted_order(organizer, buyer) -> models.Order:
    """Order on an event row that ends before it starts (skips Event.clean())."""
    now = timezone.now()
    event = models.Event.objects.create(
        title="Backwards Gala",
        starts_at=now + timedelta(days=2),
        ends_at=now + timedelta(days=1),
        organizer=organizer,
    )
    return models.Order.objects.create(
        event=event, buyer=buyer, total_amount=Decimal("40.00")
    )
