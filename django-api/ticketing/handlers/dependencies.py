"""Wiring of services to the Django ORM store."""

from ticketing.conf import get_setting
from ticketing.services.issuance_service import TicketIssuer
from ticketing.services.redemption_service import RedemptionService
from ticketing.services.validation_service import TicketValidator
from ticketing.stores.django_store import DjangoOrderStore


def get_validator() -> TicketValidator:
    return TicketValidator(DjangoOrderStore())


def get_redemption_service() -> RedemptionService:
    return RedemptionService(DjangoOrderStore())


def get_issuer() -> TicketIssuer:
    return TicketIssuer(DjangoOrderStore(), origin=get_setting("ORIGIN"))
