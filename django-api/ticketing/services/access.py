"""Who may see and do what with a ticket.

``is_organizer`` is the single authorization predicate. The redemption
service uses it as its transition guard and ``present`` uses it to pick the
view, so what is displayed cannot drift from what is enforced.
"""

from dataclasses import dataclass
from enum import Enum

from ticketing.domain import AccountId, Event, TicketView


class ViewMode(Enum):
    ORGANIZER = "organizer"
    ATTENDEE = "attendee"


class TicketStatus(Enum):
    VALID = "valid"
    MARKED_USED = "marked_used"
    USED_BEFORE = "used_before"
    EXPIRED = "expired"


@dataclass(frozen=True)
class TicketPage:
    """What a viewer is shown for a resolved ticket."""

    ticket: TicketView
    mode: ViewMode
    status: TicketStatus
    can_redeem: bool
    show_qr_code: bool = True


def is_organizer(viewer: AccountId | None, organizer_id: AccountId) -> bool:
    if viewer is None:
        return False
    return viewer == organizer_id


def can_redeem(viewer: AccountId | None, event: Event) -> bool:
    return is_organizer(viewer, event.organizer_id)


def ticket_status(ticket: TicketView, marked_in_session: bool = False) -> TicketStatus:
    """Used states take precedence over expiry, expiry over valid."""
    if ticket.used:
        return TicketStatus.MARKED_USED if marked_in_session else TicketStatus.USED_BEFORE
    if not ticket.valid:
        return TicketStatus.EXPIRED
    return TicketStatus.VALID


def present(
    ticket: TicketView, viewer: AccountId | None, marked_in_session: bool = False
) -> TicketPage:
    organizer = is_organizer(viewer, ticket.organizer_id)
    return TicketPage(
        ticket=ticket,
        mode=ViewMode.ORGANIZER if organizer else ViewMode.ATTENDEE,
        status=ticket_status(ticket, marked_in_session),
        can_redeem=organizer and not ticket.used,
    )
