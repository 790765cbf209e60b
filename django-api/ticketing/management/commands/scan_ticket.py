from django.core.management.base import BaseCommand, CommandError

from ticketing.conf import get_setting
from ticketing.domain import AccountId, Invalid
from ticketing.domain import credentials
from ticketing.domain.errors import USER_MESSAGES, MalformedCredentialError
from ticketing.handlers import dependencies
from ticketing.services.access import TicketStatus, ViewMode, present
from ticketing.services.auto_redeem import AutoRedeemPolicy, JsonFilePreferenceStore

STATUS_LABELS = {
    TicketStatus.VALID: "Valid Ticket",
    TicketStatus.MARKED_USED: "Marked Used",
    TicketStatus.USED_BEFORE: "Used Before",
    TicketStatus.EXPIRED: "Expired Ticket",
}


class Command(BaseCommand):
    help = "Check a scanned ticket URL or token and optionally mark it used."

    def add_arguments(self, parser):
        parser.add_argument("code", help="Scanned ticket URL or JSON token.")
        parser.add_argument("--as", dest="viewer", default="",
                            help="Account id of the person scanning (the organizer).")
        parser.add_argument("--mark", action="store_true", help="Mark the ticket used.")
        auto = parser.add_mutually_exclusive_group()
        auto.add_argument("--auto", dest="auto", action="store_true", default=None,
                          help="Remember: mark scanned tickets used automatically.")
        auto.add_argument("--no-auto", dest="auto", action="store_false",
                          help="Remember: do not mark scanned tickets automatically.")
        parser.set_defaults(auto=None)
        parser.add_argument("--preferences", default=None,
                            help="Preference file for this device.")

    def handle(self, *args, **opts):
        viewer = None
        if opts["viewer"]:
            try:
                viewer = AccountId.from_string(opts["viewer"])
            except ValueError as exc:
                raise CommandError("--as must be an account id") from exc

        try:
            credential = credentials.decode_scanned(opts["code"])
        except MalformedCredentialError as exc:
            raise CommandError(exc.message) from exc

        prefs = JsonFilePreferenceStore(opts["preferences"] or get_setting("PREFERENCES_FILE"))
        policy = AutoRedeemPolicy.from_preferences(
            prefs, dependencies.get_redemption_service().redeem
        )
        if opts["auto"] is not None:
            policy.set_enabled(opts["auto"])

        result = dependencies.get_validator().validate(credential, viewer)
        if isinstance(result, Invalid):
            raise CommandError(USER_MESSAGES[result.reason])

        session = policy.open(present(result, viewer), viewer)
        if opts["mark"] and session.page.can_redeem:
            session.redeem_manually()

        ticket = session.page.ticket
        self.stdout.write(f"{ticket.event_title}")
        self.stdout.write(f"  Attendee: {ticket.attendee_name}")
        self.stdout.write(f"  Order ID: {ticket.order_id}")
        self.stdout.write(f"  Ends:     {ticket.ends_at:%Y-%m-%d %H:%M}")
        if session.page.mode is ViewMode.ATTENDEE:
            self.stdout.write("  (attendee view)")

        label = STATUS_LABELS[session.status]
        if session.error is not None:
            self.stdout.write(self.style.ERROR(f"{label}: {USER_MESSAGES[session.error]}"))
        elif session.status in (TicketStatus.VALID, TicketStatus.MARKED_USED):
            self.stdout.write(self.style.SUCCESS(label))
        else:
            self.stdout.write(self.style.WARNING(label))
