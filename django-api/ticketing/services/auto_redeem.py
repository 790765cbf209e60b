"""Auto-redeem policy for scanning clients.

A scanning device can opt in to redeeming every ticket it resolves without
a manual confirmation. The preference lives in an injected PreferenceStore
under the ``autoMark`` key.
"""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

from ticketing.domain import AccountId, RedeemedOrder, Rejected, TicketView
from ticketing.domain.errors import ErrorCode
from ticketing.services.access import TicketPage, TicketStatus, present

logger = logging.getLogger(__name__)

AUTO_MARK_KEY = "autoMark"

RedeemFn = Callable[[str, AccountId | None], RedeemedOrder | Rejected]


class PreferenceStore(ABC):
    """Per-device key/value persistence for boolean preferences."""

    @abstractmethod
    def get_bool(self, key: str, default: bool = False) -> bool: ...

    @abstractmethod
    def set_bool(self, key: str, value: bool) -> None: ...


class InMemoryPreferenceStore(PreferenceStore):
    def __init__(self, values: dict[str, bool] | None = None) -> None:
        self._values = dict(values or {})

    def get_bool(self, key: str, default: bool = False) -> bool:
        return self._values.get(key, default)

    def set_bool(self, key: str, value: bool) -> None:
        self._values[key] = value


class JsonFilePreferenceStore(PreferenceStore):
    """Preferences kept in a small JSON file on the scanning device."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def _load(self) -> dict:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except ValueError:
            logger.warning("Ignoring unreadable preference file %s", self._path)
            return {}
        return data if isinstance(data, dict) else {}

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self._load().get(key, default)
        return value if isinstance(value, bool) else default

    def set_bool(self, key: str, value: bool) -> None:
        data = self._load()
        data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data), encoding="utf-8")


class TicketSession:
    """State of one ticket view on a scanning device.

    ``attempted`` guards against a second automatic redemption when the view
    is refreshed; a manual redemption is still possible after a failure.
    """

    def __init__(self, page: TicketPage, viewer: AccountId | None, redeem: RedeemFn) -> None:
        self.page = page
        self.viewer = viewer
        self._redeem = redeem
        self.attempted = False
        self.marked_used = False
        self.error: ErrorCode | None = None

    @property
    def status(self) -> TicketStatus:
        return self.page.status

    def redeem_manually(self) -> RedeemedOrder | Rejected:
        return self._apply(self._redeem(str(self.page.ticket.order_id), self.viewer))

    def _apply(self, outcome: RedeemedOrder | Rejected) -> RedeemedOrder | Rejected:
        ticket = self.page.ticket
        if isinstance(outcome, RedeemedOrder):
            self.marked_used = True
            self.error = None
            ticket = _with_used(ticket)
        elif outcome.reason is ErrorCode.ALREADY_USED:
            self.error = None
            ticket = _with_used(ticket)
        else:
            self.error = outcome.reason
        self.page = present(ticket, self.viewer, marked_in_session=self.marked_used)
        return outcome


def _with_used(ticket: TicketView) -> TicketView:
    return replace(ticket, used=True)


class AutoRedeemPolicy:
    """Redeems resolved tickets automatically when enabled."""

    def __init__(
        self,
        enabled: bool,
        redeem: RedeemFn,
        preferences: PreferenceStore | None = None,
    ) -> None:
        self.enabled = enabled
        self._redeem = redeem
        self._preferences = preferences

    @classmethod
    def from_preferences(cls, preferences: PreferenceStore, redeem: RedeemFn) -> "AutoRedeemPolicy":
        return cls(
            enabled=preferences.get_bool(AUTO_MARK_KEY, False),
            redeem=redeem,
            preferences=preferences,
        )

    def set_enabled(self, value: bool) -> None:
        self.enabled = value
        if self._preferences is not None:
            self._preferences.set_bool(AUTO_MARK_KEY, value)

    def open(self, page: TicketPage, viewer: AccountId | None) -> TicketSession:
        """Start a view of a resolved ticket and apply the policy once."""
        session = TicketSession(page, viewer, self._redeem)
        self.on_resolved(session)
        return session

    def on_resolved(self, session: TicketSession) -> RedeemedOrder | Rejected | None:
        if session.attempted or not self.enabled:
            return None
        if not session.page.can_redeem or session.page.status is not TicketStatus.VALID:
            return None
        session.attempted = True
        return session.redeem_manually()
