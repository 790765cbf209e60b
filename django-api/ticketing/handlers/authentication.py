"""Identity from the upstream identity provider.

The provider authenticates the user and forwards the subject id in a
request header. It is trusted as-is and never verified here.
"""

from dataclasses import dataclass

from rest_framework.authentication import BaseAuthentication
from rest_framework.request import Request

from ticketing.conf import get_setting
from ticketing.domain import AccountId


@dataclass(frozen=True)
class Viewer:
    """Principal attached to request.user."""

    account_id: AccountId

    @property
    def is_authenticated(self) -> bool:
        return True


class IdentityHeaderAuthentication(BaseAuthentication):
    def authenticate(self, request: Request):
        header = "HTTP_" + get_setting("IDENTITY_HEADER").upper().replace("-", "_")
        subject = request.META.get(header, "").strip()
        if not subject:
            return None
        try:
            account_id = AccountId.from_string(subject)
        except ValueError:
            return None
        return (Viewer(account_id), None)

    def authenticate_header(self, request: Request) -> str:
        return get_setting("IDENTITY_HEADER")


def viewer_identity(request: Request) -> AccountId | None:
    user = getattr(request, "user", None)
    if isinstance(user, Viewer):
        return user.account_id
    return None
