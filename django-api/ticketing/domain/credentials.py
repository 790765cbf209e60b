"""Ticket credential codec.

A credential is a reference, not a secret: the token is plain JSON and the
scannable code is a URL that carries it percent-encoded in the ``data``
query parameter.
"""

import json
from io import BytesIO
from urllib.parse import parse_qs, quote, urlsplit
from uuid import UUID

import qrcode

from ticketing.domain.errors import MalformedCredentialError
from ticketing.domain.models import Credential
from ticketing.domain.value_objects import AccountId, EventId, OrderId

TICKET_PATH = "/ticket-info"
QUERY_PARAM = "data"

_FIELDS = (
    ("eventId", "event_id"),
    ("orderId", "order_id"),
    ("organizerId", "organizer_id"),
)


def encode(
    event_id: EventId | UUID | str,
    order_id: OrderId | UUID | str,
    organizer_id: AccountId | UUID | str,
) -> str:
    payload = {
        "eventId": str(event_id),
        "orderId": str(order_id),
        "organizerId": str(organizer_id),
    }
    return json.dumps(payload, separators=(",", ":"))


def decode(token: str) -> Credential:
    """Parse a token produced by ``encode``.

    Raises:
        MalformedCredentialError: If the token is not a JSON object with
            non-empty string values for all three fields.
    """
    try:
        payload = json.loads(token)
    except (TypeError, ValueError, RecursionError) as exc:
        raise MalformedCredentialError("token is not JSON") from exc

    if not isinstance(payload, dict):
        raise MalformedCredentialError("token is not a JSON object")

    values = {}
    for key, attr in _FIELDS:
        value = payload.get(key)
        if not isinstance(value, str) or not value:
            raise MalformedCredentialError(f"missing {key}")
        values[attr] = value
    return Credential(**values)


def encode_credential(credential: Credential) -> str:
    return encode(credential.event_id, credential.order_id, credential.organizer_id)


def ticket_url(origin: str, credential: Credential) -> str:
    """Build the URL embedded in the scannable code."""
    token = encode_credential(credential)
    return f"{origin.rstrip('/')}{TICKET_PATH}?{QUERY_PARAM}={quote(token, safe='')}"


def credential_from_url(url: str) -> Credential:
    """Decode the credential carried by a scanned ticket URL or query string."""
    query = urlsplit(url).query if "?" in url else url
    values = parse_qs(query).get(QUERY_PARAM)
    if not values:
        raise MalformedCredentialError("no data parameter")
    return decode(values[0])


def qr_png(url: str, box_size: int = 8, border: int = 2) -> bytes:
    qr = qrcode.QRCode(box_size=box_size, border=border)
    qr.add_data(url)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def decode_scanned(text: str) -> Credential:
    """Accept whatever a scanner read: a ticket URL or a bare token."""
    text = text.strip()
    if text.startswith("{"):
        return decode(text)
    return credential_from_url(text)
