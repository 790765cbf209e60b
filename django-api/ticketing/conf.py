"""App settings, read from the TICKETING dict in Django settings."""

from django.conf import settings

DEFAULTS = {
    "ORIGIN": "http://localhost:8000",
    "IDENTITY_HEADER": "X-Identity-Subject",
    "QR_BOX_SIZE": 8,
    "QR_BORDER": 2,
    "PREFERENCES_FILE": ".ticketing/preferences.json",
}


def get_setting(name: str):
    overrides = getattr(settings, "TICKETING", {})
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]
