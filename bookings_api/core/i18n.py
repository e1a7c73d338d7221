"""Minimal translation catalog used by notification payloads."""

from typing import Callable

from bookings_api.core.config import get_settings

Translate = Callable[[str], str]

CATALOGS: dict[str, dict[str, dict[str, str]]] = {
    "en": {
        "common": {
            "booking_created": "Booking created",
            "booking_confirmed": "Booking confirmed",
            "organizer": "Organizer",
            "attendees": "Attendees",
            "event_type": "Event type",
            "no_location": "No location",
        },
    },
    "es": {
        "common": {
            "booking_created": "Reserva creada",
            "booking_confirmed": "Reserva confirmada",
            "organizer": "Organizador",
            "attendees": "Asistentes",
            "event_type": "Tipo de evento",
            "no_location": "Sin ubicación",
        },
    },
}


async def get_translation(locale: str, namespace: str) -> Translate:
    """Return a translate function for a locale and namespace.

    Unknown locales fall back to the configured default locale, unknown
    keys are returned unchanged.

    Args:
        locale: Locale code, e.g. "en"
        namespace: Catalog namespace, e.g. "common"

    Returns:
        Callable mapping a key to its translated string
    """
    default_locale = get_settings().default_locale
    catalog = CATALOGS.get(locale) or CATALOGS.get(default_locale, {})
    messages = catalog.get(namespace, {})

    def translate(key: str) -> str:
        return messages.get(key, key)

    return translate
