"""Tests for translation lookup."""

from bookings_api.core.i18n import get_translation


async def test_translate_known_key() -> None:
    t = await get_translation("es", "common")

    assert t("organizer") == "Organizador"


async def test_unknown_key_returns_key() -> None:
    t = await get_translation("en", "common")

    assert t("does_not_exist") == "does_not_exist"


async def test_unknown_locale_falls_back_to_default() -> None:
    t = await get_translation("xx", "common")

    assert t("organizer") == "Organizer"


async def test_unknown_namespace() -> None:
    t = await get_translation("en", "missing")

    assert t("organizer") == "organizer"
