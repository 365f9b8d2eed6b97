"""User-facing message catalog (English and German)."""

from __future__ import annotations

DEFAULT_LANGUAGE = "en"

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "fetch_failed": "Failed to fetch salons",
        "address_not_found": "Address not found. Please check your input.",
        "location_required": "Location unavailable. Please enter an address.",
        "appointment_not_found": "Appointment not found.",
        "reason_not_found": "Extra charge reason not found.",
        "database_unavailable": "The service is temporarily unavailable. Please try again later.",
    },
    "de": {
        "fetch_failed": "Salons konnten nicht geladen werden",
        "address_not_found": "Adresse nicht gefunden. Bitte überprüfe deine Eingabe.",
        "location_required": "Standort nicht verfügbar. Bitte gib eine Adresse ein.",
        "appointment_not_found": "Termin nicht gefunden.",
        "reason_not_found": "Zusatzgrund nicht gefunden.",
        "database_unavailable": "Der Dienst ist vorübergehend nicht erreichbar. Bitte versuche es später erneut.",
    },
}


def resolve_language(accept_language: str | None) -> str:
    """Pick the first supported language from an Accept-Language header."""
    if not accept_language:
        return DEFAULT_LANGUAGE
    for part in accept_language.split(","):
        code = part.split(";")[0].strip().lower()
        primary = code.split("-")[0]
        if primary in MESSAGES:
            return primary
    return DEFAULT_LANGUAGE


def translate(key: str, language: str | None = None) -> str:
    catalog = MESSAGES.get(language or DEFAULT_LANGUAGE, MESSAGES[DEFAULT_LANGUAGE])
    return catalog.get(key) or MESSAGES[DEFAULT_LANGUAGE].get(key, key)
