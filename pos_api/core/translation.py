# pos_api/core/translation.py

import logging

import requests

from pos_api.core.config import settings
from pos_api.core.errors import UpstreamServiceError

logger = logging.getLogger("app")


def translate_texts(texts: list[str], target_language: str) -> list[str]:
    """Translate ``texts`` in one Google Translate v2 call, keeping their order."""
    if not texts:
        return []

    try:
        response = requests.post(
            settings.GOOGLE_TRANSLATE_URL,
            params={"key": settings.GOOGLE_TRANSLATE_API_KEY},
            json={"q": texts, "target": target_language, "format": "text"},
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
        )
    except requests.RequestException as exc:
        logger.error(f"Translation request failed: {exc}")
        raise UpstreamServiceError("Translation failed") from exc

    if response.status_code >= 400:
        logger.error(f"Translation API error {response.status_code}: {response.text}")
        raise UpstreamServiceError("Translation failed")

    try:
        translations = response.json()["data"]["translations"]
        return [t["translatedText"] for t in translations]
    except (ValueError, KeyError, TypeError) as exc:
        logger.error(f"Unexpected translation response: {response.text}")
        raise UpstreamServiceError("Translation failed") from exc


def translate_text(text: str, target_language: str) -> str:
    return translate_texts([text], target_language)[0]


def translate_menu(content: list[dict], target_language: str) -> list[dict]:
    """Translate the name and description of each menu entry.

    Other keys are passed through untouched.
    """
    strings = []
    for entry in content:
        strings += [entry.get("name") or "", entry.get("description") or ""]

    translated = iter(translate_texts(strings, target_language))
    return [
        {**entry, "name": next(translated), "description": next(translated)}
        for entry in content
    ]
