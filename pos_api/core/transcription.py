# pos_api/core/transcription.py
#
# Speech-to-text and order extraction through the OpenAI REST API.

import json
import logging
import re

import requests

from pos_api.core.config import settings
from pos_api.core.errors import UpstreamServiceError

logger = logging.getLogger("app")

ORDER_PROMPT = """
You will be given a Panda Express order, like "I'd like a plate with orange chicken and chow mein."
Convert it into a JSON object with this structure:

{
  "customer_name": "Customer Name",
  "sold_sellables": [
    {
      "sellable": {"name": "Sellable Type"},
      "items": [{"name": "Item Name"}]
    }
  ]
}

The restaurant offers these sellable types:
- Bowl (2 sides, 1 entree)
- Plate (2 sides, 2 entrees)
- Bigger Plate (2 sides, 3 entrees)
- Appetizer (1 appetizer)
- Drink (1 drink)

If a customer asks for a plate with chow mein and orange chicken, fill every slot of the
sellable type: two chow mein and two orange chicken. Do the same for the other types.

Return NO OTHER content than the JSON object. It is fed directly into a program.
"""

FENCES = re.compile(r"```(?:json|javascript)?")
DECLARATION = re.compile(r"^const\s+\w+\s*=\s*")
TRAILING_SEMICOLON = re.compile(r";\s*$")


def _headers() -> dict:
    return {"Authorization": f"Bearer {settings.OPENAI_API_KEY}"}


def _post(path: str, **kwargs) -> dict:
    url = f"{settings.OPENAI_BASE_URL}{path}"

    try:
        response = requests.post(
            url,
            headers=_headers(),
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
            **kwargs,
        )
    except requests.RequestException as exc:
        logger.error(f"OpenAI request to {path} failed: {exc}")
        raise UpstreamServiceError("Failed to process audio") from exc

    if response.status_code >= 400:
        logger.error(f"OpenAI error {response.status_code} on {path}: {response.text}")
        raise UpstreamServiceError("Failed to process audio")

    try:
        return response.json()
    except ValueError as exc:
        raise UpstreamServiceError("Failed to process audio") from exc


def transcribe_audio(audio: bytes, filename: str, content_type: str) -> str:
    data = _post(
        "/audio/transcriptions",
        files={"file": (filename or "audio.webm", audio, content_type or "application/octet-stream")},
        data={"model": settings.OPENAI_TRANSCRIPTION_MODEL},
    )
    try:
        return data["text"]
    except KeyError as exc:
        raise UpstreamServiceError("Failed to process audio") from exc


def extract_order(transcription: str) -> str:
    data = _post(
        "/chat/completions",
        json={
            "model": settings.OPENAI_CHAT_MODEL,
            "messages": [
                {"role": "system", "content": ORDER_PROMPT},
                {"role": "user", "content": transcription},
            ],
        },
    )
    try:
        return data["choices"][0]["message"]["content"] or ""
    except (KeyError, IndexError, TypeError) as exc:
        raise UpstreamServiceError("Failed to process GPT response") from exc


def clean_completion(text: str) -> str:
    """Strip code fences and a JavaScript-style wrapper from a model reply."""
    text = FENCES.sub("", text).strip()
    text = DECLARATION.sub("", text)
    return TRAILING_SEMICOLON.sub("", text).strip()


def parse_order(text: str) -> dict:
    cleaned = clean_completion(text)
    try:
        order = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.error(f"Unparsable order from model: {cleaned}")
        raise UpstreamServiceError(f"Failed to parse JSON: {cleaned}") from exc

    if not isinstance(order, dict) or not isinstance(order.get("sold_sellables"), list):
        raise UpstreamServiceError("Invalid parsed order structure: missing sold_sellables")
    return order
