import json
from decimal import Decimal

import pytest
import requests

from pos_api.core.errors import UpstreamServiceError
from pos_api.core.transcription import clean_completion, parse_order
from pos_api.models.orders import Order
from pos_api.services.voice_orders import order_from_model_reply


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code
        self.text = json.dumps(payload)

    def json(self):
        return self.payload


def _google(calls):
    def post(url, params=None, json=None, timeout=None, **kwargs):
        calls.append(json)
        return FakeResponse({"data": {"translations": [{"translatedText": q.upper()} for q in json["q"]]}})

    return post


def test_translate_menu_keeps_order_and_extra_keys(client, monkeypatch):
    calls = []
    monkeypatch.setattr("pos_api.core.translation.requests.post", _google(calls))

    response = client.post(
        "/translate",
        json={
            "target_language": "es",
            "content": [
                {"id": 1, "name": "Bowl", "description": "One entree and a side"},
                {"id": 2, "name": "Drink"},
            ],
        },
    )

    assert response.status_code == 200
    assert response.json() == {
        "translation": [
            {"id": 1, "name": "BOWL", "description": "ONE ENTREE AND A SIDE"},
            {"id": 2, "name": "DRINK", "description": ""},
        ]
    }
    # one upstream call for the whole menu
    assert calls == [{"q": ["Bowl", "One entree and a side", "Drink", ""], "target": "es", "format": "text"}]


def test_translate_text(client, monkeypatch):
    monkeypatch.setattr("pos_api.core.translation.requests.post", _google([]))

    response = client.post("/translate/text", json={"text": "thank you", "target_language": "zh"})
    assert response.json() == {"translation": "THANK YOU"}


def test_translation_failures_are_bad_gateway(client, monkeypatch):
    monkeypatch.setattr(
        "pos_api.core.translation.requests.post",
        lambda *args, **kwargs: FakeResponse({"error": {"message": "API key not valid"}}, status_code=400),
    )
    response = client.post("/translate/text", json={"text": "hello", "target_language": "fr"})
    assert response.status_code == 502
    assert response.json() == {"detail": "Translation failed"}

    def unreachable(*args, **kwargs):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr("pos_api.core.translation.requests.post", unreachable)
    response = client.post("/translate/text", json={"text": "hello", "target_language": "fr"})
    assert response.status_code == 502


def _openai(reply):
    def post(url, headers=None, timeout=None, **kwargs):
        if url.endswith("/audio/transcriptions"):
            assert kwargs["files"]["file"][1] == b"fake audio"
            return FakeResponse({"text": "Hi, I'm Jamie. A bowl with chow mein and beijing beef please."})
        if url.endswith("/chat/completions"):
            return FakeResponse({"choices": [{"message": {"content": reply}}]})
        raise AssertionError(f"unexpected url {url}")

    return post


def test_voice_order_is_placed(client, db, menu, monkeypatch):
    reply = """```json
    {"customer_name": "Jamie",
     "sold_sellables": [{"sellable": {"name": "bowl"},
                         "items": [{"name": "chow mein"}, {"name": "chow mein"}, {"name": "biejing beef"}]}]}
    ```"""
    monkeypatch.setattr("pos_api.core.transcription.requests.post", _openai(reply))

    response = client.post("/transcription", files={"audio": ("order.webm", b"fake audio", "audio/webm")})

    assert response.status_code == 200
    body = response.json()
    assert body["transcription"].startswith("Hi, I'm Jamie")
    assert Decimal(body["total_price"]) == Decimal("9.80")
    assert body["order"]["customer_name"] == "Jamie"

    order = db.get(Order, body["order_id"])
    assert order.customer_name == "Jamie"
    assert [(i.item.name, i.amount) for i in order.sold_sellables[0].sold_items] == [
        ("Chow Mein", 2),
        ("Beijing Beef", 1),
    ]


def test_voice_order_needs_audio(client, menu):
    response = client.post("/transcription")
    assert response.status_code == 400
    assert response.json() == {"detail": "No audio file provided"}


def test_unusable_model_reply_places_nothing(client, db, menu, monkeypatch):
    monkeypatch.setattr("pos_api.core.transcription.requests.post", _openai("Sorry, I didn't catch that."))

    response = client.post("/transcription", files={"audio": ("order.webm", b"fake audio", "audio/webm")})

    assert response.status_code == 502
    assert response.json()["detail"].startswith("Failed to parse JSON")
    assert db.query(Order).count() == 0


def test_misshapen_model_reply_places_nothing(client, db, menu, monkeypatch):
    monkeypatch.setattr("pos_api.core.transcription.requests.post", _openai('{"sold_sellables": ["Bowl"]}'))

    response = client.post("/transcription", files={"audio": ("order.webm", b"fake audio", "audio/webm")})

    assert response.status_code == 502
    assert response.json() == {"detail": "Invalid parsed order structure: sold_sellables entry is not an object"}
    assert db.query(Order).count() == 0


@pytest.mark.parametrize(
    "entry, message",
    [
        ("Bowl", "entry is not an object"),
        ({"sellable": "Bowl", "items": []}, "sellable without a name"),
        ({"sellable": {"name": "Bowl"}, "items": ["chow mein"]}, "items must be objects"),
        ({"sellable": {"name": "Bowl"}, "items": "chow mein"}, "items must be objects"),
    ],
)
def test_model_reply_entries_must_be_objects(db, menu, entry, message):
    with pytest.raises(UpstreamServiceError, match=message):
        order_from_model_reply(db, {"sold_sellables": [entry]})


def test_clean_completion_strips_wrappers():
    assert clean_completion('```javascript\nconst order = {"a": 1};\n```') == '{"a": 1}'
    assert parse_order('const order = {"sold_sellables": []};') == {"sold_sellables": []}

    with pytest.raises(UpstreamServiceError, match="missing sold_sellables"):
        parse_order('{"customer_name": "Jamie"}')
