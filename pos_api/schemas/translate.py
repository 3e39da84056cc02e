# schemas/translate.py

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field


class MenuTranslateRequest(BaseModel):
    target_language: str = Field(..., min_length=1)
    # [{"name": ..., "description": ..., any other keys are passed through}]
    content: list[dict[str, Any]]


class MenuTranslateResponse(BaseModel):
    translation: list[dict[str, Any]]


class TextTranslateRequest(BaseModel):
    text: str
    target_language: str = Field(..., min_length=1)


class TextTranslateResponse(BaseModel):
    translation: str


class TranscriptionResponse(BaseModel):
    transcription: str
    order_id: int
    total_price: Decimal
    order: dict[str, Any]
