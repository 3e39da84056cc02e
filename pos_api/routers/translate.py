# pos_api/routers/translate.py

from fastapi import APIRouter, Request

from pos_api.core.rate_limiter import limiter
from pos_api.core.translation import translate_menu, translate_text
from pos_api.schemas.translate import (
    MenuTranslateRequest,
    MenuTranslateResponse,
    TextTranslateRequest,
    TextTranslateResponse,
)

router = APIRouter(prefix="/translate", tags=["Translation"])


@router.post("", response_model=MenuTranslateResponse)
@limiter.limit("30/minute")
def translate_menu_content(request: Request, translate_data: MenuTranslateRequest):
    return {"translation": translate_menu(translate_data.content, translate_data.target_language)}


@router.post("/text", response_model=TextTranslateResponse)
@limiter.limit("30/minute")
def translate_free_text(request: Request, translate_data: TextTranslateRequest):
    return {"translation": translate_text(translate_data.text, translate_data.target_language)}
