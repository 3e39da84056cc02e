# pos_api/routers/transcription.py

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from sqlalchemy.orm import Session

from pos_api.core.rate_limiter import limiter
from pos_api.database import get_db
from pos_api.schemas.translate import TranscriptionResponse
from pos_api.services.voice_orders import place_voice_order

router = APIRouter(prefix="/transcription", tags=["Voice Ordering"])


@router.post("", response_model=TranscriptionResponse)
@limiter.limit("10/minute")
def transcribe_order(
    request: Request,
    audio: UploadFile | None = File(None),
    db: Session = Depends(get_db),
):
    if audio is None:
        raise HTTPException(status_code=400, detail="No audio file provided")

    return place_voice_order(
        db,
        audio.file.read(),
        audio.filename,
        audio.content_type,
    )
