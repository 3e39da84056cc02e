# pos_api/routers/query.py
#
# Generic read access for clients that build their own find options.

from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from pos_api.core.find_options import count, find_all
from pos_api.database import get_db
from pos_api.models.registry import lookup_model

router = APIRouter(prefix="/query", tags=["Query"])


@router.post("/{model_name}/find")
def find_rows(
    model_name: str,
    options: dict[str, Any] | None = Body(None),
    db: Session = Depends(get_db),
):
    return find_all(db, lookup_model(model_name), options)


@router.post("/{model_name}/count")
def count_rows(
    model_name: str,
    options: dict[str, Any] | None = Body(None),
    db: Session = Depends(get_db),
):
    return {"count": count(db, lookup_model(model_name), options)}
