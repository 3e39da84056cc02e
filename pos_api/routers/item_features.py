# pos_api/routers/item_features.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from pos_api.database import get_db, transaction
from pos_api.models.items import ItemFeature
from pos_api.schemas.item_feature import ItemFeatureCreate, ItemFeatureResponse
from pos_api.services.lookup import columns, create_thumbnails

router = APIRouter(prefix="/item-features", tags=["Item Features"])


@router.get("", response_model=list[ItemFeatureResponse])
def list_item_features(db: Session = Depends(get_db)):
    return db.query(ItemFeature).order_by(ItemFeature.importance, ItemFeature.id).all()


@router.get("/{feature_id}", response_model=ItemFeatureResponse)
def get_item_feature(feature_id: int, db: Session = Depends(get_db)):
    feature = db.query(ItemFeature).filter(ItemFeature.id == feature_id).first()
    if not feature:
        raise HTTPException(status_code=404, detail="Item feature not found")
    return feature


@router.post("", response_model=list[ItemFeatureResponse], status_code=status.HTTP_201_CREATED)
def create_item_features(
    features_data: list[ItemFeatureCreate],
    db: Session = Depends(get_db),
):
    values = [f.model_dump() for f in features_data]

    with transaction(db):
        thumbnail_ids = create_thumbnails(db, values)
        features = [
            ItemFeature(**columns(value, "name", "importance", "is_primary"), thumbnail_id=thumbnail_id)
            for value, thumbnail_id in zip(values, thumbnail_ids)
        ]
        db.add_all(features)
    return features
