# pos_api/models/thumbnails.py

from sqlalchemy import CheckConstraint, Column, Integer, String

from pos_api.database import Base


class Thumbnail(Base):
    __tablename__ = "thumbnails"

    id = Column(Integer, primary_key=True, index=True)
    src = Column(String, nullable=False)
    alt = Column(String, nullable=False)

    __table_args__ = (
        CheckConstraint("src <> ''", name="ck_thumbnail_src_not_empty"),
        CheckConstraint("alt <> ''", name="ck_thumbnail_alt_not_empty"),
    )
