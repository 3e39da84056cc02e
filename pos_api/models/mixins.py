# pos_api/models/mixins.py

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime


class SoftDeleteMixin:
    """Rows are hidden by setting ``deleted_at`` instead of being removed."""

    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    @classmethod
    def live(cls):
        return cls.deleted_at.is_(None)

    def soft_delete(self):
        self.deleted_at = datetime.now(timezone.utc)


def is_paranoid(model) -> bool:
    return issubclass(model, SoftDeleteMixin)
