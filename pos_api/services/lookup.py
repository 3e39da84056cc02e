# pos_api/services/lookup.py
#
# Shared pieces of the bulk creation helpers: resolving foreign keys given
# either as ids or as lookup descriptors, and mapping bulk results back to
# the positions they came from.

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from pos_api.core.errors import MalformedRequestError, describe, require_found, require_unique
from pos_api.core.find_options import build_where
from pos_api.models.mixins import is_paranoid
from pos_api.models.thumbnails import Thumbnail

logger = logging.getLogger("app")


class LookupCache:
    """Resolves lookup descriptors to primary keys for the length of one call.

    Structurally equal descriptors share a cache entry, so each distinct
    descriptor costs at most one query.
    """

    def __init__(self, db: Session):
        self.db = db
        self._ids = {}

    def resolve(self, model, descriptor) -> int:
        key = (model.__name__, describe(descriptor))

        if key not in self._ids:
            stmt = select(model.id).where(build_where(model, descriptor))
            if is_paranoid(model):
                stmt = stmt.where(model.live())

            ids = self.db.execute(stmt.limit(2)).scalars().all()
            self._ids[key] = require_unique(ids, model.__name__, descriptor)

        return self._ids[key]


def resolve_reference(
    cache: LookupCache,
    model,
    value: dict,
    id_key: str,
    descriptor_key: str,
    required: bool = False,
) -> Optional[int]:
    explicit = value.get(id_key)
    descriptor = value.get(descriptor_key)

    if explicit is not None:
        if descriptor is not None:
            logger.warning(
                f"Both {id_key}={explicit} and {descriptor_key}={describe(descriptor)} "
                f"were given; using {id_key}"
            )
        return explicit

    if descriptor is not None:
        return cache.resolve(model, descriptor)

    if required:
        raise MalformedRequestError(f"Either {id_key} or {descriptor_key} is required")

    return None


def resolve_many(cache: LookupCache, model, value: dict, ids_key: str, descriptors_key: str) -> list[int]:
    explicit = value.get(ids_key)
    descriptors = value.get(descriptors_key)

    if explicit is not None:
        if descriptors:
            logger.warning(f"Both {ids_key} and {descriptors_key} were given; using {ids_key}")
        ids = explicit
    else:
        ids = [cache.resolve(model, d) for d in descriptors or []]

    # one link per related row
    return list(dict.fromkeys(ids))


def place(mask: list, values: list) -> list:
    """Spread ``values`` over the truthy positions of ``mask``.

    ``place([True, False, True], [7, 9])`` is ``[7, None, 9]``.
    """
    remaining = iter(values)
    return [next(remaining) if flag else None for flag in mask]


def create_thumbnails(db: Session, values: list[dict]) -> list[Optional[int]]:
    """Insert the inline thumbnails of ``values`` and return each row's thumbnail id."""
    mask = []
    for value in values:
        if value.get("thumbnail_id") is not None:
            if value.get("thumbnail") is not None:
                logger.warning(
                    f"Both thumbnail_id={value['thumbnail_id']} and an inline thumbnail "
                    f"were given; using thumbnail_id"
                )
            mask.append(False)
        else:
            mask.append(value.get("thumbnail") is not None)

    thumbnails = [Thumbnail(**value["thumbnail"]) for value, flag in zip(values, mask) if flag]
    if thumbnails:
        db.add_all(thumbnails)
        db.flush()

    created = place(mask, [thumbnail.id for thumbnail in thumbnails])
    return [
        value.get("thumbnail_id") if value.get("thumbnail_id") is not None else thumbnail_id
        for value, thumbnail_id in zip(values, created)
    ]


def columns(value: dict, *names: str) -> dict:
    """The given keys of ``value`` that are set, for passing to a model constructor."""
    return {name: value[name] for name in names if value.get(name) is not None}


def get_live(db: Session, model, object_id: int):
    query = db.query(model).filter(model.id == object_id)
    if is_paranoid(model):
        query = query.filter(model.live())
    return require_found(query.first(), model.__name__, {"id": object_id})


def apply_changes(obj, changes: dict, *names: str):
    for name in names:
        if name in changes:
            setattr(obj, name, changes[name])
