# pos_api/core/find_options.py
#
# Translates client "find options" (plain JSON) into SQLAlchemy statements.
#
#   {
#     "where": {"name": {"Op.iLike": "%chicken%"}},
#     "attributes": ["id", "name", ["upper(items.name)", "shout"]],
#     "include": [{"model": "ItemFeature", "attributes": ["name"]}],
#     "order": [["name", "ASC"]],
#     "limit": 10
#   }
#
# String values wrapped as "$col$" are column references ("$Model.col$" for
# another model's column) and "$$expr$$" are raw SQL literals.

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy import and_, func, inspect, literal_column, not_, or_, select, false, true
from sqlalchemy.orm import Session, selectinload

from pos_api.core.errors import MalformedRequestError, NotFoundError, require_unique
from pos_api.models.mixins import is_paranoid
from pos_api.models.registry import MODELS, lookup_model


OPERATORS = {
    "eq": lambda col, v: col.is_(None) if v is None else col == v,
    "ne": lambda col, v: col.is_not(None) if v is None else col != v,
    "gt": lambda col, v: col > v,
    "gte": lambda col, v: col >= v,
    "lt": lambda col, v: col < v,
    "lte": lambda col, v: col <= v,
    "in": lambda col, v: col.in_(v),
    "notIn": lambda col, v: col.not_in(v),
    "like": lambda col, v: col.like(v),
    "notLike": lambda col, v: col.not_like(v),
    "iLike": lambda col, v: col.ilike(v),
    "notILike": lambda col, v: col.not_ilike(v),
    "between": lambda col, v: col.between(v[0], v[1]),
    "notBetween": lambda col, v: not_(col.between(v[0], v[1])),
    "is": lambda col, v: col.is_(v),
    "not": lambda col, v: col.is_not(v),
}

LOGICAL = ("Op.or", "Op.and", "Op.not")


def _is_literal(value) -> bool:
    return isinstance(value, str) and len(value) > 4 and value.startswith("$$") and value.endswith("$$")


def _is_column_ref(value) -> bool:
    return isinstance(value, str) and len(value) > 2 and value.startswith("$") and value.endswith("$")


def _columns(model) -> dict:
    return {c.key: c for c in inspect(model).column_attrs}


def _column(model, name: str):
    if _is_column_ref(name):
        return _column_ref(model, name[1:-1])

    if name not in _columns(model):
        raise MalformedRequestError(f"Unknown attribute {model.__name__}.{name}")
    return getattr(model, name)


def _column_ref(model, ref: str):
    if "." not in ref:
        return _column(model, ref)

    owner, name = ref.rsplit(".", 1)
    if owner in MODELS:
        return _column(MODELS[owner], name)

    relationships = inspect(model).relationships
    if owner in relationships:
        return _column(relationships[owner].mapper.class_, name)

    raise MalformedRequestError(f"Unknown column reference ${ref}$")


def _coerce(column, value):
    if not isinstance(value, str):
        return value
    try:
        python_type = column.type.python_type
    except (AttributeError, NotImplementedError):
        return value

    try:
        if python_type is datetime:
            return datetime.fromisoformat(value)
        if python_type is date:
            return date.fromisoformat(value)
    except ValueError:
        raise MalformedRequestError(f"Invalid {python_type.__name__} value: {value}") from None
    return value


def _value(model, column, value):
    if _is_literal(value):
        return literal_column(value[2:-2])
    if _is_column_ref(value):
        return _column_ref(model, value[1:-1])
    if isinstance(value, (list, tuple)):
        return [_value(model, column, v) for v in value]
    return _coerce(column, value)


def _compare(model, column, condition):
    if isinstance(condition, dict):
        clauses = []
        for key, value in condition.items():
            op = key[3:] if key.startswith("Op.") else None
            if op not in OPERATORS:
                raise MalformedRequestError(f"Unknown operator {key}")
            clauses.append(OPERATORS[op](column, _value(model, column, value)))
        return and_(true(), *clauses)

    if isinstance(condition, list):
        return column.in_(_value(model, column, condition))

    if condition is None:
        return column.is_(None)

    return column == _value(model, column, condition)


def _disjuncts(value) -> list:
    # {"Op.or": {"a": 1, "b": 2}} means a = 1 OR b = 2
    if isinstance(value, dict):
        return [{k: v} for k, v in value.items()]
    if isinstance(value, list):
        return value
    raise MalformedRequestError("Logical operators take an object or a list")


def _clause(model, mapping: dict):
    clauses = []

    for key, value in mapping.items():
        if key == "Op.or":
            clauses.append(or_(false(), *[build_where(model, v) for v in _disjuncts(value)]))
        elif key == "Op.and":
            clauses.append(and_(true(), *[build_where(model, v) for v in _disjuncts(value)]))
        elif key == "Op.not":
            clauses.append(not_(build_where(model, value)))
        elif key.startswith("Op."):
            raise MalformedRequestError(f"Operator {key} is not valid here")
        else:
            clauses.append(_compare(model, _column(model, key), value))

    return and_(true(), *clauses)


def build_where(model, where):
    """Build a SQL criterion for ``model`` from a client ``where`` value.

    A number is a primary key, a list of numbers is a set of primary keys and
    a list of objects is an OR of each object.
    """
    if where is None:
        return None

    pk = inspect(model).primary_key[0]

    if isinstance(where, bool):
        raise MalformedRequestError("where cannot be a boolean")

    if isinstance(where, int):
        return pk == where

    if isinstance(where, list):
        if not where:
            return false()
        if all(isinstance(w, int) and not isinstance(w, bool) for w in where):
            return pk.in_(where)
        return or_(false(), *[build_where(model, w) for w in where])

    if isinstance(where, dict):
        return _clause(model, where)

    raise MalformedRequestError(f"Unsupported where clause: {where!r}")


@dataclass
class Projection:
    columns: list[str]
    extras: list[tuple[Any, str]] = field(default_factory=list)


def _projection(model, attributes) -> Projection:
    known = list(_columns(model))

    if attributes is None:
        return Projection(columns=known)

    def split(entries):
        names, extras = [], []
        for entry in entries or []:
            if isinstance(entry, (list, tuple)):
                if len(entry) != 2:
                    raise MalformedRequestError(f"Invalid attribute {entry!r}")
                expression, alias = entry
                if _is_literal(expression):
                    expression = expression[2:-2]
                extras.append((literal_column(expression).label(alias), alias))
            else:
                _column(model, entry)
                names.append(entry)
        return names, extras

    if isinstance(attributes, list):
        names, extras = split(attributes)
        return Projection(columns=names, extras=extras)

    if isinstance(attributes, dict):
        excluded, _ = split(attributes.get("exclude"))
        included, extras = split(attributes.get("include"))
        names = [name for name in known if name not in excluded]
        names += [name for name in included if name not in names]
        return Projection(columns=names, extras=extras)

    raise MalformedRequestError("attributes must be a list or an object")


@dataclass
class Include:
    key: str
    model: Any
    projection: Projection
    children: list["Include"] = field(default_factory=list)


def _relationship(model, target, alias: Optional[str]):
    relationships = inspect(model).relationships

    if alias:
        if alias not in relationships or relationships[alias].mapper.class_ is not target:
            raise MalformedRequestError(f"{model.__name__} has no association {alias} to {target.__name__}")
        return relationships[alias]

    matches = [rel for rel in relationships if rel.mapper.class_ is target]
    if not matches:
        raise MalformedRequestError(f"{target.__name__} is not associated to {model.__name__}")
    if len(matches) > 1:
        raise MalformedRequestError(
            f"{target.__name__} is associated to {model.__name__} more than once; use 'as'"
        )
    return matches[0]


@dataclass
class FindQuery:
    model: Any
    projection: Projection
    includes: list[Include]
    criteria: list
    joins: list
    loaders: list
    order_by: list
    limit: Optional[int]
    offset: Optional[int]

    def statement(self):
        stmt = select(self.model)
        for attr in self.joins:
            stmt = stmt.join(attr)
        if self.criteria:
            stmt = stmt.where(*self.criteria)

        if self.projection.extras:
            stmt = stmt.add_columns(*[expr for expr, _ in self.projection.extras])

        if self.loaders:
            stmt = stmt.options(*self.loaders)

        if self.order_by:
            stmt = stmt.order_by(*self.order_by)
        if self.limit is not None:
            stmt = stmt.limit(self.limit)
        if self.offset is not None:
            stmt = stmt.offset(self.offset)
        return stmt

    def count_statement(self):
        pk = inspect(self.model).primary_key[0]
        stmt = select(func.count(pk.distinct())).select_from(self.model)
        for attr in self.joins:
            stmt = stmt.join(attr)
        if self.criteria:
            stmt = stmt.where(*self.criteria)
        return stmt

    def rows(self, db: Session) -> list[dict]:
        result = db.execute(self.statement()).unique().all()
        return [self.serialize(row[0], row[1:]) for row in result]

    def serialize(self, entity, extras=()) -> dict:
        data = _to_json(entity, self.projection, self.includes)
        for (_, alias), value in zip(self.projection.extras, extras):
            data[alias] = value
        return data


def _to_json(entity, projection: Projection, includes: list[Include]) -> dict:
    data = {name: getattr(entity, name) for name in projection.columns}
    for include in includes:
        related = getattr(entity, include.key)
        if related is None:
            data[include.key] = None
        elif isinstance(related, list):
            data[include.key] = [_to_json(r, include.projection, include.children) for r in related]
        else:
            data[include.key] = _to_json(related, include.projection, include.children)
    return data


def _parse_includes(model, entries, parent_loader, parent_joins, query: FindQuery, paranoid: bool):
    parsed = []

    for entry in entries or []:
        if not isinstance(entry, dict) or "model" not in entry:
            raise MalformedRequestError("Each include needs a model name")

        target = lookup_model(entry["model"])
        rel = _relationship(model, target, entry.get("as"))
        attr = getattr(model, rel.key)

        criteria = build_where(target, entry.get("where"))
        if paranoid and entry.get("paranoid", True) and is_paranoid(target):
            criteria = target.live() if criteria is None else and_(criteria, target.live())
        bound = attr.and_(criteria) if criteria is not None else attr

        loader = selectinload(bound) if parent_loader is None else parent_loader.selectinload(bound)

        joins = parent_joins + [bound]
        if entry.get("required", entry.get("where") is not None):
            for join in joins:
                if not any(join is existing for existing in query.joins):
                    query.joins.append(join)

        projection = _projection(target, entry.get("attributes"))
        if projection.extras:
            raise MalformedRequestError("Literal attributes are only supported on the root model")

        children = _parse_includes(target, entry.get("include"), loader, joins, query, paranoid)
        if not children:
            query.loaders.append(loader)

        parsed.append(Include(key=rel.key, model=target, projection=projection, children=children))

    return parsed


def _parse_order(model, order) -> list:
    clauses = []
    for entry in order or []:
        if isinstance(entry, str):
            name, direction = entry, "ASC"
        elif isinstance(entry, (list, tuple)) and len(entry) == 2:
            name, direction = entry
        else:
            raise MalformedRequestError(f"Invalid order entry {entry!r}")

        column = literal_column(name[2:-2]) if _is_literal(name) else _column(model, name)
        if str(direction).upper() == "DESC":
            clauses.append(column.desc())
        elif str(direction).upper() == "ASC":
            clauses.append(column.asc())
        else:
            raise MalformedRequestError(f"Invalid order direction {direction!r}")
    return clauses


def parse_find_options(model, options: Optional[dict] = None) -> FindQuery:
    options = options or {}
    paranoid = options.get("paranoid", True)

    criteria = []
    where = build_where(model, options.get("where"))
    if where is not None:
        criteria.append(where)
    if paranoid and is_paranoid(model):
        criteria.append(model.live())

    query = FindQuery(
        model=model,
        projection=_projection(model, options.get("attributes")),
        includes=[],
        criteria=criteria,
        joins=[],
        loaders=[],
        order_by=_parse_order(model, options.get("order")),
        limit=options.get("limit"),
        offset=options.get("offset"),
    )
    query.includes = _parse_includes(model, options.get("include"), None, [], query, paranoid)
    return query


def find_all(db: Session, model, options: Optional[dict] = None) -> list[dict]:
    return parse_find_options(model, options).rows(db)


def find_one(db: Session, model, options: Optional[dict] = None) -> dict:
    options = {**(options or {}), "limit": 1}
    rows = find_all(db, model, options)
    if not rows:
        raise NotFoundError(f"Couldn't find {model.__name__} matching {options.get('where')}")
    return rows[0]


def find_unique(db: Session, model, options: dict) -> dict:
    rows = find_all(db, model, {**options, "limit": 2})
    return require_unique(rows, model.__name__, options.get("where"))


def find_specific(db: Session, model, where: list, options: Optional[dict] = None) -> list[dict]:
    rows = find_all(db, model, {**(options or {}), "where": where})
    if len(rows) != len(where):
        raise NotFoundError(f"Couldn't find specific {model.__name__}: {where}")
    return rows


def count(db: Session, model, options: Optional[dict] = None) -> int:
    return db.execute(parse_find_options(model, options).count_statement()).scalar_one()
