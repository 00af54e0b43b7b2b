from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from ..extensions import db
from ..time_utils import to_utc_z, utcnow


def _serialize_value(value):
    if isinstance(value, datetime):
        return to_utc_z(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


class ResourceMixin:
    """
    Columns and serialization shared by every back-office record.

    - id: integer identity assigned by the store
    - created_at / updated_at: set by the store, used for "latest first" ordering
    - to_dict(include=...): column values plus optionally hydrated relationships;
      dotted paths ("items.account") hydrate through a relationship
    """

    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def to_dict(self, include: tuple[str, ...] | list[str] = ()) -> dict:
        data = {
            column.key: _serialize_value(getattr(self, column.key))
            for column in self.__mapper__.columns
        }
        nested: dict[str, list[str]] = {}
        for path in include:
            name, _, rest = path.partition(".")
            nested.setdefault(name, [])
            if rest:
                nested[name].append(rest)

        for name, inner in nested.items():
            related = getattr(self, name)
            if related is None:
                data[name] = None
            elif isinstance(related, (list, tuple)):
                data[name] = [r.to_dict(include=inner) for r in related]
            else:
                data[name] = related.to_dict(include=inner)
        return data
