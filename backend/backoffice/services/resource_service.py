# Overview: Service-layer operations shared by every resource; query building, pagination and persistence.

"""
Resource Service

One implementation of the list/create/show/update/delete contract, driven by
a ResourceConfig (see backoffice.resources).

LISTING:
- keyword: case-insensitive substring match over the config's own search
  fields OR any related search field. The keyword predicates form a single
  OR group which is AND-ed with every other filter, so an extra filter
  (e.g. ?status=active) can never be widened by the keyword.
- limit absent/falsy: the whole filtered collection as one page.
- limit present: one page of that size (garbage or <= 0 -> default size).
- exact search fields (months, years, dates) match the whole keyword only.
- date range: ?start_date= / ?end_date= bound the config's date column.
- ordering: latest first (created_at DESC, id DESC).

DELETE POLICY:
- "allow": rows referencing the deleted record keep their dangling id.
- "restrict": refuse while any row references the record.
- a resource may pin its own policy, and rows it owns (journal lines) are
  deleted with it and never count as dependents.
"""
from __future__ import annotations

from typing import Any

from flask import current_app
from sqlalchemy import String, cast, func, or_
from sqlalchemy.orm import selectinload

from ..extensions import db
from ..time_utils import parse_iso_date
from ..validation import ValidationError, field_label, validate_payload


DELETE_POLICIES = {"allow", "restrict"}


class RecordNotFoundError(Exception):
    """Raised when a record id does not exist in the collection."""
    pass


class DeleteRestrictedError(Exception):
    """Raised when a restrict-policy delete finds dependent rows."""

    def __init__(self, message: str, dependents: dict[str, int]):
        super().__init__(message)
        self.dependents = dependents


def _escape_like(keyword: str) -> str:
    return keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _text_column(column):
    # Non-text columns (e.g. id) are searched through their string form
    if isinstance(column.type, String):
        return column
    return cast(column, String)


def keyword_clause(config, keyword: str):
    """Single OR group over own and related search fields."""
    pattern = f"%{_escape_like(keyword)}%"
    model = config.model
    predicates = [
        _text_column(getattr(model, name)).ilike(pattern, escape="\\")
        for name in config.search_fields
    ]
    predicates.extend(
        _text_column(getattr(model, name)) == keyword
        for name in config.exact_search_fields
    )
    for relation, column in config.search_relations:
        rel_attr = getattr(model, relation)
        target = rel_attr.property.mapper.class_
        related = _text_column(getattr(target, column)).ilike(pattern, escape="\\")
        if rel_attr.property.uselist:
            predicates.append(rel_attr.any(related))
        else:
            predicates.append(rel_attr.has(related))
    return or_(*predicates)


def _date_bounds(filters: dict[str, Any]):
    bounds = {}
    errors = {}
    for name in ("start_date", "end_date"):
        raw = filters.get(name)
        try:
            bounds[name] = parse_iso_date(raw) if raw else None
        except ValueError:
            errors[name] = [f"The {field_label(name)} field must be a valid date."]
    if errors:
        raise ValidationError(errors)
    return bounds["start_date"], bounds["end_date"]


def eager_load(model, path: str):
    """selectinload option for a relationship path such as "items.account"."""
    option = None
    current = model
    for name in path.split("."):
        attr = getattr(current, name)
        option = selectinload(attr) if option is None else option.selectinload(attr)
        current = attr.property.mapper.class_
    return option


def filtered_query(config, *, keyword: str | None = None, filters: dict[str, Any] | None = None):
    """Base query with exact-match filters and the keyword group applied."""
    model = config.model
    query = db.session.query(model)

    for name, value in (filters or {}).items():
        if name in config.filters and value not in (None, ""):
            query = query.filter(getattr(model, name) == value)

    if config.date_range_field is not None:
        column = getattr(model, config.date_range_field)
        start, end = _date_bounds(filters or {})
        if start is not None:
            query = query.filter(column >= start)
        if end is not None:
            query = query.filter(column <= end)

    keyword = (keyword or "").strip()
    if keyword and (config.search_fields or config.exact_search_fields or config.search_relations):
        query = query.filter(keyword_clause(config, keyword))

    return query


def build_list_query(config, *, keyword: str | None = None, filters: dict[str, Any] | None = None):
    model = config.model
    query = filtered_query(config, keyword=keyword, filters=filters)

    for relation in config.list_with:
        query = query.options(eager_load(model, relation))

    return query.order_by(model.created_at.desc(), model.id.desc())


def coerce_limit(raw: Any, default: int, maximum: int) -> int | None:
    """
    None  -> no pagination requested (absent, empty, "0", 0, False).
    int   -> page size; unparseable or negative values use the default.
    """
    if raw is None or raw is False or raw == "" or raw == 0 or raw == "0":
        return None
    try:
        limit = int(str(raw).strip())
    except ValueError:
        limit = 0
    if limit <= 0:
        limit = default
    return min(limit, maximum)


def list_records(
    config,
    *,
    keyword: str | None = None,
    limit: Any = None,
    page: int | None = None,
    filters: dict[str, Any] | None = None,
) -> dict:
    """
    Filtered, optionally paginated listing.

    Returns the pagination envelope:
        {current_page, per_page, total_items, total_pages, data}
    """
    query = build_list_query(config, keyword=keyword, filters=filters)
    include = config.list_with

    per_page = coerce_limit(
        limit,
        current_app.config.get("DEFAULT_PAGE_SIZE", 10),
        current_app.config.get("MAX_PAGE_SIZE", 500),
    )

    current_app.logger.debug(
        "list %s keyword=%r limit=%r page=%r", config.name, keyword, per_page, page
    )

    # If no pagination requested, return all items
    if per_page is None:
        records = query.all()
        return {
            "current_page": 1,
            "per_page": len(records),
            "total_items": len(records),
            "total_pages": 1,
            "data": [r.to_dict(include=include) for r in records],
        }

    page = max(page or 1, 1)  # Ensure page >= 1

    total = filtered_query(config, keyword=keyword, filters=filters).count()
    total_pages = (total + per_page - 1) // per_page if total > 0 else 1

    records = query.offset((page - 1) * per_page).limit(per_page).all()

    return {
        "current_page": page,
        "per_page": per_page,
        "total_items": total,
        "total_pages": total_pages,
        "data": [r.to_dict(include=include) for r in records],
    }


def get_record(config, record_id: int, *, include: tuple[str, ...] = ()):
    """
    Fetch one record, eager-loading the relationships to hydrate.

    Raises:
        RecordNotFoundError: If no record has this id
    """
    model = config.model
    query = db.session.query(model)
    for relation in include:
        query = query.options(eager_load(model, relation))
    record = query.filter(model.id == record_id).first()
    if record is None:
        raise RecordNotFoundError(f"{config.singular} not found")
    return record


def create_record(config, payload: dict):
    """
    Validate and insert one record.

    Raises:
        ValidationError: If any field fails its rule (nothing is written)
    """
    if config.creator is not None:
        return config.creator(payload)

    patch = validate_payload(
        model=config.model,
        payload=payload,
        policy=config.create_policy or config.policy,
        partial=False,
    )
    if config.prepare is not None:
        patch = config.prepare(patch, None)

    record = config.model(**patch)
    db.session.add(record)
    db.session.commit()

    current_app.logger.info("%s created id=%s", config.name, record.id)
    return record


def update_record(config, record_id: int, payload: dict):
    """
    Validate the supplied fields only and apply them in place.

    Raises:
        RecordNotFoundError: If record not found
        ValidationError: If a supplied field fails its rule
    """
    record = get_record(config, record_id)

    if config.updater is not None:
        return config.updater(record, payload)

    patch = validate_payload(
        model=config.model,
        payload=payload,
        policy=config.policy,
        partial=True,
        record_id=record.id,
    )
    if config.prepare is not None:
        patch = config.prepare(patch, record)

    for key, value in patch.items():
        setattr(record, key, value)

    db.session.commit()

    current_app.logger.info("%s updated id=%s fields=%s", config.name, record.id, sorted(patch))
    return record


def find_dependents(model, record_id: int, *, exclude: frozenset[str] = frozenset()) -> dict[str, int]:
    """
    Count rows in other tables whose foreign keys reference this record.

    Discovered from SQLAlchemy metadata, so new tables are covered
    without registering them anywhere. Tables named in exclude are skipped.
    """
    target = model.__table__
    counts: dict[str, int] = {}
    for table in db.metadata.sorted_tables:
        if table.name in exclude:
            continue
        for fk in table.foreign_keys:
            if fk.column.table is not target:
                continue
            count = db.session.query(func.count()).select_from(table).filter(
                fk.parent == record_id
            ).scalar()
            if count:
                counts[table.name] = counts.get(table.name, 0) + count
    return counts


def delete_record(config, record_id: int, *, policy: str | None = None) -> None:
    """
    Permanently delete one record.

    Raises:
        RecordNotFoundError: If record not found
        DeleteRestrictedError: If policy is "restrict" and dependents exist
    """
    record = get_record(config, record_id)

    policy = policy or config.delete_policy or current_app.config.get("DELETE_POLICY", "allow")
    if policy not in DELETE_POLICIES:
        raise ValueError(f"Unknown delete policy: {policy}")

    owned = [getattr(config.model, name) for name in config.owns]

    if policy == "restrict":
        exclude = frozenset(rel.property.mapper.local_table.name for rel in owned)
        dependents = find_dependents(config.model, record.id, exclude=exclude)
        if dependents:
            raise DeleteRestrictedError(
                f"{config.singular} is referenced by other records", dependents
            )

    for rel in owned:
        for child in getattr(record, rel.key):
            db.session.delete(child)
    db.session.delete(record)
    db.session.commit()

    current_app.logger.info("%s deleted id=%s", config.name, record_id)
