from __future__ import annotations
import math
import re
from datetime import date, datetime
from backoffice.time_utils import parse_iso_date, parse_iso_datetime, is_time_of_day

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Boolean, Date, DateTime, Integer, JSON, Numeric, String, Text
from sqlalchemy.orm import DeclarativeMeta

from .extensions import db
from .schemas import SchemaError


EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# Widest integer any supported store accepts (signed 64-bit)
INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1


class ValidationError(ValueError):
    """422-level input problem; carries a {field: [message, ...]} map."""

    def __init__(self, errors: dict[str, list[str]], message: str = "Validation failed"):
        super().__init__(message)
        self.message = message
        self.errors = errors


class _FieldError(ValueError):
    """One failed rule for one field (collected into ValidationError)."""


@dataclass(frozen=True)
class FieldRule:
    """
    Per-field rule. Type, nullability and String(n) length come from the
    SQLAlchemy column; the rule adds what column metadata cannot say.

    - required: must be present and non-null on create ("sometimes" on update)
    - nullable: override column.nullable for explicit nulls
    - max_length: override String(n)
    - min_value / max_value: numeric bounds (inclusive)
    - choices: enumerated set
    - email / time_of_day: string formats
    - unique: no other row in the collection holds the value
    - exists: model whose primary key the value must reference
    - schema: structured document class (parse()/to_dict()) for JSON columns
    """
    required: bool = False
    nullable: bool | None = None
    max_length: int | None = None
    min_value: float | None = None
    max_value: float | None = None
    choices: tuple[str, ...] | None = None
    email: bool = False
    time_of_day: bool = False
    unique: bool = False
    exists: Any = None
    schema: Any = None


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    Central policy layer:
    - rules: what clients are allowed to set (security boundary) and how
    Fields not named here are ignored on write.
    """
    rules: dict[str, FieldRule] = field(default_factory=dict)

    @property
    def writable_fields(self) -> set[str]:
        return set(self.rules)

    @property
    def required_on_create(self) -> set[str]:
        return {name for name, rule in self.rules.items() if rule.required}


def field_label(name: str) -> str:
    return name.replace("_", " ")


def _columns_by_key(model: DeclarativeMeta) -> dict[str, Any]:
    mapper = model.__mapper__
    return {c.key: c for c in mapper.columns}


def _coerce_value(col, value: Any, label: str):
    coltype = col.type

    # Booleans are checked before Integer: bool is a subclass of int
    if isinstance(coltype, Boolean):
        if isinstance(value, bool):
            return value
        if value in (0, 1, "0", "1", "true", "false"):
            return value in (1, "1", "true")
        raise _FieldError(f"The {label} field must be true or false.")

    # Integers - strict validation to reject floats and scientific notation
    if isinstance(coltype, Integer):
        number = None
        if isinstance(value, int) and not isinstance(value, bool):
            number = value
        elif isinstance(value, str):
            stripped = value.strip()
            if re.fullmatch(r"-?\d+", stripped):
                number = int(stripped)
        if number is None or not INT_MIN <= number <= INT_MAX:
            raise _FieldError(f"The {label} field must be an integer.")
        return number

    # Decimals (accept finite numbers and numeric strings, never booleans)
    if isinstance(coltype, Numeric):
        number = None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            try:
                number = float(value)
            except OverflowError:
                number = None
        elif isinstance(value, str):
            try:
                number = float(value.strip())
            except ValueError:
                number = None
        # NaN/inf parse as floats but cannot be stored or compared
        if number is None or not math.isfinite(number):
            raise _FieldError(f"The {label} field must be a number.")
        return number

    # Datetimes (accept ISO-8601 strings; normalize to UTC)
    if isinstance(coltype, DateTime):
        if isinstance(value, datetime):
            return value
        if isinstance(value, str):
            try:
                dt = parse_iso_datetime(value)
            except ValueError:
                dt = None
            if dt is not None:
                return dt
        raise _FieldError(f"The {label} field must be a valid date.")

    if isinstance(coltype, Date):
        if isinstance(value, date) and not isinstance(value, datetime):
            return value
        if isinstance(value, str):
            try:
                d = parse_iso_date(value)
            except ValueError:
                d = None
            if d is not None:
                return d
        raise _FieldError(f"The {label} field must be a valid date.")

    # Strings / Text
    if isinstance(coltype, (String, Text)):
        if not isinstance(value, str):
            raise _FieldError(f"The {label} field must be a string.")
        return value.strip()

    # Default: leave as-is (JSON documents are checked by their schema)
    return value


def _check_rule(model, name: str, col, rule: FieldRule, value: Any, record_id: int | None):
    label = field_label(name)

    if rule.schema is not None:
        try:
            value = rule.schema.parse(value).to_dict()
        except SchemaError as e:
            raise _FieldError(f"The {label} field is invalid: {e}.")
        return value

    # Max length check for String(n)
    if isinstance(value, str):
        max_length = rule.max_length
        if max_length is None and isinstance(col.type, String) and not isinstance(col.type, Text):
            max_length = col.type.length
        if max_length and len(value) > max_length:
            raise _FieldError(f"The {label} field must not be greater than {max_length} characters.")

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if rule.min_value is not None and value < rule.min_value:
            raise _FieldError(f"The {label} field must be at least {rule.min_value:g}.")
        if rule.max_value is not None and value > rule.max_value:
            raise _FieldError(f"The {label} field must not be greater than {rule.max_value:g}.")

    if rule.choices is not None and value not in rule.choices:
        raise _FieldError(f"The selected {label} is invalid.")

    if rule.email and not EMAIL_RE.match(value):
        raise _FieldError(f"The {label} field must be a valid email address.")

    if rule.time_of_day and not is_time_of_day(value):
        raise _FieldError(f"The {label} field format is invalid.")

    if rule.exists is not None:
        if db.session.get(rule.exists, value) is None:
            raise _FieldError(f"The selected {label} is invalid.")

    if rule.unique:
        query = db.session.query(model.id).filter(getattr(model, name) == value)
        if record_id is not None:
            # Self-exclusion: a record may keep its own value
            query = query.filter(model.id != record_id)
        if query.first() is not None:
            raise _FieldError(f"The {label} has already been taken.")

    return value


def validate_payload(
    *,
    model: DeclarativeMeta,
    payload: dict,
    policy: ModelValidationPolicy,
    partial: bool,
    record_id: int | None = None,
) -> dict:
    """
    Validates + normalizes incoming JSON against:
    - SQLAlchemy column metadata (nullable, type, String length)
    - the policy's per-field rules (bounds, enums, formats, unique, exists)
    - required fields (if partial=False)
    Returns a cleaned patch dict with only writable fields.

    partial=False: create semantics (enforce required)
    partial=True: update semantics (validate only provided keys)
    record_id: the row being updated, excluded from uniqueness checks

    All failures are collected; raises ValidationError with the full map.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError({"payload": ["The payload must be a JSON object."]})

    cols = _columns_by_key(model)
    errors: dict[str, list[str]] = {}
    patch: dict = {}

    for name, rule in policy.rules.items():
        label = field_label(name)

        if name not in payload:
            if rule.required and not partial:
                errors[name] = [f"The {label} field is required."]
            continue

        col = cols[name]
        raw = payload[name]

        # Empty strings are treated as "no value"
        if isinstance(raw, str) and raw.strip() == "" and rule.schema is None:
            raw = None

        # NULL handling
        if raw is None:
            nullable = col.nullable if rule.nullable is None else rule.nullable
            if rule.required or not nullable:
                errors[name] = [f"The {label} field is required."]
            else:
                patch[name] = None
            continue

        try:
            val = raw if isinstance(col.type, JSON) else _coerce_value(col, raw, label)
            patch[name] = _check_rule(model, name, col, rule, val, record_id)
        except _FieldError as e:
            errors[name] = [str(e)]

    if errors:
        raise ValidationError(errors)

    return patch


def prefix_errors(errors: dict[str, list[str]], prefix: str) -> dict[str, list[str]]:
    """Re-key a nested error map, e.g. {"quantity": [...]} -> {"items.0.quantity": [...]}."""
    return {f"{prefix}.{key}": messages for key, messages in errors.items()}


def date_order(start: str, end: str):
    """
    prepare hook: the end date may not fall before the start date.

    Either side may come from the patch or, on update, from the stored record.
    """
    def prepare(patch: dict, record=None) -> dict:
        first = patch[start] if start in patch else getattr(record, start, None)
        last = patch[end] if end in patch else getattr(record, end, None)
        if first is not None and last is not None and last < first:
            raise ValidationError({
                end: [f"The {field_label(end)} field must be a date after or equal to {field_label(start)}."]
            })
        return patch
    return prepare
