# Overview: Structured documents stored in JSON columns (hold cart contents, gateway config).

"""
Structured sub-objects

HoldCart.cart_data and PaymentGateway.config are JSON documents with a known
shape. They are parsed into these dataclasses on write and stored as plain
dicts; SQLAlchemy's JSON type does the encode/decode at the store boundary.

A document may also arrive as a JSON-encoded string (older clients posted the
cart as text); parse() accepts both.
"""
from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass, field
from typing import Any


class SchemaError(ValueError):
    """A structured document does not match its schema."""


def _load(raw: Any) -> Any:
    if isinstance(raw, str):
        try:
            return json.loads(raw)
        except ValueError:
            raise SchemaError("must be valid JSON")
    return raw


def _number(value: Any, label: str, *, minimum: float, exclusive: bool = False) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaError(f"{label} must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise SchemaError(f"{label} must be a number")
    if exclusive and value <= minimum:
        raise SchemaError(f"{label} must be greater than {minimum:g}")
    if not exclusive and value < minimum:
        raise SchemaError(f"{label} must be at least {minimum:g}")
    return value


@dataclass(frozen=True)
class CartLine:
    product_id: int
    quantity: float
    unit_price: float
    name: str | None = None

    @classmethod
    def parse(cls, raw: Any, index: int) -> "CartLine":
        label = f"items.{index}"
        if not isinstance(raw, dict):
            raise SchemaError(f"{label} must be an object")
        product_id = raw.get("product_id")
        if isinstance(product_id, bool) or not isinstance(product_id, int):
            raise SchemaError(f"{label}.product_id must be an integer")
        name = raw.get("name")
        if name is not None and not isinstance(name, str):
            raise SchemaError(f"{label}.name must be a string")
        return cls(
            product_id=product_id,
            quantity=_number(raw.get("quantity"), f"{label}.quantity", minimum=0, exclusive=True),
            unit_price=_number(raw.get("unit_price"), f"{label}.unit_price", minimum=0),
            name=name,
        )

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
        }


@dataclass(frozen=True)
class CartData:
    items: list[CartLine] = field(default_factory=list)
    customer_id: int | None = None
    note: str | None = None

    @classmethod
    def parse(cls, raw: Any) -> "CartData":
        raw = _load(raw)
        if not isinstance(raw, dict):
            raise SchemaError("must be an object")
        items = raw.get("items", [])
        if not isinstance(items, list):
            raise SchemaError("items must be a list")
        customer_id = raw.get("customer_id")
        if customer_id is not None and (isinstance(customer_id, bool) or not isinstance(customer_id, int)):
            raise SchemaError("customer_id must be an integer")
        note = raw.get("note")
        if note is not None and not isinstance(note, str):
            raise SchemaError("note must be a string")
        return cls(
            items=[CartLine.parse(item, i) for i, item in enumerate(items)],
            customer_id=customer_id,
            note=note,
        )

    @property
    def total(self) -> float:
        return round(sum(line.quantity * line.unit_price for line in self.items), 2)

    def to_dict(self) -> dict:
        return {
            "items": [line.to_dict() for line in self.items],
            "customer_id": self.customer_id,
            "note": self.note,
        }


GATEWAY_MODES = {"sandbox", "live"}
CURRENCY_RE = re.compile(r"^[A-Z]{3}$")


@dataclass(frozen=True)
class GatewayConfig:
    """
    Flat key/value settings for a payment gateway.

    Known keys are checked (mode, currency); any other key is kept as long as
    its value is a scalar, so provider-specific settings pass through.
    """
    settings: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def parse(cls, raw: Any) -> "GatewayConfig":
        raw = _load(raw)
        if not isinstance(raw, dict):
            raise SchemaError("must be an object")
        for key, value in raw.items():
            if not isinstance(key, str) or not key:
                raise SchemaError("keys must be non-empty strings")
            if value is not None and not isinstance(value, (str, int, float, bool)):
                raise SchemaError(f"{key} must be a string, number, boolean or null")
        mode = raw.get("mode")
        if mode is not None and mode not in GATEWAY_MODES:
            raise SchemaError(f"mode must be one of: {', '.join(sorted(GATEWAY_MODES))}")
        currency = raw.get("currency")
        if currency is not None and not (isinstance(currency, str) and CURRENCY_RE.match(currency)):
            raise SchemaError("currency must be a 3-letter ISO code")
        return cls(settings=dict(raw))

    def to_dict(self) -> dict:
        return dict(self.settings)
