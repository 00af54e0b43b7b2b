# Overview: Service-layer operations for sales; checkout, line pricing and receipts.

"""
Sales Service

Checkout creates a sale header, its lines and its payments in a single
transaction. Every part of the payload is validated before anything is
written: a bad line or payment rejects the whole checkout.

INVOICE NUMBERS: SALE-YYYYMMDD-NNNN where NNNN is (max sale id + 1).
Two concurrent checkouts can draw the same number; the unique constraint
rejects the second insert, which is retried once with a fresh number.
"""

from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import Customer, PaymentMethod, PosSession, PosTerminal, Product, Sale, SaleItem, SalePayment
from ..validation import FieldRule, ModelValidationPolicy, ValidationError, prefix_errors, validate_payload
from .resource_service import RecordNotFoundError
from backoffice.time_utils import to_utc_z, utcnow


PAYMENT_STATUSES = ("pending", "partial", "paid")
SALE_STATUSES = ("pending", "completed", "cancelled")
ORDER_TYPES = ("dine_in", "take_away", "delivery")

# Header amounts that fall back to the column default when omitted or null
_DEFAULTED_AMOUNTS = ("tax_amount", "discount_amount", "paid_amount")

SALE_CHECKOUT_POLICY = ModelValidationPolicy(rules={
    "terminal_id": FieldRule(required=True, exists=PosTerminal),
    "customer_id": FieldRule(exists=Customer),
    "session_id": FieldRule(exists=PosSession),
    "order_type": FieldRule(nullable=True, choices=ORDER_TYPES),
    "total_amount": FieldRule(required=True, min_value=0),
    "tax_amount": FieldRule(nullable=True, min_value=0),
    "discount_amount": FieldRule(nullable=True, min_value=0),
    "payable_amount": FieldRule(required=True, min_value=0),
    "paid_amount": FieldRule(nullable=True, min_value=0),
    "payment_status": FieldRule(required=True, choices=PAYMENT_STATUSES),
    "status": FieldRule(required=True, choices=SALE_STATUSES),
    "notes": FieldRule(),
})

CHECKOUT_LINE_POLICY = ModelValidationPolicy(rules={
    "product_id": FieldRule(required=True, exists=Product),
    "quantity": FieldRule(required=True, min_value=0.01),
    "unit_price": FieldRule(required=True, min_value=0),
    "subtotal": FieldRule(min_value=0),
    "tax_amount": FieldRule(min_value=0),
    "discount_amount": FieldRule(min_value=0),
})

CHECKOUT_PAYMENT_POLICY = ModelValidationPolicy(rules={
    "payment_method_id": FieldRule(required=True, exists=PaymentMethod),
    "amount": FieldRule(required=True, min_value=0),
    "reference_no": FieldRule(),
})


def price_line(patch: dict, item: SaleItem | None = None) -> dict:
    """
    Fill derived line amounts.

    subtotal = quantity * unit_price (unless supplied)
    total    = subtotal - discount_amount + tax_amount

    On update, only recomputes when a priced field changed; values not in
    the patch come from the existing line.
    """
    priced = {"quantity", "unit_price", "subtotal", "discount_amount", "tax_amount"}
    if item is not None and not priced & set(patch):
        return patch

    def current(name, default=0):
        if name in patch and patch[name] is not None:
            return patch[name]
        if item is not None and getattr(item, name) is not None:
            return getattr(item, name)
        return default

    quantity = current("quantity")
    unit_price = current("unit_price")
    if "subtotal" not in patch or patch["subtotal"] is None:
        if item is None or "quantity" in patch or "unit_price" in patch:
            patch["subtotal"] = round(quantity * unit_price, 2)
        else:
            patch["subtotal"] = item.subtotal
    patch["discount_amount"] = current("discount_amount")
    patch["tax_amount"] = current("tax_amount")
    patch["total"] = round(patch["subtotal"] - patch["discount_amount"] + patch["tax_amount"], 2)
    return patch


def _validate_checkout(payload: dict) -> tuple[dict, list[dict], list[dict]]:
    if not isinstance(payload, dict):
        raise ValidationError({"payload": ["The payload must be a JSON object."]})

    errors: dict[str, list[str]] = {}
    header: dict = {}
    lines: list[dict] = []
    payments: list[dict] = []

    try:
        header = validate_payload(model=Sale, payload=payload, policy=SALE_CHECKOUT_POLICY, partial=False)
    except ValidationError as e:
        errors.update(e.errors)

    raw_items = payload.get("items")
    if not isinstance(raw_items, list) or not raw_items:
        errors["items"] = ["The items field is required and must contain at least 1 item."]
    else:
        for i, raw in enumerate(raw_items):
            if not isinstance(raw, dict):
                errors[f"items.{i}"] = ["Each item must be an object."]
                continue
            try:
                lines.append(validate_payload(model=SaleItem, payload=raw, policy=CHECKOUT_LINE_POLICY, partial=False))
            except ValidationError as e:
                errors.update(prefix_errors(e.errors, f"items.{i}"))

    raw_payments = payload.get("payments")
    if raw_payments is not None:
        if not isinstance(raw_payments, list):
            errors["payments"] = ["The payments field must be an array."]
        else:
            for i, raw in enumerate(raw_payments):
                if not isinstance(raw, dict):
                    errors[f"payments.{i}"] = ["Each payment must be an object."]
                    continue
                raw = dict(raw)
                # "reference" is the checkout screen's name for reference_no
                if "reference" in raw and "reference_no" not in raw:
                    raw["reference_no"] = raw.pop("reference")
                try:
                    payments.append(validate_payload(model=SalePayment, payload=raw, policy=CHECKOUT_PAYMENT_POLICY, partial=False))
                except ValidationError as e:
                    errors.update(prefix_errors(e.errors, f"payments.{i}"))

    if errors:
        raise ValidationError(errors)

    return header, lines, payments


def next_invoice_no() -> str:
    next_id = (db.session.query(func.max(Sale.id)).scalar() or 0) + 1
    return f"SALE-{utcnow():%Y%m%d}-{next_id:04d}"


def _insert_sale(header: dict) -> Sale:
    """Flush the sale header, drawing a new invoice number once on collision."""
    for attempt in (1, 2):
        sale = Sale(invoice_no=next_invoice_no(), **header)
        db.session.add(sale)
        try:
            db.session.flush()  # ensure sale.id exists before lines reference it
            return sale
        except IntegrityError as e:
            db.session.rollback()
            if attempt == 2 or "invoice_no" not in str(e.orig):
                raise
            current_app.logger.warning("Invoice number %s already taken, retrying", sale.invoice_no)


def checkout(payload: dict) -> Sale:
    """
    Create a sale with its lines and payments.

    Args:
        payload: sale header fields plus "items" (required, non-empty)
                 and "payments" (optional)

    Returns:
        The created Sale

    Raises:
        ValidationError: If the header, any line or any payment is invalid
    """
    header, lines, payments = _validate_checkout(payload)

    for name in _DEFAULTED_AMOUNTS:
        if header.get(name) is None:
            header.pop(name, None)

    if "paid_amount" not in header:
        header["paid_amount"] = round(sum(p["amount"] for p in payments), 2)
    header["due_amount"] = max(round(header["payable_amount"] - header["paid_amount"], 2), 0)

    sale = _insert_sale(header)

    for line in lines:
        db.session.add(SaleItem(sale_id=sale.id, **price_line(line)))

    for payment in payments:
        db.session.add(SalePayment(sale_id=sale.id, status="completed", **payment))

    db.session.commit()
    return sale


def build_receipt(sale_id: int, *, business_name: str) -> dict:
    """
    Printable receipt summary for one sale.

    Raises:
        RecordNotFoundError: If sale not found
    """
    sale = db.session.get(Sale, sale_id)
    if sale is None:
        raise RecordNotFoundError("Sale not found")

    return {
        "business_name": business_name,
        "invoice_no": sale.invoice_no,
        "date": to_utc_z(sale.created_at),
        "terminal": sale.terminal.name if sale.terminal else "N/A",
        "customer": sale.customer.name if sale.customer else "Walk-in Customer",
        "items": [
            {
                "name": item.product.name if item.product else f"Product #{item.product_id}",
                "qty": item.quantity,
                "price": item.unit_price,
                "total": item.subtotal,
            }
            for item in sale.items
        ],
        "subtotal": sale.total_amount,
        "tax": sale.tax_amount,
        "discount": sale.discount_amount,
        "total": sale.payable_amount,
        "payments": [
            {
                "method": payment.payment_method.name if payment.payment_method else "Cash",
                "amount": payment.amount,
            }
            for payment in sale.payments
        ],
        "notes": "Thank you for your business!",
    }
