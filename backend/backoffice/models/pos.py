from __future__ import annotations

from ..extensions import db
from .base import ResourceMixin


# Amounts are stored as fixed-point decimals but surfaced to Python as floats
Money = db.Numeric(12, 2, asdecimal=False)


class CustomerGroup(ResourceMixin, db.Model):
    __tablename__ = "customer_groups"

    name = db.Column(db.String(255), nullable=False, unique=True)
    pricing_type = db.Column(db.String(16), nullable=False, default="none")  # fixed, percentage, none
    discount_rate = db.Column(Money, nullable=False, default=0)


class Customer(ResourceMixin, db.Model):
    __tablename__ = "pos_customers"

    name = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(20), nullable=False, unique=True)
    email = db.Column(db.String(255), nullable=True)
    customer_group_id = db.Column(db.Integer, db.ForeignKey("customer_groups.id"), nullable=True, index=True)
    loyalty_points = db.Column(db.Integer, nullable=True, default=0)

    customergroup = db.relationship(
        "CustomerGroup",
        backref=db.backref("customers", lazy=True, passive_deletes="all"),
    )


class CustomerAddress(ResourceMixin, db.Model):
    __tablename__ = "customer_addresses"

    customer_id = db.Column(db.Integer, db.ForeignKey("pos_customers.id"), nullable=False, index=True)
    address = db.Column(db.Text, nullable=False)
    city = db.Column(db.String(255), nullable=False)
    country = db.Column(db.String(255), nullable=False)

    customer = db.relationship(
        "Customer",
        backref=db.backref("addresses", lazy=True, passive_deletes="all"),
    )


class GiftCard(ResourceMixin, db.Model):
    __tablename__ = "gift_cards"

    code = db.Column(db.String(255), nullable=False, unique=True)
    balance = db.Column(Money, nullable=False, default=0)
    expiry_date = db.Column(db.Date, nullable=True)
    status = db.Column(db.String(16), nullable=False, default="active")  # active, inactive, expired


class PosTerminal(ResourceMixin, db.Model):
    __tablename__ = "pos_terminals"

    name = db.Column(db.String(255), nullable=False, unique=True)
    location = db.Column(db.String(255), nullable=True)
    status = db.Column(db.String(16), nullable=False, default="active")  # active, inactive
    last_sync_at = db.Column(db.DateTime, nullable=True)


class HoldCart(ResourceMixin, db.Model):
    """A parked checkout cart; cart_data holds a CartData document."""
    __tablename__ = "hold_carts"

    terminal_id = db.Column(db.Integer, db.ForeignKey("pos_terminals.id"), nullable=False, index=True)
    cart_data = db.Column(db.JSON, nullable=True)

    terminal = db.relationship(
        "PosTerminal",
        backref=db.backref("hold_carts", lazy=True, passive_deletes="all"),
    )


class PaymentGateway(ResourceMixin, db.Model):
    """External payment provider; config holds a GatewayConfig document."""
    __tablename__ = "payment_gateways"

    name = db.Column(db.String(255), nullable=False, unique=True)
    config = db.Column(db.JSON, nullable=True)
    status = db.Column(db.String(16), nullable=False, default="active")  # active, inactive


class PaymentMethod(ResourceMixin, db.Model):
    __tablename__ = "payment_methods"

    name = db.Column(db.String(255), nullable=False, unique=True)
    type = db.Column(db.String(16), nullable=False)  # cash, card, voucher, wallet
    status = db.Column(db.String(16), nullable=False, default="active", index=True)


class PosSession(ResourceMixin, db.Model):
    __tablename__ = "pos_sessions"

    terminal_id = db.Column(db.Integer, db.ForeignKey("pos_terminals.id"), nullable=False, index=True)
    opened_at = db.Column(db.DateTime, nullable=False)
    closed_at = db.Column(db.DateTime, nullable=True)
    opening_cash = db.Column(Money, nullable=False, default=0)
    closing_cash = db.Column(Money, nullable=True)

    terminal = db.relationship(
        "PosTerminal",
        backref=db.backref("sessions", lazy=True, passive_deletes="all"),
    )


class ReceiptTemplate(ResourceMixin, db.Model):
    __tablename__ = "receipt_templates"

    name = db.Column(db.String(255), nullable=False, unique=True)
    layout = db.Column(db.Text, nullable=False)


class TaxGroup(ResourceMixin, db.Model):
    __tablename__ = "tax_groups"

    name = db.Column(db.String(255), nullable=False, unique=True)
    description = db.Column(db.Text, nullable=True)


class TaxRate(ResourceMixin, db.Model):
    __tablename__ = "tax_rates"

    name = db.Column(db.String(255), nullable=False, unique=True)
    rate = db.Column(Money, nullable=False)  # percent, 0..100
    tax_group_id = db.Column(db.Integer, db.ForeignKey("tax_groups.id"), nullable=True, index=True)

    tax_group = db.relationship(
        "TaxGroup",
        backref=db.backref("tax_rates", lazy=True, passive_deletes="all"),
    )


class Voucher(ResourceMixin, db.Model):
    __tablename__ = "vouchers"

    code = db.Column(db.String(255), nullable=False, unique=True)
    discount_type = db.Column(db.String(16), nullable=False)  # percentage, fixed
    value = db.Column(Money, nullable=False)
    expiry_date = db.Column(db.Date, nullable=True)


class Sale(ResourceMixin, db.Model):
    """
    Sale header. Lines, payments, taxes and discounts hang off it.

    invoice_no is generated at checkout (SALE-YYYYMMDD-NNNN) and is unique.
    """
    __tablename__ = "sales"

    invoice_no = db.Column(db.String(255), nullable=False, unique=True)
    terminal_id = db.Column(db.Integer, db.ForeignKey("pos_terminals.id"), nullable=False, index=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("pos_customers.id"), nullable=True, index=True)
    session_id = db.Column(db.Integer, db.ForeignKey("pos_sessions.id"), nullable=True, index=True)

    order_type = db.Column(db.String(16), nullable=True)  # dine_in, take_away, delivery
    total_amount = db.Column(Money, nullable=False, default=0)
    tax_amount = db.Column(Money, nullable=False, default=0)
    discount_amount = db.Column(Money, nullable=False, default=0)
    payable_amount = db.Column(Money, nullable=False, default=0)
    paid_amount = db.Column(Money, nullable=False, default=0)
    due_amount = db.Column(Money, nullable=False, default=0)

    payment_status = db.Column(db.String(16), nullable=False, default="pending")  # pending, partial, paid
    status = db.Column(db.String(16), nullable=False, default="completed")  # pending, completed, cancelled
    notes = db.Column(db.Text, nullable=True)

    terminal = db.relationship("PosTerminal", backref=db.backref("sales", lazy=True, passive_deletes="all"))
    customer = db.relationship("Customer", backref=db.backref("sales", lazy=True, passive_deletes="all"))
    session = db.relationship("PosSession", backref=db.backref("sales", lazy=True, passive_deletes="all"))

    items = db.relationship("SaleItem", back_populates="sale", lazy=True, passive_deletes="all")
    payments = db.relationship("SalePayment", back_populates="sale", lazy=True, passive_deletes="all")
    taxes = db.relationship("SaleTax", back_populates="sale", lazy=True, passive_deletes="all")
    discounts = db.relationship("SaleDiscount", back_populates="sale", lazy=True, passive_deletes="all")
    receipts = db.relationship("Receipt", back_populates="sale", lazy=True, passive_deletes="all")


class SaleItem(ResourceMixin, db.Model):
    __tablename__ = "sale_items"

    sale_id = db.Column(db.Integer, db.ForeignKey("sales.id"), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False, index=True)
    quantity = db.Column(Money, nullable=False)
    unit_price = db.Column(Money, nullable=False)
    discount_amount = db.Column(Money, nullable=False, default=0)
    tax_amount = db.Column(Money, nullable=False, default=0)
    subtotal = db.Column(Money, nullable=False, default=0)  # quantity * unit_price
    total = db.Column(Money, nullable=False, default=0)  # subtotal - discount + tax

    sale = db.relationship("Sale", back_populates="items")
    product = db.relationship("Product", backref=db.backref("sale_items", lazy=True, passive_deletes="all"))


class SalePayment(ResourceMixin, db.Model):
    __tablename__ = "sale_payments"

    sale_id = db.Column(db.Integer, db.ForeignKey("sales.id"), nullable=False, index=True)
    payment_method_id = db.Column(db.Integer, db.ForeignKey("payment_methods.id"), nullable=False, index=True)
    amount = db.Column(Money, nullable=False)
    reference_no = db.Column(db.String(255), nullable=True)
    status = db.Column(db.String(16), nullable=False, default="completed")

    sale = db.relationship("Sale", back_populates="payments")
    payment_method = db.relationship(
        "PaymentMethod",
        backref=db.backref("sale_payments", lazy=True, passive_deletes="all"),
    )


class SaleTax(ResourceMixin, db.Model):
    __tablename__ = "sale_taxes"

    sale_id = db.Column(db.Integer, db.ForeignKey("sales.id"), nullable=False, index=True)
    tax_rate_id = db.Column(db.Integer, db.ForeignKey("tax_rates.id"), nullable=False, index=True)
    amount = db.Column(Money, nullable=False)

    sale = db.relationship("Sale", back_populates="taxes")
    tax_rate = db.relationship("TaxRate", backref=db.backref("sale_taxes", lazy=True, passive_deletes="all"))


class SaleDiscount(ResourceMixin, db.Model):
    __tablename__ = "sale_discounts"

    sale_id = db.Column(db.Integer, db.ForeignKey("sales.id"), nullable=False, index=True)
    type = db.Column(db.String(16), nullable=False)  # percentage, fixed
    value = db.Column(Money, nullable=False)

    sale = db.relationship("Sale", back_populates="discounts")


class Receipt(ResourceMixin, db.Model):
    __tablename__ = "receipts"

    sale_id = db.Column(db.Integer, db.ForeignKey("sales.id"), nullable=False, index=True)
    receipt_no = db.Column(db.String(255), nullable=False, unique=True)
    sent_via = db.Column(db.String(16), nullable=True)  # print, email, sms, whatsapp

    sale = db.relationship("Sale", back_populates="receipts")
