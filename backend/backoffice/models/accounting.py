from __future__ import annotations

from ..extensions import db
from .base import ResourceMixin


Amount = db.Numeric(15, 2, asdecimal=False)


class ChartOfAccount(ResourceMixin, db.Model):
    __tablename__ = "chart_of_accounts"

    code = db.Column(db.String(50), nullable=False, unique=True)
    name = db.Column(db.String(255), nullable=False)
    type = db.Column(db.String(16), nullable=False)  # asset, liability, equity, revenue, expense
    sub_type = db.Column(db.String(255), nullable=True)  # e.g. Current Asset, Long Term Liability
    description = db.Column(db.Text, nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    opening_balance = db.Column(Amount, nullable=False, default=0)


class JournalEntry(ResourceMixin, db.Model):
    """
    A dated, balanced set of debit/credit lines.

    The lines are owned by the entry: written, replaced and deleted with it.
    """
    __tablename__ = "journal_entries"

    date = db.Column(db.Date, nullable=False, index=True)
    reference = db.Column(db.String(255), nullable=True)
    description = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(16), nullable=False, default="draft")  # draft, posted

    items = db.relationship(
        "JournalItem",
        back_populates="entry",
        lazy=True,
        passive_deletes="all",
        order_by="JournalItem.id",
    )

    @property
    def total_debit(self) -> float:
        return round(sum(item.debit or 0 for item in self.items), 2)

    @property
    def total_credit(self) -> float:
        return round(sum(item.credit or 0 for item in self.items), 2)

    def to_dict(self, include=()) -> dict:
        data = super().to_dict(include=include)
        data["total_debit"] = self.total_debit
        data["total_credit"] = self.total_credit
        return data


class JournalItem(ResourceMixin, db.Model):
    __tablename__ = "journal_items"

    journal_entry_id = db.Column(db.Integer, db.ForeignKey("journal_entries.id"), nullable=False, index=True)
    chart_of_account_id = db.Column(db.Integer, db.ForeignKey("chart_of_accounts.id"), nullable=False, index=True)
    debit = db.Column(Amount, nullable=False, default=0)
    credit = db.Column(Amount, nullable=False, default=0)

    entry = db.relationship("JournalEntry", back_populates="items")
    account = db.relationship(
        "ChartOfAccount",
        backref=db.backref("journal_items", lazy=True, passive_deletes="all"),
    )
