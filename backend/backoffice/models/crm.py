from __future__ import annotations

from ..extensions import db
from .base import ResourceMixin
from .pos import Money


class LeadSource(ResourceMixin, db.Model):
    __tablename__ = "lead_sources"

    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    status = db.Column(db.Boolean, nullable=False, default=True)


class LeadStatus(ResourceMixin, db.Model):
    __tablename__ = "lead_statuses"

    name = db.Column(db.String(255), nullable=False)
    color_code = db.Column(db.String(50), nullable=True)
    order = db.Column(db.Integer, nullable=True, default=0)  # position on the pipeline board


class Lead(ResourceMixin, db.Model):
    __tablename__ = "leads"

    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    company = db.Column(db.String(255), nullable=True)
    score = db.Column(db.Integer, nullable=True, default=0)
    lead_source_id = db.Column(db.Integer, db.ForeignKey("lead_sources.id"), nullable=False, index=True)
    lead_status_id = db.Column(db.Integer, db.ForeignKey("lead_statuses.id"), nullable=False, index=True)

    lead_source = db.relationship(
        "LeadSource",
        backref=db.backref("leads", lazy=True, passive_deletes="all"),
    )
    lead_status = db.relationship(
        "LeadStatus",
        backref=db.backref("leads", lazy=True, passive_deletes="all"),
    )


class Company(ResourceMixin, db.Model):
    __tablename__ = "companies"

    name = db.Column(db.String(255), nullable=False)
    industry = db.Column(db.String(255), nullable=True)
    website = db.Column(db.String(255), nullable=True)
    address = db.Column(db.Text, nullable=True)


class CrmCustomer(ResourceMixin, db.Model):
    """Relationship-management customer; separate from the till's POS customer."""
    __tablename__ = "crm_customers"

    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    company_id = db.Column(db.Integer, db.ForeignKey("companies.id"), nullable=True, index=True)
    type = db.Column(db.String(16), nullable=False, default="individual")  # individual, business
    status = db.Column(db.Boolean, nullable=False, default=True)

    company = db.relationship(
        "Company",
        backref=db.backref("customers", lazy=True, passive_deletes="all"),
    )


class Contact(ResourceMixin, db.Model):
    __tablename__ = "contacts"

    customer_id = db.Column(db.Integer, db.ForeignKey("crm_customers.id"), nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    designation = db.Column(db.String(255), nullable=True)

    customer = db.relationship(
        "CrmCustomer",
        backref=db.backref("contacts", lazy=True, passive_deletes="all"),
    )


class OpportunityStage(ResourceMixin, db.Model):
    __tablename__ = "opportunity_stages"

    name = db.Column(db.String(255), nullable=False)
    probability = db.Column(db.Integer, nullable=False, default=0)  # percent
    order = db.Column(db.Integer, nullable=False, default=0)


class Opportunity(ResourceMixin, db.Model):
    __tablename__ = "opportunities"

    name = db.Column(db.String(255), nullable=False)
    customer_id = db.Column(db.Integer, db.ForeignKey("crm_customers.id"), nullable=False, index=True)
    opportunity_stage_id = db.Column(db.Integer, db.ForeignKey("opportunity_stages.id"), nullable=False, index=True)
    amount = db.Column(db.Numeric(15, 2, asdecimal=False), nullable=True)
    probability = db.Column(db.Integer, nullable=True)  # percent
    expected_close_date = db.Column(db.Date, nullable=True)

    customer = db.relationship(
        "CrmCustomer",
        backref=db.backref("opportunities", lazy=True, passive_deletes="all"),
    )
    stage = db.relationship(
        "OpportunityStage",
        backref=db.backref("opportunities", lazy=True, passive_deletes="all"),
    )


class Campaign(ResourceMixin, db.Model):
    __tablename__ = "campaigns"

    name = db.Column(db.String(255), nullable=False)
    type = db.Column(db.String(16), nullable=False)  # email, sms, social
    start_date = db.Column(db.Date, nullable=True)
    end_date = db.Column(db.Date, nullable=True)
    budget = db.Column(Money, nullable=True)


class Activity(ResourceMixin, db.Model):
    __tablename__ = "activities"

    type = db.Column(db.String(16), nullable=False)  # call, meeting, task, note
    description = db.Column(db.Text, nullable=True)
    scheduled_at = db.Column(db.DateTime, nullable=True)


class Ticket(ResourceMixin, db.Model):
    __tablename__ = "tickets"

    customer_id = db.Column(db.Integer, db.ForeignKey("crm_customers.id"), nullable=False, index=True)
    subject = db.Column(db.String(255), nullable=False)
    priority = db.Column(db.String(16), nullable=False, default="medium")  # low, medium, high
    status = db.Column(db.String(16), nullable=False, default="open")  # open, in_progress, closed

    customer = db.relationship(
        "CrmCustomer",
        backref=db.backref("tickets", lazy=True, passive_deletes="all"),
    )
