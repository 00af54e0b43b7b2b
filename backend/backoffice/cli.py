# Overview: Flask CLI command groups for schema bootstrap, resource inspection, and demo data.

# backend/backoffice/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init-db
#   Create any missing tables (idempotent).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Resource inspection:
# - python -m flask resources list
#   List every REST collection with its model and searchable fields.
#
# Demo data:
# - python -m flask seed demo
#   Insert a small POS/HRM/CRM/accounting data set; rows that already exist are skipped.

import click
from flask.cli import with_appcontext

from .extensions import db
from .models import (
    ChartOfAccount, CustomerGroup, Customer, Department, Designation, Employee,
    LeadSource, LeadStatus, LeaveType, OpportunityStage, PaymentMethod,
    PosTerminal, Product, Shift, TaxGroup, TaxRate,
)
from .resources import RESOURCES


@click.group('system')
def system_group():
    """Schema bootstrap and repair commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create all tables that do not exist yet."""
    db.create_all()
    click.echo("PASS Database schema is up to date.")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()

    click.echo("PASS Database reset complete.")


@click.group('resources')
def resources_group():
    """Resource registry inspection."""


@resources_group.command('list')
def list_resources():
    """List all registered REST collections."""
    click.echo("\n" + "="*100)
    click.echo(f"{'Path':<34} {'Model':<18} {'Search'}")
    click.echo("="*100)

    for config in RESOURCES:
        search = list(config.search_fields) + [f"{name}=" for name in config.exact_search_fields]
        search += [f"{rel}.{col}" for rel, col in config.search_relations]
        click.echo(f"{config.url_prefix:<34} {config.model.__name__:<18} {', '.join(search) or '-'}")

    click.echo("="*100 + "\n")


@click.group('seed')
def seed_group():
    """Demo data commands."""


def _get_or_create(model, lookup: dict, **values):
    instance = db.session.query(model).filter_by(**lookup).first()
    if instance is not None:
        return instance, False
    instance = model(**lookup, **values)
    db.session.add(instance)
    db.session.flush()
    return instance, True


@seed_group.command('demo')
@with_appcontext
def seed_demo():
    """Insert demo POS, HRM, CRM and accounting records (idempotent)."""
    created = 0

    retail, new = _get_or_create(CustomerGroup, {"name": "Retail"}, pricing_type="none", discount_rate=0)
    created += new
    wholesale, new = _get_or_create(CustomerGroup, {"name": "Wholesale"}, pricing_type="percentage", discount_rate=5)
    created += new

    for name, phone, email, group in (
        ("Walk-in Customer", "0000000000", None, retail),
        ("Amina Yusuf", "08031234567", "amina@example.com", retail),
        ("Bulk Traders Ltd", "08059876543", "orders@bulktraders.example", wholesale),
    ):
        _, new = _get_or_create(Customer, {"phone": phone}, name=name, email=email, customer_group_id=group.id)
        created += new

    for name, location in (("Front Counter", "Main Floor"), ("Express Lane", "Entrance")):
        _, new = _get_or_create(PosTerminal, {"name": name}, location=location, status="active")
        created += new

    for name, type_ in (("Cash", "cash"), ("Card", "card"), ("Gift Voucher", "voucher"), ("Mobile Wallet", "wallet")):
        _, new = _get_or_create(PaymentMethod, {"name": name}, type=type_, status="active")
        created += new

    standard, new = _get_or_create(TaxGroup, {"name": "Standard"}, description="Default sales taxes")
    created += new
    for name, rate in (("VAT", 15), ("City Tax", 2.5)):
        _, new = _get_or_create(TaxRate, {"name": name}, rate=rate, tax_group_id=standard.id)
        created += new

    for sku, name, price in (("BEV-001", "Bottled Water", 1.5), ("BEV-002", "Orange Juice", 3.25), ("SNK-001", "Crisps", 2.0)):
        _, new = _get_or_create(Product, {"sku": sku}, name=name, price=price)
        created += new

    sales_dept, new = _get_or_create(Department, {"name": "Sales"}, status="active")
    created += new
    cashier, new = _get_or_create(Designation, {"name": "Cashier", "department_id": sales_dept.id})
    created += new
    _, new = _get_or_create(
        Employee,
        {"employee_code": "EMP-0001"},
        first_name="Tunde",
        last_name="Bello",
        department_id=sales_dept.id,
        designation_id=cashier.id,
        job_type="permanent",
        salary_type="monthly",
        status="active",
    )
    created += new

    for name, start, end in (("Morning", "08:00", "16:00"), ("Evening", "16:00", "23:59")):
        _, new = _get_or_create(Shift, {"name": name}, start_time=start, end_time=end, grace_time=10)
        created += new

    for name, max_days in (("Annual Leave", 20), ("Sick Leave", 10)):
        _, new = _get_or_create(LeaveType, {"name": name}, max_days=max_days, status="active")
        created += new

    _, new = _get_or_create(LeadSource, {"name": "Website"}, description="Inbound web enquiries", status=True)
    created += new
    for order, (name, color) in enumerate((("New", "#3b82f6"), ("Qualified", "#22c55e"), ("Lost", "#ef4444"))):
        _, new = _get_or_create(LeadStatus, {"name": name}, color_code=color, order=order)
        created += new
    for order, (name, probability) in enumerate((("Prospecting", 10), ("Proposal", 50), ("Won", 100))):
        _, new = _get_or_create(OpportunityStage, {"name": name}, probability=probability, order=order)
        created += new

    for code, name, type_, sub_type in (
        ("1000", "Cash on Hand", "asset", "Current Asset"),
        ("2000", "Accounts Payable", "liability", "Current Liability"),
        ("3000", "Owner Equity", "equity", None),
        ("4000", "Sales Revenue", "revenue", None),
        ("5000", "Cost of Goods Sold", "expense", None),
    ):
        _, new = _get_or_create(ChartOfAccount, {"code": code}, name=name, type=type_, sub_type=sub_type)
        created += new

    db.session.commit()
    click.echo(f"PASS Demo data ready ({created} records created).")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(resources_group)
    app.cli.add_command(seed_group)
