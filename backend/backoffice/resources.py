# Overview: Table-driven resource definitions; one ResourceConfig per REST collection.

"""
Resource registry

Every back-office entity is described here instead of in a hand-written
controller. A ResourceConfig names:
- the model and its URL prefix
- field rules (validation policy); create rules default to the same policy
- own search fields (substring or whole-value) and related
  (relationship, column) search fields
- relationships to hydrate for list / show / create / update responses
- exact-match query filters and an optional date range column
- optional hooks: prepare (derive fields), creator / updater (custom writes)
- delete behaviour: a pinned policy and owned child collections
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from .models import (
    Activity, Attendance, Campaign, ChartOfAccount, Company, Contact, CrmCustomer,
    Customer, CustomerAddress, CustomerGroup, Department, Designation, Employee,
    EmployeeDocument, GiftCard, HoldCart, JournalEntry, Lead, LeadSource, LeadStatus,
    LeaveApplication, LeaveType, Opportunity, OpportunityStage, PaymentGateway,
    PaymentMethod, Payroll, PosSession, PosTerminal, Product, Receipt, ReceiptTemplate,
    Salary, Sale, SaleDiscount, SaleItem, SalePayment, SaleTax, Shift, TaxGroup,
    TaxRate, Ticket, Voucher,
)
from .schemas import CartData, GatewayConfig
from .services import accounting_service, hrm_service, sales_service
from .validation import FieldRule, ModelValidationPolicy, date_order


ACTIVE_STATUSES = ("active", "inactive")
DISCOUNT_TYPES = ("percentage", "fixed")


@dataclass(frozen=True)
class ResourceConfig:
    name: str
    url_prefix: str
    model: Any
    singular: str
    plural: str
    policy: ModelValidationPolicy
    create_policy: ModelValidationPolicy | None = None
    search_fields: tuple[str, ...] = ()
    exact_search_fields: tuple[str, ...] = ()
    search_relations: tuple[tuple[str, str], ...] = ()
    list_with: tuple[str, ...] = ()
    show_with: tuple[str, ...] | None = None
    create_with: tuple[str, ...] | None = None
    update_with: tuple[str, ...] | None = None
    filters: tuple[str, ...] = ()
    date_range_field: str | None = None
    prepare: Callable[[dict, Any], dict] | None = None
    creator: Callable[[dict], Any] | None = None
    updater: Callable[[Any, dict], Any] | None = None
    owns: tuple[str, ...] = ()
    delete_policy: str | None = None
    create_message: str | None = None
    create_extras: Callable[[Any], dict] | None = None

    @property
    def query_params(self) -> tuple[str, ...]:
        if self.date_range_field is None:
            return self.filters
        return self.filters + ("start_date", "end_date")

    @property
    def show_relations(self) -> tuple[str, ...]:
        return self.list_with if self.show_with is None else self.show_with

    @property
    def create_relations(self) -> tuple[str, ...]:
        return self.list_with if self.create_with is None else self.create_with

    @property
    def update_relations(self) -> tuple[str, ...]:
        return self.list_with if self.update_with is None else self.update_with


def _policy(**rules: FieldRule) -> ModelValidationPolicy:
    return ModelValidationPolicy(rules=rules)


# ---------------------------------------------------------------------------
# POS
# ---------------------------------------------------------------------------

CUSTOMER_GROUPS = ResourceConfig(
    name="customer_groups",
    url_prefix="/api/pos/customer-groups",
    model=CustomerGroup,
    singular="Customer group",
    plural="Customer groups",
    policy=_policy(
        name=FieldRule(required=True, unique=True),
        pricing_type=FieldRule(required=True, choices=("fixed", "percentage", "none")),
        discount_rate=FieldRule(required=True, min_value=0),
    ),
    search_fields=("name",),
)

CUSTOMERS = ResourceConfig(
    name="customers",
    url_prefix="/api/pos/customers",
    model=Customer,
    singular="Customer",
    plural="Customers",
    policy=_policy(
        name=FieldRule(required=True),
        phone=FieldRule(required=True, unique=True),
        email=FieldRule(email=True),
        customer_group_id=FieldRule(exists=CustomerGroup),
        loyalty_points=FieldRule(min_value=0),
    ),
    search_fields=("name", "phone", "email"),
    list_with=("customergroup",),
    show_with=("customergroup", "addresses"),
)

CUSTOMER_ADDRESSES = ResourceConfig(
    name="customer_addresses",
    url_prefix="/api/pos/customer-addresses",
    model=CustomerAddress,
    singular="Customer address",
    plural="Customer addresses",
    policy=_policy(
        customer_id=FieldRule(required=True, exists=Customer),
        address=FieldRule(required=True),
        city=FieldRule(required=True),
        country=FieldRule(required=True),
    ),
    search_fields=("address", "city", "country"),
    list_with=("customer",),
)

GIFT_CARDS = ResourceConfig(
    name="gift_cards",
    url_prefix="/api/pos/gift-cards",
    model=GiftCard,
    singular="Gift card",
    plural="Gift cards",
    policy=_policy(
        code=FieldRule(required=True, unique=True),
        balance=FieldRule(required=True, min_value=0),
        expiry_date=FieldRule(),
        status=FieldRule(required=True, choices=("active", "inactive", "expired")),
    ),
    search_fields=("code",),
)

HOLD_CARTS = ResourceConfig(
    name="hold_carts",
    url_prefix="/api/pos/hold-carts",
    model=HoldCart,
    singular="Hold cart",
    plural="Hold carts",
    policy=_policy(
        terminal_id=FieldRule(required=True, exists=PosTerminal),
        cart_data=FieldRule(schema=CartData),
    ),
    search_fields=("id",),
    search_relations=(("terminal", "name"),),
    list_with=("terminal",),
)

PAYMENT_GATEWAYS = ResourceConfig(
    name="payment_gateways",
    url_prefix="/api/pos/payment-gateways",
    model=PaymentGateway,
    singular="Payment gateway",
    plural="Payment gateways",
    policy=_policy(
        name=FieldRule(required=True, unique=True),
        config=FieldRule(schema=GatewayConfig),
        status=FieldRule(required=True, choices=ACTIVE_STATUSES),
    ),
    search_fields=("name",),
)

PAYMENT_METHODS = ResourceConfig(
    name="payment_methods",
    url_prefix="/api/pos/payment-methods",
    model=PaymentMethod,
    singular="Payment method",
    plural="Payment methods",
    policy=_policy(
        name=FieldRule(required=True, unique=True),
        type=FieldRule(required=True, choices=("cash", "card", "voucher", "wallet")),
        status=FieldRule(required=True, choices=ACTIVE_STATUSES),
    ),
    search_fields=("name",),
    filters=("status",),
)

POS_SESSIONS = ResourceConfig(
    name="pos_sessions",
    url_prefix="/api/pos/sessions",
    model=PosSession,
    singular="POS session",
    plural="POS sessions",
    policy=_policy(
        terminal_id=FieldRule(required=True, exists=PosTerminal),
        opened_at=FieldRule(required=True),
        closed_at=FieldRule(),
        opening_cash=FieldRule(required=True, min_value=0),
        closing_cash=FieldRule(min_value=0),
    ),
    search_relations=(("terminal", "name"),),
    list_with=("terminal",),
)

POS_TERMINALS = ResourceConfig(
    name="pos_terminals",
    url_prefix="/api/pos/terminals",
    model=PosTerminal,
    singular="POS terminal",
    plural="POS terminals",
    policy=_policy(
        name=FieldRule(required=True, unique=True),
        location=FieldRule(),
        status=FieldRule(required=True, choices=ACTIVE_STATUSES),
        last_sync_at=FieldRule(),
    ),
    search_fields=("name", "location"),
)

RECEIPT_TEMPLATES = ResourceConfig(
    name="receipt_templates",
    url_prefix="/api/pos/receipt-templates",
    model=ReceiptTemplate,
    singular="Receipt template",
    plural="Receipt templates",
    policy=_policy(
        name=FieldRule(required=True, unique=True),
        layout=FieldRule(required=True),
    ),
    search_fields=("name",),
)

RECEIPTS = ResourceConfig(
    name="receipts",
    url_prefix="/api/pos/receipts",
    model=Receipt,
    singular="Receipt",
    plural="Receipts",
    policy=_policy(
        sale_id=FieldRule(required=True, exists=Sale),
        receipt_no=FieldRule(required=True, unique=True),
        sent_via=FieldRule(choices=("print", "email", "sms", "whatsapp")),
    ),
    search_fields=("receipt_no",),
    search_relations=(("sale", "invoice_no"),),
    list_with=("sale",),
)

SALES = ResourceConfig(
    name="sales",
    url_prefix="/api/pos/sales",
    model=Sale,
    singular="Sale",
    plural="Sales",
    # Update rules; creation goes through checkout
    policy=_policy(
        terminal_id=FieldRule(required=True, exists=PosTerminal),
        customer_id=FieldRule(exists=Customer),
        invoice_no=FieldRule(required=True, unique=True),
        total_amount=FieldRule(required=True, min_value=0),
        paid_amount=FieldRule(min_value=0),
        due_amount=FieldRule(min_value=0),
        payment_status=FieldRule(required=True, choices=sales_service.PAYMENT_STATUSES),
        order_type=FieldRule(choices=sales_service.ORDER_TYPES),
        status=FieldRule(required=True, choices=sales_service.SALE_STATUSES),
    ),
    search_fields=("invoice_no",),
    search_relations=(("customer", "name"),),
    list_with=("terminal", "customer"),
    show_with=("terminal", "customer", "payments", "taxes", "discounts", "items"),
    create_with=("items", "payments"),
    creator=sales_service.checkout,
    create_message="Checkout completed successfully",
    create_extras=lambda sale: {"invoice_no": sale.invoice_no},
)

SALE_DISCOUNTS = ResourceConfig(
    name="sale_discounts",
    url_prefix="/api/pos/sale-discounts",
    model=SaleDiscount,
    singular="Sale discount",
    plural="Sale discounts",
    policy=_policy(
        sale_id=FieldRule(required=True, exists=Sale),
        type=FieldRule(required=True, choices=DISCOUNT_TYPES),
        value=FieldRule(required=True, min_value=0),
    ),
    search_fields=("type",),
    search_relations=(("sale", "invoice_no"),),
    list_with=("sale",),
)

SALE_ITEMS = ResourceConfig(
    name="sale_items",
    url_prefix="/api/pos/sale-items",
    model=SaleItem,
    singular="Sale item",
    plural="Sale items",
    policy=_policy(
        sale_id=FieldRule(required=True, exists=Sale),
        product_id=FieldRule(required=True, exists=Product),
        quantity=FieldRule(required=True, min_value=0),
        unit_price=FieldRule(required=True, min_value=0),
        discount_amount=FieldRule(min_value=0),
        tax_amount=FieldRule(min_value=0),
    ),
    search_relations=(("sale", "invoice_no"), ("product", "name")),
    list_with=("sale", "product"),
    prepare=sales_service.price_line,
)

SALE_PAYMENTS = ResourceConfig(
    name="sale_payments",
    url_prefix="/api/pos/sale-payments",
    model=SalePayment,
    singular="Sale payment",
    plural="Sale payments",
    policy=_policy(
        sale_id=FieldRule(required=True, exists=Sale),
        payment_method_id=FieldRule(required=True, exists=PaymentMethod),
        amount=FieldRule(required=True, min_value=0),
        reference_no=FieldRule(),
    ),
    search_fields=("reference_no",),
    search_relations=(("sale", "invoice_no"), ("payment_method", "name")),
    list_with=("sale", "payment_method"),
)

SALE_TAXES = ResourceConfig(
    name="sale_taxes",
    url_prefix="/api/pos/sale-taxes",
    model=SaleTax,
    singular="Sale tax",
    plural="Sale taxes",
    policy=_policy(
        sale_id=FieldRule(required=True, exists=Sale),
        tax_rate_id=FieldRule(required=True, exists=TaxRate),
        amount=FieldRule(required=True, min_value=0),
    ),
    search_relations=(("sale", "invoice_no"), ("tax_rate", "name")),
    list_with=("sale", "tax_rate"),
)

TAX_GROUPS = ResourceConfig(
    name="tax_groups",
    url_prefix="/api/pos/tax-groups",
    model=TaxGroup,
    singular="Tax group",
    plural="Tax groups",
    policy=_policy(
        name=FieldRule(required=True, unique=True),
        description=FieldRule(),
    ),
    search_fields=("name",),
)

TAX_RATES = ResourceConfig(
    name="tax_rates",
    url_prefix="/api/pos/tax-rates",
    model=TaxRate,
    singular="Tax rate",
    plural="Tax rates",
    policy=_policy(
        name=FieldRule(required=True, unique=True),
        rate=FieldRule(required=True, min_value=0, max_value=100),
        tax_group_id=FieldRule(exists=TaxGroup),
    ),
    search_fields=("name",),
    show_with=("tax_group",),
)

VOUCHERS = ResourceConfig(
    name="vouchers",
    url_prefix="/api/pos/vouchers",
    model=Voucher,
    singular="Voucher",
    plural="Vouchers",
    policy=_policy(
        code=FieldRule(required=True, unique=True),
        discount_type=FieldRule(required=True, choices=DISCOUNT_TYPES),
        value=FieldRule(required=True, min_value=0),
        expiry_date=FieldRule(),
    ),
    search_fields=("code",),
)

# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

PRODUCTS = ResourceConfig(
    name="products",
    url_prefix="/api/products",
    model=Product,
    singular="Product",
    plural="Products",
    policy=_policy(
        name=FieldRule(required=True),
        sku=FieldRule(unique=True),
        description=FieldRule(),
        price=FieldRule(min_value=0),
    ),
    search_fields=("name", "sku"),
)

# ---------------------------------------------------------------------------
# HRM
# ---------------------------------------------------------------------------

DEPARTMENTS = ResourceConfig(
    name="departments",
    url_prefix="/api/departments",
    model=Department,
    singular="Department",
    plural="Departments",
    policy=_policy(
        name=FieldRule(required=True),
        status=FieldRule(required=True, choices=ACTIVE_STATUSES),
    ),
    search_fields=("name",),
)

DESIGNATIONS = ResourceConfig(
    name="designations",
    url_prefix="/api/designations",
    model=Designation,
    singular="Designation",
    plural="Designations",
    policy=_policy(
        name=FieldRule(required=True),
        department_id=FieldRule(required=True, exists=Department),
    ),
    search_fields=("name",),
    list_with=("department",),
)

EMPLOYEES = ResourceConfig(
    name="employees",
    url_prefix="/api/employees",
    model=Employee,
    singular="Employee",
    plural="Employees",
    policy=_policy(
        employee_code=FieldRule(required=True, unique=True),
        first_name=FieldRule(required=True),
        last_name=FieldRule(),
        gender=FieldRule(choices=("male", "female", "other")),
        date_of_birth=FieldRule(),
        phone=FieldRule(),
        email=FieldRule(email=True),
        department_id=FieldRule(exists=Department),
        designation_id=FieldRule(exists=Designation),
        join_date=FieldRule(),
        job_type=FieldRule(choices=("permanent", "contract", "intern")),
        salary_type=FieldRule(choices=("monthly", "hourly")),
        status=FieldRule(choices=ACTIVE_STATUSES),
    ),
    search_fields=("first_name", "last_name", "employee_code"),
    list_with=("department", "designation"),
)

SHIFTS = ResourceConfig(
    name="shifts",
    url_prefix="/api/shifts",
    model=Shift,
    singular="Shift",
    plural="Shifts",
    policy=_policy(
        name=FieldRule(required=True),
        start_time=FieldRule(required=True, time_of_day=True),
        end_time=FieldRule(required=True, time_of_day=True),
        grace_time=FieldRule(min_value=0),
    ),
    search_fields=("name",),
)

ATTENDANCE = ResourceConfig(
    name="attendance",
    url_prefix="/api/attendance",
    model=Attendance,
    singular="Attendance",
    plural="Attendance",
    policy=_policy(
        employee_id=FieldRule(required=True, exists=Employee),
        date=FieldRule(required=True),
        clock_in=FieldRule(time_of_day=True),
        clock_out=FieldRule(time_of_day=True),
        late=FieldRule(),
        early_leave=FieldRule(),
        working_hours=FieldRule(min_value=0),
    ),
    exact_search_fields=("date",),
    list_with=("employee",),
)

LEAVE_TYPES = ResourceConfig(
    name="leave_types",
    url_prefix="/api/leave-types",
    model=LeaveType,
    singular="Leave type",
    plural="Leave types",
    policy=_policy(
        name=FieldRule(required=True),
        max_days=FieldRule(required=True, min_value=0),
        status=FieldRule(required=True, choices=ACTIVE_STATUSES),
    ),
    search_fields=("name",),
)

LEAVE_APPLICATIONS = ResourceConfig(
    name="leave_applications",
    url_prefix="/api/leave-applications",
    model=LeaveApplication,
    singular="Leave application",
    plural="Leave applications",
    policy=_policy(
        employee_id=FieldRule(required=True, exists=Employee),
        leave_type_id=FieldRule(required=True, exists=LeaveType),
        start_date=FieldRule(required=True),
        end_date=FieldRule(required=True),
        reason=FieldRule(),
        status=FieldRule(choices=hrm_service.LEAVE_STATUSES),
    ),
    exact_search_fields=("start_date", "end_date"),
    show_with=("employee", "leave_type"),
    prepare=hrm_service.prepare_leave,
)

SALARIES = ResourceConfig(
    name="salaries",
    url_prefix="/api/salaries",
    model=Salary,
    singular="Salary",
    plural="Salaries",
    policy=_policy(
        employee_id=FieldRule(required=True, exists=Employee),
        basic_salary=FieldRule(required=True, min_value=0),
        allowances=FieldRule(),
        deductions=FieldRule(),
        effective_from=FieldRule(required=True),
    ),
    exact_search_fields=("effective_from",),
    list_with=("employee",),
)

PAYROLLS = ResourceConfig(
    name="payrolls",
    url_prefix="/api/payrolls",
    model=Payroll,
    singular="Payroll",
    plural="Payrolls",
    policy=_policy(
        employee_id=FieldRule(required=True, exists=Employee),
        month=FieldRule(required=True, min_value=1, max_value=12),
        year=FieldRule(required=True, min_value=2000),
        basic_salary=FieldRule(required=True, min_value=0),
        total_allowance=FieldRule(nullable=True, min_value=0),
        total_deduction=FieldRule(nullable=True, min_value=0),
        net_salary=FieldRule(required=True, min_value=0),
        status=FieldRule(choices=hrm_service.PAYROLL_STATUSES),
    ),
    exact_search_fields=("month", "year"),
    list_with=("employee",),
    filters=("status",),
    prepare=hrm_service.prepare_payroll,
)

EMPLOYEE_DOCUMENTS = ResourceConfig(
    name="employee_documents",
    url_prefix="/api/employee-documents",
    model=EmployeeDocument,
    singular="Employee document",
    plural="Employee documents",
    policy=_policy(
        employee_id=FieldRule(required=True, exists=Employee),
        document_type=FieldRule(required=True),
        document_file=FieldRule(required=True),
    ),
    search_fields=("document_type",),
    show_with=("employee",),
    prepare=hrm_service.prepare_document,
)

# ---------------------------------------------------------------------------
# CRM
# ---------------------------------------------------------------------------

LEAD_SOURCES = ResourceConfig(
    name="lead_sources",
    url_prefix="/api/crm/lead-sources",
    model=LeadSource,
    singular="Lead source",
    plural="Lead sources",
    policy=_policy(
        name=FieldRule(required=True),
        description=FieldRule(),
        status=FieldRule(),
    ),
    search_fields=("name", "description"),
    show_with=("leads",),
)

LEAD_STATUSES = ResourceConfig(
    name="lead_statuses",
    url_prefix="/api/crm/lead-statuses",
    model=LeadStatus,
    singular="Lead status",
    plural="Lead statuses",
    policy=_policy(
        name=FieldRule(required=True),
        color_code=FieldRule(),
        order=FieldRule(min_value=0),
    ),
    search_fields=("name", "color_code"),
)

LEADS = ResourceConfig(
    name="leads",
    url_prefix="/api/crm/leads",
    model=Lead,
    singular="Lead",
    plural="Leads",
    policy=_policy(
        name=FieldRule(required=True),
        email=FieldRule(email=True),
        phone=FieldRule(),
        company=FieldRule(),
        score=FieldRule(min_value=0),
        lead_source_id=FieldRule(required=True, exists=LeadSource),
        lead_status_id=FieldRule(required=True, exists=LeadStatus),
    ),
    search_fields=("name", "email", "phone"),
    list_with=("lead_source", "lead_status"),
    filters=("lead_status_id", "lead_source_id"),
)

COMPANIES = ResourceConfig(
    name="companies",
    url_prefix="/api/crm/companies",
    model=Company,
    singular="Company",
    plural="Companies",
    policy=_policy(
        name=FieldRule(required=True),
        industry=FieldRule(),
        website=FieldRule(),
        address=FieldRule(),
    ),
    search_fields=("name", "industry", "address"),
    show_with=("customers",),
)

CRM_CUSTOMERS = ResourceConfig(
    name="crm_customers",
    url_prefix="/api/crm/customers",
    model=CrmCustomer,
    singular="Customer",
    plural="Customers",
    policy=_policy(
        name=FieldRule(required=True),
        email=FieldRule(email=True),
        phone=FieldRule(),
        company_id=FieldRule(exists=Company),
        type=FieldRule(required=True, choices=("individual", "business")),
        status=FieldRule(),
    ),
    search_fields=("name", "email", "phone"),
    list_with=("company",),
    show_with=("company", "contacts", "opportunities", "tickets"),
)

CONTACTS = ResourceConfig(
    name="contacts",
    url_prefix="/api/crm/contacts",
    model=Contact,
    singular="Contact",
    plural="Contacts",
    policy=_policy(
        customer_id=FieldRule(required=True, exists=CrmCustomer),
        name=FieldRule(required=True),
        email=FieldRule(email=True),
        phone=FieldRule(),
        designation=FieldRule(),
    ),
    search_fields=("name", "email", "phone", "designation"),
    list_with=("customer",),
)

OPPORTUNITY_STAGES = ResourceConfig(
    name="opportunity_stages",
    url_prefix="/api/crm/opportunity-stages",
    model=OpportunityStage,
    singular="Opportunity stage",
    plural="Opportunity stages",
    policy=_policy(
        name=FieldRule(required=True),
        probability=FieldRule(min_value=0, max_value=100),
        order=FieldRule(min_value=0),
    ),
    search_fields=("name", "probability", "order"),
    show_with=("opportunities",),
)

OPPORTUNITIES = ResourceConfig(
    name="opportunities",
    url_prefix="/api/crm/opportunities",
    model=Opportunity,
    singular="Opportunity",
    plural="Opportunities",
    policy=_policy(
        name=FieldRule(required=True),
        customer_id=FieldRule(required=True, exists=CrmCustomer),
        opportunity_stage_id=FieldRule(required=True, exists=OpportunityStage),
        amount=FieldRule(min_value=0),
        probability=FieldRule(min_value=0, max_value=100),
        expected_close_date=FieldRule(),
    ),
    search_fields=("name", "amount", "probability"),
    search_relations=(("customer", "name"),),
    list_with=("customer", "stage"),
)

CAMPAIGNS = ResourceConfig(
    name="campaigns",
    url_prefix="/api/crm/campaigns",
    model=Campaign,
    singular="Campaign",
    plural="Campaigns",
    policy=_policy(
        name=FieldRule(required=True),
        type=FieldRule(required=True, choices=("email", "sms", "social")),
        start_date=FieldRule(),
        end_date=FieldRule(),
        budget=FieldRule(min_value=0),
    ),
    search_fields=("name", "type"),
    prepare=date_order("start_date", "end_date"),
)

ACTIVITIES = ResourceConfig(
    name="activities",
    url_prefix="/api/crm/activities",
    model=Activity,
    singular="Activity",
    plural="Activities",
    policy=_policy(
        type=FieldRule(required=True, choices=("call", "meeting", "task", "note")),
        description=FieldRule(),
        scheduled_at=FieldRule(),
    ),
    search_fields=("type", "description"),
)

TICKETS = ResourceConfig(
    name="tickets",
    url_prefix="/api/crm/tickets",
    model=Ticket,
    singular="Ticket",
    plural="Tickets",
    policy=_policy(
        customer_id=FieldRule(required=True, exists=CrmCustomer),
        subject=FieldRule(required=True),
        priority=FieldRule(required=True, choices=("low", "medium", "high")),
        status=FieldRule(required=True, choices=("open", "in_progress", "closed")),
    ),
    search_fields=("subject", "priority", "status"),
    list_with=("customer",),
    filters=("status", "priority"),
)

# ---------------------------------------------------------------------------
# Accounting
# ---------------------------------------------------------------------------

ACCOUNTS = ResourceConfig(
    name="accounts",
    url_prefix="/api/accounting/accounts",
    model=ChartOfAccount,
    singular="Account",
    plural="Accounts",
    policy=_policy(
        code=FieldRule(required=True, unique=True),
        name=FieldRule(required=True),
        type=FieldRule(required=True, choices=accounting_service.ACCOUNT_TYPES),
        sub_type=FieldRule(),
        description=FieldRule(),
        is_active=FieldRule(),
        opening_balance=FieldRule(),
    ),
    search_fields=("name", "code"),
    filters=("type",),
    # Posted lines keep their account; an account with lines is never deleted
    delete_policy="restrict",
)

JOURNALS = ResourceConfig(
    name="journals",
    url_prefix="/api/accounting/journals",
    model=JournalEntry,
    singular="Journal entry",
    plural="Journal entries",
    policy=accounting_service.JOURNAL_POLICY,
    search_fields=("reference", "description"),
    list_with=("items.account",),
    date_range_field="date",
    creator=accounting_service.post_journal,
    updater=accounting_service.update_journal,
    owns=("items",),
)


RESOURCES: tuple[ResourceConfig, ...] = (
    CUSTOMER_GROUPS, CUSTOMERS, CUSTOMER_ADDRESSES, GIFT_CARDS, HOLD_CARTS,
    PAYMENT_GATEWAYS, PAYMENT_METHODS, POS_SESSIONS, POS_TERMINALS,
    RECEIPT_TEMPLATES, RECEIPTS, SALES, SALE_DISCOUNTS, SALE_ITEMS,
    SALE_PAYMENTS, SALE_TAXES, TAX_GROUPS, TAX_RATES, VOUCHERS,
    PRODUCTS,
    DEPARTMENTS, DESIGNATIONS, EMPLOYEES, SHIFTS, ATTENDANCE, LEAVE_TYPES,
    LEAVE_APPLICATIONS, SALARIES, PAYROLLS, EMPLOYEE_DOCUMENTS,
    LEAD_SOURCES, LEAD_STATUSES, LEADS, COMPANIES, CRM_CUSTOMERS, CONTACTS,
    OPPORTUNITY_STAGES, OPPORTUNITIES, CAMPAIGNS, ACTIVITIES, TICKETS,
    ACCOUNTS, JOURNALS,
)


def get_resource(name: str) -> ResourceConfig:
    for config in RESOURCES:
        if config.name == name:
            return config
    raise KeyError(name)
