from .base import ResourceMixin
from .catalog import Product
from .pos import (
    CustomerGroup, Customer, CustomerAddress, GiftCard, PosTerminal, HoldCart,
    PaymentGateway, PaymentMethod, PosSession, ReceiptTemplate, TaxGroup, TaxRate,
    Voucher, Sale, SaleItem, SalePayment, SaleTax, SaleDiscount, Receipt,
)
from .hrm import (
    Department, Designation, Employee, Shift, Attendance, LeaveType, LeaveApplication,
    Salary, Payroll, EmployeeDocument,
)
from .crm import (
    LeadSource, LeadStatus, Lead, Company, CrmCustomer, Contact, OpportunityStage,
    Opportunity, Campaign, Activity, Ticket,
)
from .accounting import ChartOfAccount, JournalEntry, JournalItem

__all__ = [
    'ResourceMixin',
    'Product',
    'CustomerGroup', 'Customer', 'CustomerAddress', 'GiftCard', 'PosTerminal', 'HoldCart',
    'PaymentGateway', 'PaymentMethod', 'PosSession', 'ReceiptTemplate', 'TaxGroup', 'TaxRate',
    'Voucher', 'Sale', 'SaleItem', 'SalePayment', 'SaleTax', 'SaleDiscount', 'Receipt',
    'Department', 'Designation', 'Employee', 'Shift', 'Attendance', 'LeaveType', 'LeaveApplication',
    'Salary', 'Payroll', 'EmployeeDocument',
    'LeadSource', 'LeadStatus', 'Lead', 'Company', 'CrmCustomer', 'Contact', 'OpportunityStage',
    'Opportunity', 'Campaign', 'Activity', 'Ticket',
    'ChartOfAccount', 'JournalEntry', 'JournalItem',
]
