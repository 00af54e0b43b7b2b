from __future__ import annotations

from ..extensions import db
from .base import ResourceMixin
from .pos import Money


class Department(ResourceMixin, db.Model):
    __tablename__ = "departments"

    name = db.Column(db.String(255), nullable=False)
    status = db.Column(db.String(16), nullable=False, default="active")  # active, inactive


class Designation(ResourceMixin, db.Model):
    __tablename__ = "designations"

    name = db.Column(db.String(255), nullable=False)
    department_id = db.Column(db.Integer, db.ForeignKey("departments.id"), nullable=False, index=True)

    department = db.relationship(
        "Department",
        backref=db.backref("designations", lazy=True, passive_deletes="all"),
    )


class Employee(ResourceMixin, db.Model):
    __tablename__ = "employees"

    employee_code = db.Column(db.String(50), nullable=False, unique=True)
    first_name = db.Column(db.String(255), nullable=False)
    last_name = db.Column(db.String(255), nullable=True)
    gender = db.Column(db.String(16), nullable=True)  # male, female, other
    date_of_birth = db.Column(db.Date, nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    email = db.Column(db.String(255), nullable=True)
    department_id = db.Column(db.Integer, db.ForeignKey("departments.id"), nullable=True, index=True)
    designation_id = db.Column(db.Integer, db.ForeignKey("designations.id"), nullable=True, index=True)
    join_date = db.Column(db.Date, nullable=True)
    job_type = db.Column(db.String(16), nullable=True)  # permanent, contract, intern
    salary_type = db.Column(db.String(16), nullable=True)  # monthly, hourly
    status = db.Column(db.String(16), nullable=False, default="active")

    department = db.relationship(
        "Department",
        backref=db.backref("employees", lazy=True, passive_deletes="all"),
    )
    designation = db.relationship(
        "Designation",
        backref=db.backref("employees", lazy=True, passive_deletes="all"),
    )


class Shift(ResourceMixin, db.Model):
    __tablename__ = "shifts"

    name = db.Column(db.String(255), nullable=False)
    start_time = db.Column(db.String(8), nullable=False)  # HH:MM[:SS]
    end_time = db.Column(db.String(8), nullable=False)
    grace_time = db.Column(db.Integer, nullable=True)  # minutes


class Attendance(ResourceMixin, db.Model):
    __tablename__ = "attendance"

    employee_id = db.Column(db.Integer, db.ForeignKey("employees.id"), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, index=True)
    clock_in = db.Column(db.String(8), nullable=True)  # HH:MM[:SS]
    clock_out = db.Column(db.String(8), nullable=True)
    late = db.Column(db.Boolean, nullable=False, default=False)
    early_leave = db.Column(db.Boolean, nullable=False, default=False)
    working_hours = db.Column(db.Numeric(5, 2, asdecimal=False), nullable=True)

    employee = db.relationship(
        "Employee",
        backref=db.backref("attendance", lazy=True, passive_deletes="all"),
    )


class LeaveType(ResourceMixin, db.Model):
    __tablename__ = "leave_types"

    name = db.Column(db.String(255), nullable=False)
    max_days = db.Column(db.Integer, nullable=False, default=0)
    status = db.Column(db.String(16), nullable=False, default="active")  # active, inactive


class LeaveApplication(ResourceMixin, db.Model):
    __tablename__ = "leave_applications"

    employee_id = db.Column(db.Integer, db.ForeignKey("employees.id"), nullable=False, index=True)
    leave_type_id = db.Column(db.Integer, db.ForeignKey("leave_types.id"), nullable=False, index=True)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    days = db.Column(db.Integer, nullable=False, default=1)  # inclusive of both ends
    reason = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(16), nullable=False, default="pending")  # pending, approved, rejected

    employee = db.relationship(
        "Employee",
        backref=db.backref("leave_applications", lazy=True, passive_deletes="all"),
    )
    leave_type = db.relationship(
        "LeaveType",
        backref=db.backref("leave_applications", lazy=True, passive_deletes="all"),
    )


class Salary(ResourceMixin, db.Model):
    __tablename__ = "salaries"

    employee_id = db.Column(db.Integer, db.ForeignKey("employees.id"), nullable=False, index=True)
    basic_salary = db.Column(Money, nullable=False, default=0)
    allowances = db.Column(db.Text, nullable=True)
    deductions = db.Column(db.Text, nullable=True)
    effective_from = db.Column(db.Date, nullable=False)

    employee = db.relationship(
        "Employee",
        backref=db.backref("salaries", lazy=True, passive_deletes="all"),
    )


class Payroll(ResourceMixin, db.Model):
    __tablename__ = "payroll"

    employee_id = db.Column(db.Integer, db.ForeignKey("employees.id"), nullable=False, index=True)
    month = db.Column(db.Integer, nullable=False)  # 1-12
    year = db.Column(db.Integer, nullable=False)
    basic_salary = db.Column(Money, nullable=False, default=0)
    total_allowance = db.Column(Money, nullable=False, default=0)
    total_deduction = db.Column(Money, nullable=False, default=0)
    net_salary = db.Column(Money, nullable=False, default=0)
    status = db.Column(db.String(16), nullable=False, default="pending")  # pending, paid, rejected

    employee = db.relationship(
        "Employee",
        backref=db.backref("payrolls", lazy=True, passive_deletes="all"),
    )


class EmployeeDocument(ResourceMixin, db.Model):
    """A document on file for an employee; document_file is a stored path, not the upload itself."""
    __tablename__ = "employee_documents"

    employee_id = db.Column(db.Integer, db.ForeignKey("employees.id"), nullable=False, index=True)
    document_type = db.Column(db.String(255), nullable=False)
    document_file = db.Column(db.String(255), nullable=False)

    employee = db.relationship(
        "Employee",
        backref=db.backref("documents", lazy=True, passive_deletes="all"),
    )
