"""
Pytest fixtures for back-office backend tests.

Provides test database setup, record factories, a Flask test client and an
ApiClient wired to the app through httpx's WSGI transport.
"""

import httpx
import pytest

from backoffice import create_app
from backoffice.client import ApiClient
from backoffice.extensions import db
from backoffice.models import (
    Customer, CustomerGroup, Department, Employee, PaymentMethod, PosTerminal, Product, TaxGroup,
)


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'DELETE_POLICY': 'allow',
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def client(app, db_session):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def api(app, db_session):
    """ApiClient talking to the app in-process (no network)."""
    api = ApiClient("http://testserver", transport=httpx.WSGITransport(app=app))
    yield api
    api.close()


@pytest.fixture(scope='function')
def terminal(db_session):
    """Create the front counter terminal."""
    terminal = PosTerminal(name="Front Counter", location="Main Floor", status="active")
    db_session.add(terminal)
    db_session.commit()
    return terminal


@pytest.fixture(scope='function')
def customer_group(db_session):
    group = CustomerGroup(name="Retail", pricing_type="none", discount_rate=0)
    db_session.add(group)
    db_session.commit()
    return group


@pytest.fixture(scope='function')
def customer(db_session, customer_group):
    customer = Customer(name="Amina Yusuf", phone="08031234567", customer_group_id=customer_group.id)
    db_session.add(customer)
    db_session.commit()
    return customer


@pytest.fixture(scope='function')
def products(db_session):
    """Create two priced products."""
    water = Product(name="Bottled Water", sku="BEV-001", price=1.5)
    juice = Product(name="Orange Juice", sku="BEV-002", price=3.25)
    db_session.add_all([water, juice])
    db_session.commit()
    return water, juice


@pytest.fixture(scope='function')
def cash(db_session):
    method = PaymentMethod(name="Cash", type="cash", status="active")
    db_session.add(method)
    db_session.commit()
    return method


@pytest.fixture(scope='function')
def tax_group(db_session):
    group = TaxGroup(name="Standard", description="Default sales taxes")
    db_session.add(group)
    db_session.commit()
    return group


@pytest.fixture(scope='function')
def employee(db_session):
    """Create one employee in the Sales department."""
    department = Department(name="Sales", status="active")
    db_session.add(department)
    db_session.flush()
    employee = Employee(employee_code="EMP-0001", first_name="Tunde", last_name="Bello", department_id=department.id)
    db_session.add(employee)
    db_session.commit()
    return employee
