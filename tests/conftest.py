"""
Pytest configuration and shared fixtures for the salon_app tests.

Tests run against in-memory SQLite unless tests/.env.test points
MYSQL_TEST_URL at a disposable MySQL database.
"""

import os
from datetime import datetime, time
from decimal import Decimal

import pytest
from flask import Flask

os.environ["TESTING"] = "True"
os.environ.setdefault("FLASK_ENV", "testing")

from main import create_app  # noqa: E402
from salon_app.config import is_production_database  # noqa: E402
from salon_app.extensions import db as database  # noqa: E402
from salon_app.models import (  # noqa: E402
    Addresses,
    Appointments,
    Base,
    Business,
    Customers,
    Employee,
    Products,
    ServiceCategories,
    Services,
    Users,
)
from salon_app.schema import seed_roles  # noqa: E402


@pytest.fixture(scope="session")
def app():
    """Create and configure a test app instance."""
    app = create_app()
    app.config.update(
        {
            "TESTING": True,
            "SECRET_KEY": "test-secret-key-for-testing-only",
        }
    )

    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
    if is_production_database(db_uri):
        pytest.exit(f"Refusing to run tests against {db_uri}", returncode=1)

    yield app


@pytest.fixture
def db(app: Flask):
    """Fresh tables and seeded roles for every test."""
    with app.app_context():
        database.session.remove()
        Base.metadata.drop_all(bind=database.engine)
        Base.metadata.create_all(bind=database.engine)
        with database.engine.begin() as conn:
            seed_roles(conn)

        yield database

        database.session.remove()
        Base.metadata.drop_all(bind=database.engine)


@pytest.fixture
def db_session(db):
    yield db.session
    db.session.rollback()


@pytest.fixture
def client(app, db):
    return app.test_client()


@pytest.fixture
def runner(app, db):
    return app.test_cli_runner()


def add(session, row):
    session.add(row)
    session.commit()
    return row


@pytest.fixture
def sample_user(db_session):
    return add(db_session, Users(first_name="Test", last_name="Owner", phone="5551234567"))


@pytest.fixture
def sample_customer(db_session):
    user = add(db_session, Users(first_name="Test", last_name="Customer"))
    return add(db_session, Customers(uid=user.uid, gender="other"))


@pytest.fixture
def sample_address(db_session):
    return add(
        db_session,
        Addresses(
            street="123 Test St",
            city="Newark",
            state="NJ",
            country="USA",
            zip_code="07102",
        ),
    )


@pytest.fixture
def sample_business(db_session, sample_user, sample_address):
    return add(
        db_session,
        Business(
            uid=sample_user.uid,
            name="Test Salon",
            aid=sample_address.aid,
            year_est=2015,
            deposit_rate=Decimal("0.250"),
            status=True,
        ),
    )


@pytest.fixture
def sample_employee(db_session, sample_business):
    user = add(db_session, Users(first_name="Test", last_name="Stylist"))
    return add(
        db_session,
        Employee(uid=user.uid, bid=sample_business.bid, bio="Cuts", approved=True),
    )


@pytest.fixture
def sample_category(db_session):
    return add(db_session, ServiceCategories(name="Hair"))


@pytest.fixture
def sample_service(db_session, sample_business, sample_category):
    return add(
        db_session,
        Services(
            bid=sample_business.bid,
            name="Haircut",
            cat_id=sample_category.cat_id,
            price=Decimal("50.00"),
            duration=60,
        ),
    )


@pytest.fixture
def sample_product(db_session, sample_business):
    return add(
        db_session,
        Products(
            name="Shampoo",
            bid=sample_business.bid,
            price=Decimal("12.50"),
            stock=10,
        ),
    )


@pytest.fixture
def sample_appointment(
    db_session, sample_customer, sample_employee, sample_business, sample_service
):
    return add(
        db_session,
        Appointments(
            cid=sample_customer.cid,
            eid=sample_employee.eid,
            bid=sample_business.bid,
            sid=sample_service.sid,
            start_time=datetime(2026, 5, 1, 10, 0),
            expected_end_time=datetime(2026, 5, 1, 11, 0),
        ),
    )


@pytest.fixture
def opening_hours():
    return {"open_time": time(9, 0), "close_time": time(17, 0)}
