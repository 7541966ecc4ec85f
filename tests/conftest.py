"""Pytest configuration and fixtures."""

from datetime import date
from decimal import Decimal
from io import StringIO
from typing import Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from mechanic_shop.cli.console import Console
from mechanic_shop.models import Car, ClosedRequest, Customer, Mechanic, Ownership, ServiceRequest
from mechanic_shop.models.base import Base
from mechanic_shop.services.database import create_session_factory

# In-memory SQLite shared across the one connection StaticPool hands out
TEST_DATABASE_URL = "sqlite://"


class ScriptedConsole(Console):
    """Console that replays canned answers and captures what was printed."""

    def __init__(self, *answers: str):
        super().__init__(
            stdin=StringIO("".join(f"{answer}\n" for answer in answers)),
            stdout=StringIO(),
            stderr=StringIO(),
        )

    @property
    def output(self) -> str:
        return self.stdout.getvalue()

    @property
    def errors(self) -> str:
        return self.stderr.getvalue()


@pytest.fixture(scope="function")
def db_engine():
    """Create test database engine."""
    engine = create_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Create test database session."""
    with create_session_factory(db_engine)() as session:
        yield session


@pytest.fixture
def console_factory():
    """Build a ScriptedConsole from answers."""
    return ScriptedConsole


@pytest.fixture
def test_customer(db_session: Session) -> Customer:
    """Create test customer."""
    customer = Customer(
        first_name="John", last_name="Smith", phone="555-0100", address="1 Elm St"
    )
    db_session.add(customer)
    db_session.commit()
    db_session.refresh(customer)
    return customer


@pytest.fixture
def test_car(db_session: Session, test_customer: Customer) -> Car:
    """Create test car owned by test_customer."""
    car = Car(vin="1HGBH41JXMN10918", make="Honda", model="Accord", year=2011)
    db_session.add(car)
    db_session.add(Ownership(id=1, customer_id=test_customer.id, car_vin=car.vin))
    db_session.commit()
    return car


@pytest.fixture
def test_mechanic(db_session: Session) -> Mechanic:
    """Create test mechanic."""
    mechanic = Mechanic(first_name="Lisa", last_name="Thompson", experience=12)
    db_session.add(mechanic)
    db_session.commit()
    db_session.refresh(mechanic)
    return mechanic


@pytest.fixture
def test_service_request(
    db_session: Session, test_customer: Customer, test_car: Car
) -> ServiceRequest:
    """Create open service request dated 2024-01-15."""
    request = ServiceRequest(
        id=1,
        customer_id=test_customer.id,
        car_vin=test_car.vin,
        request_date=date(2024, 1, 15),
        odometer=42000,
        complaint="brake noise",
    )
    db_session.add(request)
    db_session.commit()
    return request


@pytest.fixture
def billing_data(db_session: Session, test_mechanic: Mechanic):
    """Three customers with closed requests totalling 80, 110 and 150.

    Returns the customers in that order.
    """
    customers = [
        Customer(first_name="Amy", last_name="Low", phone="555-0001", address="1 A St"),
        Customer(first_name="Ben", last_name="Mid", phone="555-0002", address="2 B St"),
        Customer(first_name="Cal", last_name="High", phone="555-0003", address="3 C St"),
    ]
    db_session.add_all(customers)
    db_session.flush()

    cars = [
        Car(vin="LOWCAR0000000001", make="Ford", model="Escort", year=1990),
        Car(vin="MIDCAR0000000002", make="Toyota", model="Corolla", year=1999),
        Car(vin="HIGCAR0000000003", make="Honda", model="Civic", year=1992),
    ]
    db_session.add_all(cars)
    db_session.flush()

    for index, (customer, car) in enumerate(zip(customers, cars), start=1):
        db_session.add(Ownership(id=index, customer_id=customer.id, car_vin=car.vin))

    # (rid, customer, car, odometer, bill)
    bills = [
        (1, customers[0], cars[0], 30000, Decimal("80")),
        (2, customers[1], cars[1], 60000, Decimal("60")),
        (3, customers[1], cars[1], 65000, Decimal("50")),
        (4, customers[2], cars[2], 70000, Decimal("150")),
    ]
    for rid, customer, car, odometer, bill in bills:
        db_session.add(
            ServiceRequest(
                id=rid,
                customer_id=customer.id,
                car_vin=car.vin,
                request_date=date(2024, 3, rid),
                odometer=odometer,
                complaint="service",
            )
        )
        db_session.flush()
        db_session.add(
            ClosedRequest(
                id=rid,
                request_id=rid,
                mechanic_id=test_mechanic.id,
                closed_date=date(2024, 3, rid + 1),
                comment="done",
                bill=bill,
            )
        )

    db_session.commit()
    return customers
