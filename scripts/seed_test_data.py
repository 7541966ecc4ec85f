#!/usr/bin/env python3
"""
Seed the mechanic shop database with realistic test data.

Creates customers, mechanics, cars with owners, service requests and closed
requests using Faker, so every menu report has something to show.

Usage:
    python scripts/seed_test_data.py <dbname> <port> <user> [--customers N]
"""

import argparse
import logging
import random
from datetime import date, timedelta
from decimal import Decimal

from faker import Faker
from sqlalchemy import select

from mechanic_shop.config import settings
from mechanic_shop.models import Car, ClosedRequest, Customer, Mechanic, Ownership, ServiceRequest
from mechanic_shop.services.database import close_db, create_session_factory, init_db

fake = Faker("en_US")
Faker.seed(42)  # For reproducibility
random.seed(42)

MAKES_MODELS = {
    "Toyota": ["Camry", "Corolla", "RAV4", "Tacoma"],
    "Honda": ["Accord", "Civic", "CR-V", "Odyssey"],
    "Ford": ["F-150", "Escape", "Mustang", "Ranger"],
    "Chevrolet": ["Silverado", "Malibu", "Tahoe"],
    "Nissan": ["Altima", "Sentra", "Frontier"],
}

COMPLAINTS = [
    "brake noise",
    "check engine light",
    "oil change",
    "pulls to the left",
    "battery dead",
    "AC blowing warm",
    "transmission slipping",
]


def generate_vin() -> str:
    """Random 16-character VIN (the shop schema's width)."""
    chars = "ABCDEFGHJKLMNPRSTUVWXYZ0123456789"  # pragma: allowlist secret
    return "".join(random.choice(chars) for _ in range(16))


def seed_data(db, customer_count: int) -> None:
    existing = db.execute(select(Customer.id).limit(1)).first()
    if existing:
        print("Test data already exists. Skipping seed.")
        return

    print("Creating mechanics...")
    mechanics = [
        Mechanic(
            first_name=fake.first_name(),
            last_name=fake.last_name(),
            experience=random.randint(0, 30),
        )
        for _ in range(5)
    ]
    db.add_all(mechanics)
    db.flush()

    print(f"Creating {customer_count} customers with cars...")
    next_ownership = next_rid = next_wid = 1
    for _ in range(customer_count):
        customer = Customer(
            first_name=fake.first_name(),
            last_name=fake.last_name(),
            phone=fake.numerify("###-###-####"),
            address=fake.street_address(),
        )
        db.add(customer)
        db.flush()

        for _ in range(random.randint(1, 3)):
            make = random.choice(list(MAKES_MODELS))
            car = Car(
                vin=generate_vin(),
                make=make,
                model=random.choice(MAKES_MODELS[make]),
                year=random.randint(1985, 2024),
            )
            db.add(car)
            db.add(Ownership(id=next_ownership, customer_id=customer.id, car_vin=car.vin))
            next_ownership += 1

            for _ in range(random.randint(0, 3)):
                opened = date.today() - timedelta(days=random.randint(10, 900))
                request = ServiceRequest(
                    id=next_rid,
                    customer_id=customer.id,
                    car_vin=car.vin,
                    request_date=opened,
                    odometer=random.randint(5000, 220000),
                    complaint=random.choice(COMPLAINTS),
                )
                db.add(request)
                next_rid += 1

                if random.random() < 0.7:
                    db.add(
                        ClosedRequest(
                            id=next_wid,
                            request_id=request.id,
                            mechanic_id=random.choice(mechanics).id,
                            closed_date=opened + timedelta(days=random.randint(0, 7)),
                            comment="Done",
                            bill=Decimal(random.randint(30, 900)),
                        )
                    )
                    next_wid += 1

    db.commit()
    print(
        f"Created {customer_count} customers, {next_ownership - 1} cars, "
        f"{next_rid - 1} service requests, {next_wid - 1} closed requests"
    )


def main():
    parser = argparse.ArgumentParser(description="Seed the mechanic shop database")
    parser.add_argument("dbname")
    parser.add_argument("port", type=int)
    parser.add_argument("user")
    parser.add_argument("--customers", type=int, default=50)
    args = parser.parse_args()

    # Suppress SQLAlchemy logging during seed to reduce noise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    engine = init_db(settings.database_url(args.dbname, args.port, args.user))
    try:
        with create_session_factory(engine)() as db:
            seed_data(db, args.customers)
    finally:
        close_db(engine)


if __name__ == "__main__":
    main()
