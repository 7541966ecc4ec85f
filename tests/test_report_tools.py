"""Tests for the report queries."""

from datetime import date
from decimal import Decimal

import pytest

from mechanic_shop.models import Car, Ownership, ServiceRequest
from mechanic_shop.tools.report_tools import (
    cars_before_year_under_mileage,
    cars_with_most_services,
    customers_by_total_bill,
    customers_with_bill_less_than,
    customers_with_more_than_cars,
)


class TestBillReports:
    """Totals are summed per customer over closed requests."""

    def test_bill_less_than_100_uses_summed_total(self, db_session, billing_data):
        rows = customers_with_bill_less_than(db_session)

        # Ben has two bills of 60 and 50: each under 100, total 110
        assert [(r["first_name"], r["last_name"]) for r in rows] == [("Amy", "Low")]
        assert rows[0]["total"] == Decimal("80")

    def test_bill_limit_is_strict(self, db_session, billing_data):
        rows = customers_with_bill_less_than(db_session, limit=Decimal("80"))
        assert rows == []

    def test_customers_without_closed_requests_are_not_listed(
        self, db_session, test_service_request
    ):
        assert customers_with_bill_less_than(db_session) == []

    def test_descending_total_bill(self, db_session, billing_data):
        rows = customers_by_total_bill(db_session)

        assert [r["first_name"] for r in rows] == ["Cal", "Ben", "Amy"]
        assert [r["total"] for r in rows] == [Decimal("150"), Decimal("110"), Decimal("80")]


class TestCarReports:
    def test_customers_with_more_than_cars(self, db_session, billing_data):
        # Give Amy two more cars
        for index, vin in enumerate(["EXTRA00000000001", "EXTRA00000000002"], start=10):
            db_session.add(Car(vin=vin, make="Kia", model="Rio", year=2010))
            db_session.flush()
            db_session.add(Ownership(id=index, customer_id=billing_data[0].id, car_vin=vin))
        db_session.commit()

        rows = customers_with_more_than_cars(db_session, car_count=2)

        assert rows == [{"first_name": "Amy", "last_name": "Low", "car_count": 3}]
        assert customers_with_more_than_cars(db_session) == []

    def test_cars_before_1995_under_50000_miles(self, db_session, billing_data):
        rows = cars_before_year_under_mileage(db_session)

        # Escort 1990 at 30000 qualifies; Civic 1992 only came in at 70000
        assert rows == [{"make": "Ford", "model": "Escort", "year": 1990}]

    def test_cars_before_year_is_distinct(self, db_session, billing_data):
        car = db_session.get(Car, "LOWCAR0000000001")
        db_session.add(
            ServiceRequest(
                id=10,
                customer_id=billing_data[0].id,
                car_vin=car.vin,
                request_date=date(2024, 5, 1),
                odometer=31000,
            )
        )
        db_session.commit()

        assert len(cars_before_year_under_mileage(db_session)) == 1

    def test_k_cars_with_most_services(self, db_session, billing_data):
        rows = cars_with_most_services(db_session, 1)

        assert rows == [{"make": "Toyota", "model": "Corolla", "service_count": 2}]
        assert len(cars_with_most_services(db_session, 10)) == 3

    def test_k_must_be_positive(self, db_session):
        with pytest.raises(ValueError):
            cars_with_most_services(db_session, 0)
