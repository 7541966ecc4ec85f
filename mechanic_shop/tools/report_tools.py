"""Report queries over customers, cars and billed requests."""

import logging
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mechanic_shop.models.car import Car
from mechanic_shop.models.closed_request import ClosedRequest
from mechanic_shop.models.customer import Customer
from mechanic_shop.models.owns import Ownership
from mechanic_shop.models.service_request import ServiceRequest

logger = logging.getLogger(__name__)


def _rows(result) -> List[Dict[str, Any]]:
    return [dict(row) for row in result.mappings().all()]


def _customer_totals():
    """SELECT fname, lname, SUM(bill) per customer over closed requests."""
    total = func.sum(ClosedRequest.bill)
    stmt = (
        select(
            Customer.first_name.label("first_name"),
            Customer.last_name.label("last_name"),
            total.label("total"),
        )
        .join(ServiceRequest, ServiceRequest.customer_id == Customer.id)
        .join(ClosedRequest, ClosedRequest.request_id == ServiceRequest.id)
        .group_by(Customer.id, Customer.first_name, Customer.last_name)
    )
    return stmt, total


def customers_with_bill_less_than(db: Session, limit: Decimal = Decimal("100")) -> List[Dict[str, Any]]:
    """
    Customers whose summed closed-request bill is strictly below a limit.

    Customers without any closed request are not listed. No ordering is
    applied.

    Returns:
        [{"first_name": str, "last_name": str, "total": Decimal}]
    """
    try:
        stmt, total = _customer_totals()
        rows = _rows(db.execute(stmt.having(total < limit)))

        logger.info(f"Found {len(rows)} customers with total bill < {limit}")
        return rows

    except SQLAlchemyError as e:
        logger.error(f"Error listing customers with bill < {limit}: {e}", exc_info=True)
        raise


def customers_with_more_than_cars(db: Session, car_count: int = 20) -> List[Dict[str, Any]]:
    """Customers owning more than car_count cars."""
    try:
        owned = func.count(Ownership.id)
        stmt = (
            select(
                Customer.first_name.label("first_name"),
                Customer.last_name.label("last_name"),
                owned.label("car_count"),
            )
            .join(Ownership, Ownership.customer_id == Customer.id)
            .group_by(Customer.id, Customer.first_name, Customer.last_name)
            .having(owned > car_count)
        )
        rows = _rows(db.execute(stmt))

        logger.info(f"Found {len(rows)} customers with more than {car_count} cars")
        return rows

    except SQLAlchemyError as e:
        logger.error(f"Error listing customers with > {car_count} cars: {e}", exc_info=True)
        raise


def cars_before_year_under_mileage(
    db: Session, year: int = 1995, mileage: int = 50000
) -> List[Dict[str, Any]]:
    """
    Distinct cars built before `year` that came in with fewer than
    `mileage` miles on at least one service request.
    """
    try:
        stmt = (
            select(Car.make, Car.model, Car.year)
            .join(ServiceRequest, ServiceRequest.car_vin == Car.vin)
            .where(Car.year < year, ServiceRequest.odometer < mileage)
            .distinct()
        )
        rows = _rows(db.execute(stmt))

        logger.info(f"Found {len(rows)} cars before {year} under {mileage} miles")
        return rows

    except SQLAlchemyError as e:
        logger.error(f"Error listing cars before {year}: {e}", exc_info=True)
        raise


def cars_with_most_services(db: Session, k: int) -> List[Dict[str, Any]]:
    """The k cars with the most service requests, most first."""
    if k < 1:
        raise ValueError(f"k must be a positive integer, got {k}")

    try:
        services = func.count(ServiceRequest.id)
        stmt = (
            select(Car.make, Car.model, services.label("service_count"))
            .join(ServiceRequest, ServiceRequest.car_vin == Car.vin)
            .group_by(Car.vin, Car.make, Car.model)
            .order_by(services.desc())
            .limit(k)
        )
        rows = _rows(db.execute(stmt))

        logger.info(f"Found {len(rows)} cars for top-{k} by services")
        return rows

    except SQLAlchemyError as e:
        logger.error(f"Error listing top {k} serviced cars: {e}", exc_info=True)
        raise


def customers_by_total_bill(db: Session) -> List[Dict[str, Any]]:
    """Every billed customer with their total bill, highest total first."""
    try:
        stmt, total = _customer_totals()
        rows = _rows(db.execute(stmt.order_by(total.desc())))

        logger.info(f"Listed {len(rows)} customers by total bill")
        return rows

    except SQLAlchemyError as e:
        logger.error(f"Error listing customers by total bill: {e}", exc_info=True)
        raise
