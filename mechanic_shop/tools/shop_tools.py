"""Shop tools for customers, mechanics, cars and service requests."""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mechanic_shop.models.car import Car
from mechanic_shop.models.closed_request import ClosedRequest
from mechanic_shop.models.customer import Customer
from mechanic_shop.models.mechanic import Mechanic
from mechanic_shop.models.owns import Ownership
from mechanic_shop.models.service_request import ServiceRequest
from mechanic_shop.services.database import next_identifier

logger = logging.getLogger(__name__)


def _customer_data(customer: Customer) -> Dict[str, Any]:
    return {
        "id": customer.id,
        "first_name": customer.first_name,
        "last_name": customer.last_name,
        "phone": customer.phone,
        "address": customer.address,
    }


def _car_data(car: Car) -> Dict[str, Any]:
    return {"vin": car.vin, "make": car.make, "model": car.model, "year": car.year}


# ============================================================================
# Tool 1: Add Customer
# ============================================================================


def add_customer(
    db: Session,
    first_name: str,
    last_name: str,
    phone: Optional[str] = None,
    address: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a customer.

    Args:
        db: Database session
        first_name: First name (required, <= 32 chars)
        last_name: Last name (required, <= 32 chars)
        phone: Phone number (<= 13 chars)
        address: Street address (<= 256 chars)

    Returns:
        {"success": True, "data": {"customer_id": int, ...}, "message": str}
        or {"success": False, "error": str, "message": str}
    """
    try:
        customer = Customer(
            first_name=first_name, last_name=last_name, phone=phone, address=address
        )
        db.add(customer)
        db.commit()
        db.refresh(customer)

        logger.info(f"Customer {customer.id} created: {customer.first_name} {customer.last_name}")

        data = _customer_data(customer)
        data["customer_id"] = customer.id
        return {
            "success": True,
            "data": data,
            "message": f"Customer {customer.first_name} {customer.last_name} added with id {customer.id}",
        }

    except (SQLAlchemyError, ValueError) as e:
        logger.error(f"Error adding customer {first_name} {last_name}: {e}", exc_info=True)
        db.rollback()
        return {"success": False, "error": str(e), "message": "Error adding customer"}


# ============================================================================
# Tool 2: Add Mechanic
# ============================================================================


def add_mechanic(db: Session, first_name: str, last_name: str, experience: int) -> Dict[str, Any]:
    """Create a mechanic with the given years of experience (0-100)."""
    try:
        mechanic = Mechanic(first_name=first_name, last_name=last_name, experience=experience)
        db.add(mechanic)
        db.commit()
        db.refresh(mechanic)

        logger.info(f"Mechanic {mechanic.id} created: {mechanic.first_name} {mechanic.last_name}")

        return {
            "success": True,
            "data": {
                "mechanic_id": mechanic.id,
                "first_name": mechanic.first_name,
                "last_name": mechanic.last_name,
                "experience": mechanic.experience,
            },
            "message": f"Mechanic {mechanic.first_name} {mechanic.last_name} added with id {mechanic.id}",
        }

    except (SQLAlchemyError, ValueError) as e:
        logger.error(f"Error adding mechanic {first_name} {last_name}: {e}", exc_info=True)
        db.rollback()
        return {"success": False, "error": str(e), "message": "Error adding mechanic"}


# ============================================================================
# Tool 3: Add Car (optionally linked to an owner)
# ============================================================================


def add_car(
    db: Session,
    vin: str,
    make: str,
    model: str,
    year: int,
    owner_id: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Create a car, and link it to a customer when owner_id is given.

    The car and its ownership row are committed together.

    Returns:
        {"success": True, "data": {"vin": str, ..., "ownership_id": int | None}, "message": str}
    """
    try:
        if db.get(Car, vin.strip()) is not None:
            logger.warning(f"Car {vin} already exists")
            return {
                "success": False,
                "error": f"A car with VIN {vin} already exists",
                "message": "Duplicate VIN",
            }

        car = Car(vin=vin, make=make, model=model, year=year)
        db.add(car)

        ownership = None
        if owner_id is not None:
            if db.get(Customer, owner_id) is None:
                db.rollback()
                logger.warning(f"Customer {owner_id} not found")
                return {
                    "success": False,
                    "error": f"Customer ID {owner_id} not found",
                    "message": "Customer not found",
                }
            ownership = Ownership(
                id=next_identifier(db, Ownership.id), customer_id=owner_id, car_vin=car.vin
            )
            db.add(ownership)

        db.commit()

        logger.info(
            f"Car {car.vin} created"
            + (f" and linked to customer {owner_id}" if owner_id is not None else "")
        )

        data = _car_data(car)
        data["ownership_id"] = ownership.id if ownership else None
        return {
            "success": True,
            "data": data,
            "message": f"Car {car.year} {car.make} {car.model} ({car.vin}) added",
        }

    except (SQLAlchemyError, ValueError) as e:
        logger.error(f"Error adding car {vin}: {e}", exc_info=True)
        db.rollback()
        return {"success": False, "error": str(e), "message": "Error adding car"}


def link_car_to_customer(db: Session, customer_id: int, vin: str) -> Dict[str, Any]:
    """Record that a customer owns a car."""
    try:
        if db.get(Customer, customer_id) is None:
            return {
                "success": False,
                "error": f"Customer ID {customer_id} not found",
                "message": "Customer not found",
            }
        if db.get(Car, vin) is None:
            return {
                "success": False,
                "error": f"Car {vin} not found",
                "message": "Car not found",
            }

        ownership = Ownership(
            id=next_identifier(db, Ownership.id), customer_id=customer_id, car_vin=vin
        )
        db.add(ownership)
        db.commit()

        logger.info(f"Ownership {ownership.id}: customer {customer_id} owns {vin}")

        return {
            "success": True,
            "data": {"ownership_id": ownership.id, "customer_id": customer_id, "car_vin": vin},
            "message": f"Car {vin} linked to customer {customer_id}",
        }

    except SQLAlchemyError as e:
        logger.error(f"Error linking car {vin} to customer {customer_id}: {e}", exc_info=True)
        db.rollback()
        return {"success": False, "error": str(e), "message": "Error linking car"}


# ============================================================================
# Tool 4: Lookups
# ============================================================================


def search_customers_by_last_name(db: Session, last_name: str) -> List[Dict[str, Any]]:
    """
    Find every customer with exactly this last name, in id order.

    Args:
        db: Database session
        last_name: Last name as typed (surrounding whitespace ignored)

    Returns:
        List of customer dicts (id, first_name, last_name, phone, address)
    """
    try:
        stmt = (
            select(Customer)
            .where(Customer.last_name == last_name.strip())
            .order_by(Customer.id)
        )
        customers = db.execute(stmt).scalars().all()

        logger.info(f"Found {len(customers)} customers with last name '{last_name}'")
        return [_customer_data(c) for c in customers]

    except SQLAlchemyError as e:
        logger.error(f"Error searching customers by last name '{last_name}': {e}", exc_info=True)
        raise


def get_customer_cars(db: Session, customer_id: int) -> List[Dict[str, Any]]:
    """Cars owned by a customer, in the order they were linked."""
    try:
        stmt = (
            select(Car)
            .join(Ownership, Ownership.car_vin == Car.vin)
            .where(Ownership.customer_id == customer_id)
            .order_by(Ownership.id)
        )
        cars = db.execute(stmt).scalars().unique().all()

        logger.info(f"Found {len(cars)} cars for customer {customer_id}")
        return [_car_data(car) for car in cars]

    except SQLAlchemyError as e:
        logger.error(f"Error listing cars for customer {customer_id}: {e}", exc_info=True)
        raise


def get_service_request(db: Session, request_id: int) -> Optional[Dict[str, Any]]:
    """Service request by rid, or None."""
    try:
        request = db.get(ServiceRequest, request_id)
        if request is None:
            logger.warning(f"Service request {request_id} not found")
            return None

        return {
            "id": request.id,
            "customer_id": request.customer_id,
            "car_vin": request.car_vin,
            "request_date": request.request_date,
            "odometer": request.odometer,
            "complaint": request.complaint,
            "is_closed": request.closed_request is not None,
        }

    except SQLAlchemyError as e:
        logger.error(f"Error getting service request {request_id}: {e}", exc_info=True)
        raise


def get_mechanic(db: Session, mechanic_id: int) -> Optional[Dict[str, Any]]:
    """Mechanic by id, or None."""
    try:
        mechanic = db.get(Mechanic, mechanic_id)
        if mechanic is None:
            logger.warning(f"Mechanic {mechanic_id} not found")
            return None

        return {
            "id": mechanic.id,
            "first_name": mechanic.first_name,
            "last_name": mechanic.last_name,
            "experience": mechanic.experience,
        }

    except SQLAlchemyError as e:
        logger.error(f"Error getting mechanic {mechanic_id}: {e}", exc_info=True)
        raise


# ============================================================================
# Tool 5: Insert Service Request
# ============================================================================


def insert_service_request(
    db: Session,
    customer_id: int,
    car_vin: str,
    request_date: date,
    odometer: int,
    complaint: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Open a service request for a customer's car.

    The rid is max(rid) + 1, read and written without a lock.

    Returns:
        {"success": True, "data": {"request_id": int, ...}, "message": str}
    """
    try:
        if db.get(Customer, customer_id) is None:
            logger.warning(f"Customer {customer_id} not found")
            return {
                "success": False,
                "error": f"Customer ID {customer_id} not found",
                "message": "Customer not found",
            }
        if db.get(Car, car_vin) is None:
            logger.warning(f"Car {car_vin} not found")
            return {
                "success": False,
                "error": f"Car {car_vin} not found",
                "message": "Car not found",
            }

        request = ServiceRequest(
            id=next_identifier(db, ServiceRequest.id),
            customer_id=customer_id,
            car_vin=car_vin,
            request_date=request_date,
            odometer=odometer,
            complaint=complaint,
        )
        db.add(request)
        db.commit()

        logger.info(
            f"Service request {request.id} opened for customer {customer_id}, car {car_vin}"
        )

        return {
            "success": True,
            "data": {
                "request_id": request.id,
                "customer_id": customer_id,
                "car_vin": car_vin,
                "request_date": request_date.isoformat(),
                "odometer": odometer,
                "complaint": complaint,
            },
            "message": f"Service request {request.id} created",
        }

    except (SQLAlchemyError, ValueError) as e:
        logger.error(f"Error inserting service request: {e}", exc_info=True)
        db.rollback()
        return {"success": False, "error": str(e), "message": "Error inserting service request"}


# ============================================================================
# Tool 6: Close Service Request
# ============================================================================


def close_service_request(
    db: Session,
    request_id: int,
    mechanic_id: int,
    closed_date: date,
    bill: Decimal,
    comment: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Close a service request with a bill.

    Refuses when the request or mechanic does not exist, when the request is
    already closed, or when closed_date is earlier than the request date.

    Returns:
        {"success": True, "data": {"closed_request_id": int, ...}, "message": str}
    """
    try:
        request = db.get(ServiceRequest, request_id)
        if request is None:
            logger.warning(f"Service request {request_id} not found")
            return {
                "success": False,
                "error": f"Service request {request_id} not found",
                "message": "Service request not found",
            }

        if request.closed_request is not None:
            logger.warning(f"Service request {request_id} already closed")
            return {
                "success": False,
                "error": f"Service request {request_id} is already closed",
                "message": "Service request already closed",
            }

        mechanic = db.get(Mechanic, mechanic_id)
        if mechanic is None:
            logger.warning(f"Mechanic {mechanic_id} not found")
            return {
                "success": False,
                "error": f"Mechanic ID {mechanic_id} not found",
                "message": "Mechanic not found",
            }

        if closed_date < request.request_date:
            logger.warning(
                f"Closing date {closed_date} precedes request {request_id} date {request.request_date}"
            )
            return {
                "success": False,
                "error": (
                    f"Closing date {closed_date.isoformat()} is earlier than the request date "
                    f"{request.request_date.isoformat()}"
                ),
                "message": "Closing date precedes request date",
            }

        closed = ClosedRequest(
            id=next_identifier(db, ClosedRequest.id),
            service_request=request,
            mechanic=mechanic,
            closed_date=closed_date,
            comment=comment,
            bill=bill,
        )
        db.add(closed)
        db.commit()

        logger.info(f"Service request {request_id} closed by mechanic {mechanic_id} as {closed.id}")

        return {
            "success": True,
            "data": {
                "closed_request_id": closed.id,
                "request_id": request_id,
                "mechanic_id": mechanic_id,
                "closed_date": closed_date.isoformat(),
                "comment": comment,
                "bill": str(bill),
            },
            "message": f"Service request {request_id} closed (record {closed.id})",
        }

    except (SQLAlchemyError, ValueError) as e:
        logger.error(f"Error closing service request {request_id}: {e}", exc_info=True)
        db.rollback()
        return {"success": False, "error": str(e), "message": "Error closing service request"}
