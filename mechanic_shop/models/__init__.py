"""Database models for the application."""

from mechanic_shop.models.car import Car
from mechanic_shop.models.closed_request import ClosedRequest
from mechanic_shop.models.customer import Customer
from mechanic_shop.models.mechanic import Mechanic
from mechanic_shop.models.owns import Ownership
from mechanic_shop.models.service_request import ServiceRequest

__all__ = ["Customer", "Mechanic", "Car", "Ownership", "ServiceRequest", "ClosedRequest"]
