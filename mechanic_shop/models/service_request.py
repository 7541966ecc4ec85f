"""Service request model."""

from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship, validates

from mechanic_shop.models.base import Base
from mechanic_shop.models.car import VIN_MAX_LENGTH


class ServiceRequest(Base):
    """Open work order for a customer's car.

    Stores:
    - Who brought the car in and which car it is
    - The date the request was opened
    - The odometer reading at drop-off
    - The customer's complaint
    """

    __tablename__ = "service_request"
    __table_args__ = (CheckConstraint("odometer >= 0", name="ck_service_request_odometer"),)

    # rid is max + 1, assigned by the tools
    id = Column("rid", Integer, primary_key=True, autoincrement=False)
    customer_id = Column(Integer, ForeignKey("customer.id"), nullable=False, index=True)
    car_vin = Column(String(VIN_MAX_LENGTH), ForeignKey("car.vin"), nullable=False, index=True)

    request_date = Column("date", Date, nullable=False)
    odometer = Column(Integer, nullable=False)
    complaint = Column("complain", Text)

    customer = relationship("Customer", back_populates="service_requests")
    car = relationship("Car", back_populates="service_requests")
    closed_request = relationship("ClosedRequest", back_populates="service_request", uselist=False)

    @validates("odometer")
    def validate_odometer(self, key, value):
        if value is None or value < 0:
            raise ValueError(f"Odometer reading must be a non-negative number, got {value}")
        return value

    def __repr__(self):
        return (
            f"<ServiceRequest(id={self.id}, customer_id={self.customer_id}, "
            f"car_vin='{self.car_vin}', date='{self.request_date}')>"
        )
