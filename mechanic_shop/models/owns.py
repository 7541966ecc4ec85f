"""Ownership link between customers and cars."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from mechanic_shop.models.base import Base
from mechanic_shop.models.car import VIN_MAX_LENGTH


class Ownership(Base):
    """Row of the owns table. The id is assigned as max + 1 by the tools."""

    __tablename__ = "owns"

    id = Column("ownership_id", Integer, primary_key=True, autoincrement=False)
    customer_id = Column(Integer, ForeignKey("customer.id"), nullable=False, index=True)
    car_vin = Column(String(VIN_MAX_LENGTH), ForeignKey("car.vin"), nullable=False, index=True)

    customer = relationship("Customer", back_populates="ownerships")
    car = relationship("Car", back_populates="ownerships")

    def __repr__(self):
        return f"<Ownership(id={self.id}, customer_id={self.customer_id}, car_vin='{self.car_vin}')>"
