"""Car model."""

from sqlalchemy import CheckConstraint, Column, Integer, String
from sqlalchemy.orm import relationship, validates

from mechanic_shop.models.base import Base
from mechanic_shop.utils.validators import check_length

VIN_MAX_LENGTH = 16
MAKE_MAX_LENGTH = 32
MODEL_MAX_LENGTH = 32
MIN_MODEL_YEAR = 1970


class Car(Base):
    """Car identified by its VIN.

    The VIN is assigned outside the shop, so it is typed in rather than
    generated. The shop schema allows up to 16 characters.
    """

    __tablename__ = "car"
    __table_args__ = (CheckConstraint(f"year >= {MIN_MODEL_YEAR}", name="ck_car_year"),)

    vin = Column(String(VIN_MAX_LENGTH), primary_key=True)
    make = Column(String(MAKE_MAX_LENGTH), nullable=False)
    model = Column(String(MODEL_MAX_LENGTH), nullable=False)
    year = Column(Integer, nullable=False)

    ownerships = relationship("Ownership", back_populates="car")
    service_requests = relationship("ServiceRequest", back_populates="car")

    @validates("vin")
    def validate_vin(self, key, value):
        return check_length("VIN", value, VIN_MAX_LENGTH, required=True)

    @validates("make", "model")
    def validate_make_model(self, key, value):
        max_length = MAKE_MAX_LENGTH if key == "make" else MODEL_MAX_LENGTH
        return check_length(key.capitalize(), value, max_length, required=True)

    @validates("year")
    def validate_year(self, key, value):
        if value is None or value < MIN_MODEL_YEAR:
            raise ValueError(f"Year must be {MIN_MODEL_YEAR} or later, got {value}")
        return value

    def __repr__(self):
        return f"<Car(vin='{self.vin}', {self.year} {self.make} {self.model})>"
