"""Customer model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship, validates

from mechanic_shop.models.base import Base
from mechanic_shop.utils.validators import check_length

NAME_MAX_LENGTH = 32
PHONE_MAX_LENGTH = 13
ADDRESS_MAX_LENGTH = 256


class Customer(Base):
    """Customer of the shop.

    Column names follow the course schema (fname, lname, phone, address);
    the Python attributes use the longer names.
    """

    __tablename__ = "customer"

    # Primary Identity
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Personal Information
    first_name = Column("fname", String(NAME_MAX_LENGTH), nullable=False)
    last_name = Column("lname", String(NAME_MAX_LENGTH), nullable=False, index=True)

    # Contact Information
    phone = Column(String(PHONE_MAX_LENGTH))
    address = Column(String(ADDRESS_MAX_LENGTH))

    # Relationships
    ownerships = relationship("Ownership", back_populates="customer")
    service_requests = relationship("ServiceRequest", back_populates="customer")

    @validates("first_name", "last_name")
    def validate_name(self, key, value):
        """Names are required and bounded by the column width."""
        label = "First name" if key == "first_name" else "Last name"
        return check_length(label, value, NAME_MAX_LENGTH, required=True)

    @validates("phone")
    def validate_phone(self, key, value):
        return check_length("Phone number", value, PHONE_MAX_LENGTH)

    @validates("address")
    def validate_address(self, key, value):
        return check_length("Address", value, ADDRESS_MAX_LENGTH)

    def __repr__(self):
        return f"<Customer(id={self.id}, name='{self.first_name} {self.last_name}', phone='{self.phone}')>"
