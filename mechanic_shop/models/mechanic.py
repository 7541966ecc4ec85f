"""Mechanic model."""

from sqlalchemy import CheckConstraint, Column, Integer, String
from sqlalchemy.orm import relationship, validates

from mechanic_shop.models.base import Base
from mechanic_shop.models.customer import NAME_MAX_LENGTH
from mechanic_shop.utils.validators import check_length

MAX_EXPERIENCE_YEARS = 100


class Mechanic(Base):
    """Mechanic (employee) who closes service requests."""

    __tablename__ = "mechanic"
    __table_args__ = (
        CheckConstraint(
            f"experience >= 0 AND experience <= {MAX_EXPERIENCE_YEARS}",
            name="ck_mechanic_experience",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column("fname", String(NAME_MAX_LENGTH), nullable=False)
    last_name = Column("lname", String(NAME_MAX_LENGTH), nullable=False)
    experience = Column(Integer, nullable=False)  # years

    closed_requests = relationship("ClosedRequest", back_populates="mechanic")

    @validates("first_name", "last_name")
    def validate_name(self, key, value):
        label = "First name" if key == "first_name" else "Last name"
        return check_length(label, value, NAME_MAX_LENGTH, required=True)

    @validates("experience")
    def validate_experience(self, key, value):
        """Experience is a whole number of years between 0 and 100."""
        if value is None or value < 0 or value > MAX_EXPERIENCE_YEARS:
            raise ValueError(
                f"Experience must be between 0 and {MAX_EXPERIENCE_YEARS} years, got {value}"
            )
        return value

    def __repr__(self):
        return f"<Mechanic(id={self.id}, name='{self.first_name} {self.last_name}', experience={self.experience})>"
