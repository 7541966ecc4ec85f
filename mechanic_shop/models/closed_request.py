"""Closed request model."""

from decimal import Decimal

from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import relationship, validates

from mechanic_shop.models.base import Base

# Numeric(10, 2)
MAX_BILL = Decimal("99999999.99")


class ClosedRequest(Base):
    """Billing record that closes a service request.

    The closing date must not precede the request date; that rule needs the
    originating request, so it is enforced by close_service_request.
    """

    __tablename__ = "closed_request"
    __table_args__ = (CheckConstraint("bill >= 0", name="ck_closed_request_bill"),)

    # wid is max + 1, assigned by the tools
    id = Column("wid", Integer, primary_key=True, autoincrement=False)
    request_id = Column(
        "rid", Integer, ForeignKey("service_request.rid"), nullable=False, unique=True
    )
    mechanic_id = Column("mid", Integer, ForeignKey("mechanic.id"), nullable=False, index=True)

    closed_date = Column("date", Date, nullable=False)
    comment = Column(Text)
    bill = Column(Numeric(10, 2), nullable=False)

    service_request = relationship("ServiceRequest", back_populates="closed_request")
    mechanic = relationship("Mechanic", back_populates="closed_requests")

    @validates("bill")
    def validate_bill(self, key, value):
        if value is None or value < 0:
            raise ValueError(f"Bill must be a non-negative amount, got {value}")
        return value

    def __repr__(self):
        return (
            f"<ClosedRequest(id={self.id}, request_id={self.request_id}, "
            f"mechanic_id={self.mechanic_id}, bill={self.bill})>"
        )
