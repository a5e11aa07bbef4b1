from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text, Time, func
from sqlalchemy.orm import relationship

from marketplace.db.base import Base


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)

    service_id = Column(Integer, ForeignKey("services.id", ondelete="CASCADE"), nullable=False)
    buyer_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # copied from the service when the booking is made; the only key
    # consulted when the vendor later changes the status
    vendor_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    preferred_date = Column(Date, nullable=False)
    preferred_time = Column(Time, nullable=False)
    message = Column(Text, nullable=True)

    status = Column(String(20), nullable=False, default="pending", server_default="pending")

    total_hours = Column(Numeric(5, 2), nullable=True)
    total_amount = Column(Numeric(10, 2), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # relationships
    buyer = relationship("User", foreign_keys=[buyer_id])
    vendor = relationship("User", foreign_keys=[vendor_id])
    service = relationship("Service", foreign_keys=[service_id])
