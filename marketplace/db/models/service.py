# marketplace/db/models/service.py

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text, func, true
from sqlalchemy.orm import relationship

from marketplace.db.base import Base

PHOTO_PLACEHOLDER = "📋"


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign keys
    vendor_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(String(50), ForeignKey("categories.id"), nullable=False)

    # Basic details
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)

    # Pricing
    price_per_hour = Column(Numeric(10, 2), nullable=False)

    location = Column(String(255), nullable=False, default="Leuven", server_default="Leuven")
    photos = Column(JSON, nullable=True)

    # Status
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    vendor = relationship("User", back_populates="services")
    category = relationship("Category", back_populates="services")
