# marketplace/db/models/user.py
from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, false, func
from sqlalchemy.orm import relationship

from marketplace.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)

    phone = Column(String(20), nullable=True)
    bio = Column(Text, nullable=True)
    profile_photo = Column(String(255), nullable=True)

    # flipped by become-vendor; gates service creation and the dashboard
    is_vendor = Column(Boolean, nullable=False, default=False, server_default=false())
    location = Column(String(255), nullable=False, default="Leuven", server_default="Leuven")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    services = relationship(
        "Service",
        back_populates="vendor",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
