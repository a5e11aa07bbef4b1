# marketplace/db/models/category.py
from sqlalchemy import Column, String, Text
from sqlalchemy.orm import Session, relationship

from marketplace.db.base import Base

# (id, name, icon); ids are stable slugs referenced by clients
DEFAULT_CATEGORIES = [
    ("bike-repair", "Bike Repair", "🚲"),
    ("moving", "Moving Help", "📦"),
    ("cleaning", "Cleaning", "🧽"),
    ("gardening", "Gardening", "🌱"),
    ("pet-care", "Pet Care", "🐕"),
    ("tutoring", "Tutoring", "📚"),
    ("music", "Music Lessons", "🎵"),
    ("photography", "Photography", "📸"),
]


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(50), primary_key=True)
    name = Column(String(255), nullable=False)
    icon = Column(String(10), nullable=False)
    description = Column(Text, nullable=True)

    services = relationship("Service", back_populates="category")


def seed_categories(db: Session) -> int:
    """Insert any missing default category; existing rows are left untouched.

    Returns the number of rows added.  The caller commits.
    """
    added = 0
    for category_id, name, icon in DEFAULT_CATEGORIES:
        if db.get(Category, category_id) is None:
            db.add(Category(id=category_id, name=name, icon=icon))
            added += 1
    return added
