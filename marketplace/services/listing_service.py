"""
Public service listings and vendor-side service creation.

``build_listing_query`` is the heart of the search endpoint.  It returns
a single SQLAlchemy ``Select`` joining active services to their vendor,
their category and every review, with the average rating and review
count computed per service.  Filters are added only when present, so an
omitted filter never turns into a comparison against NULL, and every
value travels as a bound parameter.

The rating filter is a ``HAVING`` clause: it compares against the
aggregate, which only exists after grouping.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session

from marketplace.core.errors import NotFound
from marketplace.db.models.category import Category
from marketplace.db.models.review import Review
from marketplace.db.models.service import PHOTO_PLACEHOLDER, Service
from marketplace.db.models.user import User
from marketplace.schemas.service import ServiceCreate

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
ALL_CATEGORIES = "all"


@dataclass
class ListingFilters:
    category: Optional[str] = None
    search: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    min_rating: Optional[float] = None
    limit: int = DEFAULT_LIMIT
    offset: int = 0


def build_listing_query(filters: ListingFilters) -> Select:
    average_rating = func.coalesce(func.avg(Review.rating), 0)

    stmt = (
        select(
            Service,
            User.name.label("vendor_name"),
            User.profile_photo.label("vendor_photo"),
            User.bio.label("vendor_bio"),
            Category.name.label("category_name"),
            Category.icon.label("category_icon"),
            average_rating.label("average_rating"),
            func.count(Review.id).label("review_count"),
        )
        .join(User, Service.vendor_id == User.id)
        .join(Category, Service.category_id == Category.id)
        .outerjoin(Review, Review.service_id == Service.id)
        .where(Service.is_active.is_(True))
    )

    if filters.category and filters.category != ALL_CATEGORIES:
        stmt = stmt.where(Service.category_id == filters.category)

    if filters.search:
        # % and _ in the search text match literally
        stmt = stmt.where(
            or_(
                Service.title.icontains(filters.search, autoescape=True),
                Service.description.icontains(filters.search, autoescape=True),
            )
        )

    if filters.min_price is not None:
        stmt = stmt.where(Service.price_per_hour >= filters.min_price)

    if filters.max_price is not None:
        stmt = stmt.where(Service.price_per_hour <= filters.max_price)

    stmt = stmt.group_by(Service.id, User.id, Category.id)

    if filters.min_rating is not None:
        stmt = stmt.having(average_rating >= filters.min_rating)

    return (
        stmt.order_by(Service.created_at.desc(), Service.id.desc())
        .limit(filters.limit)
        .offset(filters.offset)
    )


class ListingService:
    def __init__(self, db: Session):
        self.db = db

    def search(self, filters: ListingFilters) -> List[dict]:
        rows = self.db.execute(build_listing_query(filters)).all()
        return [self._format_row(row) for row in rows]

    @staticmethod
    def _format_row(row) -> dict:
        svc = row.Service
        return {
            "id": svc.id,
            "title": svc.title,
            "description": svc.description,
            "price": float(svc.price_per_hour),
            "category": svc.category_id,
            "category_name": row.category_name,
            "category_icon": row.category_icon,
            "vendor_id": svc.vendor_id,
            "vendor_name": row.vendor_name,
            "vendor_photo": row.vendor_photo,
            "vendor_bio": row.vendor_bio,
            "photos": svc.photos or [PHOTO_PLACEHOLDER],
            "rating": float(row.average_rating or 0),
            "review_count": int(row.review_count or 0),
            "location": svc.location,
            "created_at": svc.created_at,
        }

    def create_service(self, vendor_id: int, payload: ServiceCreate) -> Service:
        if self.db.get(Category, payload.category_id) is None:
            raise NotFound("Category not found")

        vendor = self.db.get(User, vendor_id)
        if vendor is None:
            raise NotFound("User not found")
        service = Service(
            vendor_id=vendor_id,
            category_id=payload.category_id,
            title=payload.title,
            description=payload.description,
            price_per_hour=payload.price_per_hour,
            location=vendor.location,
            photos=[PHOTO_PLACEHOLDER],
        )
        self.db.add(service)
        self.db.commit()
        self.db.refresh(service)

        logger.info("Vendor %s created service %s in %s", vendor_id, service.id, service.category_id)
        return service

    def list_categories(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name).all()
