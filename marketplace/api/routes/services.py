# marketplace/api/routes/services.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from marketplace.core.security import Identity, require_vendor
from marketplace.db.base import get_db
from marketplace.schemas.review import ReviewResponse
from marketplace.schemas.service import ServiceCreate, ServiceCreated, ServiceCreateResponse, ServiceListItem
from marketplace.services.listing_service import DEFAULT_LIMIT, ListingFilters, ListingService
from marketplace.services.review_service import ReviewService

router = APIRouter(prefix="/services", tags=["services"])


# Public listing with filters and pagination

@router.get("", response_model=List[ServiceListItem])
def list_services(
    category: Optional[str] = Query(None, description="Category id; 'all' or omitted disables the filter"),
    search: Optional[str] = Query(None, description="Case-insensitive match on title or description"),
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0.0),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0.0),
    min_rating: Optional[float] = Query(None, alias="minRating", ge=0.0, le=5.0),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    filters = ListingFilters(
        category=category,
        search=search,
        min_price=min_price,
        max_price=max_price,
        min_rating=min_rating,
        limit=limit,
        offset=offset,
    )
    return [ServiceListItem(**item) for item in ListingService(db).search(filters)]


# Vendor creates service

@router.post("", response_model=ServiceCreateResponse, status_code=status.HTTP_201_CREATED)
def create_service(
    payload: ServiceCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_vendor),
):
    service = ListingService(db).create_service(identity.user_id, payload)
    return ServiceCreateResponse(
        message="Service created successfully",
        service=ServiceCreated(
            id=service.id,
            title=service.title,
            description=service.description,
            price=float(service.price_per_hour),
            category=service.category_id,
            photos=service.photos or [],
            vendor_id=service.vendor_id,
        ),
    )


@router.get("/{service_id}/reviews", response_model=List[ReviewResponse])
def list_service_reviews(service_id: int, db: Session = Depends(get_db)):
    return [
        ReviewResponse(
            id=r.id,
            service_id=r.service_id,
            booking_id=r.booking_id,
            buyer_id=r.buyer_id,
            vendor_id=r.vendor_id,
            rating=r.rating,
            comment=r.comment,
            created_at=r.created_at,
        )
        for r in ReviewService(db).list_for_service(service_id)
    ]
