# marketplace/api/routes/review.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from marketplace.core.security import Identity, get_current_identity
from marketplace.db.base import get_db
from marketplace.schemas.review import ReviewCreate, ReviewResponse
from marketplace.services.review_service import ReviewService

router = APIRouter(prefix="/reviews", tags=["reviews"])

# Create review (buyer of a completed booking)
@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def create_review(
    review_in: ReviewCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    review = ReviewService(db).create_review(identity.user_id, review_in)
    return ReviewResponse(
        id=review.id,
        service_id=review.service_id,
        booking_id=review.booking_id,
        buyer_id=review.buyer_id,
        vendor_id=review.vendor_id,
        rating=review.rating,
        comment=review.comment,
        created_at=review.created_at,
    )
