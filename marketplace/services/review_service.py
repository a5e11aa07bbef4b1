"""
Buyer reviews of completed bookings.

Reviews are what the listing rating is averaged from.  A review copies
service and vendor from its booking, and a booking can be reviewed once.
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from marketplace.core.errors import AlreadyExists, InvalidInput, NotFound
from marketplace.db.models.booking import Booking
from marketplace.db.models.review import Review
from marketplace.db.models.service import Service
from marketplace.schemas.review import ReviewCreate

logger = logging.getLogger(__name__)


class ReviewService:
    def __init__(self, db: Session):
        self.db = db

    def create_review(self, buyer_id: int, payload: ReviewCreate) -> Review:
        # bookings of other buyers are reported as missing
        booking = (
            self.db.query(Booking)
            .filter(Booking.id == payload.booking_id, Booking.buyer_id == buyer_id)
            .first()
        )
        if booking is None:
            raise NotFound("Booking not found")

        if booking.status != "completed":
            raise InvalidInput("Can only review completed bookings")

        existing = self.db.query(Review.id).filter(Review.booking_id == booking.id).first()
        if existing is not None:
            raise AlreadyExists("Review for this booking already exists")

        review = Review(
            service_id=booking.service_id,
            booking_id=booking.id,
            buyer_id=buyer_id,
            vendor_id=booking.vendor_id,
            rating=payload.rating,
            comment=payload.comment,
        )
        self.db.add(review)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise AlreadyExists("Review for this booking already exists") from exc
        self.db.refresh(review)

        logger.info("Review %s (rating %s) added for service %s", review.id, review.rating, review.service_id)
        return review

    def list_for_service(self, service_id: int) -> List[Review]:
        if self.db.get(Service, service_id) is None:
            raise NotFound("Service not found")
        return (
            self.db.query(Review)
            .filter(Review.service_id == service_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .all()
        )
