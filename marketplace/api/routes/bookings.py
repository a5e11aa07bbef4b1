from typing import List, Literal

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from marketplace.core.security import Identity, get_current_identity
from marketplace.db.base import get_db
from marketplace.schemas.booking import (
    BookingCreate,
    BookingCreateResponse,
    BookingListItem,
    BookingResponse,
    BookingStatusResponse,
    BookingStatusUpdate,
    BookingSummary,
)
from marketplace.services.booking_service import BUYER_VIEW, BookingService, booking_fields

router = APIRouter(prefix="/bookings", tags=["bookings"])

# Buyer creates booking

@router.post("", response_model=BookingCreateResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    booking = BookingService(db).create_booking(identity.user_id, payload)
    return BookingCreateResponse(
        message="Booking request sent successfully",
        booking=BookingSummary(
            id=booking.id,
            service_id=booking.service_id,
            preferred_date=booking.preferred_date,
            preferred_time=booking.preferred_time,
            message=booking.message,
            status=booking.status,
        ),
    )


# Caller's bookings, as buyer (default) or as vendor

@router.get("", response_model=List[BookingListItem])
def list_bookings(
    view: Literal["buyer", "vendor"] = Query(BUYER_VIEW, alias="type"),
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    return [BookingListItem(**item) for item in BookingService(db).list_bookings(identity.user_id, view)]


# Vendor changes status; other callers get 404

@router.put("/{booking_id}/status", response_model=BookingStatusResponse)
def update_booking_status(
    booking_id: int,
    payload: BookingStatusUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    booking = BookingService(db).update_status(booking_id, identity.user_id, payload)
    return BookingStatusResponse(
        message="Booking status updated successfully",
        booking=BookingResponse(**booking_fields(booking)),
    )
