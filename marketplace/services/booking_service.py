"""
Booking requests and their status changes.

A booking copies the vendor id from its service when it is created.
From then on that copy is the only thing consulted to decide who may
change the booking's status: the status update filters on it directly,
so a caller who is not that vendor matches no row and sees the booking
as missing.
"""

import logging
from typing import List

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from marketplace.core.errors import NotFound
from marketplace.db.models.booking import Booking
from marketplace.db.models.service import Service
from marketplace.db.models.user import User
from marketplace.schemas.booking import BookingCreate, BookingStatusUpdate

logger = logging.getLogger(__name__)

BUYER_VIEW = "buyer"
VENDOR_VIEW = "vendor"


class BookingService:
    def __init__(self, db: Session):
        self.db = db

    def create_booking(self, buyer_id: int, payload: BookingCreate) -> Booking:
        """Create a ``pending`` booking against ``payload.service_id``.

        The service may be inactive; only its existence is required.
        """
        vendor_id = self.db.query(Service.vendor_id).filter(Service.id == payload.service_id).scalar()
        if vendor_id is None:
            raise NotFound("Service not found")

        booking = Booking(
            service_id=payload.service_id,
            buyer_id=buyer_id,
            vendor_id=vendor_id,
            preferred_date=payload.preferred_date,
            preferred_time=payload.preferred_time,
            message=payload.message,
            status="pending",
        )
        self.db.add(booking)
        try:
            self.db.commit()
        except IntegrityError as exc:
            # buyer row deleted while its token is still valid
            self.db.rollback()
            raise NotFound("User not found") from exc
        self.db.refresh(booking)

        logger.info("Booking %s created by user %s for service %s", booking.id, buyer_id, booking.service_id)
        return booking

    def update_status(self, booking_id: int, vendor_id: int, payload: BookingStatusUpdate) -> Booking:
        """Set status and totals on a booking owned by ``vendor_id``.

        Omitted totals are stored as NULL.  Any status in the allowed set
        may follow any other; no transition order is imposed.
        """
        result = self.db.execute(
            update(Booking)
            .where(Booking.id == booking_id, Booking.vendor_id == vendor_id)
            .values(
                status=payload.status,
                total_hours=payload.total_hours,
                total_amount=payload.total_amount,
                updated_at=func.now(),
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self.db.rollback()
            raise NotFound("Booking not found or unauthorized")
        self.db.commit()

        booking = self.db.get(Booking, booking_id, populate_existing=True)
        logger.info("Booking %s set to %s by vendor %s", booking_id, payload.status, vendor_id)
        return booking

    def list_bookings(self, user_id: int, view: str = BUYER_VIEW) -> List[dict]:
        """Bookings where ``user_id`` is the buyer, or the vendor for ``view="vendor"``.

        Each entry carries the service title and the name of the other party.
        """
        if view == VENDOR_VIEW:
            owner_column, party_column = Booking.vendor_id, Booking.buyer_id
        else:
            owner_column, party_column = Booking.buyer_id, Booking.vendor_id

        rows = self.db.execute(
            select(Booking, Service.title.label("service_title"), User.name.label("party_name"))
            .join(Service, Booking.service_id == Service.id)
            .join(User, party_column == User.id)
            .where(owner_column == user_id)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
        ).all()

        items = []
        for row in rows:
            item = booking_fields(row.Booking)
            item["service_title"] = row.service_title
            if view == VENDOR_VIEW:
                item["buyer_name"] = row.party_name
            else:
                item["vendor_name"] = row.party_name
            items.append(item)
        return items


def booking_fields(booking: Booking) -> dict:
    return {
        "id": booking.id,
        "service_id": booking.service_id,
        "buyer_id": booking.buyer_id,
        "vendor_id": booking.vendor_id,
        "preferred_date": booking.preferred_date,
        "preferred_time": booking.preferred_time,
        "message": booking.message,
        "status": booking.status,
        "total_hours": float(booking.total_hours) if booking.total_hours is not None else None,
        "total_amount": float(booking.total_amount) if booking.total_amount is not None else None,
        "created_at": booking.created_at,
        "updated_at": booking.updated_at,
    }
