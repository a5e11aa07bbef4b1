from sqlalchemy import func, select
from sqlalchemy.orm import Session

from marketplace.db.models.booking import Booking
from marketplace.db.models.service import Service


class DashboardService:
    def __init__(self, db: Session):
        self.db = db

    def vendor_stats(self, vendor_id: int) -> dict:
        """Service count, pending bookings and completed earnings for a vendor.

        The three figures are independent scalar subqueries sent in one
        statement; they are not read under a common snapshot.
        """
        service_count = (
            select(func.count(Service.id))
            .where(Service.vendor_id == vendor_id)
            .scalar_subquery()
        )
        pending_bookings = (
            select(func.count(Booking.id))
            .where(Booking.vendor_id == vendor_id, Booking.status == "pending")
            .scalar_subquery()
        )
        total_earnings = (
            select(func.coalesce(func.sum(Booking.total_amount), 0))
            .where(Booking.vendor_id == vendor_id, Booking.status == "completed")
            .scalar_subquery()
        )

        row = self.db.execute(
            select(
                service_count.label("service_count"),
                pending_bookings.label("pending_bookings"),
                total_earnings.label("total_earnings"),
            )
        ).one()

        return {
            "service_count": int(row.service_count or 0),
            "pending_bookings": int(row.pending_bookings or 0),
            "total_earnings": float(row.total_earnings or 0),
        }
