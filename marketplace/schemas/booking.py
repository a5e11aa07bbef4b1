from datetime import date, datetime, time
from typing import Literal, Optional

from pydantic import Field

from marketplace.schemas.common import CamelModel

BookingStatus = Literal["pending", "confirmed", "completed", "cancelled"]


# --- CREATE ---
class BookingCreate(CamelModel):
    service_id: int
    preferred_date: date
    preferred_time: time
    message: Optional[str] = None


# --- UPDATE (owning vendor) ---
class BookingStatusUpdate(CamelModel):
    status: BookingStatus
    total_hours: Optional[float] = Field(default=None, ge=0)
    total_amount: Optional[float] = Field(default=None, ge=0)


# --- RESPONSE ---
class BookingSummary(CamelModel):
    id: int
    service_id: int
    preferred_date: date
    preferred_time: time
    message: Optional[str] = None
    status: str


class BookingCreateResponse(CamelModel):
    message: str
    booking: BookingSummary


class BookingResponse(CamelModel):
    id: int
    service_id: int
    buyer_id: int
    vendor_id: int
    preferred_date: date
    preferred_time: time
    message: Optional[str] = None
    status: str
    total_hours: Optional[float] = None
    total_amount: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BookingStatusResponse(CamelModel):
    message: str
    booking: BookingResponse


# buyer view carries vendor_name, vendor view carries buyer_name
class BookingListItem(BookingResponse):
    service_title: str
    vendor_name: Optional[str] = None
    buyer_name: Optional[str] = None
