# marketplace/schemas/review.py
from datetime import datetime
from typing import Optional

from pydantic import Field, conint

from marketplace.schemas.common import CamelModel


class ReviewCreate(CamelModel):
    booking_id: int
    rating: conint(ge=1, le=5) = Field(..., description="Rating 1-5")
    comment: Optional[str] = None


class ReviewResponse(CamelModel):
    id: int
    service_id: int
    booking_id: int
    buyer_id: int
    vendor_id: int
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
