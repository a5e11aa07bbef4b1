# marketplace/schemas/service.py

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from marketplace.schemas.common import CamelModel


# Vendor creates service
class ServiceCreate(CamelModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price_per_hour: float = Field(..., gt=0)
    category_id: str = Field(..., min_length=1)


class ServiceCreated(CamelModel):
    id: int
    title: str
    description: str
    price: float
    category: str
    photos: List[str]
    vendor_id: int


class ServiceCreateResponse(CamelModel):
    message: str
    service: ServiceCreated


# One row of the public listing
class ServiceListItem(CamelModel):
    id: int
    title: str
    description: str
    price: float

    category: str
    category_name: str
    category_icon: str

    vendor_id: int
    vendor_name: str
    vendor_photo: Optional[str] = None
    vendor_bio: Optional[str] = None

    photos: List[str]
    rating: float
    review_count: int
    location: Optional[str] = None
    created_at: Optional[datetime] = None


class CategoryResponse(CamelModel):
    id: str
    name: str
    icon: str
    description: Optional[str] = None
