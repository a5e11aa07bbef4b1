# marketplace/api/routes/categories.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketplace.db.base import get_db
from marketplace.schemas.service import CategoryResponse
from marketplace.services.listing_service import ListingService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=List[CategoryResponse])
def list_categories(db: Session = Depends(get_db)):
    return [
        CategoryResponse(id=c.id, name=c.name, icon=c.icon, description=c.description)
        for c in ListingService(db).list_categories()
    ]
