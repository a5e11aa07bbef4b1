from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from marketplace.core.security import Identity, get_current_identity
from marketplace.db.base import get_db
from marketplace.schemas.user import BecomeVendorRequest, BecomeVendorResponse, ProfileResponse, VendorUserResponse
from marketplace.services.account_service import AccountService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    user = AccountService(db, request.app.state.settings).get_user(identity.user_id)
    return ProfileResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        phone=user.phone,
        bio=user.bio,
        profile_photo=user.profile_photo,
        is_vendor=bool(user.is_vendor),
        location=user.location,
    )


# Any authenticated user can opt in; bio/profilePhoto are kept when omitted

@router.post("/become-vendor", response_model=BecomeVendorResponse)
def become_vendor(
    payload: BecomeVendorRequest,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    user = AccountService(db, request.app.state.settings).become_vendor(identity.user_id, payload)
    return BecomeVendorResponse(
        message="Successfully became a vendor",
        user=VendorUserResponse(
            id=user.id,
            name=user.name,
            bio=user.bio,
            profile_photo=user.profile_photo,
            is_vendor=bool(user.is_vendor),
        ),
    )
