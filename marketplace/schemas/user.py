from typing import Optional

from pydantic import EmailStr, Field

from marketplace.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None


class LoginRequest(CamelModel):
    email: str
    password: str


class BecomeVendorRequest(CamelModel):
    bio: Optional[str] = None
    profile_photo: Optional[str] = None


class UserResponse(CamelModel):
    id: int
    email: EmailStr
    name: str
    phone: Optional[str] = None
    is_vendor: bool
    profile_photo: Optional[str] = None
    bio: Optional[str] = None


class ProfileResponse(UserResponse):
    location: Optional[str] = None


class AuthResponse(CamelModel):
    message: str
    user: UserResponse
    token: str


class VendorUserResponse(CamelModel):
    id: int
    name: str
    bio: Optional[str] = None
    profile_photo: Optional[str] = None
    is_vendor: bool


class BecomeVendorResponse(CamelModel):
    message: str
    user: VendorUserResponse
