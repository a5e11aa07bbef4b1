"""
Account operations: registration, login, profile and vendor opt-in.
"""

import logging
from typing import Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from marketplace.core.config import Settings
from marketplace.core.errors import AlreadyExists, InvalidCredential, NotFound
from marketplace.core.security import create_access_token, hash_password, verify_password
from marketplace.db.models.user import User
from marketplace.schemas.user import BecomeVendorRequest, LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)


class AccountService:
    """User accounts backed by the ``users`` table."""

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings

    def issue_token(self, user: User) -> str:
        return create_access_token(
            user.id,
            user.email,
            expires_delta=self.settings.access_token_expire_minutes * 60,
            secret_key=self.settings.secret_key,
        )

    def email_taken(self, email: str) -> bool:
        return self.db.query(User.id).filter(User.email == email).first() is not None

    def register(self, payload: RegisterRequest) -> Tuple[User, str]:
        """Create a user and return it with a fresh token.

        The email pre-check covers the common case; two concurrent
        registrations can still both pass it, in which case the unique
        constraint rejects the second insert and it is reported the same
        way.
        """
        if self.email_taken(payload.email):
            raise AlreadyExists("User already exists")

        user = User(
            email=payload.email,
            password_hash=hash_password(payload.password),
            name=payload.name,
            phone=payload.phone,
            location=self.settings.default_location,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise AlreadyExists("User already exists") from exc
        self.db.refresh(user)

        logger.info("Registered user %s", user.id)
        return user, self.issue_token(user)

    def login(self, payload: LoginRequest) -> Tuple[User, str]:
        user = self.db.query(User).filter(User.email == payload.email).first()
        # same answer for unknown email and wrong password
        if user is None or not verify_password(payload.password, user.password_hash):
            raise InvalidCredential("Invalid credentials")
        return user, self.issue_token(user)

    def get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def become_vendor(self, user_id: int, payload: BecomeVendorRequest) -> User:
        user = self.get_user(user_id)
        user.is_vendor = True
        # omitted fields keep their stored value
        if payload.bio is not None:
            user.bio = payload.bio
        if payload.profile_photo is not None:
            user.profile_photo = payload.profile_photo
        self.db.commit()
        self.db.refresh(user)

        logger.info("User %s became a vendor", user.id)
        return user
