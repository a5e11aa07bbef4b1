"""
Password hashing, session tokens and the request authorization gates.

Tokens are compact JWTs (``header.payload.signature``, base64url, no
padding) signed with HMAC-SHA256 over the application secret.  The
payload carries ``userId`` and ``email`` plus ``iat``/``exp`` UNIX
timestamps.  Passwords are stored as ``<salt hex>$<PBKDF2-SHA256 hex>``.

Two FastAPI dependencies sit on top of these primitives:

* ``get_current_identity`` verifies the bearer token and returns an
  ``Identity``; it never touches the database.
* ``require_vendor`` additionally loads the user row and insists on the
  vendor flag.
"""

import base64
import hashlib
import hmac
import json
import logging
import os
import time
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.orm import Session

from marketplace.core.config import settings
from marketplace.core.errors import Forbidden, InvalidCredential, NotFound, Unauthenticated
from marketplace.db.base import get_db
from marketplace.db.models.user import User

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, as embedded in the session token."""

    user_id: int
    email: str


def _b64_url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(
    user_id: int,
    email: str,
    expires_delta: Optional[int] = None,
    secret_key: Optional[str] = None,
) -> str:
    """Issue a signed token for ``user_id``/``email``.

    ``expires_delta`` is the lifetime in seconds and defaults to
    ``settings.access_token_expire_minutes`` (seven days).
    """
    now = int(time.time())
    lifetime = expires_delta if expires_delta is not None else settings.access_token_expire_minutes * 60
    payload = {"userId": user_id, "email": email, "iat": now, "exp": now + lifetime}
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature = _sign(signing_input, secret_key or settings.secret_key)
    return f"{header_b64}.{payload_b64}.{_b64_url_encode(signature)}"


def decode_access_token(token: str, secret_key: Optional[str] = None) -> Identity:
    """Verify ``token`` and return the identity it carries.

    Raises ``InvalidCredential`` when the token is malformed, its
    signature does not match, or it has expired.
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise InvalidCredential("Invalid token")
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    expected_sig = _sign(signing_input, secret_key or settings.secret_key)
    try:
        actual_sig = _b64_url_decode(signature_b64)
        payload = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError) as exc:
        raise InvalidCredential("Invalid token") from exc

    if not hmac.compare_digest(expected_sig, actual_sig):
        raise InvalidCredential("Invalid token")
    if not isinstance(payload, dict):
        raise InvalidCredential("Invalid token")

    exp = payload.get("exp")
    if not isinstance(exp, (int, float)) or exp < time.time():
        raise InvalidCredential("Token expired")

    user_id = payload.get("userId")
    email = payload.get("email")
    if not isinstance(user_id, int) or not isinstance(email, str):
        raise InvalidCredential("Invalid token")
    return Identity(user_id=user_id, email=email)


def hash_password(password: str) -> str:
    """Hash ``password`` with PBKDF2-HMAC-SHA256 and a random 16-byte salt."""
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


bearer_scheme = HTTPBearer(auto_error=False)


def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
    # HTTPBearer yields None for a missing header and for non-Bearer schemes
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()
    try:
        return decode_access_token(credentials.credentials, request.app.state.settings.secret_key)
    except InvalidCredential as exc:
        logger.debug("Rejected bearer token: %s", exc.message)
        raise


def require_vendor(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> Identity:
    is_vendor = db.execute(
        select(User.is_vendor).where(User.id == identity.user_id)
    ).scalar_one_or_none()
    if is_vendor is None:
        raise NotFound("User not found")
    if not is_vendor:
        logger.warning("User %s attempted a vendor-only action", identity.user_id)
        raise Forbidden("Only vendors can perform this action")
    return identity
