"""
Error kinds raised by the service layer.

Each class carries the HTTP status it maps to.  Handlers registered in
``marketplace.main`` turn them into ``{"error": <message>}`` responses,
so services never build HTTP responses themselves.
"""

from typing import Optional


class MarketplaceError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, headers: Optional[dict] = None):
        self.message = message or self.default_message
        self.headers = headers
        super().__init__(self.message)


class Unauthenticated(MarketplaceError):
    status_code = 401
    default_message = "Access token required"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class InvalidCredential(MarketplaceError):
    status_code = 401
    default_message = "Invalid token"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(MarketplaceError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(MarketplaceError):
    status_code = 404
    default_message = "Not found"


class AlreadyExists(MarketplaceError):
    status_code = 400
    default_message = "Resource already exists"


class InvalidInput(MarketplaceError):
    status_code = 400
    default_message = "Invalid input"


class Internal(MarketplaceError):
    status_code = 500
