"""FastAPI dependencies that turn a bearer token into a ``Principal``."""

from fastapi import Depends, Request

from commerce.account.principals import load_principal
from shared.auth import Principal, Role, authorize, decode_access_token
from shared.errors import AuthenticationError


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization")
    if not header or not header.startswith("Bearer "):
        return None
    return header[len("Bearer ") :].strip() or None


def current_principal(request: Request) -> Principal:
    """The token's user as stored now; missing or inactive users are rejected."""
    token = _bearer_token(request)
    if token is None:
        raise AuthenticationError("Access token required")
    return load_principal(decode_access_token(token))


def admin_principal(principal: Principal = Depends(current_principal)) -> Principal:
    return authorize(principal, Role.ADMIN)
