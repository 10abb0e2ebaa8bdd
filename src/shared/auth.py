"""Authenticated principal, role policy, access tokens and password hashing."""

import hashlib
import hmac
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum

import jwt

from shared import settings
from shared.errors import AuthenticationError, AuthorizationError


class Role(Enum):
    USER = "USER"
    ADMIN = "ADMIN"


@dataclass(frozen=True)
class Principal:
    """The caller behind a request, as proven by its bearer token."""

    user_id: str
    role: Role
    email: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def authorize(principal: Principal, role: Role) -> Principal:
    """Policy check: the principal must hold ``role``. Admins pass every check."""
    if principal.role == role or principal.is_admin:
        return principal
    raise AuthorizationError(f"{role.value.capitalize()} access required")


def can_access(principal: Principal, owner_id: str) -> bool:
    """Owners and admins may read or change a user-owned resource."""
    return principal.is_admin or str(principal.user_id) == str(owner_id)


# ---------------------------------------------------------------------------
# Access tokens
# ---------------------------------------------------------------------------
def issue_access_token(user_id: str, role: str, email: str | None = None, ttl: timedelta | None = None) -> str:
    now = datetime.now(UTC)
    expires_at = now + (ttl if ttl is not None else timedelta(minutes=settings.ACCESS_TOKEN_TTL_MINUTES))
    payload = {
        "sub": str(user_id),
        "role": role,
        "email": email,
        "iat": now,
        "exp": expires_at,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Principal:
    try:
        claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token expired") from None
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token") from None

    try:
        role = Role(claims.get("role"))
    except ValueError:
        raise AuthenticationError("Invalid token") from None

    if not claims.get("sub"):
        raise AuthenticationError("Invalid token")

    return Principal(user_id=claims["sub"], role=role, email=claims.get("email"))


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------
def hash_password(password: str) -> str:
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), bytes.fromhex(salt), settings.PASSWORD_HASH_ITERATIONS)
    return f"pbkdf2_sha256${settings.PASSWORD_HASH_ITERATIONS}${salt}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        _, iterations, salt, expected = password_hash.split("$")
    except ValueError:
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), bytes.fromhex(salt), int(iterations))
    return hmac.compare_digest(digest.hex(), expected)
