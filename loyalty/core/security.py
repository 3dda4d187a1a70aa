"""Password hashing (bcrypt via passlib) and JWT session tokens (python-jose)."""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from loyalty.core.config import Settings
from loyalty.core.roles import Role

logger = logging.getLogger(__name__)

# bcrypt hard limit: 72 bytes (UTF-8)
BCRYPT_MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Salted bcrypt hashing with a fixed cost factor."""

    def __init__(self, rounds: int = 10):
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def verify(self, plain: str, hashed: str) -> bool:
        return self.pwd_context.verify(plain, hashed)

    def dummy_verify(self) -> None:
        """Spend one verification's worth of time without a stored hash."""
        self.pwd_context.dummy_verify()


@dataclass(frozen=True)
class Identity:
    """Decoded session claims attached to an authenticated request."""

    user_id: int
    email: str
    role: Role

    @property
    def is_merchant(self) -> bool:
        return self.role is Role.merchant


def create_access_token(settings: Settings, user_id: int, email: str, role: Role | str) -> str:
    """Sign {id, email, role} with a fixed validity window."""
    now = datetime.now(timezone.utc)
    to_encode: dict[str, Any] = {
        "sub": str(user_id),
        "id": user_id,
        "email": email,
        "role": Role(role).value,
        "iat": now,
        "exp": now + timedelta(minutes=settings.access_token_expire_minutes),
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(settings: Settings, token: str) -> Identity | None:
    """Verify signature and expiry; return the identity or None."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        logger.debug(f"JWT verification failed: {e}")
        return None
    try:
        return Identity(
            user_id=int(payload["id"]),
            email=str(payload["email"]),
            role=Role(payload["role"]),
        )
    except (KeyError, TypeError, ValueError):
        logger.debug("JWT payload is missing identity claims")
        return None
