"""Signup and login: password hashing, loyalty code issue, session tokens."""
import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from loyalty.core.config import Settings
from loyalty.core.errors import DuplicateEmail, InternalError, InvalidCredentials, ValidationError
from loyalty.core.roles import Role
from loyalty.core.security import (
    BCRYPT_MAX_PASSWORD_BYTES,
    PasswordHasher,
    create_access_token,
)
from loyalty.models.user import User

logger = logging.getLogger(__name__)


def new_loyalty_code() -> str:
    """Fresh opaque code for a customer; random UUID4."""
    return str(uuid.uuid4())


async def _get_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


def _issue_token(settings: Settings, user: User) -> str:
    return create_access_token(settings, user_id=user.id, email=user.email, role=user.role)


async def register(
    db: AsyncSession,
    settings: Settings,
    hasher: PasswordHasher,
    email: str,
    password: str,
    role: Role = Role.customer,
) -> tuple[User, str]:
    """Create a user and return it with a fresh session token."""
    if not email or not password:
        raise ValidationError("Email and password required")
    if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")

    logger.info(f"Registration attempt for email: {email}")
    if await _get_by_email(db, email) is not None:
        logger.warning(f"Registration failed: email {email} already exists.")
        raise DuplicateEmail()

    role = Role(role)
    # bcrypt is CPU bound; keep it off the event loop
    hashed_password = await run_in_threadpool(hasher.hash, password)
    user = User(
        email=email,
        hashed_password=hashed_password,
        role=role.value,
        loyalty_code=new_loyalty_code() if role is Role.customer else None,
        points=0,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # lost a race against a concurrent signup with the same email
        await db.rollback()
        if await _get_by_email(db, email) is not None:
            logger.warning(f"Registration failed: email {email} already exists.")
            raise DuplicateEmail()
        logger.error(f"Integrity error creating user {email}", exc_info=True)
        raise InternalError()
    except SQLAlchemyError:
        await db.rollback()
        logger.error(f"Database error creating user {email}", exc_info=True)
        raise InternalError()
    await db.refresh(user)

    logger.info(f"User created with ID: {user.id} role: {user.role}")
    return user, _issue_token(settings, user)


async def login(
    db: AsyncSession,
    settings: Settings,
    hasher: PasswordHasher,
    email: str,
    password: str,
) -> tuple[User, str]:
    """Check credentials; unknown email and wrong password fail the same way."""
    user = await _get_by_email(db, email)
    if user is None:
        await run_in_threadpool(hasher.dummy_verify)
        logger.warning("Login failed: unknown email")
        raise InvalidCredentials()
    if not await run_in_threadpool(hasher.verify, password, user.hashed_password):
        logger.warning(f"Login failed for user_id: {user.id}")
        raise InvalidCredentials()

    logger.info(f"Login successful for user_id: {user.id}")
    return user, _issue_token(settings, user)
