"""Points ledger: the only place a balance changes."""
import logging
from dataclasses import dataclass

from sqlalchemy import select, update
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.errors import Forbidden, NotFound, ValidationError
from loyalty.core.roles import POINT_ISSUER_ROLES, Role
from loyalty.models.user import MAX_POINTS_BALANCE, MAX_POINTS_DELTA, User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credit:
    email: str
    new_points: int


async def _customer_exists(db: AsyncSession, loyalty_code: str) -> bool:
    result = await db.execute(
        select(User.id).where(User.loyalty_code == loyalty_code, User.role == Role.customer.value)
    )
    return result.first() is not None


async def add_points(db: AsyncSession, caller_role: Role | str, loyalty_code: str, points: int) -> Credit:
    """Credit points to the customer holding loyalty_code.

    The increment runs as one UPDATE computed by the database, keyed by the
    code, and the reported balance comes back from that same statement, so
    concurrent credits on one code never lose updates. The balance is capped
    at MAX_POINTS_BALANCE inside the same statement.
    """
    if Role(caller_role) not in POINT_ISSUER_ROLES:
        raise Forbidden("Only merchants can add points")
    if not loyalty_code:
        raise ValidationError("Loyalty code and points required")
    if isinstance(points, bool) or not isinstance(points, int) or not 0 <= points <= MAX_POINTS_DELTA:
        raise ValidationError(f"Points must be an integer between 0 and {MAX_POINTS_DELTA}")

    stmt = (
        update(User)
        .where(
            User.loyalty_code == loyalty_code,
            User.role == Role.customer.value,
            User.points <= MAX_POINTS_BALANCE - points,
        )
        .values(points=User.points + points)
        .returning(User.email, User.points)
        .execution_options(synchronize_session=False)
    )
    try:
        row = (await db.execute(stmt)).one_or_none()
    except DBAPIError:
        # driver-level range errors (overflow, out-of-range) on the increment
        await db.rollback()
        logger.warning("Add points failed: value out of range", exc_info=True)
        raise ValidationError("Points balance out of range")

    if row is None:
        await db.rollback()
        if await _customer_exists(db, loyalty_code):
            logger.warning(f"Add points failed: crediting {points} would exceed the balance limit")
            raise ValidationError("Points balance limit exceeded")
        logger.warning("Add points failed: unknown loyalty code")
        raise NotFound("Customer not found")
    await db.commit()

    email, new_points = row
    logger.info(f"Added {points} points to {email}; balance now {new_points}")
    return Credit(email=email, new_points=new_points)
