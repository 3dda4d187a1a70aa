"""API routes: JSON for the caller's profile and merchant point credits."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.deps import get_current_identity, require_merchant
from loyalty.core.security import Identity
from loyalty.db.session import get_db
from loyalty.schemas.points import AddPointsOutSchema, AddPointsSchema
from loyalty.schemas.user import ProfileOutSchema
from loyalty.services.ledger import add_points as credit_points
from loyalty.services.profile import get_profile

router = APIRouter(prefix="/api", tags=["api"])


@router.get("/user/profile", response_model=ProfileOutSchema)
async def profile(
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Own profile only; the id comes from the token, never from the request."""
    user = await get_profile(db, identity.user_id)
    return ProfileOutSchema.model_validate(user)


@router.post("/merchant/add-points", response_model=AddPointsOutSchema)
async def add_points(
    body: AddPointsSchema,
    identity: Annotated[Identity, Depends(require_merchant)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    credit = await credit_points(db, identity.role, body.loyalty_code, body.points)
    return AddPointsOutSchema(
        message=f"Added {body.points} points to {credit.email}",
        new_points=credit.new_points,
    )
