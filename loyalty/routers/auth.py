"""Auth routes: signup and login. Stateless bearer tokens; logout is client-side."""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.config import Settings
from loyalty.core.deps import get_app_settings, get_hasher
from loyalty.core.security import PasswordHasher
from loyalty.db.session import get_db
from loyalty.schemas.user import (
    AuthOutSchema,
    LoginSchema,
    SignupOutSchema,
    SignupSchema,
    UserOutSchema,
)
from loyalty.services import auth as auth_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=SignupOutSchema, status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    hasher: Annotated[PasswordHasher, Depends(get_hasher)],
):
    """Create a customer (default) or merchant account and sign them in."""
    user, token = await auth_service.register(
        db, settings, hasher, email=body.email, password=body.password, role=body.role
    )
    return SignupOutSchema(token=token, user=UserOutSchema.model_validate(user))


@router.post("/login", response_model=AuthOutSchema)
async def login(
    body: LoginSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    hasher: Annotated[PasswordHasher, Depends(get_hasher)],
):
    user, token = await auth_service.login(db, settings, hasher, email=body.email, password=body.password)
    return AuthOutSchema(token=token, user=UserOutSchema.model_validate(user))
