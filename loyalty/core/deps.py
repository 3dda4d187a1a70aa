"""Request-scoped dependencies: settings, hasher, bearer identity, role gates."""
import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from loyalty.core.config import Settings
from loyalty.core.errors import Forbidden, Unauthenticated
from loyalty.core.roles import POINT_ISSUER_ROLES
from loyalty.core.security import Identity, PasswordHasher, decode_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_current_identity(
    settings: Annotated[Settings, Depends(get_app_settings)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> Identity:
    """Missing bearer token -> 401; bad signature or expired -> 403."""
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()

    identity = decode_access_token(settings, credentials.credentials)
    if identity is None:
        logger.warning("Rejected request with invalid or expired token")
        raise Forbidden()
    return identity


def require_merchant(identity: Annotated[Identity, Depends(get_current_identity)]) -> Identity:
    if identity.role not in POINT_ISSUER_ROLES:
        raise Forbidden("Only merchants can add points")
    return identity
