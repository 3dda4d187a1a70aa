from loyalty.schemas.points import AddPointsOutSchema, AddPointsSchema
from loyalty.schemas.user import (
    AuthOutSchema,
    LoginSchema,
    ProfileOutSchema,
    SignupOutSchema,
    SignupSchema,
    UserOutSchema,
)

__all__ = [
    "AddPointsOutSchema",
    "AddPointsSchema",
    "AuthOutSchema",
    "LoginSchema",
    "ProfileOutSchema",
    "SignupOutSchema",
    "SignupSchema",
    "UserOutSchema",
]
