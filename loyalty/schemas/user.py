"""Pydantic schemas for signup, login and profile."""
from pydantic import Field

from loyalty.core.roles import Role
from loyalty.schemas.base import CamelSchema


class SignupSchema(CamelSchema):
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)
    role: Role = Role.customer


class LoginSchema(CamelSchema):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserOutSchema(CamelSchema):
    id: int
    email: str
    role: Role
    loyalty_code: str | None = None


class ProfileOutSchema(UserOutSchema):
    points: int


class AuthOutSchema(CamelSchema):
    token: str
    user: UserOutSchema


class SignupOutSchema(AuthOutSchema):
    message: str = "User created successfully"
