"""Pydantic schemas for crediting points."""
from pydantic import Field, StrictInt

from loyalty.models.user import MAX_POINTS_DELTA
from loyalty.schemas.base import CamelSchema


class AddPointsSchema(CamelSchema):
    loyalty_code: str = Field(min_length=1, max_length=64)
    # credits only; a balance never goes down
    points: StrictInt = Field(ge=0, le=MAX_POINTS_DELTA)


class AddPointsOutSchema(CamelSchema):
    message: str
    new_points: int
