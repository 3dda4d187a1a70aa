"""SQLAlchemy declarative base and model imports for Alembic."""
from loyalty.db.session import Base

# Import all models so Alembic can see them
from loyalty.models.user import User  # noqa: F401

__all__ = ["Base", "User"]
