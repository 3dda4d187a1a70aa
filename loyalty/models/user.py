"""User model: credentials, role, loyalty code and point balance."""
from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from loyalty.db.session import Base

# Largest single credit a merchant may issue (signed 32-bit)
MAX_POINTS_DELTA = 2**31 - 1
# Largest balance the points column holds (signed 64-bit)
MAX_POINTS_BALANCE = 2**63 - 1


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("points >= 0", name="ck_users_points_non_negative"),
        CheckConstraint("role IN ('customer', 'merchant')", name="ck_users_role"),
        # customers always carry a code, merchants never do
        CheckConstraint(
            "(role = 'customer' AND loyalty_code IS NOT NULL)"
            " OR (role = 'merchant' AND loyalty_code IS NULL)",
            name="ck_users_loyalty_code_role",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(16), nullable=False, default="customer")
    loyalty_code = Column(String(64), unique=True, nullable=True, index=True)
    points = Column(BigInteger, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
