from loyalty.models.user import MAX_POINTS_BALANCE, MAX_POINTS_DELTA, User

__all__ = ["MAX_POINTS_BALANCE", "MAX_POINTS_DELTA", "User"]
