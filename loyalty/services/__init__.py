from loyalty.services.auth import login, new_loyalty_code, register
from loyalty.services.ledger import Credit, add_points
from loyalty.services.profile import get_profile

__all__ = ["Credit", "add_points", "get_profile", "login", "new_loyalty_code", "register"]
