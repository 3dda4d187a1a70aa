from enum import Enum


class Role(str, Enum):
    customer = "customer"
    merchant = "merchant"


# Roles allowed to credit points to customers
POINT_ISSUER_ROLES = {Role.merchant}
