"""Error taxonomy. Every failure reaches the client as {"error": message}."""


class LoyaltyError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(LoyaltyError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "Invalid request"


class DuplicateEmail(LoyaltyError):
    status_code = 400
    default_message = "Email already exists"


class InvalidCredentials(LoyaltyError):
    """Same error for unknown email and wrong password."""

    status_code = 401
    default_message = "Invalid credentials"


class Unauthenticated(LoyaltyError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(LoyaltyError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(LoyaltyError):
    status_code = 404
    default_message = "Not found"


class InternalError(LoyaltyError):
    status_code = 500
    default_message = "Internal server error"
