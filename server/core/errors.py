# server/core/errors.py


# -------------------------------
# Account Error Taxonomy
# -------------------------------

class AccountError(Exception):
    """
    Base class for every failure an account flow reports to its caller.
    Each subclass carries a short human-readable message and the HTTP
    status the transport layer answers with.
    """
    status_code = 500
    message = "Account error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(AccountError):
    status_code = 400
    message = "Invalid request"

    def __init__(self, message: str | None = None, field: str | None = None):
        super().__init__(message)
        self.field = field


class PasswordMismatchError(AccountError):
    status_code = 422
    message = "Password and password confirmation must match"


class DuplicateEmailError(AccountError):
    status_code = 409
    message = "Email already in use, please choose another one"


class UserNotFoundError(AccountError):
    status_code = 404
    message = "User not found"


class InvalidCredentialsError(AccountError):
    status_code = 401
    message = "Invalid password"


class InvalidTokenError(AccountError):
    status_code = 403
    message = "Invalid token"


class InternalError(AccountError):
    """Unexpected persistence or hashing failure. The message never carries details."""
    status_code = 500
    message = "Internal server error"

    def __init__(self):
        super().__init__(None)
