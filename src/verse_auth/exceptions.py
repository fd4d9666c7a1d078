"""Authentication exceptions.

Rejected logins are not exceptions: the lockout guard returns them as
data. These exceptions cover invalid input, infrastructure failures and
the generic error surfaced to end users by the application layer.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidCredentialsError(AuthError):
    """Raised when a login is rejected, whatever the precise reason."""

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class AccountAlreadyExistsError(AuthError):
    """Raised when registering an account id that is already taken."""

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account already exists: {account_id}")


class StoreError(AuthError):
    """Raised when the account store cannot read or persist a record.

    No attempt-counter change may be assumed to have taken effect.
    """

    def __init__(self, message: str = "Account store failure"):
        super().__init__(message)


class HasherError(AuthError):
    """Raised when a password hash cannot be evaluated.

    Distinct from a mismatch, which is reported as ``False``.
    """

    def __init__(self, message: str = "Password hash could not be evaluated"):
        super().__init__(message)
