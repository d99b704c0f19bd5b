class BaseSecurityError(Exception):
    """Base exception class for session token errors.

    Raised by the JWT manager only; the authentication dependency turns any
    of these into an ``AuthenticationError`` so clients always see a 401.
    """
    default_message = "Could not validate the session token."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class TokenExpiredError(BaseSecurityError):
    default_message = "Token has expired."


class InvalidTokenError(BaseSecurityError):
    default_message = "Invalid token."
