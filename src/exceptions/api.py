from fastapi import status


class BaseAPIError(Exception):
    """Base exception class for errors surfaced to API clients.

    Every subclass carries the HTTP status code it maps to, so a single
    exception handler can render any of them into the response envelope.
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An error occurred."

    def __init__(self, message: str | None = None) -> None:
        """Initialize the API error.

        Args:
            message (str, optional): Human-readable error message. Defaults
                to the class level message.
        """
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BaseAPIError):
    """Raised when the request input is malformed or missing."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input data."


class NotFoundError(BaseAPIError):
    """Raised when a referenced record does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found."

    @classmethod
    def for_reference(cls, label: str, value: object) -> "NotFoundError":
        """Build the error for a missing referenced record.

        Args:
            label (str): Human-readable name of the referenced collection.
            value (object): The identifier that was not found.

        Returns:
            NotFoundError: Error naming the collection and the identifier.
        """
        return cls(f"{label} with given ID ({value}) is not found")


class AuthenticationError(BaseAPIError):
    """Raised on bad credentials or an invalid bearer token."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Could not validate credentials."


class AuthorizationError(BaseAPIError):
    """Raised when the authenticated user lacks the required role."""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "The user does not have privileges to access this resource."


class UnexpectedError(BaseAPIError):
    """Raised on store or infrastructure faults."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error."
