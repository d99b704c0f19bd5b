"""Custom exceptions module for the Cinema Management API.

This module contains all custom exception classes used throughout the
application:

- API exceptions that map to HTTP status codes and the response envelope
- Security exceptions for JWT decoding errors
- Exception handlers that render every error into the response envelope
"""
from exceptions.api import (
    BaseAPIError,
    ValidationError,
    NotFoundError,
    AuthenticationError,
    AuthorizationError,
    UnexpectedError
)
from exceptions.security import (
    BaseSecurityError,
    TokenExpiredError,
    InvalidTokenError
)
