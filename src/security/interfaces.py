from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Optional


class JWTManagerInterface(ABC):
    """Contract of the session token issuer.

    A session token identifies one user through its ``user_id`` claim and
    expires at its ``exp`` claim. Implementations raise the errors of
    ``exceptions.security`` for any token they cannot accept.
    """

    @abstractmethod
    def create_access_token(
        self, user_id: int, expires_delta: Optional[timedelta] = None
    ) -> str:
        """Issue a signed token for a user.

        Args:
            user_id (int): Identifier of the authenticated user.
            expires_delta (Optional[timedelta]): Lifetime overriding the
                configured one.

        Returns:
            str: Encoded token.
        """

    @abstractmethod
    def decode_access_token(self, token: str) -> dict:
        """Return every claim of a valid token.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the signature or the format is wrong.
        """

    @abstractmethod
    def get_user_id(self, token: str) -> int:
        """Return the user a valid token was issued for.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token carries no integer ``user_id``.
        """

    @abstractmethod
    def get_token_expiration(self, token: str) -> datetime:
        """Return the timezone-aware expiry moment of a valid token."""
