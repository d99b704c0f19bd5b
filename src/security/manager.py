from datetime import timedelta, datetime, timezone
from typing import Optional

from jose import jwt, ExpiredSignatureError, JWTError

from exceptions.security import TokenExpiredError, InvalidTokenError
from security.interfaces import JWTManagerInterface


class JWTManager(JWTManagerInterface):
    """python-jose implementation of the session token issuer.

    Tokens carry ``user_id``, ``iat`` and ``exp``. There is no refresh
    token: a session ends when its token expires.
    """

    def __init__(
        self,
        access_secret_key: str,
        access_expires_delta: int,
        algorithm: str
    ) -> None:
        """Initialize the JWT manager with configuration.

        Args:
            access_secret_key (str): Secret key for signing tokens.
            access_expires_delta (int): Token lifetime in minutes.
            algorithm (str): JWT signing algorithm (e.g., 'HS256').
        """
        self.access_expires_delta = timedelta(minutes=access_expires_delta)
        self._access_secret_key = access_secret_key
        self._algorithm = algorithm

    def create_access_token(
        self,
        user_id: int,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        issued_at = datetime.now(timezone.utc)
        claims = {
            "user_id": user_id,
            "iat": issued_at,
            "exp": issued_at + (expires_delta or self.access_expires_delta)
        }
        return jwt.encode(
            claims,
            key=self._access_secret_key,
            algorithm=self._algorithm
        )

    def decode_access_token(self, token: str) -> dict:
        try:
            return jwt.decode(
                token,
                self._access_secret_key,
                algorithms=[self._algorithm]
            )
        except ExpiredSignatureError:
            raise TokenExpiredError
        except JWTError:
            raise InvalidTokenError

    def get_user_id(self, token: str) -> int:
        user_id = self.decode_access_token(token).get("user_id")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise InvalidTokenError("Invalid token format.")
        return user_id

    def get_token_expiration(self, token: str) -> datetime:
        expires_at = self.decode_access_token(token)["exp"]
        return datetime.fromtimestamp(expires_at, tz=timezone.utc)
