import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from config.settings import BaseAppSettings, get_settings
from database import get_db
from database.models.accounts import UserModel, UserRoleEnum
from database.models.base import is_storable_id
from exceptions.api import AuthenticationError, AuthorizationError
from exceptions.security import BaseSecurityError
from security.interfaces import JWTManagerInterface
from security.manager import JWTManager

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_jwt_manager(
    settings: BaseAppSettings = Depends(get_settings)
) -> JWTManagerInterface:
    """Get JWT manager instance with application settings.

    Args:
        settings (BaseAppSettings): Application settings containing JWT configuration.

    Returns:
        JWTManagerInterface: Configured JWT manager instance.
    """
    return JWTManager(
        access_secret_key=settings.SECRET_KEY_ACCESS,
        access_expires_delta=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        algorithm=settings.JWT_SIGNING_ALGORITHM
    )


async def get_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> str:
    """Extract JWT token from HTTP Authorization header.

    Args:
        credentials (HTTPAuthorizationCredentials): The HTTP authorization credentials.

    Returns:
        str: The JWT token from the Authorization header.

    Raises:
        AuthenticationError: If no bearer credentials are provided.
    """
    if not credentials or not credentials.credentials:
        raise AuthenticationError("Not authenticated.")
    return credentials.credentials


async def get_current_user_id(
    token: str = Depends(get_token),
    jwt_manager: JWTManagerInterface = Depends(get_jwt_manager)
) -> int:
    """Get the current user ID from JWT token.

    Any signature, expiry or format problem of the token results in the
    same AuthenticationError.

    Args:
        token (str): The JWT token to decode.
        jwt_manager (JWTManagerInterface): JWT manager for token decoding.

    Returns:
        int: The user ID from the decoded token.

    Raises:
        AuthenticationError: If the token is expired, invalid or has no
            ``user_id`` claim.
    """
    try:
        return jwt_manager.get_user_id(token)
    except BaseSecurityError as e:
        logger.info("Rejected bearer token: %s", e)
        raise AuthenticationError(str(e))


async def get_current_user(
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db)
) -> UserModel:
    """Get the current authenticated user from database.

    Args:
        user_id (int): The user ID from the JWT token.
        session (AsyncSession): Database session for querying user data.

    Returns:
        UserModel: The authenticated user with its membership loaded.

    Raises:
        AuthenticationError: If the user no longer exists.
    """
    if not is_storable_id(user_id):
        raise AuthenticationError()

    query = (
        select(UserModel)
        .options(selectinload(UserModel.membership))
        .where(UserModel.id == user_id)
    )
    result = await session.execute(query)
    user = result.scalars().first()
    if not user:
        raise AuthenticationError()
    return user


class RoleChecker:
    """Role-based access control checker.

    This class provides role-based authorization by checking if the current
    user has one of the allowed roles.
    """

    def __init__(self, allowed_roles: list[UserRoleEnum]):
        """Initialize the role checker with allowed roles.

        Args:
            allowed_roles (list[UserRoleEnum]): Roles that are allowed to
                access the protected resource.
        """
        self.allowed_roles = allowed_roles

    def __call__(self, user: UserModel = Depends(get_current_user)) -> UserModel:
        """Check if the current user has the required role.

        Args:
            user (UserModel): The current authenticated user.

        Returns:
            UserModel: The authorized user.

        Raises:
            AuthorizationError: If the user doesn't have a required role.
        """
        if user.role not in self.allowed_roles:
            logger.info(
                "User %s with role %s denied access", user.id, user.role.value
            )
            raise AuthorizationError()
        return user


require_admin = RoleChecker([UserRoleEnum.ADMIN])
