import logging

from fastapi import APIRouter, status, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config.dependencies import get_current_user, get_jwt_manager
from database import get_db
from database.models.accounts import UserModel
from exceptions.api import AuthenticationError, ValidationError
from pipeline.records import commit_or_rollback, ensure_unique
from pipeline.responses import ResponseEnvelope
from schemas.accounts import (
    PasswordChangeRequestSchema,
    UserDetailSchema,
    UserLoginRequestSchema,
    UserLoginResponseSchema,
    UserRegistrationRequestSchema,
    UserSchema
)
from schemas.examples.common import error_responses
from security.interfaces import JWTManagerInterface

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


@router.post(
    "/register/",
    response_model=ResponseEnvelope[UserSchema],
    status_code=status.HTTP_200_OK,
    summary="User registration",
    description=(
        "Register a new customer account. Names and emails are unique. "
        "No token is issued; log in afterwards."
    ),
    responses=error_responses(400)
)
async def register_user(
    data: UserRegistrationRequestSchema,
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[UserSchema]:
    """Register a new user.

    Args:
        data: Registration data (name, email, password).
        db: Database session.

    Returns:
        ResponseEnvelope[UserSchema]: The registered user without password.

    Raises:
        ValidationError: If the name or the email is already taken.
    """
    await ensure_unique(db, UserModel, "name", data.name)
    await ensure_unique(db, UserModel, "email", data.email)

    new_user = UserModel.create(
        name=data.name,
        email=data.email,
        raw_password=data.password
    )
    db.add(new_user)
    await commit_or_rollback(db)
    await db.refresh(new_user)

    logger.info("Registered user %s", new_user.id)
    return ResponseEnvelope.ok(
        UserSchema.model_validate(new_user),
        message="User is registered successfully"
    )


@router.post(
    "/login/",
    response_model=ResponseEnvelope[UserLoginResponseSchema],
    status_code=status.HTTP_200_OK,
    summary="User login",
    description="Authenticate user and return a JWT access token with its expiry.",
    responses=error_responses(400, 401)
)
async def login_user(
    data: UserLoginRequestSchema,
    jwt_manager: JWTManagerInterface = Depends(get_jwt_manager),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[UserLoginResponseSchema]:
    """Authenticate user and return a JWT access token.

    An unknown email and a wrong password fail with the same error.

    Args:
        data: Login credentials (email, password).
        jwt_manager: JWT manager service.
        db: Database session.

    Returns:
        ResponseEnvelope[UserLoginResponseSchema]: The token and its expiry.

    Raises:
        AuthenticationError: If the credentials do not match a user.
    """
    stmt = select(UserModel).where(UserModel.email == data.email)
    result = await db.execute(stmt)
    user: UserModel | None = result.scalars().first()

    if not user or not user.verify_password(data.password):
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

    if user.upgrade_password_hash(data.password):
        await commit_or_rollback(db)
        logger.info("Upgraded password hash of user %s", user.id)

    token = jwt_manager.create_access_token(user.id)
    return ResponseEnvelope.ok(
        UserLoginResponseSchema(
            token=token,
            token_expires_at=jwt_manager.get_token_expiration(token)
        ),
        message="Logged in successfully"
    )


@router.put(
    "/change-password/",
    response_model=ResponseEnvelope[None],
    status_code=status.HTTP_200_OK,
    summary="Change password",
    description=(
        "Change the password of the authenticated user. The new password "
        "must differ from the old one."
    ),
    responses=error_responses(400, 401)
)
async def change_password(
    data: PasswordChangeRequestSchema,
    user: UserModel = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> ResponseEnvelope[None]:
    """Change the user's password by providing the old and new password.

    Args:
        data: Old and new password.
        user: The current authenticated user.
        db: Database session.

    Returns:
        ResponseEnvelope[None]: Envelope with ``data`` set to null.

    Raises:
        ValidationError: If the old password is not correct.
    """
    if not user.verify_password(data.old_password):
        raise ValidationError("Old password is not correct")

    user.password = data.new_password
    await commit_or_rollback(db)

    logger.info("User %s changed password", user.id)
    return ResponseEnvelope.ok(message="Password is changed successfully")


@router.get(
    "/me/",
    response_model=ResponseEnvelope[UserDetailSchema],
    status_code=status.HTTP_200_OK,
    summary="Current user",
    description="Get the profile of the authenticated user with the membership populated.",
    responses=error_responses(401)
)
async def get_me(
    user: UserModel = Depends(get_current_user)
) -> ResponseEnvelope[UserDetailSchema]:
    return ResponseEnvelope.ok(UserDetailSchema.model_validate(user))
