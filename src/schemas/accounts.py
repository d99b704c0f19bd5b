from datetime import datetime
from typing import Optional

from pydantic import (
    BaseModel,
    EmailStr,
    ConfigDict,
    Field,
    field_validator,
    model_validator
)

from database.models.accounts import UserRoleEnum
from database.validators.accounts import (
    validate_password_strength,
    validate_user_name
)
from schemas.common import NamedEntitySchema
from validation.requests import make_partial

from .examples.accounts import (
    user_registration_request_schema_example,
    user_schema_example,
    user_detail_schema_example,
    user_login_request_schema_example,
    user_login_response_schema_example,
    password_change_request_schema_example,
    user_create_request_schema_example,
    user_update_request_schema_example
)


class UserRegistrationRequestSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": user_registration_request_schema_example
        }
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: Optional[str]) -> Optional[str]:
        return validate_user_name(value) if value is not None else value

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: Optional[str]) -> Optional[str]:
        return value.lower() if value is not None else value

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: Optional[str]) -> Optional[str]:
        return validate_password_strength(value) if value is not None else value


class UserLoginRequestSchema(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    model_config = ConfigDict(
        json_schema_extra={
            "example": user_login_request_schema_example
        }
    )

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return value.lower()


class UserLoginResponseSchema(BaseModel):
    token: str
    token_expires_at: datetime

    model_config = ConfigDict(
        json_schema_extra={
            "example": user_login_response_schema_example
        }
    )


class PasswordChangeRequestSchema(BaseModel):
    old_password: str = Field(..., min_length=1)
    new_password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": password_change_request_schema_example
        }
    )

    @field_validator("new_password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return validate_password_strength(value)

    @model_validator(mode="after")
    def validate_passwords_differ(self) -> "PasswordChangeRequestSchema":
        if self.old_password == self.new_password:
            raise ValueError(
                "new_password must be different from old_password"
            )
        return self


class UserCreateRequestSchema(UserRegistrationRequestSchema):
    role: UserRoleEnum = UserRoleEnum.CUSTOMER
    membership_id: Optional[int] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": user_create_request_schema_example
        }
    )


class UserUpdateRequestSchema(make_partial(UserCreateRequestSchema)):
    model_config = ConfigDict(
        json_schema_extra={
            "example": user_update_request_schema_example
        }
    )


class UserSchema(BaseModel):
    id: int
    name: str
    email: EmailStr
    role: UserRoleEnum
    membership_id: Optional[int] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": user_schema_example
        }
    )


class UserDetailSchema(UserSchema):
    membership: Optional[NamedEntitySchema] = None

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": user_detail_schema_example
        }
    )


class UserReferenceSchema(BaseModel):
    id: int
    name: str
    email: EmailStr

    model_config = ConfigDict(from_attributes=True)
