from enum import Enum
from typing import Optional

from sqlalchemy import Enum as SqlEnum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from database.models.base import Base, IdMixin, TimestampMixin
from database.models.lookups import MembershipModel
from database.validators.accounts import (
    validate_email,
    validate_password_strength,
    validate_user_name
)
from security.utils import (
    hash_password,
    password_needs_rehash,
    verify_password
)


class UserRoleEnum(Enum):
    """Enumeration for user roles.

    - CUSTOMER: Regular user who browses the catalogue and buys tickets
    - ADMIN: Staff user who manages the catalogue and other users
    """
    CUSTOMER = "customer"
    ADMIN = "admin"


class UserModel(IdMixin, TimestampMixin, Base):
    """User model representing registered users in the system.

    The password is write-only: assigning ``password`` stores a bcrypt hash,
    and ``verify_password`` is the only way to check a candidate password.
    """
    __tablename__ = "users"
    __label__ = "User"

    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    _hashed_password: Mapped[str] = mapped_column(
        "hashed_password", String(255), nullable=False
    )
    role: Mapped[UserRoleEnum] = mapped_column(
        SqlEnum(UserRoleEnum),
        nullable=False,
        default=UserRoleEnum.CUSTOMER
    )

    membership_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("memberships.id", ondelete="SET NULL"),
        nullable=True
    )
    membership: Mapped[Optional[MembershipModel]] = relationship(
        MembershipModel
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email}, role={self.role})>"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRoleEnum.ADMIN

    @classmethod
    def create(
        cls,
        name: str,
        email: str,
        raw_password: str,
        role: UserRoleEnum = UserRoleEnum.CUSTOMER,
        membership_id: Optional[int] = None
    ) -> "UserModel":
        """Create a new user instance with hashed password.

        Args:
            name (str): Unique display name.
            email (str): User's email address.
            raw_password (str): Plain text password to be hashed.
            role (UserRoleEnum): Role of the user.
            membership_id (Optional[int]): Membership the user belongs to.

        Returns:
            UserModel: New user instance with hashed password.
        """
        user = cls(
            name=name,
            email=email,
            role=role,
            membership_id=membership_id
        )
        user.password = raw_password
        return user

    @property
    def password(self) -> None:
        raise AttributeError(
            "Password is write-only. Use the setter to set the password."
        )

    @password.setter
    def password(self, raw_password: str) -> None:
        validate_password_strength(raw_password)
        self._hashed_password = hash_password(raw_password)

    def verify_password(self, raw_password: str) -> bool:
        """Verify a plain text password against the stored hash.

        Args:
            raw_password (str): Plain text password to verify.

        Returns:
            bool: True if password matches, False otherwise.
        """
        return verify_password(raw_password, self._hashed_password)

    def upgrade_password_hash(self, raw_password: str) -> bool:
        """Re-hash a verified password when the stored hash is outdated.

        Returns:
            bool: True if the hash changed and needs to be committed.
        """
        if not password_needs_rehash(self._hashed_password):
            return False
        self._hashed_password = hash_password(raw_password)
        return True

    @validates("email")
    def validate_email_field(self, field_name: str, email: str) -> str:
        return validate_email(email)

    @validates("name")
    def validate_name_field(self, field_name: str, name: str) -> str:
        return validate_user_name(name)
