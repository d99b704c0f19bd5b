import email_validator
from email_validator import EmailNotValidError

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 72
NAME_MAX_LENGTH = 50


def validate_password_strength(password: str) -> str:
    """Validate password length requirements.

    bcrypt ignores everything past 72 bytes, so longer passwords are
    rejected instead of being silently truncated.

    Args:
        password (str): The password to validate.

    Returns:
        str: The validated password.

    Raises:
        ValueError: If the password is too short or too long.
    """
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValueError(
            f"Password must contain at least {PASSWORD_MIN_LENGTH} characters."
        )
    if len(password.encode("utf-8")) > PASSWORD_MAX_LENGTH:
        raise ValueError(
            f"Password must not exceed {PASSWORD_MAX_LENGTH} bytes."
        )
    return password


def validate_user_name(name: str) -> str:
    """Validate and strip a user display name.

    Raises:
        ValueError: If the name is empty or longer than 50 characters.
    """
    name = name.strip()
    if not name:
        raise ValueError("Name must not be empty.")
    if len(name) > NAME_MAX_LENGTH:
        raise ValueError(
            f"Name must not exceed {NAME_MAX_LENGTH} characters."
        )
    return name


def validate_email(user_email: str) -> str:
    """Validate and normalize email address.

    Uses email-validator library to validate email format and normalize it.

    Args:
        user_email (str): The email address to validate.

    Returns:
        str: The normalized email address.

    Raises:
        ValueError: If the email address is invalid.
    """
    try:
        email_info = email_validator.validate_email(
            user_email, check_deliverability=False
        )
        email = email_info.normalized
    except EmailNotValidError as e:
        raise ValueError(str(e))
    else:
        return email.lower()
