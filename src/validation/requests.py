from typing import Annotated, Any, Optional, Type, TypeVar

from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, TypeAdapter, HttpUrl, create_model

SchemaT = TypeVar("SchemaT", bound=BaseModel)

_http_url_adapter = TypeAdapter(HttpUrl)

REQUEST_PARTS = frozenset({"body", "path", "query", "header", "cookie"})


def format_validation_error(exc: RequestValidationError) -> str:
    """Turn the first error of a request validation failure into a message.

    Only the first violation is reported, e.g.
    ``title: String should have at most 100 characters``.

    Args:
        exc (RequestValidationError): The error raised by FastAPI.

    Returns:
        str: Human-readable message naming the field and the rule.
    """
    errors = exc.errors()
    if not errors:
        return "Invalid input data."

    error = errors[0]
    location = [str(part) for part in error.get("loc", ())]
    if location and location[0] in REQUEST_PARTS:
        location = location[1:]
    message = error.get("msg", "Invalid value")
    if error.get("type") == "missing":
        message = "is required"
    elif message.startswith("Value error, "):
        message = message[len("Value error, "):]

    if not location:
        return message
    return f"{'.'.join(location)}: {message}"


def validate_http_url(value: Optional[str]) -> Optional[str]:
    """Check that ``value`` is an absolute HTTP(S) URL, keeping it a string.

    Args:
        value (Optional[str]): URL to validate.

    Returns:
        Optional[str]: The unchanged value.

    Raises:
        ValueError: If the value is not a valid URL.
    """
    if value is None:
        return value
    try:
        _http_url_adapter.validate_python(value)
    except ValueError:
        raise ValueError("must be a valid URL")
    return value


def make_partial(
    schema: Type[SchemaT], name: Optional[str] = None
) -> Type[SchemaT]:
    """Clone a create schema into an update schema with optional fields.

    Field constraints and validators are inherited from ``schema``; only the
    required flag changes, every field defaulting to ``None``. Update
    schemas subclass the result to add their own config or extra fields.

    Args:
        schema (Type[SchemaT]): The create schema to clone.
        name (Optional[str]): Name of the generated class.

    Returns:
        Type[SchemaT]: The generated update schema.
    """
    fields: dict[str, Any] = {}
    for field_name, field_info in schema.model_fields.items():
        annotation = field_info.annotation
        if field_info.metadata:
            annotation = Annotated[(annotation, *field_info.metadata)]
        fields[field_name] = (Optional[annotation], None)

    return create_model(
        name or f"Partial{schema.__name__}",
        __base__=schema,
        **fields
    )
