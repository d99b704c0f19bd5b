from typing import Any, Generic, Optional, TypeVar

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

DataT = TypeVar("DataT")


class ResponseEnvelope(BaseModel, Generic[DataT]):
    """Uniform response body returned by every endpoint."""
    success: bool
    message: str
    data: Optional[DataT] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "Success",
                "data": None
            }
        }
    )

    @classmethod
    def ok(
        cls, data: Any = None, message: str = "Success"
    ) -> "ResponseEnvelope[DataT]":
        """Build a successful envelope around ``data``.

        Args:
            data (Any): Payload of the response.
            message (str): Human-readable outcome message.

        Returns:
            ResponseEnvelope: Envelope with ``success`` set to True.
        """
        return cls(success=True, message=message, data=data)


def standard_response(
    status_code: int,
    success: bool,
    message: str,
    data: Any = None
) -> JSONResponse:
    """Render an envelope into a JSON response with the given status code.

    Args:
        status_code (int): HTTP status code of the response.
        success (bool): Whether the request succeeded.
        message (str): Human-readable outcome message.
        data (Any): Payload, ``None`` on errors.

    Returns:
        JSONResponse: The response carrying ``{success, message, data}``.
    """
    envelope = ResponseEnvelope[Any](
        success=success,
        message=message,
        data=data
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(envelope)
    )
