from typing import Any, Dict

list_payload_schema_example: Dict[str, Any] = {
    "records": [
        {"id": 1, "name": "Action", "description": "Fights and chases"},
        {"id": 2, "name": "Drama", "description": None}
    ],
    "total_count": 22,
    "pagination": {
        "current_page": 1,
        "page_size": 2,
        "total_pages": 11,
        "prev_page": None,
        "next_page": 2
    }
}

error_response_examples: Dict[int, Dict[str, Any]] = {
    400: {
        "description": "Validation error",
        "content": {
            "application/json": {
                "example": {
                    "success": False,
                    "message": "name: String should have at most 50 characters",
                    "data": None
                }
            }
        }
    },
    401: {
        "description": "Unauthorized",
        "content": {
            "application/json": {
                "example": {
                    "success": False,
                    "message": "Not authenticated.",
                    "data": None
                }
            }
        }
    },
    403: {
        "description": "Forbidden",
        "content": {
            "application/json": {
                "example": {
                    "success": False,
                    "message": "The user does not have privileges to access "
                               "this resource.",
                    "data": None
                }
            }
        }
    },
    404: {
        "description": "Referenced record not found",
        "content": {
            "application/json": {
                "example": {
                    "success": False,
                    "message": "Genre with given ID (42) is not found",
                    "data": None
                }
            }
        }
    },
    500: {
        "description": "Internal server error",
        "content": {
            "application/json": {
                "example": {
                    "success": False,
                    "message": "Internal server error.",
                    "data": None
                }
            }
        }
    }
}


def error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """Pick the documented error responses of a route."""
    return {code: error_response_examples[code] for code in status_codes}
