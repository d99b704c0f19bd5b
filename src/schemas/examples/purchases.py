from typing import Any, Dict

purchase_create_schema_example: Dict[str, Any] = {
    "showtime_id": 1,
    "seats": ["A1", "A2"]
}

purchase_schema_example: Dict[str, Any] = {
    "id": 1,
    "seats": ["A1", "A2"],
    "total_price": 9.0,
    "user_id": 3,
    "showtime_id": 1,
    "created_at": "2024-03-01T18:00:00Z",
    "updated_at": None
}
