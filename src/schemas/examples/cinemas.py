from typing import Any, Dict

cinema_create_schema_example: Dict[str, Any] = {
    "name": "Legend Cinema",
    "address": "Street 271, Phnom Penh",
    "image": "legend.jpg"
}

cinema_schema_example: Dict[str, Any] = {
    "id": 1,
    **cinema_create_schema_example,
    "created_at": "2024-01-10T09:30:00Z",
    "updated_at": None
}

hall_create_schema_example: Dict[str, Any] = {
    "name": "Hall 01",
    "seat_rows": ["A", "B", "C"],
    "seat_columns": [1, 2, 3, 4],
    "location_image": "hall-01.jpg",
    "hall_type_id": 1
}

hall_update_schema_example: Dict[str, Any] = {
    "seat_rows": ["A", "B", "C", "D"],
    "cinema_id": 2
}

hall_schema_example: Dict[str, Any] = {
    "id": 1,
    "name": "Hall 01",
    "seat_rows": ["A", "B", "C"],
    "seat_columns": ["1", "2", "3", "4"],
    "location_image": "hall-01.jpg",
    "cinema_id": 1,
    "hall_type_id": 1,
    "created_at": "2024-01-10T09:30:00Z",
    "updated_at": None
}

hall_detail_schema_example: Dict[str, Any] = {
    **hall_schema_example,
    "cinema": {"id": 1, "name": "Legend Cinema"},
    "hall_type": {"id": 1, "name": "Standard", "description": None}
}
