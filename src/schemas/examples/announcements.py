from typing import Any, Dict

announcement_create_schema_example: Dict[str, Any] = {
    "title": "Member Monday",
    "description": "Half price tickets for members every Monday.",
    "image": "member-monday.png",
    "started_at": "2024-03-01T00:00:00Z",
    "ended_at": "2024-03-31T23:59:59Z"
}

announcement_schema_example: Dict[str, Any] = {
    "id": 1,
    **announcement_create_schema_example,
    "index_position": 0,
    "created_at": "2024-02-20T09:30:00Z",
    "updated_at": None
}
