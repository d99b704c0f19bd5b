from typing import Any, Dict

lookup_create_schema_example: Dict[str, Any] = {
    "name": "Action",
    "description": "Fights, chases and explosions"
}

lookup_update_schema_example: Dict[str, Any] = {
    "description": "Fast paced movies"
}

lookup_schema_example: Dict[str, Any] = {
    "id": 1,
    "name": "Action",
    "description": "Fights, chases and explosions",
    "created_at": "2024-01-10T09:30:00Z",
    "updated_at": None
}
