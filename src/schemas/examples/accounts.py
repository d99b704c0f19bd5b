from typing import Any, Dict

user_registration_request_schema_example: Dict[str, Any] = {
    "name": "tvy",
    "email": "tvy@mail.com",
    "password": "123456"
}

user_schema_example: Dict[str, Any] = {
    "id": 1,
    "name": "tvy",
    "email": "tvy@mail.com",
    "role": "customer",
    "membership_id": None,
    "created_at": "2024-01-10T09:30:00Z",
    "updated_at": None
}

user_detail_schema_example: Dict[str, Any] = {
    **user_schema_example,
    "membership_id": 1,
    "membership": {"id": 1, "name": "Gold", "description": "10% off"}
}

user_login_request_schema_example: Dict[str, Any] = {
    "email": "tvy@mail.com",
    "password": "123456"
}

user_login_response_schema_example: Dict[str, Any] = {
    "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
    "token_expires_at": "2024-02-09T09:30:00Z"
}

password_change_request_schema_example: Dict[str, Any] = {
    "old_password": "123456",
    "new_password": "654321"
}

user_create_request_schema_example: Dict[str, Any] = {
    **user_registration_request_schema_example,
    "role": "admin",
    "membership_id": 1
}

user_update_request_schema_example: Dict[str, Any] = {
    "role": "customer",
    "membership_id": 2
}
