from typing import Any, Dict

movie_create_schema_example: Dict[str, Any] = {
    "title": "Spiderman",
    "description": "Superhero born with climbing ability",
    "ticket_price": 2.5,
    "duration_in_minutes": 120,
    "released_date": "2020-02-10",
    "genre_ids": [1, 2],
    "movie_type_id": 1,
    "spoken_language_id": 1,
    "subtitle_language_id": 2,
    "country_id": 1,
    "trailer_url": "https://youtu.be/dR3cjXncoSk",
    "poster_url": "https://i.pinimg.com/originals/e6/a2/5a/poster.jpg"
}

movie_update_schema_example: Dict[str, Any] = {
    "ticket_price": 3.0,
    "genre_ids": [2]
}

movie_schema_example: Dict[str, Any] = {
    "id": 1,
    "title": "Spiderman",
    "description": "Superhero born with climbing ability",
    "ticket_price": 2.5,
    "duration_in_minutes": 120,
    "released_date": "2020-02-10",
    "genres": [1, 2],
    "movie_type": 1,
    "spoken_language": 1,
    "subtitle_language": 2,
    "country": 1,
    "trailer_url": "https://youtu.be/dR3cjXncoSk",
    "poster_url": "https://i.pinimg.com/originals/e6/a2/5a/poster.jpg",
    "created_at": "2024-01-10T09:30:00Z",
    "updated_at": None
}

movie_detail_schema_example: Dict[str, Any] = {
    **movie_schema_example,
    "genres": [
        {"id": 1, "name": "Action", "description": None},
        {"id": 2, "name": "Adventure", "description": None}
    ],
    "movie_type": {"id": 1, "name": "2D", "description": None},
    "spoken_language": {"id": 1, "name": "English", "description": None},
    "subtitle_language": {"id": 2, "name": "Khmer", "description": None},
    "country": {"id": 1, "name": "USA", "description": None}
}

showtime_create_schema_example: Dict[str, Any] = {
    "started_at": "2024-03-01T19:30:00Z",
    "ticket_price": 4.5,
    "movie_id": 1,
    "hall_id": 1
}

showtime_schema_example: Dict[str, Any] = {
    "id": 1,
    **showtime_create_schema_example,
    "created_at": "2024-01-10T09:30:00Z",
    "updated_at": None
}
