from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from schemas.announcements import (
    AnnouncementCreateSchema,
    AnnouncementUpdateSchema
)
from schemas.cinemas import (
    CinemaCreateSchema,
    CinemaUpdateSchema,
    HallCreateSchema,
    HallUpdateSchema
)
from schemas.lookups import LookupCreateSchema, LookupUpdateSchema
from schemas.movies import (
    MovieCreateSchema,
    MovieUpdateSchema,
    ShowtimeCreateSchema
)
from schemas.purchases import PurchaseCreateSchema


def movie_data(**overrides) -> dict:
    data = {
        "title": "Inception",
        "description": "A thief who steals corporate secrets.",
        "ticket_price": 9.5,
        "duration_in_minutes": 148,
        "released_date": date(2010, 7, 16),
        "genre_ids": [1, 2],
        "movie_type_id": 1
    }
    data.update(overrides)
    return data


@pytest.mark.validation
class TestMovieValidation:
    """Validation of movie and showtime bodies."""

    def test_valid_movie(self):
        movie = MovieCreateSchema(**movie_data(title="  Inception  "))
        assert movie.title == "Inception"
        assert movie.genre_ids == [1, 2]
        assert movie.country_id is None

    def test_title_longer_than_100_characters(self):
        with pytest.raises(ValidationError):
            MovieCreateSchema(**movie_data(title="t" * 101))

    def test_blank_title(self):
        with pytest.raises(ValidationError):
            MovieCreateSchema(**movie_data(title="   "))

    def test_genres_are_required(self):
        with pytest.raises(ValidationError):
            MovieCreateSchema(**movie_data(genre_ids=[]))

    def test_genres_must_not_repeat(self):
        with pytest.raises(ValidationError):
            MovieCreateSchema(**movie_data(genre_ids=[1, 1]))

    def test_negative_numbers(self):
        with pytest.raises(ValidationError):
            MovieCreateSchema(**movie_data(ticket_price=-1))
        with pytest.raises(ValidationError):
            MovieCreateSchema(**movie_data(duration_in_minutes=-5))

    def test_duration_beyond_integer_range(self):
        with pytest.raises(ValidationError):
            MovieCreateSchema(**movie_data(duration_in_minutes=2 ** 63))

    def test_urls_are_checked(self):
        with pytest.raises(ValidationError):
            MovieCreateSchema(**movie_data(trailer_url="not a url"))
        movie = MovieCreateSchema(
            **movie_data(poster_url="https://example.com/poster.jpg")
        )
        assert movie.poster_url == "https://example.com/poster.jpg"

    def test_partial_update(self):
        update = MovieUpdateSchema(title="New title")
        assert update.model_dump(exclude_unset=True) == {"title": "New title"}

    def test_partial_update_keeps_constraints(self):
        with pytest.raises(ValidationError):
            MovieUpdateSchema(title="t" * 101)
        with pytest.raises(ValidationError):
            MovieUpdateSchema(genre_ids=[])

    def test_showtime_start_is_utc(self):
        showtime = ShowtimeCreateSchema(
            started_at=datetime(2030, 1, 1, 20, 0),
            movie_id=1,
            hall_id=1
        )
        assert showtime.started_at.tzinfo == timezone.utc
        assert showtime.ticket_price is None

    def test_showtime_price_must_not_be_negative(self):
        with pytest.raises(ValidationError):
            ShowtimeCreateSchema(
                started_at=datetime(2030, 1, 1, 20, 0),
                ticket_price=-2,
                movie_id=1,
                hall_id=1
            )


@pytest.mark.validation
class TestCinemaValidation:
    """Validation of cinema, hall and lookup bodies."""

    def test_cinema_name_length(self):
        with pytest.raises(ValidationError):
            CinemaCreateSchema(name="Tiny", address="Main street")
        cinema = CinemaCreateSchema(name="Grand Cinema", address="Main street")
        assert cinema.image is None

    def test_cinema_update_is_partial(self):
        update = CinemaUpdateSchema(address="Other street")
        assert update.model_dump(exclude_unset=True) == {"address": "Other street"}

    def test_hall_seat_labels_are_strings(self):
        hall = HallCreateSchema(
            name="Hall One",
            seat_rows=["A", "B"],
            seat_columns=[1, 2, 3],
            hall_type_id=1
        )
        assert hall.seat_columns == ["1", "2", "3"]

    def test_hall_seat_labels_must_be_unique(self):
        with pytest.raises(ValidationError):
            HallCreateSchema(
                name="Hall One",
                seat_rows=["A", "A"],
                seat_columns=[1],
                hall_type_id=1
            )

    def test_hall_needs_seats(self):
        with pytest.raises(ValidationError):
            HallCreateSchema(
                name="Hall One",
                seat_rows=[],
                seat_columns=[1],
                hall_type_id=1
            )

    def test_hall_update_can_move_cinema(self):
        update = HallUpdateSchema(cinema_id=3)
        assert update.model_dump(exclude_unset=True) == {"cinema_id": 3}

    def test_lookup_name(self):
        with pytest.raises(ValidationError):
            LookupCreateSchema(name="")
        with pytest.raises(ValidationError):
            LookupCreateSchema(name="n" * 51)
        assert LookupCreateSchema(name=" Drama ").name == "Drama"

    def test_lookup_update_is_partial(self):
        update = LookupUpdateSchema(description="Updated")
        assert update.name is None


@pytest.mark.validation
class TestAnnouncementValidation:
    """Validation of the announcement display window."""

    def test_window_in_order(self):
        start = datetime(2030, 1, 1, tzinfo=timezone.utc)
        announcement = AnnouncementCreateSchema(
            title="Premiere",
            description="Opening night",
            started_at=start,
            ended_at=start + timedelta(days=2)
        )
        assert announcement.ended_at > announcement.started_at

    def test_same_start_and_end_is_allowed(self):
        start = datetime(2030, 1, 1, tzinfo=timezone.utc)
        announcement = AnnouncementCreateSchema(
            title="Premiere",
            description="Opening night",
            started_at=start,
            ended_at=start
        )
        assert announcement.ended_at == announcement.started_at

    def test_end_before_start(self):
        start = datetime(2030, 1, 1, tzinfo=timezone.utc)
        with pytest.raises(ValidationError) as exc_info:
            AnnouncementCreateSchema(
                title="Premiere",
                description="Opening night",
                started_at=start,
                ended_at=start - timedelta(days=1)
            )
        assert "ended_at must be greater or equal to started_at" in str(
            exc_info.value
        )

    def test_update_checks_window_when_both_given(self):
        start = datetime(2030, 1, 1, tzinfo=timezone.utc)
        with pytest.raises(ValidationError):
            AnnouncementUpdateSchema(
                started_at=start, ended_at=start - timedelta(hours=1)
            )
        assert AnnouncementUpdateSchema(ended_at=start).started_at is None


@pytest.mark.validation
class TestPurchaseValidation:
    """Validation of purchase bodies."""

    def test_seats_are_stripped(self):
        purchase = PurchaseCreateSchema(showtime_id=1, seats=[" A1 ", "B2"])
        assert purchase.seats == ["A1", "B2"]

    def test_seats_are_required(self):
        with pytest.raises(ValidationError):
            PurchaseCreateSchema(showtime_id=1, seats=[])

    def test_seats_must_not_repeat(self):
        with pytest.raises(ValidationError):
            PurchaseCreateSchema(showtime_id=1, seats=["A1", "A1"])
