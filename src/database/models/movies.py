from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    CheckConstraint
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from database.models.base import Base, IdMixin, TimestampMixin
from database.models.cinemas import HallModel
from database.models.lookups import (
    CountryModel,
    GenreModel,
    LanguageModel,
    MovieTypeModel
)


class MovieGenreModel(IdMixin, Base):
    """Association between a movie and one of its genres.

    ``position`` keeps the genres in the order they were submitted.
    """
    __tablename__ = "movie_genres"

    movie_id: Mapped[int] = mapped_column(
        ForeignKey("movies.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    genre_id: Mapped[int] = mapped_column(
        ForeignKey("genres.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    genre: Mapped[GenreModel] = relationship(GenreModel)

    __table_args__ = (
        UniqueConstraint("movie_id", "genre_id"),
    )


class MovieModel(IdMixin, TimestampMixin, Base):
    """Model representing movies in the cinema system.

    Genres are reached through ``genre_links``; ``genre_ids`` and ``genres``
    expose them as ordered lists of identifiers and genre rows. Both require
    ``genre_links`` to be loaded.
    """
    __tablename__ = "movies"
    __label__ = "Movie"

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    ticket_price: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=False
    )
    duration_in_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    released_date: Mapped[date] = mapped_column(Date, nullable=False)
    trailer_url: Mapped[Optional[str]] = mapped_column(
        String(500), nullable=True
    )
    poster_url: Mapped[Optional[str]] = mapped_column(
        String(500), nullable=True
    )
    movie_type_id: Mapped[int] = mapped_column(
        ForeignKey("movie_types.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    spoken_language_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("languages.id", ondelete="SET NULL"),
        nullable=True
    )
    subtitle_language_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("languages.id", ondelete="SET NULL"),
        nullable=True
    )
    country_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("countries.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    genre_links: Mapped[List[MovieGenreModel]] = relationship(
        MovieGenreModel,
        order_by=MovieGenreModel.position,
        cascade="all, delete-orphan",
        passive_deletes=True
    )
    movie_type: Mapped[MovieTypeModel] = relationship(MovieTypeModel)
    spoken_language: Mapped[Optional[LanguageModel]] = relationship(
        LanguageModel,
        foreign_keys=[spoken_language_id]
    )
    subtitle_language: Mapped[Optional[LanguageModel]] = relationship(
        LanguageModel,
        foreign_keys=[subtitle_language_id]
    )
    country: Mapped[Optional[CountryModel]] = relationship(CountryModel)

    __table_args__ = (
        CheckConstraint("ticket_price >= 0", name="check_ticket_price_positive"),
        CheckConstraint(
            "duration_in_minutes >= 0",
            name="check_duration_positive"
        ),
    )

    def __repr__(self) -> str:
        return f"<MovieModel(id={self.id}, title={self.title})>"

    @property
    def genre_ids(self) -> List[int]:
        return [link.genre_id for link in self.genre_links]

    @genre_ids.setter
    def genre_ids(self, genre_ids: List[int]) -> None:
        existing = {link.genre_id: link for link in self.genre_links}
        links = []
        for position, genre_id in enumerate(genre_ids):
            link = existing.get(genre_id) or MovieGenreModel(genre_id=genre_id)
            link.position = position
            links.append(link)
        self.genre_links = links

    @property
    def genres(self) -> List[GenreModel]:
        return [link.genre for link in self.genre_links]


class ShowtimeModel(IdMixin, TimestampMixin, Base):
    """Model representing a screening of a movie in a hall.

    ``ticket_price`` overrides the movie's price when set.
    """
    __tablename__ = "showtimes"
    __label__ = "Showtime"

    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    ticket_price: Mapped[Optional[float]] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=True
    )
    movie_id: Mapped[int] = mapped_column(
        ForeignKey("movies.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    hall_id: Mapped[int] = mapped_column(
        ForeignKey("halls.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    movie: Mapped[MovieModel] = relationship(MovieModel)
    hall: Mapped[HallModel] = relationship(HallModel)

    def __repr__(self) -> str:
        return (
            f"<ShowtimeModel(id={self.id}, movie_id={self.movie_id}, "
            f"hall_id={self.hall_id}, started_at={self.started_at})>"
        )

    @property
    def effective_ticket_price(self) -> float:
        if self.ticket_price is not None:
            return self.ticket_price
        return self.movie.ticket_price
