from typing import List

from sqlalchemy import ForeignKey, JSON, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from database.models.base import Base, IdMixin, TimestampMixin
from database.models.lookups import HallTypeModel

DEFAULT_IMAGE = "no-photo.jpg"


class CinemaModel(IdMixin, TimestampMixin, Base):
    """Model representing a cinema building with its address."""
    __tablename__ = "cinemas"
    __label__ = "Cinema"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    address: Mapped[str] = mapped_column(String(250), nullable=False)
    image: Mapped[str] = mapped_column(
        String(255), nullable=False, default=DEFAULT_IMAGE
    )

    def __repr__(self) -> str:
        return f"<CinemaModel(id={self.id}, name={self.name})>"


class HallModel(IdMixin, TimestampMixin, Base):
    """Model representing a screening hall inside a cinema.

    Seat rows and columns are stored as ordered lists of labels, so a seat
    is addressed as ``<row><column>`` (e.g. ``"A1"``).
    """
    __tablename__ = "halls"
    __label__ = "Hall"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    seat_rows: Mapped[List[str]] = mapped_column(JSON, nullable=False)
    seat_columns: Mapped[List[str]] = mapped_column(JSON, nullable=False)
    location_image: Mapped[str] = mapped_column(
        String(255), nullable=False, default=DEFAULT_IMAGE
    )
    cinema_id: Mapped[int] = mapped_column(
        ForeignKey("cinemas.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    hall_type_id: Mapped[int] = mapped_column(
        ForeignKey("hall_types.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    cinema: Mapped[CinemaModel] = relationship(CinemaModel)
    hall_type: Mapped[HallTypeModel] = relationship(HallTypeModel)

    def __repr__(self) -> str:
        return f"<HallModel(id={self.id}, name={self.name}, cinema_id={self.cinema_id})>"

    @property
    def seat_labels(self) -> set[str]:
        return {
            f"{row}{column}"
            for row in self.seat_rows
            for column in self.seat_columns
        }
