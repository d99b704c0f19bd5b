from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from database.models.base import Base, IdMixin, TimestampMixin


class LookupMixin(IdMixin, TimestampMixin):
    """Common shape of the reference data tables: a unique name plus an
    optional description."""
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id}, name={self.name})>"


class GenreModel(LookupMixin, Base):
    """Model representing movie genres."""
    __tablename__ = "genres"
    __label__ = "Genre"


class MovieTypeModel(LookupMixin, Base):
    """Model representing movie projection types (2D, 3D, IMAX...)."""
    __tablename__ = "movie_types"
    __label__ = "Movie type"


class HallTypeModel(LookupMixin, Base):
    """Model representing hall categories (standard, VIP...)."""
    __tablename__ = "hall_types"
    __label__ = "Hall type"


class LanguageModel(LookupMixin, Base):
    """Model representing spoken and subtitle languages of movies."""
    __tablename__ = "languages"
    __label__ = "Language"


class CountryModel(LookupMixin, Base):
    """Model representing movie production countries."""
    __tablename__ = "countries"
    __label__ = "Country"


class MembershipModel(LookupMixin, Base):
    """Model representing customer membership levels."""
    __tablename__ = "memberships"
    __label__ = "Membership"
