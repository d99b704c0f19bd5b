from typing import List

from sqlalchemy import ForeignKey, JSON, Numeric, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from database.models.accounts import UserModel
from database.models.base import Base, IdMixin, TimestampMixin
from database.models.movies import ShowtimeModel


class PurchaseModel(IdMixin, TimestampMixin, Base):
    """Model representing tickets bought by a user for one showtime.

    ``total_price`` is fixed at purchase time from the number of seats and
    the showtime's effective ticket price.
    """
    __tablename__ = "purchases"
    __label__ = "Purchase"

    seats: Mapped[List[str]] = mapped_column(JSON, nullable=False)
    total_price: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    showtime_id: Mapped[int] = mapped_column(
        ForeignKey("showtimes.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    user: Mapped[UserModel] = relationship(UserModel)
    showtime: Mapped[ShowtimeModel] = relationship(ShowtimeModel)

    __table_args__ = (
        CheckConstraint("total_price >= 0", name="check_total_price_positive"),
    )

    def __repr__(self) -> str:
        return (
            f"<PurchaseModel(id={self.id}, user_id={self.user_id}, "
            f"showtime_id={self.showtime_id}, seats={self.seats})>"
        )
