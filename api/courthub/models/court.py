"""Court model: a bookable court with a price per slot and its slot inventory."""

from sqlalchemy import Float, String
from sqlalchemy.orm import Mapped, mapped_column

from courthub.models.base import Base, TimestampMixin, json_type


class Court(TimestampMixin, Base):
    __tablename__ = "courts"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    court_type: Mapped[str] = mapped_column(String(50), nullable=False)  # tennis, badminton, squash...
    image: Mapped[str | None] = mapped_column(String(500))
    price: Mapped[float] = mapped_column(Float, nullable=False)

    # Ordered time labels, e.g. ["08:00", "09:00"]
    slots: Mapped[list] = mapped_column(json_type, default=list, nullable=False)

    def __repr__(self) -> str:
        return f"<Court {self.name} ({self.court_type})>"
