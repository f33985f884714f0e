"""Announcement model: admin-authored notices shown to all users."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from courthub.models.base import Base, TimestampMixin


class Announcement(TimestampMixin, Base):
    __tablename__ = "announcements"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Announcement {self.title!r}>"
