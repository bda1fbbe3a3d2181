import uuid

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.common import TimestampMixin, UUIDMixin
from app.models.venue import Venue


class Seat(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "seats"

    venue_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("venues.id"), index=True, nullable=False)
    seat_number: Mapped[str] = mapped_column(String(20), nullable=False)
    row_label: Mapped[str | None] = mapped_column(String(20), nullable=True)
    is_accessible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    venue: Mapped[Venue] = relationship()
