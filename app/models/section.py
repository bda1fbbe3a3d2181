import uuid

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.common import TimestampMixin, UUIDMixin
from app.models.seat_map import SeatMap


class Section(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "sections"

    seat_map_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("seat_maps.id"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    seat_map: Mapped[SeatMap] = relationship()
