import uuid

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.common import TimestampMixin, UUIDMixin
from app.models.section import Section


class Row(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "seat_rows"

    section_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("sections.id"), index=True, nullable=False)
    label: Mapped[str] = mapped_column(String(20), nullable=False)
    seat_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    section: Mapped[Section] = relationship()
