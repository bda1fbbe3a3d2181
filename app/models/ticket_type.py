from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import TimestampMixin, UUIDMixin


class TicketType(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "ticket_types"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_refundable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
