import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.common import TimestampMixin, UUIDMixin
from app.models.reservation import Reservation
from app.models.seat import Seat
from app.models.ticket_type import TicketType


class Ticket(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "tickets"

    reservation_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("reservations.id"), index=True, nullable=True
    )
    seat_id: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True), ForeignKey("seats.id"), index=True, nullable=True)
    ticket_type_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("ticket_types.id"), index=True, nullable=False
    )
    ticket_number: Mapped[str] = mapped_column(String(40), unique=True, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    issued_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    reservation: Mapped[Reservation | None] = relationship()
    seat: Mapped[Seat | None] = relationship()
    ticket_type: Mapped[TicketType] = relationship()
