import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.common import TimestampMixin, UUIDMixin
from app.models.customer import Customer
from app.models.enums import BookingStatus, status_enum
from app.models.event_schedule import EventSchedule
from app.models.payment import Payment


class Booking(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "bookings"

    customer_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("customers.id"), index=True, nullable=False)
    event_schedule_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("event_schedules.id"), index=True, nullable=False
    )
    payment_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("payments.id"), index=True, nullable=True
    )
    booking_reference: Mapped[str] = mapped_column(String(40), unique=True, nullable=False)
    status: Mapped[BookingStatus] = mapped_column(status_enum(BookingStatus), nullable=False, default=BookingStatus.PENDING)
    ticket_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    booked_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)

    customer: Mapped[Customer] = relationship()
    event_schedule: Mapped[EventSchedule] = relationship()
    payment: Mapped[Payment | None] = relationship()
