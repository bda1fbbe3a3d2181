from decimal import Decimal

from sqlalchemy import Boolean, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import TimestampMixin, UUIDMixin


class TicketDeliveryMethod(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "ticket_delivery_methods"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    fee: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    is_digital: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
