import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.common import TimestampMixin, UUIDMixin
from app.models.currency import Currency
from app.models.enums import ChargebackStatus, status_enum
from app.models.settlement import Settlement


class Chargeback(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "chargebacks"

    settlement_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("settlements.id"), index=True, nullable=False)
    currency_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("currencies.id"), index=True, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    reason: Mapped[str] = mapped_column(String(400), nullable=False)
    status: Mapped[ChargebackStatus] = mapped_column(
        status_enum(ChargebackStatus), nullable=False, default=ChargebackStatus.OPEN
    )
    opened_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    settlement: Mapped[Settlement] = relationship()
    currency: Mapped[Currency] = relationship()
