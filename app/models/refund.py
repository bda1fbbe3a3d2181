import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.common import TimestampMixin, UUIDMixin
from app.models.enums import RefundStatus, status_enum
from app.models.payment_transaction import PaymentTransaction


class Refund(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "refunds"

    payment_transaction_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("payment_transactions.id"), index=True, nullable=False
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    reason: Mapped[str | None] = mapped_column(String(400), nullable=True)
    status: Mapped[RefundStatus] = mapped_column(status_enum(RefundStatus), nullable=False, default=RefundStatus.REQUESTED)
    refunded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    payment_transaction: Mapped[PaymentTransaction] = relationship()
