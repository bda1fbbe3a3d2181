import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Numeric
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.common import TimestampMixin, UUIDMixin
from app.models.currency import Currency
from app.models.enums import SettlementStatus, status_enum
from app.models.merchant_account import MerchantAccount


class Settlement(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "settlements"

    merchant_account_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("merchant_accounts.id"), index=True, nullable=False
    )
    currency_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("currencies.id"), index=True, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    status: Mapped[SettlementStatus] = mapped_column(
        status_enum(SettlementStatus), nullable=False, default=SettlementStatus.PENDING
    )
    period_start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    period_end: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    settled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    merchant_account: Mapped[MerchantAccount] = relationship()
    currency: Mapped[Currency] = relationship()
