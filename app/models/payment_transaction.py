import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.card_issuer import CardIssuer
from app.models.card_type import CardType
from app.models.common import TimestampMixin, UUIDMixin
from app.models.payment_gateway import PaymentGateway
from app.models.payment_status import PaymentStatus
from app.models.transaction_fee import TransactionFee


class PaymentTransaction(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "payment_transactions"

    payment_gateway_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("payment_gateways.id"), index=True, nullable=False
    )
    payment_status_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("payment_statuses.id"), index=True, nullable=False
    )
    card_issuer_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("card_issuers.id"), index=True, nullable=True
    )
    card_type_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("card_types.id"), index=True, nullable=True
    )
    transaction_fee_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("transaction_fees.id"), index=True, nullable=True
    )
    external_reference: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    currency_code: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    processed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    payment_gateway: Mapped[PaymentGateway] = relationship()
    payment_status: Mapped[PaymentStatus] = relationship()
    card_issuer: Mapped[CardIssuer | None] = relationship()
    card_type: Mapped[CardType | None] = relationship()
    transaction_fee: Mapped[TransactionFee | None] = relationship()
