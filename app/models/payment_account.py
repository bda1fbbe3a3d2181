import uuid

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.billing_address import BillingAddress
from app.models.common import TimestampMixin, UUIDMixin


class PaymentAccount(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "payment_accounts"

    billing_address_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("billing_addresses.id"), index=True, nullable=False
    )
    account_holder: Mapped[str] = mapped_column(String(200), nullable=False)
    account_number_last4: Mapped[str] = mapped_column(String(4), nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    billing_address: Mapped[BillingAddress] = relationship()
