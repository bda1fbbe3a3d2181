from decimal import Decimal

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import TimestampMixin, UUIDMixin


class TransactionFee(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "transaction_fees"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    fixed_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    percentage: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False, default=0)
