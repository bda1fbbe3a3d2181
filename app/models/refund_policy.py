from decimal import Decimal

from sqlalchemy import Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import TimestampMixin, UUIDMixin


class RefundPolicy(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "refund_policies"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    refund_window_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    refund_percentage: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False, default=100)
