from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import TimestampMixin, UUIDMixin


class MerchantAccount(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "merchant_accounts"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    merchant_code: Mapped[str] = mapped_column(String(60), unique=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
