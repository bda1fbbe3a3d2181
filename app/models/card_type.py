from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import TimestampMixin, UUIDMixin


class CardType(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "card_types"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
