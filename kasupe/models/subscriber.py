"""Newsletter subscriber model."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from kasupe.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Subscriber(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """An email address subscribed to the newsletter (stored lowercased)."""

    __tablename__ = "subscribers"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    source: Mapped[str] = mapped_column(String(50), default="website", nullable=False)  # website, popup, ...

    def __repr__(self) -> str:
        return f"<Subscriber email={self.email!r} active={self.is_active}>"
