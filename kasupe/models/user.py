"""Account models: dashboard admins and site customers."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from kasupe.database import Base, TimestampMixin, UUIDPrimaryKeyMixin

ADMIN_ROLE = "admin"
CUSTOMER_ROLE = "customer"


class AdminUser(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Staff account with access to the admin dashboard."""

    __tablename__ = "admin_users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(50), default=ADMIN_ROLE, nullable=False)

    def __repr__(self) -> str:
        return f"<AdminUser id={self.id} email={self.email!r} role={self.role!r}>"


class Customer(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Customer account created through the public signup form."""

    __tablename__ = "customers"

    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(50), default=CUSTOMER_ROLE, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Customer id={self.id} email={self.email!r}>"
