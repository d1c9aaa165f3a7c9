"""Blog post model."""

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from kasupe.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class BlogPost(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A travel article shown on the public blog."""

    __tablename__ = "blog_posts"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    tag: Mapped[str | None] = mapped_column(String(100), nullable=True)  # Safari route, Tips, ...
    date: Mapped[str | None] = mapped_column(String(50), nullable=True)  # display date, e.g. "12 Nov 2025"
    reading_time: Mapped[str | None] = mapped_column(String(50), nullable=True)
    author: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image: Mapped[str] = mapped_column(String(512), default="", nullable=False)
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[list] = mapped_column(JSON, default=list, nullable=False)  # paragraphs

    def __repr__(self) -> str:
        return f"<BlogPost(id={self.id}, title={self.title!r})>"
