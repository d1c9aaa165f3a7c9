"""Pydantic v2 schemas for site content: blog posts, testimonials, newsletter."""

import json
import uuid

from pydantic import ConfigDict, EmailStr, Field, field_validator

from kasupe.schemas.common import CamelModel, MessageResponse, UTCDatetime


def normalize_paragraphs(raw: object) -> list[str]:
    """Turn blog ``content`` input into a list of non-blank paragraphs.

    Accepts a list, a JSON-encoded list, or a plain string (one paragraph).
    """
    if raw is None or raw == "":
        return []
    if isinstance(raw, list):
        items = raw
    elif isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except ValueError:
            parsed = None
        items = parsed if isinstance(parsed, list) else [raw]
    else:
        raise ValueError("content must be a list of paragraphs or a string")
    return [str(p).strip() for p in items if str(p).strip()]


def _strip(value: object) -> object:
    return value.strip() if isinstance(value, str) else value


# ---------------------------------------------------------------------------
# Blog posts
# ---------------------------------------------------------------------------


class BlogPostCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    tag: str | None = Field(None, max_length=100)
    date: str | None = Field(None, max_length=50)
    reading_time: str | None = Field(None, max_length=50)
    author: str | None = Field(None, max_length=255)
    image: str = Field("", max_length=512)
    excerpt: str | None = None
    content: list[str] = Field(default_factory=list)

    @field_validator("content", mode="before")
    @classmethod
    def _content(cls, value: object) -> list[str]:
        return normalize_paragraphs(value)


class BlogPostUpdate(CamelModel):
    """All fields optional; ``content`` is normalized like on create."""

    title: str | None = Field(None, min_length=1, max_length=255)
    tag: str | None = Field(None, max_length=100)
    date: str | None = Field(None, max_length=50)
    reading_time: str | None = Field(None, max_length=50)
    author: str | None = Field(None, max_length=255)
    image: str | None = Field(None, max_length=512)
    excerpt: str | None = None
    content: list[str] | None = None

    @field_validator("content", mode="before")
    @classmethod
    def _content(cls, value: object) -> list[str] | None:
        return None if value is None else normalize_paragraphs(value)


class BlogPostResponse(CamelModel):
    id: uuid.UUID
    title: str
    tag: str | None = None
    date: str | None = None
    reading_time: str | None = None
    author: str | None = None
    image: str = ""
    excerpt: str | None = None
    content: list[str]
    created_at: UTCDatetime
    updated_at: UTCDatetime

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Testimonials
# ---------------------------------------------------------------------------


class TestimonialCreate(CamelModel):
    """Text fields are trimmed before validation."""

    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field("", max_length=255)
    trip: str = Field("", max_length=255)
    text: str = Field(..., min_length=1)
    rating: int = Field(5, ge=1, le=5)
    image: str = Field("", max_length=512)
    is_active: bool = True

    @field_validator("name", "role", "trip", "text", mode="before")
    @classmethod
    def _trim(cls, value: object) -> object:
        return _strip(value)


class TestimonialUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    role: str | None = Field(None, max_length=255)
    trip: str | None = Field(None, max_length=255)
    text: str | None = Field(None, min_length=1)
    rating: int | None = Field(None, ge=1, le=5)
    image: str | None = Field(None, max_length=512)
    is_active: bool | None = None

    @field_validator("name", "role", "trip", "text", mode="before")
    @classmethod
    def _trim(cls, value: object) -> object:
        return _strip(value)


class TestimonialResponse(CamelModel):
    id: uuid.UUID
    name: str
    role: str
    trip: str
    text: str
    rating: int
    image: str
    is_active: bool
    created_at: UTCDatetime
    updated_at: UTCDatetime

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Newsletter
# ---------------------------------------------------------------------------


class SubscribeRequest(CamelModel):
    email: EmailStr
    source: str = Field("website", max_length=50)

    @field_validator("email", mode="before")
    @classmethod
    def _clean_email(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value


class SubscriberResponse(CamelModel):
    id: uuid.UUID
    email: str
    is_active: bool
    source: str
    created_at: UTCDatetime
    updated_at: UTCDatetime

    model_config = ConfigDict(from_attributes=True)


class SubscribeResponse(MessageResponse):
    subscriber: SubscriberResponse
