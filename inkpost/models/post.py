"""Post database model using SQLModel."""

from datetime import datetime
from typing import cast
from uuid import uuid4

from pydantic import ConfigDict
from sqlalchemy import JSON, DateTime, Index, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from inkpost.utils.helpers import utc_now


def new_post_id() -> str:
    """Opaque, store-assigned post identifier."""
    return uuid4().hex


class PostDB(SQLModel, table=True):
    """
    Post document as persisted in the store.

    ``image_url`` is stored as an explicit ``NULL`` when a post has no
    image. ``id`` and ``created_at`` never change after insert.
    """

    __tablename__ = cast("declared_attr[str]", "posts")

    __table_args__ = (Index("ix_posts_created_at", "created_at"),)

    id: str = Field(
        default_factory=new_post_id,
        sa_column=Column(String(32), primary_key=True, nullable=False),
        description="Post ID",
    )

    title: str = Field(
        sa_column=Column(String(200), nullable=False),
        description="Post title",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Post content (Markdown)",
    )
    excerpt: str = Field(
        default="",
        sa_column=Column(String(500), nullable=False),
        description="Short summary shown on listing cards",
    )
    image_url: str | None = Field(
        default=None,
        sa_column=Column(String(2048), nullable=True),
        description="Absolute URL of the cover image",
    )
    tags: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Post tags, insertion order preserved",
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "3f2b8c1e9a7d4e56b0c1d2e3f4a5b6c7",
                "title": "Go Basics",
                "content": "# Go Basics\n\nGoroutines are cheap...",
                "excerpt": "A first look at goroutines and channels.",
                "image_url": "https://res.cloudinary.com/demo/image/upload/go.png",
                "tags": ["go", "tutorial"],
            },
        },
    )
