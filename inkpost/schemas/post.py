"""
Post schemas for the Inkpost application.

This module defines the request/response models for posts together with
the per-request query state that drives the public listing page.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
    model_validator,
)

from inkpost.configs import settings
from inkpost.schemas.auth import Identity
from inkpost.utils.helpers import as_utc


def normalize_tags(value: Any) -> list[str]:
    """
    Normalize tags from a list or a comma-separated string.

    Each tag is trimmed and blanks are dropped; order is preserved.
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [tag.strip() for tag in value if isinstance(tag, str) and tag.strip()]


def derive_excerpt(content: str, length: int | None = None) -> str:
    """Build the listing excerpt from the leading part of the content."""
    length = length or settings.EXCERPT_LENGTH
    return content[:length] + "..."


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value.strip() if isinstance(value, str) else value


def _optional_tags(value: Any) -> list[str] | None:
    return None if value is None else normalize_tags(value)


Tags = Annotated[list[str], BeforeValidator(normalize_tags)]
OptionalTags = Annotated[list[str] | None, BeforeValidator(_optional_tags)]
OptionalUrl = Annotated[HttpUrl | None, BeforeValidator(_blank_to_none)]


class PostCreate(BaseModel):
    """Post creation payload (store assigns id and timestamps)."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(
        ...,
        max_length=200,
        description="Post title",
        examples=["Go Basics"],
    )
    content: str = Field(
        ...,
        description="Post content in Markdown",
        examples=["# Go Basics\n\nGoroutines are lightweight threads managed by the runtime."],
    )
    excerpt: str = Field(
        default="",
        max_length=500,
        description="Short summary; derived from content when blank",
    )
    image_url: OptionalUrl = Field(
        default=None,
        alias="imageUrl",
        description="Absolute URL of the cover image",
    )
    tags: Tags = Field(
        default_factory=list,
        description="Tags as a list or a comma-separated string",
        examples=[["go", "tutorial"]],
    )

    @field_validator("title", "content", mode="before")
    @classmethod
    def strip_required(cls, v: Any) -> Any:
        """Trim and reject blank title/content."""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                mssg = "Title and content are required"
                raise ValueError(mssg)
        return v

    @model_validator(mode="after")
    def fill_excerpt(self) -> "PostCreate":
        """Derive the excerpt when the author left it blank."""
        self.excerpt = self.excerpt.strip() or derive_excerpt(self.content)
        return self


class PostUpdate(BaseModel):
    """
    Partial post update.

    Only fields that are explicitly provided and not ``None`` are merged.
    A blank image URL is treated as "no change", not as a removal.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "Go Basics, Revisited",
                "tags": "go, tutorial, concurrency",
            },
        },
    )

    title: str | None = Field(default=None, max_length=200)
    content: str | None = None
    excerpt: str | None = Field(default=None, max_length=500)
    image_url: OptionalUrl = Field(default=None, alias="imageUrl")
    tags: OptionalTags = None

    @field_validator("title", "content", mode="before")
    @classmethod
    def strip_if_provided(cls, v: str | None) -> str | None:
        """Trim title/content if provided; blanks are rejected."""
        if not isinstance(v, str):
            return v
        v = v.strip()
        if not v:
            mssg = "Title and content are required"
            raise ValueError(mssg)
        return v

    @model_validator(mode="after")
    def fill_excerpt(self) -> "PostUpdate":
        """Re-derive a blank excerpt from new content, otherwise leave it unchanged."""
        if self.excerpt is not None and not self.excerpt.strip():
            self.excerpt = derive_excerpt(self.content) if self.content else None
        elif self.excerpt is not None:
            self.excerpt = self.excerpt.strip()
        return self


class PostResponse(BaseModel):
    """Post as returned by the API."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    title: str
    content: str
    excerpt: str
    image_url: str | None = Field(default=None, alias="imageUrl")
    tags: list[str]
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


@dataclass(frozen=True)
class QueryState:
    """
    View state of the public listing, rebuilt from URL parameters.

    Parameters
    ----------
    search_text : str
        Free-text query (``q``).
    active_tag : str | None
        Exact tag filter (``tag``).
    page : int
        1-based page number (``page``).
    """

    search_text: str = ""
    active_tag: str | None = None
    page: int = 1

    @classmethod
    def from_params(
        cls,
        q: str | None = None,
        tag: str | None = None,
        page: str | int | None = None,
    ) -> "QueryState":
        """Parse raw URL parameters; a bad or non-positive page becomes 1."""
        try:
            page_number = int(page) if page is not None else 1
        except (TypeError, ValueError):
            page_number = 1
        return cls(
            search_text=q or "",
            active_tag=tag or None,
            page=max(page_number, 1),
        )

    @property
    def has_search(self) -> bool:
        return bool(self.search_text.strip())


@dataclass(frozen=True)
class RequestContext:
    """Immutable per-request snapshot handed to the query engine."""

    query_state: QueryState = field(default_factory=QueryState)
    identity: Identity | None = None

    @property
    def is_admin(self) -> bool:
        return self.identity is not None


class PageLink(BaseModel):
    """One entry of the pagination control; ellipsis entries have no page."""

    model_config = ConfigDict(populate_by_name=True)

    label: str
    page: int | None = None
    url: str | None = None
    active: bool = False


class PostPage(BaseModel):
    """Visible slice of the listing plus navigation state."""

    model_config = ConfigDict(populate_by_name=True)

    posts: list[PostResponse]
    total: int = Field(description="Number of matching posts")
    page: int
    page_size: int = Field(alias="pageSize")
    total_pages: int = Field(alias="totalPages")
    page_window: list[int | str] = Field(alias="pageWindow")
    previous_disabled: bool = Field(alias="previousDisabled")
    next_disabled: bool = Field(alias="nextDisabled")
    previous_url: str | None = Field(default=None, alias="previousUrl")
    next_url: str | None = Field(default=None, alias="nextUrl")
    links: list[PageLink] = Field(default_factory=list)
    search_text: str = Field(default="", alias="searchText")
    active_tag: str | None = Field(default=None, alias="activeTag")


class TagLink(BaseModel):
    """Tag filter chip; ``url`` toggles the tag and resets the page."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    active: bool = False
    url: str


class TagVocabularyResponse(BaseModel):
    """Distinct, sorted tags across all posts."""

    tags: list[TagLink]


class ImageUploadResponse(BaseModel):
    """Public URL returned by the image host."""

    url: str
