"""Tests for post payload validation and listing query state."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from inkpost.schemas.auth import Identity
from inkpost.schemas.post import (
    PostCreate,
    PostResponse,
    PostUpdate,
    QueryState,
    RequestContext,
    derive_excerpt,
    normalize_tags,
)


class TestNormalizeTags:
    def test_comma_separated_string(self) -> None:
        assert normalize_tags(" go , tutorial,,  ") == ["go", "tutorial"]

    def test_list_is_trimmed_in_order(self) -> None:
        assert normalize_tags(["b ", " a", ""]) == ["b", "a"]

    def test_none(self) -> None:
        assert normalize_tags(None) == []


class TestPostCreate:
    def test_valid_payload_with_aliases(self) -> None:
        post = PostCreate.model_validate(
            {
                "title": "  Go Basics ",
                "content": "Goroutines",
                "imageUrl": "https://res.cloudinary.com/demo/image/upload/go.png",
                "tags": "go, tutorial",
            },
        )

        assert post.title == "Go Basics"
        assert str(post.image_url) == "https://res.cloudinary.com/demo/image/upload/go.png"
        assert post.tags == ["go", "tutorial"]

    @pytest.mark.parametrize("field", ["title", "content"])
    def test_blank_required_fields_rejected(self, field: str) -> None:
        payload = {"title": "T", "content": "C", field: "   "}

        with pytest.raises(ValidationError, match="Title and content are required"):
            PostCreate.model_validate(payload)

    def test_blank_excerpt_is_derived(self) -> None:
        content = "x" * 200
        post = PostCreate(title="T", content=content, excerpt="  ")

        assert post.excerpt == "x" * 150 + "..."

    def test_explicit_excerpt_kept(self) -> None:
        assert PostCreate(title="T", content="C", excerpt=" Short ").excerpt == "Short"

    def test_blank_image_url_means_none(self) -> None:
        assert PostCreate(title="T", content="C", imageUrl="  ").image_url is None

    def test_invalid_image_url_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PostCreate(title="T", content="C", imageUrl="not a url")

    def test_title_length_limit(self) -> None:
        with pytest.raises(ValidationError):
            PostCreate(title="x" * 201, content="C")


class TestPostUpdate:
    def test_only_provided_fields_are_set(self) -> None:
        update = PostUpdate(title="New")

        assert update.model_dump(exclude_unset=True, exclude_none=True) == {"title": "New"}

    def test_blank_title_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PostUpdate(title=" ")

    def test_blank_excerpt_rederived_from_new_content(self) -> None:
        update = PostUpdate(content="Fresh body", excerpt="")

        assert update.excerpt == "Fresh body..."

    def test_blank_excerpt_without_content_is_no_change(self) -> None:
        assert PostUpdate(excerpt="").excerpt is None

    def test_tags_string(self) -> None:
        assert PostUpdate(tags="a, b").tags == ["a", "b"]


class TestPostResponse:
    def test_naive_timestamps_become_utc(self) -> None:
        naive = datetime(2025, 1, 1, 10, 0)
        response = PostResponse(
            id="abc",
            title="T",
            content="C",
            excerpt="E",
            tags=[],
            createdAt=naive,
            updatedAt=naive,
        )

        assert response.created_at == datetime(2025, 1, 1, 10, 0, tzinfo=UTC)


class TestQueryState:
    def test_defaults(self) -> None:
        state = QueryState.from_params()

        assert state == QueryState(search_text="", active_tag=None, page=1)
        assert state.has_search is False

    @pytest.mark.parametrize("raw", ["abc", "0", "-4", "", "1.5"])
    def test_bad_page_falls_back_to_first(self, raw: str) -> None:
        assert QueryState.from_params(page=raw).page == 1

    def test_valid_page(self) -> None:
        assert QueryState.from_params(page="3").page == 3

    def test_empty_tag_is_none(self) -> None:
        assert QueryState.from_params(tag="").active_tag is None

    def test_whitespace_search_is_not_a_search(self) -> None:
        assert QueryState.from_params(q="  ").has_search is False

    def test_is_immutable(self) -> None:
        state = QueryState.from_params(q="go")
        with pytest.raises(AttributeError):
            state.page = 2  # type: ignore[misc]


class TestRequestContext:
    def test_anonymous(self) -> None:
        assert RequestContext().is_admin is False

    def test_admin(self) -> None:
        identity = Identity(
            email="admin@example.com",
            jti="j",
            expires_at=datetime(2030, 1, 1, tzinfo=UTC),
        )
        assert RequestContext(identity=identity).is_admin is True


def test_derive_excerpt_length() -> None:
    assert derive_excerpt("abcdef", 3) == "abc..."
