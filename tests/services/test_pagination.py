"""Tests for listing pagination, page windows and navigation links."""

from collections.abc import Callable

from pytest import mark

from inkpost.models import PostDB
from inkpost.schemas.post import QueryState
from inkpost.services.pagination import (
    ELLIPSIS,
    navigation,
    page_url,
    page_window,
    paginate,
    slice_page,
    tag_toggle_url,
    total_pages,
)


class TestSliceAndCount:
    def test_slice_first_and_last_page(self) -> None:
        results = list(range(20))

        assert slice_page(results, 1, 9) == list(range(9))
        assert slice_page(results, 3, 9) == [18, 19]

    def test_slice_out_of_range_is_empty(self) -> None:
        assert slice_page(list(range(5)), 4, 9) == []

    def test_slice_does_not_mutate(self) -> None:
        results = [3, 2, 1]
        slice_page(results, 1, 2)
        assert results == [3, 2, 1]

    @mark.parametrize(
        ("count", "expected"),
        [(0, 0), (1, 1), (9, 1), (10, 2), (18, 2), (20, 3)],
    )
    def test_total_pages(self, count: int, expected: int) -> None:
        assert total_pages(count, 9) == expected


class TestPageWindow:
    @mark.parametrize(
        ("current", "total", "expected"),
        [
            (1, 0, []),
            (1, 1, [1]),
            (2, 5, [1, 2, 3, 4, 5]),
            (1, 10, [1, 2, 3, 4, ELLIPSIS, 10]),
            (3, 10, [1, 2, 3, 4, ELLIPSIS, 10]),
            (4, 10, [1, ELLIPSIS, 3, 4, 5, ELLIPSIS, 10]),
            (5, 10, [1, ELLIPSIS, 4, 5, 6, ELLIPSIS, 10]),
            (8, 10, [1, ELLIPSIS, 7, 8, 9, 10]),
            (9, 10, [1, ELLIPSIS, 7, 8, 9, 10]),
            (10, 10, [1, ELLIPSIS, 7, 8, 9, 10]),
            (1, 6, [1, 2, 3, 4, ELLIPSIS, 6]),
            (6, 6, [1, ELLIPSIS, 3, 4, 5, 6]),
        ],
    )
    def test_window(self, current: int, total: int, expected: list[int | str]) -> None:
        assert page_window(current, total) == expected


class TestNavigation:
    def test_first_page(self) -> None:
        nav = navigation(1, 3)
        assert nav.previous_disabled is True
        assert nav.next_disabled is False

    def test_last_page(self) -> None:
        nav = navigation(3, 3)
        assert nav.previous_disabled is False
        assert nav.next_disabled is True

    def test_no_results(self) -> None:
        nav = navigation(1, 0)
        assert nav.previous_disabled is True
        assert nav.next_disabled is True

    def test_page_beyond_range_keeps_next_enabled(self) -> None:
        # Only an exact match on the last page disables "next"
        assert navigation(5, 3).next_disabled is False


class TestPageUrl:
    def test_keeps_other_params_and_replaces_page_in_place(self) -> None:
        params = [("q", "go"), ("page", "2"), ("tag", "tutorial")]

        assert page_url("/posts", params, 3) == "/posts?q=go&page=3&tag=tutorial"

    def test_appends_page_when_absent(self) -> None:
        assert page_url("/posts", {"q": "go"}, 2) == "/posts?q=go&page=2"

    def test_first_page_drops_param(self) -> None:
        assert page_url("/posts", [("page", "2")], 1) == "/posts"
        assert page_url("/posts", [("q", "go"), ("page", "2")], 1) == "/posts?q=go"

    def test_duplicate_page_params_collapse(self) -> None:
        params = [("page", "2"), ("q", "go"), ("page", "5")]

        assert page_url("/posts", params, 4) == "/posts?page=4&q=go"

    def test_values_are_encoded(self) -> None:
        assert page_url("/posts", {"q": "go & rust"}, 2) == "/posts?q=go+%26+rust&page=2"


class TestTagToggleUrl:
    def test_selects_tag_and_drops_page(self) -> None:
        params = [("q", "go"), ("page", "3")]

        assert tag_toggle_url("/posts", params, "tutorial", None) == "/posts?q=go&tag=tutorial"

    def test_replaces_other_active_tag_in_place(self) -> None:
        params = [("tag", "go"), ("q", "intro")]

        assert tag_toggle_url("/posts", params, "rust", "go") == "/posts?tag=rust&q=intro"

    def test_clicking_active_tag_clears_it(self) -> None:
        params = [("tag", "go"), ("page", "2")]

        assert tag_toggle_url("/posts", params, "go", "go") == "/posts"


class TestPaginate:
    def test_scenario_twenty_posts_page_three(self, make_post: Callable[..., PostDB]) -> None:
        posts = [make_post(title=f"Post {i}") for i in range(20)]

        page = paginate(posts, QueryState(page=3), "/posts", [("page", "3")], page_size=9)

        assert page.total == 20
        assert page.total_pages == 3
        assert [p.title for p in page.posts] == ["Post 18", "Post 19"]
        assert page.page_window == [1, 2, 3]
        assert page.previous_disabled is False
        assert page.next_disabled is True
        assert page.previous_url == "/posts?page=2"
        assert page.next_url is None

    def test_links_mark_current_and_ellipsis(self, make_post: Callable[..., PostDB]) -> None:
        posts = [make_post() for _ in range(90)]

        page = paginate(posts, QueryState(page=5), "/posts", [("q", "x"), ("page", "5")], 9)

        labels = [link.label for link in page.links]
        assert labels == ["1", ELLIPSIS, "4", "5", "6", ELLIPSIS, "10"]
        assert page.links[0].url == "/posts?q=x"
        assert page.links[1].url is None
        assert page.links[1].page is None
        assert [link.active for link in page.links if link.page] == [False, False, True, False, False]
        assert page.next_url == "/posts?q=x&page=6"

    def test_empty_results(self) -> None:
        page = paginate([], QueryState(search_text="nothing"), "/posts", {"q": "nothing"})

        assert page.posts == []
        assert page.total == 0
        assert page.total_pages == 0
        assert page.page_window == []
        assert page.previous_disabled is True
        assert page.next_disabled is True
        assert page.search_text == "nothing"

    def test_out_of_range_page(self, make_post: Callable[..., PostDB]) -> None:
        posts = [make_post() for _ in range(3)]

        page = paginate(posts, QueryState(page=7), "/posts", {"page": "7"}, 9)

        assert page.posts == []
        assert page.total == 3
        assert page.page == 7

    def test_serializes_with_camel_case_aliases(self, make_post: Callable[..., PostDB]) -> None:
        page = paginate([make_post(tags=["go"])], QueryState(active_tag="go"), "/posts", {"tag": "go"})

        payload = page.model_dump(by_alias=True)

        assert payload["activeTag"] == "go"
        assert payload["totalPages"] == 1
        assert payload["posts"][0]["tags"] == ["go"]
        assert "createdAt" in payload["posts"][0]
