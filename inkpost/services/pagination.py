"""
Pagination for the public post listing.

The listing is paged in memory after filtering. Page numbers are 1-based;
an out-of-range page yields an empty slice rather than an error.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from math import ceil
from typing import TypeVar
from urllib.parse import urlencode

from inkpost.configs import settings
from inkpost.models.post import PostDB
from inkpost.schemas.post import PageLink, PostPage, PostResponse, QueryState

T = TypeVar("T")

POSTS_PER_PAGE = settings.POSTS_PER_PAGE
ELLIPSIS = "..."
MAX_VISIBLE_PAGES = 5

QueryParams = Mapping[str, str] | Iterable[tuple[str, str]]


@dataclass(frozen=True)
class PageNavigation:
    """Enabled state of the previous/next controls."""

    previous_disabled: bool
    next_disabled: bool


def slice_page(results: Sequence[T], page: int, page_size: int = POSTS_PER_PAGE) -> list[T]:
    """Return the posts visible on ``page``."""
    start = (page - 1) * page_size
    if start < 0:
        return []
    return list(results[start : start + page_size])


def total_pages(result_count: int, page_size: int = POSTS_PER_PAGE) -> int:
    """Number of pages needed for ``result_count`` results."""
    if result_count <= 0:
        return 0
    return ceil(result_count / page_size)


def page_window(current: int, total: int) -> list[int | str]:
    """
    Page numbers shown in the pagination control.

    Parameters
    ----------
    current : int
        Current 1-based page.
    total : int
        Total number of pages.

    Returns
    -------
    list[int | str]
        Up to five pages are listed in full. Beyond that the first and last
        pages are always shown and gaps are collapsed into ``"..."``.

    Examples
    --------
    >>> page_window(1, 10)
    [1, 2, 3, 4, '...', 10]
    >>> page_window(5, 10)
    [1, '...', 4, 5, 6, '...', 10]
    >>> page_window(9, 10)
    [1, '...', 7, 8, 9, 10]
    """
    if total <= MAX_VISIBLE_PAGES:
        return list(range(1, total + 1))
    if current <= 3:
        return [1, 2, 3, 4, ELLIPSIS, total]
    if current >= total - 2:
        return [1, ELLIPSIS, *range(total - 3, total + 1)]
    return [1, ELLIPSIS, current - 1, current, current + 1, ELLIPSIS, total]


def navigation(current: int, total: int) -> PageNavigation:
    return PageNavigation(
        previous_disabled=current == 1,
        next_disabled=current == total or total == 0,
    )


def _pairs(params: QueryParams) -> list[tuple[str, str]]:
    if isinstance(params, Mapping):
        return list(params.items())
    return list(params)


def _build_url(base_url: str, pairs: list[tuple[str, str]]) -> str:
    query = urlencode(pairs)
    return f"{base_url}?{query}" if query else base_url


def page_url(base_url: str, params: QueryParams, page: int) -> str:
    """
    Link to ``page`` that keeps every other query parameter.

    Page 1 is the canonical listing, so its link carries no ``page`` param.
    An existing ``page`` param keeps its position; otherwise it is appended.
    """
    pairs: list[tuple[str, str]] = []
    seen = False
    for key, value in _pairs(params):
        if key != "page":
            pairs.append((key, value))
            continue
        if not seen and page != 1:
            pairs.append(("page", str(page)))
        seen = True
    if not seen and page != 1:
        pairs.append(("page", str(page)))
    return _build_url(base_url, pairs)


def tag_toggle_url(
    base_url: str,
    params: QueryParams,
    tag: str,
    active_tag: str | None,
) -> str:
    """
    Link that selects ``tag``, or clears it when it is already active.

    The ``page`` param is always dropped so a new filter starts on page 1.
    """
    pairs: list[tuple[str, str]] = []
    placed = False
    for key, value in _pairs(params):
        if key == "page":
            continue
        if key == "tag":
            if not placed and active_tag != tag:
                pairs.append(("tag", tag))
            placed = True
            continue
        pairs.append((key, value))
    if not placed and active_tag != tag:
        pairs.append(("tag", tag))
    return _build_url(base_url, pairs)


def _links(current: int, window: list[int | str], base_url: str, params: QueryParams) -> list[PageLink]:
    links: list[PageLink] = []
    for item in window:
        if isinstance(item, int):
            links.append(
                PageLink(
                    label=str(item),
                    page=item,
                    url=page_url(base_url, params, item),
                    active=item == current,
                ),
            )
        else:
            links.append(PageLink(label=item))
    return links


def paginate(
    results: Sequence[PostDB],
    query_state: QueryState,
    base_url: str,
    params: QueryParams,
    page_size: int = POSTS_PER_PAGE,
) -> PostPage:
    """
    Build the visible page of a listing with its navigation state.

    Args:
        results: Filtered posts, newest first
        query_state: Parsed URL state; only ``page`` is used for slicing
        base_url: Path the navigation links point at
        params: Current query parameters, preserved in every link
        page_size: Posts per page

    Returns:
        PostPage: Slice, counts, page window and links
    """
    params = _pairs(params)
    current = query_state.page
    pages = total_pages(len(results), page_size)
    window = page_window(current, pages)
    nav = navigation(current, pages)

    return PostPage(
        posts=[PostResponse.model_validate(post) for post in slice_page(results, current, page_size)],
        total=len(results),
        page=current,
        page_size=page_size,
        total_pages=pages,
        page_window=window,
        previous_disabled=nav.previous_disabled,
        next_disabled=nav.next_disabled,
        previous_url=None if nav.previous_disabled else page_url(base_url, params, current - 1),
        next_url=None if nav.next_disabled else page_url(base_url, params, current + 1),
        links=_links(current, window, base_url, params),
        search_text=query_state.search_text,
        active_tag=query_state.active_tag,
    )
