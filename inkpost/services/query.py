"""
Query engine for the public post listing.

Search, tag filtering and the tag vocabulary are computed in memory over a
fresh ``list_all()`` snapshot on every call. The pure helpers below never
mutate their input and preserve its order.
"""

from collections.abc import Iterable, Sequence
from logging import getLogger

from inkpost.configs import file_logger
from inkpost.models.post import PostDB
from inkpost.repositories.post import PostRepository
from inkpost.schemas.post import QueryState, RequestContext

logger = file_logger(getLogger(__name__))


def matches_text(post: PostDB, text: str) -> bool:
    """
    Check whether ``text`` occurs in any searchable field of a post.

    Matching is a case-insensitive substring test over title, content,
    excerpt and every tag. An empty ``text`` matches every post.
    """
    needle = text.lower()
    if needle in post.title.lower():
        return True
    if needle in post.content.lower():
        return True
    if needle in (post.excerpt or "").lower():
        return True
    return any(needle in tag.lower() for tag in post.tags or [])


def filter_by_tag(posts: Sequence[PostDB], tag: str) -> list[PostDB]:
    """Keep posts carrying ``tag`` (case-insensitive exact match)."""
    wanted = tag.lower()
    return [post for post in posts if any(t.lower() == wanted for t in post.tags or [])]


def filter_by_text(posts: Sequence[PostDB], text: str) -> list[PostDB]:
    """Keep posts for which :func:`matches_text` holds."""
    return [post for post in posts if matches_text(post, text)]


def collect_tags(posts: Iterable[PostDB]) -> list[str]:
    """Return the sorted, de-duplicated tags of ``posts``."""
    return sorted({tag for post in posts for tag in post.tags or []})


def apply_query(posts: Sequence[PostDB], query_state: QueryState) -> list[PostDB]:
    """
    Apply the listing's filter precedence to an already-fetched collection.

    Parameters
    ----------
    posts : Sequence[PostDB]
        Snapshot ordered newest first.
    query_state : QueryState
        Parsed URL state.

    Returns
    -------
    list[PostDB]
        An active tag filters first and the search text then narrows the
        tagged posts; search text alone searches everything; otherwise the
        snapshot is returned unchanged.
    """
    if query_state.active_tag:
        tagged = filter_by_tag(posts, query_state.active_tag)
        if query_state.has_search:
            return filter_by_text(tagged, query_state.search_text)
        return tagged
    if query_state.has_search:
        return filter_by_text(posts, query_state.search_text)
    return list(posts)


class QueryEngine:
    """Run listing queries against the post repository."""

    def __init__(self, repository: PostRepository) -> None:
        self.repository = repository

    async def by_tag(self, tag: str) -> list[PostDB]:
        """Posts tagged ``tag``, newest first."""
        return filter_by_tag(await self.repository.list_all(), tag)

    async def search(self, text: str) -> list[PostDB]:
        """Posts matching ``text`` in any searchable field, newest first."""
        return filter_by_text(await self.repository.list_all(), text)

    async def tag_vocabulary(self) -> list[str]:
        """Every distinct tag across all posts, sorted."""
        return collect_tags(await self.repository.list_all())

    async def run(self, context: RequestContext) -> list[PostDB]:
        """
        Resolve the result set for one listing request.

        Args:
            context: Per-request snapshot of the query state and identity

        Returns:
            list[PostDB]: Matching posts in store order
        """
        state = context.query_state
        if state.active_tag:
            results = await self.by_tag(state.active_tag)
            if state.has_search:
                results = filter_by_text(results, state.search_text)
        elif state.has_search:
            results = await self.search(state.search_text)
        else:
            results = await self.repository.list_all()

        logger.debug(
            f"Listing query q={state.search_text!r} tag={state.active_tag!r} -> {len(results)} posts",
        )
        return results
