"""Post repository for database operations."""

from logging import getLogger

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.configs import file_logger
from inkpost.errors.database import DatabaseError
from inkpost.models.post import PostDB
from inkpost.schemas.post import PostCreate, PostUpdate
from inkpost.utils.helpers import utc_now

logger = file_logger(getLogger(__name__))


class PostRepository:
    """
    Repository for Post documents.

    Reads degrade instead of raising: a failing store yields an empty list
    or ``None``. Writes differ per operation: ``create`` propagates store
    failures as ``DatabaseError`` while ``update`` and ``remove`` report
    them as ``None`` / ``False``.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def list_all(self) -> list[PostDB]:
        """
        Get every post, newest first.

        Returns:
            list[PostDB]: Posts ordered by creation time descending, or an
            empty list when the store fails.
        """
        # pyrefly: ignore [bad-argument-type]
        query = select(PostDB).order_by(desc(PostDB.created_at))
        try:
            result = await self.session.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError:
            logger.exception("Error fetching posts")
            return []

    async def get_by_id(self, post_id: str) -> PostDB | None:
        """
        Get post by ID.

        Args:
            post_id: Post identifier

        Returns:
            PostDB | None: Post if found, None if missing or on store error
        """
        try:
            result = await self.session.execute(
                # pyrefly: ignore [bad-argument-type]
                select(PostDB).where(PostDB.id == post_id),
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError:
            logger.exception(f"Error fetching post {post_id}")
            return None

    async def create(self, post: PostCreate) -> PostDB:
        """
        Insert a new post.

        Args:
            post: Validated post payload

        Returns:
            PostDB: Created post with its id and both timestamps

        Raises:
            DatabaseError: If the store rejects the insert
        """
        now = utc_now()
        db_post = PostDB(
            title=post.title,
            content=post.content,
            excerpt=post.excerpt,
            image_url=str(post.image_url) if post.image_url else None,
            tags=list(post.tags),
            created_at=now,
            updated_at=now,
        )

        try:
            self.session.add(db_post)
            await self.session.flush()
            await self.session.refresh(db_post)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception("Error creating post")
            raise DatabaseError(detail=f"Failed to create post: {e}") from e
        logger.info(f"Post {db_post.id} created")
        return db_post

    async def update(self, post_id: str, post_update: PostUpdate) -> PostDB | None:
        """
        Merge the provided fields into an existing post.

        Only fields that were explicitly set and are not ``None`` are
        written. ``updated_at`` is refreshed; ``id`` and ``created_at`` are
        never touched.

        Args:
            post_id: Post identifier
            post_update: Partial update payload

        Returns:
            PostDB | None: Re-fetched post, or None if missing or on store error
        """
        db_post = await self.get_by_id(post_id)
        if not db_post:
            return None

        update_data = post_update.model_dump(
            mode="json",
            exclude_unset=True,
            exclude_none=True,
        )
        update_data.pop("id", None)
        update_data.pop("created_at", None)
        update_data["updated_at"] = utc_now()

        try:
            for key, value in update_data.items():
                setattr(db_post, key, value)
            await self.session.flush()
        except SQLAlchemyError:
            await self.session.rollback()
            logger.exception(f"Error updating post {post_id}")
            return None

        return await self.get_by_id(post_id)

    async def remove(self, post_id: str) -> bool:
        """
        Delete post by ID.

        Args:
            post_id: Post identifier

        Returns:
            bool: True if deleted, False if not found or on store error
        """
        db_post = await self.get_by_id(post_id)
        if not db_post:
            return False

        try:
            await self.session.delete(db_post)
            await self.session.flush()
        except SQLAlchemyError:
            await self.session.rollback()
            logger.exception(f"Error deleting post {post_id}")
            return False

        logger.info(f"Post {post_id} deleted")
        return True
