# blogclient/services/content_service.py
import uuid
from datetime import datetime

from blogclient.core.errors import StoreWriteFailure
from blogclient.repositories.content_repo import ContentRepository
from blogclient.schemas.content import BlogPostCreate, BlogPostRead, BlogPostUpdate
from blogclient.services.session_manager import SessionManager


class ContentService:
    """
    Business logic for blog posts.

    Responsibilities:
      - only logged in users can read or write posts
      - writes re-validate the session and are scoped to the author
    """

    def __init__(self, repo: ContentRepository, sessions: SessionManager):
        self.repo = repo
        self.sessions = sessions

    # ----- Reads -----

    async def list_posts(self, mine: bool = False, limit: int = 50) -> list[BlogPostRead]:
        """All posts (or only the current user's), newest first."""
        user = self.sessions.require_user()
        if mine:
            return await self.repo.list_by_user(user.id, limit=limit)
        return await self.repo.list_all(limit=limit)

    async def get_post(self, post_id: uuid.UUID) -> BlogPostRead | None:
        self.sessions.require_user()
        return await self.repo.get_by_id(post_id)

    # ----- Writes -----

    async def create_post(self, payload: BlogPostCreate) -> BlogPostRead:
        user = await self.sessions.require_session()
        return await self.repo.create(user.id, payload.model_dump(mode="json"))

    async def update_post(self, post_id: uuid.UUID, payload: BlogPostUpdate) -> BlogPostRead:
        """
        Partial update of one of the current user's posts.

        Raises:
            StoreWriteFailure: if the post does not exist or is not owned.
        """
        user = await self.sessions.require_session()
        post = await self.repo.update(
            post_id, user.id, payload.model_dump(mode="json", exclude_unset=True)
        )
        if post is None:
            raise StoreWriteFailure("Post not found or not owned by you")
        return post

    async def delete_post(self, post_id: uuid.UUID) -> None:
        user = await self.sessions.require_session()
        if not await self.repo.delete(post_id, user.id):
            raise StoreWriteFailure("Post not found or not owned by you")


# ----- Display helpers -----


def format_date(value: datetime | str) -> str:
    """Short display date, e.g. 'Oct 17, 2026, 09:30 AM'."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    return value.strftime("%b %d, %Y, %I:%M %p")


def truncate_text(text: str, max_length: int = 100) -> str:
    """Cut `text` to `max_length` characters, adding '...' when cut."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."
