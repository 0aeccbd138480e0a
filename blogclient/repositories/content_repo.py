# blogclient/repositories/content_repo.py
import uuid
from datetime import datetime, timezone
from typing import Any

from supabase import AsyncClient

from blogclient.core.errors import StoreReadFailure, StoreWriteFailure
from blogclient.repositories.base import parse_row, run_query
from blogclient.schemas.content import BlogPostRead

TABLE = "content"


class ContentRepository:
    """
    Data access layer for blog posts.

    - Pure record store operations (CRUD + ordered listings).
    - Writes are scoped to the owner: update/delete match on user_id too.
    """

    def __init__(self, client: AsyncClient):
        self.client = client

    def _table(self):
        return self.client.table(TABLE)

    # ----- Reads -----

    async def list_all(self, limit: int = 50) -> list[BlogPostRead]:
        """All posts, newest first."""
        rows = await run_query(
            self._table().select("*").order("created_at", desc=True).limit(limit),
            StoreReadFailure,
            "List posts",
        )
        return [parse_row(BlogPostRead, row, StoreReadFailure, "List posts") for row in rows]

    async def list_by_user(self, user_id: uuid.UUID, limit: int = 50) -> list[BlogPostRead]:
        """Posts written by one user, newest first."""
        rows = await run_query(
            self._table()
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(limit),
            StoreReadFailure,
            "List user posts",
        )
        return [parse_row(BlogPostRead, row, StoreReadFailure, "List user posts") for row in rows]

    async def get_by_id(self, post_id: uuid.UUID) -> BlogPostRead | None:
        rows = await run_query(
            self._table().select("*").eq("id", str(post_id)).limit(1),
            StoreReadFailure,
            "Load post",
        )
        return parse_row(BlogPostRead, rows[0], StoreReadFailure, "Load post") if rows else None

    # ----- Writes -----

    async def create(self, user_id: uuid.UUID, data: dict[str, Any]) -> BlogPostRead:
        row = {**data, "user_id": str(user_id)}
        rows = await run_query(self._table().insert(row), StoreWriteFailure, "Create post")
        if not rows:
            raise StoreWriteFailure("Create post failed: no row returned")
        return parse_row(BlogPostRead, rows[0], StoreWriteFailure, "Create post")

    async def update(
        self,
        post_id: uuid.UUID,
        user_id: uuid.UUID,
        changes: dict[str, Any],
    ) -> BlogPostRead | None:
        """
        Update a post owned by `user_id`.

        Returns:
            The updated post, or None if no post matched id + owner.
        """
        changes = {**changes, "updated_at": datetime.now(timezone.utc).isoformat()}
        rows = await run_query(
            self._table()
            .update(changes)
            .eq("id", str(post_id))
            .eq("user_id", str(user_id)),
            StoreWriteFailure,
            "Update post",
        )
        return parse_row(BlogPostRead, rows[0], StoreWriteFailure, "Update post") if rows else None

    async def delete(self, post_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        """Delete a post owned by `user_id`; False if nothing matched."""
        rows = await run_query(
            self._table()
            .delete()
            .eq("id", str(post_id))
            .eq("user_id", str(user_id)),
            StoreWriteFailure,
            "Delete post",
        )
        return bool(rows)
