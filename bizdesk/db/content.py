"""
Content repository module for the per-client content pipeline.

Handles:
- Content items (planned and posted social posts) with an activity log
- The caption library
- Saved hashtag sets
"""

import logging
from typing import Optional

from bizdesk.errors import NotFoundError
from bizdesk.models.content import CaptionInput, ContentItemInput, HashtagSetInput

from .base import BaseRepository
from .dates import iso_date
from .models import Activity, Caption, ContentItem, HashtagSet

logger = logging.getLogger(__name__)


class ContentRepository(BaseRepository):
    """Repository for content items, captions and hashtag sets."""

    # =========================================================================
    # Content Items
    # =========================================================================

    def list_for_client(
        self, client_id: int, status: Optional[str] = None
    ) -> list[ContentItem]:
        query = "SELECT * FROM content_items WHERE client_id = ?"
        params: list = [client_id]
        if status:
            query += " AND status = ?"
            params.append(status.upper())
        query += " ORDER BY created_at DESC, id DESC"

        with self._get_connection() as conn:
            return [ContentItem.from_row(row) for row in conn.execute(query, params)]

    def get_by_id(self, content_id: int) -> Optional[ContentItem]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM content_items WHERE id = ?", (content_id,)
            ).fetchone()
            return ContentItem.from_row(row) if row else None

    def create(self, item: ContentItemInput) -> ContentItem:
        with self._get_connection() as conn:
            content_id = self._insert(
                conn,
                "content_items",
                {"client_id": item.client_id, **self._columns(item)},
            )
            self._log(conn, content_id, f"Created as {item.status}")
            row = conn.execute(
                "SELECT * FROM content_items WHERE id = ?", (content_id,)
            ).fetchone()

        logger.info(f"Created {item.platform} content item {content_id}")
        return ContentItem.from_row(row)

    def update(self, item: ContentItemInput) -> ContentItem:
        """Replace a content item's fields, logging any status change."""
        with self._get_connection() as conn:
            previous = conn.execute(
                "SELECT status FROM content_items WHERE id = ?", (item.id,)
            ).fetchone()
            if previous is None:
                raise NotFoundError("Content item", item.id)

            self._update_fields(
                conn,
                "content_items",
                item.id,
                {**self._columns(item), "updated_at": _now_sql(conn)},
            )
            if previous["status"] != item.status:
                self._log(conn, item.id, f"Status changed to {item.status}")

            row = conn.execute(
                "SELECT * FROM content_items WHERE id = ?", (item.id,)
            ).fetchone()
        return ContentItem.from_row(row)

    def delete(self, content_id: int) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM content_items WHERE id = ?", (content_id,))
            return cursor.rowcount > 0

    def get_activities(self, content_id: int) -> list[Activity]:
        with self._get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT id, action, created_at FROM content_activities
                WHERE content_id = ?
                ORDER BY created_at DESC, id DESC
                """,
                (content_id,),
            )
            return [Activity.from_row(row) for row in cursor.fetchall()]

    @staticmethod
    def _columns(item: ContentItemInput) -> dict:
        return {
            "platform": item.platform,
            "title": item.title,
            "caption": item.caption,
            "hashtags": item.hashtags,
            "status": item.status,
            "scheduled_date": iso_date(item.scheduled_date),
            "posted_date": iso_date(item.posted_date),
            "cta_hook": item.cta_hook,
            "media_path": item.media_path,
            "notes": item.notes,
        }

    @staticmethod
    def _log(conn, content_id: int, action: str):
        conn.execute(
            "INSERT INTO content_activities (content_id, action) VALUES (?, ?)",
            (content_id, action),
        )

    # =========================================================================
    # Caption Library
    # =========================================================================

    def list_captions(self, client_id: Optional[int] = None) -> list[Caption]:
        """Captions for one client, or the shared ones when client_id is None."""
        with self._get_connection() as conn:
            if client_id is None:
                cursor = conn.execute(
                    """
                    SELECT * FROM caption_library
                    WHERE client_id IS NULL
                    ORDER BY created_at DESC, id DESC
                    """
                )
            else:
                cursor = conn.execute(
                    """
                    SELECT * FROM caption_library
                    WHERE client_id = ?
                    ORDER BY created_at DESC, id DESC
                    """,
                    (client_id,),
                )
            return [Caption.from_row(row) for row in cursor.fetchall()]

    def create_caption(self, caption: CaptionInput) -> Caption:
        with self._get_connection() as conn:
            caption_id = self._insert(
                conn,
                "caption_library",
                {
                    "client_id": caption.client_id,
                    "platform": caption.platform,
                    "caption": caption.caption,
                    "tags": caption.tags,
                },
            )
            row = conn.execute(
                "SELECT * FROM caption_library WHERE id = ?", (caption_id,)
            ).fetchone()
        return Caption.from_row(row)

    def delete_caption(self, caption_id: int) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute(
                "DELETE FROM caption_library WHERE id = ?", (caption_id,)
            )
            return cursor.rowcount > 0

    # =========================================================================
    # Hashtag Sets
    # =========================================================================

    def list_hashtag_sets(self, client_id: Optional[int] = None) -> list[HashtagSet]:
        with self._get_connection() as conn:
            if client_id is None:
                cursor = conn.execute(
                    """
                    SELECT * FROM hashtag_sets
                    WHERE client_id IS NULL
                    ORDER BY created_at DESC, id DESC
                    """
                )
            else:
                cursor = conn.execute(
                    """
                    SELECT * FROM hashtag_sets
                    WHERE client_id = ?
                    ORDER BY created_at DESC, id DESC
                    """,
                    (client_id,),
                )
            return [HashtagSet.from_row(row) for row in cursor.fetchall()]

    def create_hashtag_set(self, hashtag_set: HashtagSetInput) -> HashtagSet:
        with self._get_connection() as conn:
            set_id = self._insert(
                conn,
                "hashtag_sets",
                {
                    "client_id": hashtag_set.client_id,
                    "platform": hashtag_set.platform,
                    "hashtags": hashtag_set.hashtags,
                },
            )
            row = conn.execute(
                "SELECT * FROM hashtag_sets WHERE id = ?", (set_id,)
            ).fetchone()
        return HashtagSet.from_row(row)

    def delete_hashtag_set(self, set_id: int) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM hashtag_sets WHERE id = ?", (set_id,))
            return cursor.rowcount > 0


def _now_sql(conn) -> str:
    return conn.execute("SELECT CURRENT_TIMESTAMP").fetchone()[0]
