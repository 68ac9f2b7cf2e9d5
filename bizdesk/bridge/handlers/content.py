"""
Content pipeline operations.

Handles per-client content items with their activity log, the caption
library and saved hashtag sets. Captions and hashtag sets without a client
are shared across clients.
"""

from bizdesk.errors import NotFoundError
from bizdesk.models import (
    CaptionInput,
    ClientFilter,
    ContentItemInput,
    HashtagSetInput,
    StatusFilter,
)

from .base import HandlerGroup, operation, payload_id, rows


class ContentHandler(HandlerGroup):
    """Operations for content items, captions and hashtag sets."""

    # =========================================================================
    # Content Items
    # =========================================================================

    @operation("get-content-items", "content-items-data")
    def get_content_items(self, payload):
        client_id = payload_id(payload, "client_id")
        status = StatusFilter.from_options(payload).status
        return rows(self.repository.content.list_for_client(client_id, status=status))

    @operation("get-content-item", "content-item-data")
    def get_content_item(self, payload):
        content_id = payload_id(payload)
        item = self.repository.content.get_by_id(content_id)
        if item is None:
            raise NotFoundError("Content item", content_id)
        return item.to_dict()

    @operation("save-content-item", "content-item-saved")
    def save_content_item(self, payload):
        item = self.repository.content.create(ContentItemInput.from_payload(payload))
        return item.to_dict()

    @operation("update-content-item", "content-item-updated")
    def update_content_item(self, payload):
        item = ContentItemInput.from_payload(payload, require_id=True)
        return self.repository.content.update(item).to_dict()

    @operation("delete-content-item", "content-item-deleted")
    def delete_content_item(self, payload):
        content_id = payload_id(payload)
        return {"id": content_id, "deleted": self.repository.content.delete(content_id)}

    @operation("get-content-activities", "content-activities-data")
    def get_content_activities(self, payload):
        return rows(self.repository.content.get_activities(payload_id(payload)))

    # =========================================================================
    # Caption Library / Hashtag Sets
    # =========================================================================

    @operation("get-captions", "captions-data")
    def get_captions(self, payload):
        return rows(self.repository.content.list_captions(_client_filter(payload)))

    @operation("save-caption", "caption-saved")
    def save_caption(self, payload):
        caption = self.repository.content.create_caption(CaptionInput.from_payload(payload))
        return caption.to_dict()

    @operation("delete-caption", "caption-deleted")
    def delete_caption(self, payload):
        caption_id = payload_id(payload)
        deleted = self.repository.content.delete_caption(caption_id)
        return {"id": caption_id, "deleted": deleted}

    @operation("get-hashtag-sets", "hashtag-sets-data")
    def get_hashtag_sets(self, payload):
        return rows(self.repository.content.list_hashtag_sets(_client_filter(payload)))

    @operation("save-hashtag-set", "hashtag-set-saved")
    def save_hashtag_set(self, payload):
        hashtag_set = self.repository.content.create_hashtag_set(
            HashtagSetInput.from_payload(payload)
        )
        return hashtag_set.to_dict()

    @operation("delete-hashtag-set", "hashtag-set-deleted")
    def delete_hashtag_set(self, payload):
        set_id = payload_id(payload)
        deleted = self.repository.content.delete_hashtag_set(set_id)
        return {"id": set_id, "deleted": deleted}


def _client_filter(payload):
    """Client id from the payload, or None for the shared library."""
    if payload is None:
        return None
    if isinstance(payload, dict):
        return ClientFilter.from_payload(payload).client_id
    return payload_id(payload, "client_id")
