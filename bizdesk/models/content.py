"""
Content operations models: scheduled social posts, caption library and
hashtag sets per client.
"""

import datetime as dt
from typing import ClassVar, Optional

from pydantic import Field, PositiveInt, field_validator

from bizdesk.config import MAX_NAME_LENGTH, MAX_NOTES_LENGTH

from .base import InputModel, LabelEnum


class ContentStatus(LabelEnum):
    """
    Common workflow tags. The column is free text; these are only the
    defaults the UI offers.
    """

    IDEA = "IDEA"
    DRAFT = "DRAFT"
    SCHEDULED = "SCHEDULED"
    POSTED = "POSTED"


class ContentItemInput(InputModel):
    required_on_create: ClassVar[tuple[str, ...]] = ("client_id",)
    label: ClassVar[str] = "content item"

    id: Optional[PositiveInt] = None
    client_id: Optional[PositiveInt] = None
    platform: str = Field(min_length=1, max_length=50)
    title: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    caption: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)
    hashtags: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)
    status: str = Field(default=ContentStatus.IDEA.value, max_length=50)
    scheduled_date: Optional[dt.date] = None
    posted_date: Optional[dt.date] = None
    cta_hook: Optional[str] = Field(default=None, max_length=500)
    media_path: Optional[str] = Field(default=None, max_length=1024)
    notes: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)

    @field_validator("status")
    @classmethod
    def _upper_status(cls, value: str) -> str:
        return value.upper()


class CaptionInput(InputModel):
    label: ClassVar[str] = "caption"

    client_id: Optional[PositiveInt] = None
    caption: str = Field(min_length=1, max_length=5000)
    platform: Optional[str] = Field(default=None, max_length=50)
    tags: Optional[str] = Field(default=None, max_length=500)


class HashtagSetInput(InputModel):
    label: ClassVar[str] = "hashtag set"

    client_id: Optional[PositiveInt] = None
    hashtags: str = Field(min_length=1, max_length=2000)
    platform: Optional[str] = Field(default=None, max_length=50)
