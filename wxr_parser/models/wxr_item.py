from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WxrCategory(BaseModel):
    """A ``<category>`` entry. WXR stores both categories and tags here."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    domain: Optional[str] = None
    nicename: Optional[str] = None
    value: str = ""


class WxrPostMeta(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    key: Optional[str] = None
    value: Optional[str] = None


class WxrItem(BaseModel):
    """One ``<item>`` of the export channel.

    Single-occurrence tags map to ``Optional[str]``: ``None`` when the element
    is absent, ``""`` when it is present but empty.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        frozen=True,
        populate_by_name=True,
    )

    post_type: Optional[str] = None
    status: Optional[str] = None
    post_id: Optional[str] = None
    post_name: Optional[str] = None
    post_parent: Optional[str] = None
    pub_date: Optional[str] = Field(None, alias="pubDate")
    link: Optional[str] = None
    creator: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    comment_status: Optional[str] = None
    ping_status: Optional[str] = None
    is_sticky: Optional[str] = None
    attachment_url: Optional[str] = None
    content: Optional[str] = None
    excerpt: Optional[str] = None
    categories: List[WxrCategory] = Field(default_factory=list)
    postmeta: List[WxrPostMeta] = Field(default_factory=list)

    def meta_value(self, key: str) -> Optional[str]:
        for entry in self.postmeta:
            if entry.key == key:
                return entry.value
        return None


class WxrDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    link: Optional[str] = None
    wxr_version: Optional[str] = None
    items: List[WxrItem] = Field(default_factory=list)
