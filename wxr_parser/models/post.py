from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PostMeta(BaseModel):
    """Internal bookkeeping that is not written to the rendered post."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    slug: Optional[str] = None
    cover_image_id: Optional[str] = Field(None, alias="coverImageId")
    cover_image_url: Optional[str] = Field(None, alias="coverImageUrl")
    image_urls: List[str] = Field(default_factory=list, alias="imageUrls")
    type: Optional[str] = None


class PostFrontmatter(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    date: str
    slug: Optional[str] = None
    link: Optional[str] = None
    creator: Optional[str] = None
    description: Optional[str] = None
    comment_status: Optional[str] = Field(None, alias="commentStatus")
    ping_status: Optional[str] = Field(None, alias="pingStatus")
    is_sticky: Optional[str] = Field(None, alias="isSticky")
    categories: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    cover_image: Optional[str] = Field(None, alias="coverImage")


class PostRecord(BaseModel):
    meta: PostMeta
    frontmatter: PostFrontmatter
    content: str = ""

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ImageRef(BaseModel):
    """An image belonging to a post.

    ``id`` is the attachment's own post id, or ``None`` for images scraped
    from body markup, which never match a cover image id.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[str] = None
    post_id: Optional[str] = Field(None, alias="postId")
    url: str
