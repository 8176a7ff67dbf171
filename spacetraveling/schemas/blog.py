from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

# Prismic structured text: a list of block dicts, kept opaque here.
RichText = List[Dict[str, Any]]


class PostSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    uid: str
    firstPublicationDate: Optional[datetime] = None
    title: str
    subtitle: str
    author: str


class ContentSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    heading: str = ""
    body: RichText = Field(default_factory=list)


class PostDetail(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    uid: str
    firstPublicationDate: Optional[datetime] = None
    lastPublicationDate: Optional[datetime] = None
    title: str
    subtitle: str
    author: str
    bannerUrl: str
    content: List[ContentSection] = Field(default_factory=list)


class PaginationState(BaseModel):
    model_config = ConfigDict(frozen=True)

    results: List[PostSummary] = Field(default_factory=list)
    nextPageCursor: Optional[str] = None


class AdjacentPost(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    title: str


class AdjacentPosts(BaseModel):
    model_config = ConfigDict(frozen=True)

    previous: Optional[AdjacentPost] = None
    next: Optional[AdjacentPost] = None


class PostListItem(PostSummary):
    publishedOn: Optional[str] = None


class PostsPagination(BaseModel):
    results: List[PostListItem] = Field(default_factory=list)
    nextPageCursor: Optional[str] = None
    preview: bool = False


class RenderedSection(BaseModel):
    heading: str
    html: str


class PostPage(BaseModel):
    uid: str
    title: str
    subtitle: str
    author: str
    bannerUrl: str
    firstPublicationDate: Optional[datetime] = None
    lastPublicationDate: Optional[datetime] = None
    publishedOn: Optional[str] = None
    editedAt: Optional[str] = None
    readingTime: int = 0
    content: List[RenderedSection] = Field(default_factory=list)
    navigation: AdjacentPosts = Field(default_factory=AdjacentPosts)
    preview: bool = False
