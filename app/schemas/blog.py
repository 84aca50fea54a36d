from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ImageRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    alt: str = ""


class Frontmatter(BaseModel):
    # unknown keys from the header are kept as passthrough metadata
    model_config = ConfigDict(frozen=True, extra="allow")

    title: str
    pubDate: str
    description: str = ""
    author: str
    authorImage: ImageRef
    image: ImageRef
    tags: Tuple[str, ...] = Field(default_factory=tuple)
    ttr: str
    projectLink: Optional[str] = None


class TocEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    level: int = Field(ge=1, le=6)


class PostSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    frontmatter: Frontmatter


class Post(PostSummary):
    content: str  # Markdown body without the frontmatter header
    tableOfContents: Tuple[TocEntry, ...] = Field(default_factory=tuple)

    def summary(self) -> PostSummary:
        return PostSummary(slug=self.slug, frontmatter=self.frontmatter)
