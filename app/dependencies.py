from typing import Optional

from fastapi import Depends

from app.repos.posts_repo import FilesystemPostSource
from app.services.content_loader import ContentLoader, PostDefaults
from app.services.posts_service import PostsService
from app.settings import Settings, settings

_loader: Optional[ContentLoader] = None


def build_loader(current_settings: Settings = settings) -> ContentLoader:
    source = FilesystemPostSource(
        current_settings.POSTS_DIR, pattern=current_settings.POSTS_PATTERN
    )
    return ContentLoader(source, defaults=PostDefaults.from_settings(current_settings))


def get_content_loader() -> ContentLoader:
    """Process-wide loader, created on first use."""
    global _loader
    if _loader is None:
        _loader = build_loader()
    return _loader


def get_posts_service(loader: ContentLoader = Depends(get_content_loader)):
    return PostsService(loader=loader, settings=settings)
