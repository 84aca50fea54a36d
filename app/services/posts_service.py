import logging
from typing import List, Optional

from app.schemas.blog import Post, PostSummary
from app.services.content_loader import ContentLoader
from app.services.rss_service import generate_rss_feed
from app.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class PostsService:
    def __init__(self, loader: ContentLoader, settings: Settings = default_settings):
        self.loader = loader
        self.settings = settings

    def list_posts(
        self,
        tag: Optional[str] = None,
        q: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[PostSummary]:
        tags = [tag] if tag else []
        posts = self.loader.collection.search(q or "", tags)
        if limit is not None:
            posts = posts[: max(limit, 0)]
        return [post.summary() for post in posts]

    def get_post(self, slug: str) -> Optional[Post]:
        return self.loader.get_by_slug(slug)

    def list_tags(self) -> List[str]:
        return sorted(self.loader.get_all_tags())

    def posts_for_tag(self, tag: str) -> List[PostSummary]:
        return [post.summary() for post in self.loader.get_by_tag(tag)]

    def rss_feed(self) -> str:
        return generate_rss_feed(
            self.loader.collection,
            site_url=self.settings.SITE_URL,
            title=self.settings.SITE_TITLE,
            description=self.settings.SITE_DESCRIPTION,
            author=self.settings.DEFAULT_AUTHOR,
        )

    def reload(self) -> int:
        posts = self.loader.load_all()
        logger.info(f"Reloaded {len(posts)} posts")
        return len(posts)
