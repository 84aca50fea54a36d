import datetime
import textwrap

from app.repos.posts_repo import InMemoryPostSource
from app.services.content_loader import ContentLoader

FIXED_NOW = datetime.datetime(2024, 6, 1, 12, 0, tzinfo=datetime.timezone.utc)


def md(raw: str) -> str:
    """Dedent an indented markdown literal the way it would sit on disk."""
    return textwrap.dedent(raw).lstrip()


def make_loader(files: dict, now: datetime.datetime = FIXED_NOW) -> ContentLoader:
    return ContentLoader(InMemoryPostSource(files), clock=lambda: now)


SAMPLE_FILES = {
    "content/posts/zero-trust.md": md(
        """
        ---
        title: Zero Trust in Practice
        pubDate: 2024-03-10
        description: Notes from rolling out zero trust
        tags: Security, Cloud Architecture
        ---
        # Zero Trust in Practice

        ## Why it matters
        """
    ),
    "content/posts/pipelines.md": md(
        """
        ---
        title: Hardening CI Pipelines
        pubDate: 2024-05-02
        description: Supply chain checks for every build
        tags: DevSecOps, security, Automation
        ---
        ## Signing artifacts
        """
    ),
    "content/posts/terraform.md": md(
        """
        ---
        title: Terraform Modules
        pubDate: 2023-11-20
        description: Reusable infrastructure
        tags: Infrastructure
        ---
        Body only.
        """
    ),
}


class FakeLoader:
    """
    Minimal loader stand-in that counts reloads.
    """

    def __init__(self, error=None):
        self.error = error
        self.calls = 0

    def load_all(self):
        self.calls += 1
        if self.error:
            raise self.error
        return []


class FakeSnapshotSource:
    """
    Source whose snapshot is set directly by the test.
    """

    def __init__(self, state=None):
        self.state = state or {}

    def snapshot(self):
        return dict(self.state)


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(
        self,
        list_posts_return=None,
        get_post_return=None,
        tags_return=None,
        feed_return="",
        reload_return=0,
        reload_error=None,
    ):
        self._list_posts_return = list_posts_return or []
        self._get_post_return = get_post_return
        self._tags_return = tags_return or []
        self._feed_return = feed_return
        self._reload_return = reload_return
        self._reload_error = reload_error
        self.calls = []

    def list_posts(self, tag=None, q=None, limit=None):
        self.calls.append(("list_posts", tag, q, limit))
        return self._list_posts_return

    def get_post(self, slug: str):
        self.calls.append(("get_post", slug))
        return self._get_post_return

    def list_tags(self):
        return self._tags_return

    def posts_for_tag(self, tag: str):
        self.calls.append(("posts_for_tag", tag))
        return self._list_posts_return

    def rss_feed(self):
        return self._feed_return

    def reload(self):
        if self._reload_error:
            raise self._reload_error
        return self._reload_return
