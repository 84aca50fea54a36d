import datetime
import logging
import threading
from dataclasses import dataclass
from email.utils import parsedate_to_datetime
from typing import Callable, Iterable, Iterator, List, Mapping, Optional, Set

from app.errors import DuplicateSlugError
from app.schemas.blog import Frontmatter, ImageRef, Post
from app.services.frontmatter_parser import parse_markdown, split_tags
from app.services.toc import extract_table_of_contents

logger = logging.getLogger(__name__)


def now_utc() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


@dataclass(frozen=True)
class PostDefaults:
    """Fallback values for frontmatter fields a post leaves out."""

    title: str = "Untitled"
    author: str = "Cooper Wallace"
    author_image: str = (
        "https://blog-photo-bucket.s3.amazonaws.com/"
        "high_qual_pfp_informal_cropped_circle.jpg"
    )
    post_image: str = "/default-post-image.jpg"
    ttr: str = "5 min"

    @classmethod
    def from_settings(cls, settings) -> "PostDefaults":
        return cls(
            title=settings.DEFAULT_TITLE,
            author=settings.DEFAULT_AUTHOR,
            author_image=settings.DEFAULT_AUTHOR_IMAGE,
            post_image=settings.DEFAULT_POST_IMAGE,
            ttr=settings.DEFAULT_TTR,
        )


class PostCollection:
    """Immutable, newest-first set of posts with the read-only queries."""

    def __init__(self, posts: Iterable[Post] = ()):
        self._posts = tuple(posts)
        self._by_slug = {post.slug: post for post in self._posts}

    @property
    def posts(self) -> tuple:
        return self._posts

    def __len__(self) -> int:
        return len(self._posts)

    def __iter__(self) -> Iterator[Post]:
        return iter(self._posts)

    def get_by_slug(self, slug: str) -> Optional[Post]:
        return self._by_slug.get(slug)

    def get_by_tag(self, tag: str) -> List[Post]:
        wanted = tag.lower()
        return [
            post
            for post in self._posts
            if any(t.lower() == wanted for t in post.frontmatter.tags)
        ]

    def get_all_tags(self) -> Set[str]:
        return {tag for post in self._posts for tag in post.frontmatter.tags}

    def get_all_slugs(self) -> List[str]:
        return [post.slug for post in self._posts]

    def get_recent(self, limit: int = 5) -> List[Post]:
        return list(self._posts[: max(limit, 0)])

    def search(self, query: str = "", tags: Iterable[str] = ()) -> List[Post]:
        """
        Posts carrying every tag in `tags` (case-insensitive) whose title,
        description or one of its tags contains `query`.
        """
        needle = (query or "").strip().lower()
        wanted = {tag.lower() for tag in tags if tag}
        results = []
        for post in self._posts:
            fm = post.frontmatter
            post_tags = {t.lower() for t in fm.tags}
            if not wanted.issubset(post_tags):
                continue
            if needle and not (
                needle in fm.title.lower()
                or needle in fm.description.lower()
                or any(needle in t for t in post_tags)
            ):
                continue
            results.append(post)
        return results


def derive_slug(path: str) -> str:
    name = path.replace("\\", "/").rsplit("/", 1)[-1]
    return name.removesuffix(".md")


def parse_pub_date(value) -> Optional[datetime.datetime]:
    """Parse a frontmatter date into an aware UTC datetime, or None."""
    if isinstance(value, datetime.datetime):
        parsed = value
    elif isinstance(value, datetime.date):
        parsed = datetime.datetime(value.year, value.month, value.day)
    else:
        text = str(value or "").strip()
        if not text:
            return None
        try:
            parsed = datetime.datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            try:
                parsed = parsedate_to_datetime(text)
            except (TypeError, ValueError, IndexError):
                return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed.astimezone(datetime.timezone.utc)


def normalize_frontmatter(
    metadata: Mapping, defaults: PostDefaults, today: datetime.date
) -> Frontmatter:
    extra = dict(metadata)

    title = extra.pop("title", "") or defaults.title
    author = extra.pop("author", "") or defaults.author
    image_alt = extra.pop("imageAlt", "") or title
    author_image_alt = extra.pop("authorImageAlt", "") or author

    tags = extra.pop("tags", ()) or ()
    if isinstance(tags, str):
        tags = split_tags(tags)

    fields = {
        "title": title,
        "pubDate": extra.pop("pubDate", "") or today.isoformat(),
        "description": extra.pop("description", "") or "",
        "author": author,
        "authorImage": ImageRef(
            url=extra.pop("authorImage", "") or defaults.author_image,
            alt=author_image_alt,
        ),
        "image": ImageRef(
            url=extra.pop("image", "") or defaults.post_image, alt=image_alt
        ),
        "tags": tuple(tags),
        "ttr": extra.pop("ttr", "") or defaults.ttr,
        "projectLink": extra.pop("projectLink", "") or None,
    }
    return Frontmatter.model_validate({**extra, **fields})


def build_post(
    path: str, text: str, defaults: PostDefaults, today: datetime.date
) -> Post:
    parsed = parse_markdown(text)
    return Post(
        slug=derive_slug(path),
        frontmatter=normalize_frontmatter(parsed.metadata, defaults, today),
        content=parsed.content,
        tableOfContents=tuple(extract_table_of_contents(parsed.content)),
    )


def build_collection(
    files: Mapping[str, str], defaults: PostDefaults, now: datetime.datetime
) -> PostCollection:
    """
    Build the sorted collection for one load.

    Files are processed in path order and the sort is stable, so posts with
    the same date keep the same relative order across loads. Undated or
    unparseable dates sort as `now`. Two files with the same slug raise
    DuplicateSlugError.
    """
    today = now.date()
    seen: dict[str, str] = {}
    dated = []

    for path in sorted(files):
        try:
            post = build_post(path, files[path], defaults, today)
        except Exception as e:
            logger.warning(f"Failed to parse post {path}: {e}")
            continue

        if post.slug in seen:
            raise DuplicateSlugError(post.slug, seen[post.slug], path)
        seen[post.slug] = path

        published = parse_pub_date(post.frontmatter.pubDate)
        if published is None:
            logger.debug(
                f"Unparseable pubDate {post.frontmatter.pubDate!r} for {post.slug}"
            )
            published = now
        dated.append((published, post))

    dated.sort(key=lambda item: item[0], reverse=True)
    return PostCollection(post for _, post in dated)


class ContentLoader:
    """
    Owns the live post collection.

    `load_all()` rebuilds the collection from the source and swaps it in
    only once the build has fully succeeded; queries always read a single
    complete collection.
    """

    def __init__(
        self,
        source,
        defaults: Optional[PostDefaults] = None,
        clock: Callable[[], datetime.datetime] = now_utc,
    ):
        self.source = source
        self.defaults = defaults or PostDefaults()
        self.clock = clock
        self._collection = PostCollection()
        self._lock = threading.Lock()

    @property
    def collection(self) -> PostCollection:
        return self._collection

    def load_all(self) -> List[Post]:
        with self._lock:
            files = self.source.read_all()
            collection = build_collection(files, self.defaults, self.clock())
            self._collection = collection
        logger.info(f"Loaded {len(collection)} posts from {len(files)} files")
        return list(collection.posts)

    def get_by_slug(self, slug: str) -> Optional[Post]:
        return self._collection.get_by_slug(slug)

    def get_by_tag(self, tag: str) -> List[Post]:
        return self._collection.get_by_tag(tag)

    def get_all_tags(self) -> Set[str]:
        return self._collection.get_all_tags()

    def get_all_slugs(self) -> List[str]:
        return self._collection.get_all_slugs()

    def get_recent(self, limit: int = 5) -> List[Post]:
        return self._collection.get_recent(limit)
