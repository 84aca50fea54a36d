import argparse
import logging
from pathlib import Path

from app.dependencies import build_loader
from app.services.posts_service import PostsService
from app.settings import settings

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Write the blog RSS feed to disk.")
    parser.add_argument("--posts-dir", default=settings.POSTS_DIR)
    parser.add_argument("--output", default="rss.xml")
    args = parser.parse_args(argv)

    current = settings.model_copy(update={"POSTS_DIR": args.posts_dir})
    service = PostsService(build_loader(current), settings=current)
    count = service.reload()

    output = Path(args.output)
    output.write_text(service.rss_feed(), encoding="utf-8")
    logger.info(f"Wrote {count} posts to {output}")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper()))
    raise SystemExit(main())
