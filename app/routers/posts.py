import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from app import dependencies as deps
from app.schemas.blog import Post, PostSummary
from app.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts", response_model=List[PostSummary])
def list_posts(
    tag: Optional[str] = None,
    q: Optional[str] = None,
    limit: Optional[int] = Query(default=None, ge=0),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get post summaries, newest first, optionally filtered."""
    try:
        return service.list_posts(tag=tag, q=q, limit=limit)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/{slug}", response_model=Post)
def get_post(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single post by slug."""
    try:
        post = service.get_post(slug)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.get("/tags", response_model=List[str])
def list_tags(service: PostsService = Depends(deps.get_posts_service)):
    try:
        return service.list_tags()
    except Exception as e:
        logger.error(f"Unexpected error listing tags: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve tags")


@router.get("/tags/{tag}", response_model=List[PostSummary])
def posts_for_tag(
    tag: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        return service.posts_for_tag(tag)
    except Exception as e:
        logger.error(f"Unexpected error listing posts for tag {tag}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/rss.xml")
def rss_feed(service: PostsService = Depends(deps.get_posts_service)):
    try:
        feed = service.rss_feed()
    except Exception as e:
        logger.error(f"Unexpected error generating feed: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate feed")
    return Response(content=feed, media_type="application/rss+xml")
