import logging

from fastapi import APIRouter, Depends, HTTPException

from app import dependencies as deps
from app.errors import ContentError
from app.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin")


@router.post("/reload")
def reload_posts(service: PostsService = Depends(deps.get_posts_service)):
    """Rebuild the post collection from disk."""
    try:
        count = service.reload()
    except ContentError as e:
        logger.error(f"Reload rejected, keeping previous posts: {e}")
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error reloading posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to reload posts")
    return {"posts": count}
