import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from app.dependencies import get_content_loader
from app.routers import admin, posts
from app.security import get_api_key
from app.services.content_watcher import start_watcher, stop_watcher
from app.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Blog Content API", description="Markdown posts, tags and feed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    loader = get_content_loader()
    loader.load_all()

    watcher_thread = None
    if settings.WATCH_CONTENT:
        watcher_thread = start_watcher(
            loader, loader.source, settings.WATCH_INTERVAL_SECONDS
        )

    try:
        yield
    finally:
        if watcher_thread is not None:
            stop_watcher()
            watcher_thread.join(timeout=10)
            logger.info("Content watcher exited gracefully")


app.router.lifespan_context = lifespan

app.include_router(posts.router)
app.include_router(admin.router, dependencies=[Depends(get_api_key)])


@app.get("/")
async def root():
    return {"message": "Blog content API is running"}
