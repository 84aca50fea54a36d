import logging
import threading
from typing import Dict, Optional

from app.errors import ContentError

logger = logging.getLogger(__name__)

STOP_WATCHER_EVENT = threading.Event()  # thread-safe shutdown signal


def poll_once(loader, source, previous: Optional[Dict]) -> Dict:
    """
    Reload posts when the source snapshot differs from `previous`.

    A failed reload leaves the loader's current collection in place.
    """
    current = source.snapshot()
    if previous is None or current == previous:
        return current

    logger.info("Content change detected, reloading posts")
    try:
        loader.load_all()
    except ContentError as e:
        logger.error(f"Reload failed, keeping previous posts: {e}")
    return current


def watch_content(loader, source, interval: float = 2.0):
    logger.info("Content watcher thread started")
    backoff = 1
    snapshot = None

    while not STOP_WATCHER_EVENT.is_set():
        try:
            snapshot = poll_once(loader, source, snapshot)
            backoff = 1
            STOP_WATCHER_EVENT.wait(interval)
            continue
        except Exception as e:
            logger.error(f"Unexpected watcher error: {e}")

        # Retry with exponential backoff
        if not STOP_WATCHER_EVENT.is_set():
            logger.info(f"Retrying in {backoff} seconds...")
            STOP_WATCHER_EVENT.wait(backoff)
            backoff = min(backoff * 2, 60)  # cap backoff at 60s

    logger.info("Content watcher stopped")


def start_watcher(loader, source, interval: float = 2.0):
    """Start the watcher in a daemon thread"""
    STOP_WATCHER_EVENT.clear()
    thread = threading.Thread(
        target=watch_content,
        args=(loader, source, interval),
        daemon=True,
        name="ContentWatcher",
    )
    thread.start()
    logger.info("Content watcher started in background thread")
    return thread


def stop_watcher():
    """Signal the watcher to stop"""
    STOP_WATCHER_EVENT.set()
    logger.info("Content watcher stopping...")
