import logging
from pathlib import Path
from typing import Dict, Mapping, Tuple

from app.errors import PostSourceError

logger = logging.getLogger(__name__)


class FilesystemPostSource:
    """Reads every file matching `pattern` directly under `root`."""

    def __init__(self, root, pattern: str = "*.md", encoding: str = "utf-8"):
        self.root = Path(root)
        self.pattern = pattern
        self.encoding = encoding

    def _files(self):
        if not self.root.is_dir():
            raise PostSourceError(f"Posts directory not found: {self.root}")
        return sorted(p for p in self.root.glob(self.pattern) if p.is_file())

    def read_all(self) -> Dict[str, str]:
        files = {}
        for path in self._files():
            try:
                files[path.as_posix()] = path.read_text(encoding=self.encoding)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Skipping unreadable post file {path}: {e}")
        return files

    def snapshot(self) -> Dict[str, Tuple[int, int]]:
        state = {}
        for path in self._files():
            try:
                stat = path.stat()
            except OSError:
                continue
            state[path.as_posix()] = (stat.st_mtime_ns, stat.st_size)
        return state


class InMemoryPostSource:
    """Fixed path -> text mapping, for scripts and tests."""

    def __init__(self, files: Mapping[str, str]):
        self.files = dict(files)

    def read_all(self) -> Dict[str, str]:
        return dict(self.files)

    def snapshot(self) -> Dict[str, Tuple[int, int]]:
        return {path: (hash(text), len(text)) for path, text in self.files.items()}
