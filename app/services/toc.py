import re
from typing import List

from app.schemas.blog import TocEntry

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$")
NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def normalize_heading_id(text: str) -> str:
    """Anchor id for a heading: lowercase, runs of non [a-z0-9] become '-'."""
    return NON_ALNUM_RUN.sub("-", text.lower()).strip("-")


def extract_table_of_contents(body: str) -> List[TocEntry]:
    toc = []
    for line in body.splitlines():
        match = HEADING_PATTERN.match(line)
        if not match:
            continue
        title = match.group(2).strip()
        if not title:
            continue
        toc.append(
            TocEntry(
                id=normalize_heading_id(title),
                title=title,
                level=len(match.group(1)),
            )
        )
    return toc
