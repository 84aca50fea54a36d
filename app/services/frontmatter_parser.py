import logging
import re

import frontmatter
from frontmatter.default_handlers import BaseHandler

logger = logging.getLogger(__name__)

QUOTE_CHARS = ("'", '"')


class KeyValueHandler(BaseHandler):
    """
    Frontmatter handler for the blog's flat `key: value` header.

    This is a deliberately small subset of YAML: one key per line, split on
    the first colon, no nesting, no multi-line scalars and no dash lists.
    `tags` is a comma separated string and is loaded as a tuple.
    """

    FM_BOUNDARY = re.compile(
        r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
    )
    START_DELIMITER = "---"
    END_DELIMITER = "---"

    def detect(self, text: str) -> bool:
        return bool(self.FM_BOUNDARY.match(text))

    def split(self, text: str) -> tuple[str, str]:
        match = self.FM_BOUNDARY.match(text)
        if not match:
            raise ValueError("No frontmatter block found")
        return match.group(1), text[match.end() :]

    def load(self, fm: str) -> dict:
        metadata = {}
        for line in fm.splitlines():
            if not line.strip() or ":" not in line:
                continue
            key, _, value = line.partition(":")
            key = key.strip()
            if not key:
                continue
            value = _strip_quotes(value.strip())
            if key == "tags":
                metadata[key] = split_tags(value)
            else:
                metadata[key] = value
        return metadata

    def export(self, metadata: dict, **kwargs) -> str:
        lines = []
        for key, value in metadata.items():
            if isinstance(value, (list, tuple)):
                value = ", ".join(str(item) for item in value)
            lines.append(f"{key}: {value}")
        return "\n".join(lines)


def split_tags(value: str) -> tuple[str, ...]:
    return tuple(tag.strip() for tag in value.split(",") if tag.strip())


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] in QUOTE_CHARS and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_markdown(text: str) -> frontmatter.Post:
    """
    Split raw markdown into header metadata and body.

    Text without a frontmatter block is accepted as-is: empty metadata and
    the full text as content.
    """
    handler = KeyValueHandler()
    stripped = text.lstrip("\ufeff")

    if not handler.detect(stripped):
        logger.debug("No frontmatter block found, using full text as content")
        return frontmatter.Post(text, handler=handler)

    fm, content = handler.split(stripped)
    post = frontmatter.Post(content, handler=handler)
    post.metadata.update(handler.load(fm))
    return post
