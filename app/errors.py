class ContentError(RuntimeError):
    """Base class for failures while loading blog content."""


class PostSourceError(ContentError):
    """Raised when the posts directory cannot be discovered or listed."""


class DuplicateSlugError(ContentError):
    """Raised when two source files resolve to the same post slug."""

    def __init__(self, slug: str, first_path: str, second_path: str):
        self.slug = slug
        self.first_path = first_path
        self.second_path = second_path
        super().__init__(
            f"Duplicate slug '{slug}' from {first_path} and {second_path}"
        )
