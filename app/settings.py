from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Content
    POSTS_DIR: str = "content/posts"
    POSTS_PATTERN: str = "*.md"
    WATCH_CONTENT: bool = False
    WATCH_INTERVAL_SECONDS: float = 2.0

    # Site
    SITE_URL: str = "http://localhost:3000"
    SITE_TITLE: str = "Cooper Wallace Blog"
    SITE_DESCRIPTION: str = "Engineering insights and technical blog"

    # Post defaults
    DEFAULT_TITLE: str = "Untitled"
    DEFAULT_AUTHOR: str = "Cooper Wallace"
    DEFAULT_AUTHOR_IMAGE: str = (
        "https://blog-photo-bucket.s3.amazonaws.com/"
        "high_qual_pfp_informal_cropped_circle.jpg"
    )
    DEFAULT_POST_IMAGE: str = "/default-post-image.jpg"
    DEFAULT_TTR: str = "5 min"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Admin key for reload
    BLOG_API_KEY: str = ""


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
