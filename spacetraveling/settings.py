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

    # Prismic
    PRISMIC_API_ENDPOINT: str = "https://spacetraveling.cdn.prismic.io/api/v2"
    PRISMIC_ACCESS_TOKEN: str = ""
    PRISMIC_POST_TYPE: str = "posts"
    PRISMIC_TIMEOUT_SECONDS: float = 15.0

    # Blog
    POSTS_PAGE_SIZE: int = 1
    BASE_BLOG_URL: str = "http://localhost:3000"

    # Preview
    PREVIEW_COOKIE_NAME: str = "io.prismic.preview"

    # Logging
    LOG_LEVEL: str = "INFO"


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
