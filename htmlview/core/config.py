from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="HTMLVIEW_", extra="ignore")

    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Document acquisition
    FETCH_TIMEOUT_SECONDS: float = 10.0
    FETCH_USER_AGENT: str = "htmlview/0.1 (+https://pypi.org/project/htmlview/)"
    MAX_HTML_SIZE_MB: int = 10  # Maximum HTML content size in MB

    # Rendering defaults threaded through to the renderer
    DEFAULT_EM_SIZE: float = 14
    ROOT_TAG_NAME: str = "body"


settings = Settings()
