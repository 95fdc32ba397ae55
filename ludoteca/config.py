# ludoteca/config.py
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str
    GAMES_COLLECTION: str = "boardgames"
    GAMES_ORDER_BY: str = "name"

    # Ludopedia import
    LUDOPEDIA_URL_MARKER: str = "ludopedia.com.br/jogo/"
    FETCH_STRATEGIES: List[str] = ["direct", "corsproxy", "allorigins"]
    FETCH_TIMEOUT_SECONDS: float = 30.0
    HTTP2: bool = True

    TOAST_SECONDS: float = 3.0

    # Sessions (identity is established by the authenticating proxy in front of us)
    SESSION_COOKIE: str = "ludoteca_session"
    SESSION_TTL_SECONDS: int = 28800  # 8h
    REDIS_URL: Optional[str] = None
    IDENTITY_EMAIL_HEADER: str = "X-Auth-Request-Email"
    IDENTITY_NAME_HEADER: str = "X-Auth-Request-User"
    IDENTITY_PICTURE_HEADER: str = "X-Auth-Request-Picture"

    REFRESH_INTERVAL_MINUTES: int = 10  # 0 = off

    LOG_LEVEL: str = "INFO"


settings = Settings()
