# app/core/config.py

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # --- JWT Config ---
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # --- Database Config ---
    DB_HOST: str
    DB_PORT: int
    DB_NAME: str
    DB_USER: str
    DB_PASS: str
    DB_POOL_MIN: int = 5
    DB_POOL_MAX: int = 20

    # --- Currency rate source ---
    CURRENCY_API_URL: str = "https://open.er-api.com/v6/latest"
    CURRENCY_BASE: str = "USD"
    CURRENCY_API_TIMEOUT: float = 10.0

    # --- Avatars ---
    MEDIA_ROOT: str = "media"
    MEDIA_URL: str = "/media"
    DEFAULT_AVATAR_URL: str = "https://i0.wp.com/sbcf.fr/wp-content/uploads/2018/03/sbcf-default-avatar.png?ssl=1"

    CACHE_TTL_SECONDS: int = 300
    LOG_LEVEL: str = "INFO"

    @property
    def database_url(self) -> str:
        return (
            f"postgresql+asyncpg://"
            f"{self.DB_USER}:{self.DB_PASS}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def asyncpg_url(self) -> str:
        return (
            f"postgresql://"
            f"{self.DB_USER}:{self.DB_PASS}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
