import os
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings():
    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./movie_recommendations.db")

    # JWT
    SECRET_KEY_ACCESS: str = os.getenv("SECRET_KEY_ACCESS", "change-me-access-secret")
    SECRET_KEY_REFRESH: str = os.getenv("SECRET_KEY_REFRESH", "change-me-refresh-secret")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "15"))
    REFRESH_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("REFRESH_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))  # 7 days

    # CORS
    ALLOWED_ORIGINS: list = os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")

    # Movie catalog (kinopoisk.dev)
    KINOPOISK_API_KEY: str | None = os.getenv("KINOPOISK_API_KEY")
    KINOPOISK_BASE_URL: str = os.getenv("KINOPOISK_BASE_URL", "https://api.kinopoisk.dev/v1.4")
    CATALOG_TIMEOUT: float = float(os.getenv("CATALOG_TIMEOUT", "10"))
    CATALOG_PAGE_LIMIT: int = int(os.getenv("CATALOG_PAGE_LIMIT", "20"))
    # When off, catalog failures fail the request; when on, the built-in list answers instead.
    CATALOG_FALLBACK_ENABLED: bool = _as_bool(os.getenv("CATALOG_FALLBACK_ENABLED"), False)

    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


settings = Settings()
