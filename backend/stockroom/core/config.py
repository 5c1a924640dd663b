import secrets

from pydantic_settings import BaseSettings


def _generate_secret() -> str:
    """Generate a random secret key if none is provided via env."""
    return secrets.token_urlsafe(64)


class Settings(BaseSettings):
    PROJECT_NAME: str = "Stockroom"
    API_PREFIX: str = ""

    # Unset -> in-memory demo store
    DATABASE_URL: str | None = None
    DATABASE_ECHO: bool = False
    DATABASE_POOL_SIZE: int = 5

    SECRET_KEY: str = _generate_secret()  # MUST be set via .env in production
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480  # 8 hours (1 shift)
    ALGORITHM: str = "HS256"

    PASSWORD_MIN_LENGTH: int = 6
    GENERATED_PASSWORD_LENGTH: int = 12

    OWNER_USERNAME: str = "owner"
    OWNER_PASSWORD: str = "owner123"
    OWNER_FULL_NAME: str = "Business Owner"

    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
