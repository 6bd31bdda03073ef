# server/core/config.py

import os
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Runtime settings read from the environment (and .env, if present)."""
    jwt_secret_key: str | None
    jwt_algorithm: str
    access_token_expire_minutes: int
    bcrypt_rounds: int
    database_url: str
    images_dir: Path
    cors_origins: list[str]
    host: str
    port: int
    log_level: str

    @property
    def token_expires_delta(self) -> timedelta | None:
        if self.access_token_expire_minutes <= 0:
            return None
        return timedelta(minutes=self.access_token_expire_minutes)

    def require_secret(self) -> str:
        if not self.jwt_secret_key:
            raise ValueError(
                "JWT_SECRET_KEY environment variable is required. "
                "Set it to a long random string shared by every API instance."
            )
        return self.jwt_secret_key


@lru_cache
def get_settings() -> Settings:
    return Settings(
        jwt_secret_key=os.getenv("JWT_SECRET_KEY"),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES") or 0),
        bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "12")),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./data/app.db"),
        images_dir=Path(os.getenv("IMAGES_DIR", "data/images")),
        cors_origins=[o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()],
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", "8000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
