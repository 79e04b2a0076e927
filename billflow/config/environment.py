import os
import logging
from dataclasses import dataclass
from dotenv import load_dotenv

# Always load .env from the working directory of the process
load_dotenv()


@dataclass(frozen=True)
class Environment:
    """Process configuration read from environment variables."""
    database_url: str
    store_backend: str
    secret_key: str
    access_token_expire_minutes: int
    admin_username: str
    admin_password: str
    cors_origin_regex: str
    log_level: str


def load_environment() -> Environment:
    return Environment(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./billflow.db"),
        store_backend=os.getenv("BILLFLOW_STORE", "memory").lower(),
        secret_key=os.getenv(
            "SECRET_KEY",
            "billflow-secret-key-change-in-production"
        ),
        access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60")),
        admin_username=os.getenv("ADMIN_USERNAME", "admin"),
        admin_password=os.getenv("ADMIN_PASSWORD", "changeme123"),
        cors_origin_regex=os.getenv("CORS_ORIGIN_REGEX", r"https://.*\.vercel\.app"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


settings = load_environment()


def configure_logging(level: str = None):
    """Configure root logging once for the whole process."""
    logging.basicConfig(
        level=level or settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
