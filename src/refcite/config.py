"""Configuration loader with environment variable support."""
import os
from pathlib import Path
from typing import Final

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

PACKAGE_STYLES_DIR: Final[str] = str(Path(__file__).parent / "styles")

# Reference kinds accepted by the normalizer and the forms
REFERENCE_TYPES: Final[tuple] = (
    "article-journal",
    "book",
    "chapter",
    "report",
    "thesis",
    "webpage",
    "paper-conference",
    "patent",
    "personal-communication",
)
DEFAULT_REFERENCE_TYPE: Final[str] = "article-journal"

STYLE_APA: Final[str] = "apa"
DEFAULT_PREFERRED_STYLES: Final[tuple] = (STYLE_APA,)

OUTPUT_HTML: Final[str] = "html"
OUTPUT_TEXT: Final[str] = "text"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Application configuration."""

    # Flask
    SECRET_KEY: str = os.getenv("FLASK_SECRET", "dev-secret-change-me")
    JSON_SORT_KEYS: bool = False

    # Persistence
    SQLALCHEMY_DATABASE_URI: str = os.getenv("DATABASE_URL", "sqlite:///refcite.db")
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False

    # Style catalog
    STYLES_DIR: str = os.getenv("STYLES_DIR", PACKAGE_STYLES_DIR)
    STYLE_EXTENSION: str = os.getenv("STYLE_EXTENSION", ".csl")
    STYLES_AUTO_RELOAD: bool = _env_flag("STYLES_AUTO_RELOAD")

    # Citation rendering
    CITATION_LOCALE: str = os.getenv("CITATION_LOCALE", "en-US")
    DEFAULT_STYLE: str = os.getenv("DEFAULT_STYLE", STYLE_APA)
    FORMAT_CACHE_SIZE: int = int(os.getenv("FORMAT_CACHE_SIZE", "256"))

    # Authentication
    TOKEN_MAX_AGE: int = int(os.getenv("TOKEN_MAX_AGE", str(8 * 60 * 60)))

    # External services
    ZOTERO_API_URL: str = os.getenv("ZOTERO_API_URL", "https://api.zotero.org")
    ZOTERO_TIMEOUT: int = int(os.getenv("ZOTERO_TIMEOUT", "10"))

    # Rate limiting
    RATELIMIT_DEFAULT: str = os.getenv("RATELIMIT_DEFAULT", "200 per day;50 per hour")
    RATELIMIT_STORAGE_URI: str = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_HEADERS_ENABLED: bool = True
    FORMAT_RATE_LIMIT: str = os.getenv("FORMAT_RATE_LIMIT", "120 per minute")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: str = os.getenv("LOG_DIR", "")
