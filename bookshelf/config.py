import os

from dotenv import load_dotenv

load_dotenv()

_TRUE = {"1", "true", "yes", "on"}


def _env_bool(name, default=False):
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE


class Config:
    SECRET_KEY = os.getenv("BOOKSHELF_SECRET_KEY", "dev-secret-change-me")  # Change this in production
    ENV_NAME = os.getenv("BOOKSHELF_ENV", "development")

    # Database setup
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///books.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Session token cookie
    SESSION_TOKEN_COOKIE = "token"
    SESSION_TOKEN_MAX_AGE = 7 * 24 * 60 * 60
    SESSION_TOKEN_SECURE = _env_bool("BOOKSHELF_SECURE_COOKIES", ENV_NAME == "production")

    # Open Library
    CATALOG_SEARCH_URL = os.getenv("CATALOG_SEARCH_URL", "https://openlibrary.org/search.json")
    CATALOG_COVER_URL = os.getenv("CATALOG_COVER_URL", "https://covers.openlibrary.org/b")
    CATALOG_TIMEOUT = float(os.getenv("CATALOG_TIMEOUT", "5"))

    PAGE_SIZE = 20
    LOG_LEVEL = os.getenv("BOOKSHELF_LOG_LEVEL", "INFO").upper()
