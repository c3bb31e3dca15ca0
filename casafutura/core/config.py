import os
from dotenv import load_dotenv
from pydantic import BaseModel

# Load variables from .env
load_dotenv()


class Settings(BaseModel):
    project_name: str = "La Casa di Città Futura"

    # Storage: "auto" picks github when a repo is configured, otherwise sql
    storage_backend: str = "auto"
    database_url: str = "sqlite+aiosqlite:///./casafutura.db"

    # GitHub-backed JSON collections
    github_owner: str = ""
    github_repo: str = ""
    github_branch: str = "main"
    github_token: str = ""
    github_data_path: str = "public/data"
    github_pages_base_url: str = ""
    github_pages_data_path: str = "data"
    http_timeout_seconds: int = 10

    # Auth
    auth_secret_key: str = "change-me"
    auth_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    manager_email: str = "gestore@cittafutura.it"
    manager_password: str = ""
    manager_name: str = "Gestore"

    # Rate limiting settings
    rate_limit_enabled: bool = True  # Killswitch for quick disable
    rate_limit_bookings: str = "10/minute"
    rate_limit_default: str = ""  # empty: only decorated routes are limited

    # Logging settings
    log_format: str = "console"  # Options: "console", "json"
    log_slow_request_threshold_ms: int = 500  # Log timing only if duration > threshold


settings = Settings(
    project_name=os.environ.get("PROJECT_NAME", "La Casa di Città Futura"),
    storage_backend=os.environ.get("STORAGE_BACKEND", "auto").lower(),
    database_url=os.environ.get("DATABASE_URL", "sqlite+aiosqlite:///./casafutura.db"),
    github_owner=os.environ.get("GITHUB_OWNER", ""),
    github_repo=os.environ.get("GITHUB_REPO", ""),
    github_branch=os.environ.get("GITHUB_BRANCH", "main"),
    github_token=os.environ.get("GITHUB_TOKEN", ""),
    github_data_path=os.environ.get("GITHUB_DATA_PATH", "public/data"),
    github_pages_base_url=os.environ.get("GITHUB_PAGES_BASE_URL", "").rstrip("/"),
    github_pages_data_path=os.environ.get("GITHUB_PAGES_DATA_PATH", "data"),
    http_timeout_seconds=int(os.environ.get("HTTP_TIMEOUT_SECONDS", "10")),
    auth_secret_key=os.environ.get("AUTH_SECRET_KEY", "change-me"),
    auth_algorithm=os.environ.get("AUTH_ALGORITHM", "HS256"),
    access_token_expire_minutes=int(
        os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24))
    ),
    manager_email=os.environ.get("MANAGER_EMAIL", "gestore@cittafutura.it"),
    manager_password=os.environ.get("MANAGER_PASSWORD", ""),
    manager_name=os.environ.get("MANAGER_NAME", "Gestore"),
    rate_limit_enabled=os.environ.get("RATE_LIMIT_ENABLED", "true").lower() == "true",
    rate_limit_bookings=os.environ.get("RATE_LIMIT_BOOKINGS", "10/minute"),
    rate_limit_default=os.environ.get("RATE_LIMIT_DEFAULT", ""),
    log_format=os.environ.get("LOG_FORMAT", "console"),
    log_slow_request_threshold_ms=int(
        os.environ.get("LOG_SLOW_REQUEST_THRESHOLD_MS", "500")
    ),
)
