"""Load and validate environment variables. Uses python-dotenv.

This module is intentionally thin and side-effect free except for loading `.env`.
Callers should use the accessor functions below rather than reading `os.environ`
directly, to keep environment handling consistent.
"""

from pathlib import Path

from dotenv import load_dotenv
import os

from marketplace_admin.domains.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


def _project_root() -> Path:
    """Resolve project root (the directory holding app.py)."""
    return Path(__file__).resolve().parent.parent.parent


def load_config() -> None:
    """
    Load .env from project root. Idempotent; safe to call multiple times.
    Uses override=True to ensure .env values take precedence over existing env vars.
    """
    root = _project_root()
    env_path = root / ".env"
    load_dotenv(env_path, override=True)


def get_required(key: str) -> str:
    """
    Get required env var. Raises if missing or empty.

    Raises:
        ValueError: If key is missing or empty after trimming.
    """
    load_config()
    val = os.getenv(key, "").strip()
    if not val:
        raise ValueError(
            f"Missing required environment variable: {key}. "
            "Set it in .env or export it."
        )
    return val


def get_optional(key: str, default: str = "") -> str:
    """Get optional env var; return default if missing or empty."""
    load_config()
    val = os.getenv(key, "").strip()
    return val if val else default


def get_optional_int(key: str, default: int) -> int:
    """Get optional env var as int; return default if missing or invalid."""
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_optional_float(key: str, default: float) -> float:
    """Get optional env var as float; return default if missing or invalid."""
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# --- Public config accessors ---

def supabase_url() -> str:
    """Required: base URL of the Supabase project (no trailing slash)."""
    return get_required("SUPABASE_URL").rstrip("/")


def supabase_anon_key() -> str:
    """Required: anon (public) API key of the Supabase project."""
    return get_required("SUPABASE_ANON_KEY")


def api_timeout() -> float:
    """Optional: per-request timeout in seconds. Default 30."""
    return get_optional_float("API_TIMEOUT_SECONDS", 30.0)


def api_retry_attempts() -> int:
    """Optional: retries used by the manual retry helper. Default 3."""
    return get_optional_int("API_RETRY_ATTEMPTS", 3)


def api_retry_delay() -> float:
    """Optional: base delay (seconds) for the manual retry helper. Default 1."""
    return get_optional_float("API_RETRY_DELAY_SECONDS", 1.0)


def default_page_size() -> int:
    """Optional: rows per page on list pages. Default 10, capped at 100."""
    size = get_optional_int("DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE)
    if size < 1:
        return DEFAULT_PAGE_SIZE
    return min(size, MAX_PAGE_SIZE)


def default_currency() -> str:
    """Optional: currency used when a row carries none. Default USD."""
    return get_optional("DEFAULT_CURRENCY", "USD").upper()


def log_level() -> str:
    """Optional: logging level name. Default INFO."""
    return get_optional("LOG_LEVEL", "INFO").upper()


def log_file() -> Path | None:
    """Optional: log file path, relative paths resolve against the project root."""
    val = get_optional("LOG_FILE", "")
    if not val:
        return None
    p = Path(val)
    return p if p.is_absolute() else _project_root() / p
