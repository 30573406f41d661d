"""
Error type raised by the data-access layer, plus the retry / timeout helpers.
"""

from __future__ import annotations

import concurrent.futures
import time
from typing import Any, Callable, TypeVar

from marketplace_admin.utils.logger import get_logger

logger = get_logger()

T = TypeVar("T")

NETWORK_ERROR_CODE = "network_error"
TIMEOUT_ERROR_CODE = "timeout"

GENERIC_MESSAGE = "An unexpected error occurred. Please try again."
NETWORK_MESSAGE = "Network error. Please check your connection and try again."
TIMEOUT_MESSAGE = "Request timed out. Please try again."
UNAUTHORIZED_MESSAGE = "You are not authorized to perform this action."


class ApiError(Exception):
    """Flat error shape surfaced to the UI: message plus optional code/status."""

    def __init__(self, message: str, code: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status

    def __repr__(self) -> str:
        return f"ApiError(message={self.message!r}, code={self.code!r}, status={self.status!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ApiError):
            return NotImplemented
        return (self.message, self.code, self.status) == (other.message, other.code, other.status)

    def __hash__(self) -> int:
        return hash((self.message, self.code, self.status))

    def __reduce__(self):
        return (ApiError, (self.message, self.code, self.status))

    @property
    def is_network(self) -> bool:
        return self.code in (NETWORK_ERROR_CODE, TIMEOUT_ERROR_CODE)


def as_api_error(exc: BaseException, fallback: str) -> ApiError:
    """Pass ApiError through; wrap anything else with the fallback message."""
    if isinstance(exc, ApiError):
        return exc
    message = str(exc) or fallback
    return ApiError(message)


def describe_api_error(error: ApiError, context: str | None = None) -> tuple[str, str]:
    """
    Pick the user-facing message for an error.

    Returns:
        (level, message) where level is "error" or "warning".
    """
    prefix = f"{context}: " if context else ""
    status = error.status

    if status == 400:
        return "error", f"{prefix}Invalid request. Please check your input and try again."
    if status == 401:
        return "error", UNAUTHORIZED_MESSAGE
    if status == 403:
        return "error", f"{prefix}Access denied. You don't have permission to perform this action."
    if status == 404:
        return "error", f"{prefix}The requested resource was not found."
    if status == 409:
        return "error", f"{prefix}Conflict: {error.message or 'The resource already exists or is in use.'}"
    if status == 422:
        return "error", f"{prefix}Validation failed: {error.message or 'Please check your input.'}"
    if status == 429:
        return "warning", f"{prefix}Too many requests. Please wait a moment and try again."
    if status in (500, 502, 503, 504):
        return "error", f"{prefix}Server error. Please try again later or contact support."
    if error.code == TIMEOUT_ERROR_CODE:
        return "error", TIMEOUT_MESSAGE
    if error.code == NETWORK_ERROR_CODE:
        return "error", NETWORK_MESSAGE
    if error.message:
        return "error", f"{prefix}{error.message}"
    return "error", f"{prefix}{GENERIC_MESSAGE}"


def retry_operation(
    operation: Callable[[], T],
    max_retries: int = 3,
    delay: float = 1.0,
    backoff: bool = True,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Call `operation` until it succeeds, at most `max_retries` extra times.

    Waits `delay * 2**attempt` seconds between attempts (or `delay` when
    backoff is off) and re-raises the last error.
    """
    for attempt in range(max_retries):
        try:
            return operation()
        except Exception as e:
            wait = delay * (2 ** attempt) if backoff else delay
            logger.warning("Attempt %d failed (%s); retrying in %.1fs", attempt + 1, e, wait)
            sleep(wait)
    return operation()


def with_timeout(func: Callable[..., T], timeout: float, *args: Any, **kwargs: Any) -> T:
    """
    Run `func(*args, **kwargs)` and give up after `timeout` seconds.

    The worker thread is not killed; its result is discarded.

    Raises:
        ApiError: code "timeout" when the call does not finish in time.
    """
    pool = concurrent.futures.ThreadPoolExecutor(max_workers=1)
    future = pool.submit(func, *args, **kwargs)
    try:
        return future.result(timeout=timeout)
    except concurrent.futures.TimeoutError:
        ms = int(timeout * 1000)
        logger.warning("Operation %s timed out after %dms", getattr(func, "__name__", func), ms)
        raise ApiError(f"Operation timed out after {ms}ms", code=TIMEOUT_ERROR_CODE) from None
    finally:
        pool.shutdown(wait=False)
