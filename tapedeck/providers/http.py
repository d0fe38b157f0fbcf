"""HTTP helpers shared by the REST-based providers.

Maps provider HTTP responses onto the export error taxonomy and builds the
tenacity retry policy used for throttled catalog searches.
"""

from __future__ import annotations
import logging
import time
from typing import Any, Callable, Dict

import requests
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_random_exponential

from ..errors import AuthError, RateLimitedError, TransientSearchError

logger = logging.getLogger(__name__)

# Upper bound for honouring a server supplied Retry-After
MAX_RETRY_AFTER_SECONDS = 30.0

_fallback_wait = wait_random_exponential(multiplier=1, max=MAX_RETRY_AFTER_SECONDS)


def is_success(response: requests.Response) -> bool:
    return 200 <= response.status_code < 300


def retry_after_seconds(response: requests.Response) -> float | None:
    """Parse the Retry-After header (seconds form only)."""
    raw = response.headers.get("Retry-After")
    if raw is None:
        return None
    try:
        return max(0.0, float(raw))
    except ValueError:
        return None


def json_body(response: requests.Response) -> Dict[str, Any]:
    """Decode a JSON object body; empty bodies decode to ``{}``.

    Raises:
        ValueError: Body is not a JSON object
    """
    if not response.content:
        return {}
    data = response.json()
    if not isinstance(data, dict):
        raise ValueError(f"expected JSON object, got {type(data).__name__}")
    return data


def search_error(response: requests.Response, term: str) -> TransientSearchError | AuthError:
    """Build the error for a non-2xx catalog search response."""
    status = response.status_code
    details = {"status_code": status, "term": term}
    if status in (401, 403):
        return AuthError(f"Provider rejected the credential (HTTP {status})", details=details)
    if status == 429:
        return RateLimitedError(
            "Catalog search rate limited (HTTP 429)",
            retry_after=retry_after_seconds(response),
            details=details,
        )
    return TransientSearchError(f"Catalog search failed (HTTP {status})", details=details)


def _wait_retry_after(retry_state) -> float:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    hint = getattr(exc, "retry_after", None)
    if hint is not None:
        return min(float(hint), MAX_RETRY_AFTER_SECONDS)
    return _fallback_wait(retry_state)


def search_retrying(retries: int, sleep: Callable[[float], None] = time.sleep) -> Retrying:
    """Retry policy for catalog searches.

    Only ``RateLimitedError`` is retried, at most ``retries`` extra times,
    waiting for Retry-After when the provider sends one. ``retries=0`` means a
    single attempt. The last error is re-raised unchanged.
    """
    return Retrying(
        stop=stop_after_attempt(max(0, int(retries)) + 1),
        wait=_wait_retry_after,
        retry=retry_if_exception_type(RateLimitedError),
        sleep=sleep,
        reraise=True,
        before_sleep=lambda rs: logger.debug(f"Search throttled; retry attempt {rs.attempt_number + 1}"),
    )


__all__ = [
    "MAX_RETRY_AFTER_SECONDS",
    "is_success",
    "retry_after_seconds",
    "json_body",
    "search_error",
    "search_retrying",
]
