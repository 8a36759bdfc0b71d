import logging
from collections.abc import Callable
from typing import Any

import httpx
from tenacity import RetryCallState, retry, retry_if_exception, stop_after_attempt, wait_exponential_jitter
from tenacity.wait import wait_base

logger = logging.getLogger(__name__)

MAX_RETRY_AFTER = 30.0


def is_transient(error: BaseException) -> bool:
    """Whether a webhook failure may succeed when sent again.

    Rejections such as a bad payload (400) or a deleted webhook (401/404) are
    permanent; only rate limiting, server errors and transport failures are retried.
    """
    if isinstance(error, httpx.TransportError):
        return True
    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        return status == httpx.codes.TOO_MANY_REQUESTS or status >= 500
    return False


def _retry_after(retry_state: RetryCallState) -> float | None:
    outcome = retry_state.outcome
    if outcome is None or not outcome.failed:
        return None
    error = outcome.exception()
    if not isinstance(error, httpx.HTTPStatusError):
        return None
    header = error.response.headers.get("Retry-After")
    if header is None:
        return None
    try:
        return min(max(float(header), 0.0), MAX_RETRY_AFTER)
    except ValueError:
        return None


class wait_retry_after(wait_base):  # noqa: N801
    """Sleep for the server's ``Retry-After`` when given, else defer to *fallback*."""

    def __init__(self, fallback: wait_base) -> None:
        self._fallback = fallback

    def __call__(self, retry_state: RetryCallState) -> float:
        delay = _retry_after(retry_state)
        return delay if delay is not None else self._fallback(retry_state)


def default_http_retry(
    label: str, *, wait: wait_base | None = None
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Return a tenacity retry decorator for webhook calls.

    *label* names the endpoint in the warning logged before each retry. *wait*
    replaces the exponential backoff used when the server sends no ``Retry-After``.
    """

    def _log_retry(retry_state: RetryCallState) -> None:
        logger.warning("Retrying %s (attempt %d): %s", label, retry_state.attempt_number, retry_state.outcome)

    return retry(
        stop=stop_after_attempt(3),
        wait=wait_retry_after(wait or wait_exponential_jitter(initial=1, max=10)),
        retry=retry_if_exception(is_transient),
        before_sleep=_log_retry,
        reraise=True,
    )
