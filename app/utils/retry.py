# app/utils/retry.py
import requests
import redis
from tenacity import (
    retry,
    retry_if_exception,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.utils.settings import CATALOG_RETRY_ATTEMPTS
from app.utils.logging import get_logger

logger = get_logger(__name__)


def is_transient_http_error(exc: BaseException) -> bool:
    """Connection problems, timeouts and 5xx answers. 4xx means the request itself is wrong."""
    if isinstance(exc, requests.HTTPError):
        return exc.response is not None and exc.response.status_code >= 500
    return isinstance(exc, requests.RequestException)


def _log_retry(retry_state) -> None:
    fn = getattr(retry_state.fn, "__name__", "call")
    logger.warning(
        f"{fn} failed (attempt {retry_state.attempt_number}): {retry_state.outcome.exception()}"
    )


def http_retry(attempts: int = CATALOG_RETRY_ATTEMPTS):
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception(is_transient_http_error),
        before_sleep=_log_retry,
    )


def redis_retry():
    # cart reads and writes are small, fail fast
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        retry=retry_if_exception_type(redis.RedisError),
        before_sleep=_log_retry,
    )
