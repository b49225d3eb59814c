"""GET requests with a fixed-delay retry loop."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import requests
from tenacity import (
    RetryCallState,
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from pubmed_authors.errors import RequestError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to attempt a request and how long to wait in between."""

    max_attempts: int = 3
    delay: float = 1.0


class HttpClient:
    """Thin wrapper over ``requests.Session`` that retries failed GETs.

    Every failure (connection error, timeout, 4xx, 5xx) is treated the same
    way: wait ``policy.delay`` seconds and try again until
    ``policy.max_attempts`` attempts have been made.
    """

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.policy = policy or RetryPolicy()
        self.timeout = timeout
        self._session = session or requests.Session()
        self._sleep = sleep

    def get(self, url: str, params: Optional[Dict[str, str]] = None) -> str:
        """Return the response body, raising ``RequestError`` on exhaustion."""
        retrying = Retrying(
            stop=stop_after_attempt(self.policy.max_attempts),
            wait=wait_fixed(self.policy.delay),
            retry=retry_if_exception_type(requests.RequestException),
            sleep=self._sleep,
            before=self._log_attempt,
            before_sleep=self._log_failure,
        )
        try:
            return retrying(self._get_once, url, params)
        except RetryError as exc:
            logger.warning("Request failed.")
            raise RequestError(url, self.policy.max_attempts) from (
                exc.last_attempt.exception()
            )

    def _get_once(self, url: str, params: Optional[Dict[str, str]]) -> str:
        response = self._session.get(url, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.text

    def _log_attempt(self, retry_state: RetryCallState) -> None:
        if retry_state.attempt_number > 1:
            logger.info(
                "Retry attempt %d/%d...",
                retry_state.attempt_number,
                self.policy.max_attempts,
            )

    def _log_failure(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "Request failed, retrying in %.1f seconds: %s",
            self.policy.delay,
            error,
        )


__all__ = ["HttpClient", "RetryPolicy"]
