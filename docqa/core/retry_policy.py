"""
Retry policy for outbound calls.

Bounded attempts with a pluggable backoff strategy, built on tenacity.
The default is a fixed delay with no jitter.

Dependencies: tenacity
System role: Transient-failure handling for vector index queries
"""

import logging
from dataclasses import dataclass, field

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)
from tenacity.wait import wait_base

from docqa.configs.pipeline import PipelineSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Attempt bound plus backoff between attempts.

    Attributes:
        max_attempts: Total attempts, including the first call
        backoff_ms: Fixed delay used when no custom wait strategy is given
        wait: Optional tenacity wait strategy overriding backoff_ms
    """

    max_attempts: int = 2
    backoff_ms: int = 500
    wait: wait_base | None = field(default=None, compare=False)

    @classmethod
    def from_settings(cls, settings: PipelineSettings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.retrieval_max_attempts,
            backoff_ms=settings.retrieval_backoff_ms,
        )

    def retrying(self, operation: str) -> AsyncRetrying:
        """
        Build an AsyncRetrying controller for one logical call.

        The last exception is re-raised unchanged once attempts are exhausted.

        Args:
            operation: Name used in retry log lines

        Returns:
            AsyncRetrying: Iterate with ``async for attempt in ...``
        """

        def _log_retry(retry_state: RetryCallState) -> None:
            error = retry_state.outcome.exception() if retry_state.outcome else None
            logger.warning(
                f"{__name__}:{operation} - Attempt {retry_state.attempt_number}/"
                f"{self.max_attempts} failed ({type(error).__name__}: {error}), retrying"
            )

        return AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self.wait or wait_fixed(self.backoff_ms / 1000),
            retry=retry_if_exception_type(Exception),
            before_sleep=_log_retry,
            reraise=True,
        )
