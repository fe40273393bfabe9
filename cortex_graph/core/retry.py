"""
Retry Policy - exponential backoff around every remote call.

One immutable policy is shared by all operations of a client (and may be
shared across clients). It holds no per-call state.

Flow per call:
    attempt 1 ──fail──► wait base*2 ──► attempt 2 ──fail──► wait base*4 ──► ...
    success at any point returns; each failure that is retried is logged.
    After retry_count retries the last failure propagates unchanged, unlogged.

Cancellation (cancel_event set) aborts the in-flight attempt or the pending
backoff wait at once and raises QueryCancelledError. It is never retried.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional

from .exceptions import QueryCancelledError

logger = logging.getLogger(__name__)


def _cause_of(error: BaseException) -> str:
    cause = error.__cause__ or error.__context__
    return f" {cause}" if cause else ""


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounded exponential-backoff retry.

    Usage:
        policy = RetryPolicy()
        data = await policy.execute(lambda: provider.get(url), cancel_event=event)
    """
    retry_count: int = 3
    base_delay: float = 0.1  # seconds

    @classmethod
    def from_config(cls, config) -> 'RetryPolicy':
        """Create from Config object."""
        return cls(retry_count=config.retry_count, base_delay=config.retry_base_delay)

    def delay_for(self, attempt: int) -> float:
        """Backoff before retry number `attempt` (1-based): base * 2**attempt."""
        return self.base_delay * (2 ** attempt)

    def delays(self) -> List[float]:
        return [self.delay_for(k) for k in range(1, self.retry_count + 1)]

    async def execute(
        self,
        operation: Callable[[], Awaitable[Any]],
        cancel_event: Optional[asyncio.Event] = None,
        description: str = None,
    ) -> Any:
        """
        Run `operation` (a zero-argument coroutine factory) with retries.

        Args:
            operation: Called once per attempt; must return a fresh awaitable
            cancel_event: Optional event; when set, the call is abandoned
            description: What is being queried, used in log lines and errors

        Returns:
            Whatever the first successful attempt returns

        Raises:
            QueryCancelledError: cancel_event was set
            Exception: the last failure once retries are exhausted
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                return await self._run_attempt(operation, cancel_event, description, attempt)
            except QueryCancelledError:
                raise
            except Exception as e:
                if attempt > self.retry_count:
                    raise
                logger.error(
                    f"Error occurred while querying Cortex Graph "
                    f"({description or 'request'}, attempt {attempt}/{self.retry_count + 1}).{_cause_of(e)}",
                    exc_info=e,
                )

            await self._sleep(self.delay_for(attempt), cancel_event, description, attempt + 1)

    async def _run_attempt(self, operation, cancel_event, description, attempt):
        if cancel_event is None:
            return await operation()

        if cancel_event.is_set():
            raise QueryCancelledError(description, attempt)

        task = asyncio.ensure_future(operation())
        waiter = asyncio.ensure_future(cancel_event.wait())
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if not task.done():
            task.cancel()
            logger.info(f"Cancelled in-flight Cortex Graph request: {description or 'request'}")
            raise QueryCancelledError(description, attempt)

        return task.result()

    async def _sleep(self, delay: float, cancel_event, description, attempt):
        """Backoff wait that returns early with QueryCancelledError on cancellation."""
        if cancel_event is None:
            await asyncio.sleep(delay)
            return

        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return

        logger.info(f"Cancelled Cortex Graph retry backoff: {description or 'request'}")
        raise QueryCancelledError(description, attempt)
