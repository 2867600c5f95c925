import asyncio
from typing import Any, Callable, Optional

from loguru import logger
from query_execution_waiter.client import QueryExecutionStatusClient
from query_execution_waiter.exceptions import (
    QueryExecutionWaiterStateError,
    QueryExecutionWaiterTimeoutError,
)
from query_execution_waiter.models import (
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_TIMEOUT_MS,
    UNKNOWN_REASON,
    QueryExecutionState,
    QueryExecutionStatus,
    WaiterConfig,
    WaitOptions,
)


class QueryExecutionWaiter:
    """Waits for a remote query execution to complete.

    Polls the execution status until it becomes SUCCEEDED, FAILED or CANCELLED.
    The waiter keeps no state between calls, so one instance can serve any
    number of concurrent waits.
    """

    def __init__(
        self,
        client: QueryExecutionStatusClient,
        config: Optional[WaiterConfig] = None,
        on_status_change: Optional[Callable[[QueryExecutionStatus], Any]] = None,
    ):
        self.client = client
        self.config = config or WaiterConfig()
        self.logger = logger
        self.on_status_change = on_status_change

    def _resolve_poll_interval(self, options: Optional[WaitOptions]) -> int:
        """Per-call override, then the waiter's config, then the built-in default"""
        if options is not None and options.poll_interval_ms is not None:
            return options.poll_interval_ms
        if self.config.poll_interval_ms is not None:
            return self.config.poll_interval_ms
        return DEFAULT_POLL_INTERVAL_MS

    @staticmethod
    def _elapsed_ms(start_time: float) -> int:
        return int((asyncio.get_event_loop().time() - start_time) * 1000)

    async def _handle_status_change(
        self,
        status: QueryExecutionStatus,
        last_state: Optional[QueryExecutionState],
    ) -> None:
        """Invoke the status change callback if the state has changed"""
        if last_state != status.state and self.on_status_change is not None:
            self.logger.debug(f"Query execution state changed to {status.state_value}")
            await self.on_status_change(status)

    async def _wait_before_retry(self, poll_interval_ms: int) -> None:
        await asyncio.sleep(poll_interval_ms / 1000)

    async def wait(
        self,
        query_execution_id: str,
        timeout_ms: Optional[int] = DEFAULT_TIMEOUT_MS,
        options: Optional[WaitOptions] = None,
    ) -> QueryExecutionState:
        """Wait until the given query execution completes.

        Raises QueryExecutionWaiterTimeoutError when more than ``timeout_ms``
        elapses before a terminal state, and QueryExecutionWaiterStateError
        when the execution ends FAILED or CANCELLED. Errors raised by the
        status client are not caught.
        """
        if not query_execution_id:
            raise ValueError("query_execution_id must be a non-empty string")

        if timeout_ms is None:
            timeout_ms = DEFAULT_TIMEOUT_MS
        poll_interval_ms = self._resolve_poll_interval(options)
        start_time = asyncio.get_event_loop().time()
        last_state: Optional[QueryExecutionState] = None

        while True:
            elapsed_ms = self._elapsed_ms(start_time)
            if elapsed_ms > timeout_ms:
                self.logger.info(
                    f"Query execution {query_execution_id} timed out after {elapsed_ms}ms"
                )
                raise QueryExecutionWaiterTimeoutError(elapsed_ms)

            status = await self.client.get_query_execution_status(query_execution_id)

            await self._handle_status_change(status, last_state)
            last_state = status.state

            if status.state == QueryExecutionState.SUCCEEDED:
                self.logger.info(
                    f"Query execution {query_execution_id} succeeded after {elapsed_ms}ms"
                )
                return status.state

            if status.state in (
                QueryExecutionState.FAILED,
                QueryExecutionState.CANCELLED,
            ):
                reason = (
                    status.reason if status.reason is not None else UNKNOWN_REASON
                )
                self.logger.info(
                    f"Query execution {query_execution_id} ended {status.state.value}: {reason}"
                )
                raise QueryExecutionWaiterStateError(status.state, reason)

            self.logger.debug(
                f"Query execution {query_execution_id} is {status.state_value}, "
                f"waiting {poll_interval_ms}ms before next check"
            )
            await self._wait_before_retry(poll_interval_ms)
