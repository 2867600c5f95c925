from query_execution_waiter.models import UNKNOWN_REASON, QueryExecutionState


class QueryExecutionWaiterError(Exception):
    """Base error for the query execution waiter."""

    retryable = False


class QueryExecutionWaiterTimeoutError(QueryExecutionWaiterError, TimeoutError):
    """Raised when waiting for a query execution times out.

    Waiting again on the same execution is safe, so this error is retryable.
    """

    retryable = True

    def __init__(self, elapsed_ms: int):
        self.elapsed_ms = elapsed_ms
        super().__init__(f"Query execution timed out after {elapsed_ms}ms")


class QueryExecutionWaiterStateError(QueryExecutionWaiterError):
    """Raised when the query execution ends in FAILED or CANCELLED state."""

    def __init__(self, state: QueryExecutionState, reason: str = UNKNOWN_REASON):
        self.state = state
        self.reason = reason
        super().__init__(
            f"Query execution failed with state {QueryExecutionState(state).value}: {reason}"
        )
