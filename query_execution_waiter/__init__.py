from query_execution_waiter.client import (
    HttpQueryExecutionClient,
    QueryExecutionStatusClient,
)
from query_execution_waiter.exceptions import (
    QueryExecutionWaiterError,
    QueryExecutionWaiterStateError,
    QueryExecutionWaiterTimeoutError,
)
from query_execution_waiter.models import (
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_TIMEOUT_MS,
    QueryExecutionState,
    QueryExecutionStatus,
    WaiterConfig,
    WaitOptions,
)
from query_execution_waiter.waiter import QueryExecutionWaiter

__all__ = [
    "DEFAULT_POLL_INTERVAL_MS",
    "DEFAULT_TIMEOUT_MS",
    "HttpQueryExecutionClient",
    "QueryExecutionState",
    "QueryExecutionStatus",
    "QueryExecutionStatusClient",
    "QueryExecutionWaiter",
    "QueryExecutionWaiterError",
    "QueryExecutionWaiterStateError",
    "QueryExecutionWaiterTimeoutError",
    "WaiterConfig",
    "WaitOptions",
]
