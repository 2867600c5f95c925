import asyncio

from query_execution_waiter.client import HttpQueryExecutionClient
from query_execution_waiter.exceptions import (
    QueryExecutionWaiterStateError,
    QueryExecutionWaiterTimeoutError,
)
from query_execution_waiter.models import WaiterConfig, WaitOptions
from query_execution_waiter.waiter import QueryExecutionWaiter
from query_status_server import QueryStatusServer


async def status_changed(status_response):
    print(f"Status changed to: {status_response.state_value}")


async def main():
    PORT = 8000
    server = QueryStatusServer(completion_time=5.0, failure_rate=0.05)
    await server.start(port=PORT)
    print(f"Server started on http://localhost:{PORT}")

    config = WaiterConfig(poll_interval_ms=500)

    async with HttpQueryExecutionClient(f"http://localhost:{PORT}") as client:
        waiter = QueryExecutionWaiter(client, config, on_status_change=status_changed)
        try:
            final_state = await waiter.wait(
                "example-query",
                timeout_ms=30_000,
                options=WaitOptions(poll_interval_ms=250),
            )
            print(f"Final state: {final_state.value}")
        except QueryExecutionWaiterTimeoutError as e:
            print(f"Waiting timed out after {e.elapsed_ms}ms, safe to wait again")
        except QueryExecutionWaiterStateError as e:
            print(f"Query ended {e.state.value}: {e.reason}")

    await asyncio.sleep(1)


if __name__ == "__main__":
    asyncio.run(main())
