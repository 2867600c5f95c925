import random
from datetime import datetime
from typing import Dict, Optional

from aiohttp import web
from loguru import logger


class QueryStatusServer:
    def __init__(
        self,
        completion_time: float = 10.0,
        failure_rate: float = 0.0,
        final_state: str = "SUCCEEDED",
        final_reason: Optional[str] = None,
    ):
        self.start_times: Dict[str, datetime] = {}
        self.completion_time = completion_time
        self.failure_rate = failure_rate
        self.final_state = final_state
        self.final_reason = final_reason
        self.request_count = 0
        self.app = web.Application()
        self.app.router.add_get(
            "/query-executions/{query_execution_id}", self.handle_status
        )
        self.logger = logger

    @staticmethod
    def _status_payload(state: str, reason: Optional[str] = None) -> dict:
        status = {"State": state}
        if reason is not None:
            status["StateChangeReason"] = reason
        return {"QueryExecution": {"Status": status}}

    async def handle_status(self, request):
        self.request_count += 1
        query_execution_id = request.match_info["query_execution_id"]

        if query_execution_id not in self.start_times:
            self.start_times[query_execution_id] = datetime.now()
            self.logger.info(f"Returning queued status for {query_execution_id}")
            return web.json_response(self._status_payload("QUEUED"))

        if random.random() < self.failure_rate:
            self.logger.info(f"Returning failed status for {query_execution_id}")
            return web.json_response(
                self._status_payload("FAILED", "Simulated query failure")
            )

        elapsed = (datetime.now() - self.start_times[query_execution_id]).total_seconds()

        if elapsed >= self.completion_time:
            self.logger.info(
                f"Returning {self.final_state} status for {query_execution_id}"
            )
            return web.json_response(
                self._status_payload(self.final_state, self.final_reason)
            )
        else:
            self.logger.info(
                f"Returning running status for {query_execution_id} (elapsed: {elapsed:.1f}s)"
            )
            return web.json_response(self._status_payload("RUNNING"))

    async def start(self, port: int = 8080):
        runner = web.AppRunner(self.app)
        await runner.setup()
        site = web.TCPSite(runner, "localhost", port)
        await site.start()
        self.logger.info(f"Server started on port {port}")
        return site
