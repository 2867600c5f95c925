from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_POLL_INTERVAL_MS = 1000
DEFAULT_TIMEOUT_MS = 1000 * 10
UNKNOWN_REASON = "unknown"


class QueryExecutionState(str, Enum):
    QUEUED = "QUEUED"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (
            QueryExecutionState.SUCCEEDED,
            QueryExecutionState.FAILED,
            QueryExecutionState.CANCELLED,
        )


class QueryExecutionStatus(BaseModel):
    # None covers both a missing state and one this client does not know
    state: Optional[QueryExecutionState] = None
    reason: Optional[str] = None
    raw_response: dict = Field(default_factory=dict)

    @property
    def state_value(self) -> str:
        return self.state.value if self.state is not None else "UNKNOWN"

    @field_validator("state", mode="before")
    @classmethod
    def _normalize_state(cls, value: Any) -> Optional[QueryExecutionState]:
        if isinstance(value, QueryExecutionState):
            return value
        try:
            return QueryExecutionState(value)
        except ValueError:
            return None

    @classmethod
    def from_response(cls, data: dict) -> "QueryExecutionStatus":
        """Builds a status from a GetQueryExecution-shaped payload"""
        status = (data.get("QueryExecution") or {}).get("Status") or {}
        return cls(
            state=status.get("State"),
            reason=status.get("StateChangeReason"),
            raw_response=data,
        )


class WaiterConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    # None falls back to DEFAULT_POLL_INTERVAL_MS
    poll_interval_ms: Optional[int] = Field(default=None, ge=0)


class WaitOptions(BaseModel):
    """Per-call settings; a set poll interval overrides the waiter's default"""

    poll_interval_ms: Optional[int] = Field(default=None, ge=0)
