"""Result type for multi-step operations with best-effort side effects."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class OutcomeStatus(str, Enum):
    SUCCEEDED = "succeeded"
    DEGRADED = "degraded"  # succeeded, but a non-fatal step failed and was logged
    FAILED = "failed"


@dataclass
class Outcome:
    status: OutcomeStatus
    data: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def succeeded(cls, **data: Any) -> "Outcome":
        return cls(status=OutcomeStatus.SUCCEEDED, data=data)

    @classmethod
    def failed(cls, error: str, **data: Any) -> "Outcome":
        return cls(status=OutcomeStatus.FAILED, data=data, error=error)

    @property
    def ok(self) -> bool:
        return self.status is not OutcomeStatus.FAILED

    def add_warning(self, message: str) -> None:
        """Record a non-fatal failure; a failed outcome stays failed."""
        self.warnings.append(message)
        if self.status is OutcomeStatus.SUCCEEDED:
            self.status = OutcomeStatus.DEGRADED
