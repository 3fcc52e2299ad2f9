"""Health check types."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Status(Enum):
    """Outcome severity, ordered HEALTHY < DEGRADED < CRITICAL."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    CRITICAL = "critical"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    def __lt__(self, other: "Status") -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self.severity < other.severity

    def __str__(self) -> str:
        return self.value


_SEVERITY = {Status.HEALTHY: 0, Status.DEGRADED: 1, Status.CRITICAL: 2}


class Category(Enum):
    """Execution phase of a check."""

    INTERNAL = "internal"  # local state
    EXTERNAL = "external"  # remote dependencies


class Action(Enum):
    """What can be done about a non-healthy result."""

    NONE = "none"
    AUTO_FIX = "auto_fix"
    USER_PROMPT = "user_prompt"
    RETRY = "retry"
    MANUAL_FIX = "manual_fix"


@dataclass(frozen=True)
class Capabilities:
    """Optional behaviour of a check, resolved once at registration."""

    supports_auto_fix: bool = False
    critical: bool = True


@dataclass(frozen=True)
class Result:
    """Outcome of a single check invocation."""

    name: str
    category: Category
    status: Status
    message: str = ""
    details: str = ""
    recoverable: bool = False
    action: Action = Action.NONE
    duration: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "category": self.category.value,
            "status": self.status.value,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
            "action": self.action.value,
            "duration": round(self.duration, 6),
        }


@dataclass
class Report:
    """Aggregate outcome of one Checker.run call."""

    current_schema_version: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    overall_status: Status = Status.HEALTHY
    can_proceed: bool = True
    results: list[Result] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    # Original critical results that a successful auto-fix replaced
    auto_fixed: list[Result] = field(default_factory=list)
    duration: float = 0.0

    def escalate(self, status: Status) -> None:
        if self.overall_status < status:
            self.overall_status = status

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "overall_status": self.overall_status.value,
            "can_proceed": self.can_proceed,
            "current_schema_version": self.current_schema_version,
            "duration": round(self.duration, 6),
            "results": [r.to_dict() for r in self.results],
            "warnings": list(self.warnings),
            "errors": list(self.errors),
            "auto_fixed": [r.name for r in self.auto_fixed],
        }
