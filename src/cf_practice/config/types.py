"""Configuration and credential type definitions."""

import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

# cf_clearance counts as "expiring soon" below this threshold
EXPIRY_WARNING = timedelta(minutes=5)


@dataclass(frozen=True)
class DifficultyRange:
    """Problem rating range used when picking practice problems."""

    min: int = 800
    max: int = 1400


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from config.yaml."""

    cf_handle: str = ""
    difficulty: DifficultyRange = field(default_factory=DifficultyRange)
    daily_goal: int = 3
    workspace_path: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        difficulty = data.get("difficulty") or {}
        return cls(
            cf_handle=str(data.get("cf_handle") or ""),
            difficulty=DifficultyRange(
                min=int(difficulty.get("min", 800)),
                max=int(difficulty.get("max", 1400)),
            ),
            daily_goal=int(data.get("daily_goal", 3)),
            workspace_path=str(data.get("workspace_path") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "cf_handle": self.cf_handle,
            "difficulty": {"min": self.difficulty.min, "max": self.difficulty.max},
            "daily_goal": self.daily_goal,
            "workspace_path": self.workspace_path,
        }


@dataclass
class Credentials:
    """API keys and browser cookies read from the env file."""

    handle: str = ""
    api_key: str = ""
    api_secret: str = ""

    # Session cookies extracted from the browser
    jsessionid: str = ""
    ce7_cookie: str = ""

    # Cloudflare bypass; the User-Agent must match the one that obtained it
    clearance: str = ""
    clearance_expires: int = 0  # unix timestamp
    clearance_ua: str = ""

    def is_api_configured(self) -> bool:
        return bool(self.api_key and self.api_secret)

    def has_handle(self) -> bool:
        return bool(self.handle)

    def has_session_cookies(self) -> bool:
        return bool(self.jsessionid or self.ce7_cookie)

    def is_valid(self) -> bool:
        """Return True if cf_clearance is set and not expired."""
        if not self.clearance or not self.clearance_expires:
            return False
        return time.time() < self.clearance_expires

    def expires_in(self) -> timedelta:
        """Time until cf_clearance expires, negative once expired."""
        if not self.clearance_expires:
            return timedelta(0)
        return timedelta(seconds=self.clearance_expires - time.time())

    def is_ready_for_submission(self) -> bool:
        return self.is_valid() and self.has_session_cookies() and self.has_handle()

    def clearance_status(self) -> str:
        """Human-readable cf_clearance status."""
        if not self.clearance:
            return "not configured"
        if not self.is_valid():
            return "expired"
        remaining = self.expires_in()
        if remaining < EXPIRY_WARNING:
            return f"expiring soon ({format_duration(remaining)})"
        return f"valid ({format_duration(remaining)} remaining)"


def format_duration(delta: timedelta) -> str:
    """Format a duration as "45s", "12m" or "2h 30m"."""
    seconds = int(delta.total_seconds())
    if seconds < 0:
        return "expired"
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m"
    return f"{seconds // 3600}h {seconds % 3600 // 60}m"
