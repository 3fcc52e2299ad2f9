"""Base class for health checks."""

import abc
import logging
import time
from dataclasses import replace

from cf_practice.context import CheckContext
from cf_practice.errors import CheckCancelledError

from .types import Action, Capabilities, Category, Result, Status

logger = logging.getLogger(__name__)


class Check(abc.ABC):
    """A single diagnostic probe.

    Subclasses set `name` and `category` and implement probe(). Checks
    that can repair what they detect set `supports_auto_fix` and override
    auto_fix(); checks whose critical results must not block set
    `critical = False`.
    """

    name: str = ""
    category: Category = Category.INTERNAL
    supports_auto_fix: bool = False
    critical: bool = True

    def capabilities(self) -> Capabilities:
        return Capabilities(
            supports_auto_fix=self.supports_auto_fix, critical=self.critical
        )

    @abc.abstractmethod
    def probe(self, ctx: CheckContext) -> Result:
        """Inspect one dependency and describe it as a Result."""

    def auto_fix(self, ctx: CheckContext) -> None:
        """Attempt one remediation; raise on failure."""
        raise NotImplementedError(f"{self.name} has no auto-fix")

    def result(
        self,
        status: Status,
        message: str,
        details: str = "",
        recoverable: bool = False,
        action: Action = Action.NONE,
    ) -> Result:
        return Result(
            name=self.name,
            category=self.category,
            status=status,
            message=message,
            details=details,
            recoverable=recoverable,
            action=action,
        )

    def run(self, ctx: CheckContext) -> Result:
        """Run probe() and stamp the result with its duration.

        Never raises: cancellation and unexpected errors become results.
        """
        start = time.perf_counter()
        try:
            ctx.raise_if_cancelled()
            result = self.probe(ctx)
        except CheckCancelledError:
            result = self.result(
                Status.DEGRADED,
                f"{self.name} cancelled",
                details="Check context was cancelled or timed out",
                action=Action.RETRY,
            )
        except Exception as e:  # pylint: disable=broad-except
            logger.exception("Check %s raised", self.name)
            result = self.result(
                Status.CRITICAL,
                f"{self.name} check failed",
                details=f"{type(e).__name__}: {e}",
            )
        return replace(result, duration=time.perf_counter() - start)
