"""Health check orchestration.

Internal checks run first, in registration order. The first unfixed
critical result from a critical check stops the internal phase and the
external phase is skipped. External checks then all run; none of them can
stop the phase.
"""

import logging
import time
from dataclasses import dataclass, replace

from cf_practice.context import CheckContext
from cf_practice.schema import CURRENT_VERSION

from .base import Check
from .types import Action, Capabilities, Category, Report, Result, Status

logger = logging.getLogger(__name__)

AUTO_FIXED_SUFFIX = " (auto-fixed)"


@dataclass(frozen=True)
class _RegisteredCheck:
    """A check with its capabilities resolved at registration."""

    check: Check
    capabilities: Capabilities


class Checker:
    """Runs registered checks and folds their results into a Report.

    Usage:
        checker = Checker()
        checker.add_check(ConfigCheck(store))
        checker.add_check(APICheck(client))

        report = checker.run(CheckContext.with_timeout(30))
        if not report.can_proceed:
            ...

    A Checker is not safe for concurrent run() calls.
    """

    def __init__(self) -> None:
        self._registered: list[_RegisteredCheck] = []

    def add_check(self, check: Check) -> None:
        self._registered.append(_RegisteredCheck(check, check.capabilities()))

    @property
    def checks(self) -> list[Check]:
        return [reg.check for reg in self._registered]

    def run(self, ctx: CheckContext | None = None) -> Report:
        """Execute internal then external checks."""
        ctx = ctx or CheckContext()
        start = time.perf_counter()
        report = Report(current_schema_version=str(CURRENT_VERSION))

        for reg in self._phase(Category.INTERNAL):
            self._process(ctx, reg, report)
            if not report.can_proceed:
                break

        if report.can_proceed:
            for reg in self._phase(Category.EXTERNAL):
                self._process(ctx, reg, report)
        else:
            logger.debug("Skipping external checks: internal check blocked")

        report.duration = time.perf_counter() - start
        return report

    def quick_check(self, ctx: CheckContext | None = None) -> bool:
        """Return False at the first blocking critical result.

        Runs every check regardless of category, never auto-fixes and
        builds no report.
        """
        ctx = ctx or CheckContext()
        for reg in self._registered:
            result = reg.check.run(ctx)
            if result.status is Status.CRITICAL and reg.capabilities.critical:
                logger.debug("Quick check failed at %s: %s", result.name, result.message)
                return False
        return True

    def _phase(self, category: Category) -> list[_RegisteredCheck]:
        return [reg for reg in self._registered if reg.check.category is category]

    def _process(self, ctx: CheckContext, reg: _RegisteredCheck, report: Report) -> None:
        result = reg.check.run(ctx)
        logger.debug("%s: %s (%s)", result.name, result.status, result.message)

        if result.status is Status.CRITICAL:
            fixed = self._try_auto_fix(ctx, reg, result)
            if fixed is not None:
                report.results.append(fixed)
                report.auto_fixed.append(result)
                return

            report.results.append(result)
            if reg.capabilities.critical:
                report.escalate(Status.CRITICAL)
                report.can_proceed = False
                report.errors.append(result.message)
            else:
                report.escalate(Status.DEGRADED)
                report.warnings.append(result.message)
            return

        report.results.append(result)
        if result.status is Status.DEGRADED:
            report.escalate(Status.DEGRADED)
            report.warnings.append(result.message)

    def _try_auto_fix(
        self, ctx: CheckContext, reg: _RegisteredCheck, result: Result
    ) -> Result | None:
        """Return the healthy replacement result, or None if not fixed."""
        if not (
            result.recoverable
            and result.action is Action.AUTO_FIX
            and reg.capabilities.supports_auto_fix
        ):
            return None

        logger.info("Attempting auto-fix for %s: %s", result.name, result.message)
        try:
            reg.check.auto_fix(ctx)
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("Auto-fix for %s failed: %s", result.name, e)
            return None

        return replace(
            result, status=Status.HEALTHY, message=result.message + AUTO_FIXED_SUFFIX
        )
