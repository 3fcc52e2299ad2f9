"""Checks of remote Codeforces dependencies.

None of these block: an unreachable or changed Codeforces degrades the
tool but never stops local functionality.
"""

from cf_practice.config import ConfigStore
from cf_practice.config.types import EXPIRY_WARNING, format_duration
from cf_practice.context import CheckContext
from cf_practice.errors import ConfigError, RemoteError
from cf_practice.remote import APIClient, StructureVerifier, WebSession

from .base import Check
from .types import Action, Category, Result, Status


def format_rating(rating: int) -> str:
    return str(rating) if rating else "unrated"


class APICheck(Check):
    """Codeforces API must answer."""

    name = "CF API"
    category = Category.EXTERNAL
    critical = False

    def __init__(self, client: APIClient | None) -> None:
        self.client = client

    def probe(self, ctx: CheckContext) -> Result:
        if self.client is None:
            return self.result(Status.DEGRADED, "API client not initialized")

        try:
            self.client.ping(ctx)
        except RemoteError as e:
            return self.result(
                Status.DEGRADED,
                "CF API unreachable",
                details=str(e),
                action=Action.RETRY,
            )

        return self.result(Status.HEALTHY, "CF API OK")


class WebStructureCheck(Check):
    """Problem page markup must still match the parser's selectors."""

    name = "CF Web Structure"
    category = Category.EXTERNAL
    critical = False

    def __init__(self, verifier: StructureVerifier | None) -> None:
        self.verifier = verifier

    def probe(self, ctx: CheckContext) -> Result:
        if self.verifier is None:
            return self.result(Status.DEGRADED, "Parser not initialized")

        try:
            self.verifier.verify_structure(ctx)
        except RemoteError as e:
            return self.result(
                Status.DEGRADED,
                "CF page structure changed",
                details=f"{e} (selector version: {self.verifier.version})",
                action=Action.MANUAL_FIX,
            )

        return self.result(
            Status.HEALTHY, f"CF web structure OK (v{self.verifier.version})"
        )


class SessionCheck(Check):
    """Web session must be logged in."""

    name = "CF Session"
    category = Category.EXTERNAL
    critical = False

    def __init__(self, session: WebSession | None) -> None:
        self.session = session

    def probe(self, ctx: CheckContext) -> Result:
        if self.session is None:
            return self.result(
                Status.DEGRADED,
                "No active session",
                details="Configure session cookies to enable submissions",
                action=Action.USER_PROMPT,
            )

        if not self.session.is_authenticated():
            return self.result(
                Status.DEGRADED,
                "Not logged in",
                details="Extract JSESSIONID and 39ce7 cookies from browser",
                action=Action.USER_PROMPT,
            )

        try:
            self.session.validate(ctx)
        except RemoteError as e:
            return self.result(
                Status.DEGRADED,
                "Session validation failed",
                details=str(e),
                action=Action.RETRY,
            )

        identity = self.session.identity() or "unknown handle"
        return self.result(Status.HEALTHY, f"Logged in as {identity}")


class HandleCheck(Check):
    """Configured handle must exist on Codeforces."""

    name = "CF Handle"
    category = Category.EXTERNAL
    critical = False

    def __init__(self, client: APIClient | None, config: ConfigStore) -> None:
        self.client = client
        self.config = config

    def probe(self, ctx: CheckContext) -> Result:
        handle = self.config.get_handle()
        if not handle:
            return self.result(
                Status.DEGRADED,
                "CF handle not configured",
                details="Run: cf config set cf_handle YOUR_HANDLE",
                action=Action.USER_PROMPT,
            )

        if self.client is None:
            return self.result(
                Status.DEGRADED,
                "Cannot verify handle",
                details="API client not initialized",
            )

        try:
            users = self.client.get_user_info(ctx, [handle])
        except RemoteError as e:
            return self.result(
                Status.DEGRADED,
                "Cannot verify handle",
                details=str(e),
                action=Action.RETRY,
            )

        if not users:
            return self.result(
                Status.CRITICAL,
                "Handle not found on CF",
                details=handle,
                action=Action.MANUAL_FIX,
            )

        user = users[0]
        return self.result(
            Status.HEALTHY,
            f"{user.handle} ({user.rank}, {format_rating(user.rating)})",
        )


class ClearanceCheck(Check):
    """cf_clearance cookie must be present and not about to expire."""

    name = "CF Clearance"
    category = Category.EXTERNAL
    critical = False

    def __init__(self, config: ConfigStore) -> None:
        self.config = config

    def probe(self, ctx: CheckContext) -> Result:
        try:
            creds = self.config.load_credentials()
        except ConfigError as e:
            return self.result(
                Status.DEGRADED, "Cannot load credentials", details=str(e)
            )

        if not creds.clearance:
            return self.result(
                Status.DEGRADED,
                "cf_clearance not configured",
                details="Extract cf_clearance from browser (DevTools > Application > Cookies)",
                action=Action.USER_PROMPT,
            )

        if not creds.is_valid():
            return self.result(
                Status.DEGRADED,
                "cf_clearance expired",
                details="Refresh cf_clearance from browser",
                action=Action.USER_PROMPT,
            )

        remaining = creds.expires_in()
        if remaining < EXPIRY_WARNING:
            return self.result(
                Status.DEGRADED,
                f"cf_clearance expiring soon ({format_duration(remaining)})",
                action=Action.USER_PROMPT,
            )

        return self.result(
            Status.HEALTHY, f"cf_clearance valid ({format_duration(remaining)} remaining)"
        )
