"""Checks of local state: configuration, credentials and workspace."""

from cf_practice.config import ConfigStore
from cf_practice.context import CheckContext
from cf_practice.errors import ConfigError, InvalidVersionError, WorkspaceError
from cf_practice.schema import (
    CURRENT_VERSION,
    SchemaVersion,
    is_compatible,
    needs_migration,
)
from cf_practice.workspace import Workspace

from .base import Check
from .types import Action, Category, Result, Status

DEFAULT_WORKSPACE_NAME = "DSA Practice"


class ConfigCheck(Check):
    """Configuration must be loaded."""

    name = "Configuration"
    category = Category.INTERNAL
    supports_auto_fix = True

    def __init__(self, config: ConfigStore, workspace_path: str = "") -> None:
        self.config = config
        self.workspace_path = workspace_path

    def probe(self, ctx: CheckContext) -> Result:
        if self.config.get() is None:
            return self.result(
                Status.CRITICAL,
                "Configuration not initialized",
                details=f"Expected at: {self.config.config_path}",
                recoverable=True,
                action=Action.AUTO_FIX,
            )
        return self.result(Status.HEALTHY, "Configuration OK")

    def auto_fix(self, ctx: CheckContext) -> None:
        self.config.init(self.workspace_path)


class EnvFileCheck(Check):
    """Credentials env file must exist and parse."""

    name = "Environment File"
    category = Category.INTERNAL
    supports_auto_fix = True

    def __init__(self, config: ConfigStore) -> None:
        self.config = config

    def probe(self, ctx: CheckContext) -> Result:
        env_path = self.config.env_file_path
        if not env_path.exists():
            return self.result(
                Status.CRITICAL,
                "Env file not found",
                details=f"Expected at: {env_path}",
                recoverable=True,
                action=Action.AUTO_FIX,
            )

        try:
            creds = self.config.load_credentials()
        except ConfigError as e:
            return self.result(
                Status.CRITICAL,
                "Env file corrupted",
                details=str(e),
                recoverable=True,
                action=Action.MANUAL_FIX,
            )

        if not creds.has_handle():
            return self.result(
                Status.DEGRADED,
                "CF handle not configured",
                details=f"Set CF_HANDLE in {env_path}",
                action=Action.USER_PROMPT,
            )

        return self.result(Status.HEALTHY, "Environment file OK")

    def auto_fix(self, ctx: CheckContext) -> None:
        self.config.ensure_env_file()


class CookieCheck(Check):
    """Browser cookies needed for submissions. Never blocks."""

    name = "CF Cookies"
    category = Category.INTERNAL
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

        if not creds.is_valid():
            return self.result(
                Status.DEGRADED,
                "cf_clearance not configured or expired",
                details="Extract cf_clearance from browser (DevTools > Application > Cookies)",
                action=Action.USER_PROMPT,
            )

        if not creds.has_session_cookies():
            return self.result(
                Status.DEGRADED,
                "Session cookies not configured",
                details="Extract JSESSIONID and 39ce7 cookies from browser",
                recoverable=True,
                action=Action.USER_PROMPT,
            )

        if not creds.is_ready_for_submission():
            return self.result(
                Status.DEGRADED,
                "Missing handle or cookies",
                details=f"Set CF_HANDLE and all session cookies in {self.config.env_file_path}",
                recoverable=True,
                action=Action.USER_PROMPT,
            )

        return self.result(
            Status.HEALTHY, f"Session configured ({creds.clearance_status()})"
        )


class WorkspaceCheck(Check):
    """Workspace must exist and be structurally complete."""

    name = "Workspace"
    category = Category.INTERNAL
    supports_auto_fix = True

    def __init__(
        self,
        workspace: Workspace,
        config: ConfigStore,
        workspace_name: str = DEFAULT_WORKSPACE_NAME,
    ) -> None:
        self.workspace = workspace
        self.config = config
        self.workspace_name = workspace_name

    def probe(self, ctx: CheckContext) -> Result:
        if not self.workspace.exists():
            return self.result(
                Status.CRITICAL,
                "Workspace not initialized",
                details="Run 'cf init' to create workspace",
                recoverable=True,
                action=Action.AUTO_FIX,
            )

        try:
            self.workspace.validate()
        except WorkspaceError as e:
            return self.result(
                Status.CRITICAL, "Workspace validation failed", details=str(e)
            )

        return self.result(Status.HEALTHY, "Workspace OK")

    def auto_fix(self, ctx: CheckContext) -> None:
        """Create the workspace; an existing invalid one is left alone."""
        if self.workspace.exists():
            raise WorkspaceError(
                f"workspace exists at {self.workspace.root} but is invalid"
            )
        self.workspace.init(self.workspace_name, self._handle())

    def _handle(self) -> str:
        try:
            creds = self.config.load_credentials()
        except ConfigError:
            creds = None
        if creds is not None and creds.has_handle():
            return creds.handle
        return self.config.get_handle()


class SchemaVersionCheck(Check):
    """Workspace schema must be compatible with this build."""

    name = "Schema Version"
    category = Category.INTERNAL

    def __init__(
        self, workspace: Workspace, current: SchemaVersion = CURRENT_VERSION
    ) -> None:
        self.workspace = workspace
        self.current = current

    def probe(self, ctx: CheckContext) -> Result:
        if not self.workspace.exists():
            return self.result(Status.HEALTHY, "No workspace to check")

        try:
            version = SchemaVersion.parse(self.workspace.get_schema_version())
        except (WorkspaceError, InvalidVersionError) as e:
            return self.result(
                Status.CRITICAL, "Cannot read schema version", details=str(e)
            )

        if not is_compatible(version, self.current):
            return self.result(
                Status.CRITICAL,
                "Incompatible schema version",
                details=f"{version} (current: {self.current})",
                action=Action.MANUAL_FIX,
            )

        if needs_migration(version, self.current):
            return self.result(
                Status.DEGRADED,
                "Schema migration available",
                details=f"{version} → {self.current}",
                recoverable=True,
                action=Action.USER_PROMPT,
            )

        return self.result(Status.HEALTHY, f"Schema version OK: {self.current}")
