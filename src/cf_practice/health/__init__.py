"""Startup health checks."""

from cf_practice.config import ConfigStore
from cf_practice.remote import APIClient, StructureVerifier, WebSession
from cf_practice.workspace import Workspace

from .base import Check
from .checker import Checker
from .external import APICheck, ClearanceCheck, HandleCheck, SessionCheck, WebStructureCheck
from .internal import (
    ConfigCheck,
    CookieCheck,
    EnvFileCheck,
    SchemaVersionCheck,
    WorkspaceCheck,
)
from .types import Action, Capabilities, Category, Report, Result, Status

__all__ = [
    "APICheck",
    "Action",
    "Capabilities",
    "Category",
    "Check",
    "Checker",
    "ClearanceCheck",
    "ConfigCheck",
    "CookieCheck",
    "EnvFileCheck",
    "HandleCheck",
    "Report",
    "Result",
    "SchemaVersionCheck",
    "SessionCheck",
    "Status",
    "WebStructureCheck",
    "WorkspaceCheck",
    "build_checker",
]


def build_checker(
    config: ConfigStore,
    workspace: Workspace,
    client: APIClient | None = None,
    session: WebSession | None = None,
    verifier: StructureVerifier | None = None,
) -> Checker:
    """Register the standard internal and external checks."""
    checker = Checker()

    checker.add_check(ConfigCheck(config))
    checker.add_check(EnvFileCheck(config))
    checker.add_check(CookieCheck(config))
    checker.add_check(WorkspaceCheck(workspace, config))
    checker.add_check(SchemaVersionCheck(workspace))

    checker.add_check(APICheck(client))
    checker.add_check(WebStructureCheck(verifier))
    checker.add_check(SessionCheck(session))
    checker.add_check(HandleCheck(client, config))
    checker.add_check(ClearanceCheck(config))

    return checker
