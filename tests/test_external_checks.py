from __future__ import annotations

import pytest

from helpers import future, write_env

from cf_practice.config import ConfigStore
from cf_practice.context import CheckContext
from cf_practice.errors import RemoteError
from cf_practice.health import (
    Action,
    APICheck,
    Category,
    ClearanceCheck,
    HandleCheck,
    SessionCheck,
    Status,
    WebStructureCheck,
)
from cf_practice.health.external import format_rating
from cf_practice.remote import User

CTX = CheckContext()


class FakeClient:
    def __init__(self, users: list[User] | None = None, error: str = "") -> None:
        self.users = users or []
        self.error = error
        self.handles: list[str] = []

    def ping(self, ctx: CheckContext) -> None:
        if self.error:
            raise RemoteError(self.error)

    def get_user_info(self, ctx: CheckContext, handles: list[str]) -> list[User]:
        self.handles = handles
        if self.error:
            raise RemoteError(self.error)
        return self.users


class FakeVerifier:
    version = "9.9.9"

    def __init__(self, error: str = "") -> None:
        self.error = error

    def verify_structure(self, ctx: CheckContext) -> None:
        if self.error:
            raise RemoteError(self.error)


class FakeSession:
    def __init__(self, authenticated: bool = True, error: str = "") -> None:
        self.authenticated = authenticated
        self.error = error

    def is_authenticated(self) -> bool:
        return self.authenticated

    def validate(self, ctx: CheckContext) -> None:
        if self.error:
            raise RemoteError(self.error)

    def identity(self) -> str:
        return "tourist"


@pytest.mark.parametrize(
    "check",
    [
        APICheck(None),
        WebStructureCheck(None),
        SessionCheck(None),
        HandleCheck(None, ConfigStore()),
        ClearanceCheck(ConfigStore()),
    ],
)
def test_external_checks_are_non_critical(check) -> None:
    assert check.category is Category.EXTERNAL
    assert check.capabilities().critical is False
    assert check.capabilities().supports_auto_fix is False


def test_unavailable_collaborators_degrade(store: ConfigStore) -> None:
    store.set("cf_handle", "tourist")
    for check in (APICheck(None), WebStructureCheck(None), SessionCheck(None), HandleCheck(None, store)):
        result = check.run(CTX)
        assert result.status is Status.DEGRADED, check.name
        assert result.message


def test_api_check_unreachable() -> None:
    result = APICheck(FakeClient(error="connection refused")).run(CTX)
    assert result.status is Status.DEGRADED
    assert result.message == "CF API unreachable"
    assert result.action is Action.RETRY
    assert result.details == "connection refused"


def test_api_check_ok() -> None:
    result = APICheck(FakeClient()).run(CTX)
    assert result.status is Status.HEALTHY
    assert result.message == "CF API OK"


def test_web_structure_changed() -> None:
    result = WebStructureCheck(FakeVerifier(error="selectors not found: title")).run(CTX)
    assert result.status is Status.DEGRADED
    assert result.action is Action.MANUAL_FIX
    assert "selector version: 9.9.9" in result.details


def test_web_structure_ok() -> None:
    result = WebStructureCheck(FakeVerifier()).run(CTX)
    assert result.message == "CF web structure OK (v9.9.9)"


def test_session_check_states() -> None:
    assert SessionCheck(None).run(CTX).message == "No active session"
    assert SessionCheck(None).run(CTX).action is Action.USER_PROMPT

    result = SessionCheck(FakeSession(authenticated=False)).run(CTX)
    assert result.message == "Not logged in"

    result = SessionCheck(FakeSession(error="session invalid - not logged in")).run(CTX)
    assert result.status is Status.DEGRADED
    assert result.action is Action.RETRY

    result = SessionCheck(FakeSession()).run(CTX)
    assert result.status is Status.HEALTHY
    assert result.message == "Logged in as tourist"


def test_handle_check_not_configured(store: ConfigStore) -> None:
    result = HandleCheck(FakeClient(), store).run(CTX)
    assert result.status is Status.DEGRADED
    assert result.action is Action.USER_PROMPT


def test_handle_check_not_found_is_critical(store: ConfigStore) -> None:
    store.set("cf_handle", "nobody")
    client = FakeClient(users=[])
    result = HandleCheck(client, store).run(CTX)
    assert client.handles == ["nobody"]
    assert result.status is Status.CRITICAL
    assert result.action is Action.MANUAL_FIX
    assert result.details == "nobody"


def test_handle_check_api_error(store: ConfigStore) -> None:
    store.set("cf_handle", "tourist")
    result = HandleCheck(FakeClient(error="timeout"), store).run(CTX)
    assert result.status is Status.DEGRADED
    assert result.action is Action.RETRY


def test_handle_check_found(store: ConfigStore) -> None:
    store.set("cf_handle", "tourist")
    client = FakeClient(users=[User("tourist", "legendary grandmaster", 3800)])
    result = HandleCheck(client, store).run(CTX)
    assert result.status is Status.HEALTHY
    assert result.message == "tourist (legendary grandmaster, 3800)"


@pytest.mark.parametrize("rating, expected", [(0, "unrated"), (800, "800"), (3500, "3500")])
def test_format_rating(rating: int, expected: str) -> None:
    assert format_rating(rating) == expected


def test_clearance_not_configured(store: ConfigStore) -> None:
    result = ClearanceCheck(store).run(CTX)
    assert result.status is Status.DEGRADED
    assert result.message == "cf_clearance not configured"


def test_clearance_expired(store: ConfigStore) -> None:
    write_env(store, CF_CLEARANCE="abc", CF_CLEARANCE_EXPIRES=future(-60))
    assert ClearanceCheck(store).run(CTX).message == "cf_clearance expired"


def test_clearance_expiring_soon(store: ConfigStore) -> None:
    write_env(store, CF_CLEARANCE="abc", CF_CLEARANCE_EXPIRES=future(120))
    result = ClearanceCheck(store).run(CTX)
    assert result.status is Status.DEGRADED
    assert result.message.startswith("cf_clearance expiring soon")


def test_clearance_valid(store: ConfigStore) -> None:
    write_env(store, CF_CLEARANCE="abc", CF_CLEARANCE_EXPIRES=future(3 * 3600 + 120))
    result = ClearanceCheck(store).run(CTX)
    assert result.status is Status.HEALTHY
    assert result.message.startswith("cf_clearance valid (3h ")


def test_clearance_unreadable_credentials(store: ConfigStore) -> None:
    write_env(store, CF_CLEARANCE_EXPIRES="tomorrow")
    result = ClearanceCheck(store).run(CTX)
    assert result.status is Status.DEGRADED
    assert result.message == "Cannot load credentials"
