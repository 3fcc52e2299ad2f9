from __future__ import annotations

from typing import Any

import pytest
import requests

from cf_practice.config import Credentials
from cf_practice.context import CheckContext
from cf_practice.errors import RemoteError
from cf_practice.health import Action, APICheck, Status
from cf_practice.remote import APIClient, StructureVerifier, User, WebSession
from cf_practice.remote.verifier import missing_selectors

CTX = CheckContext()

PROBLEM_PAGE = """
<div class="problem-statement">
  <div class="header"><div class="title">A. Theatre Square</div>
  <div class="time-limit">1 second</div><div class="memory-limit">256 megabytes</div></div>
  <div class="sample-tests"><div class="sample-test">6 6 4</div></div>
</div>
"""


class FakeResponse:
    def __init__(self, body: Any = None, text: str = "", status: int = 200) -> None:
        self.body = body
        self.text = text
        self.status = status

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def json(self) -> Any:
        if self.body is None:
            raise ValueError("not json")
        return self.body


class FakeHTTP(requests.Session):
    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None) -> None:
        super().__init__()
        self.response = response
        self.error = error
        self.calls: list[tuple[str, dict]] = []

    def get(self, url, **kwargs):  # type: ignore[override]
        self.calls.append((url, kwargs))
        if self.error:
            raise self.error
        return self.response


def test_api_request_returns_result() -> None:
    payload = {"status": "OK", "result": [{"handle": "tourist", "rating": 3800, "rank": "lgm"}]}
    http = FakeHTTP(FakeResponse(payload))
    users = APIClient(http=http).get_user_info(CTX, ["tourist", "petr"])

    assert users == [User("tourist", "lgm", 3800)]
    url, kwargs = http.calls[0]
    assert url == "https://codeforces.com/api/user.info"
    assert kwargs["params"] == {"handles": "tourist;petr"}
    assert kwargs["timeout"] == 10.0


def test_api_failed_status() -> None:
    http = FakeHTTP(FakeResponse({"status": "FAILED", "comment": "handles: User not found"}))
    with pytest.raises(RemoteError, match="User not found"):
        APIClient(http=http).ping(CTX)


@pytest.mark.parametrize(
    "http",
    [
        FakeHTTP(error=requests.ConnectionError("refused")),
        FakeHTTP(FakeResponse(status=503)),
        FakeHTTP(FakeResponse(text="<html>")),
        FakeHTTP(FakeResponse([])),
        FakeHTTP(FakeResponse("Service Unavailable")),
    ],
)
def test_api_transport_errors(http: FakeHTTP) -> None:
    with pytest.raises(RemoteError):
        APIClient(http=http).ping(CTX)


def test_user_info_unexpected_result() -> None:
    http = FakeHTTP(FakeResponse({"status": "OK", "result": {"handle": "tourist"}}))
    with pytest.raises(RemoteError, match="unexpected response"):
        APIClient(http=http).get_user_info(CTX, ["tourist"])


def test_api_check_degrades_on_non_object_body() -> None:
    result = APICheck(APIClient(http=FakeHTTP(FakeResponse([])))).run(CTX)
    assert result.status is Status.DEGRADED
    assert result.message == "CF API unreachable"
    assert result.action is Action.RETRY


def test_api_requires_handles() -> None:
    with pytest.raises(RemoteError):
        APIClient(http=FakeHTTP()).get_user_info(CTX, [])


def test_api_timeout_bounded_by_context() -> None:
    http = FakeHTTP(FakeResponse({"status": "OK", "result": []}))
    APIClient(http=http).ping(CheckContext.with_timeout(2))
    assert http.calls[0][1]["timeout"] <= 2


def test_user_from_dict_defaults() -> None:
    assert User.from_dict({"handle": "newbie"}) == User("newbie", "unrated", 0)


def test_missing_selectors() -> None:
    assert missing_selectors(PROBLEM_PAGE) == []
    assert missing_selectors("<div class='nothing'></div>") == [
        "title",
        "time_limit",
        "memory_limit",
        "statement",
        "samples",
    ]


def test_verifier_ok_and_changed() -> None:
    StructureVerifier(http=FakeHTTP(FakeResponse(text=PROBLEM_PAGE))).verify_structure(CTX)

    page = PROBLEM_PAGE.replace("sample-test", "example")
    with pytest.raises(RemoteError, match="samples"):
        StructureVerifier(http=FakeHTTP(FakeResponse(text=page))).verify_structure(CTX)


def test_verifier_fetch_error() -> None:
    http = FakeHTTP(error=requests.Timeout("slow"))
    with pytest.raises(RemoteError, match="fetch test page"):
        StructureVerifier(http=http).verify_structure(CTX)


def test_session_from_credentials() -> None:
    creds = Credentials(handle="tourist", jsessionid="j", clearance="c", clearance_ua="UA/1.0")
    session = WebSession.from_credentials(creds, http=FakeHTTP())

    assert session.identity() == "tourist"
    assert session.is_authenticated() is True
    assert session.http.cookies.get("cf_clearance") == "c"
    assert session.http.headers["User-Agent"] == "UA/1.0"


def test_session_without_login_cookie() -> None:
    session = WebSession(http=FakeHTTP())
    assert session.is_authenticated() is False
    with pytest.raises(RemoteError, match="no cookies"):
        session.validate(CTX)

    session.set_cookie("39ce7", "x")
    assert session.has_cookies() is True
    assert session.is_authenticated() is False


def test_session_validate() -> None:
    page = '<a href="/profile/tourist">tourist</a> <a href="/abc/logout">Logout</a> data-csrf=\'tok123\''
    session = WebSession(handle="tourist", http=FakeHTTP(FakeResponse(text=page)))
    session.set_cookie("JSESSIONID", "j")

    session.validate(CTX)
    assert session.csrf_token == "tok123"


def test_session_validate_logged_out() -> None:
    session = WebSession(http=FakeHTTP(FakeResponse(text="<a href='/enter'>Enter</a>")))
    session.set_cookie("JSESSIONID", "j")
    with pytest.raises(RemoteError, match="not logged in"):
        session.validate(CTX)
