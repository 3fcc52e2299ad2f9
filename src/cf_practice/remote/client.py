"""Codeforces API client."""

import logging
from dataclasses import dataclass
from typing import Any

import requests

from cf_practice.context import CheckContext
from cf_practice.errors import RemoteError

logger = logging.getLogger(__name__)

API_URL = "https://codeforces.com/api"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class User:
    """Subset of the user.info response."""

    handle: str
    rank: str = ""
    rating: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        return cls(
            handle=str(data.get("handle", "")),
            rank=str(data.get("rank") or "unrated"),
            rating=int(data.get("rating") or 0),
        )


class APIClient:
    """Minimal client for the public Codeforces API."""

    def __init__(
        self,
        http: requests.Session | None = None,
        base_url: str = API_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.http = http or requests.Session()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def request(self, ctx: CheckContext, method: str, **params: Any) -> Any:
        """Call an API method and return its "result" payload."""
        url = f"{self.base_url}/{method}"
        logger.debug("GET %s %s", url, params)
        try:
            resp = self.http.get(url, params=params, timeout=ctx.timeout(self.timeout))
            resp.raise_for_status()
            body = resp.json()
        except requests.RequestException as e:
            raise RemoteError(f"{method}: {e}") from e
        except ValueError as e:
            raise RemoteError(f"{method}: parse response: {e}") from e

        if not isinstance(body, dict):
            raise RemoteError(f"{method}: unexpected response")
        if body.get("status") != "OK":
            raise RemoteError(f"api error: {body.get('comment', 'unknown error')}")
        return body.get("result")

    def ping(self, ctx: CheckContext) -> None:
        """Raise RemoteError if the API does not answer."""
        self.request(ctx, "contest.list", gym="false")

    def get_user_info(self, ctx: CheckContext, handles: list[str]) -> list[User]:
        if not handles:
            raise RemoteError("no handles provided")
        result = self.request(ctx, "user.info", handles=";".join(handles)) or []
        if not isinstance(result, list) or not all(
            isinstance(item, dict) for item in result
        ):
            raise RemoteError("user.info: unexpected response")
        return [User.from_dict(item) for item in result]
