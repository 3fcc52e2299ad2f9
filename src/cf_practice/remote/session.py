"""Cookie-based Codeforces web session."""

import logging
import re

import requests

from cf_practice.config import Credentials
from cf_practice.context import CheckContext
from cf_practice.errors import RemoteError

logger = logging.getLogger(__name__)

BASE_URL = "https://codeforces.com"
DOMAIN = "codeforces.com"
USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)
MAX_PAGE_SIZE = 5 * 1024 * 1024
DEFAULT_TIMEOUT = 15.0

# Cookies that only exist for a logged-in browser session
SESSION_COOKIES = ("JSESSIONID", "X-User")

_CSRF_RE = re.compile(r'name="X-Csrf-Token"\s+content="([^"]+)"|data-csrf=[\'"]([^\'"]+)')


class WebSession:
    """Browser cookies replayed through a requests session."""

    def __init__(
        self,
        handle: str = "",
        http: requests.Session | None = None,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.handle = handle
        self.http = http or requests.Session()
        self.http.headers["User-Agent"] = USER_AGENT
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.csrf_token = ""

    @classmethod
    def from_credentials(
        cls, creds: Credentials, http: requests.Session | None = None
    ) -> "WebSession":
        session = cls(handle=creds.handle, http=http)
        cookies = {
            "JSESSIONID": creds.jsessionid,
            "39ce7": creds.ce7_cookie,
            "cf_clearance": creds.clearance,
        }
        for name, value in cookies.items():
            if value:
                session.set_cookie(name, value)
        if creds.clearance_ua:
            session.http.headers["User-Agent"] = creds.clearance_ua
        return session

    def set_cookie(self, name: str, value: str) -> None:
        self.http.cookies.set(name, value, domain=DOMAIN)

    def has_cookies(self) -> bool:
        return len(self.http.cookies) > 0

    def is_authenticated(self) -> bool:
        return any(cookie.name in SESSION_COOKIES for cookie in self.http.cookies)

    def identity(self) -> str:
        return self.handle

    def validate(self, ctx: CheckContext) -> None:
        """Raise RemoteError unless the home page shows a logged-in user."""
        if not self.has_cookies():
            raise RemoteError("no cookies set")

        try:
            resp = self.http.get(self.base_url, timeout=ctx.timeout(self.timeout))
            resp.raise_for_status()
        except requests.RequestException as e:
            raise RemoteError(f"validation request failed: {e}") from e

        body = resp.text[:MAX_PAGE_SIZE]
        if "/logout" not in body:
            raise RemoteError("session invalid - not logged in")

        match = _CSRF_RE.search(body)
        if match:
            self.csrf_token = match.group(1) or match.group(2)
            logger.debug("Refreshed CSRF token")
