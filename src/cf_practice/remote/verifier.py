"""Detects changes in the Codeforces problem page markup."""

import re

import requests

from cf_practice.context import CheckContext
from cf_practice.errors import RemoteError

from .session import BASE_URL, USER_AGENT

# Bump when PROBLEM_SELECTORS change
SELECTOR_VERSION = "1.0.0"

# Problem page element -> CSS class the parser relies on
PROBLEM_SELECTORS = {
    "title": "title",
    "time_limit": "time-limit",
    "memory_limit": "memory-limit",
    "statement": "problem-statement",
    "samples": "sample-test",
}

REFERENCE_PROBLEM = "/problemset/problem/1/A"


def _has_class(html: str, css_class: str) -> bool:
    pattern = rf'class="[^"]*\b{re.escape(css_class)}\b[^"]*"'
    return re.search(pattern, html) is not None


def missing_selectors(html: str) -> list[str]:
    """Names of PROBLEM_SELECTORS not present in the page."""
    return [name for name, css in PROBLEM_SELECTORS.items() if not _has_class(html, css)]


class StructureVerifier:
    """Fetches a known problem and checks the selectors still match."""

    version = SELECTOR_VERSION

    def __init__(
        self,
        http: requests.Session | None = None,
        base_url: str = BASE_URL,
        timeout: float = 15.0,
    ) -> None:
        self.http = http or requests.Session()
        self.http.headers["User-Agent"] = USER_AGENT
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def verify_structure(self, ctx: CheckContext) -> None:
        url = self.base_url + REFERENCE_PROBLEM
        try:
            resp = self.http.get(url, timeout=ctx.timeout(self.timeout))
            resp.raise_for_status()
        except requests.RequestException as e:
            raise RemoteError(f"fetch test page: {e}") from e

        missing = missing_selectors(resp.text)
        if missing:
            raise RemoteError(f"selectors not found: {', '.join(missing)}")
