"""Codeforces API and web collaborators."""

from .client import APIClient, User
from .session import WebSession
from .verifier import SELECTOR_VERSION, StructureVerifier

__all__ = ["APIClient", "SELECTOR_VERSION", "StructureVerifier", "User", "WebSession"]
