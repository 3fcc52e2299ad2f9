"""Versioned schema definitions."""

from .types import (
    TYPE_CONFIG,
    TYPE_PROBLEM,
    TYPE_PROGRESS,
    TYPE_SUBMISSION,
    TYPE_WORKSPACE,
    SchemaHeader,
)
from .version import (
    CURRENT_VERSION,
    MIN_SUPPORTED_VERSION,
    SchemaVersion,
    is_compatible,
    needs_migration,
)

__all__ = [
    "CURRENT_VERSION",
    "MIN_SUPPORTED_VERSION",
    "SchemaHeader",
    "SchemaVersion",
    "TYPE_CONFIG",
    "TYPE_PROBLEM",
    "TYPE_PROGRESS",
    "TYPE_SUBMISSION",
    "TYPE_WORKSPACE",
    "is_compatible",
    "needs_migration",
]
