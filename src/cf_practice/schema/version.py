"""Schema version parsing and compatibility."""

from dataclasses import dataclass

from cf_practice.errors import InvalidVersionError


@dataclass(frozen=True, order=True)
class SchemaVersion:
    """Semantic version of a persisted entity."""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, value: str) -> "SchemaVersion":
        """Parse a dotted version string such as "1.0.0"."""
        parts = str(value).strip().split(".")
        if len(parts) != 3:
            raise InvalidVersionError(f"invalid version format: {value}")

        numbers = []
        for label, part in zip(("major", "minor", "patch"), parts):
            if not (part.isascii() and part.isdigit()):
                raise InvalidVersionError(f"invalid {label} version: {part}")
            numbers.append(int(part))

        return cls(*numbers)

    def is_compatible(self, current: "SchemaVersion") -> bool:
        return is_compatible(self, current)

    def needs_migration(self, current: "SchemaVersion") -> bool:
        return needs_migration(self, current)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


CURRENT_VERSION = SchemaVersion(1, 0, 0)

# Oldest version we can migrate from
MIN_SUPPORTED_VERSION = SchemaVersion(1, 0, 0)


def is_compatible(old: SchemaVersion, current: SchemaVersion = CURRENT_VERSION) -> bool:
    """Versions are compatible when their major components match."""
    return old.major == current.major


def needs_migration(
    old: SchemaVersion, current: SchemaVersion = CURRENT_VERSION
) -> bool:
    """Compatible versions that differ in minor or patch can be migrated."""
    return is_compatible(old, current) and old != current
