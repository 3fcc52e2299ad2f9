"""Schema header embedded in every persisted entity."""

from dataclasses import dataclass
from typing import Any

from .version import CURRENT_VERSION

TYPE_WORKSPACE = "workspace"
TYPE_PROBLEM = "problem"
TYPE_SUBMISSION = "submission"
TYPE_PROGRESS = "progress"
TYPE_CONFIG = "config"


@dataclass(frozen=True)
class SchemaHeader:
    """Version header stored under the `_schema` key."""

    version: str
    type: str

    @classmethod
    def current(cls, schema_type: str) -> "SchemaHeader":
        return cls(version=str(CURRENT_VERSION), type=schema_type)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SchemaHeader":
        return cls(version=str(data.get("version", "")), type=str(data.get("type", "")))

    def to_dict(self) -> dict[str, str]:
        return {"version": self.version, "type": self.type}
