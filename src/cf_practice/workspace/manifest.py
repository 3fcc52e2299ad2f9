"""Workspace manifest (workspace.yaml) definition."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from cf_practice.schema import TYPE_WORKSPACE, SchemaHeader


@dataclass
class PathConfig:
    """Relative paths within the workspace."""

    problems: str = "problems"
    templates: str = "templates"
    submissions: str = "submissions"
    stats: str = "stats"

    def as_list(self) -> list[str]:
        return [self.problems, self.templates, self.submissions, self.stats]


@dataclass
class Manifest:
    """Contents of workspace.yaml."""

    schema: SchemaHeader
    name: str
    handle: str = ""
    default_language: str = "cpp"
    difficulty_min: int = 800
    difficulty_max: int = 1400
    daily_goal: int = 3
    paths: PathConfig = field(default_factory=PathConfig)
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def new(cls, name: str, handle: str) -> "Manifest":
        now = datetime.now(timezone.utc).isoformat()
        return cls(
            schema=SchemaHeader.current(TYPE_WORKSPACE),
            name=name,
            handle=handle,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Manifest":
        codeforces = data.get("codeforces") or {}
        practice = data.get("practice") or {}
        paths = data.get("paths") or {}
        return cls(
            schema=SchemaHeader.from_dict(data.get("_schema") or {}),
            name=str(data.get("name", "")),
            handle=str(codeforces.get("handle") or ""),
            default_language=str(codeforces.get("defaultLanguage") or "cpp"),
            difficulty_min=int(practice.get("difficultyMin", 800)),
            difficulty_max=int(practice.get("difficultyMax", 1400)),
            daily_goal=int(practice.get("dailyGoal", 3)),
            paths=PathConfig(
                problems=paths.get("problems") or "problems",
                templates=paths.get("templates") or "templates",
                submissions=paths.get("submissions") or "submissions",
                stats=paths.get("stats") or "stats",
            ),
            created_at=str(data.get("createdAt", "")),
            updated_at=str(data.get("updatedAt", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "_schema": self.schema.to_dict(),
            "name": self.name,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "codeforces": {
                "handle": self.handle,
                "defaultLanguage": self.default_language,
            },
            "practice": {
                "difficultyMin": self.difficulty_min,
                "difficultyMax": self.difficulty_max,
                "dailyGoal": self.daily_goal,
            },
            "paths": {
                "problems": self.paths.problems,
                "templates": self.paths.templates,
                "submissions": self.paths.submissions,
                "stats": self.paths.stats,
            },
        }
