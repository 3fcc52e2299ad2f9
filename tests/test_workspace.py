from __future__ import annotations

import pytest
import yaml

from cf_practice.errors import WorkspaceError
from cf_practice.workspace import Workspace


def test_init_creates_layout(workspace: Workspace) -> None:
    assert workspace.exists() is False

    workspace.init("DSA Practice", "tourist")

    assert workspace.exists()
    for name in ("problems", "templates", "submissions", "stats"):
        assert (workspace.root / name / ".gitkeep").is_file()

    manifest = workspace.load()
    assert manifest.name == "DSA Practice"
    assert manifest.handle == "tourist"
    assert manifest.schema.type == "workspace"
    assert workspace.get_schema_version() == "1.0.0"
    workspace.validate()


def test_init_is_idempotent(workspace: Workspace) -> None:
    workspace.init("A", "x")
    (workspace.root / "problems" / "solution.cpp").write_text("int main() {}")

    workspace.init("A", "x")

    assert (workspace.root / "problems" / "solution.cpp").exists()
    workspace.validate()


def test_validate_missing_workspace(workspace: Workspace) -> None:
    with pytest.raises(WorkspaceError, match="not initialized"):
        workspace.validate()


def test_validate_bad_version(workspace: Workspace) -> None:
    workspace.init("A", "x")
    data = yaml.safe_load(workspace.manifest_path.read_text())
    data["_schema"]["version"] = "v1"
    workspace.manifest_path.write_text(yaml.safe_dump(data))

    with pytest.raises(WorkspaceError, match="invalid schema version"):
        workspace.validate()


def test_validate_non_mapping_manifest(workspace: Workspace) -> None:
    workspace.root.mkdir(parents=True)
    workspace.manifest_path.write_text("- just\n- a list\n")

    with pytest.raises(WorkspaceError, match="invalid manifest"):
        workspace.validate()


def test_get_schema_version_without_manifest(workspace: Workspace) -> None:
    with pytest.raises(WorkspaceError):
        workspace.get_schema_version()


def test_save_without_manifest(workspace: Workspace) -> None:
    with pytest.raises(WorkspaceError):
        workspace.save_manifest()


def test_validate_non_ascii_version(workspace: Workspace) -> None:
    workspace.init("A", "x")
    data = yaml.safe_load(workspace.manifest_path.read_text())
    data["_schema"]["version"] = "1.0.²"
    workspace.manifest_path.write_text(yaml.safe_dump(data))

    with pytest.raises(WorkspaceError, match="invalid schema version"):
        workspace.validate()
