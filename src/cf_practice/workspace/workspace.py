"""Practice workspace on disk."""

from pathlib import Path

import yaml

from cf_practice.errors import InvalidVersionError, WorkspaceError
from cf_practice.schema import SchemaVersion

from .manifest import Manifest

MANIFEST_FILE = "workspace.yaml"


class Workspace:
    """A workspace rooted at a directory containing workspace.yaml."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)
        self.manifest: Manifest | None = None

    @property
    def manifest_path(self) -> Path:
        return self.root / MANIFEST_FILE

    def exists(self) -> bool:
        return self.manifest_path.exists()

    def init(self, name: str, handle: str) -> None:
        """Create the manifest and directory layout.

        Safe to call on an existing workspace: directories are kept and
        the manifest is rewritten.
        """
        manifest = Manifest.new(name, handle)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            self.manifest = manifest
            self.save_manifest()
            for rel in manifest.paths.as_list():
                directory = self.root / rel
                directory.mkdir(parents=True, exist_ok=True)
                (directory / ".gitkeep").touch()
        except OSError as e:
            raise WorkspaceError(f"failed to create workspace: {e}") from e

    def load(self) -> Manifest:
        self.manifest = self.load_manifest()
        return self.manifest

    def load_manifest(self) -> Manifest:
        try:
            data = yaml.safe_load(self.manifest_path.read_text())
        except OSError as e:
            raise WorkspaceError(f"failed to read manifest: {e}") from e
        except yaml.YAMLError as e:
            raise WorkspaceError(f"failed to parse manifest: {e}") from e

        if not isinstance(data, dict):
            raise WorkspaceError("failed to parse manifest: not a mapping")
        try:
            return Manifest.from_dict(data)
        except (AttributeError, TypeError, ValueError) as e:
            raise WorkspaceError(f"failed to parse manifest: {e}") from e

    def save_manifest(self) -> None:
        if self.manifest is None:
            raise WorkspaceError("no manifest to save")
        self.manifest_path.write_text(
            yaml.safe_dump(self.manifest.to_dict(), sort_keys=False)
        )

    def get_schema_version(self) -> str:
        """Return the raw version string from the manifest header."""
        return self.load_manifest().schema.version

    def validate(self) -> None:
        """Raise WorkspaceError if the workspace is structurally incomplete."""
        if not self.exists():
            raise WorkspaceError("workspace not initialized")

        try:
            manifest = self.load_manifest()
        except WorkspaceError as e:
            raise WorkspaceError(f"invalid manifest: {e}") from e

        try:
            SchemaVersion.parse(manifest.schema.version)
        except InvalidVersionError as e:
            raise WorkspaceError(f"invalid schema version: {e}") from e

        for rel in manifest.paths.as_list():
            directory = self.root / rel
            if not directory.is_dir():
                raise WorkspaceError(f"missing directory: {directory}")
