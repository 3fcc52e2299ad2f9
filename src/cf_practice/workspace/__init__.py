"""Local practice workspace."""

from .manifest import Manifest, PathConfig
from .workspace import MANIFEST_FILE, Workspace

__all__ = ["MANIFEST_FILE", "Manifest", "PathConfig", "Workspace"]
