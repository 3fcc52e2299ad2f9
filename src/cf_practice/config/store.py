"""Configuration and credential storage."""

import logging
import os
import shutil
from pathlib import Path
from typing import Any

import yaml

from cf_practice.errors import ConfigError

from .types import Config, Credentials

logger = logging.getLogger(__name__)

CONFIG_DIR = ".cf"
CONFIG_FILE = "config.yaml"
ENV_FILE = ".cf.env"
LEGACY_CONFIG_DIR = ".dsaprep"
LEGACY_ENV_FILE = ".dsaprep.env"

CONFIG_KEYS = ("cf_handle", "difficulty.min", "difficulty.max", "daily_goal", "workspace_path")

ENV_TEMPLATE = """\
# cf - Codeforces CLI Configuration
# Get your API key and secret from: https://codeforces.com/settings/api

# === API Authentication (for read operations) ===
CF_HANDLE=
CF_API_KEY=
CF_API_SECRET=

# === Session Cookies (extracted from browser - for submissions) ===
# 1. Open https://codeforces.com and log in
# 2. Open DevTools (F12) > Application > Cookies > codeforces.com
# 3. Copy the values for JSESSIONID and 39ce7 cookies
CF_JSESSIONID=
CF_39CE7=

# === Cloudflare Bypass (for automated access) ===
# Extract from browser: DevTools > Application > Cookies > cf_clearance
# Also copy your User-Agent from browser console: navigator.userAgent
# IMPORTANT: User-Agent MUST match exactly when using cf_clearance!
CF_CLEARANCE=
CF_CLEARANCE_EXPIRES=
CF_CLEARANCE_UA=
"""

# env file key -> Credentials attribute
ENV_KEYS = {
    "CF_HANDLE": "handle",
    "CF_API_KEY": "api_key",
    "CF_API_SECRET": "api_secret",
    "CF_JSESSIONID": "jsessionid",
    "CF_39CE7": "ce7_cookie",
    "CF_CLEARANCE": "clearance",
    "CF_CLEARANCE_EXPIRES": "clearance_expires",
    "CF_CLEARANCE_UA": "clearance_ua",
}


def default_home() -> Path:
    """Base directory for config files, overridable with CF_HOME."""
    return Path(os.environ.get("CF_HOME") or Path.home())


class ConfigStore:
    """Loads config.yaml and the credentials env file under a home directory.

    Nothing is read until init() or load_credentials() is called, so
    get() returns None for a store that was never initialized.
    """

    def __init__(self, home: Path | str | None = None) -> None:
        self.home = Path(home) if home is not None else default_home()
        self._config: Config | None = None

    @property
    def config_dir(self) -> Path:
        return self.home / CONFIG_DIR

    @property
    def config_path(self) -> Path:
        return self.config_dir / CONFIG_FILE

    @property
    def env_file_path(self) -> Path:
        return self.home / ENV_FILE

    def get(self) -> Config | None:
        return self._config

    def init(self, workspace_path: str = "") -> None:
        """Load config.yaml, creating it with defaults when missing."""
        try:
            self.migrate_from_legacy()
        except OSError as e:
            logger.warning("Failed to migrate legacy config: %s", e)

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigError(f"failed to create config dir: {e}") from e

        data = Config().to_dict()
        if self.config_path.exists():
            data.update(self._read_yaml())
        else:
            self._write_yaml(data)

        if workspace_path:
            data["workspace_path"] = workspace_path

        try:
            self._config = Config.from_dict(data)
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigError(f"failed to load config: {e}") from e

    def set(self, key: str, value: Any) -> None:
        """Set a dotted config key (e.g. "difficulty.min") and save."""
        if self._config is None:
            raise ConfigError("configuration not initialized")
        if key not in CONFIG_KEYS:
            raise ConfigError(f"unknown config key: {key}")

        data = self._config.to_dict()
        target = data
        *parents, leaf = key.split(".")
        for part in parents:
            target = target[part]
        target[leaf] = value

        try:
            self._config = Config.from_dict(data)
        except ValueError as e:
            raise ConfigError(f"invalid value for {key}: {value}") from e
        self._write_yaml(self._config.to_dict())

    def get_handle(self) -> str:
        return self._config.cf_handle if self._config else ""

    def has_handle(self) -> bool:
        return bool(self.get_handle())

    def has_cookie(self) -> bool:
        try:
            return self.load_credentials().has_session_cookies()
        except ConfigError:
            return False

    def get_workspace_path(self) -> Path:
        if self._config and self._config.workspace_path:
            return Path(self._config.workspace_path)
        return Path.cwd()

    def ensure_env_file(self) -> None:
        """Create the credentials env file from the template if missing."""
        if self.env_file_path.exists():
            return
        try:
            self.env_file_path.write_text(ENV_TEMPLATE)
            self.env_file_path.chmod(0o600)
        except OSError as e:
            raise ConfigError(f"failed to create env file: {e}") from e

    def load_credentials(self) -> Credentials:
        """Parse KEY=VALUE lines from the env file.

        A missing file yields empty credentials.
        """
        try:
            content = self.env_file_path.read_text()
        except FileNotFoundError:
            return Credentials()
        except OSError as e:
            raise ConfigError(f"failed to read {self.env_file_path}: {e}") from e

        creds = Credentials()
        for line in content.splitlines():
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = (part.strip() for part in line.split("=", 1))
            attr = ENV_KEYS.get(key)
            if attr is None:
                continue
            if attr == "clearance_expires":
                if not value:
                    continue
                if not (value.isascii() and value.isdigit()):
                    raise ConfigError(f"invalid CF_CLEARANCE_EXPIRES: {value}")
                setattr(creds, attr, int(value))
            else:
                setattr(creds, attr, value)
        return creds

    def save_credentials(self, creds: Credentials) -> None:
        lines = [f"{key}={getattr(creds, attr)}" for key, attr in ENV_KEYS.items()]
        try:
            self.env_file_path.write_text("\n".join(lines) + "\n")
            self.env_file_path.chmod(0o600)
        except OSError as e:
            raise ConfigError(f"failed to save credentials: {e}") from e

    def migrate_from_legacy(self) -> bool:
        """Copy ~/.dsaprep and ~/.dsaprep.env to their new locations.

        Returns True if anything was migrated.
        """
        migrated = False

        old_dir = self.home / LEGACY_CONFIG_DIR
        if old_dir.is_dir() and not self.config_dir.exists():
            shutil.copytree(old_dir, self.config_dir)
            logger.info("Migrated config: %s -> %s", old_dir, self.config_dir)
            migrated = True

        old_env = self.home / LEGACY_ENV_FILE
        if old_env.is_file() and not self.env_file_path.exists():
            shutil.copyfile(old_env, self.env_file_path)
            self.env_file_path.chmod(0o600)
            logger.info("Migrated credentials: %s -> %s", old_env, self.env_file_path)
            migrated = True

        return migrated

    def _read_yaml(self) -> dict[str, Any]:
        try:
            data = yaml.safe_load(self.config_path.read_text())
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"failed to read config: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"failed to read config: {self.config_path} is not a mapping")
        return data

    def _write_yaml(self, data: dict[str, Any]) -> None:
        try:
            self.config_path.write_text(yaml.safe_dump(data, sort_keys=False))
        except OSError as e:
            raise ConfigError(f"failed to write config: {e}") from e
