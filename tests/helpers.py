from __future__ import annotations

import time

from cf_practice.config import ConfigStore


def write_env(store: ConfigStore, **values: str) -> None:
    lines = [f"{key}={value}" for key, value in values.items()]
    store.env_file_path.write_text("\n".join(lines) + "\n")


def future(seconds: int) -> str:
    return str(int(time.time()) + seconds)
