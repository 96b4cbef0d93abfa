"""Configuration helpers for tasklinks."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml
from django.core.exceptions import ImproperlyConfigured


@dataclass(frozen=True)
class TasklinksConfig:
    """Typed wrapper around the tasklinks configuration dictionary."""

    raw: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)

    def section(self, name: str) -> Dict[str, Any]:
        return dict(self.raw.get(name, {}))

    @property
    def render_links(self) -> bool:
        return bool(self.raw.get("render_links", True))

    def title_fetch(self, key: str) -> Any:
        return self.raw["title_fetch"][key]


DEFAULTS: Dict[str, Any] = {
    "render_links": True,
    "title_fetch": {
        "timeout": 5.0,
        "max_bytes": 1024 * 1024,
        "max_title_length": 200,
        "user_agent": "tasklinks/1.0 (+title preview)",
        "cache_alias": "tasklinks-titles",
        "workers": 4,
    },
    "short_syntax": {
        "is_enable_project": True,
        "is_enable_tag": True,
        "is_enable_due": True,
        "url_behavior": "keep-url",
    },
}


def load_config(path: str | Path | None = None) -> TasklinksConfig:
    """Load configuration from YAML, merging with defaults."""

    data: Dict[str, Any] = copy.deepcopy(DEFAULTS)

    if path is not None and Path(path).exists():
        with Path(path).open("r", encoding="utf-8") as stream:
            try:
                user = yaml.safe_load(stream) or {}
            except yaml.YAMLError as exc:
                raise ImproperlyConfigured(f"Invalid tasklinks config {path}: {exc}") from exc
        if not isinstance(user, dict):
            raise ImproperlyConfigured(f"Tasklinks config {path} must be a mapping.")
        merge_into(data, user)

    return TasklinksConfig(data)


def merge_into(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override into base dict."""

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_into(base[key], value)
        else:
            base[key] = value


def get_config() -> TasklinksConfig:
    """Return the configuration named by ``settings.TASKLINKS_CONFIG``."""

    from django.conf import settings

    return load_config(getattr(settings, "TASKLINKS_CONFIG", None))
