"""Settings module tests."""

from __future__ import annotations

import importlib.util
from pathlib import Path

import tasklinks_site

SETTINGS_PATH = Path(tasklinks_site.__file__).resolve().parent / "settings.py"


def _load_settings():
    spec = importlib.util.spec_from_file_location("tasklinks_site_settings_copy", SETTINGS_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_settings_import_under_pytest_without_environment(monkeypatch):
    for name in ("DJANGO_DEBUG", "DJANGO_SECRET_KEY", "PYTEST_CURRENT_TEST"):
        monkeypatch.delenv(name, raising=False)

    settings = _load_settings()

    assert settings.RUNNING_TESTS is True
    assert settings.DEBUG is True


def test_title_cache_never_expires(monkeypatch):
    monkeypatch.setenv("TASKLINKS_TITLE_CACHE_MAX_ENTRIES", "10")

    settings = _load_settings()

    cache = settings.CACHES["tasklinks-titles"]
    assert cache["TIMEOUT"] is None
    assert cache["OPTIONS"]["MAX_ENTRIES"] == 10
