from __future__ import annotations

import importlib
import os


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "timecard.settings.production"

    if env in {"test", "testing"}:
        return "timecard.settings.testing"

    return "timecard.settings.development"


def load_settings(module_name: str | None = None) -> dict:
    """Upper-case names of the selected settings module as a plain dict."""
    module = importlib.import_module(module_name or get_settings_module())
    return {name: getattr(module, name) for name in dir(module) if name.isupper()}
