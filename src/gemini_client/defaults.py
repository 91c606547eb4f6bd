"""Bundled default configuration, loaded once at import."""

from __future__ import annotations

from importlib import resources
from typing import Any

import yaml

from gemini_client.models.default_config import DefaultConfig

DEFAULTS_RESOURCE = "defaults.yaml"


def load_default_config(text: str | None = None) -> DefaultConfig:
    if text is None:
        text = resources.files("gemini_client").joinpath(DEFAULTS_RESOURCE).read_text(encoding="utf-8")
    raw: Any = yaml.safe_load(text)
    if not isinstance(raw, dict):
        raise ValueError(f"{DEFAULTS_RESOURCE} must contain a mapping at the top level.")
    return DefaultConfig.model_validate(raw)


DEFAULT_CONFIG: DefaultConfig = load_default_config()
