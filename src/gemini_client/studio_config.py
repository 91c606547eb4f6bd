"""Google AI Studio settings from environment and local JSON files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional

from gemini_client.errors import MissingCredentialsError
from gemini_client.io_utils import read_json_if_exists
from gemini_client.models.studio_config import DEFAULT_BASE_URL, DEFAULT_MODEL, StudioConfig

ENV_FILE_NAME = "env.local.json"
DEFAULT_CREDENTIAL_PATH = "../credential.json"
DEFAULT_OUTPUT_PATH = "results/latest-response.json"


def load_studio_config(env: Optional[Mapping[str, str]] = None, cwd: Optional[Path] = None) -> StudioConfig:
    """
    Resolve AI Studio settings. Each key is taken from the environment first,
    then env.local.json in ``cwd``; the API key may also come from the credential file.
    """
    env = os.environ if env is None else env
    cwd = Path.cwd() if cwd is None else cwd
    env_file = read_json_if_exists(cwd / ENV_FILE_NAME)
    credential_file = read_json_if_exists(resolve_credential_path(env, cwd))

    api_key = _first(env, env_file, credential_file, key="GOOGLE_AI_STUDIO_API_KEY")
    if not api_key:
        raise MissingCredentialsError(
            "Missing GOOGLE_AI_STUDIO_API_KEY in environment, env.local.json, or credential.json"
        )

    return StudioConfig(
        api_key=api_key,
        base_url=_first(env, env_file, key="AI_API_BASE_URL") or DEFAULT_BASE_URL,
        model=_first(env, env_file, key="AI_API_MODEL") or DEFAULT_MODEL,
        output_path=resolve_output_path(_first(env, env_file, key="AI_API_OUTPUT_PATH"), cwd),
    )


def resolve_credential_path(env: Mapping[str, str], cwd: Path) -> Path:
    override = env.get("GOOGLE_AI_STUDIO_CREDENTIAL_PATH")
    return (cwd / (override or DEFAULT_CREDENTIAL_PATH)).resolve(strict=False)


def resolve_output_path(raw_value: Optional[str], cwd: Path) -> Path:
    path = Path(raw_value or DEFAULT_OUTPUT_PATH)
    if path.is_absolute():
        return path
    return (cwd / path).resolve(strict=False)


def _first(*sources: Mapping[str, Any], key: str) -> Any:
    for source in sources:
        value = source.get(key)
        if value is not None:
            return value
    return None
