"""Configuration resolution: overrides, then environment, then defaults."""

from __future__ import annotations

import copy
import json
import math
import os
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Sequence

from pydantic import ValidationError

from gemini_client.defaults import DEFAULT_CONFIG
from gemini_client.models.default_config import DefaultConfig
from gemini_client.models.instruction_part import InstructionPart
from gemini_client.models.overrides import Overrides
from gemini_client.models.resolved_config import ResolvedConfig
from gemini_client.models.safety_setting import SafetySetting
from gemini_client.models.system_instruction import SystemInstruction

ENV_PROJECT = "GOOGLE_CLOUD_PROJECT"
ENV_LOCATION = "VERTEX_LOCATION"
ENV_MODEL = "VERTEX_MODEL"
ENV_SYSTEM_INSTRUCTION_PARTS = "VERTEX_SYSTEM_INSTRUCTION_PARTS"
ENV_SYSTEM_INSTRUCTION = "VERTEX_SYSTEM_INSTRUCTION"

# generation key -> (environment variable, coerce to int)
GENERATION_NUMERIC_FIELDS: dict[str, tuple[str, bool]] = {
    "maxOutputTokens": ("VERTEX_MAX_OUTPUT_TOKENS", True),
    "temperature": ("VERTEX_TEMPERATURE", False),
    "topP": ("VERTEX_TOP_P", False),
    "topK": ("VERTEX_TOP_K", True),
}

OverridesInput = Overrides | Mapping[str, Any] | None


def snapshot_environment() -> Mapping[str, str]:
    return MappingProxyType(dict(os.environ))


def coerce_overrides(overrides: OverridesInput) -> Overrides:
    if overrides is None:
        return Overrides()
    if isinstance(overrides, Overrides):
        return overrides
    if not isinstance(overrides, Mapping):
        return Overrides()
    return Overrides.model_validate(dict(overrides))


def build_config(
    overrides: OverridesInput = None,
    env: Optional[Mapping[str, str]] = None,
    defaults: Optional[DefaultConfig] = None,
) -> ResolvedConfig:
    if defaults is None:
        defaults = DEFAULT_CONFIG
    if env is None:
        env = snapshot_environment()
    return resolve_config(defaults, overrides, env)


def resolve_config(
    defaults: DefaultConfig,
    overrides: OverridesInput,
    env: Mapping[str, str],
) -> ResolvedConfig:
    """
    Merge call-site overrides, environment values and defaults into a new ResolvedConfig.
    Nothing in the result shares a container or element with the inputs.
    """
    resolved_overrides = coerce_overrides(overrides)
    return ResolvedConfig(
        project=resolve_string(resolved_overrides.project, env.get(ENV_PROJECT), defaults.project),
        location=resolve_string(resolved_overrides.location, env.get(ENV_LOCATION), defaults.location),
        model=resolve_string(resolved_overrides.model, env.get(ENV_MODEL), defaults.model),
        system_instruction_parts=resolve_system_instruction_parts(resolved_overrides, env, defaults),
        safety_settings=resolve_safety_settings(resolved_overrides, defaults),
        generation_config=resolve_generation_config(resolved_overrides, env, defaults),
    )


def resolve_string(override_value: Any, env_value: Any, fallback: str) -> str:
    for candidate in (override_value, env_value):
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()
    return fallback


def resolve_system_instruction_parts(
    overrides: Overrides,
    env: Mapping[str, str],
    defaults: DefaultConfig,
) -> list[InstructionPart]:
    candidates = (
        overrides.system_instruction_parts,
        overrides.system_instruction,
        try_parse_json(env.get(ENV_SYSTEM_INSTRUCTION_PARTS)),
        env.get(ENV_SYSTEM_INSTRUCTION),
        defaults.system_instruction_parts,
    )
    for candidate in candidates:
        parts = normalize_parts(candidate)
        if parts:
            return parts
    return clone_parts(defaults.system_instruction_parts)


def normalize_parts(value: Any) -> list[InstructionPart] | None:
    if isinstance(value, SystemInstruction):
        return normalize_parts(value.parts)
    if isinstance(value, Mapping):
        parts = value.get("parts")
        return normalize_parts(parts) if isinstance(parts, list) else None
    if isinstance(value, str):
        trimmed = value.strip()
        if trimmed:
            return [InstructionPart(text=trimmed)]
        return None
    if isinstance(value, Sequence) and value:
        try:
            return clone_parts(value)
        except ValidationError:
            return None
    return None


def clone_parts(parts: Iterable[Any]) -> list[InstructionPart]:
    cloned: list[InstructionPart] = []
    for part in parts:
        if isinstance(part, InstructionPart):
            cloned.append(part.model_copy(deep=True))
        else:
            cloned.append(InstructionPart.model_validate(copy.deepcopy(part)))
    return cloned


def resolve_safety_settings(overrides: Overrides, defaults: DefaultConfig) -> list[SafetySetting]:
    settings = normalize_safety_settings(overrides.safety_settings)
    if settings:
        return settings
    return [setting.model_copy(deep=True) for setting in defaults.safety_settings]


def normalize_safety_settings(value: Any) -> list[SafetySetting] | None:
    """
    Copy a non-empty list of safety settings.
    Returns None when any entry lacks a category or threshold.
    """
    if not isinstance(value, (list, tuple)) or not value:
        return None
    settings: list[SafetySetting] = []
    for setting in value:
        if isinstance(setting, SafetySetting):
            settings.append(setting.model_copy(deep=True))
            continue
        try:
            settings.append(SafetySetting.model_validate(copy.deepcopy(setting)))
        except ValidationError:
            return None
    return settings


def resolve_generation_config(
    overrides: Overrides,
    env: Mapping[str, str],
    defaults: DefaultConfig,
) -> dict[str, Any]:
    config: dict[str, Any] = copy.deepcopy(dict(defaults.generation_config))

    for key, (env_key, as_integer) in GENERATION_NUMERIC_FIELDS.items():
        value = parse_numeric(env.get(env_key), as_integer)
        if value is not None:
            config[key] = value

    if isinstance(overrides.generation_config, Mapping):
        config.update(sanitize_generation_overrides(overrides.generation_config))
    return config


def sanitize_generation_overrides(values: Mapping[str, Any]) -> dict[str, int | float]:
    sanitized: dict[str, int | float] = {}
    for key, (_env_key, as_integer) in GENERATION_NUMERIC_FIELDS.items():
        value = parse_numeric(values.get(key), as_integer)
        if value is not None:
            sanitized[key] = value
    return sanitized


def parse_numeric(value: Any, as_integer: bool) -> int | float | None:
    """
    Parse ``value`` as a finite number, truncating toward zero when ``as_integer``.
    Returns None for anything that is not a finite number.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int) and as_integer:
        return value
    if isinstance(value, str):
        value = value.strip()
        # float() accepts digit separators such as "1_000".
        if not value or "_" in value:
            return None
    try:
        numeric = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(numeric):
        return None
    if as_integer:
        return math.trunc(numeric)
    return numeric


def try_parse_json(value: Any) -> Any:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return None
