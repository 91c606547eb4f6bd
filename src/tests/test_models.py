from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

import gemini_client
from gemini_client.defaults import DEFAULT_CONFIG, load_default_config
from gemini_client.models import DefaultConfig
from gemini_client.models import HarmBlockThreshold
from gemini_client.models import HarmCategory
from gemini_client.models import Overrides
from gemini_client.models import SafetySetting
from gemini_client.models.harm import resolve_enum_value


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (HarmCategory.HATE_SPEECH, HarmCategory.HATE_SPEECH),
        ("HARM_CATEGORY_HATE_SPEECH", HarmCategory.HATE_SPEECH),
        ("HATE_SPEECH", HarmCategory.HATE_SPEECH),
        ("hate_speech", "hate_speech"),
        (7, 7),
        (None, None),
    ],
)
def test_resolve_enum_value(raw: object, expected: object) -> None:
    assert resolve_enum_value(HarmCategory, raw) == expected


def test_safety_setting_normalizes_names_and_keeps_extras() -> None:
    setting = SafetySetting.model_validate(
        {"category": "SEXUALLY_EXPLICIT", "threshold": "BLOCK_ONLY_HIGH", "method": "SEVERITY"}
    )

    assert setting.category is HarmCategory.SEXUALLY_EXPLICIT
    assert setting.threshold is HarmBlockThreshold.ONLY_HIGH
    assert setting.model_dump(mode="json") == {
        "category": "HARM_CATEGORY_SEXUALLY_EXPLICIT",
        "threshold": "BLOCK_ONLY_HIGH",
        "method": "SEVERITY",
    }


def test_bundled_defaults_load() -> None:
    assert DEFAULT_CONFIG.project
    assert DEFAULT_CONFIG.location
    assert DEFAULT_CONFIG.model
    assert len(DEFAULT_CONFIG.system_instruction_parts) >= 1
    assert all(isinstance(setting.category, HarmCategory) for setting in DEFAULT_CONFIG.safety_settings)
    assert all(isinstance(setting.threshold, HarmBlockThreshold) for setting in DEFAULT_CONFIG.safety_settings)


def test_bundled_safety_settings_use_wire_names() -> None:
    text = (Path(gemini_client.__file__).parent / "defaults.yaml").read_text(encoding="utf-8")
    raw = yaml.safe_load(text)["safetySettings"]

    settings = DEFAULT_CONFIG.safety_settings
    assert [entry["category"] for entry in raw] == [setting.category.value for setting in settings]
    assert [entry["threshold"] for entry in raw] == [setting.threshold.value for setting in settings]


def test_default_config_is_read_only() -> None:
    with pytest.raises(ValidationError):
        DEFAULT_CONFIG.model = "other"  # type: ignore[misc]
    with pytest.raises(TypeError):
        DEFAULT_CONFIG.generation_config["temperature"] = 1.0  # type: ignore[index]
    assert isinstance(DEFAULT_CONFIG.system_instruction_parts, tuple)


def test_default_config_requires_instruction_parts() -> None:
    with pytest.raises(ValidationError):
        DefaultConfig.model_validate(
            {"project": "p", "location": "l", "model": "m", "systemInstructionParts": []}
        )


def test_load_default_config_from_text() -> None:
    config = load_default_config(
        "project: p\nlocation: l\nmodel: m\nsystemInstructionParts:\n  - text: hi\n"
    )
    assert config.project == "p"
    assert dict(config.generation_config) == {}
    assert config.safety_settings == ()


def test_load_default_config_rejects_non_mapping() -> None:
    with pytest.raises(ValueError):
        load_default_config("- just\n- a list\n")


def test_overrides_accept_snake_and_camel_case() -> None:
    camel = Overrides.model_validate({"systemInstruction": "x", "generationConfig": {"topK": 1}})
    snake = Overrides.model_validate({"system_instruction": "x", "generation_config": {"topK": 1}})
    assert camel == snake


def test_overrides_ignore_unknown_keys() -> None:
    overrides = Overrides.model_validate({"project": "p", "somethingElse": 1})
    assert overrides.project == "p"
    assert not hasattr(overrides, "somethingElse")
