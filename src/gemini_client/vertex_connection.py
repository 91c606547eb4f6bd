"""Vertex AI adapter implementing the provider connection contract."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from pydantic.alias_generators import to_snake

from gemini_client.models.safety_setting import SafetySetting
from gemini_client.models.system_instruction import SystemInstruction


class VertexModelHandle:
    def __init__(self, model: Any) -> None:
        self._model = model

    @property
    def model(self) -> Any:
        return self._model

    def generate_content(self, request: Any) -> dict[str, Any]:
        response = self._model.generate_content(to_sdk_contents(request))
        return response.to_dict()


class VertexConnection:
    def __init__(self, project: str, location: str) -> None:
        import vertexai

        vertexai.init(project=project, location=location)
        self.project = project
        self.location = location

    def get_generative_model(
        self,
        *,
        model: str,
        safety_settings: list[SafetySetting],
        generation_config: dict[str, Any],
        system_instruction: SystemInstruction,
    ) -> VertexModelHandle:
        from vertexai.generative_models import GenerativeModel

        sdk_model = GenerativeModel(
            model,
            safety_settings=to_sdk_safety_settings(safety_settings),
            generation_config=to_sdk_generation_config(generation_config),
            system_instruction=to_sdk_system_instruction(system_instruction),
        )
        return VertexModelHandle(sdk_model)


def to_sdk_safety_settings(settings: list[SafetySetting]) -> list[Any]:
    from vertexai.generative_models import HarmBlockThreshold, HarmCategory
    from vertexai.generative_models import SafetySetting as SdkSafetySetting

    return [
        SdkSafetySetting(
            category=_sdk_enum(HarmCategory, setting.category),
            threshold=_sdk_enum(HarmBlockThreshold, setting.threshold),
        )
        for setting in settings
    ]


def to_sdk_generation_config(config: Mapping[str, Any]) -> Any:
    from vertexai.generative_models import GenerationConfig

    return GenerationConfig(**{to_snake(key): value for key, value in config.items()})


def to_sdk_system_instruction(system_instruction: SystemInstruction) -> list[Any]:
    from vertexai.generative_models import Part

    return [Part.from_text(part.text) for part in system_instruction.parts]


def to_sdk_contents(request: Any) -> Any:
    """
    Accept a prompt string, a list of content dicts, or a {"contents": [...]} request body.
    """
    from vertexai.generative_models import Content

    if isinstance(request, str):
        return request
    contents = request.get("contents") if isinstance(request, Mapping) else request
    if isinstance(contents, list):
        return [Content.from_dict(dict(item)) if isinstance(item, Mapping) else item for item in contents]
    return contents


def _sdk_enum(enum_cls: Any, value: Any) -> Any:
    """
    Look ``value`` up among the SDK enum's own members, by wire name or number.
    Values the local enums do not list still map when the installed SDK knows them.
    """
    name = value.value if isinstance(value, Enum) else value
    if isinstance(name, str) and name in enum_cls.__members__:
        return enum_cls[name]
    if isinstance(name, int) and not isinstance(name, bool):
        try:
            return enum_cls(name)
        except ValueError:
            return value
    return value
