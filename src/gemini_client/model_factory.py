"""Model-handle factory built on a resolved configuration."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Optional, Protocol, TypedDict, runtime_checkable

from gemini_client.config_resolver import OverridesInput, build_config
from gemini_client.errors import ContractViolation
from gemini_client.models.default_config import DefaultConfig
from gemini_client.models.instruction_part import InstructionPart
from gemini_client.models.resolved_config import ResolvedConfig
from gemini_client.models.safety_setting import SafetySetting
from gemini_client.models.system_instruction import SystemInstruction


class ConnectionParams(TypedDict):
    project: str
    location: str


@runtime_checkable
class ModelHandle(Protocol):
    def generate_content(self, request: Any) -> Any: ...


@runtime_checkable
class ProviderConnection(Protocol):
    def get_generative_model(
        self,
        *,
        model: str,
        safety_settings: list[SafetySetting],
        generation_config: dict[str, Any],
        system_instruction: SystemInstruction,
    ) -> ModelHandle: ...


ClientFactory = Callable[[ConnectionParams, ResolvedConfig], Any]


def get_model(
    overrides: OverridesInput = None,
    *,
    create_client: Optional[ClientFactory] = None,
    env: Optional[Mapping[str, str]] = None,
    defaults: Optional[DefaultConfig] = None,
) -> ModelHandle:
    config = build_config(overrides, env=env, defaults=defaults)
    factory = create_client or default_create_client
    connection = factory(ConnectionParams(project=config.project, location=config.location), config)
    ensure_provider_connection(connection)

    return connection.get_generative_model(
        model=config.model,
        safety_settings=config.safety_settings,
        generation_config=config.generation_config,
        system_instruction=build_system_instruction(config.system_instruction_parts),
    )


def default_create_client(params: ConnectionParams, config: ResolvedConfig) -> ProviderConnection:
    from gemini_client.vertex_connection import VertexConnection

    return VertexConnection(project=params["project"], location=params["location"])


def build_system_instruction(parts: Iterable[InstructionPart]) -> SystemInstruction:
    return SystemInstruction(role="system", parts=[part.model_copy(deep=True) for part in parts])


def ensure_provider_connection(connection: Any) -> None:
    if not isinstance(connection, ProviderConnection) or not callable(connection.get_generative_model):
        raise ContractViolation(
            "Expected create_client to return a provider connection with get_generative_model(); "
            f"got {type(connection).__name__}."
        )
