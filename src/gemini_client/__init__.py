"""Public package exports."""

from gemini_client.config_resolver import build_config
from gemini_client.config_resolver import resolve_config
from gemini_client.config_resolver import snapshot_environment
from gemini_client.errors import ContractViolation
from gemini_client.model_factory import ProviderConnection
from gemini_client.model_factory import build_system_instruction
from gemini_client.model_factory import get_model
from gemini_client.models import Overrides
from gemini_client.models import ResolvedConfig

__all__ = [
    "ContractViolation",
    "Overrides",
    "ProviderConnection",
    "ResolvedConfig",
    "build_config",
    "build_system_instruction",
    "get_model",
    "resolve_config",
    "snapshot_environment",
]
