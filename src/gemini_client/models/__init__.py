"""Model types for configuration resolution and reporting."""

from gemini_client.models.default_config import DefaultConfig
from gemini_client.models.harm import HarmBlockThreshold
from gemini_client.models.harm import HarmCategory
from gemini_client.models.instruction_part import InstructionPart
from gemini_client.models.overrides import Overrides
from gemini_client.models.resolved_config import ResolvedConfig
from gemini_client.models.run_report import RunError
from gemini_client.models.run_report import RunReport
from gemini_client.models.safety_setting import SafetySetting
from gemini_client.models.studio_config import StudioConfig
from gemini_client.models.system_instruction import SystemInstruction
from gemini_client.models.text_stats import TextStats

__all__ = [
    "DefaultConfig",
    "HarmBlockThreshold",
    "HarmCategory",
    "InstructionPart",
    "Overrides",
    "ResolvedConfig",
    "RunError",
    "RunReport",
    "SafetySetting",
    "StudioConfig",
    "SystemInstruction",
    "TextStats",
]
