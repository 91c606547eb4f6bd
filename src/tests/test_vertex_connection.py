import pytest

from gemini_client.models import HarmBlockThreshold
from gemini_client.models import HarmCategory
from gemini_client.models import InstructionPart
from gemini_client.models import SafetySetting
from gemini_client.models import SystemInstruction

generative_models = pytest.importorskip("vertexai.generative_models")

from gemini_client import vertex_connection  # noqa: E402


def test_wire_values_map_to_sdk_enum_members() -> None:
    sdk_enum = vertex_connection._sdk_enum

    assert sdk_enum(generative_models.HarmCategory, HarmCategory.HATE_SPEECH) is (
        generative_models.HarmCategory.HARM_CATEGORY_HATE_SPEECH
    )
    assert sdk_enum(generative_models.HarmBlockThreshold, "BLOCK_NONE") is (
        generative_models.HarmBlockThreshold.BLOCK_NONE
    )
    assert sdk_enum(generative_models.HarmCategory, "HARM_CATEGORY_FUTURE") == "HARM_CATEGORY_FUTURE"


def test_safety_settings_become_sdk_objects() -> None:
    settings = [
        SafetySetting(category=HarmCategory.HATE_SPEECH, threshold=HarmBlockThreshold.ONLY_HIGH),
        SafetySetting(category="HARASSMENT", threshold="BLOCK_NONE"),
    ]

    sdk_settings = vertex_connection.to_sdk_safety_settings(settings)

    assert len(sdk_settings) == 2
    assert all(isinstance(setting, generative_models.SafetySetting) for setting in sdk_settings)


class RecordingGenerationConfig:
    def __init__(self, **kwargs: object) -> None:
        self.kwargs = kwargs


def test_generation_config_keys_become_snake_case(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(generative_models, "GenerationConfig", RecordingGenerationConfig)

    sdk_config = vertex_connection.to_sdk_generation_config(
        {"maxOutputTokens": 64, "temperature": 0.3, "topP": 0.9, "topK": 5}
    )

    assert sdk_config.kwargs == {"max_output_tokens": 64, "temperature": 0.3, "top_p": 0.9, "top_k": 5}


def test_system_instruction_becomes_text_parts() -> None:
    instruction = SystemInstruction(parts=[InstructionPart(text="a"), InstructionPart(text="b")])

    parts = vertex_connection.to_sdk_system_instruction(instruction)

    assert [part.text for part in parts] == ["a", "b"]


def test_request_contents_conversion() -> None:
    assert vertex_connection.to_sdk_contents("hello") == "hello"

    contents = vertex_connection.to_sdk_contents(
        {"contents": [{"role": "user", "parts": [{"text": "Ping"}]}]}
    )

    assert isinstance(contents[0], generative_models.Content)
    assert contents[0].role == "user"
    assert contents[0].parts[0].text == "Ping"


def test_model_handle_returns_response_dict() -> None:
    class FakeResponse:
        def to_dict(self) -> dict[str, list[str]]:
            return {"candidates": []}

    class FakeModel:
        def __init__(self) -> None:
            self.requests: list[object] = []

        def generate_content(self, contents: object) -> FakeResponse:
            self.requests.append(contents)
            return FakeResponse()

    fake = FakeModel()
    handle = vertex_connection.VertexModelHandle(fake)

    assert handle.generate_content("Ping") == {"candidates": []}
    assert fake.requests == ["Ping"]


def test_sdk_members_resolve_from_the_installed_enum() -> None:
    sdk_enum = vertex_connection._sdk_enum

    for member in generative_models.HarmCategory:
        assert sdk_enum(generative_models.HarmCategory, member.name) is member
        assert sdk_enum(generative_models.HarmCategory, int(member)) is member
    for member in generative_models.HarmBlockThreshold:
        assert sdk_enum(generative_models.HarmBlockThreshold, member.name) is member


def test_sdk_only_category_reaches_the_sdk_as_a_member() -> None:
    local_values = {category.value for category in HarmCategory}
    sdk_only = [member for member in generative_models.HarmCategory if member.name not in local_values]
    if not sdk_only:
        pytest.skip("installed SDK lists no categories beyond the local enum")

    setting = SafetySetting(category=sdk_only[0].name, threshold="BLOCK_NONE")

    assert setting.category == sdk_only[0].name
    assert vertex_connection._sdk_enum(generative_models.HarmCategory, setting.category) is sdk_only[0]
