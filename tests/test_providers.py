"""Tests for the OpenAI / Anthropic vision providers and the provider factory."""

import asyncio
from types import SimpleNamespace

import pytest

from config import Settings
from utils.clients.anthropic import AnthropicVisionProvider, normalize_message
from utils.clients.base import VisionRequest
from utils.clients.factory import get_vision_provider
from utils.clients.openai import OpenAIVisionProvider
from utils.parsing.response import extract_response_text

REQUEST = VisionRequest(
    prompt="Analyze this pair",
    desktop_image_base64="ZGVza3RvcA==",
    mobile_image_base64="bW9iaWxl",
    max_output_tokens=1500,
)


class FakeSDKObject:
    """Mimics a pydantic SDK response with model_dump()."""

    def __init__(self, data, **attributes):
        self._data = data
        for name, value in attributes.items():
            setattr(self, name, value)

    def model_dump(self):
        return dict(self._data)


class RecordingEndpoint:
    def __init__(self, response):
        self.response = response
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        return self.response


def test_openai_payload_shape():
    provider = OpenAIVisionProvider("sk-test", model="gpt-5", reasoning_effort="minimal", text_verbosity="low")

    payload = provider.build_payload(REQUEST)

    assert payload["model"] == "gpt-5"
    assert payload["max_output_tokens"] == 1500
    assert payload["reasoning"] == {"effort": "minimal"}
    assert payload["text"] == {"verbosity": "low"}
    content = payload["input"][0]["content"]
    assert payload["input"][0]["role"] == "user"
    assert content[0] == {"type": "input_text", "text": "Analyze this pair"}
    assert content[1] == {"type": "input_image", "image_url": "data:image/png;base64,ZGVza3RvcA=="}
    assert content[2] == {"type": "input_image", "image_url": "data:image/png;base64,bW9iaWxl"}


def test_openai_create_keeps_computed_output_text():
    response = FakeSDKObject(
        {"status": "completed", "output": [], "usage": {"input_tokens": 5, "output_tokens": 7}},
        output_text='{"status": "ok"}',
    )
    endpoint = RecordingEndpoint(response)
    client = SimpleNamespace(responses=endpoint)
    provider = OpenAIVisionProvider("sk-test", client=client)

    reply = asyncio.run(provider.create(REQUEST))

    assert reply["output_text"] == '{"status": "ok"}'
    assert reply["usage"] == {"input_tokens": 5, "output_tokens": 7}
    assert endpoint.kwargs["model"] == "gpt-5"


def test_anthropic_payload_puts_images_before_text():
    provider = AnthropicVisionProvider("sk-ant-test", model="claude-sonnet-4-20250514")

    payload = provider.build_payload(REQUEST)

    content = payload["messages"][0]["content"]
    assert payload["max_tokens"] == 1500
    assert [block["type"] for block in content] == ["image", "image", "text"]
    assert content[0]["source"] == {"type": "base64", "media_type": "image/png", "data": "ZGVza3RvcA=="}
    assert content[2]["text"] == "Analyze this pair"


def test_anthropic_reply_is_normalized_for_extraction():
    message = FakeSDKObject(
        {
            "id": "msg_1",
            "model": "claude-sonnet-4-20250514",
            "role": "assistant",
            "content": [{"type": "text", "text": ' {"status": "ok"} '}],
            "stop_reason": "end_turn",
            "usage": {"input_tokens": 1200, "output_tokens": 300},
        }
    )
    client = SimpleNamespace(messages=RecordingEndpoint(message))
    provider = AnthropicVisionProvider("sk-ant-test", client=client)

    reply = asyncio.run(provider.create(REQUEST))

    assert reply["status"] == "completed"
    assert reply["usage"] == {"input_tokens": 1200, "output_tokens": 300}
    assert extract_response_text(reply) == '{"status": "ok"}'


def test_anthropic_max_tokens_is_incomplete():
    reply = normalize_message(
        {"role": "assistant", "content": [{"type": "text", "text": '{"sta'}], "stop_reason": "max_tokens"}
    )

    assert reply["status"] == "incomplete"
    assert reply["incomplete_details"] == {"reason": "max_output_tokens"}
    assert "usage" not in reply


def test_factory_selects_provider():
    openai_settings = Settings(_env_file=None, VISION_PROVIDER="openai", OPENAI_VISION_MODEL="gpt-5-mini")
    anthropic_settings = Settings(_env_file=None, VISION_PROVIDER=" Anthropic ")

    openai_provider = get_vision_provider(openai_settings)

    assert isinstance(openai_provider, OpenAIVisionProvider)
    assert openai_provider.build_payload(REQUEST)["model"] == "gpt-5-mini"
    assert isinstance(get_vision_provider(anthropic_settings), AnthropicVisionProvider)


def test_factory_rejects_unknown_provider():
    with pytest.raises(ValueError):
        get_vision_provider(Settings(_env_file=None, VISION_PROVIDER="gemini"))
