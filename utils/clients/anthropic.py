"""
Anthropic vision provider.

Claude replies are normalized into the typed-item shape the response extractor
reads: the message becomes a single "message" item under ``output``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import anthropic

from .base import VisionProvider, VisionRequest

logger = logging.getLogger(__name__)

# Claude stop reasons that mean the reply was cut short
INCOMPLETE_STOP_REASONS = {"max_tokens": "max_output_tokens"}


class AnthropicVisionProvider(VisionProvider):
    name = "anthropic"

    def __init__(
        self,
        api_key: str,
        *,
        model: str = "claude-sonnet-4-20250514",
        client: Optional[Any] = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._client = client

    @property
    def client(self):
        """Lazily created AsyncAnthropic client."""
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(api_key=self._api_key)
        return self._client

    def build_payload(self, request: VisionRequest) -> Dict[str, Any]:
        # Screenshots first, then the instructions
        content = []
        for image in request.images:
            content.append(
                {
                    "type": "image",
                    "source": {
                        "type": "base64",
                        "media_type": request.media_type,
                        "data": image,
                    },
                }
            )
        content.append({"type": "text", "text": request.prompt})

        return {
            "model": self._model,
            "max_tokens": request.max_output_tokens,
            "messages": [{"role": "user", "content": content}],
        }

    async def create(self, request: VisionRequest) -> Dict[str, Any]:
        message = await self.client.messages.create(**self.build_payload(request))
        return normalize_message(message.model_dump())


def normalize_message(message: Dict[str, Any]) -> Dict[str, Any]:
    """Map a dumped Claude message onto the Responses-style reply shape."""
    stop_reason = message.get("stop_reason")
    reply: Dict[str, Any] = {
        "id": message.get("id"),
        "model": message.get("model"),
        "status": "completed",
        "output": [
            {
                "type": "message",
                "role": message.get("role", "assistant"),
                "content": list(message.get("content") or []),
            }
        ],
    }

    if stop_reason in INCOMPLETE_STOP_REASONS:
        reply["status"] = "incomplete"
        reply["incomplete_details"] = {"reason": INCOMPLETE_STOP_REASONS[stop_reason]}

    usage = message.get("usage")
    if usage:
        reply["usage"] = {
            "input_tokens": usage.get("input_tokens") or 0,
            "output_tokens": usage.get("output_tokens") or 0,
        }
    return reply
