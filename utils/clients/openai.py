"""
OpenAI vision provider backed by the Responses API.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import openai

from .base import VisionProvider, VisionRequest

logger = logging.getLogger(__name__)


class OpenAIVisionProvider(VisionProvider):
    name = "openai"

    def __init__(
        self,
        api_key: str,
        *,
        model: str = "gpt-5",
        reasoning_effort: str = "minimal",
        text_verbosity: str = "low",
        client: Optional[Any] = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._reasoning_effort = reasoning_effort
        self._text_verbosity = text_verbosity
        self._client = client

    @property
    def client(self):
        """Lazily created AsyncOpenAI client."""
        if self._client is None:
            self._client = openai.AsyncOpenAI(api_key=self._api_key)
        return self._client

    def build_payload(self, request: VisionRequest) -> Dict[str, Any]:
        content = [{"type": "input_text", "text": request.prompt}]
        for image in request.images:
            content.append(
                {
                    "type": "input_image",
                    "image_url": f"data:{request.media_type};base64,{image}",
                }
            )

        return {
            "model": self._model,
            "input": [{"role": "user", "content": content}],
            "reasoning": {"effort": self._reasoning_effort},
            "text": {"verbosity": self._text_verbosity},
            "max_output_tokens": request.max_output_tokens,
        }

    async def create(self, request: VisionRequest) -> Dict[str, Any]:
        response = await self.client.responses.create(**self.build_payload(request))
        reply = response.model_dump()
        # output_text is a computed property on the SDK object, not a dumped field
        output_text = getattr(response, "output_text", None)
        if isinstance(output_text, str):
            reply["output_text"] = output_text
        return reply
