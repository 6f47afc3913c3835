"""Abstract base for hosted vision model providers."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class VisionRequest:
    """Composed instruction text plus the two above-the-fold captures."""

    prompt: str
    desktop_image_base64: str
    mobile_image_base64: str
    max_output_tokens: int = 1500
    media_type: str = "image/png"

    @property
    def images(self) -> tuple:
        return (self.desktop_image_base64, self.mobile_image_base64)


class VisionProvider(abc.ABC):
    """Contract that every vision provider must implement."""

    name: str = "base"

    @abc.abstractmethod
    async def create(self, request: VisionRequest) -> Dict[str, Any]:
        """Send *request* and return the raw reply as a plain mapping."""
