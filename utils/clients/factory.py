"""Provider factory - returns the vision provider named in settings."""

from __future__ import annotations

from config import Settings

from .base import VisionProvider


def get_vision_provider(settings: Settings) -> VisionProvider:
    """Return a provider instance for ``settings.VISION_PROVIDER``."""
    name = settings.VISION_PROVIDER.lower().strip()

    if name == "openai":
        from .openai import OpenAIVisionProvider

        return OpenAIVisionProvider(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_VISION_MODEL,
            reasoning_effort=settings.OPENAI_REASONING_EFFORT,
            text_verbosity=settings.OPENAI_TEXT_VERBOSITY,
        )

    if name == "anthropic":
        from .anthropic import AnthropicVisionProvider

        return AnthropicVisionProvider(
            api_key=settings.ANTHROPIC_API_KEY,
            model=settings.ANTHROPIC_VISION_MODEL,
        )

    raise ValueError(f"Unknown vision provider: {settings.VISION_PROVIDER!r}")
