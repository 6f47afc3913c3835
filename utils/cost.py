"""Estimated USD cost of a vision call from reported token usage."""

from typing import Any, Mapping, Optional

from analyzer.result import VisionCost

# Published rate card at the time of writing (subject to change).
DEFAULT_INPUT_PRICE_PER_1K = 0.01
DEFAULT_OUTPUT_PRICE_PER_1K = 0.03


def estimate_vision_cost_usd(
    input_tokens: int,
    output_tokens: int,
    *,
    input_price_per_1k: float = DEFAULT_INPUT_PRICE_PER_1K,
    output_price_per_1k: float = DEFAULT_OUTPUT_PRICE_PER_1K,
) -> float:
    """Linear estimate rounded to 4 decimals. Not a billing source of truth."""
    prompt_cost = (input_tokens / 1000) * input_price_per_1k
    completion_cost = (output_tokens / 1000) * output_price_per_1k
    return round(prompt_cost + completion_cost, 4)


def build_cost(
    usage: Optional[Mapping[str, Any]],
    *,
    input_price_per_1k: float = DEFAULT_INPUT_PRICE_PER_1K,
    output_price_per_1k: float = DEFAULT_OUTPUT_PRICE_PER_1K,
) -> Optional[VisionCost]:
    """Build a VisionCost from a provider ``usage`` mapping, or None when usage is missing."""
    if not usage:
        return None

    input_tokens = int(usage.get("input_tokens") or 0)
    output_tokens = int(usage.get("output_tokens") or 0)
    return VisionCost(
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        estimated_usd=estimate_vision_cost_usd(
            input_tokens,
            output_tokens,
            input_price_per_1k=input_price_per_1k,
            output_price_per_1k=output_price_per_1k,
        ),
    )
