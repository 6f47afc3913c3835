# Analyzer package - above-the-fold vision analysis
# The pipeline itself lives in analyzer.pipeline (imports the provider clients).
from .errors import (
    VisionAnalysisError,
    VisionConfigurationError,
    VisionEmptyResponseError,
    VisionIncompleteError,
    VisionParseError,
    VisionSchemaError,
    VisionTransportError,
)
from .prompts import compose_vision_prompt, get_vision_user_prompt
from .result import VisionAnalysisResult, VisionCost

__all__ = [
    "VisionAnalysisError",
    "VisionConfigurationError",
    "VisionEmptyResponseError",
    "VisionIncompleteError",
    "VisionParseError",
    "VisionSchemaError",
    "VisionTransportError",
    "compose_vision_prompt",
    "get_vision_user_prompt",
    "VisionAnalysisResult",
    "VisionCost",
]
