# Clients subpackage - Hosted vision model providers
from .base import VisionProvider, VisionRequest
from .factory import get_vision_provider
from .retry import ModelInvoker

__all__ = [
    "VisionProvider",
    "VisionRequest",
    "get_vision_provider",
    "ModelInvoker",
]
