"""
Validation Package for CRO Vision Analyzer

Checks decoded vision model replies field by field against the
VisionAnalysisResult contract.

Modules:
- vision_validator: composable field validators and the validation entry points
"""

from .vision_validator import FieldError, validate_vision_payload, validate_vision_result

__all__ = ["FieldError", "validate_vision_payload", "validate_vision_result"]
