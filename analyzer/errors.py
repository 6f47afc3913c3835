"""
Error taxonomy for the above-the-fold vision pipeline.

Every failure surfaces as a VisionAnalysisError. The subclasses only let callers
tell the conditions apart; catching the base class catches all of them.
"""

from typing import Optional


class VisionAnalysisError(Exception):
    """Raised when the vision pipeline cannot produce a validated result."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class VisionConfigurationError(VisionAnalysisError):
    """Provider credential missing. Raised before any network call."""


class VisionTransportError(VisionAnalysisError):
    """Provider call failed (non-429, or 429 after the last attempt)."""

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, cause)
        self.status_code = status_code


class VisionIncompleteError(VisionAnalysisError):
    """Provider stopped generating before the reply was finished."""

    def __init__(self, message: str, reason: Optional[str] = None):
        super().__init__(message)
        self.reason = reason


class VisionEmptyResponseError(VisionAnalysisError):
    """No usable text could be extracted from the reply."""


class VisionParseError(VisionAnalysisError):
    """Extracted text is not valid JSON."""


class VisionSchemaError(VisionAnalysisError):
    """A field of the parsed reply broke the result contract."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field
