"""
Above-the-fold vision analysis pipeline.

Invoking (with retry) -> Extracting -> Parsing -> Validating -> Done.
Any stage can fail; the caller then gets exactly one VisionAnalysisError and
never a partially populated result.
"""

import logging
from typing import Optional

from config import Settings, get_settings
from analyzer.errors import (
    VisionAnalysisError,
    VisionConfigurationError,
    VisionEmptyResponseError,
    VisionIncompleteError,
    VisionTransportError,
)
from analyzer.prompts import compose_vision_prompt
from analyzer.result import VisionAnalysisResult
from utils.clients import ModelInvoker, VisionRequest, get_vision_provider
from utils.clients.retry import get_status_code
from utils.cost import build_cost
from utils.parsing.response import extract_response_text
from utils.validation.vision_validator import validate_vision_result

logger = logging.getLogger(__name__)

VISION_CONTEXT = "comparison"


class VisionAnalyzer:
    """
    Runs one desktop/mobile screenshot pair through the vision model.

    Each call owns its request and reply; instances hold no per-call state and
    can serve concurrent calls.
    """

    def __init__(
        self,
        invoker: Optional[ModelInvoker] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self._invoker = invoker

    def _check_configuration(self) -> None:
        if not self.settings.provider_api_key:
            raise VisionConfigurationError(
                f"{self.settings.provider_api_key_name} is not configured"
            )

    def _get_invoker(self) -> ModelInvoker:
        if self._invoker is None:
            try:
                provider = get_vision_provider(self.settings)
            except ValueError as e:
                raise VisionConfigurationError(str(e), e) from e
            self._invoker = ModelInvoker(
                provider,
                max_attempts=self.settings.VISION_MAX_ATTEMPTS,
                base_delay=self.settings.VISION_RETRY_BASE_DELAY,
            )
        return self._invoker

    async def _invoke(self, request: VisionRequest) -> dict:
        try:
            return await self._get_invoker().invoke(request)
        except VisionAnalysisError:
            raise
        except Exception as e:
            status_code = get_status_code(e)
            logger.error(f"❌ Vision model call failed (status {status_code}): {e}")
            raise VisionTransportError(
                str(e) or "Vision analysis failed", e, status_code=status_code
            ) from e

    async def analyze_above_fold(
        self, desktop_image_base64: str, mobile_image_base64: str
    ) -> VisionAnalysisResult:
        """
        Analyze paired above-the-fold captures of one page.

        Args:
            desktop_image_base64: Base64-encoded desktop viewport capture
            mobile_image_base64: Base64-encoded mobile viewport capture

        Returns:
            Validated VisionAnalysisResult; ``cost`` is set only when the
            provider reported token usage.

        Raises:
            VisionAnalysisError: on any unrecoverable condition. A missing
            credential is detected before any network call.
        """
        self._check_configuration()

        if not desktop_image_base64 or not mobile_image_base64:
            raise VisionAnalysisError(
                "Both desktop and mobile above-fold images are required."
            )

        request = VisionRequest(
            prompt=compose_vision_prompt(VISION_CONTEXT),
            desktop_image_base64=desktop_image_base64,
            mobile_image_base64=mobile_image_base64,
            max_output_tokens=self.settings.VISION_MAX_OUTPUT_TOKENS,
        )

        reply = await self._invoke(request)

        if reply.get("status") == "incomplete":
            details = reply.get("incomplete_details") or {}
            reason = details.get("reason") or "unknown"
            logger.error(f"❌ Vision response incomplete: {reply}")
            raise VisionIncompleteError(
                f"Vision model stopped early (reason: {reason}).", reason=reason
            )

        response_text = extract_response_text(reply)
        if not response_text:
            logger.error(f"❌ Vision response without content: {reply}")
            raise VisionEmptyResponseError("Empty response from vision model")

        result = validate_vision_result(response_text)
        try:
            cost = build_cost(
                reply.get("usage"),
                input_price_per_1k=self.settings.VISION_INPUT_PRICE_PER_1K,
                output_price_per_1k=self.settings.VISION_OUTPUT_PRICE_PER_1K,
            )
        except (AttributeError, TypeError, ValueError) as e:
            logger.error(f"❌ Vision response reported invalid usage: {reply.get('usage')}")
            raise VisionAnalysisError("Invalid token usage reported by vision model", e) from e
        result = result.with_cost(cost)

        usage = result.cost.model_dump() if result.cost else "unknown"
        logger.info(
            f"✅ Vision analysis complete [status: {result.status}] "
            f"[confidence: {result.confidence}] [usage: {usage}]"
        )
        return result


async def analyze_above_fold(
    desktop_image_base64: str, mobile_image_base64: str
) -> VisionAnalysisResult:
    """Run the vision pipeline with the configured provider."""
    analyzer = VisionAnalyzer()
    return await analyzer.analyze_above_fold(desktop_image_base64, mobile_image_base64)
