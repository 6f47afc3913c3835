"""
Typed result of the above-the-fold vision analysis.

Attributes are snake_case; the JSON document handed to callers uses the
camelCase aliases (``styleClues``, ``locationHint``, ...).
"""

from typing import Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


VisionAnalysisStatus = Literal["ok", "unreadable"]
ProminenceLevel = Literal["high", "medium", "low"]
ConfidenceLevel = Literal["low", "medium", "high"]
RiskLevel = Literal["low", "medium", "high"]

PROMINENCE_LEVELS = ("high", "medium", "low")
CONFIDENCE_LEVELS = ("low", "medium", "high")
RISK_LEVELS = ("low", "medium", "high")
STATUSES = ("ok", "unreadable")

MAX_VISUAL_HIERARCHY = 3


class _VisionModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class VisionHeroCTA(_VisionModel):
    text: Optional[str] = None
    style_clues: Tuple[str, ...] = ()


class VisionHeroSummary(_VisionModel):
    headline: Optional[str] = None
    subheadline: Optional[str] = None
    cta: VisionHeroCTA = VisionHeroCTA()
    supporting_elements: Tuple[str, ...] = ()


class VisionCTAInsight(_VisionModel):
    text: str
    prominence: ProminenceLevel
    location_hint: str = "unspecified"


class VisionResponsiveness(_VisionModel):
    issues: Tuple[str, ...] = ()
    overall_risk: RiskLevel


class VisionPerformanceSignals(_VisionModel):
    heavy_media: bool
    notes: Optional[str] = None


class VisionDifferences(_VisionModel):
    notes: Tuple[str, ...] = ()
    flagged: bool


class VisionCost(_VisionModel):
    """Estimated cost of one vision call. Not a billing figure."""

    input_tokens: int = Field(ge=0)
    output_tokens: int = Field(ge=0)
    estimated_usd: float = Field(ge=0)


class VisionAnalysisResult(_VisionModel):
    """
    Validated vision analysis for one desktop/mobile screenshot pair.

    ``cost`` is None when the provider reported no usage; that means the cost
    is unknown, not zero.
    """

    status: VisionAnalysisStatus
    hero: VisionHeroSummary
    ctas: Tuple[VisionCTAInsight, ...] = ()
    trust_signals: Tuple[str, ...] = ()
    visual_hierarchy: Tuple[str, ...] = Field(default=(), max_length=MAX_VISUAL_HIERARCHY)
    responsiveness: VisionResponsiveness
    performance_signals: VisionPerformanceSignals
    differences: VisionDifferences
    confidence: ConfidenceLevel
    cost: Optional[VisionCost] = None

    def with_cost(self, cost: Optional[VisionCost]) -> "VisionAnalysisResult":
        """Return a copy carrying ``cost``."""
        if cost is None:
            return self
        return self.model_copy(update={"cost": cost})

    def to_dict(self) -> dict:
        """JSON-ready document with camelCase keys; ``cost`` omitted when unknown."""
        exclude = {"cost"} if self.cost is None else None
        return self.model_dump(mode="json", by_alias=True, exclude=exclude)
