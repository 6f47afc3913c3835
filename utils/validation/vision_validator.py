"""
Schema validation for vision model replies.

Each rule is a small validator that returns either the checked value or a
FieldError naming the offending field path (e.g. ``ctas[2].prominence``).
Section validators compose them in a fixed order and stop at the first
FieldError, so one call reports exactly one violation.

Only two lenient defaults exist: ``visualHierarchy`` is cut to its first three
entries and a missing or non-string ``locationHint`` becomes "unspecified".
Absent or null list fields read as empty lists.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from analyzer.errors import VisionSchemaError
from analyzer.result import (
    CONFIDENCE_LEVELS,
    MAX_VISUAL_HIERARCHY,
    PROMINENCE_LEVELS,
    RISK_LEVELS,
    STATUSES,
    VisionAnalysisResult,
    VisionCTAInsight,
    VisionDifferences,
    VisionHeroCTA,
    VisionHeroSummary,
    VisionPerformanceSignals,
    VisionResponsiveness,
)
from utils.parsing.json import parse_json_payload

logger = logging.getLogger(__name__)

DEFAULT_LOCATION_HINT = "unspecified"


@dataclass(frozen=True)
class FieldError:
    """First schema violation found in a reply."""

    field: str
    message: str


Checked = Union[Any, FieldError]


def is_error(value: Checked) -> bool:
    return isinstance(value, FieldError)


# ======================
# Field validators
# ======================

def check_object(value: Any, field: str) -> Checked:
    if not isinstance(value, dict):
        return FieldError(field, f"Missing or invalid {field}")
    return value


def check_nullable_string(value: Any, field: str) -> Checked:
    if value is None:
        return None
    if not isinstance(value, str):
        return FieldError(field, f"Expected {field} to be a string or null")
    return value


def check_string_array(value: Any, field: str) -> Checked:
    if value is None:
        return ()
    if not isinstance(value, list):
        return FieldError(field, f"Expected {field} to be an array")
    for index, item in enumerate(value):
        if not isinstance(item, str):
            return FieldError(
                f"{field}[{index}]", f"Expected {field}[{index}] to be a string"
            )
    return tuple(value)


def check_boolean(value: Any, field: str) -> Checked:
    if not isinstance(value, bool):
        return FieldError(field, f"{field} must be boolean")
    return value


def check_choice(value: Any, field: str, choices: Sequence[str]) -> Checked:
    # Exact match only: "High" or " high" is not "high"
    if not isinstance(value, str) or value not in choices:
        return FieldError(field, f"Invalid {field} value")
    return value


# ======================
# Section validators
# ======================

def _first_error(*values: Checked) -> Optional[FieldError]:
    for value in values:
        if is_error(value):
            return value
    return None


def check_status(data: Dict[str, Any]) -> Checked:
    return check_choice(data.get("status"), "status", STATUSES)


def check_hero(data: Dict[str, Any]) -> Checked:
    hero = check_object(data.get("hero"), "hero")
    if is_error(hero):
        return hero

    headline = check_nullable_string(hero.get("headline"), "hero.headline")
    if is_error(headline):
        return headline

    subheadline = check_nullable_string(hero.get("subheadline"), "hero.subheadline")
    if is_error(subheadline):
        return subheadline

    cta = hero.get("cta")
    if cta is None:
        cta = {}
    cta = check_object(cta, "hero.cta")
    if is_error(cta):
        return cta

    cta_text = check_nullable_string(cta.get("text"), "hero.cta.text")
    if is_error(cta_text):
        return cta_text

    style_clues = check_string_array(cta.get("styleClues"), "hero.cta.styleClues")
    if is_error(style_clues):
        return style_clues

    supporting = check_string_array(hero.get("supportingElements"), "hero.supportingElements")
    if is_error(supporting):
        return supporting

    return VisionHeroSummary(
        headline=headline,
        subheadline=subheadline,
        cta=VisionHeroCTA(text=cta_text, style_clues=style_clues),
        supporting_elements=supporting,
    )


def check_cta(value: Any, index: int) -> Checked:
    field = f"ctas[{index}]"
    cta = check_object(value, field)
    if is_error(cta):
        return FieldError(field, f"Expected {field} to be an object")

    text = check_nullable_string(cta.get("text"), f"{field}.text")
    if is_error(text):
        return text

    prominence = check_choice(cta.get("prominence"), f"{field}.prominence", PROMINENCE_LEVELS)
    if is_error(prominence):
        return prominence

    location_hint = cta.get("locationHint")
    if not isinstance(location_hint, str):
        location_hint = DEFAULT_LOCATION_HINT

    return VisionCTAInsight(
        text=text if text is not None else "",
        prominence=prominence,
        location_hint=location_hint,
    )


def check_ctas(data: Dict[str, Any]) -> Checked:
    value = data.get("ctas")
    if value is None:
        return ()
    if not isinstance(value, list):
        return FieldError("ctas", "Expected ctas to be an array")

    ctas: List[VisionCTAInsight] = []
    for index, item in enumerate(value):
        cta = check_cta(item, index)
        if is_error(cta):
            return cta
        ctas.append(cta)
    return tuple(ctas)


def check_trust_signals(data: Dict[str, Any]) -> Checked:
    return check_string_array(data.get("trustSignals"), "trustSignals")


def check_visual_hierarchy(data: Dict[str, Any]) -> Checked:
    hierarchy = check_string_array(data.get("visualHierarchy"), "visualHierarchy")
    if is_error(hierarchy):
        return hierarchy
    return hierarchy[:MAX_VISUAL_HIERARCHY]


def check_responsiveness(data: Dict[str, Any]) -> Checked:
    section = data.get("responsiveness")
    if not isinstance(section, dict):
        return FieldError("responsiveness", "Missing responsiveness section")

    overall_risk = check_choice(
        section.get("overallRisk"), "responsiveness.overallRisk", RISK_LEVELS
    )
    issues = check_string_array(section.get("issues"), "responsiveness.issues")
    error = _first_error(overall_risk, issues)
    if error:
        return error

    return VisionResponsiveness(issues=issues, overall_risk=overall_risk)


def check_performance_signals(data: Dict[str, Any]) -> Checked:
    section = data.get("performanceSignals")
    if not isinstance(section, dict):
        return FieldError("performanceSignals", "Missing performanceSignals section")

    heavy_media = check_boolean(section.get("heavyMedia"), "performanceSignals.heavyMedia")
    if is_error(heavy_media):
        return heavy_media

    notes = section.get("notes")
    if notes is not None and not isinstance(notes, str):
        return FieldError(
            "performanceSignals.notes", "performanceSignals.notes must be string or null"
        )

    return VisionPerformanceSignals(heavy_media=heavy_media, notes=notes)


def check_differences(data: Dict[str, Any]) -> Checked:
    section = data.get("differences")
    if not isinstance(section, dict):
        return FieldError("differences", "Missing differences section")

    flagged = check_boolean(section.get("flagged"), "differences.flagged")
    notes = check_string_array(section.get("notes"), "differences.notes")
    error = _first_error(flagged, notes)
    if error:
        return error

    return VisionDifferences(notes=notes, flagged=flagged)


def check_confidence(data: Dict[str, Any]) -> Checked:
    return check_choice(data.get("confidence"), "confidence", CONFIDENCE_LEVELS)


# Fixed evaluation order; the first FieldError wins
SECTION_VALIDATORS: Tuple[Tuple[str, Callable[[Dict[str, Any]], Checked]], ...] = (
    ("status", check_status),
    ("hero", check_hero),
    ("ctas", check_ctas),
    ("trust_signals", check_trust_signals),
    ("visual_hierarchy", check_visual_hierarchy),
    ("responsiveness", check_responsiveness),
    ("performance_signals", check_performance_signals),
    ("differences", check_differences),
    ("confidence", check_confidence),
)


def validate_vision_payload(data: Any) -> Union[VisionAnalysisResult, FieldError]:
    """
    Validate a decoded reply against the result contract.

    Returns:
        VisionAnalysisResult when every field is well-formed, otherwise the
        FieldError for the first violation.
    """
    if not isinstance(data, dict):
        return FieldError("$", "Vision response is not an object")

    fields: Dict[str, Any] = {}
    for name, validator in SECTION_VALIDATORS:
        checked = validator(data)
        if is_error(checked):
            return checked
        fields[name] = checked

    return VisionAnalysisResult(**fields)


def validate_vision_result(response_text: str) -> VisionAnalysisResult:
    """
    Parse and validate the extracted reply text.

    Raises:
        VisionParseError: text is not valid JSON
        VisionSchemaError: a field broke the contract (``.field`` names it)
    """
    data = parse_json_payload(response_text)
    checked = validate_vision_payload(data)
    if is_error(checked):
        logger.warning(f"⚠️ Vision reply failed validation at {checked.field}: {checked.message}")
        raise VisionSchemaError(checked.message, field=checked.field)
    return checked
