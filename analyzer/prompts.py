"""
Above-the-fold Vision Prompts

Builds the instruction text sent alongside the desktop and mobile screenshots.
"""

VISION_CONTEXTS = ("desktop", "mobile", "comparison")

VISION_ANALYSIS_SYSTEM_PROMPT = """You are an expert conversion copywriter and UX analyst assisting with above-the-fold audits of eCommerce landing pages.

Rules:
- Always respond with valid JSON matching the provided schema.
- Do not include any additional commentary outside the JSON object.
- If the screenshot is unreadable, return an "status":"unreadable" response with reasons.
- Focus on accuracy over speculation. If uncertain about an element, mark it as "confidence": "low".
"""

VISION_RESPONSE_SCHEMA = (
    '{"status":"ok",'
    '"hero":{"headline":string,"subheadline":string|null,'
    '"cta":{"text":string|null,"styleClues":string[]},"supportingElements":string[]},'
    '"ctas":[{"text":string,"prominence":"high"|"medium"|"low","locationHint":string}],'
    '"trustSignals":string[],'
    '"visualHierarchy":[string,string,string],'
    '"responsiveness":{"issues":string[],"overallRisk":"low"|"medium"|"high"},'
    '"performanceSignals":{"heavyMedia":boolean,"notes":string|null},'
    '"differences":{"notes":string[],"flagged":boolean},'
    '"confidence":"low"|"medium"|"high"}'
)


def get_vision_user_prompt(context: str) -> str:
    """
    Per-context instructions for the vision model.

    Args:
        context: "desktop", "mobile" or "comparison" (desktop + mobile pair)

    Returns:
        Newline-joined instruction block ending with the strict JSON schema.
    """
    if context not in VISION_CONTEXTS:
        raise ValueError(f"Unknown vision context: {context!r}")

    subject = "pair of desktop and mobile" if context == "comparison" else context
    instructions = [
        f"Analyze this {subject} landing page screenshot.",
        "Identify hero section elements (primary headline, supporting copy, primary CTA).",
        "List all CTA variants above the fold, including visual prominence cues (size, color, placement).",
        "Highlight any trust signals visible above the fold (logos, reviews, guarantees, urgency).",
        "Assess visual hierarchy: what draws attention first, second, third.",
        "Comment on perceived load heaviness (large media, dense layout) based solely on the screenshot.",
    ]

    if context == "comparison":
        instructions.append(
            "Contrast desktop versus mobile: note layout differences, missing/altered modules, and CTA availability."
        )
    else:
        instructions.append(
            "Flag any responsive issues apparent for this viewport (crop, overlap, tiny text)."
        )

    instructions.append(
        f"Return JSON with strict schema: {VISION_RESPONSE_SCHEMA}. "
        "If data is missing, use null or empty arrays but keep keys."
    )
    return "\n".join(instructions)


def compose_vision_prompt(context: str = "comparison") -> str:
    """System guidance, a blank line, then the per-context template."""
    return "\n".join(
        [
            VISION_ANALYSIS_SYSTEM_PROMPT.strip(),
            "",
            get_vision_user_prompt(context),
        ]
    )
