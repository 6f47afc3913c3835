import copy
import json

import pytest

from config import Settings, get_settings
from utils.clients.base import VisionProvider


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    # Tests mutate env vars; don't leak a cached Settings across tests.
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


VALID_PAYLOAD = {
    "status": "ok",
    "hero": {
        "headline": "Sleep better tonight",
        "subheadline": "Cooling sheets made from bamboo",
        "cta": {"text": "Shop now", "styleClues": ["orange button", "large"]},
        "supportingElements": ["lifestyle photo", "free shipping badge"],
    },
    "ctas": [
        {"text": "Shop now", "prominence": "high", "locationHint": "hero, right"},
        {"text": "Learn more", "prominence": "low", "locationHint": "below headline"},
    ],
    "trustSignals": ["4.8 stars from 2,000 reviews"],
    "visualHierarchy": ["headline", "hero image", "CTA"],
    "responsiveness": {"issues": ["CTA below fold on mobile"], "overallRisk": "medium"},
    "performanceSignals": {"heavyMedia": True, "notes": "autoplay video background"},
    "differences": {"notes": ["mobile hides subheadline"], "flagged": True},
    "confidence": "high",
}


@pytest.fixture
def valid_payload():
    return copy.deepcopy(VALID_PAYLOAD)


@pytest.fixture
def reply_for():
    """Build a Responses-style reply carrying *payload* as output_text."""

    def _reply(payload, usage=None, **extra):
        reply = {"status": "completed", "output_text": json.dumps(payload), "output": []}
        if usage is not None:
            reply["usage"] = usage
        reply.update(extra)
        return reply

    return _reply


class ProviderStatusError(Exception):
    """Stand-in for an SDK APIStatusError."""

    def __init__(self, status_code, message="provider error"):
        super().__init__(message)
        self.status_code = status_code


class FakeProvider(VisionProvider):
    """Plays back queued replies or exceptions, one per call."""

    name = "fake"

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.requests = []

    @property
    def calls(self):
        return len(self.requests)

    async def create(self, request):
        self.requests.append(request)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class RecordingSleep:
    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


@pytest.fixture
def status_error():
    return ProviderStatusError


@pytest.fixture
def fake_provider():
    return FakeProvider


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def test_settings():
    return Settings(
        VISION_PROVIDER="openai",
        OPENAI_API_KEY="test-key",
        VISION_INPUT_PRICE_PER_1K=0.01,
        VISION_OUTPUT_PRICE_PER_1K=0.03,
    )
