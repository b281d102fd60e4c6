import json

import httpx
import pytest

from clonability.providers import AIResponse, ProviderCredential, build_adapter


class FakeAdapter:
    """Adapter stub that replays scripted outcomes (text or exceptions)."""

    name = "fake"

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.requests = []

    async def generate_structured(self, request):
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, (dict, list)):
            outcome = json.dumps(outcome)
        return AIResponse(content=outcome)

    async def generate(self, request):
        self.requests.append(request)
        return AIResponse(content="OK")

    async def test_connection(self):
        return True

    @property
    def calls(self):
        return len(self.requests)


def _analysis_payload(**overrides):
    payload = {
        "businessModel": "Subscription SaaS for invoicing",
        "revenueStream": "Monthly subscriptions",
        "targetMarket": "Freelancers",
        "scoreDetails": {
            "technicalComplexity": {"score": 8, "reasoning": "Standard CRUD"},
            "marketOpportunity": {"score": 6, "reasoning": "Crowded"},
            "competitiveLandscape": {"score": 7, "reasoning": "Many players"},
            "resourceRequirements": {"score": 5, "reasoning": "Small team"},
            "timeToMarket": {"score": 9, "reasoning": "Weeks"},
        },
        "aiInsights": {
            "keyInsight": "Niche down",
            "riskFactor": "Churn",
            "opportunity": "Integrations",
        },
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def fake_adapter():
    return FakeAdapter


@pytest.fixture
def sleeps(monkeypatch):
    """Record backoff delays instead of sleeping."""
    recorded = []

    async def fake_sleep(*, delay_s, attempt, max_attempts):
        recorded.append(delay_s)

    monkeypatch.setattr("clonability.pipeline._sleep_with_backoff", fake_sleep)
    return recorded


@pytest.fixture
def mock_adapter():
    """Build a real adapter whose HTTP calls go to ``handler``."""

    def _build(provider, handler, **credential_kwargs):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        credential = ProviderCredential(provider=provider, api_key="test-key", **credential_kwargs)
        return build_adapter(credential, client=client)

    return _build


@pytest.fixture
def analysis_payload():
    return _analysis_payload
