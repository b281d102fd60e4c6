import pytest

from clonability import config
from clonability.errors import AuthenticationError, RateLimited
from web_api import app as app_module

HEADERS = {"X-AI-Provider": "openai", "X-AI-Api-Key": "sk-test"}


@pytest.fixture
def client():
    app_module.app.config["TESTING"] = True
    return app_module.app.test_client()


@pytest.fixture
def use_adapter(monkeypatch):
    def _install(adapter):
        built = []

        def build(credential, **kwargs):
            built.append(credential)
            return adapter

        monkeypatch.setattr(app_module, "build_adapter", build)
        return built

    return _install


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "ok"


def test_analyze_requires_url(client):
    resp = client.post("/api/business-analyses/analyze", json={}, headers=HEADERS)
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "URL is required"


def test_analyze_without_configured_key(client, monkeypatch):
    monkeypatch.setattr(config, "AI_PROVIDER", "openai")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    resp = client.post("/api/business-analyses/analyze", json={"url": "https://acme.io"})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "No active AI provider configured"


def test_analyze_unknown_provider(client):
    resp = client.post(
        "/api/business-analyses/analyze",
        json={"url": "https://acme.io"},
        headers={"X-AI-Provider": "claude", "X-AI-Api-Key": "k"},
    )
    assert resp.status_code == 400


def test_analyze_success(client, use_adapter, fake_adapter, analysis_payload, sleeps):
    built = use_adapter(fake_adapter([analysis_payload()]))

    resp = client.post("/api/business-analyses/analyze", json={"url": "https://acme.io"}, headers=HEADERS)

    assert resp.status_code == 200
    data = resp.get_json()
    assert data["overallScore"] == 7.0
    assert data["url"] == "https://acme.io"
    assert built[0].provider == "openai"
    assert built[0].api_key == "sk-test"


@pytest.mark.parametrize(
    "error, status",
    [
        (AuthenticationError("openai rejected the API key: Incorrect API key provided"), 400),
        (RateLimited("openai rate limit reached: slow down"), 429),
        (RuntimeError("openai temporarily unavailable: outage"), 503),
        (RuntimeError("strange"), 500),
    ],
)
def test_analyze_failure_mapping(client, use_adapter, fake_adapter, sleeps, error, status):
    use_adapter(fake_adapter([error]))

    resp = client.post("/api/business-analyses/analyze", json={"url": "https://acme.io"}, headers=HEADERS)

    assert resp.status_code == status
    assert resp.get_json()["message"]


def test_batch_limits(client, use_adapter, fake_adapter):
    use_adapter(fake_adapter([{}]))

    resp = client.post("/api/business-analyses/batch", json={"urls": []}, headers=HEADERS)
    assert resp.status_code == 400

    too_many = [f"https://{i}.io" for i in range(config.MAX_BATCH_URLS + 1)]
    resp = client.post("/api/business-analyses/batch", json={"urls": too_many}, headers=HEADERS)
    assert resp.status_code == 400
    assert "Maximum" in resp.get_json()["message"]


def test_batch_reports_counts(client, use_adapter, fake_adapter, analysis_payload, sleeps):
    use_adapter(fake_adapter([analysis_payload()]))

    resp = client.post(
        "/api/business-analyses/batch", json={"urls": ["https://a.io", "https://b.io"]}, headers=HEADERS
    )

    data = resp.get_json()
    assert resp.status_code == 200
    assert data["successful"] == 2
    assert data["failed"] == 0
    assert len(data["analyses"]) == 2


def test_search(client, use_adapter, fake_adapter, sleeps):
    use_adapter(fake_adapter([{"businesses": [{"name": "Typeform"}]}]))

    resp = client.post("/api/business-analyses/search", json={"query": "forms"}, headers=HEADERS)

    assert resp.status_code == 200
    assert resp.get_json() == {"businesses": [{"name": "Typeform"}]}


def test_search_requires_query(client):
    resp = client.post("/api/business-analyses/search", json={"query": " "}, headers=HEADERS)
    assert resp.status_code == 400


def test_generate_stage(client, use_adapter, fake_adapter, sleeps):
    use_adapter(fake_adapter([{"recommendation": "SKIP"}]))

    resp = client.post(
        "/api/workflow-stages/generate/2",
        json={"analysis": {"url": "https://acme.io", "businessModel": "SaaS"}},
        headers=HEADERS,
    )

    data = resp.get_json()
    assert resp.status_code == 200
    assert data["stageName"] == "Lazy-Entrepreneur Filter"
    assert data["data"]["recommendation"] == "SKIP"
    assert len(data["data"]["milestones"]) == 4


def test_generate_stage_one_has_no_content(client, use_adapter, fake_adapter):
    use_adapter(fake_adapter([{}]))
    resp = client.post("/api/workflow-stages/generate/1", json={"analysis": {}}, headers=HEADERS)
    assert resp.status_code == 200
    assert resp.get_json()["data"] is None


def test_generate_unknown_stage(client, use_adapter, fake_adapter):
    use_adapter(fake_adapter([{}]))
    resp = client.post("/api/workflow-stages/generate/9", json={"analysis": {}}, headers=HEADERS)
    assert resp.status_code == 404


def test_provider_connection(client, use_adapter, fake_adapter):
    use_adapter(fake_adapter([{}]))
    resp = client.post("/api/ai-providers/test", json={"provider": "gemini", "apiKey": "k"})
    assert resp.get_json() == {"connected": True}


def test_provider_connection_unknown_provider(client):
    resp = client.post("/api/ai-providers/test", json={"provider": "nope", "apiKey": "k"})
    assert resp.status_code == 400
    assert resp.get_json()["connected"] is False
