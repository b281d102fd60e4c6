import asyncio
import json

import pandas as pd
import pytest

from clonability import config, run_batch
from clonability.errors import AuthenticationError
from clonability.providers import AIResponse, ProviderCredential


def test_read_urls_prefers_url_column(tmp_path):
    path = tmp_path / "urls.csv"
    path.write_text("name, url \nAcme,acme.io\nBlank,\nBeta,https://beta.dev\n")

    assert run_batch.read_urls(str(path)) == ["https://acme.io", "https://beta.dev"]


def test_read_urls_falls_back_to_first_column(tmp_path):
    path = tmp_path / "sites.csv"
    path.write_text("site\nwww.example.com\nnone\n")

    assert run_batch.read_urls(str(path)) == ["https://www.example.com"]


def test_flatten_analysis():
    row = run_batch.flatten(
        {
            "url": "https://acme.io",
            "overallScore": 7.0,
            "scoreDetails": {"timeToMarket": {"score": 9}},
            "aiInsights": {"keyInsight": "k"},
        }
    )
    assert row["timeToMarket_score"] == 9
    assert row["marketOpportunity_score"] is None
    assert row["key_insight"] == "k"


class _Adapter:
    name = "stub"

    def __init__(self, payload):
        self.payload = payload

    async def generate_structured(self, request):
        if "broken.io" in request.prompt:
            raise RuntimeError("openai temporarily unavailable: outage")
        return AIResponse(content=json.dumps(self.payload))


def test_run_writes_outputs(tmp_path, monkeypatch, analysis_payload, sleeps):
    input_path = tmp_path / "batch.csv"
    input_path.write_text("url\nhttps://one.io\nhttps://broken.io\nhttps://three.io\n")
    monkeypatch.setattr(config, "OUTPUT_DIR", tmp_path / "out")
    monkeypatch.setattr(run_batch, "build_adapter", lambda credential: _Adapter(analysis_payload()))
    monkeypatch.setattr(run_batch, "credential_for", lambda provider: ProviderCredential(provider, "sk-test"))

    result = asyncio.run(run_batch.run(str(input_path), "openai"))

    assert result["successful"] == 2
    assert result["failed"] == 1
    ndjson = list((tmp_path / "out").glob("batch__*.ndjson"))
    csv = list((tmp_path / "out").glob("batch__*.csv"))
    assert len(ndjson) == 1 and len(csv) == 1
    lines = ndjson[0].read_text().strip().splitlines()
    assert [json.loads(line)["url"] for line in lines] == ["https://one.io", "https://three.io"]
    df = pd.read_csv(csv[0])
    assert len(df) == 3
    assert df["overall_score"].iloc[0] == 7.0


def test_run_without_api_key_fails_before_any_call(tmp_path, monkeypatch):
    input_path = tmp_path / "batch.csv"
    input_path.write_text("url\nhttps://one.io\n")
    monkeypatch.setattr(config, "OUTPUT_DIR", tmp_path / "out")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    built = []
    monkeypatch.setattr(run_batch, "build_adapter", lambda credential: built.append(credential))

    with pytest.raises(AuthenticationError, match="No active AI provider configured"):
        asyncio.run(run_batch.run(str(input_path), "openai"))

    assert built == []
    assert not (tmp_path / "out").exists()
