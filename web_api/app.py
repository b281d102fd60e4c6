import asyncio

from flask import Flask, jsonify, request

from clonability import config
from clonability.analyzer import BusinessAnalyzer
from clonability.errors import UnsupportedProvider, describe_failure
from clonability.logger import get_logger
from clonability.providers import build_adapter, credential_for
from clonability.workflow import WorkflowStages, stage_name

log = get_logger()

app = Flask(__name__)


class ApiError(Exception):
    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.message = message
        self.status = status


@app.errorhandler(ApiError)
def handle_api_error(e: ApiError):
    return jsonify({"message": e.message}), e.status


def _json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _active_adapter():
    """Adapter for the active provider: request headers override configuration."""
    provider = request.headers.get("X-AI-Provider") or config.AI_PROVIDER
    api_key = request.headers.get("X-AI-Api-Key")
    try:
        credential = credential_for(provider, api_key)
    except UnsupportedProvider as e:
        raise ApiError(str(e)) from e
    if not credential.api_key:
        raise ApiError("No active AI provider configured")
    return build_adapter(credential)


def _failure_response(e: Exception):
    notice = describe_failure(e)
    return jsonify({"message": notice.description, "title": notice.title}), notice.status


@app.route("/api/health")
def health():
    return jsonify({"status": "ok", "provider": config.AI_PROVIDER})


@app.route("/api/ai-providers/test", methods=["POST"])
def test_provider():
    body = _json_body()
    try:
        adapter = build_adapter(credential_for(body.get("provider", ""), body.get("apiKey")))
    except UnsupportedProvider:
        return jsonify({"connected": False, "message": "Connection test failed"}), 400
    connected = asyncio.run(adapter.test_connection())
    return jsonify({"connected": connected})


@app.route("/api/business-analyses/analyze", methods=["POST"])
def analyze():
    url = (_json_body().get("url") or "").strip()
    if not url:
        raise ApiError("URL is required")
    analyzer = BusinessAnalyzer(_active_adapter())
    try:
        result = asyncio.run(analyzer.analyze_url(url))
    except Exception as e:  # noqa: BLE001
        log.error(f"Analysis error for {url}: {e}")
        return _failure_response(e)
    return jsonify(result.to_dict())


@app.route("/api/business-analyses/batch", methods=["POST"])
def analyze_batch():
    urls = _json_body().get("urls")
    if not isinstance(urls, list) or not urls:
        raise ApiError("URLs array is required")
    if len(urls) > config.MAX_BATCH_URLS:
        raise ApiError(f"Maximum {config.MAX_BATCH_URLS} URLs allowed per batch")
    urls = [str(u).strip() for u in urls if str(u).strip()]
    analyzer = BusinessAnalyzer(_active_adapter())
    batch = asyncio.run(analyzer.analyze_batch(urls))
    return jsonify(batch.to_dict())


@app.route("/api/business-analyses/search", methods=["POST"])
def search():
    query = (_json_body().get("query") or "").strip()
    if not query:
        raise ApiError("Search query is required")
    analyzer = BusinessAnalyzer(_active_adapter())
    try:
        result = asyncio.run(analyzer.search_businesses(query))
    except Exception as e:  # noqa: BLE001
        log.error(f"Search error: {e}")
        return _failure_response(e)
    return jsonify(result)


@app.route("/api/workflow-stages/generate/<int:stage_number>", methods=["POST"])
def generate_stage(stage_number: int):
    body = _json_body()
    analysis = body.get("analysis")
    if not isinstance(analysis, dict):
        raise ApiError("Business analysis is required")
    previous = body.get("previousStage")
    previous = previous if isinstance(previous, dict) else None

    stages = WorkflowStages(_active_adapter())
    try:
        content = asyncio.run(stages.generate_stage_content(stage_number, analysis, previous))
    except ValueError as e:
        raise ApiError(str(e), status=404) from e
    except Exception as e:  # noqa: BLE001
        log.error(f"Stage generation error: {e}")
        return _failure_response(e)

    return jsonify(
        {
            "stageNumber": stage_number,
            "stageName": stage_name(stage_number),
            "status": "completed",
            "data": content,
        }
    )


if __name__ == "__main__":
    app.run(debug=True, host="127.0.0.1", port=8080)
