from __future__ import annotations

from typing import Any

from .logger import get_logger
from .models import AIInsights, AnalysisResult, BatchFailure, BatchResult, DimensionScore
from .pipeline import RetryConfig, generate_structured_content
from .prompt import ANALYSIS_SYSTEM_PROMPT, SEARCH_SYSTEM_PROMPT, analysis_prompt, search_prompt
from .providers import ProviderAdapter
from .schema import ANALYSIS_DESCRIPTOR, SEARCH_DESCRIPTOR
from .scoring import (
    DIMENSIONS,
    backfill_ai_insights,
    backfill_score_details,
    overall_score,
)

log = get_logger()


def build_analysis(url: str, result: dict[str, Any]) -> AnalysisResult:
    """Turn a normalized model response into an ``AnalysisResult``.

    Missing dimensions and insights are backfilled; the overall score is always
    computed here, never taken from the model.
    """

    if not isinstance(result.get("scoreDetails"), dict):
        log.warning(f"No scoreDetails in analysis of {url}; using default scores")
    details = backfill_score_details(result.get("scoreDetails"))
    insights = backfill_ai_insights(result.get("aiInsights"))

    return AnalysisResult(
        url=url,
        business_model=str(result.get("businessModel") or ""),
        revenue_stream=str(result.get("revenueStream") or ""),
        target_market=str(result.get("targetMarket") or ""),
        score_details={
            name: DimensionScore(
                score=details[name]["score"],
                reasoning=str(details[name].get("reasoning") or ""),
            )
            for name in DIMENSIONS
        },
        ai_insights=AIInsights(
            key_insight=str(insights.get("keyInsight") or ""),
            risk_factor=str(insights.get("riskFactor") or ""),
            opportunity=str(insights.get("opportunity") or ""),
        ),
        overall_score=overall_score(details),
    )


class BusinessAnalyzer:
    def __init__(self, adapter: ProviderAdapter, *, retry: RetryConfig | None = None):
        self.adapter = adapter
        self.retry = retry

    async def analyze_url(self, url: str) -> AnalysisResult:
        result = await generate_structured_content(
            self.adapter,
            analysis_prompt(url),
            ANALYSIS_DESCRIPTOR,
            ANALYSIS_SYSTEM_PROMPT,
            retry=self.retry,
        )
        return build_analysis(url, result)

    async def search_businesses(self, query: str) -> dict[str, Any]:
        result = await generate_structured_content(
            self.adapter,
            search_prompt(query),
            SEARCH_DESCRIPTOR,
            SEARCH_SYSTEM_PROMPT,
            retry=self.retry,
        )
        businesses = result.get("businesses")
        if not isinstance(businesses, list):
            businesses = []
        return {"businesses": [b for b in businesses if isinstance(b, dict)]}

    async def analyze_batch(self, urls: list[str], *, progress=None) -> BatchResult:
        """Analyze ``urls`` one after another; a failed URL never aborts the batch."""
        batch = BatchResult()
        for url in urls:
            try:
                batch.analyses.append(await self.analyze_url(url))
                batch.successful += 1
            except Exception as e:  # noqa: BLE001
                log.error(f"Failed to analyze {url}: {e}")
                batch.failures.append(BatchFailure(url=url, message=str(e)))
                batch.failed += 1
            if progress is not None:
                progress.update(1)
        return batch
