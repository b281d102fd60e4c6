from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .scoring import DIMENSIONS


@dataclass(frozen=True)
class DimensionScore:
    score: int | float
    reasoning: str

    def to_dict(self) -> dict[str, Any]:
        return {"score": self.score, "reasoning": self.reasoning}


@dataclass(frozen=True)
class AIInsights:
    key_insight: str
    risk_factor: str
    opportunity: str

    def to_dict(self) -> dict[str, str]:
        return {
            "keyInsight": self.key_insight,
            "riskFactor": self.risk_factor,
            "opportunity": self.opportunity,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one clonability analysis. All five dimensions are always present."""

    url: str
    business_model: str
    revenue_stream: str
    target_market: str
    score_details: dict[str, DimensionScore]
    ai_insights: AIInsights
    overall_score: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "businessModel": self.business_model,
            "revenueStream": self.revenue_stream,
            "targetMarket": self.target_market,
            "overallScore": self.overall_score,
            "scoreDetails": {name: self.score_details[name].to_dict() for name in DIMENSIONS},
            "aiInsights": self.ai_insights.to_dict(),
        }


@dataclass(frozen=True)
class BatchFailure:
    url: str
    message: str


@dataclass
class BatchResult:
    successful: int = 0
    failed: int = 0
    analyses: list[AnalysisResult] = field(default_factory=list)
    failures: list[BatchFailure] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "successful": self.successful,
            "failed": self.failed,
            "analyses": [a.to_dict() for a in self.analyses],
            "failures": [{"url": f.url, "message": f.message} for f in self.failures],
        }
