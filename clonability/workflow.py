"""Post-analysis workflow: stage 1 is the analysis itself, stages 2-6 are AI generated."""

from __future__ import annotations

from typing import Any

from .logger import get_logger
from .pipeline import RetryConfig, generate_structured_content
from .prompt import stage_prompt, stage_system_prompt
from .providers import ProviderAdapter
from .schema import STAGE_DESCRIPTORS

log = get_logger()

STAGE_NAMES = {
    1: "Discovery & Selection",
    2: "Lazy-Entrepreneur Filter",
    3: "MVP Launch Planning",
    4: "Demand Testing Strategy",
    5: "Scaling & Growth",
    6: "AI Automation Mapping",
}

COMPLETION_CRITERIA = {
    2: [
        "Clear go/no-go decision made",
        "All simplifications identified",
        "Resource requirements validated",
        "Risk mitigation plan in place",
    ],
    3: [
        "MVP scope fully defined",
        "Development team assembled",
        "Budget secured",
        "Launch date set",
    ],
    4: [
        "Minimum 100 beta users acquired",
        "Key metrics tracking live",
        "Initial feedback collected",
        "Pivot decision made",
    ],
    5: [
        "Sustainable CAC/LTV ratio achieved",
        "Growth channels validated",
        "Team scaled appropriately",
        "Next funding round prepared",
    ],
    6: [
        "AI roadmap approved",
        "First implementations live",
        "ROI metrics validated",
        "Scaling plan defined",
    ],
}

NEXT_STEP_ACTIONS = {
    2: [
        "Review simplification opportunities",
        "Validate resource estimates",
        "Seek advisor feedback",
        "Proceed to MVP planning",
    ],
    3: [
        "Assemble development team",
        "Set up development environment",
        "Create project roadmap",
        "Begin sprint planning",
    ],
    4: [
        "Launch landing page",
        "Start user acquisition",
        "Set up analytics",
        "Schedule user interviews",
    ],
    5: [
        "Optimize acquisition channels",
        "Hire key positions",
        "Develop partnerships",
        "Prepare investor deck",
    ],
    6: [
        "Prioritize AI initiatives",
        "Start pilot implementations",
        "Measure impact metrics",
        "Scale successful automations",
    ],
}


def stage_name(stage_number: int) -> str:
    return STAGE_NAMES.get(stage_number, f"Stage {stage_number}")


def generate_milestones(stage_number: int, stage_data: dict[str, Any]) -> list[dict[str, Any]]:
    """Milestones for a stage; some are marked done when the AI produced that section."""

    def done(key: str) -> bool:
        return bool(stage_data.get(key))

    milestones = {
        2: [
            ("Initial Assessment", True),
            ("Effort Analysis", True),
            ("Simplification Strategy", True),
            ("Go/No-Go Decision", True),
        ],
        3: [
            ("Feature Prioritization", done("coreFeatures")),
            ("Tech Stack Selection", done("techStack")),
            ("Timeline Definition", done("timeline")),
            ("Budget Approval", done("budgetBreakdown")),
        ],
        4: [
            ("Landing Page Launch", False),
            ("Beta User Acquisition", False),
            ("Metrics Dashboard Setup", False),
            ("First Cohort Analysis", False),
        ],
        5: [
            ("Growth Channel Validation", False),
            ("Product-Market Fit", False),
            ("Team Expansion", False),
            ("Series A Ready", False),
        ],
        6: [
            ("AI Roadmap Defined", done("implementationRoadmap")),
            ("First AI Feature Live", False),
            ("Automation ROI Validated", False),
            ("Full AI Integration", False),
        ],
    }
    return [{"name": name, "completed": completed} for name, completed in milestones.get(stage_number, [])]


class WorkflowStages:
    def __init__(self, adapter: ProviderAdapter, *, retry: RetryConfig | None = None):
        self.adapter = adapter
        self.retry = retry

    async def generate_stage_content(
        self,
        stage_number: int,
        analysis_data: dict[str, Any],
        previous_stage_data: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """Generate content for ``stage_number``.

        Returns None for stage 1, which is the analysis already performed.
        """

        if stage_number not in STAGE_NAMES:
            raise ValueError(f"Unknown workflow stage: {stage_number}")
        if stage_number == 1:
            return None

        log.info(f"Generating stage {stage_number} ({stage_name(stage_number)})")
        result = await generate_structured_content(
            self.adapter,
            stage_prompt(stage_number, analysis_data, previous_stage_data),
            STAGE_DESCRIPTORS[stage_number],
            stage_system_prompt(stage_number),
            retry=self.retry,
        )

        return {
            **result,
            "milestones": generate_milestones(stage_number, result),
            "completionCriteria": list(COMPLETION_CRITERIA[stage_number]),
            "nextStepActions": list(NEXT_STEP_ACTIONS[stage_number]),
        }
