import json

ANALYSIS_SYSTEM_PROMPT = """
You are a venture analyst. Be extremely concise. Each reasoning should be 2-3 sentences maximum. Focus on actionable insights.
"""

SEARCH_SYSTEM_PROMPT = """
You are a business research specialist helping entrepreneurs find cloneable opportunities. Suggest real, existing businesses that match the criteria and would be good learning examples.
"""

DEFAULT_STAGE_SYSTEM_PROMPT = "You are an expert business advisor."

STAGE_SYSTEM_PROMPTS = {
    2: "You are a pragmatic startup advisor focused on effort minimization and smart shortcuts. Be brutally honest about feasibility and provide actionable simplifications.",
    3: "You are an experienced product manager and technical architect. Focus on practical, implementable plans with realistic timelines and modern best practices.",
    4: "You are a growth hacker and lean startup expert. Emphasize rapid testing, data-driven decisions, and fail-fast mentality.",
    5: "You are a growth strategist and scale-up advisor. Focus on sustainable, capital-efficient growth with clear metrics and milestones.",
    6: "You are an AI implementation specialist. Provide practical, high-ROI automation opportunities with clear implementation paths.",
}


def analysis_prompt(url: str) -> str:
    return f"""
Analyze the business at {url} for cloneability.

IMPORTANT: Be CONCISE - keep each reasoning to 2-3 sentences maximum.

Provide:
1. Business model (1 sentence)
2. Primary revenue stream (1 sentence)
3. Target market (1 sentence)
4. Scores (1-10) with brief reasoning:
   - Technical complexity
   - Market opportunity
   - Competitive landscape
   - Resource requirements
   - Time to market
5. One key insight (1 sentence)
6. One risk factor (1 sentence)
7. One opportunity (1 sentence)
"""


def search_prompt(query: str) -> str:
    return f"""
Based on the query "{query}", suggest 5 real web businesses/applications that match this criteria and would be good candidates for cloning. For each business, provide:
1. Business name
2. URL (if publicly known)
3. Brief description
4. Business model
5. Estimated cloneability score (1-10)

Focus on businesses that are:
- Technically feasible to clone
- Have proven market demand
- Not overly complex for a startup to replicate
- Have clear monetization strategies
"""


def _score(analysis: dict, dimension: str):
    details = analysis.get("scoreDetails")
    dim = details.get(dimension) if isinstance(details, dict) else None
    return dim.get("score") if isinstance(dim, dict) else None


def _lazy_filter_prompt(analysis: dict, previous: dict) -> str:
    return f"""
Apply the "Lazy Entrepreneur Filter" to {analysis.get("url")} ({analysis.get("businessModel")}).

Current Score: {analysis.get("overallScore")}/10
Business Model: {analysis.get("businessModel")}
Revenue Stream: {analysis.get("revenueStream")}
Target Market: {analysis.get("targetMarket")}

Evaluate based on:
1. EFFORT ANALYSIS
   - Technical complexity (current score: {_score(analysis, "technicalComplexity")}/10)
   - Resource requirements (current score: {_score(analysis, "resourceRequirements")}/10)
   - Time to market (current score: {_score(analysis, "timeToMarket")}/10)

2. REWARD POTENTIAL
   - Market opportunity (current score: {_score(analysis, "marketOpportunity")}/10)
   - Revenue potential based on {analysis.get("revenueStream")}
   - Competitive advantage possibilities

3. LAZY OPTIMIZATION
   - Identify shortcuts and simplifications
   - Find existing tools/APIs to leverage
   - Suggest MVV (Minimum Viable Version) approach
   - List what NOT to build

Provide actionable recommendation with clear go/no-go decision.
"""


def _mvp_prompt(analysis: dict, previous: dict) -> str:
    return f"""
Create a detailed MVP Launch Plan for cloning {analysis.get("businessModel")} business.

Previous Filter Result: {previous.get("recommendation") or "PROCEED"}
Suggested Modifications: {json.dumps(previous.get("modifications") or [])}

Design the MVP with:

1. CORE FEATURE SET (Limit to 5-7 essential features)
   - Focus on {analysis.get("revenueStream")} monetization
   - Target {analysis.get("targetMarket")} specifically
   - Consider competitive landscape score: {_score(analysis, "competitiveLandscape")}/10

2. TECHNICAL ARCHITECTURE
   - Modern, scalable tech stack
   - Cloud-first approach
   - API-driven design
   - Security best practices

3. DEVELOPMENT ROADMAP
   - Sprint-based timeline (2-week sprints)
   - Milestone deliverables
   - Testing strategy
   - Launch checklist

4. RESOURCE PLANNING
   - Team composition (roles and skills)
   - Budget breakdown by category
   - Tool and service costs
   - Risk buffer allocation

Focus on speed to market while maintaining quality.
"""


def _demand_testing_prompt(analysis: dict, previous: dict) -> str:
    timeline = previous.get("timeline")
    if isinstance(timeline, dict):
        timeline = timeline.get("total")
    budget = previous.get("budgetEstimate")
    breakdown = previous.get("budgetBreakdown")
    if not budget and isinstance(breakdown, dict):
        budget = breakdown.get("total")
    return f"""
Design a comprehensive Demand Testing Strategy for the MVP.

MVP Features: {json.dumps(previous.get("coreFeatures") or [])}
Timeline: {timeline or "3-6 months"}
Budget: {budget or "TBD"}

Create testing framework including:

1. PRE-LAUNCH VALIDATION
   - Landing page A/B tests
   - Value proposition testing
   - Pricing sensitivity analysis
   - Feature prioritization surveys

2. SOFT LAUNCH STRATEGY
   - Beta user acquisition (target 100-500 users)
   - Cohort analysis setup
   - Feedback loops implementation
   - Iteration protocol

3. METRICS FRAMEWORK
   - North star metric definition
   - Leading indicators
   - Lagging indicators
   - Dashboard requirements

4. PIVOT TRIGGERS
   - Red flags to watch
   - Decision criteria
   - Alternative directions
   - Sunset conditions

Focus on data-driven validation with clear success/failure criteria.
"""


def _scaling_prompt(analysis: dict, previous: dict) -> str:
    return f"""
Develop a Scaling & Growth Strategy for validated business.

Validation Results: {json.dumps(previous.get("successMetrics") or [])}
Current Target Market: {analysis.get("targetMarket")}

Design growth plan including:

1. GROWTH CHANNELS (Prioritized by CAC/LTV)
   - Organic growth tactics
   - Paid acquisition channels
   - Partnership opportunities
   - Content marketing strategy
   - Community building

2. PRODUCT EXPANSION
   - Feature roadmap (6-12 months)
   - Platform extensions
   - Market segment expansion
   - Geographic expansion

3. OPERATIONAL SCALING
   - Team growth plan
   - System architecture evolution
   - Process automation priorities
   - Quality maintenance strategies

4. FINANCIAL PROJECTIONS
   - Revenue growth targets
   - Unit economics optimization
   - Funding requirements
   - Profitability timeline

Focus on sustainable, capital-efficient growth.
"""


def _automation_prompt(analysis: dict, previous: dict) -> str:
    return f"""
Map AI Automation Opportunities for {analysis.get("businessModel")}.

Current Scale: Based on growth strategies {json.dumps(previous.get("growthStrategies") or [])}

Identify AI integration points:

1. CUSTOMER EXPERIENCE AI
   - Chatbot/support automation
   - Personalization engine
   - Recommendation systems
   - Predictive user behavior

2. OPERATIONAL AI
   - Process automation
   - Quality assurance
   - Fraud detection
   - Resource optimization

3. MARKETING & SALES AI
   - Lead scoring
   - Content generation
   - Campaign optimization
   - Churn prediction

4. PRODUCT AI FEATURES
   - Core feature enhancements
   - AI-native features
   - Data insights products
   - API offerings

5. IMPLEMENTATION ROADMAP
   - Priority matrix (impact vs effort)
   - Build vs buy decisions
   - Integration timeline
   - ROI projections

Focus on practical, high-ROI implementations.
"""


_STAGE_PROMPTS = {
    2: _lazy_filter_prompt,
    3: _mvp_prompt,
    4: _demand_testing_prompt,
    5: _scaling_prompt,
    6: _automation_prompt,
}


def stage_prompt(stage_number: int, analysis: dict, previous: dict | None = None) -> str:
    builder = _STAGE_PROMPTS.get(stage_number)
    if builder is None:
        return ""
    return builder(analysis or {}, previous or {})


def stage_system_prompt(stage_number: int) -> str:
    return STAGE_SYSTEM_PROMPTS.get(stage_number, DEFAULT_STAGE_SYSTEM_PROMPT)
