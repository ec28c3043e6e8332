"""
Product launch and go-to-market planning: readiness assessment, messaging,
competitive positioning, channel strategy, timeline, stakeholder plan,
launch content, success metrics, risk mitigation, post-launch monitoring,
launch checklist, GTM documentation and a final GTM readiness score.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.config import ProcessInputs
from ..core.contracts import array, boolean, enum, number, obj, score, strings
from ..core.exceptions import ValidationError
from ..core.registry import process_definition
from ..core.run_context import RunContext
from ..core.task import agent_task
from .common import document, finish, process_id, review


SLUG = "product-launch-gtm"

LAUNCH_TYPES = ("major", "minor", "feature", "beta")
LAUNCH_TIERS = ("tier-1", "tier-2", "tier-3")
MARKET_TYPES = ("new", "existing", "adjacent")
COMPANY_STAGES = ("startup", "growth", "enterprise")

LEVEL = enum("critical", "high", "medium", "low")
HML = enum("high", "medium", "low")
DECISION = enum("go", "conditional-go", "no-go", "delay")


@dataclass
class LaunchInputs(ProcessInputs):
    product_name: str
    launch_type: str = "major"
    target_audience: Dict[str, Any] = field(default_factory=lambda: {
        "segments": [], "personas": [], "geographies": [],
    })
    launch_date: Optional[str] = None
    launch_tier: str = "tier-1"
    market_type: str = "existing"
    competitive: Dict[str, Any] = field(default_factory=lambda: {"competitors": [], "differentiation": ""})
    output_dir: str = "product-launch-gtm-output"
    budget_constraints: Optional[Any] = None
    existing_customers: int = 0
    company_stage: str = "growth"
    channel_preferences: List[str] = field(default_factory=lambda: ["email", "social", "pr", "events", "paid"])
    enable_beta_program: bool = True
    enable_early_access: bool = True

    def __post_init__(self):
        for key, value, allowed in (
            ("launchType", self.launch_type, LAUNCH_TYPES),
            ("launchTier", self.launch_tier, LAUNCH_TIERS),
            ("marketType", self.market_type, MARKET_TYPES),
            ("companyStage", self.company_stage, COMPANY_STAGES),
        ):
            if value not in allowed:
                raise ValidationError(
                    f"Unknown {camel_words(key)}",
                    field=key,
                    value=value,
                    context={"allowed": ", ".join(allowed)},
                )
        if self.existing_customers < 0:
            raise ValidationError(
                "Existing customer count must not be negative",
                field="existingCustomers",
                value=self.existing_customers,
            )

    @property
    def segments(self) -> List[str]:
        return list(self.target_audience.get("segments") or [])


def camel_words(key: str) -> str:
    """'launchTier' -> 'launch tier'"""
    return "".join(f" {c.lower()}" if c.isupper() else c for c in key)


def _title(phase: str):
    return lambda args: f"{phase} - {args.get('productName')}"


def _labels(topic: str) -> List[str]:
    return [SLUG, topic]


# ============================================================================
# Task definitions
# ============================================================================

pre_launch_assessment = agent_task(
    "pre-launch-assessment",
    title=_title("Phase 1: Pre-Launch Readiness Assessment"),
    agent="general-purpose",
    role="Product Launch Manager and GTM Strategist",
    task="Assess pre-launch readiness across product, market and team",
    instructions=[
        "Assess product readiness (40% weight): feature completeness, quality, performance, security, documentation",
        "Assess market readiness (30% weight): demand validation, competition, pricing, value proposition, timing",
        "Assess team readiness (30% weight): sales enablement, support, marketing, executive and legal sign-off",
        "List critical gaps and blockers with severity and a recommendation each",
        "Judge launch timing and tier, score overall readiness from 0 to 100 and give a go/no-go call",
    ],
    output_format="JSON with readinessScore (0-100), productReadiness, marketReadiness, teamReadiness, criticalGaps, artifacts",
    output_schema=obj(
        "launchTimingAssessment",
        require=["success", "readinessScore", "productReadiness", "marketReadiness", "teamReadiness"],
        success=boolean(),
        readinessScore=score(),
        productReadiness=obj(
            score=score(), featureCompleteness=number(), qualityScore=number(),
            documentationScore=number(), gaps=strings(),
        ),
        marketReadiness=obj(
            "demandValidation", "competitivePosition",
            score=score(), pricingDefined=boolean(), gaps=strings(),
        ),
        teamReadiness=obj(
            score=score(), salesReady=boolean(), supportReady=boolean(),
            marketingReady=boolean(), gaps=strings(),
        ),
        criticalGaps=array(obj("area", "gap", "recommendation", severity=LEVEL)),
        goNoGoRecommendation=obj("rationale", decision=DECISION, conditions=strings()),
    ),
    labels=_labels("assessment"),
)

messaging_framework = agent_task(
    "develop-messaging-framework",
    title=_title("Phase 2: Develop Messaging Framework"),
    agent="general-purpose",
    role="Product Marketing Manager and Messaging Strategist",
    task="Write the positioning statement and the launch messaging framework",
    instructions=[
        "Write a Geoffrey Moore style positioning statement",
        "Write value propositions per segment with pain points, benefits and proof points",
        "Define key messages with sub-messages and target audience",
        "Tailor a primary message to each persona and write a 30-second elevator pitch",
        "List differentiators and talking points for executive, technical, economic and end-user audiences",
    ],
    output_format="JSON with positioningStatement, valuePropositions, keyMessages, differentiators, talkingPoints, artifacts",
    output_schema=obj(
        "positioningStatement", "elevatorPitch",
        require=["success", "positioningStatement", "valuePropositions", "keyMessages"],
        success=boolean(),
        valuePropositions=array(obj(
            "segment", "quantifiableValue",
            painPoints=strings(), benefits=strings(), proofPoints=strings(),
        )),
        keyMessages=array(obj("message", "targetAudience", subMessages=strings(), proofPoints=strings())),
        audienceMessages=array(obj("persona", "primaryMessage", painPoints=strings(), benefits=strings())),
        differentiators=array(obj("differentiator", "description", "competitiveComparison")),
        talkingPoints=obj(executive=strings(), technical=strings(), economic=strings(), endUser=strings()),
    ),
    labels=_labels("messaging"),
)

competitive_analysis = agent_task(
    "competitive-analysis",
    title=_title("Phase 3: Competitive Analysis and Positioning"),
    agent="general-purpose",
    role="Competitive Intelligence Analyst and Market Strategist",
    task="Analyse the competition and fix the product's market position",
    instructions=[
        "Profile direct, indirect and substitute competitors with strengths, weaknesses and pricing",
        "Build a competitive matrix over features, pricing and target market",
        "Run a SWOT analysis for the launch",
        "State competitive advantages with proof points and write a battlecard per competitor",
        "Place the product in a market quadrant (leader, challenger, niche, follower)",
    ],
    output_format="JSON with competitors, competitiveAdvantages, battlecards, marketPosition, artifacts",
    output_schema=obj(
        require=["success", "competitors", "competitiveAdvantages", "marketPosition"],
        success=boolean(),
        competitors=array(obj(
            "name", "marketShare", "positioning", "pricing",
            category=enum("direct", "indirect", "substitute"),
            strengths=strings(), weaknesses=strings(),
        )),
        competitiveMatrix=obj(features=array(obj()), pricing=array(obj()), targetMarket=array(obj())),
        swotAnalysis=obj(strengths=strings(), weaknesses=strings(), opportunities=strings(), threats=strings()),
        competitiveAdvantages=array(obj("advantage", "description", proofPoints=strings())),
        battlecards=array(obj("competitor", "howToCompete", objections=strings(), responses=strings())),
        marketPosition=obj("quadrant", "positioning", "differentiation"),
    ),
    labels=_labels("competitive"),
)

channel_strategy = agent_task(
    "develop-channel-strategy",
    title=_title("Phase 4: Develop GTM Channel Strategy"),
    agent="general-purpose",
    role="GTM Strategy Lead and Channel Marketing Expert",
    task="Build the multi-channel GTM strategy with tactics and budget allocation",
    instructions=[
        "Select channels from the channel preferences and rank them primary, secondary or tertiary",
        "Give each channel objectives, target segment, tactics with timeline and success metrics",
        "Allocate budget per channel within the budget constraints and keep a contingency",
        "Describe the customer journey across channels and the attribution model",
        "Account for company stage and the existing customer base",
    ],
    output_format="JSON with channels, primaryChannels, channelIntegration, budgetSummary, artifacts",
    output_schema=obj(
        require=["success", "channels", "primaryChannels"],
        success=boolean(),
        channels=array(obj(
            "channel", "targetSegment", "budgetAllocation",
            channelType=enum("digital", "traditional", "hybrid"),
            priority=enum("primary", "secondary", "tertiary"),
            objectives=strings(),
            tactics=array(obj("tactic", "description", "timeline")),
            successMetrics=strings(),
        )),
        primaryChannels=strings(),
        channelIntegration=obj("customerJourney", "attributionModel", crossChannelTactics=strings()),
        budgetSummary=obj("totalBudget", "contingency", allocations=array(obj())),
    ),
    labels=_labels("channels"),
)

launch_timeline = agent_task(
    "create-launch-timeline",
    title=_title("Phase 5: Create Launch Timeline"),
    agent="general-purpose",
    role="Launch Program Manager and Timeline Coordinator",
    task="Lay out launch phases, milestones and the critical path",
    instructions=[
        "Recommend a launch date when none is given and count the days to launch",
        "Plan phases including beta and early access when enabled",
        "Set milestones with owner, criteria and dependencies, flagging critical-path ones",
        "Identify critical-path activities with duration and risk level",
        "Schedule launch week day by day and write the timeline document",
    ],
    output_format="JSON with phases, milestones, criticalPath, timelinePath, recommendedLaunchDate, daysToLaunch, artifacts",
    output_schema=obj(
        "recommendedLaunchDate", "timelinePath",
        require=["success", "phases", "milestones", "criticalPath", "timelinePath"],
        success=boolean(),
        daysToLaunch=number(),
        phases=array(obj(
            "phase", "startDate", "endDate", "duration",
            objectives=strings(), keyActivities=strings(),
        )),
        milestones=array(obj(
            "milestone", "date", "phase", "owner",
            criteria=strings(), dependencies=strings(), criticalPath=boolean(),
        )),
        criticalPath=array(obj("activity", "duration", dependencies=strings(), riskLevel=enum("low", "medium", "high"))),
        launchWeekSchedule=array(obj("day", "timing", activities=strings())),
    ),
    labels=_labels("timeline"),
)

stakeholder_plan = agent_task(
    "develop-stakeholder-plan",
    title=_title("Phase 6: Develop Stakeholder Coordination Plan"),
    agent="general-purpose",
    role="Launch Coordination Manager",
    task="Plan how launch stakeholders are coordinated and kept informed",
    instructions=[
        "Map stakeholder groups with their information needs, deliverables and cadence",
        "Build a RACI matrix for the launch activities",
        "Define the coordination meetings with attendees, agenda and purpose",
        "Plan enablement and training per stakeholder",
    ],
    output_format="JSON with stakeholders, raciMatrix, meetings, enablementPlan, artifacts",
    output_schema=obj(
        require=["success", "stakeholders", "meetings"],
        success=boolean(),
        stakeholders=array(obj(
            "group", "role", "communicationFrequency",
            informationNeeds=strings(), deliverables=strings(),
        )),
        raciMatrix=array(obj("activity", "responsible", "accountable", consulted=strings(), informed=strings())),
        meetings=array(obj("meeting", "frequency", "purpose", attendees=strings(), agenda=strings())),
        enablementPlan=array(obj("stakeholder", "timeline", trainingSessions=strings(), resources=strings())),
    ),
    labels=_labels("stakeholders"),
)

launch_content = agent_task(
    "plan-launch-content",
    title=_title("Phase 7: Plan Launch Content and Collateral"),
    agent="general-purpose",
    role="Content Marketing Manager and Creative Director",
    task="Plan the launch content and marketing collateral for every channel",
    instructions=[
        "List content assets with type, category, channel, owner, due date, priority and status",
        "Cover foundational, channel-specific, enablement and customer-facing content",
        "Build a content calendar aligned with the launch timeline",
        "Define the review and approval workflow",
    ],
    output_format="JSON with contentAssets, contentTypes, contentCalendar, approvalWorkflow, artifacts",
    output_schema=obj(
        require=["success", "contentAssets", "contentTypes"],
        success=boolean(),
        contentAssets=array(obj(
            "name", "type", "purpose", "targetAudience", "channel", "owner", "dueDate",
            category=enum("foundational", "channel-specific", "enablement", "customer-facing"),
            priority=LEVEL,
            status=enum("not-started", "in-progress", "review", "approved", "published"),
        )),
        contentTypes=strings(),
        contentCalendar=array(obj(
            "date", "content", "channel",
            action=enum("create", "review", "approve", "publish"),
        )),
        approvalWorkflow=obj("turnaroundTime", reviewStages=strings(), approvers=strings()),
    ),
    labels=_labels("content"),
)

success_metrics = agent_task(
    "define-success-metrics",
    title=_title("Phase 8: Define Success Metrics and KPIs"),
    agent="general-purpose",
    role="Product Analytics Manager and Success Metrics Specialist",
    task="Define launch KPIs, targets and success criteria",
    instructions=[
        "Define KPIs with category, metric, target, stretch target, timeframe and data source",
        "Set targets against baselines for each timeframe",
        "Map pirate metrics (acquisition, activation, retention, revenue, referral) and per-channel metrics",
        "State must-have and nice-to-have success criteria and red flags",
        "Write the measurement plan: data sources, dashboards, reporting frequency and validation",
    ],
    output_format="JSON with kpis, targets, successCriteria, measurementPlan, artifacts",
    output_schema=obj(
        require=["success", "kpis", "targets", "successCriteria"],
        success=boolean(),
        kpis=array(obj(
            "name", "metric", "target", "stretchTarget", "timeframe", "dataSource",
            category=enum("acquisition", "activation", "retention", "revenue", "referral", "channel", "other"),
            priority=LEVEL,
        )),
        targets=array(obj("timeframe", "metric", "baseline", "target", "stretchTarget")),
        pirateMetrics=obj(
            acquisition=array(obj()), activation=array(obj()), retention=array(obj()),
            revenue=array(obj()), referral=array(obj()),
        ),
        channelMetrics=array(obj("channel", metrics=array(obj()))),
        successCriteria=obj(mustHave=strings(), niceToHave=strings(), redFlags=strings()),
        measurementPlan=obj(
            "reportingFrequency",
            dataSources=strings(), dashboards=strings(), dataValidation=strings(),
        ),
    ),
    labels=_labels("metrics"),
)

risk_mitigation = agent_task(
    "develop-risk-mitigation",
    title=_title("Phase 9: Develop Risk Mitigation Plan"),
    agent="general-purpose",
    role="Risk Management Specialist and Launch Coordinator",
    task="Identify launch risks and plan mitigations and contingencies",
    instructions=[
        "List product, market and execution risks with probability, impact and early warnings",
        "Give each risk a mitigation strategy, contingency plan and owner",
        "Define contingencies with trigger conditions, response and communication",
        "Set go/no-go criteria and delay triggers",
        "Write a rollback plan",
    ],
    output_format="JSON with risks, contingencies, goNoGoCriteria, rollbackPlan, artifacts",
    output_schema=obj(
        require=["success", "risks", "contingencies"],
        success=boolean(),
        risks=array(obj(
            "risk", "riskScore", "mitigationStrategy", "contingencyPlan", "owner",
            category=enum("product", "market", "execution", "other"),
            probability=HML,
            impact=HML,
            earlyWarnings=strings(),
        )),
        contingencies=array(obj("response", "communication", triggerConditions=strings(), actions=strings())),
        goNoGoCriteria=obj(criticalCriteria=strings(), decisionMakers=strings(), delayTriggers=strings()),
        rollbackPlan=obj("communicationPlan", rollbackTriggers=strings(), rollbackSteps=strings()),
    ),
    labels=_labels("risks"),
)

post_launch_monitoring = agent_task(
    "create-post-launch-monitoring",
    title=_title("Phase 10: Create Post-Launch Monitoring Plan"),
    agent="general-purpose",
    role="Product Analytics Manager and Optimization Specialist",
    task="Plan post-launch monitoring, measurement and optimization",
    instructions=[
        "Schedule post-launch checkpoints with metrics, thresholds, attendees and agenda",
        "Define dashboards per audience and their update frequency",
        "Set red and yellow alert thresholds with the action for each",
        "Write the optimization plan: areas, testing framework, iteration cadence, decision criteria",
        "Plan feedback mechanisms and the reporting cadence",
    ],
    output_format="JSON with checkpoints, dashboards, alerts, optimizationPlan, artifacts",
    output_schema=obj(
        require=["success", "checkpoints", "dashboards", "optimizationPlan"],
        success=boolean(),
        checkpoints=array(obj(
            "checkpoint", "timing",
            metricsToReview=strings(), successThresholds=array(obj()),
            attendees=strings(), agenda=strings(),
        )),
        dashboards=array(obj("name", "purpose", "audience", "updateFrequency", metrics=strings())),
        alerts=array(obj("metric", "redThreshold", "yellowThreshold", "action")),
        optimizationPlan=obj(
            "testingFramework", "iterationCadence",
            optimizationAreas=strings(), decisionCriteria=strings(),
        ),
        feedbackMechanisms=array(obj("mechanism", "timing", "targetAudience", metrics=strings())),
        reportingCadence=array(obj("frequency", "format", recipients=strings(), content=strings())),
    ),
    labels=_labels("monitoring"),
)

launch_checklist = agent_task(
    "create-launch-checklist",
    title=_title("Phase 11: Create Launch Checklist"),
    agent="general-purpose",
    role="Launch Program Manager and Checklist Coordinator",
    task="Build the launch checklist with owners and completion criteria",
    instructions=[
        "Group checklist items by category with owner, due date, status, priority and dependencies",
        "Count total and completed items and the completion rate",
        "Lay the items out on a timeline and mark critical-path items",
        "List blocked items with their blocker and resolution",
        "Write the checklist document",
    ],
    output_format="JSON with totalItems, completedItems, completionRate, categories, checklistPath, artifacts",
    output_schema=obj(
        "checklistPath",
        require=["success", "totalItems", "categories", "checklistPath"],
        success=boolean(),
        totalItems=number(0),
        completedItems=number(0),
        completionRate=number(0, 100),
        categories=array(obj(
            "category",
            items=array(obj(
                "item", "owner", "dueDate", "completionCriteria",
                status=enum("not-started", "in-progress", "completed", "blocked"),
                priority=LEVEL,
                dependencies=strings(),
            )),
        )),
        timelineView=array(obj("timeframe", items=strings())),
        criticalPathItems=strings(),
        blockedItems=array(obj("item", "blocker", "resolution")),
    ),
    labels=_labels("checklist"),
)

gtm_documentation = agent_task(
    "generate-gtm-documentation",
    title=_title("Phase 12: Generate GTM Plan Documentation"),
    agent="general-purpose",
    role="Product Marketing Documentation Specialist",
    task="Write the GTM plan document set from the planning so far",
    instructions=[
        "Write the full GTM plan document",
        "Write an executive summary and a one-page launch overview",
        "Pull out the key highlights of the plan",
    ],
    output_format="JSON with mainDocumentPath, executiveSummaryPath, onePagerPath, executiveSummary, keyHighlights, artifacts",
    output_schema=obj(
        "mainDocumentPath", "executiveSummaryPath", "onePagerPath", "executiveSummary",
        require=["success", "mainDocumentPath", "executiveSummaryPath"],
        success=boolean(),
        keyHighlights=strings(),
    ),
    labels=_labels("documentation"),
)

gtm_score = agent_task(
    "calculate-gtm-score",
    title=_title("Phase 13: Calculate GTM Readiness Score"),
    agent="general-purpose",
    role="GTM Assessment Specialist and Launch Readiness Evaluator",
    task="Score GTM readiness and recommend whether to launch",
    instructions=[
        "Score readiness, messaging, channel strategy, execution planning, content and metrics",
        "Combine them into a GTM score from 0 to 100; the launch is ready at 70 or above",
        "Classify the readiness level and list strengths and gaps with severity",
        "Give a launch recommendation with rationale, conditions and actions needed",
        "Write a verdict, next steps and the score summary document",
    ],
    output_format="JSON with gtmScore (0-100), launchReady, verdict, recommendation, summaryPath, artifacts",
    output_schema=obj(
        "verdict", "recommendation", "summaryPath",
        require=["gtmScore", "launchReady", "verdict", "recommendation", "summaryPath"],
        gtmScore=score(),
        componentScores=obj(
            preLaunchReadiness=number(), messagingPositioning=number(), channelStrategy=number(),
            executionPlanning=number(), contentCollateral=number(), metricsMeasurement=number(),
        ),
        launchReady=boolean(),
        readinessLevel=enum("ready", "conditionally-ready", "not-ready", "significant-work-needed"),
        strengths=strings(),
        gaps=array(obj("gap", "recommendation", severity=LEVEL)),
        launchRecommendation=obj("rationale", decision=DECISION, conditions=strings(), actionsNeeded=strings()),
        confidenceLevel=HML,
    ),
    labels=_labels("scoring"),
)

TASKS = [
    pre_launch_assessment,
    messaging_framework,
    competitive_analysis,
    channel_strategy,
    launch_timeline,
    stakeholder_plan,
    launch_content,
    success_metrics,
    risk_mitigation,
    post_launch_monitoring,
    launch_checklist,
    gtm_documentation,
    gtm_score,
]


def task_files(result: Dict[str, Any], default_format: str) -> List[Dict[str, Any]]:
    """Breakpoint files for the artifacts of a single task result"""
    files = []
    for item in result.get("artifacts") or []:
        entry = {"path": item["path"], "format": item.get("format") or default_format}
        if item.get("label"):
            entry["label"] = item["label"]
        files.append(entry)
    return files


def matching(items: List[Dict[str, Any]], key: str, value: str) -> List[Dict[str, Any]]:
    return [item for item in items if item.get(key) == value]


# ============================================================================
# Process
# ============================================================================

@process_definition(
    process_id(SLUG),
    inputs=LaunchInputs,
    description="Product launch and go-to-market planning from readiness assessment to GTM score",
    tasks=TASKS,
)
async def product_launch_gtm(inputs: Dict[str, Any], ctx: RunContext) -> Dict[str, Any]:
    cfg = LaunchInputs.from_mapping(inputs)
    start_time = ctx.now()
    product = cfg.product_name
    phase_results: List[Dict[str, Any]] = []

    ctx.log("info", f"Starting Product Launch and GTM Planning for {product}")
    ctx.log("info", f"Launch Type: {cfg.launch_type}, Tier: {cfg.launch_tier}, Target Date: {cfg.launch_date or 'TBD'}")
    ctx.log("info", f"Target Audience: {', '.join(cfg.segments)}, Market: {cfg.market_type}")

    ctx.log("info", "Phase 1: Conducting pre-launch readiness assessment")
    assessment = await ctx.task(pre_launch_assessment, {
        "productName": product,
        "launchType": cfg.launch_type,
        "launchTier": cfg.launch_tier,
        "targetAudience": cfg.target_audience,
        "marketType": cfg.market_type,
        "competitive": cfg.competitive,
        "launchDate": cfg.launch_date,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(assessment)
    phase_results.append({"phase": "Pre-Launch Assessment", "result": assessment})
    critical_gaps = assessment.get("criticalGaps") or []

    await review(
        ctx,
        "Pre-Launch Assessment Review",
        f"Pre-launch assessment complete for {product}. Readiness score: {assessment['readinessScore']}/100. "
        f"{len(critical_gaps)} critical gaps identified. Proceed with launch planning?",
        {
            "readinessScore": assessment["readinessScore"],
            "productReadiness": assessment["productReadiness"],
            "marketReadiness": assessment["marketReadiness"],
            "teamReadiness": assessment["teamReadiness"],
            "criticalGaps": critical_gaps,
        },
        files=task_files(assessment, "json"),
    )

    ctx.log("info", "Phase 2: Developing market positioning and messaging framework")
    messaging = await ctx.task(messaging_framework, {
        "productName": product,
        "launchType": cfg.launch_type,
        "targetAudience": cfg.target_audience,
        "marketType": cfg.market_type,
        "competitive": cfg.competitive,
        "assessmentResult": assessment,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(messaging)
    phase_results.append({"phase": "Messaging Framework", "result": messaging})
    value_props = messaging["valuePropositions"]
    key_messages = messaging["keyMessages"]

    await review(
        ctx,
        "Messaging Framework Review",
        f"Messaging framework developed. {len(value_props)} value propositions, {len(key_messages)} key messages. "
        f"Review positioning statement and messaging?",
        {
            "positioningStatement": messaging["positioningStatement"],
            "valuePropositions": value_props,
            "keyMessages": key_messages[:5],
            "differentiators": messaging.get("differentiators") or [],
        },
        files=task_files(messaging, "markdown"),
    )

    ctx.log("info", "Phase 3: Conducting competitive analysis and market positioning")
    competition = await ctx.task(competitive_analysis, {
        "productName": product,
        "marketType": cfg.market_type,
        "competitive": cfg.competitive,
        "messagingResult": messaging,
        "targetAudience": cfg.target_audience,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(competition)
    phase_results.append({"phase": "Competitive Analysis", "result": competition})
    ctx.log("info", f"Competitive analysis complete - Analyzed {len(competition['competitors'])} competitors")

    ctx.log("info", "Phase 4: Developing GTM channel strategy")
    channels = await ctx.task(channel_strategy, {
        "productName": product,
        "launchType": cfg.launch_type,
        "launchTier": cfg.launch_tier,
        "targetAudience": cfg.target_audience,
        "messagingResult": messaging,
        "channelPreferences": cfg.channel_preferences,
        "budgetConstraints": cfg.budget_constraints,
        "companyStage": cfg.company_stage,
        "existingCustomers": cfg.existing_customers,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(channels)
    phase_results.append({"phase": "Channel Strategy", "result": channels})
    channel_list = channels["channels"]
    primary_channels = channels["primaryChannels"]

    await review(
        ctx,
        "Channel Strategy Review",
        f"Channel strategy developed with {len(channel_list)} channels. Primary: {', '.join(primary_channels)}. "
        f"Review channel mix and tactics?",
        {
            "totalChannels": len(channel_list),
            "primaryChannels": primary_channels,
            "channelMix": [
                {"channel": c.get("channel"), "priority": c.get("priority"), "budget": c.get("budgetAllocation")}
                for c in channel_list
            ],
        },
        files=task_files(channels, "json"),
    )

    ctx.log("info", "Phase 5: Creating launch timeline and milestone plan")
    timeline = await ctx.task(launch_timeline, {
        "productName": product,
        "launchType": cfg.launch_type,
        "launchTier": cfg.launch_tier,
        "launchDate": cfg.launch_date,
        "channelStrategyResult": channels,
        "enableBetaProgram": cfg.enable_beta_program,
        "enableEarlyAccess": cfg.enable_early_access,
        "assessmentResult": assessment,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(timeline)
    phase_results.append({"phase": "Launch Timeline", "result": timeline})
    ctx.log("info", f"Launch timeline created - {len(timeline['milestones'])} milestones, "
                    f"{len(timeline['phases'])} phases")

    ctx.log("info", "Phase 6: Developing stakeholder coordination plan")
    stakeholders = await ctx.task(stakeholder_plan, {
        "productName": product,
        "launchType": cfg.launch_type,
        "launchTier": cfg.launch_tier,
        "timelineResult": timeline,
        "channelStrategyResult": channels,
        "assessmentResult": assessment,
        "companyStage": cfg.company_stage,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(stakeholders)
    phase_results.append({"phase": "Stakeholder Coordination", "result": stakeholders})

    ctx.log("info", "Phase 7: Planning launch content and marketing collateral")
    content = await ctx.task(launch_content, {
        "productName": product,
        "launchType": cfg.launch_type,
        "launchTier": cfg.launch_tier,
        "messagingResult": messaging,
        "channelStrategyResult": channels,
        "targetAudience": cfg.target_audience,
        "timelineResult": timeline,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(content)
    phase_results.append({"phase": "Launch Content", "result": content})
    assets = content["contentAssets"]
    critical_assets = matching(assets, "priority", "critical")

    await review(
        ctx,
        "Launch Content Review",
        f"Launch content planned - {len(assets)} assets across {len(content['contentTypes'])} content types. "
        f"Review content calendar and asset list?",
        {
            "totalAssets": len(assets),
            "contentTypes": content["contentTypes"],
            "keyAssets": [a.get("name") for a in critical_assets],
        },
        files=task_files(content, "markdown"),
    )

    ctx.log("info", "Phase 8: Defining success metrics and launch KPIs")
    metrics = await ctx.task(success_metrics, {
        "productName": product,
        "launchType": cfg.launch_type,
        "launchTier": cfg.launch_tier,
        "targetAudience": cfg.target_audience,
        "channelStrategyResult": channels,
        "marketType": cfg.market_type,
        "existingCustomers": cfg.existing_customers,
        "companyStage": cfg.company_stage,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(metrics)
    phase_results.append({"phase": "Success Metrics", "result": metrics})
    ctx.log("info", f"Success metrics defined - {len(metrics['kpis'])} KPIs, {len(metrics['targets'])} targets set")

    ctx.log("info", "Phase 9: Developing risk mitigation and contingency plan")
    risks = await ctx.task(risk_mitigation, {
        "productName": product,
        "launchType": cfg.launch_type,
        "launchTier": cfg.launch_tier,
        "assessmentResult": assessment,
        "timelineResult": timeline,
        "channelStrategyResult": channels,
        "competitiveResult": competition,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(risks)
    phase_results.append({"phase": "Risk Mitigation", "result": risks})

    ctx.log("info", "Phase 10: Creating post-launch monitoring and optimization plan")
    monitoring = await ctx.task(post_launch_monitoring, {
        "productName": product,
        "launchType": cfg.launch_type,
        "metricsResult": metrics,
        "channelStrategyResult": channels,
        "timelineResult": timeline,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(monitoring)
    phase_results.append({"phase": "Post-Launch Monitoring", "result": monitoring})

    ctx.log("info", "Phase 11: Creating comprehensive launch checklist")
    checklist = await ctx.task(launch_checklist, {
        "productName": product,
        "launchType": cfg.launch_type,
        "launchTier": cfg.launch_tier,
        "assessmentResult": assessment,
        "timelineResult": timeline,
        "contentResult": content,
        "channelStrategyResult": channels,
        "stakeholderResult": stakeholders,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(checklist)
    phase_results.append({"phase": "Launch Checklist", "result": checklist})
    ctx.log("info", f"Launch checklist created - {checklist['totalItems']} items across "
                    f"{len(checklist['categories'])} categories")

    ctx.log("info", "Phase 12: Generating comprehensive GTM plan documentation")
    docs = await ctx.task(gtm_documentation, {
        "productName": product,
        "launchType": cfg.launch_type,
        "launchTier": cfg.launch_tier,
        "launchDate": cfg.launch_date,
        "targetAudience": cfg.target_audience,
        "phaseResults": phase_results,
        "messagingResult": messaging,
        "channelStrategyResult": channels,
        "timelineResult": timeline,
        "metricsResult": metrics,
        "checklistResult": checklist,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(docs)

    ctx.log("info", "Phase 13: Calculating GTM readiness score and final assessment")
    scoring = await ctx.task(gtm_score, {
        "productName": product,
        "launchType": cfg.launch_type,
        "launchTier": cfg.launch_tier,
        "launchDate": cfg.launch_date,
        "assessmentResult": assessment,
        "messagingResult": messaging,
        "channelStrategyResult": channels,
        "timelineResult": timeline,
        "contentResult": content,
        "metricsResult": metrics,
        "checklistResult": checklist,
        "phaseResults": phase_results,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(scoring)

    score_value = scoring["gtmScore"]
    launch_ready = bool(scoring["launchReady"])
    ctx.log("info", f"GTM Score: {score_value}/100, Launch Ready: {launch_ready}")

    await review(
        ctx,
        "Final GTM Plan Review",
        f"Product Launch and GTM Plan Complete for {product}. GTM Score: {score_value}/100. "
        f"Launch Ready: {'YES' if launch_ready else 'NO'}. "
        f"{'Proceed with launch execution?' if launch_ready else 'Address gaps before launch?'}",
        {
            "productName": product,
            "launchType": cfg.launch_type,
            "launchTier": cfg.launch_tier,
            "launchDate": cfg.launch_date or "TBD",
            "gtmScore": score_value,
            "launchReady": launch_ready,
            "readinessScore": assessment["readinessScore"],
            "targetAudience": ", ".join(cfg.segments),
            "positioning": messaging["positioningStatement"],
            "channels": ", ".join(primary_channels),
            "milestones": len(timeline["milestones"]),
            "contentAssets": len(assets),
            "kpis": len(metrics["kpis"]),
            "checklistItems": checklist["totalItems"],
            "completionRate": checklist.get("completionRate"),
            "criticalGaps": len(critical_gaps),
            "risksIdentified": len(risks["risks"]),
            "verdict": scoring["verdict"],
            "recommendation": scoring["recommendation"],
        },
        files=[
            document(docs["mainDocumentPath"], "GTM Plan Document"),
            document(checklist["checklistPath"], "Launch Checklist"),
            {"path": timeline["timelinePath"], "format": "json", "label": "Launch Timeline"},
            {"path": scoring["summaryPath"], "format": "json", "label": "GTM Score Summary"},
        ],
    )

    launch_date = cfg.launch_date or timeline.get("recommendedLaunchDate")

    return finish(ctx, SLUG, start_time, {
        "success": True,
        "productName": product,
        "launchType": cfg.launch_type,
        "launchTier": cfg.launch_tier,
        "launchDate": launch_date,
        "gtmScore": score_value,
        "launchReady": launch_ready,
        "readinessAssessment": {
            "readinessScore": assessment["readinessScore"],
            "productReadiness": assessment["productReadiness"],
            "marketReadiness": assessment["marketReadiness"],
            "teamReadiness": assessment["teamReadiness"],
            "criticalGaps": critical_gaps,
        },
        "positioning": {
            "positioningStatement": messaging["positioningStatement"],
            "valuePropositions": value_props,
            "differentiators": messaging.get("differentiators") or [],
        },
        "messaging": {
            "keyMessages": key_messages,
            "audienceMessages": messaging.get("audienceMessages") or [],
            "talkingPoints": messaging.get("talkingPoints") or {},
        },
        "competitive": {
            "competitorsAnalyzed": len(competition["competitors"]),
            "competitiveAdvantages": competition["competitiveAdvantages"],
            "marketPosition": competition["marketPosition"],
        },
        "channels": {
            "totalChannels": len(channel_list),
            "primaryChannels": primary_channels,
            "channelMix": [
                {"channel": c.get("channel"), "priority": c.get("priority"), "tactics": len(c.get("tactics") or [])}
                for c in channel_list
            ],
        },
        "timeline": {
            "launchDate": launch_date,
            "milestones": len(timeline["milestones"]),
            "phases": len(timeline["phases"]),
            "daysToLaunch": timeline.get("daysToLaunch"),
            "criticalPath": timeline["criticalPath"],
        },
        "content": {
            "totalAssets": len(assets),
            "contentTypes": content["contentTypes"],
            "criticalAssets": len(critical_assets),
        },
        "metrics": {
            "kpis": [
                {"name": k.get("name"), "target": k.get("target"), "metric": k.get("metric")}
                for k in metrics["kpis"]
            ],
            "successCriteria": metrics["successCriteria"],
            "measurementPlan": metrics.get("measurementPlan") or {},
        },
        "risks": {
            "totalRisks": len(risks["risks"]),
            "highRisks": len(matching(risks["risks"], "impact", "high")),
            "contingencies": len(risks["contingencies"]),
        },
        "checklist": {
            "totalItems": checklist["totalItems"],
            "completedItems": checklist.get("completedItems"),
            "completionRate": checklist.get("completionRate"),
            "categories": checklist["categories"],
        },
        "postLaunch": {
            "checkpoints": monitoring["checkpoints"],
            "dashboards": monitoring["dashboards"],
            "optimizationPlan": monitoring["optimizationPlan"],
        },
        "documentation": {
            "mainDocument": docs["mainDocumentPath"],
            "checklist": checklist["checklistPath"],
            "timeline": timeline["timelinePath"],
            "scoreSummary": scoring["summaryPath"],
            "executiveSummary": docs["executiveSummaryPath"],
        },
    },
        launchType=cfg.launch_type,
        launchTier=cfg.launch_tier,
        marketType=cfg.market_type,
        outputDir=cfg.output_dir,
    )
