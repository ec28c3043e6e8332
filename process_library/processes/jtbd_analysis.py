"""
Jobs-to-be-Done (JTBD) analysis: customer context, core jobs, functional,
emotional and social dimensions, job stories, progress mapping, desired
outcomes, competing solutions and outcome-driven innovation opportunities.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.config import ProcessInputs
from ..core.contracts import array, boolean, enum, mapping, number, obj, score, strings
from ..core.exceptions import ValidationError
from ..core.quality_gates import QualityGate
from ..core.registry import process_definition
from ..core.run_context import RunContext
from ..core.task import agent_task
from .common import finish, process_id, review


SLUG = "jtbd-analysis"
QUALITY_THRESHOLD = 80

LEVEL = enum("critical", "high", "medium", "low")
HML = enum("high", "medium", "low")


@dataclass
class JtbdInputs(ProcessInputs):
    product_name: str
    target_customers: List[str] = field(default_factory=list)
    problem_space: str = ""
    existing_research: List[str] = field(default_factory=list)
    innovation_goals: List[str] = field(default_factory=list)
    include_competitive_analysis: bool = True
    include_progress_mapping: bool = True
    minimum_job_count: int = 3
    output_dir: str = "jtbd-analysis-output"

    def __post_init__(self):
        if self.minimum_job_count < 0:
            raise ValidationError(
                "Minimum job count must not be negative",
                field="minimumJobCount",
                value=self.minimum_job_count,
            )


def _labels(topic: str) -> List[str]:
    return [SLUG, topic]


# ============================================================================
# Task definitions
# ============================================================================

customer_context_research = agent_task(
    "customer-context-research",
    title="Research customer context and situations",
    agent="customer-researcher",
    role="customer research specialist and ethnographer with expertise in contextual inquiry",
    task="Research the context, situations and circumstances in which customers struggle",
    instructions=[
        "Review existing research: user interviews, surveys, analytics and feedback",
        "Describe customer segments with their characteristics and importance",
        "Describe the situations in which customers struggle and how often they occur",
        "Understand pain points, triggering events, current behaviours and constraints",
        "Assess the quality and coverage of the available research",
        "Decide whether the context is sufficient for JTBD analysis; if not, list what is missing",
        "Save the customer context report to the output directory",
    ],
    output_format="JSON with hasAdequateContext (boolean), customerSegments, situations, painPoints, triggeringEvents, constraints, missingContext, artifacts",
    output_schema=obj(
        require=["hasAdequateContext", "customerSegments", "situations", "missingContext"],
        hasAdequateContext=boolean(),
        customerSegments=array(obj("segmentName", "size", characteristics=strings(), importance=LEVEL)),
        situations=array(obj("situation", "context", "frequency", customerSegments=strings())),
        painPoints=array(obj("painPoint", "frequency", severity=LEVEL, affectedSegments=strings())),
        triggeringEvents=strings(),
        currentBehaviors=strings(),
        constraints=array(obj("constraint", "type", "impact")),
        successCriteria=strings(),
        researchQuality=obj("qualitativeDataQuality", "quantitativeDataQuality", "recency", "coverage"),
        missingContext=strings(),
    ),
    labels=_labels("customer-research"),
)

job_identification = agent_task(
    "job-identification",
    title="Identify core jobs customers are trying to accomplish",
    agent="jobs-analyst",
    role="JTBD expert specializing in job identification and customer needs analysis",
    task="Identify the core jobs customers are hiring products to do",
    instructions=[
        "Frame jobs from the customer's perspective, never as product features",
        "Use the job statement format: verb + object + contextual clarifier",
        "Keep jobs solution-agnostic and capture why each one matters",
        "Distinguish the main job from related jobs",
        "Categorize jobs by customer segment",
        "Save the job catalog to the output directory",
    ],
    output_format="JSON with coreJobs, mainJob, relatedJobs, customerSegments, artifacts",
    output_schema=obj(
        require=["coreJobs", "mainJob", "customerSegments"],
        coreJobs=array(obj(
            "jobId", "jobStatement", "verb", "object", "context", "jobPerformer",
            "whenPerformed", "wherePerformed", "whyItMatters",
            importance=LEVEL,
            frequency=enum("daily", "weekly", "monthly", "quarterly", "yearly", "rare"),
            customerSegments=strings(),
        )),
        mainJob=obj("jobId", "jobStatement", "rationale"),
        relatedJobs=array(obj("jobId", "relationshipToMain")),
        customerSegments=strings(),
        jobsBySegment=mapping(number()),
    ),
    labels=_labels("job-identification"),
)

functional_jobs_analysis = agent_task(
    "functional-jobs-analysis",
    title="Analyze functional jobs and practical tasks",
    agent="functional-analyst",
    role="JTBD analyst specializing in functional job decomposition",
    task="Decompose each core job into functional jobs and tasks",
    instructions=[
        "For each core job identify practical, objective and measurable functional jobs",
        "Break each functional job into ordered tasks",
        "Describe inputs, outputs, tools needed and current solutions",
        "Measure functional performance: speed, accuracy and efficiency",
        "Save the functional job map to the output directory",
    ],
    output_format="JSON with functionalJobs, functionalTasks, functionalMetrics, artifacts",
    output_schema=obj(
        require=["functionalJobs"],
        functionalJobs=array(obj(
            "jobId", "parentJob", "functionalTask", "description",
            inputs=strings(),
            outputs=strings(),
            toolsNeeded=strings(),
            performanceMetrics=obj("speed", "accuracy", "efficiency"),
            complexity=enum("simple", "moderate", "complex", "very-complex"),
            painPoints=strings(),
            currentSolutions=strings(),
        )),
        functionalTasks=array(obj("taskId", "taskName", "parentFunctionalJob", sequenceOrder=number())),
        functionalMetrics=obj("averageComplexity", totalFunctionalJobs=number(), criticalTasks=number()),
    ),
    labels=_labels("functional-jobs"),
)

emotional_jobs_analysis = agent_task(
    "emotional-jobs-analysis",
    title="Analyze emotional jobs and personal needs",
    agent="emotional-analyst",
    role="behavioral psychologist and JTBD specialist in emotional needs",
    task="Identify the emotional jobs customers hire solutions for",
    instructions=[
        "For each core job identify how customers want to feel and what they want to avoid feeling",
        "Link each emotional job to a functional job",
        "Capture emotional triggers, pain points and contextual factors",
        "Highlight high-impact emotional moments",
        "Save the emotional job map to the output directory",
    ],
    output_format="JSON with emotionalJobs, emotionalNeeds, emotionalTriggers, artifacts",
    output_schema=obj(
        require=["emotionalJobs"],
        emotionalJobs=array(obj(
            "jobId", "parentJob", "emotionalNeed", "desiredFeeling", "avoidedFeeling", "linkedFunctionalJob",
            emotionType=enum("positive-seek", "negative-avoid"),
            intensity=LEVEL,
            emotionalTriggers=strings(),
            emotionalPainPoints=strings(),
            contextualFactors=strings(),
        )),
        emotionalNeeds=array(obj("need", "category", frequency=number())),
        emotionalTriggers=strings(),
        highImpactMoments=array(obj("moment", "emotionalIntensity", "impact")),
    ),
    labels=_labels("emotional-jobs"),
)

social_jobs_analysis = agent_task(
    "social-jobs-analysis",
    title="Analyze social jobs and perception needs",
    agent="social-analyst",
    role="sociologist and JTBD expert in social dynamics and perception",
    task="Identify how customers want to be perceived by others",
    instructions=[
        "For each core job identify desired and avoided perceptions and the reference group",
        "Link social jobs to functional and emotional jobs",
        "Capture social pressures, risks and status concerns",
        "List reference groups with their influence",
        "Save the social job map to the output directory",
    ],
    output_format="JSON with socialJobs, referenceGroups, socialRisks, artifacts",
    output_schema=obj(
        require=["socialJobs"],
        socialJobs=array(obj(
            "jobId", "parentJob", "socialNeed", "desiredPerception", "avoidedPerception",
            "referenceGroup", "linkedFunctionalJob", "linkedEmotionalJob",
            importance=LEVEL,
            socialPressures=strings(),
            socialRisks=strings(),
            statusConcerns=strings(),
        )),
        referenceGroups=array(obj("group", "context", influence=HML)),
        socialRisks=strings(),
        highVisibilityMoments=array(obj("moment", "visibility", stakeholders=strings())),
    ),
    labels=_labels("social-jobs"),
)

job_story_creation = agent_task(
    "job-story-creation",
    title="Create detailed job stories",
    agent="story-writer",
    role="JTBD storyteller and product narrative specialist",
    task="Write job stories covering the functional, emotional and social dimensions",
    instructions=[
        "Use the format: When [situation], I want to [motivation], so I can [expected outcome]",
        "Write two to five stories per core job covering different scenarios",
        "Keep stories concrete, with context, constraints and success criteria",
        "Count stories per dimension",
        "Save the job story catalog to the output directory",
    ],
    output_format="JSON with jobStories, functionalStoriesCount, emotionalStoriesCount, socialStoriesCount, artifacts",
    output_schema=obj(
        require=["jobStories", "functionalStoriesCount", "emotionalStoriesCount", "socialStoriesCount"],
        jobStories=array(obj(
            "storyId", "parentJob", "situation", "motivation", "expectedOutcome", "fullStory",
            "functionalDimension", "emotionalDimension", "socialDimension", "customerSegment", "frequency",
            constraints=strings(),
            successCriteria=strings(),
        )),
        functionalStoriesCount=number(minimum=0),
        emotionalStoriesCount=number(minimum=0),
        socialStoriesCount=number(minimum=0),
        storiesBySegment=mapping(number()),
    ),
    labels=_labels("job-stories"),
)

progress_mapping = agent_task(
    "progress-mapping",
    title="Map customer progress through job execution",
    agent="progress-mapper",
    role="customer journey analyst and JTBD progress mapping specialist",
    task="Map how customers make progress from first thought to ongoing use",
    instructions=[
        "Use the stages: first thought, passive looking, active looking, deciding, first use, ongoing use",
        "Describe actions, thoughts, emotions, pain points and obstacles per stage",
        "Analyse the forces of progress: push, pull, anxiety and habit",
        "Identify critical moments and what triggers movement between stages",
        "Save the progress map to the output directory",
    ],
    output_format="JSON with progressStages, painPoints, forces, criticalMoments, stageTransitions, artifacts",
    output_schema=obj(
        require=["progressStages", "painPoints", "criticalMoments", "stageTransitions"],
        progressStages=array(obj(
            "stageId", "stageName", "description",
            customerActions=strings(),
            customerThoughts=strings(),
            customerEmotions=strings(),
            painPoints=strings(),
            obstacles=strings(),
            sequenceOrder=number(),
        )),
        painPoints=array(obj("stage", "painPoint", severity=LEVEL)),
        forces=obj(pushForces=strings(), pullForces=strings(), anxietyForces=strings(), habitForces=strings()),
        criticalMoments=array(obj("moment", "stage", "decision", importance=enum("critical", "high", "medium"))),
        stageTransitions=array(obj("fromStage", "toStage", "trigger", barriers=strings())),
    ),
    labels=_labels("progress-mapping"),
)

outcomes_identification = agent_task(
    "outcomes-identification",
    title="Identify desired outcomes for each job",
    agent="outcomes-specialist",
    role="outcome-driven innovation expert and JTBD analyst",
    task="Identify the measurable outcomes customers use to judge how well a job gets done",
    instructions=[
        "Use the format: direction + metric + object of control + contextual clarifier",
        "Keep outcomes measurable and solution-agnostic",
        "Cover speed, stability, quality, cost and risk across the job's stages",
        "Link outcomes to functional, emotional and social jobs",
        "Save the outcome inventory to the output directory",
    ],
    output_format="JSON with desiredOutcomes, outcomesByJob, outcomesByDimension, totalOutcomes, artifacts",
    output_schema=obj(
        require=["desiredOutcomes"],
        desiredOutcomes=array(obj(
            "outcomeId", "parentJob", "outcomeStatement", "metric",
            direction=enum("minimize", "maximize", "optimize"),
            jobDimension=enum("preparation", "execution", "monitoring", "modification", "conclusion"),
            outcomeType=enum("speed", "stability", "quality", "cost", "risk"),
        )),
        outcomesByJob=mapping(number()),
        outcomesByDimension=mapping(number()),
        totalOutcomes=number(minimum=0),
    ),
    labels=_labels("outcomes"),
)

outcomes_assessment = agent_task(
    "outcomes-assessment",
    title="Assess outcome importance and satisfaction",
    agent="assessment-analyst",
    role="quantitative researcher and outcome assessment specialist",
    task="Score importance and satisfaction for each desired outcome",
    instructions=[
        "Rate importance and current satisfaction from 0 to 10",
        "Compute the opportunity score: importance + max(importance - satisfaction, 0)",
        "Classify outcomes as underserved, appropriately served, overserved or unimportant",
        "Save the assessment to the output directory",
    ],
    output_format="JSON with assessedOutcomes, underservedOutcomes, overservedOutcomes, opportunityScores, artifacts",
    output_schema=obj(
        require=["assessedOutcomes", "underservedOutcomes", "overservedOutcomes", "opportunityScores"],
        assessedOutcomes=array(obj(
            "outcomeId", "outcomeStatement",
            importance=number(0, 10),
            satisfaction=number(0, 10),
            opportunityScore=number(),
            category=enum("underserved", "appropriately-served", "overserved", "unimportant"),
            priorityLevel=HML,
        )),
        underservedOutcomes=array(obj("outcomeId", "outcomeStatement", opportunityScore=number())),
        appropriatelyServedOutcomes=strings(),
        overservedOutcomes=strings(),
        opportunityScores=array(obj("outcomeId", score=number())),
        opportunityDistribution=mapping(number()),
    ),
    labels=_labels("outcome-assessment"),
)

competing_solutions_analysis = agent_task(
    "competing-solutions-analysis",
    title="Analyze competing solutions customers use",
    agent="competitive-analyst",
    role="competitive intelligence analyst and JTBD specialist",
    task="Analyse the solutions customers currently hire for their jobs",
    instructions=[
        "Include direct and indirect competitors, DIY approaches, workarounds and doing nothing",
        "For each solution describe which jobs it serves well and poorly",
        "Identify underserved and overserved jobs",
        "Describe switching barriers and market gaps",
        "Save the analysis to the output directory",
    ],
    output_format="JSON with competingSolutions, underservedJobs, overservedJobs, switchingBarriers, marketGaps, artifacts",
    output_schema=obj(
        require=["competingSolutions", "underservedJobs", "overservedJobs", "switchingBarriers", "marketGaps"],
        competingSolutions=array(obj(
            "solutionName",
            solutionType=enum("direct-competitor", "indirect-competitor", "diy", "workaround", "do-nothing"),
            jobsServedWell=strings(),
            jobsServedPoorly=strings(),
        )),
        underservedJobs=array(obj("jobId", "gap", opportunityLevel=HML)),
        overservedJobs=strings(),
        switchingBarriers=array(obj("barrier", severity=HML)),
        marketGaps=array(obj("gap", "opportunity")),
    ),
    labels=_labels("competitive-analysis"),
)

unmet_needs_identification = agent_task(
    "unmet-needs-identification",
    title="Identify unmet needs and opportunity gaps",
    agent="opportunity-identifier",
    role="innovation strategist and unmet needs specialist",
    task="Identify critical unmet needs and the gaps they open",
    instructions=[
        "Combine underserved outcomes and competitive gaps into unmet needs",
        "Classify each need as functional, emotional or social with a priority",
        "Identify underserved customer segments",
        "Save the analysis to the output directory",
    ],
    output_format="JSON with criticalUnmetNeeds, opportunityGaps, underservedSegments, artifacts",
    output_schema=obj(
        require=["criticalUnmetNeeds", "opportunityGaps", "underservedSegments"],
        criticalUnmetNeeds=array(obj(
            "need", "relatedJob",
            needType=enum("functional", "emotional", "social"),
            priority=LEVEL,
        )),
        opportunityGaps=array(obj("gap", "size")),
        underservedSegments=array(obj("segment", "unmetNeed")),
        functionalGaps=number(minimum=0),
        emotionalGaps=number(minimum=0),
        socialGaps=number(minimum=0),
    ),
    labels=_labels("unmet-needs"),
)

innovation_opportunities = agent_task(
    "innovation-opportunities",
    title="Identify outcome-driven innovation opportunities",
    agent="innovation-strategist",
    role="outcome-driven innovation expert and product strategist",
    task="Turn unmet needs into innovation opportunities",
    instructions=[
        "For each high-opportunity outcome propose how to get the job done better",
        "Classify each opportunity by approach and by type",
        "Assess strategic fit against the innovation goals",
        "Save the opportunities to the output directory",
    ],
    output_format="JSON with opportunities, opportunitiesByType, opportunitiesByJob, artifacts",
    output_schema=obj(
        require=["opportunities"],
        opportunities=array(obj(
            "opportunityId", "title", "description", "targetJob",
            innovationApproach=enum("new", "improve", "simplify", "reframe"),
            opportunityType=enum("breakthrough", "adjacent", "incremental"),
            strategicFit=HML,
            opportunityScore=number(),
        )),
        opportunitiesByType=mapping(number()),
        opportunitiesByJob=mapping(number()),
        opportunitiesByApproach=mapping(number()),
    ),
    labels=_labels("innovation-opportunities"),
)

opportunity_prioritization = agent_task(
    "opportunity-prioritization",
    title="Score and prioritize innovation opportunities",
    agent="opportunity-prioritizer",
    role="portfolio manager and innovation prioritization specialist",
    task="Score the opportunities and sort them into priority tiers",
    instructions=[
        "Score each opportunity from 0 to 100 on customer value, feasibility and strategic fit",
        "Sort opportunities into high, medium and low priority",
        "Report the average opportunity score and counts per category",
        "Identify quick wins and strategic bets and check the portfolio balance",
        "Save the prioritization to the output directory",
    ],
    output_format="JSON with highPriorityOpportunities, mediumPriorityOpportunities, lowPriorityOpportunities, averageOpportunityScore, opportunitiesByCategory, artifacts",
    output_schema=obj(
        require=[
            "highPriorityOpportunities", "mediumPriorityOpportunities", "lowPriorityOpportunities",
            "averageOpportunityScore", "opportunitiesByCategory",
        ],
        highPriorityOpportunities=array(obj("opportunityId", "title", "rationale", score=number())),
        mediumPriorityOpportunities=strings(),
        lowPriorityOpportunities=strings(),
        averageOpportunityScore=score(),
        opportunitiesByCategory=mapping(number()),
        portfolioBalance=obj("assessment", breakthrough=number(), adjacent=number(), incremental=number()),
        quickWins=array(obj("opportunityId", "reason")),
        strategicBets=strings(),
    ),
    labels=_labels("prioritization"),
)

strategic_recommendations = agent_task(
    "strategic-recommendations",
    title="Create strategic recommendations and product direction",
    agent="strategy-advisor",
    role="chief product officer and strategic advisor",
    task="Synthesize the JTBD analysis into strategic recommendations and product direction",
    instructions=[
        "Create product recommendations grounded in the JTBD insights",
        "Set the product direction and the value proposition",
        "List priority actions and roadmap guidance for now, next and later",
        "Propose messaging, success metrics and risks",
        "Save the recommendations and an executive summary to the output directory",
    ],
    output_format="JSON with recommendations, productDirection, priorityActions, roadmapGuidance, valueProposition (string), artifacts",
    output_schema=obj(
        "valueProposition",
        require=["recommendations", "productDirection", "priorityActions", "roadmapGuidance", "valueProposition"],
        recommendations=array(obj("recommendation", "rationale", "targetJob", priority=LEVEL)),
        productDirection=obj("vision", "focus", "differentiation"),
        priorityActions=array(obj("action", "owner", "timeline")),
        roadmapGuidance=obj(now=strings(), next=strings(), later=strings()),
        messaging=obj("headline", keyMessages=strings()),
        successMetrics=array(obj("metric", "target")),
        risks=array(obj("risk", "mitigation")),
    ),
    labels=_labels("strategy"),
)

jtbd_visualization = agent_task(
    "jtbd-visualization",
    title="Create JTBD canvas and visualizations",
    agent="visualization-designer",
    role="information designer and JTBD visualization specialist",
    task="Create the JTBD canvas, opportunity landscape and supporting visuals",
    instructions=[
        "Build a JTBD canvas covering jobs, outcomes and opportunities",
        "Draw the opportunity landscape (importance against satisfaction)",
        "Show competitive positioning when a competitive analysis exists",
        "Include the progress map when one exists",
        "Save every visualization to the output directory",
    ],
    output_format="JSON with jtbdCanvas, opportunityLandscape, competitivePositioning, visualizationFormats, artifacts",
    output_schema=obj(
        "jtbdCanvas", "opportunityLandscape", "competitivePositioning", "progressMap", "jobMap",
        require=["jtbdCanvas", "opportunityLandscape", "competitivePositioning", "visualizationFormats"],
        visualizationFormats=strings(),
    ),
    labels=_labels("visualization"),
)

quality_validation = agent_task(
    "quality-validation",
    title="Validate JTBD analysis quality",
    agent="quality-auditor",
    role="JTBD methodology expert and quality assurance specialist",
    task="Validate the quality and completeness of the JTBD analysis",
    instructions=[
        "Score job identification, job dimensions, outcomes, assessment and opportunities",
        "Compute an overall score from 0 to 100",
        "List gaps with severity and the strengths of the analysis",
        "Check adherence to JTBD and outcome-driven innovation methodology",
        "Save the validation report to the output directory",
    ],
    output_format="JSON with overallScore (0-100), componentScores, gaps, strengths, artifacts",
    output_schema=obj(
        require=["overallScore", "componentScores"],
        overallScore=score(),
        componentScores=mapping(number()),
        gaps=array(obj("gap", "recommendation", severity=LEVEL)),
        strengths=strings(),
        methodologyAdherence=obj("assessment", score=number()),
    ),
    labels=_labels("quality-validation"),
)

TASKS = [
    customer_context_research,
    job_identification,
    functional_jobs_analysis,
    emotional_jobs_analysis,
    social_jobs_analysis,
    job_story_creation,
    progress_mapping,
    outcomes_identification,
    outcomes_assessment,
    competing_solutions_analysis,
    unmet_needs_identification,
    innovation_opportunities,
    opportunity_prioritization,
    strategic_recommendations,
    jtbd_visualization,
    quality_validation,
]

CONTEXT_GATE = QualityGate(
    phase="customer-context-research",
    check=lambda result: result["hasAdequateContext"],
    error="Insufficient customer context for JTBD analysis",
    recommendation="Conduct additional customer research before proceeding",
    details=lambda result: {"missingContext": result["missingContext"]},
)


def job_count_gate(minimum: int) -> QualityGate:
    return QualityGate(
        phase="job-identification",
        check=lambda result: len(result["coreJobs"]) >= minimum,
        error=lambda result: (
            f"Insufficient jobs identified. Found: {len(result['coreJobs'])}, minimum: {minimum}"
        ),
        recommendation="Broaden problem space or conduct additional customer discovery",
    )


# ============================================================================
# Process
# ============================================================================

@process_definition(
    process_id(SLUG),
    inputs=JtbdInputs,
    description="Jobs-to-be-Done analysis with outcome-driven innovation",
    tasks=TASKS,
)
async def jtbd_analysis(inputs: Dict[str, Any], ctx: RunContext) -> Dict[str, Any]:
    cfg = JtbdInputs.from_mapping(inputs)
    start_time = ctx.now()
    product = cfg.product_name

    ctx.log("info", f"Starting JTBD Analysis for {product}")

    ctx.log("info", "Phase 1: Researching customer context and situations")
    customer_context = await ctx.task(customer_context_research, {
        "productName": product,
        "targetCustomers": cfg.target_customers,
        "problemSpace": cfg.problem_space,
        "existingResearch": cfg.existing_research,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(customer_context)

    failure = CONTEXT_GATE.evaluate(customer_context)
    if failure:
        ctx.log("warn", f"Quality gate failed: {failure['error']}")
        return failure

    ctx.log("info", "Phase 2: Identifying core jobs customers are trying to accomplish")
    jobs = await ctx.task(job_identification, {
        "productName": product,
        "customerContext": customer_context,
        "targetCustomers": cfg.target_customers,
        "problemSpace": cfg.problem_space,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(jobs)
    core_jobs = jobs["coreJobs"]

    failure = job_count_gate(cfg.minimum_job_count).evaluate(jobs)
    if failure:
        ctx.log("warn", f"Quality gate failed: {failure['error']}")
        return failure

    await review(
        ctx,
        "Job Identification Review",
        f"Job identification complete for {product}. {len(core_jobs)} core jobs identified across "
        f"{len(jobs['customerSegments'])} segments. Review jobs before proceeding to job mapping?",
        {
            "productName": product,
            "coreJobsCount": len(core_jobs),
            "customerSegments": len(jobs["customerSegments"]),
            "problemSpace": cfg.problem_space,
        },
    )

    ctx.log("info", "Phase 3: Analyzing functional jobs and tasks")
    functional = await ctx.task(functional_jobs_analysis, {
        "productName": product,
        "coreJobs": core_jobs,
        "customerContext": customer_context,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(functional)

    ctx.log("info", "Phase 4: Analyzing emotional jobs and personal needs")
    emotional = await ctx.task(emotional_jobs_analysis, {
        "productName": product,
        "coreJobs": core_jobs,
        "functionalJobs": functional["functionalJobs"],
        "customerContext": customer_context,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(emotional)

    ctx.log("info", "Phase 5: Analyzing social jobs and how customers want to be perceived")
    social = await ctx.task(social_jobs_analysis, {
        "productName": product,
        "coreJobs": core_jobs,
        "functionalJobs": functional["functionalJobs"],
        "emotionalJobs": emotional["emotionalJobs"],
        "customerContext": customer_context,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(social)

    ctx.log("info", "Phase 6: Creating detailed job stories with context and motivations")
    stories = await ctx.task(job_story_creation, {
        "productName": product,
        "coreJobs": core_jobs,
        "functionalJobs": functional["functionalJobs"],
        "emotionalJobs": emotional["emotionalJobs"],
        "socialJobs": social["socialJobs"],
        "customerContext": customer_context,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(stories)

    await review(
        ctx,
        "Job Stories Review",
        f"Job stories created: {len(stories['jobStories'])} stories covering functional, emotional, "
        f"and social dimensions. Review stories before progress mapping?",
        {
            "productName": product,
            "totalJobStories": len(stories["jobStories"]),
            "functionalStories": stories["functionalStoriesCount"],
            "emotionalStories": stories["emotionalStoriesCount"],
            "socialStories": stories["socialStoriesCount"],
        },
    )

    progress: Optional[Dict[str, Any]] = None
    if cfg.include_progress_mapping:
        ctx.log("info", "Phase 7: Mapping customer progress and job execution stages")
        progress = await ctx.task(progress_mapping, {
            "productName": product,
            "coreJobs": core_jobs,
            "jobStories": stories["jobStories"],
            "customerContext": customer_context,
            "outputDir": cfg.output_dir,
        })
        ctx.artifacts.collect(progress)

    ctx.log("info", "Phase 8: Identifying desired outcomes and success metrics for each job")
    outcomes = await ctx.task(outcomes_identification, {
        "productName": product,
        "coreJobs": core_jobs,
        "functionalJobs": functional["functionalJobs"],
        "emotionalJobs": emotional["emotionalJobs"],
        "socialJobs": social["socialJobs"],
        "progressMapping": progress,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(outcomes)
    desired_outcomes = outcomes["desiredOutcomes"]

    ctx.log("info", "Phase 9: Assessing importance and current satisfaction for outcomes")
    assessment = await ctx.task(outcomes_assessment, {
        "productName": product,
        "desiredOutcomes": desired_outcomes,
        "coreJobs": core_jobs,
        "customerContext": customer_context,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(assessment)

    competitive: Optional[Dict[str, Any]] = None
    if cfg.include_competitive_analysis:
        ctx.log("info", "Phase 10: Analyzing competing solutions customers currently use")
        competitive = await ctx.task(competing_solutions_analysis, {
            "productName": product,
            "coreJobs": core_jobs,
            "desiredOutcomes": desired_outcomes,
            "customerContext": customer_context,
            "progressMapping": progress,
            "outputDir": cfg.output_dir,
        })
        ctx.artifacts.collect(competitive)

        await review(
            ctx,
            "Competitive Analysis Review",
            f"Competing solutions analyzed: {len(competitive['competingSolutions'])} alternatives identified. "
            f"{len(competitive['underservedJobs'])} underserved jobs found. Review before innovation opportunities?",
            {
                "productName": product,
                "competingSolutions": len(competitive["competingSolutions"]),
                "underservedJobs": len(competitive["underservedJobs"]),
                "switchingBarriers": len(competitive["switchingBarriers"]),
            },
        )

    ctx.log("info", "Phase 11: Identifying unmet needs and opportunity gaps")
    unmet = await ctx.task(unmet_needs_identification, {
        "productName": product,
        "coreJobs": core_jobs,
        "desiredOutcomes": desired_outcomes,
        "outcomesAssessment": assessment,
        "competitiveAnalysis": competitive,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(unmet)

    ctx.log("info", "Phase 12: Identifying outcome-driven innovation opportunities")
    opportunities = await ctx.task(innovation_opportunities, {
        "productName": product,
        "coreJobs": core_jobs,
        "outcomesAssessment": assessment,
        "unmetNeedsAnalysis": unmet,
        "competitiveAnalysis": competitive,
        "innovationGoals": cfg.innovation_goals,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(opportunities)

    ctx.log("info", "Phase 13: Scoring and prioritizing innovation opportunities")
    prioritization = await ctx.task(opportunity_prioritization, {
        "productName": product,
        "innovationOpportunities": opportunities["opportunities"],
        "outcomesAssessment": assessment,
        "unmetNeedsAnalysis": unmet,
        "innovationGoals": cfg.innovation_goals,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(prioritization)
    high_priority = prioritization["highPriorityOpportunities"]
    average_score = prioritization["averageOpportunityScore"]

    await review(
        ctx,
        "Innovation Opportunities Review",
        f"Innovation opportunities prioritized: {len(high_priority)} high-priority opportunities identified. "
        f"Opportunity score: {average_score:.1f}/100. Review opportunities?",
        {
            "productName": product,
            "totalOpportunities": len(opportunities["opportunities"]),
            "highPriorityOpportunities": len(high_priority),
            "averageOpportunityScore": average_score,
            "innovationCategories": prioritization["opportunitiesByCategory"],
        },
    )

    ctx.log("info", "Phase 14: Creating strategic recommendations and product direction")
    strategy = await ctx.task(strategic_recommendations, {
        "productName": product,
        "coreJobs": core_jobs,
        "opportunityPrioritization": prioritization,
        "innovationOpportunities": opportunities["opportunities"],
        "competitiveAnalysis": competitive,
        "unmetNeedsAnalysis": unmet,
        "innovationGoals": cfg.innovation_goals,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(strategy)

    ctx.log("info", "Phase 15: Creating JTBD canvas and visualizations")
    visualization = await ctx.task(jtbd_visualization, {
        "productName": product,
        "coreJobs": core_jobs,
        "functionalJobs": functional["functionalJobs"],
        "emotionalJobs": emotional["emotionalJobs"],
        "socialJobs": social["socialJobs"],
        "progressMapping": progress,
        "desiredOutcomes": desired_outcomes,
        "innovationOpportunities": opportunities["opportunities"],
        "competitiveAnalysis": competitive,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(visualization)

    ctx.log("info", "Phase 16: Validating JTBD analysis quality and completeness")
    validation = await ctx.task(quality_validation, {
        "productName": product,
        "jobIdentification": jobs,
        "functionalJobsAnalysis": functional,
        "emotionalJobsAnalysis": emotional,
        "socialJobsAnalysis": social,
        "outcomesIdentification": outcomes,
        "outcomesAssessment": assessment,
        "innovationOpportunities": opportunities,
        "competitiveAnalysis": competitive,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(validation)

    analysis_score = validation["overallScore"]
    quality_met = analysis_score >= QUALITY_THRESHOLD

    await review(
        ctx,
        "Final JTBD Analysis Review",
        f"JTBD Analysis complete for {product}. Quality score: {analysis_score}/100. "
        f"{'Analysis meets quality standards!' if quality_met else 'Analysis may need refinement.'} "
        f"{len(high_priority)} high-priority innovation opportunities identified. Approve and proceed?",
        {
            "productName": product,
            "analysisScore": analysis_score,
            "qualityMet": quality_met,
            "coreJobs": len(core_jobs),
            "totalOutcomes": len(desired_outcomes),
            "innovationOpportunities": len(opportunities["opportunities"]),
            "highPriorityOpportunities": len(high_priority),
            "strategicRecommendations": len(strategy["recommendations"]),
            "duration": ctx.now() - start_time,
        },
    )

    return finish(ctx, SLUG, start_time, {
        "success": True,
        "productName": product,
        "analysisScore": analysis_score,
        "qualityMet": quality_met,
        "customerJobs": {
            "coreJobs": core_jobs,
            "functionalJobs": functional["functionalJobs"],
            "emotionalJobs": emotional["emotionalJobs"],
            "socialJobs": social["socialJobs"],
            "jobStories": stories["jobStories"],
            "totalJobs": len(core_jobs),
        },
        "outcomes": {
            "desiredOutcomes": desired_outcomes,
            "assessedOutcomes": assessment["assessedOutcomes"],
            "underservedOutcomes": assessment["underservedOutcomes"],
            "overservedOutcomes": assessment["overservedOutcomes"],
            "opportunityScores": assessment["opportunityScores"],
        },
        "progressMap": {
            "stages": progress["progressStages"],
            "painPoints": progress["painPoints"],
            "moments": progress["criticalMoments"],
            "transitions": progress["stageTransitions"],
        } if progress else None,
        "competitiveAnalysis": {
            "competingSolutions": competitive["competingSolutions"],
            "underservedJobs": competitive["underservedJobs"],
            "overservedJobs": competitive["overservedJobs"],
            "switchingBarriers": competitive["switchingBarriers"],
            "marketGaps": competitive["marketGaps"],
        } if competitive else None,
        "unmetNeeds": {
            "criticalNeeds": unmet["criticalUnmetNeeds"],
            "opportunityGaps": unmet["opportunityGaps"],
            "underservedSegments": unmet["underservedSegments"],
        },
        "innovationOpportunities": {
            "opportunities": opportunities["opportunities"],
            "highPriority": high_priority,
            "mediumPriority": prioritization["mediumPriorityOpportunities"],
            "lowPriority": prioritization["lowPriorityOpportunities"],
            "opportunitiesByCategory": prioritization["opportunitiesByCategory"],
            "averageOpportunityScore": average_score,
        },
        "strategicRecommendations": {
            "recommendations": strategy["recommendations"],
            "productDirection": strategy["productDirection"],
            "priorityActions": strategy["priorityActions"],
            "roadmapGuidance": strategy["roadmapGuidance"],
            "valueProposition": strategy["valueProposition"],
        },
        "visualization": {
            "jtbdCanvas": visualization["jtbdCanvas"],
            "opportunityLandscape": visualization["opportunityLandscape"],
            "competitivePositioning": visualization["competitivePositioning"],
            "formats": visualization["visualizationFormats"],
        },
    },
        productName=product,
        problemSpace=cfg.problem_space,
        targetCustomers=len(cfg.target_customers),
        outputDir=cfg.output_dir,
    )
