"""
Competitive analysis and positioning: competitor landscape, parallel
competitor profiling, feature comparison, SWOT, differentiation,
positioning, perceptual map, intelligence report and GTM implications.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.config import ProcessInputs
from ..core.contracts import array, boolean, enum, mapping, number, obj, score, strings
from ..core.exceptions import ValidationError
from ..core.registry import process_definition
from ..core.run_context import RunContext
from ..core.task import agent_task
from .common import finish, process_id, review


SLUG = "competitive-analysis"
ANALYSIS_DEPTHS = ("comprehensive", "focused", "quick")

# Profiled in parallel: the first N of each list, in the order the landscape ranks them
TOP_DIRECT = 3
TOP_INDIRECT = 2

HML = enum("high", "medium", "low")
LEVEL = enum("critical", "high", "medium", "low")
STRENGTH = enum("strong", "moderate", "emerging")

COMPETITOR = obj(
    "name", "description", "website", "primaryOffering",
    marketPosition=enum("leader", "challenger", "follower", "niche"),
    threatLevel=HML,
    targetSegments=strings(),
)


@dataclass
class CompetitiveInputs(ProcessInputs):
    product_name: str = "Product"
    target_market: Dict[str, Any] = field(default_factory=dict)
    competitor_list: List[Any] = field(default_factory=list)
    features: List[Any] = field(default_factory=list)
    output_dir: str = "competitive-analysis-output"
    analysis_depth: str = "comprehensive"
    include_emerging_competitors: bool = True
    generate_positioning_map: bool = True
    swot_workshop: bool = True

    def __post_init__(self):
        if self.analysis_depth not in ANALYSIS_DEPTHS:
            raise ValidationError(
                "Unknown analysis depth",
                field="analysisDepth",
                value=self.analysis_depth,
                context={"allowed": ", ".join(ANALYSIS_DEPTHS)},
            )


def _labels(topic: str) -> List[str]:
    return [SLUG, topic]


# ============================================================================
# Task definitions
# ============================================================================

competitor_identification = agent_task(
    "competitor-identification",
    title="Identify and categorize competitors",
    agent="market-analyst",
    role="market research analyst and competitive intelligence specialist",
    task="Identify competitors and map the market landscape",
    instructions=[
        "Start from the supplied competitor list and extend it from market research",
        "Separate direct, indirect, emerging and potential competitors",
        "Rank each list by threat, most threatening first",
        "Describe each competitor's market position, target segments and threat level",
        "Map market segments, market structure and competitive intensity",
        "Save the competitive landscape to the output directory",
    ],
    output_format="JSON with totalCompetitors, directCompetitors, indirectCompetitors, emergingCompetitors, potentialCompetitors, marketSegments, artifacts",
    output_schema=obj(
        "competitiveIntensity",
        require=["totalCompetitors", "directCompetitors", "indirectCompetitors", "emergingCompetitors", "marketSegments"],
        totalCompetitors=number(minimum=0),
        directCompetitors=array(COMPETITOR),
        indirectCompetitors=array(COMPETITOR),
        emergingCompetitors=array(COMPETITOR),
        potentialCompetitors=array(COMPETITOR),
        marketSegments=array(obj("segment", "size", "growth", keyPlayers=strings())),
        marketStructure=obj("concentration", "barriersToEntry", "trends"),
    ),
    labels=_labels("market-landscape"),
)

competitor_profiling = agent_task(
    "competitor-profiling",
    title=lambda args: f"Profile competitor {args.get('competitorIndex')}",
    agent="competitive-intelligence-analyst",
    role="competitive intelligence analyst and business researcher",
    task="Build a detailed profile of one competitor",
    instructions=[
        "Summarise the company: founding, size, funding and strategic direction",
        "Analyse the product: core features, pricing, technology and roadmap signals",
        "Describe go-to-market: channels, messaging and partnerships",
        "Describe the customer base and market presence",
        "List strengths with impact and weaknesses with severity",
        "Assess the threat this competitor poses",
        "Save the profile to the output directory",
    ],
    output_format="JSON with competitorName, companyOverview, productAnalysis, gtmStrategy, customerBase, strengths, weaknesses, threatAssessment, artifacts",
    output_schema=obj(
        "competitorName",
        require=["competitorName", "companyOverview", "productAnalysis", "strengths", "weaknesses"],
        companyOverview=obj("founded", "headquarters", "employees", "funding", "strategicDirection"),
        productAnalysis=obj("pricingModel", "technology", coreFeatures=strings(), roadmapSignals=strings()),
        gtmStrategy=obj("messaging", channels=strings(), partnerships=strings()),
        customerBase=obj("size", "retention", segments=strings()),
        strengths=array(obj("strength", impact=HML)),
        weaknesses=array(obj("weakness", severity=HML)),
        marketPresence=obj("marketShare", "brandAwareness", geographies=strings()),
        strategySignals=strings(),
        threatAssessment=obj("rationale", level=HML),
    ),
    labels=_labels("competitor-profile"),
)

feature_comparison = agent_task(
    "feature-comparison",
    title="Build feature comparison matrix",
    agent="product-analyst",
    role="product analyst and feature comparison specialist",
    task="Compare our features against the profiled competitors",
    instructions=[
        "Compare each feature across the product and the profiled competitors",
        "Rate how important each feature is to customers",
        "Identify competitive gaps, competitive advantages and parity features",
        "Compute an overall competitive score from 0 to 100",
        "Recommend feature investments with priority",
        "Save the comparison matrix to the output directory",
    ],
    output_format="JSON with features, competitiveGaps, competitiveAdvantages, parityFeatures, competitiveScore, artifacts",
    output_schema=obj(
        require=["features", "competitiveGaps", "competitiveAdvantages", "parityFeatures", "competitiveScore"],
        features=array(obj("feature", "category", customerImportance=LEVEL, coverage=mapping())),
        competitiveGaps=array(obj("feature", "impact", competitorsWithFeature=strings())),
        competitiveAdvantages=array(obj(
            "feature",
            uniqueness=enum("unique", "rare", "better-implementation"),
            marketingValue=HML,
        )),
        parityFeatures=strings(),
        competitiveScore=score(),
        featureMatrix=obj("format", "path"),
        recommendations=array(obj("recommendation", priority=HML)),
    ),
    labels=_labels("feature-comparison"),
)

swot_analysis = agent_task(
    "swot-analysis",
    title="Conduct SWOT analysis",
    agent="strategic-analyst",
    role="strategic analyst and business strategist",
    task="Conduct a SWOT analysis grounded in the competitive evidence",
    instructions=[
        "List strengths with impact and sustainability",
        "List weaknesses with severity",
        "List opportunities with potential and threats with likelihood and impact",
        "Call out critical strengths and critical weaknesses",
        "Cross-analyse the quadrants (SO, WO, ST, WT strategies)",
        "Prepare workshop materials when a workshop is requested",
        "Save the SWOT analysis to the output directory",
    ],
    output_format="JSON with strengths, weaknesses, opportunities, threats, criticalStrengths, criticalWeaknesses, strategicImplications, criticalInsights, artifacts",
    output_schema=obj(
        require=[
            "strengths", "weaknesses", "opportunities", "threats",
            "criticalStrengths", "criticalWeaknesses", "strategicImplications", "criticalInsights",
        ],
        strengths=array(obj("strength", "evidence", impact=HML, sustainability=enum("sustainable", "temporary", "uncertain"))),
        weaknesses=array(obj("weakness", "evidence", severity=LEVEL)),
        opportunities=array(obj("opportunity", "timeframe", potential=HML)),
        threats=array(obj("threat", "source", likelihood=HML, impact=HML)),
        criticalStrengths=strings(),
        criticalWeaknesses=strings(),
        strategicImplications=array(obj("implication", "action")),
        crossAnalysis=obj(soStrategies=strings(), woStrategies=strings(), stStrategies=strings(), wtStrategies=strings()),
        criticalInsights=strings(),
    ),
    labels=_labels("swot"),
)

differentiation_strategy = agent_task(
    "differentiation-strategy",
    title="Define differentiation strategy",
    agent="positioning-strategist",
    role="product positioning strategist and differentiation expert",
    task="Define how the product differentiates from the competition",
    instructions=[
        "Identify differentiators and rate their sustainability and defendability",
        "Articulate unique value propositions for the target segments",
        "Classify competitive advantages by type and strength",
        "Choose a differentiation strategy and support it with proof points",
        "Save the differentiation strategy to the output directory",
    ],
    output_format="JSON with differentiators, uniqueValueProps, competitiveAdvantages, strategy, messaging, proofPoints, artifacts",
    output_schema=obj(
        require=["differentiators", "uniqueValueProps", "competitiveAdvantages", "strategy"],
        differentiators=array(obj("differentiator", "description", sustainability=HML, defendability=HML)),
        uniqueValueProps=array(obj("segment", "valueProposition")),
        competitiveAdvantages=array(obj(
            "advantage",
            type=enum("capability", "execution", "position", "asset", "first-mover"),
            strength=STRENGTH,
        )),
        strategy=obj("approach", "rationale", focusAreas=strings()),
        messaging=array(obj("audience", "message")),
        proofPoints=mapping(strings()),
    ),
    labels=_labels("differentiation"),
)

positioning_strategy = agent_task(
    "positioning-strategy",
    title="Develop market positioning strategy",
    agent="positioning-strategist",
    role="market positioning strategist and brand strategist",
    task="Develop the market positioning strategy",
    instructions=[
        "Write a positioning statement for the target segment",
        "Define the frame of reference, points of difference and points of parity",
        "Define positioning pillars and a message hierarchy",
        "State the value proposition and how it stands against competitors",
        "Save the positioning strategy to the output directory",
    ],
    output_format="JSON with positioningStatement, targetSegment, pointsOfDifference, positioningPillars, keyMessages, valueProposition, artifacts",
    output_schema=obj(
        "positioningStatement", "frameOfReference", "valueProposition",
        require=[
            "positioningStatement", "targetSegment", "pointsOfDifference",
            "positioningPillars", "keyMessages", "valueProposition",
        ],
        targetSegment=obj("segment", "description", needs=strings()),
        pointsOfDifference=array(obj("point", "evidence", strength=STRENGTH)),
        pointsOfParity=array(obj("point", importance=enum("critical", "important", "nice-to-have"))),
        positioningPillars=array(obj("pillar", "description", proofPoints=strings())),
        keyMessages=array(obj("message", "audience", level=enum("primary", "secondary", "supporting"))),
        brandPersonality=obj("voice", traits=strings()),
        competitivePositioning=mapping(),
        validation=obj("method", "status"),
    ),
    labels=_labels("positioning"),
)

positioning_map = agent_task(
    "positioning-map",
    title="Create perceptual positioning map",
    agent="visualization-strategist",
    role="market visualization strategist and positioning analyst",
    task="Create a perceptual positioning map of the product and its competitors",
    instructions=[
        "Choose two axes that matter most to the target customers",
        "Place the product and each competitor on a 0-100 scale for both axes",
        "Identify clusters and whitespace opportunities",
        "Draw the map as a diagram and list insights",
        "Save the map to the output directory",
    ],
    output_format="JSON with axes, positions, clusters, whitespace, insights, visualization, artifacts",
    output_schema=obj(
        "visualization",
        require=["axes", "positions", "insights", "visualization"],
        axes=obj(
            xAxis=obj("label", "lowEnd", "highEnd"),
            yAxis=obj("label", "lowEnd", "highEnd"),
        ),
        positions=array(obj("entity", xPosition=score(), yPosition=score(), isOurProduct=boolean())),
        clusters=array(obj("cluster", members=strings())),
        whitespace=array(obj("area", "opportunity", feasibility=HML)),
        insights=strings(),
        alternativeMaps=array(obj("xAxis", "yAxis", "insight")),
    ),
    labels=_labels("positioning-map"),
)

competitive_intelligence_report = agent_task(
    "competitive-intelligence-report",
    title="Generate competitive intelligence report",
    agent="intelligence-reporter",
    role="competitive intelligence analyst and business reporter",
    task="Compile the competitive intelligence report",
    instructions=[
        "Open with an executive summary",
        "Cover the landscape, profiles, feature comparison, SWOT, differentiation and positioning",
        "List key findings with significance",
        "Propose a competitive monitoring plan",
        "Save the report as markdown to the output directory and report its path",
    ],
    output_format="JSON with executiveSummary, sections, keyFindings, strategicRecommendations, competitiveMonitoringPlan, reportPath, artifacts",
    output_schema=obj(
        "executiveSummary", "reportPath",
        require=["executiveSummary", "keyFindings", "strategicRecommendations", "reportPath"],
        sections=array(obj("title", "summary")),
        keyFindings=array(obj("finding", significance=LEVEL)),
        strategicRecommendations=array(obj("recommendation", priority=HML)),
        competitiveMonitoringPlan=obj("cadence", "owner", signals=strings()),
    ),
    labels=_labels("intelligence-report"),
)

strategic_recommendations = agent_task(
    "strategic-recommendations",
    title="Formulate strategic recommendations",
    agent="strategy-consultant",
    role="management consultant and strategy advisor",
    task="Formulate strategic recommendations from the competitive analysis",
    instructions=[
        "Recommend actions across product, positioning, GTM, competitive response and investment",
        "Give each recommendation a priority, time horizon and effort",
        "Separate quick wins from long-term initiatives",
        "Rank the overall priorities",
        "Save the recommendations to the output directory",
    ],
    output_format="JSON with recommendations, quickWins, longTermInitiatives, priorities, artifacts",
    output_schema=obj(
        require=["recommendations", "quickWins", "longTermInitiatives", "priorities"],
        recommendations=array(obj(
            "recommendation", "rationale",
            category=enum("product", "positioning", "gtm", "competitive-response", "investment"),
            priority=HML,
            timeHorizon=enum("immediate", "short-term", "long-term"),
            effort=enum("low", "medium", "high"),
        )),
        quickWins=array(obj("action", "impact")),
        strategicInitiatives=array(obj("initiative", "timeline")),
        longTermInitiatives=strings(),
        priorities=array(obj("priority", rank=number())),
        investmentPlan=obj("totalInvestment", allocation=mapping()),
    ),
    labels=_labels("recommendations"),
)

gtm_implications = agent_task(
    "gtm-implications",
    title="Analyze go-to-market implications",
    agent="gtm-strategist",
    role="go-to-market strategist and market launch specialist",
    task="Analyse the go-to-market implications of the competitive position",
    instructions=[
        "Prioritise target channels",
        "Define the messaging strategy against each major competitor",
        "Describe pricing considerations relative to competitors",
        "Plan sales enablement and the expected competitive response",
        "Save the GTM implications to the output directory",
    ],
    output_format="JSON with targetChannels, messagingStrategy, pricingConsiderations, competitiveResponse, artifacts",
    output_schema=obj(
        require=["targetChannels", "messagingStrategy", "pricingConsiderations", "competitiveResponse"],
        targetChannels=array(obj("channel", "rationale", priority=HML)),
        messagingStrategy=obj("primaryMessage", "tone", competitorSpecific=mapping()),
        pricingConsiderations=obj("positioning", "recommendation", competitorPricing=mapping()),
        salesEnablement=obj(battlecards=strings(), objectionHandling=strings()),
        marketingCampaigns=array(obj("campaign", "goal")),
        acquisitionStrategy=obj("approach", targetSegments=strings()),
        competitiveResponse=obj("expectedResponse", "counterStrategy"),
        launchStrategy=obj("approach", "timing"),
    ),
    labels=_labels("gtm"),
)

TASKS = [
    competitor_identification,
    competitor_profiling,
    feature_comparison,
    swot_analysis,
    differentiation_strategy,
    positioning_strategy,
    positioning_map,
    competitive_intelligence_report,
    strategic_recommendations,
    gtm_implications,
]


def top_competitors(landscape: Dict[str, Any]) -> List[Any]:
    """Competitors chosen for detailed profiling, direct ones first"""
    return (
        list(landscape["directCompetitors"][:TOP_DIRECT])
        + list(landscape["indirectCompetitors"][:TOP_INDIRECT])
    )


# ============================================================================
# Process
# ============================================================================

@process_definition(
    process_id(SLUG),
    inputs=CompetitiveInputs,
    description="Competitive analysis and market positioning",
    tasks=TASKS,
)
async def competitive_analysis(inputs: Dict[str, Any], ctx: RunContext) -> Dict[str, Any]:
    cfg = CompetitiveInputs.from_mapping(inputs)
    start_time = ctx.now()
    product = cfg.product_name

    ctx.log("info", f"Starting Competitive Analysis and Positioning for {product}")

    ctx.log("info", "Phase 1: Identifying competitors and mapping market landscape")
    landscape = await ctx.task(competitor_identification, {
        "productName": product,
        "targetMarket": cfg.target_market,
        "competitorList": cfg.competitor_list,
        "includeEmergingCompetitors": cfg.include_emerging_competitors,
        "analysisDepth": cfg.analysis_depth,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(landscape)
    direct = landscape["directCompetitors"]
    indirect = landscape["indirectCompetitors"]
    emerging = landscape["emergingCompetitors"]

    await review(
        ctx,
        "Competitor Identification Review",
        f"Identified {landscape['totalCompetitors']} competitors ({len(direct)} direct, {len(indirect)} indirect, "
        f"{len(emerging)} emerging). Review competitor list before detailed analysis?",
        {
            "productName": product,
            "totalCompetitors": landscape["totalCompetitors"],
            "directCompetitors": len(direct),
            "indirectCompetitors": len(indirect),
            "emergingCompetitors": len(emerging),
            "marketSegments": len(landscape["marketSegments"]),
        },
    )

    ctx.log("info", "Phase 2: Creating detailed competitor profiles")
    selected = top_competitors(landscape)

    def profile(competitor: Any, index: int):
        return lambda: ctx.task(competitor_profiling, {
            "productName": product,
            "competitor": competitor,
            "competitorIndex": index,
            "targetMarket": cfg.target_market,
            "analysisDepth": cfg.analysis_depth,
            "outputDir": cfg.output_dir,
        })

    profiles = await ctx.parallel.all([
        profile(competitor, index) for index, competitor in enumerate(selected, start=1)
    ])
    for result in profiles:
        ctx.artifacts.collect(result)
    ctx.log("info", f"Profiled {len(profiles)} competitors")

    ctx.log("info", "Phase 3: Building comprehensive feature comparison matrix")
    features = await ctx.task(feature_comparison, {
        "productName": product,
        "features": cfg.features,
        "competitors": selected,
        "competitorProfiles": profiles,
        "targetMarket": cfg.target_market,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(features)

    ctx.log("info", "Phase 4: Conducting SWOT analysis")
    swot = await ctx.task(swot_analysis, {
        "productName": product,
        "featureComparison": features,
        "competitorProfiles": profiles,
        "targetMarket": cfg.target_market,
        "includeWorkshop": cfg.swot_workshop,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(swot)

    await review(
        ctx,
        "SWOT Analysis Review",
        f"SWOT analysis complete. Strengths: {len(swot['strengths'])}, Weaknesses: {len(swot['weaknesses'])}, "
        f"Opportunities: {len(swot['opportunities'])}, Threats: {len(swot['threats'])}. "
        f"Review before positioning strategy?",
        {
            "productName": product,
            "strengths": len(swot["strengths"]),
            "weaknesses": len(swot["weaknesses"]),
            "opportunities": len(swot["opportunities"]),
            "threats": len(swot["threats"]),
            "criticalStrengths": len(swot["criticalStrengths"]),
            "criticalWeaknesses": len(swot["criticalWeaknesses"]),
        },
    )

    ctx.log("info", "Phase 5: Defining differentiation strategy")
    differentiation = await ctx.task(differentiation_strategy, {
        "productName": product,
        "featureComparison": features,
        "swotAnalysis": swot,
        "competitorProfiles": profiles,
        "targetMarket": cfg.target_market,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(differentiation)

    ctx.log("info", "Phase 6: Developing market positioning strategy")
    positioning = await ctx.task(positioning_strategy, {
        "productName": product,
        "differentiation": differentiation,
        "swotAnalysis": swot,
        "featureComparison": features,
        "targetMarket": cfg.target_market,
        "competitorProfiles": profiles,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(positioning)

    position_map: Optional[Dict[str, Any]] = None
    if cfg.generate_positioning_map:
        ctx.log("info", "Phase 7: Creating perceptual positioning map")
        position_map = await ctx.task(positioning_map, {
            "productName": product,
            "competitors": selected,
            "positioningStrategy": positioning,
            "featureComparison": features,
            "targetMarket": cfg.target_market,
            "outputDir": cfg.output_dir,
        })
        ctx.artifacts.collect(position_map)

    ctx.log("info", "Phase 8: Generating competitive intelligence report")
    report = await ctx.task(competitive_intelligence_report, {
        "productName": product,
        "competitorIdentification": landscape,
        "competitorProfiles": profiles,
        "featureComparison": features,
        "swotAnalysis": swot,
        "differentiation": differentiation,
        "positioningStrategy": positioning,
        "positioningMap": position_map,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(report)

    ctx.log("info", "Phase 9: Formulating strategic recommendations")
    strategy = await ctx.task(strategic_recommendations, {
        "productName": product,
        "swotAnalysis": swot,
        "differentiation": differentiation,
        "positioningStrategy": positioning,
        "featureComparison": features,
        "competitorProfiles": profiles,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(strategy)

    ctx.log("info", "Phase 10: Analyzing go-to-market implications")
    gtm = await ctx.task(gtm_implications, {
        "productName": product,
        "positioningStrategy": positioning,
        "differentiation": differentiation,
        "targetMarket": cfg.target_market,
        "competitorProfiles": profiles,
        "strategicRecommendations": strategy,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(gtm)

    await review(
        ctx,
        "Final Competitive Analysis Review",
        f"Competitive analysis complete for {product}. Analyzed {len(profiles)} competitors, identified "
        f"{len(differentiation['differentiators'])} key differentiators, and "
        f"{len(strategy['recommendations'])} strategic recommendations. Review and approve final analysis?",
        {
            "productName": product,
            "totalCompetitors": landscape["totalCompetitors"],
            "competitorsProfiled": len(profiles),
            "keyDifferentiators": len(differentiation["differentiators"]),
            "positioningTheme": positioning["positioningStatement"],
            "strategicRecommendations": len(strategy["recommendations"]),
            "totalArtifacts": len(ctx.artifacts),
            "analysisDuration": ctx.now() - start_time,
        },
    )

    return finish(ctx, SLUG, start_time, {
        "success": True,
        "productName": product,
        "analysisDepth": cfg.analysis_depth,
        "competitors": {
            "total": landscape["totalCompetitors"],
            "direct": direct,
            "indirect": indirect,
            "emerging": emerging,
            "profiles": profiles,
        },
        "featureComparison": {
            "features": features["features"],
            "competitiveGaps": features["competitiveGaps"],
            "competitiveAdvantages": features["competitiveAdvantages"],
            "parityFeatures": features["parityFeatures"],
            "overallScore": features["competitiveScore"],
        },
        "swotAnalysis": {
            "strengths": swot["strengths"],
            "weaknesses": swot["weaknesses"],
            "opportunities": swot["opportunities"],
            "threats": swot["threats"],
            "criticalInsights": swot["criticalInsights"],
            "strategicImplications": swot["strategicImplications"],
        },
        "positioningStrategy": {
            "positioningStatement": positioning["positioningStatement"],
            "targetSegment": positioning["targetSegment"],
            "valueProposition": positioning["valueProposition"],
            "keyMessages": positioning["keyMessages"],
            "positioningPillars": positioning["positioningPillars"],
        },
        "differentiation": {
            "differentiators": differentiation["differentiators"],
            "uniqueValueProps": differentiation["uniqueValueProps"],
            "competitiveAdvantages": differentiation["competitiveAdvantages"],
            "differentiationStrategy": differentiation["strategy"],
        },
        "marketPositioningMap": {
            "axes": position_map["axes"],
            "positions": position_map["positions"],
            "visualization": position_map["visualization"],
            "insights": position_map["insights"],
        } if position_map else None,
        "intelligenceReport": {
            "executiveSummary": report["executiveSummary"],
            "keyFindings": report["keyFindings"],
            "reportPath": report["reportPath"],
        },
        "strategicRecommendations": {
            "recommendations": strategy["recommendations"],
            "quickWins": strategy["quickWins"],
            "longTermInitiatives": strategy["longTermInitiatives"],
            "priorities": strategy["priorities"],
        },
        "gtmImplications": {
            "targetChannels": gtm["targetChannels"],
            "messagingStrategy": gtm["messagingStrategy"],
            "pricingConsiderations": gtm["pricingConsiderations"],
            "competitiveResponse": gtm["competitiveResponse"],
        },
    },
        outputDir=cfg.output_dir,
        analysisDepth=cfg.analysis_depth,
    )
