"""
Product metrics dashboard setup: KPI framework and North Star Metric,
instrumentation, dashboard design, data pipeline, data quality, alerting,
implementation spec, testing, security, documentation and rollout.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..core.config import ProcessInputs
from ..core.contracts import array, boolean, enum, mapping, number, obj, score, strings
from ..core.exceptions import ValidationError
from ..core.quality_gates import QualityGate
from ..core.registry import process_definition
from ..core.run_context import RunContext
from ..core.task import agent_task
from .common import finish, process_id, review


SLUG = "metrics-dashboard"
READINESS_THRESHOLD = 85

DASHBOARD_TYPES = ("executive", "operational", "team", "customer-facing")
REFRESH_FREQUENCIES = ("real-time", "hourly", "daily", "weekly")

LEVEL = enum("critical", "high", "medium", "low")
HML = enum("high", "medium", "low")
ALERT_SEVERITY = enum("critical", "warning", "info")


@dataclass
class DashboardInputs(ProcessInputs):
    product_name: str
    dashboard_type: str = "operational"
    stakeholders: List[Any] = field(default_factory=list)
    metrics_scope: List[str] = field(default_factory=lambda: [
        "acquisition", "activation", "retention", "revenue", "satisfaction",
    ])
    data_sources: List[Any] = field(default_factory=list)
    alert_thresholds: Dict[str, float] = field(default_factory=lambda: {"critical": 0.8, "warning": 0.6})
    existing_metrics: List[Any] = field(default_factory=list)
    refresh_frequency: str = "real-time"
    target_segments: List[str] = field(default_factory=list)
    compliance_requirements: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.dashboard_type not in DASHBOARD_TYPES:
            raise ValidationError(
                "Unknown dashboard type",
                field="dashboardType",
                value=self.dashboard_type,
                context={"allowed": ", ".join(DASHBOARD_TYPES)},
            )
        if self.refresh_frequency not in REFRESH_FREQUENCIES:
            raise ValidationError(
                "Unknown refresh frequency",
                field="refreshFrequency",
                value=self.refresh_frequency,
                context={"allowed": ", ".join(REFRESH_FREQUENCIES)},
            )


def _title(phase: str):
    return lambda args: f"{phase} - {args.get('productName')}"


def _labels(topic: str) -> List[str]:
    return [SLUG, topic]


# ============================================================================
# Task definitions
# ============================================================================

kpi_identification = agent_task(
    "kpi-identification",
    title=_title("Phase 1: KPI Identification and North Star Metric Definition"),
    agent="general-purpose",
    role="Chief Product Officer and data analytics expert with expertise in product metrics frameworks (AARRR, HEART, NSM)",
    task="Define the North Star Metric and the KPI framework for the dashboard",
    instructions=[
        "Choose a North Star Metric with definition, rationale, formula and target",
        "Define KPIs across the metrics scope, each with id, definition, formula and category",
        "Classify KPIs as leading, lagging, input or outcome metrics",
        "Map how KPIs drive or predict the North Star Metric",
        "Align with AARRR and HEART and describe segmentation and metric governance",
    ],
    output_format="JSON with northStarMetric, kpis, kpiCategories, metricRelationships, artifacts",
    output_schema=obj(
        require=["northStarMetric", "kpis", "kpiCategories", "metricRelationships"],
        northStarMetric=obj(
            "metric", "definition", "rationale", "calculationFormula", "target",
            require=["metric", "definition", "rationale", "calculationFormula", "target"],
            refreshFrequency=enum(*REFRESH_FREQUENCIES),
        ),
        kpis=array(obj(
            "kpiId", "name", "definition", "calculationFormula", "category", "target",
            require=["kpiId", "name", "definition", "calculationFormula", "category"],
            metricType=enum("leading", "lagging", "input", "outcome"),
            dataType=enum("count", "percentage", "ratio", "average", "median", "sum", "duration"),
            refreshFrequency=enum("real-time", "hourly", "daily", "weekly", "monthly"),
            thresholds=obj(critical=number(), warning=number()),
        )),
        kpiCategories=mapping(number()),
        metricRelationships=array(obj(
            "fromKpi", "toKpi",
            relationship=enum("drives", "influences", "correlates-with", "predicts"),
            strength=enum("strong", "moderate", "weak"),
        )),
        frameworkAlignment=obj(aarrr=strings(), heart=strings()),
        segmentationStrategy=obj("approach", dimensions=strings()),
        governanceModel=obj("owner", "reviewCadence", "changeProcess"),
    ),
    labels=_labels("kpi-framework"),
)

instrumentation_planning = agent_task(
    "instrumentation-planning",
    title=_title("Phase 2: Metrics Instrumentation Planning"),
    agent="general-purpose",
    role="senior data engineer and product analytics specialist with expertise in event tracking and instrumentation",
    task="Plan the event instrumentation the KPIs need",
    instructions=[
        "List every event to track with trigger condition, properties and related KPIs",
        "Mark whether each event exists, needs modification or is new",
        "Write a tracking plan with naming conventions",
        "Choose the implementation approach and estimate effort",
        "Describe data governance, validation and migration from existing tracking",
    ],
    output_format="JSON with eventsToTrack, trackingPlan, implementationApproach, estimatedEffort, artifacts",
    output_schema=obj(
        require=["eventsToTrack", "trackingPlan", "implementationApproach", "estimatedEffort"],
        eventsToTrack=array(obj(
            "eventName", "eventDescription", "triggerCondition",
            require=["eventName", "eventDescription", "triggerCondition", "properties", "relatedKpis"],
            category=enum("user-interaction", "system-event", "business-event", "lifecycle-event"),
            properties=array(obj("name", "type", required=boolean())),
            relatedKpis=strings(),
            priority=LEVEL,
            implementationStatus=enum("existing", "needs-modification", "new"),
        )),
        trackingPlan=obj("namingConvention", "documentPath", "ownership"),
        implementationApproach=obj("strategy", "tooling", sdks=strings()),
        dataGovernance=obj("piiHandling", "retention"),
        validationStrategy=obj("approach", checks=strings()),
        estimatedEffort=obj("totalDays", breakdown=mapping()),
        migrationStrategy=obj("plan", rolloutApproach=enum("big-bang", "phased", "parallel-tracking")),
    ),
    labels=_labels("instrumentation"),
)

dashboard_design = agent_task(
    "dashboard-design",
    title=_title("Phase 3: Dashboard Design and UX Planning"),
    agent="general-purpose",
    role="data visualization expert and UX designer specializing in dashboard design and information architecture",
    task="Design the dashboard layout and visualizations",
    instructions=[
        "Choose a layout type and organise it into sections",
        "Give every KPI a visualization placed in a section",
        "Define filters, drill-downs and other interactivity",
        "Set design system, accessibility level and performance targets",
        "Produce a markdown mockup of the dashboard",
    ],
    output_format="JSON with layout, visualizations, interactivity, mockupMarkdown, artifacts",
    output_schema=obj(
        "mockupMarkdown",
        require=["layout", "visualizations", "interactivity", "mockupMarkdown"],
        layout=obj(
            require=["type", "sections"],
            type=enum("single-page", "tabbed", "multi-page", "drill-down"),
            sections=array(obj("sectionId", "title", "purpose", kpis=strings())),
        ),
        visualizations=array(obj(
            "vizId", "kpiId", "visualizationType", "section", "type",
            require=["vizId", "kpiId", "visualizationType", "section"],
            size=enum("small", "medium", "large", "full-width"),
        )),
        interactivity=obj(filters=strings(), drillDowns=strings(), exportOptions=strings()),
        designSystem=obj("colorScheme", "typography"),
        accessibility=obj(wcagLevel=enum("A", "AA", "AAA"), considerations=strings()),
        performanceTargets=obj("loadTime", "refreshLatency"),
    ),
    labels=_labels("dashboard-design"),
)

data_pipeline_setup = agent_task(
    "data-pipeline-setup",
    title=_title("Phase 4: Data Pipeline Architecture"),
    agent="general-purpose",
    role="senior data engineer and analytics architect with expertise in ETL/ELT pipelines and data warehousing",
    task="Design the data pipeline that feeds the dashboard",
    instructions=[
        "Choose the pipeline pattern and describe the architecture",
        "Describe each data source with its type and connection method",
        "Define ingestion, storage, transformations and metric calculations",
        "Choose a refresh strategy matching the requested refresh frequency",
        "Respect the compliance requirements; plan monitoring and data lineage",
    ],
    output_format="JSON with architecture, dataSources, transformations, storageStrategy, refreshStrategy, artifacts",
    output_schema=obj(
        require=["architecture", "dataSources", "transformations", "storageStrategy", "refreshStrategy"],
        architecture=obj("description", pattern=enum("ETL", "ELT", "streaming", "lambda", "kappa"), components=strings()),
        dataSources=array(obj(
            "name",
            sourceType=enum("analytics-platform", "database", "api", "data-warehouse", "saas", "file-storage"),
            connectionMethod=enum("jdbc", "api", "sdk", "webhook", "file-transfer"),
        )),
        ingestionStrategy=obj("mode", "schedule"),
        storageStrategy=obj("warehouse", "retention", "partitioning"),
        transformations=array(obj("name", "description", "tool")),
        metricCalculations=array(obj("kpiId", "sql", calculationComplexity=enum("simple", "moderate", "complex"))),
        refreshStrategy=obj("schedule", dashboardRefreshMode=enum("real-time", "scheduled", "on-demand", "hybrid")),
        performanceOptimization=strings(),
        monitoring=obj("tool", metrics=strings()),
        dataLineage=obj("tool", "documentation"),
    ),
    labels=_labels("data-pipeline"),
)

data_quality_framework = agent_task(
    "data-quality-framework",
    title=_title("Phase 5: Data Quality and Validation Framework"),
    agent="general-purpose",
    role="data quality engineer with expertise in data validation, testing and observability",
    task="Define how the dashboard's data quality is validated and monitored",
    instructions=[
        "Define validation rules per quality dimension with severity and action",
        "Plan quality monitoring and reconciliation against source systems",
        "Describe the testing framework and incident response",
        "Set a data quality SLA",
    ],
    output_format="JSON with validationRules, qualityMonitoring, reconciliationProcess, artifacts",
    output_schema=obj(
        require=["validationRules", "qualityMonitoring", "reconciliationProcess"],
        validationRules=array(obj(
            "ruleId", "description", "kpiId",
            qualityDimension=enum("accuracy", "completeness", "consistency", "timeliness", "validity", "uniqueness"),
            validationType=enum("schema", "range", "format", "referential-integrity", "statistical", "business-logic"),
            severity=LEVEL,
            action=enum("block", "alert", "log", "quarantine"),
        )),
        qualityChecks=array(obj("check", "frequency")),
        qualityMonitoring=obj("tool", "cadence", dashboards=strings()),
        reconciliationProcess=obj("frequency", "method", "owner"),
        testingFramework=obj("tool", testTypes=strings()),
        incidentResponse=obj("process", "owner"),
        dataQualitySLA=obj("freshness", "accuracy", "availability"),
    ),
    labels=_labels("data-quality"),
)

alert_configuration = agent_task(
    "alert-configuration",
    title=_title("Phase 6: Alert and Anomaly Detection Configuration"),
    agent="general-purpose",
    role="SRE and product operations specialist with expertise in alerting, monitoring and anomaly detection",
    task="Configure alerts and anomaly detection for the KPIs",
    instructions=[
        "Configure alerts for the North Star Metric and the key KPIs",
        "Map the alert thresholds to critical, warning and info severities",
        "Configure anomaly detection with algorithm and sensitivity",
        "Set notification channels, escalation policies and on-call coverage",
        "Plan alert management to avoid alert fatigue",
    ],
    output_format="JSON with alerts, notificationChannels, anomalyDetection, artifacts",
    output_schema=obj(
        require=["alerts", "notificationChannels", "anomalyDetection"],
        alerts=array(obj(
            "alertId", "alertName", "kpiId", "condition",
            require=["alertId", "alertName", "kpiId", "condition", "severity"],
            alertType=enum("threshold", "anomaly", "trend", "multi-condition", "missing-data"),
            severity=ALERT_SEVERITY,
            threshold=number(),
            recipients=strings(),
        )),
        anomalyDetection=obj(
            enabled=boolean(),
            algorithm=enum("statistical", "ml-based", "rule-based", "hybrid"),
            sensitivity=HML,
            monitoredKpis=strings(),
        ),
        notificationChannels=array(obj(
            "name", "target",
            channelType=enum("slack", "email", "pagerduty", "teams", "sms", "webhook"),
            severities=strings(),
        )),
        escalationPolicies=array(obj("severity", "escalateAfter", "escalateTo")),
        onCallSchedule=obj(
            rotationType=enum("weekly", "bi-weekly", "custom"),
            coverage=enum("24x7", "business-hours", "custom"),
        ),
        alertManagement=obj("deduplication", "suppression", "acknowledgment"),
    ),
    labels=_labels("alerts"),
)

implementation_spec = agent_task(
    "implementation-spec",
    title=_title("Phase 7: Dashboard Implementation Specification"),
    agent="general-purpose",
    role="full-stack engineer and solutions architect with expertise in dashboard implementation and BI tools",
    task="Write the dashboard implementation specification",
    instructions=[
        "Choose the technical stack and deployment architecture",
        "Break implementation into phases and prioritised tasks",
        "Estimate implementation time and resources",
        "List dependencies with their status and the main risks",
        "Fill in a readiness checklist and score implementation readiness from 0 to 100",
    ],
    output_format="JSON with technicalStack, implementationPhases, estimatedImplementationTime, dependencies, readinessScore (0-100), artifacts",
    output_schema=obj(
        "estimatedImplementationTime",
        require=["technicalStack", "implementationPhases", "estimatedImplementationTime", "dependencies", "readinessScore"],
        technicalStack=obj("biTool", "dataWarehouse", "frontend", "backend"),
        architecture=obj(
            deploymentModel=enum("cloud", "on-premise", "hybrid"),
            scalingStrategy=enum("vertical", "horizontal", "auto-scaling"),
        ),
        apiDesign=obj(apiStyle=enum("REST", "GraphQL", "gRPC"), endpoints=strings()),
        implementationPhases=array(obj("phase", "duration", deliverables=strings())),
        implementationTasks=array(obj("task", "estimate", priority=LEVEL)),
        resourceRequirements=array(obj("role", allocation=number())),
        dependencies=array(obj(
            "dependency",
            type=enum("technical", "organizational", "external"),
            status=enum("ready", "in-progress", "blocked"),
        )),
        readinessChecklist=array(obj("item", status=enum("complete", "in-progress", "not-started"))),
        readinessScore=score(),
        risks=array(obj("risk", "mitigation", impact=HML, probability=HML)),
    ),
    labels=_labels("implementation"),
)

testing_plan = agent_task(
    "testing-plan",
    title=_title("Phase 8: Testing and Validation Plan"),
    agent="general-purpose",
    role="QA engineer and test automation specialist with expertise in dashboard testing and validation",
    task="Plan how the dashboard is tested and accepted",
    instructions=[
        "Write test scenarios across functional, data accuracy, performance, security, accessibility and integration",
        "Define data validation and performance testing",
        "Plan user acceptance testing with the stakeholders",
        "Define validation criteria, automation, environment and schedule",
    ],
    output_format="JSON with testScenarios, validationCriteria, uatPlan, artifacts",
    output_schema=obj(
        require=["testScenarios", "validationCriteria", "uatPlan"],
        testScenarios=array(obj(
            "scenarioId", "description", "expectedResult",
            category=enum("functional", "data-accuracy", "performance", "security", "accessibility", "integration"),
            testingApproach=enum("manual", "automated", "hybrid"),
        )),
        dataValidation=obj("approach", checks=strings()),
        performanceTesting=obj("tool", "targets"),
        uatPlan=obj("duration", participants=array(obj("role", "name")), scenarios=strings()),
        validationCriteria=strings(),
        testAutomation=obj("framework", "coverage"),
        testEnvironment=obj("environment", "dataset"),
        testSchedule=obj("start", "end"),
    ),
    labels=_labels("testing"),
)

security_configuration = agent_task(
    "security-configuration",
    title=_title("Phase 9: Access Control and Security Configuration"),
    agent="general-purpose",
    role="security engineer with expertise in access control, data privacy and compliance",
    task="Configure access control, privacy and compliance for the dashboard",
    instructions=[
        "Choose authentication and authorization models and define roles",
        "Describe data privacy controls such as masking and retention",
        "Map compliance requirements to controls",
        "Plan audit logging, security monitoring, vulnerability management and incident response",
    ],
    output_format="JSON with accessControl, dataPrivacy, complianceControls, artifacts",
    output_schema=obj(
        require=["accessControl", "dataPrivacy", "complianceControls"],
        accessControl=obj(
            authenticationMethod=enum("sso", "oauth", "saml", "basic", "multi-factor"),
            authorizationModel=enum("rbac", "abac", "hybrid"),
            roles=array(obj("role", permissions=strings())),
        ),
        dataPrivacy=obj("piiHandling", "retention", maskedFields=strings()),
        complianceControls=array(obj(
            "control",
            regulation=enum("GDPR", "HIPAA", "SOC2", "CCPA", "PCI-DSS"),
        )),
        auditLogging=obj("retention", events=strings()),
        securityMonitoring=obj("tool", "alerts"),
        vulnerabilityManagement=obj("scanning", "patching"),
        incidentResponse=obj("process", "owner"),
    ),
    labels=_labels("security"),
)

documentation = agent_task(
    "documentation",
    title=_title("Phase 10: Documentation and Enablement Materials"),
    agent="general-purpose",
    role="technical writer and enablement specialist with expertise in dashboard documentation",
    task="Write the documentation package in markdown",
    instructions=[
        "Write the implementation guide and the user guide",
        "Document every KPI definition and the data dictionary",
        "Write API documentation, troubleshooting guide and alert runbooks",
        "Prepare onboarding, training and maintenance materials",
    ],
    output_format="JSON with implementationGuide, userGuide, kpiDefinitions, apiDocumentation, troubleshootingGuide (markdown strings), artifacts",
    output_schema=obj(
        "implementationGuide", "userGuide", "kpiDefinitions", "dataDictionary",
        "apiDocumentation", "troubleshootingGuide", "alertRunbooks", "onboardingGuide",
        require=["implementationGuide", "userGuide", "kpiDefinitions", "apiDocumentation", "troubleshootingGuide"],
        trainingMaterials=strings(),
    ),
    labels=_labels("documentation"),
)

rollout_plan = agent_task(
    "rollout-plan",
    title=_title("Phase 11: Rollout and Adoption Plan"),
    agent="general-purpose",
    role="change management specialist and product operations lead with expertise in rollout planning",
    task="Plan the dashboard rollout and adoption",
    instructions=[
        "Stage the rollout from pilot through general availability",
        "Set the timeline and success criteria",
        "Plan communication, training, support and feedback",
        "Define adoption metrics and a rollback plan",
    ],
    output_format="JSON with rolloutPhases, timeline, successCriteria, adoptionMetrics, artifacts",
    output_schema=obj(
        require=["rolloutPhases", "timeline", "successCriteria", "adoptionMetrics"],
        rolloutPhases=array(obj(
            "duration", "audience",
            phaseName=enum("pilot", "beta", "limited-release", "general-availability"),
            exitCriteria=strings(),
        )),
        timeline=obj("start", "generalAvailability", milestones=strings()),
        communicationPlan=strings(),
        trainingAndEnablement=strings(),
        supportModel=obj("channel", "owner"),
        feedbackMechanisms=strings(),
        adoptionMetrics=array(obj("metric", "target")),
        successCriteria=strings(),
        rollbackPlan=obj("trigger", "procedure"),
    ),
    labels=_labels("rollout"),
)

TASKS = [
    kpi_identification,
    instrumentation_planning,
    dashboard_design,
    data_pipeline_setup,
    data_quality_framework,
    alert_configuration,
    implementation_spec,
    testing_plan,
    security_configuration,
    documentation,
    rollout_plan,
]

KPI_GATE = QualityGate(
    phase="kpi-identification",
    check=lambda result: bool(result["northStarMetric"].get("metric")) and len(result["kpis"]) > 0,
    error="KPI identification incomplete - North Star Metric or KPIs not defined",
    recommendation="Define a North Star Metric and at least one KPI before instrumentation",
    details={"dashboard": None},
)

DESIGN_GATE = QualityGate(
    phase="dashboard-design",
    check=lambda result: bool(result.get("layout")) and len(result["visualizations"]) > 0,
    error="Dashboard design incomplete",
    recommendation="Define a layout and at least one visualization",
    details={"dashboard": None},
)


def count_severity(alerts: List[Dict[str, Any]], severity: str) -> int:
    return sum(1 for alert in alerts if alert.get("severity") == severity)


def json_file(path: str) -> Dict[str, Any]:
    return {"path": path, "format": "json"}


# ============================================================================
# Process
# ============================================================================

@process_definition(
    process_id(SLUG),
    inputs=DashboardInputs,
    description="Product metrics dashboard setup from KPI framework to rollout",
    tasks=TASKS,
)
async def metrics_dashboard(inputs: Dict[str, Any], ctx: RunContext) -> Dict[str, Any]:
    cfg = DashboardInputs.from_mapping(inputs)
    start_time = ctx.now()
    product = cfg.product_name

    ctx.log("info", f"Starting Product Metrics Dashboard Setup for {product}")
    ctx.log("info", f"Dashboard Type: {cfg.dashboard_type}, Metrics Scope: {', '.join(cfg.metrics_scope)}")

    kpis_result = await ctx.task(kpi_identification, {
        "productName": product,
        "dashboardType": cfg.dashboard_type,
        "stakeholders": cfg.stakeholders,
        "metricsScope": cfg.metrics_scope,
        "existingMetrics": cfg.existing_metrics,
        "targetSegments": cfg.target_segments,
    })
    ctx.artifacts.collect(kpis_result)

    failure = KPI_GATE.evaluate(kpis_result)
    if failure:
        ctx.log("warn", f"Quality gate failed: {failure['error']}")
        return failure

    north_star = kpis_result["northStarMetric"]
    kpis = kpis_result["kpis"]

    await review(
        ctx,
        "KPI Framework Review",
        f'KPI framework identified with North Star Metric: "{north_star["metric"]}". '
        f"Review {len(kpis)} KPIs before proceeding with instrumentation?",
        {
            "productName": product,
            "dashboardType": cfg.dashboard_type,
            "northStarMetric": north_star,
            "kpiCategories": kpis_result["kpiCategories"],
            "kpiCount": len(kpis),
        },
        files=[json_file("artifacts/phase1-kpi-framework.json")],
    )

    instrumentation = await ctx.task(instrumentation_planning, {
        "productName": product,
        "kpis": kpis,
        "northStarMetric": north_star,
        "dataSources": cfg.data_sources,
        "existingMetrics": cfg.existing_metrics,
    })
    ctx.artifacts.collect(instrumentation)

    design = await ctx.task(dashboard_design, {
        "productName": product,
        "dashboardType": cfg.dashboard_type,
        "kpis": kpis,
        "northStarMetric": north_star,
        "stakeholders": cfg.stakeholders,
        "refreshFrequency": cfg.refresh_frequency,
    })
    ctx.artifacts.collect(design)

    failure = DESIGN_GATE.evaluate(design)
    if failure:
        ctx.log("warn", f"Quality gate failed: {failure['error']}")
        return failure

    sections = design["layout"]["sections"]
    visualizations = design["visualizations"]

    await review(
        ctx,
        "Dashboard Design Review",
        f"Dashboard design complete with {len(visualizations)} visualizations across {len(sections)} sections. "
        f"Review design before implementing data pipeline?",
        {
            "productName": product,
            "layoutType": design["layout"]["type"],
            "sectionCount": len(sections),
            "visualizationTypes": [v["visualizationType"] for v in visualizations],
        },
        files=[
            json_file("artifacts/phase3-dashboard-design.json"),
            {"path": "artifacts/phase3-dashboard-mockup.md", "format": "markdown"},
        ],
    )

    pipeline = await ctx.task(data_pipeline_setup, {
        "productName": product,
        "kpis": kpis,
        "instrumentation": instrumentation,
        "dataSources": cfg.data_sources,
        "refreshFrequency": cfg.refresh_frequency,
        "complianceRequirements": cfg.compliance_requirements,
    })
    ctx.artifacts.collect(pipeline)

    quality = await ctx.task(data_quality_framework, {
        "productName": product,
        "kpis": kpis,
        "dataPipeline": pipeline,
        "instrumentation": instrumentation,
    })
    ctx.artifacts.collect(quality)

    alerting = await ctx.task(alert_configuration, {
        "productName": product,
        "kpis": kpis,
        "northStarMetric": north_star,
        "alertThresholds": cfg.alert_thresholds,
        "stakeholders": cfg.stakeholders,
        "dashboardType": cfg.dashboard_type,
    })
    ctx.artifacts.collect(alerting)
    alerts = alerting["alerts"]
    critical_alerts = count_severity(alerts, "critical")

    # Advisory only: the run continues whatever the reviewer decides
    if critical_alerts == 0:
        ctx.log("warn", "No critical alerts configured")
        await review(
            ctx,
            "Alert Configuration Warning",
            "No critical alerts configured. This may result in missing important product issues. "
            "Continue without critical alerts?",
            {
                "totalAlerts": len(alerts),
                "criticalAlerts": critical_alerts,
                "recommendation": "Add critical alerts for North Star Metric and key business metrics",
            },
        )

    implementation = await ctx.task(implementation_spec, {
        "productName": product,
        "dashboardDesign": design,
        "dataPipeline": pipeline,
        "instrumentation": instrumentation,
        "dataQuality": quality,
        "alerts": alerting,
        "refreshFrequency": cfg.refresh_frequency,
    })
    ctx.artifacts.collect(implementation)

    testing = await ctx.task(testing_plan, {
        "productName": product,
        "kpis": kpis,
        "dashboard": design,
        "dataPipeline": pipeline,
        "alerts": alerting,
        "stakeholders": cfg.stakeholders,
    })
    ctx.artifacts.collect(testing)

    security = await ctx.task(security_configuration, {
        "productName": product,
        "dashboardType": cfg.dashboard_type,
        "stakeholders": cfg.stakeholders,
        "dataSources": cfg.data_sources,
        "complianceRequirements": cfg.compliance_requirements,
        "kpis": kpis,
    })
    ctx.artifacts.collect(security)

    docs = await ctx.task(documentation, {
        "productName": product,
        "dashboardType": cfg.dashboard_type,
        "kpiFramework": kpis_result,
        "dashboardDesign": design,
        "implementationSpec": implementation,
        "dataPipeline": pipeline,
        "alerts": alerting,
        "security": security,
        "stakeholders": cfg.stakeholders,
    })
    ctx.artifacts.collect(docs)

    rollout = await ctx.task(rollout_plan, {
        "productName": product,
        "dashboardType": cfg.dashboard_type,
        "stakeholders": cfg.stakeholders,
        "implementationSpec": implementation,
        "documentation": docs,
        "testingPlan": testing,
    })
    ctx.artifacts.collect(rollout)

    readiness_score = implementation["readinessScore"]
    implementation_ready = readiness_score >= READINESS_THRESHOLD

    await review(
        ctx,
        "Dashboard Setup Approval",
        f"Product Metrics Dashboard Setup Complete for {product}. Implementation Readiness: {readiness_score}/100. "
        f"{'Ready for implementation!' if implementation_ready else 'May need additional refinement.'} "
        f"Approve dashboard specification for implementation?",
        {
            "productName": product,
            "dashboardType": cfg.dashboard_type,
            "readinessScore": readiness_score,
            "implementationReady": implementation_ready,
            "northStarMetric": north_star["metric"],
            "kpiCount": len(kpis),
            "alertCount": len(alerts),
            "estimatedImplementationTime": implementation["estimatedImplementationTime"],
        },
        files=[
            json_file("artifacts/final-dashboard-specification.json"),
            {"path": "artifacts/final-implementation-guide.md", "format": "markdown"},
            {"path": "artifacts/final-user-guide.md", "format": "markdown"},
        ],
    )

    return finish(ctx, SLUG, start_time, {
        "success": True,
        "productName": product,
        "dashboardType": cfg.dashboard_type,
        "readinessScore": readiness_score,
        "implementationReady": implementation_ready,
        "northStarMetric": {
            "metric": north_star["metric"],
            "definition": north_star["definition"],
            "target": north_star["target"],
        },
        "kpis": {
            "total": len(kpis),
            "byCategory": kpis_result["kpiCategories"],
            "list": kpis,
        },
        "dashboard": {
            "layout": design["layout"],
            "visualizations": visualizations,
            "sections": len(sections),
            "refreshFrequency": cfg.refresh_frequency,
        },
        "instrumentation": {
            "eventsToTrack": len(instrumentation["eventsToTrack"]),
            "implementationApproach": instrumentation["implementationApproach"],
            "trackingPlan": instrumentation["trackingPlan"],
            "estimatedEffort": instrumentation["estimatedEffort"],
        },
        "dataPipeline": {
            "architecture": pipeline["architecture"],
            "dataSources": pipeline["dataSources"],
            "transformations": len(pipeline["transformations"]),
            "storageStrategy": pipeline["storageStrategy"],
            "refreshStrategy": pipeline["refreshStrategy"],
        },
        "dataQuality": {
            "validationRules": len(quality["validationRules"]),
            "qualityMonitoring": quality["qualityMonitoring"],
            "reconciliationProcess": quality["reconciliationProcess"],
        },
        "alerts": {
            "total": len(alerts),
            "critical": critical_alerts,
            "warning": count_severity(alerts, "warning"),
            "channels": alerting["notificationChannels"],
            "anomalyDetection": alerting["anomalyDetection"],
        },
        "implementation": {
            "estimatedTime": implementation["estimatedImplementationTime"],
            "technicalStack": implementation["technicalStack"],
            "dependencies": implementation["dependencies"],
            "phases": implementation["implementationPhases"],
        },
        "testing": {
            "testScenarios": len(testing["testScenarios"]),
            "validationCriteria": testing["validationCriteria"],
            "uatPlan": testing["uatPlan"],
        },
        "security": {
            "accessControl": security["accessControl"],
            "dataPrivacy": security["dataPrivacy"],
            "compliance": security["complianceControls"],
        },
        "documentation": {
            "implementationGuide": docs["implementationGuide"],
            "userGuide": docs["userGuide"],
            "apiDocs": docs["apiDocumentation"],
            "troubleshooting": docs["troubleshootingGuide"],
        },
        "rollout": {
            "phases": rollout["rolloutPhases"],
            "timeline": rollout["timeline"],
            "successCriteria": rollout["successCriteria"],
            "adoptionMetrics": rollout["adoptionMetrics"],
        },
    },
        dashboardType=cfg.dashboard_type,
        refreshFrequency=cfg.refresh_frequency,
        version="1.0.0",
    )
