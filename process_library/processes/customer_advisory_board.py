"""
Customer Advisory Board (CAB) setup: program charter, member selection,
program structure, meeting cadence, feedback mechanisms, value exchange,
onboarding, success metrics, launch plan, playbook and readiness validation.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..core.config import ProcessInputs, alias
from ..core.contracts import array, boolean, enum, mapping, number, obj, score, string, strings
from ..core.exceptions import ValidationError
from ..core.registry import process_definition
from ..core.run_context import RunContext
from ..core.task import agent_task
from .common import document, finish, process_id, review


SLUG = "customer-advisory-board"
READINESS_THRESHOLD = 85
COMPENSATION_MODELS = ("none", "monetary", "credits", "mixed")

PRIORITY = enum("critical", "high", "medium")
SEVERITY = enum("critical", "high", "medium", "low")


@dataclass
class CabInputs(ProcessInputs):
    product_name: str = ""
    program_goals: List[str] = field(default_factory=list)
    output_dir: str = "cab-output"
    board_size: int = 12
    customer_base: Dict[str, Any] = field(default_factory=dict)
    meeting_frequency: str = "quarterly"
    industry_focus: List[str] = field(default_factory=list)
    program_duration: str = "12 months"
    include_external_experts: bool = False
    require_nda: bool = alias("requireNDA", default=True)
    compensation_model: str = "mixed"
    virtual_meetings: bool = True
    executive_sponsor_required: bool = True

    def __post_init__(self):
        if self.compensation_model not in COMPENSATION_MODELS:
            raise ValidationError(
                "Unknown compensation model",
                field="compensationModel",
                value=self.compensation_model,
                context={"allowed": ", ".join(COMPENSATION_MODELS)},
            )
        if self.board_size < 1:
            raise ValidationError("Board size must be positive", field="boardSize", value=self.board_size)


def _labels(*extra: str) -> List[str]:
    return [SLUG, *extra]


# ============================================================================
# Task definitions
# ============================================================================

charter_definition = agent_task(
    "cab-charter-definition",
    title="Define CAB purpose and charter",
    agent="cab-strategist",
    role="customer advisory board strategist and program design expert",
    task="Define the Customer Advisory Board charter and program purpose",
    instructions=[
        "State why the board exists, its strategic value to the company and its value to members",
        "Describe the program vision and the impact it should have on product and customers",
        "List program objectives, each with concrete expected outcomes and a priority",
        "Define what the board covers and what it explicitly does not",
        "Set guiding principles such as confidentiality, candour and diverse perspectives",
        "Describe executive sponsorship when a sponsor is required",
        "Record the program commitment: duration, meeting frequency and expected time",
        "Align the charter with the supplied program goals and save it to the output directory",
    ],
    output_format="JSON with charter (purpose, vision, objectives, scope, principles, successCriteria, sponsorship, programCommitment), artifacts",
    output_schema=obj(
        require=["charter"],
        charter=obj(
            "purpose", "vision",
            require=["purpose", "objectives", "scope"],
            objectives=array(obj("objective", outcomes=strings(), priority=PRIORITY)),
            scope=obj(inScope=strings(), outOfScope=strings()),
            principles=strings(),
            successCriteria=strings(),
            sponsorship=obj("role", required=boolean(), responsibilities=strings()),
            programCommitment=obj("duration", "frequency", "timeCommitment"),
        ),
    ),
    labels=_labels("charter"),
)

member_selection_criteria = agent_task(
    "member-selection-criteria",
    title="Establish member selection criteria",
    agent="selection-strategist",
    role="customer engagement specialist and board composition expert",
    task="Define member selection criteria and the selection process",
    instructions=[
        "Define criteria for customer profile, industry and market, role and expertise, and engagement",
        "Define diversity dimensions with target distributions and rationale",
        "Include external experts such as analysts or researchers only when requested",
        "Describe nomination, evaluation, approval and invitation steps with owners",
        "Create a scoring rubric with category weights and a passing score",
        "List minimum and preferred qualifications and any disqualifiers",
        "Save the criteria and process to the output directory",
    ],
    output_format="JSON with criteria, diversityDimensions, scoringRubric, processSteps, qualifications, artifacts",
    output_schema=obj(
        require=["criteria", "diversityDimensions", "scoringRubric", "processSteps"],
        criteria=array(obj("category", "criterion", "evaluationMethod", weight=number())),
        diversityDimensions=array(obj("dimension", "targetDistribution", "rationale")),
        scoringRubric=obj(
            totalScore=number(),
            categories=array(obj("category", maxScore=number(), weight=number())),
            passingScore=number(),
        ),
        processSteps=array(obj("step", "description", "owner", "timeline")),
        qualifications=obj(minimum=strings(), preferred=strings(), disqualifiers=strings()),
    ),
    labels=_labels("selection-criteria"),
)

member_profile_development = agent_task(
    "member-profile-development",
    title="Develop ideal member profiles",
    agent="profile-architect",
    role="customer segmentation expert and persona developer",
    task="Create ideal member profile archetypes for board composition",
    instructions=[
        "Create member archetypes that together cover the selection criteria",
        "For each archetype describe company profile, role, usage patterns and the perspective it brings",
        "Assign each archetype a priority and a target seat count",
        "Build a composition matrix distributing the board seats across archetypes",
        "Describe how to identify candidates for each archetype and from which sources",
        "Save the profiles to the output directory",
    ],
    output_format="JSON with profiles, compositionMatrix, identificationStrategies, artifacts",
    output_schema=obj(
        require=["profiles", "compositionMatrix", "identificationStrategies"],
        profiles=array(obj(
            "archetype", "description", "roleTitle", "perspectiveRepresented",
            require=["archetype", "priority"],
            companyProfile=obj("sizeRange", industries=strings()),
            usagePatterns=strings(),
            characteristics=strings(),
            valueToCAB=strings(),
            priority=PRIORITY,
            targetCount=number(),
        )),
        compositionMatrix=obj(
            "balanceRationale",
            totalSeats=number(),
            distribution=array(obj("archetype", seats=number(), percentage=number())),
        ),
        identificationStrategies=array(obj("archetype", "strategy", sources=strings())),
    ),
    labels=_labels("member-profiles"),
)

recruitment_process = agent_task(
    "recruitment-process",
    title="Design recruitment and nomination process",
    agent="recruitment-coordinator",
    role="customer program manager and recruitment specialist",
    task="Design the end-to-end recruitment and nomination process",
    instructions=[
        "Lay out phases from candidate identification through screening, nomination, review, invitation and acceptance",
        "Provide nomination, invitation and agreement templates (include an NDA when required)",
        "Define the review committee, its voting process and quorum",
        "Set a recruitment timeline with milestones",
        "Plan for declined invitations with a backup approach",
        "Save the recruitment process and templates to the output directory",
    ],
    output_format="JSON with processPhases, templates, reviewCommittee, timeline, contingencyPlan, artifacts",
    output_schema=obj(
        require=["processPhases", "templates", "reviewCommittee", "timeline"],
        processPhases=array(obj("phase", "description", "owner", "duration", activities=strings())),
        templates=array(obj("templateName", "purpose", "templatePath")),
        reviewCommittee=obj("votingProcess", "quorum", roles=strings()),
        timeline=obj("totalDuration", milestones=array(obj("milestone", "timing"))),
        contingencyPlan=obj("acceptanceRate", "backupPlan", rollingRecruitment=boolean()),
    ),
    labels=_labels("recruitment"),
)

program_structure = agent_task(
    "program-structure",
    title="Design program structure and governance",
    agent="program-architect",
    role="program management expert and organizational designer",
    task="Design the program structure and governance model",
    instructions=[
        "Define governance roles such as executive sponsor, program manager and chair, with responsibilities",
        "Describe how decisions are made and escalated",
        "Define meeting types with frequency, duration, format, participants and purpose",
        "Account for virtual meetings when they are enabled",
        "List communication channels and their purpose",
        "Define member terms, renewal and rotation policy",
        "Save the program structure to the output directory",
    ],
    output_format="JSON with governance, meetingStructure, communicationChannels, workingGroups, termStructure, rolesResponsibilities, artifacts",
    output_schema=obj(
        require=["governance", "meetingStructure", "communicationChannels", "termStructure"],
        governance=obj(
            "decisionMaking",
            require=["roles"],
            roles=array(obj("role", "timeCommitment", responsibilities=strings())),
        ),
        meetingStructure=obj(
            require=["meetingTypes"],
            meetingTypes=array(obj("type", "frequency", "duration", "format", "participants", "purpose")),
        ),
        communicationChannels=array(obj("channel", "purpose", "frequency")),
        workingGroups=obj("structure", enabled=boolean(), examples=strings()),
        termStructure=obj("initialTerm", "renewalProcess", "rotationPolicy", emeritusStatus=boolean()),
        rolesResponsibilities=obj(memberExpectations=strings(), companyCommitments=strings()),
    ),
    labels=_labels("program-structure"),
)

meeting_cadence = agent_task(
    "meeting-cadence",
    title="Establish meeting cadence and agenda framework",
    agent="meeting-planner",
    role="program coordinator and meeting facilitation expert",
    task="Design the meeting cadence and agenda templates",
    instructions=[
        "Derive the number of meetings per year from the meeting frequency",
        "Build an annual calendar with a theme and format for each meeting",
        "Create an agenda template for each meeting type with timed sections",
        "Define how materials and pre-reads are prepared and delivered",
        "Define follow-up: meeting summaries, action tracking and closing the feedback loop",
        "Save the cadence and agenda templates to the output directory",
    ],
    output_format="JSON with annualMeetings (number), annualCalendar, agendaTemplates, preparationProcess, followUpProcess, artifacts",
    output_schema=obj(
        require=["annualMeetings", "annualCalendar", "agendaTemplates", "preparationProcess", "followUpProcess"],
        annualMeetings=number(minimum=0),
        annualCalendar=array(obj("type", "timing", "theme", "format", meetingNumber=number())),
        agendaTemplates=array(obj(
            "meetingType", "duration", "templatePath",
            sections=array(obj("section", "duration", "purpose", "facilitator")),
        )),
        preparationProcess=obj("preReadLeadTime", materialsProvided=strings(), memberPreparation=strings()),
        followUpProcess=obj("summaryDelivery", "actionItemTracking", "feedbackLoop", "youSaidWeDidCadence"),
    ),
    labels=_labels("meeting-cadence"),
)

feedback_mechanisms = agent_task(
    "feedback-mechanisms",
    title="Design feedback mechanisms and input channels",
    agent="feedback-architect",
    role="customer experience expert and feedback systems designer",
    task="Design feedback mechanisms and input channels",
    instructions=[
        "Define synchronous and asynchronous feedback mechanisms with format, frequency and purpose",
        "Describe how feedback is collected, categorized, prioritized, routed and tracked",
        "Describe how members learn what happened to their input",
        "Define metrics for the effectiveness of the feedback loop",
        "Save the feedback design to the output directory",
    ],
    output_format="JSON with mechanisms, intakeProcess, closureProcess, effectivenessMetrics, artifacts",
    output_schema=obj(
        require=["mechanisms", "intakeProcess", "closureProcess", "effectivenessMetrics"],
        mechanisms=array(obj(
            "format", "purpose", "responseTime", "processingMethod",
            "type", "frequency",
            require=["type", "frequency"],
        )),
        intakeProcess=obj("prioritization", "routing", "tracking", collection=strings(), categorization=strings()),
        closureProcess=obj("acknowledgment", "statusUpdates", "youSaidWeDidFormat", "cadence"),
        effectivenessMetrics=array(obj("metric", "target", "measurement")),
    ),
    labels=_labels("feedback-mechanisms"),
)

value_exchange = agent_task(
    "value-exchange",
    title="Define value exchange and member benefits",
    agent="value-strategist",
    role="customer success expert and partnership strategist",
    task="Design the value exchange and member benefits framework",
    instructions=[
        "List member benefits: influence, early access, networking, development and service benefits",
        "Describe compensation according to the requested compensation model",
        "Estimate the annual time commitment for members with a breakdown",
        "Estimate the company's annual investment with a breakdown",
        "Define how members are recognised",
        "Save the value exchange framework to the output directory",
    ],
    output_format="JSON with memberBenefits, compensationDetails, timeCommitment, companyInvestment, recognitionProgram, artifacts",
    output_schema=obj(
        require=["memberBenefits", "compensationDetails", "timeCommitment", "companyInvestment"],
        memberBenefits=array(obj("category", "value", benefits=strings())),
        compensationDetails=obj("model", "structure", "annualValue", "paymentSchedule"),
        timeCommitment=obj("annualHours", breakdown=obj("meetings", "preparation", "adHoc")),
        companyInvestment=obj(
            "totalAnnual",
            breakdown=obj("compensation", "programManagement", "events", "technology", "other"),
        ),
        recognitionProgram=obj("appreciationEvents", elements=strings(), publicRecognition=boolean()),
    ),
    labels=_labels("value-exchange"),
)

communication_plan = agent_task(
    "communication-plan",
    title="Develop communication and engagement plan",
    agent="communications-manager",
    role="customer communications strategist and engagement expert",
    task="Create the communication and engagement plan",
    instructions=[
        "Define regular communications with frequency, purpose and owner",
        "Choose communication channels and mark the primary ones",
        "List content types and engagement tactics between meetings",
        "Build a communication calendar with key milestones",
        "Provide templates for recurring communications",
        "Save the communication plan to the output directory",
    ],
    output_format="JSON with regularCommunications, channels, contentTypes, engagementTactics, communicationCalendar, templates, artifacts",
    output_schema=obj(
        require=["regularCommunications", "channels", "contentTypes", "engagementTactics", "communicationCalendar"],
        regularCommunications=array(obj("type", "frequency", "purpose", "owner")),
        channels=array(obj("channel", primary=boolean(), useCases=strings())),
        contentTypes=array(obj("content", "frequency", "format")),
        engagementTactics=array(obj("tactic", "purpose", "frequency")),
        communicationCalendar=obj(annualPlan=strings(), keyMilestones=strings()),
        templates=array(obj("template", "purpose")),
    ),
    labels=_labels("communications"),
)

onboarding_program = agent_task(
    "onboarding-program",
    title="Design onboarding and orientation program",
    agent="onboarding-specialist",
    role="customer success manager and onboarding expert",
    task="Create the onboarding and orientation program for new board members",
    instructions=[
        "Define onboarding phases from acceptance to first meeting with activities and owners",
        "List welcome materials including any NDA paperwork when required",
        "Set an onboarding timeline with milestones and an overall duration",
        "Draft the orientation session agenda",
        "Define how onboarding success is measured",
        "Save the onboarding program to the output directory",
    ],
    output_format="JSON with phases, materials, timeline, orientationAgenda, duration, successCriteria, artifacts",
    output_schema=obj(
        "duration",
        require=["phases", "materials", "timeline", "orientationAgenda", "duration"],
        phases=array(obj("phase", "timing", "owner", activities=strings())),
        materials=array(obj("material", "format", "deliveryTiming")),
        timeline=obj("duration", milestones=array(obj("milestone", "timing"))),
        orientationAgenda=obj("duration", sections=array(obj("topic", "duration", "presenter"))),
        successCriteria=array(obj("criterion", "measurement")),
    ),
    labels=_labels("onboarding"),
)

success_metrics = agent_task(
    "success-metrics",
    title="Define success metrics and measurement framework",
    agent="metrics-analyst",
    role="program analytics expert and success measurement specialist",
    task="Define success metrics and the measurement framework for the program",
    instructions=[
        "Define engagement, input quality, impact, satisfaction and relationship metrics",
        "For each metric give a definition, measurement method, baseline, target, frequency and owner",
        "Tie targets back to the program goals",
        "Set the monthly, quarterly and annual review cadence",
        "Describe the metrics dashboard and how it is distributed",
        "Save the metrics framework to the output directory",
    ],
    output_format="JSON with metrics, targets, reviewCadence, dashboard, continuousImprovement, artifacts",
    output_schema=obj(
        require=["metrics", "targets", "reviewCadence", "dashboard"],
        metrics=array(obj(
            "category", "metric", "definition", "measurementMethod",
            "baseline", "target", "frequency", "owner",
        )),
        targets=obj(engagement=mapping(), satisfaction=mapping(), impact=mapping()),
        reviewCadence=obj("monthly", "quarterly", "annual"),
        dashboard=obj("format", "distribution", keyMetrics=strings()),
        continuousImprovement=obj("reviewFrequency", process=strings()),
    ),
    labels=_labels("metrics"),
)

launch_plan = agent_task(
    "launch-plan",
    title="Create program launch plan",
    agent="launch-coordinator",
    role="program launch specialist and project manager",
    task="Create the program launch plan",
    instructions=[
        "Define launch phases with duration, key activities, deliverables and gate checks",
        "Build a launch timeline with dated milestones and owners",
        "Set launch success criteria",
        "List launch risks with impact and mitigation",
        "Produce a launch checklist and propose the first meeting date",
        "Save the launch plan to the output directory",
    ],
    output_format="JSON with phases, timeline, successCriteria, risks, responsibilities, checklist, firstMeetingDate, artifacts",
    output_schema=obj(
        "firstMeetingDate",
        require=["phases", "timeline", "successCriteria", "checklist", "firstMeetingDate"],
        phases=array(obj("phase", "duration", keyActivities=strings(), deliverables=strings(), gateChecks=strings())),
        timeline=obj("totalDuration", milestones=array(obj("milestone", "date", "owner"))),
        successCriteria=array(obj("criterion", "target")),
        risks=array(obj("risk", "impact", "mitigation")),
        responsibilities=array(obj("role", "owner", responsibilities=strings())),
        checklist=array(obj("item", "phase", status=enum("not-started", "in-progress", "completed"))),
    ),
    labels=_labels("launch-plan"),
)

program_playbook = agent_task(
    "program-playbook",
    title="Assemble comprehensive CAB program playbook",
    agent="playbook-author",
    role="program documentation expert and operational guide writer",
    task="Compile the program playbook",
    instructions=[
        "Write a playbook covering charter, selection, structure, meetings, feedback, value exchange, communications, onboarding, metrics and launch",
        "Open with an executive summary and a table of contents",
        "Keep it operational: who does what, when",
        "Include the templates and tools produced earlier as appendices",
        "Save the playbook as markdown to the output directory and report its path",
    ],
    output_format="JSON with playbook (full markdown), playbookPath, tableOfContents, sectionSummary, artifacts",
    output_schema=obj(
        "playbook", "playbookPath",
        require=["playbook", "playbookPath", "tableOfContents"],
        tableOfContents=array(obj("section", subsections=strings())),
        sectionSummary=array(obj("section", pageCount=number())),
        totalPages=number(),
    ),
    labels=_labels("documentation", "playbook"),
)

program_validation = agent_task(
    "program-validation",
    title="Validate program design and readiness",
    agent="program-validator",
    role="customer advisory board expert and program quality auditor",
    task="Validate program design quality, completeness and launch readiness",
    instructions=[
        "Score strategic alignment, member selection, structure, engagement design, value exchange, operational readiness and metrics",
        "Compute an overall readiness score from 0 to 100",
        "List strengths and gaps, rating each gap's severity",
        "Give prioritized recommendations with effort estimates",
        "Assess launch readiness per phase and list blockers",
        "Save the validation report to the output directory and report its path",
    ],
    output_format="JSON with readinessScore (0-100), dimensionScores, strengths, gaps, recommendations, launchReadiness, reportPath, artifacts",
    output_schema=obj(
        "reportPath",
        require=["readinessScore", "dimensionScores", "strengths", "gaps", "recommendations", "launchReadiness", "reportPath"],
        readinessScore=score(),
        dimensionScores=obj(**{name: number() for name in (
            "strategicAlignment", "memberSelection", "programStructure", "engagementDesign",
            "valueExchange", "operationalReadiness", "successMetrics",
        )}),
        strengths=strings(),
        gaps=array(obj("gap", "impact", severity=SEVERITY)),
        recommendations=array(obj("recommendation", priority=SEVERITY, effort=enum("low", "medium", "high"))),
        launchReadiness=obj(
            "assessment",
            ready=boolean(),
            blockers=strings(),
            phaseReadiness=obj(**{name: boolean() for name in (
                "preparation", "recruitment", "onboarding", "firstMeeting",
            )}),
        ),
    ),
    labels=_labels("validation", "quality"),
)

TASKS = [
    charter_definition,
    member_selection_criteria,
    member_profile_development,
    recruitment_process,
    program_structure,
    meeting_cadence,
    feedback_mechanisms,
    value_exchange,
    communication_plan,
    onboarding_program,
    success_metrics,
    launch_plan,
    program_playbook,
    program_validation,
]


# ============================================================================
# Process
# ============================================================================

@process_definition(
    process_id(SLUG),
    inputs=CabInputs,
    description="Customer Advisory Board setup: charter, membership, structure, engagement, launch and readiness",
    tasks=TASKS,
)
async def customer_advisory_board(inputs: Dict[str, Any], ctx: RunContext) -> Dict[str, Any]:
    cfg = CabInputs.from_mapping(inputs)
    start_time = ctx.now()

    ctx.log("info", f"Starting Customer Advisory Board (CAB) Setup for: {cfg.product_name}")
    ctx.log("info", f"Board size: {cfg.board_size}, Meeting frequency: {cfg.meeting_frequency}")

    # Phase 1: charter
    ctx.log("info", "Phase 1: Defining CAB purpose and charter")
    charter_result = await ctx.task(charter_definition, {
        "productName": cfg.product_name,
        "programGoals": cfg.program_goals,
        "boardSize": cfg.board_size,
        "meetingFrequency": cfg.meeting_frequency,
        "programDuration": cfg.program_duration,
        "executiveSponsorRequired": cfg.executive_sponsor_required,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(charter_result)
    charter = charter_result["charter"]
    ctx.log("info", f"CAB charter created with {len(charter['objectives'])} objectives")

    # Phase 2: selection criteria
    ctx.log("info", "Phase 2: Establishing member selection criteria and process")
    selection = await ctx.task(member_selection_criteria, {
        "productName": cfg.product_name,
        "programCharter": charter,
        "boardSize": cfg.board_size,
        "customerBase": cfg.customer_base,
        "industryFocus": cfg.industry_focus,
        "includeExternalExperts": cfg.include_external_experts,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(selection)
    ctx.log("info", f"Selection criteria defined with {len(selection['criteria'])} key criteria")

    await review(
        ctx,
        "CAB Foundation Review",
        f"CAB charter and member selection criteria complete. Board size: {cfg.board_size} members, "
        f"{len(selection['diversityDimensions'])} diversity dimensions. Review before member identification?",
        {
            "programPurpose": charter["purpose"],
            "boardSize": cfg.board_size,
            "meetingFrequency": cfg.meeting_frequency,
            "criteriaCount": len(selection["criteria"]),
        },
    )

    # Phase 3: member profiles
    ctx.log("info", "Phase 3: Developing ideal member profiles")
    profiles = await ctx.task(member_profile_development, {
        "productName": cfg.product_name,
        "programCharter": charter,
        "selectionCriteria": selection,
        "boardSize": cfg.board_size,
        "customerBase": cfg.customer_base,
        "industryFocus": cfg.industry_focus,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(profiles)
    ctx.log("info", f"Created {len(profiles['profiles'])} member profile archetypes")

    # Phase 4: recruitment
    ctx.log("info", "Phase 4: Designing recruitment and nomination process")
    recruitment = await ctx.task(recruitment_process, {
        "productName": cfg.product_name,
        "programCharter": charter,
        "selectionCriteria": selection,
        "memberProfiles": profiles["profiles"],
        "customerBase": cfg.customer_base,
        "requireNDA": cfg.require_nda,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(recruitment)

    # Phase 5: structure and governance
    ctx.log("info", "Phase 5: Designing program structure and governance")
    structure = await ctx.task(program_structure, {
        "productName": cfg.product_name,
        "programCharter": charter,
        "boardSize": cfg.board_size,
        "meetingFrequency": cfg.meeting_frequency,
        "programDuration": cfg.program_duration,
        "executiveSponsorRequired": cfg.executive_sponsor_required,
        "virtualMeetings": cfg.virtual_meetings,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(structure)
    meeting_structure = structure["meetingStructure"]
    governance_roles = structure["governance"]["roles"]
    ctx.log("info", f"Program structure created with {len(meeting_structure['meetingTypes'])} meeting types")

    await review(
        ctx,
        "Program Structure Review",
        f"Program structure and governance designed. {len(meeting_structure['meetingTypes'])} meeting types, "
        f"{len(governance_roles)} governance roles. Review structure?",
        {
            "meetingFrequency": cfg.meeting_frequency,
            "meetingTypes": len(meeting_structure["meetingTypes"]),
            "governanceRoles": len(governance_roles),
            "virtualMeetings": cfg.virtual_meetings,
        },
    )

    # Phase 6: meeting cadence
    ctx.log("info", "Phase 6: Establishing meeting cadence and agenda framework")
    cadence = await ctx.task(meeting_cadence, {
        "productName": cfg.product_name,
        "programCharter": charter,
        "meetingFrequency": cfg.meeting_frequency,
        "programDuration": cfg.program_duration,
        "meetingStructure": meeting_structure,
        "virtualMeetings": cfg.virtual_meetings,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(cadence)
    ctx.log("info", f"Meeting cadence established: {cadence['annualMeetings']} meetings per year")

    # Phase 7: feedback mechanisms
    ctx.log("info", "Phase 7: Designing feedback mechanisms and input channels")
    feedback = await ctx.task(feedback_mechanisms, {
        "productName": cfg.product_name,
        "programCharter": charter,
        "boardSize": cfg.board_size,
        "meetingCadence": cadence,
        "virtualMeetings": cfg.virtual_meetings,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(feedback)
    mechanisms = feedback["mechanisms"]
    ctx.log("info", f"Created {len(mechanisms)} feedback mechanisms")

    # Phase 8: value exchange
    ctx.log("info", "Phase 8: Defining value exchange and member benefits")
    value = await ctx.task(value_exchange, {
        "productName": cfg.product_name,
        "programCharter": charter,
        "boardSize": cfg.board_size,
        "compensationModel": cfg.compensation_model,
        "meetingCadence": cadence,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(value)
    ctx.log("info", f"Value exchange framework created with {len(value['memberBenefits'])} member benefits")

    await review(
        ctx,
        "Engagement Framework Review",
        f"Feedback mechanisms ({len(mechanisms)}) and value exchange framework complete. "
        f"Compensation model: {cfg.compensation_model}. Review engagement approach?",
        {
            "feedbackMechanisms": len(mechanisms),
            "memberBenefits": len(value["memberBenefits"]),
            "compensationModel": cfg.compensation_model,
            "timeCommitment": value["timeCommitment"],
        },
    )

    # Phase 9: communications
    ctx.log("info", "Phase 9: Developing communication and engagement plan")
    communications = await ctx.task(communication_plan, {
        "productName": cfg.product_name,
        "programCharter": charter,
        "boardSize": cfg.board_size,
        "meetingCadence": cadence,
        "feedbackMechanisms": feedback,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(communications)

    # Phase 10: onboarding
    ctx.log("info", "Phase 10: Designing onboarding and orientation program")
    onboarding = await ctx.task(onboarding_program, {
        "productName": cfg.product_name,
        "programCharter": charter,
        "programStructure": structure,
        "valueExchange": value,
        "requireNDA": cfg.require_nda,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(onboarding)

    # Phase 11: success metrics
    ctx.log("info", "Phase 11: Defining success metrics and measurement framework")
    metrics = await ctx.task(success_metrics, {
        "productName": cfg.product_name,
        "programCharter": charter,
        "programGoals": cfg.program_goals,
        "boardSize": cfg.board_size,
        "meetingCadence": cadence,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(metrics)
    ctx.log("info", f"Defined {len(metrics['metrics'])} success metrics")

    # Phase 12: launch plan
    ctx.log("info", "Phase 12: Creating program launch plan")
    launch = await ctx.task(launch_plan, {
        "productName": cfg.product_name,
        "programCharter": charter,
        "recruitmentProcess": recruitment,
        "onboardingProgram": onboarding,
        "meetingCadence": cadence,
        "communicationPlan": communications,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(launch)

    # Phase 13: playbook
    ctx.log("info", "Phase 13: Assembling comprehensive CAB program playbook")
    playbook = await ctx.task(program_playbook, {
        "productName": cfg.product_name,
        "programCharter": charter,
        "selectionCriteria": selection,
        "memberProfiles": profiles["profiles"],
        "programStructure": structure,
        "meetingCadence": cadence,
        "feedbackMechanisms": feedback,
        "valueExchange": value,
        "communicationPlan": communications,
        "onboardingProgram": onboarding,
        "successMetrics": metrics,
        "launchPlan": launch,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(playbook)

    # Phase 14: validation
    ctx.log("info", "Phase 14: Validating program design and readiness")
    validation = await ctx.task(program_validation, {
        "productName": cfg.product_name,
        "programPlaybook": playbook["playbook"],
        "programCharter": charter,
        "programStructure": structure,
        "selectionCriteria": selection,
        "valueExchange": value,
        "outputDir": cfg.output_dir,
    })
    ctx.artifacts.collect(validation)

    readiness_score = validation["readinessScore"]
    program_ready = readiness_score >= READINESS_THRESHOLD

    await review(
        ctx,
        "CAB Program Readiness Review",
        f"CAB program design complete. Readiness score: {readiness_score}/100. "
        f"{'Ready to launch!' if program_ready else 'May need adjustments before launch.'} Review complete program?",
        {
            "readinessScore": readiness_score,
            "programReady": program_ready,
            "boardSize": cfg.board_size,
            "meetingFrequency": cfg.meeting_frequency,
            "compensationModel": cfg.compensation_model,
            "totalArtifacts": len(ctx.artifacts),
        },
        files=[
            document(playbook["playbookPath"], "CAB Program Playbook"),
            document(validation["reportPath"], "Program Validation Report"),
        ],
    )

    return finish(ctx, SLUG, start_time, {
        "success": True,
        "productName": cfg.product_name,
        "programCharter": {
            "purpose": charter["purpose"],
            "objectives": len(charter["objectives"]),
            "scope": charter["scope"],
        },
        "selectionCriteria": {
            "criteria": len(selection["criteria"]),
            "diversityDimensions": len(selection["diversityDimensions"]),
            "selectionProcess": selection["processSteps"],
        },
        "memberProfiles": [
            {"archetype": p["archetype"], "priority": p["priority"]}
            for p in profiles["profiles"]
        ],
        "programStructure": {
            "boardSize": cfg.board_size,
            "meetingFrequency": cfg.meeting_frequency,
            "programDuration": cfg.program_duration,
            "governance": len(governance_roles),
        },
        "meetingStructure": {
            "annualMeetings": cadence["annualMeetings"],
            "meetingTypes": len(meeting_structure["meetingTypes"]),
            "agendaTemplates": len(cadence["agendaTemplates"]),
        },
        "feedbackMechanisms": [
            {"type": m["type"], "frequency": m["frequency"]} for m in mechanisms
        ],
        "valueExchange": {
            "compensationModel": cfg.compensation_model,
            "memberBenefits": len(value["memberBenefits"]),
            "timeCommitment": value["timeCommitment"],
            "companyInvestment": value["companyInvestment"],
        },
        "onboarding": {
            "phases": len(onboarding["phases"]),
            "duration": onboarding["duration"],
        },
        "successMetrics": {
            "metrics": len(metrics["metrics"]),
            "reviewCadence": metrics["reviewCadence"],
        },
        "launchPlan": {
            "phases": len(launch["phases"]),
            "launchTimeline": launch["timeline"],
            "firstMeetingDate": launch["firstMeetingDate"],
        },
        "readinessScore": readiness_score,
        "programReady": program_ready,
        "playbookPath": playbook["playbookPath"],
    },
        outputDir=cfg.output_dir,
        boardSize=cfg.board_size,
        meetingFrequency=cfg.meeting_frequency,
        compensationModel=cfg.compensation_model,
    )
