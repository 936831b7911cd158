"""Tech stack scorer — catalog ratings to 0-10 scores, plus candidate filtering."""

import logging
from collections.abc import Mapping

from referee.data.tech_stacks import (
    COMMUNITY_SCORES,
    CRITERION_CONS,
    DEFAULT_TEAM_SIZE,
    ENTERPRISE_STACKS,
    FALLBACK_CONS,
    FRONTEND_TECHNOLOGIES,
    JOB_MARKET_SCORES,
    KEY_MILESTONES,
    LEARNING_CURVE_SCORES,
    STACK_CAVEATS,
    STRENGTH_SCENARIOS,
    TECH_STACKS,
    WEAKNESS_DESCRIPTIONS,
)
from referee.services.decision.config import decision_config
from referee.services.decision.models import (
    ComparisonResult,
    Constraints,
    EvaluatedOption,
    Option,
    RawScore,
)
from referee.services.scorers.base import DomainScorer, label, unique

logger = logging.getLogger(__name__)

cfg = decision_config.reports

RAPID_STRENGTHS = ("rapid_development", "rapid_prototyping")


def filter_stacks(requirements: Mapping) -> list[str]:
    """Catalog stack names suitable for the project requirements."""
    candidates = list(TECH_STACKS)

    project_type = requirements.get("projectType")
    if project_type == "api":
        # API-only projects skip stacks built around a frontend framework
        candidates = [
            name for name in candidates
            if not any(t in FRONTEND_TECHNOLOGIES for t in TECH_STACKS[name]["technologies"])
        ]
    elif project_type == "enterprise":
        candidates = [name for name in candidates if name in ENTERPRISE_STACKS]

    if requirements.get("teamExperience") == "beginner":
        candidates = [
            name for name in candidates
            if TECH_STACKS[name]["learning_curve"] in ("low", "medium")
        ]

    if requirements.get("timeline") == "urgent":
        candidates = [
            name for name in candidates
            if any(s in RAPID_STRENGTHS for s in TECH_STACKS[name]["strengths"])
        ]

    logger.debug(f"Stacks matching requirements: {candidates}")
    return candidates


def build_stack_options(names: list[str]) -> list[Option]:
    """Catalog entries as options; strengths double as the feature set."""
    options = []
    for name in names:
        entry = TECH_STACKS[name]
        options.append(Option.from_dict({
            "name": name,
            "features": list(entry["strengths"]),
            "technologies": list(entry["technologies"]),
            "strengths": list(entry["strengths"]),
            "weaknesses": list(entry["weaknesses"]),
            "learning_curve": entry["learning_curve"],
            "community_size": entry["community_size"],
            "job_market": entry["job_market"],
        }))
    return options


def key_factors(option: Option, requirements: Mapping) -> list[str]:
    """Requirement matches that explain why a stack was picked."""
    strengths = option.get("strengths") or ()
    factors = []
    if requirements.get("timeline") == "urgent" and "rapid_development" in strengths:
        factors.append("Rapid development capability matches urgent timeline")
    if requirements.get("teamExperience") == "beginner" and option.get("learning_curve") == "low":
        factors.append("Low learning curve suitable for beginner team")
    if requirements.get("budget") == "limited" and "cost_effective" in strengths:
        factors.append("Cost-effective solution fits budget constraints")
    return factors


def implementation_plan(option: Option, requirements: Mapping) -> dict:
    """Three-phase rollout plan for a stack; urgent timelines shorten core work."""
    urgent = requirements.get("timeline") == "urgent"
    technologies = ", ".join(option.get("technologies") or ())
    phases = [
        {
            "phase": 1,
            "name": "Environment Setup",
            "duration": "1-2 days",
            "tasks": [
                f"Install {technologies}",
                "Set up development environment",
                "Configure project structure",
                "Set up version control",
            ],
        },
        {
            "phase": 2,
            "name": "Core Development",
            "duration": "2-4 weeks" if urgent else "4-8 weeks",
            "tasks": [
                "Implement core functionality",
                "Set up database schema",
                "Create API endpoints",
                "Implement authentication",
            ],
        },
        {
            "phase": 3,
            "name": "Testing & Deployment",
            "duration": "1-2 weeks",
            "tasks": [
                "Write unit tests",
                "Set up CI/CD pipeline",
                "Deploy to staging",
                "Performance testing",
                "Production deployment",
            ],
        },
    ]
    return {
        "stack": option.name,
        "phases": phases,
        "totalEstimate": "4-7 weeks" if urgent else "6-12 weeks",
        "teamSize": requirements.get("teamSize") or DEFAULT_TEAM_SIZE,
        "keyMilestones": list(KEY_MILESTONES),
    }


class TechStackScorer(DomainScorer):
    default_criteria = (
        "development_speed",
        "performance",
        "scalability",
        "learning_curve",
        "community_support",
        "job_market",
        "maintenance_cost",
        "security",
    )

    async def score(self, option: Option, criterion: str, constraints: Constraints) -> RawScore:
        strengths = option.get("strengths") or ()
        weaknesses = option.get("weaknesses") or ()

        if criterion == "development_speed":
            if any(s in RAPID_STRENGTHS for s in strengths):
                return RawScore(8, "Excellent for rapid development")
            if "convention_over_config" in strengths:
                return RawScore(7, "Good development velocity")
            return RawScore(5, "Standard development speed")

        if criterion == "performance":
            if option.name == "Spring_Boot":
                return RawScore(8, "High performance JVM-based")
            if "performance" in weaknesses:
                return RawScore(4, "Known performance limitations")
            return RawScore(6, "Adequate performance")

        if criterion == "scalability":
            if "scalable" in strengths:
                return RawScore(8, "Designed for scale")
            if "monolithic" in weaknesses:
                return RawScore(5, "Monolithic architecture challenges")
            return RawScore(6, "Moderate scalability")

        if criterion == "learning_curve":
            curve = option.get("learning_curve")
            return RawScore(LEARNING_CURVE_SCORES.get(curve, 5), f"{curve} learning curve")

        if criterion == "community_support":
            size = option.get("community_size")
            return RawScore(COMMUNITY_SCORES.get(size, 5), f"{size} community")

        if criterion == "job_market":
            market = option.get("job_market")
            return RawScore(JOB_MARKET_SCORES.get(market, 5), f"{market} job market")

        if criterion == "maintenance_cost":
            if "cost_effective" in strengths:
                return RawScore(8, "Low maintenance costs")
            if "memory_intensive" in weaknesses:
                return RawScore(4, "Higher infrastructure costs")
            return RawScore(6, "Standard maintenance costs")

        if criterion == "security":
            if "secure" in strengths:
                return RawScore(8, "Strong security features")
            if "security_concerns" in weaknesses:
                return RawScore(4, "Requires careful security implementation")
            return RawScore(6, "Standard security practices needed")

        return RawScore(5, f"No tech stack heuristic for {criterion}, neutral score")

    def describe(self, evaluated: EvaluatedOption) -> dict:
        option = evaluated.option
        strengths = option.get("strengths") or ()
        weaknesses = option.get("weaknesses") or ()

        pros = [label(s) for s in strengths]
        pros.extend(
            f"Strong {label(criterion)}"
            for criterion, score in evaluated.scores.items()
            if score.available and score.raw >= cfg.strong_score
        )

        cons = [WEAKNESS_DESCRIPTIONS.get(w, label(w)) for w in weaknesses]
        cons.extend(STACK_CAVEATS.get(option.name, ()))
        cons.extend(
            CRITERION_CONS[criterion]
            for criterion, score in evaluated.scores.items()
            if score.raw <= cfg.weak_score and criterion in CRITERION_CONS
        )

        best_for = [scenario for strength, scenario in STRENGTH_SCENARIOS.items() if strength in strengths]
        if option.get("learning_curve") == "low":
            best_for.append("Teams new to web development")
        if option.get("job_market") == "excellent":
            best_for.append("Projects requiring easy hiring")

        return {
            "pros": unique(pros),
            "cons": unique(cons) or list(FALLBACK_CONS),
            "bestFor": best_for,
        }

    def report(self, result: ComparisonResult, context: Mapping) -> dict:
        sections: dict = {}
        choice = result.recommendation.choice
        if choice is not None:
            sections["recommendation"] = {"keyFactors": key_factors(choice.option, context)}
        planned = choice or (result.comparison[0] if result.comparison else None)
        if planned is not None:
            sections["implementationPlan"] = implementation_plan(planned.option, context)
        return sections
