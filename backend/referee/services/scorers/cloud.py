"""Cloud cost scorer — provider profiles and rate tables to 0-10 scores."""

import logging
from collections.abc import Mapping
from dataclasses import replace

from referee.data.cloud_providers import (
    COMPLIANCE_USE_CASES,
    COST_BREAKDOWN,
    DEFAULT_HOURLY_RATE,
    DEFAULT_USAGE_HOURS,
    FALLBACK_WEAKNESSES,
    HOURLY_RATES,
    LOCK_IN_BANDS,
    LOW_LOCK_IN,
    MIGRATION_RECOMMENDATIONS,
    MITIGATION_STRATEGIES,
    PROVIDER_CAVEATS,
    PROVIDER_COMPLIANCE,
    PROVIDER_FEATURES,
    PROVIDER_PERFORMANCE,
    PROVIDER_PORTABILITY,
    PROVIDER_PROFILES,
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

DEFAULT_PORTABILITY = 6


def estimate_cost(provider: str, service_type: str, usage_hours: float) -> dict:
    """Monthly/yearly cost estimate from the hourly rate table."""
    rate = HOURLY_RATES.get(service_type, {}).get(provider.lower(), DEFAULT_HOURLY_RATE)
    monthly = rate * usage_hours
    return {
        "monthly": monthly,
        "yearly": monthly * 12,
        "breakdown": {part: monthly * share for part, share in COST_BREAKDOWN.items()},
    }


def monthly_cost(option: Option) -> float:
    estimated = option.get("estimated_cost")
    if isinstance(estimated, Mapping) and "monthly" in estimated:
        return estimated["monthly"]
    return option.cost or 0.0


def lock_in_band(raw: float) -> tuple[str, str]:
    """(risk level, migration time estimate) for a vendor_lock_in score."""
    return next(((risk, time) for bound, risk, time in LOCK_IN_BANDS if raw < bound), LOW_LOCK_IN)


def _lock_in_raw(evaluated: EvaluatedOption) -> float:
    score = evaluated.scores.get("vendor_lock_in")
    if score is not None and score.available:
        return score.raw
    return PROVIDER_PORTABILITY.get(str(evaluated.option.get("provider") or ""), DEFAULT_PORTABILITY)


def _at_least(evaluated: EvaluatedOption, criterion: str, threshold: float) -> bool:
    score = evaluated.scores.get(criterion)
    return score is not None and score.available and score.raw >= threshold


class CloudCostScorer(DomainScorer):
    """Scores cloud services from static provider data.

    enrich() sets the option's cost to the monthly estimate and its features
    to the provider's services plus compliance certifications, so the
    generic maxCost / requiredFeatures constraints cover budget and
    compliance requirements.
    """

    default_criteria = (
        "cost_efficiency",
        "performance",
        "scalability",
        "reliability",
        "ease_of_use",
        "feature_completeness",
        "vendor_lock_in",
    )

    async def enrich(self, option: Option) -> Option:
        provider = str(option.get("provider") or "")
        if provider not in PROVIDER_PROFILES:
            logger.info(f"No profile for provider {provider!r}, using defaults")

        usage = option.get("estimatedUsage") or DEFAULT_USAGE_HOURS
        estimated = estimate_cost(provider, option.get("type") or "compute", usage)
        services = list(PROVIDER_FEATURES.get(provider, ()))
        compliance = list(PROVIDER_COMPLIANCE.get(provider, ()))

        enriched = option.with_attributes(
            estimated_cost=estimated,
            services=services,
            compliance=compliance,
        )
        return replace(
            enriched,
            cost=estimated["monthly"],
            features=tuple(services + compliance),
        )

    async def score(self, option: Option, criterion: str, constraints: Constraints) -> RawScore:
        provider = str(option.get("provider") or "")
        profile = PROVIDER_PROFILES.get(provider, {})
        strengths = profile.get("strengths", ())
        weaknesses = profile.get("weaknesses", ())

        if criterion == "cost_efficiency":
            monthly = monthly_cost(option)
            raw = 9 if monthly < 100 else 7 if monthly < 300 else 5 if monthly < 500 else 3
            return RawScore(raw, f"Estimated monthly cost: ${monthly:.2f}")

        if criterion == "performance":
            return RawScore(PROVIDER_PERFORMANCE.get(provider, 6),
                            f"{provider or 'Unknown provider'} performance characteristics")

        if criterion == "scalability":
            return RawScore(9 if "scalability" in strengths else 7,
                            "Auto-scaling and global infrastructure capabilities")

        if criterion == "reliability":
            share = profile.get("market_share", 0.0)
            return RawScore(8 if share > 0.2 else 7 if share > 0.1 else 6,
                            "Market presence and SLA guarantees")

        if criterion == "ease_of_use":
            raw = 5 if "ease_of_use" in weaknesses else 7 if provider == "Azure" else 6
            return RawScore(raw, "Learning curve and management complexity")

        if criterion == "feature_completeness":
            services = option.get("services") or ()
            raw = 9 if "feature_completeness" in strengths else 7 if len(services) > 5 else 5
            return RawScore(raw, "Available services and integrations")

        if criterion == "vendor_lock_in":
            return RawScore(PROVIDER_PORTABILITY.get(provider, DEFAULT_PORTABILITY),
                            "Portability and open standards support")

        return RawScore(5, f"No cloud heuristic for {criterion}, neutral score")

    def describe(self, evaluated: EvaluatedOption) -> dict:
        option = evaluated.option
        provider = str(option.get("provider") or "")
        profile = PROVIDER_PROFILES.get(provider, {})

        strengths = [
            label(criterion)
            for criterion, score in evaluated.scores.items()
            if score.available and score.raw >= cfg.strong_score
        ]
        strengths.extend(label(s) for s in profile.get("strengths", ()))

        weaknesses = [
            f"Limited {label(criterion)}"
            for criterion, score in evaluated.scores.items()
            if score.raw <= cfg.weak_score
        ]
        weaknesses.extend(PROVIDER_CAVEATS.get(provider, ()))
        weaknesses.extend(label(w) for w in profile.get("weaknesses", ()))
        if monthly_cost(option) > cfg.high_monthly_cost:
            weaknesses.append("Higher monthly costs")

        use_cases = []
        if _at_least(evaluated, "cost_efficiency", cfg.strong_score):
            use_cases.append("Cost-sensitive projects")
        if _at_least(evaluated, "performance", cfg.strong_score):
            use_cases.append("High-performance applications")
        if _at_least(evaluated, "scalability", cfg.standout_score):
            use_cases.append("Rapidly growing applications")
        if _at_least(evaluated, "feature_completeness", cfg.standout_score):
            use_cases.append("Complex enterprise solutions")
        compliance = option.get("compliance") or ()
        use_cases.extend(case for cert, case in COMPLIANCE_USE_CASES.items() if cert in compliance)

        return {
            "strengths": unique(strengths),
            "weaknesses": unique(weaknesses) or list(FALLBACK_WEAKNESSES),
            "useCases": use_cases,
        }

    def report(self, result: ComparisonResult, context: Mapping) -> dict:
        services = result.comparison
        if not services:
            return {}
        sections = {
            "costAnalysis": self.cost_analysis(services),
            "migrationConsiderations": self.migration_considerations(services),
            "vendorLockInAnalysis": self.vendor_lock_in_analysis(services),
        }
        choice = result.recommendation.choice
        if choice is not None:
            sections["recommendation"] = {"costSavings": self.cost_savings(choice, services)}
        return sections

    @staticmethod
    def cost_savings(choice: EvaluatedOption, services: list[EvaluatedOption]) -> dict:
        """Monthly saving of the choice against the priciest valid service."""
        highest = max(monthly_cost(s.option) for s in services if s.meets_constraints)
        savings = highest - monthly_cost(choice.option)
        return {
            "monthly": savings,
            "yearly": savings * 12,
            "percentage": savings / highest * 100 if highest else 0.0,
        }

    @staticmethod
    def cost_analysis(services: list[EvaluatedOption]) -> dict:
        costs = [(s, monthly_cost(s.option)) for s in services]
        cheapest = min(costs, key=lambda pair: pair[1])
        priciest = max(costs, key=lambda pair: pair[1])
        return {
            "range": {
                "min": cheapest[1],
                "max": priciest[1],
                "difference": priciest[1] - cheapest[1],
            },
            "cheapest": cheapest[0].name,
            "mostExpensive": priciest[0].name,
            "averageMonthlyCost": sum(cost for _, cost in costs) / len(costs),
            "costBreakdown": [
                {
                    "name": s.name,
                    "provider": s.option.get("provider"),
                    "breakdown": dict((s.option.get("estimated_cost") or {}).get("breakdown", {})),
                }
                for s in services
            ],
        }

    @staticmethod
    def migration_considerations(services: list[EvaluatedOption]) -> dict:
        complexity = []
        for s in services:
            risk, time_estimate = lock_in_band(_lock_in_raw(s))
            complexity.append({
                "name": s.name,
                "provider": s.option.get("provider"),
                "complexity": risk,
                "timeEstimate": time_estimate,
            })
        return {
            "easiestToMigrateTo": [
                s.name for s in services if _lock_in_raw(s) >= cfg.portable_score
            ],
            "migrationComplexity": complexity,
            "recommendations": list(MIGRATION_RECOMMENDATIONS),
        }

    @staticmethod
    def vendor_lock_in_analysis(services: list[EvaluatedOption]) -> dict:
        return {
            "riskLevels": [
                {
                    "name": s.name,
                    "provider": s.option.get("provider"),
                    "risk": lock_in_band(_lock_in_raw(s))[0],
                    "score": _lock_in_raw(s),
                }
                for s in services
            ],
            "mitigationStrategies": {
                level: list(strategies) for level, strategies in MITIGATION_STRATEGIES.items()
            },
        }
