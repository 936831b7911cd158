"""API health scorer — probes endpoints and scores them on latency and metadata."""

import logging
import time
from collections.abc import Mapping
from dataclasses import replace

import httpx

from referee.config import settings
from referee.services.decision.config import decision_config
from referee.services.decision.constraint_filter import ConstraintChecker, ConstraintCheckResult
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

# (upper bound ms, raw score), first match wins
LATENCY_BUCKETS = ((200, 9), (500, 7), (1000, 5))
SLOW_SCORE = 3
DOWN_SCORE = 1

CRITERION_ALIASES = {"ease_of_use": "ease_of_integration"}


def detect_api_type(endpoint: str) -> str:
    if "graphql" in endpoint:
        return "GraphQL"
    if "grpc" in endpoint:
        return "gRPC"
    return "REST"


def detect_features(option: Option, api_type: str) -> list[str]:
    features = ["graphql", "flexible_queries", "single_endpoint"] if api_type == "GraphQL" \
        else ["rest", "multiple_endpoints", "cacheable"]
    headers = option.get("headers") or {}
    if headers.get("Authorization") or option.get("apiKey"):
        features.append("authentication_required")
    if option.get("websocket") or option.get("sse"):
        features.append("real_time")
    return features


# Fixed drawbacks per API style
TYPE_CONS = {
    "GraphQL": (
        "Steeper learning curve compared to REST APIs",
        "May be overkill for simple data fetching",
    ),
    "REST": (
        "Multiple endpoints to manage and document",
        "Less flexible than GraphQL for complex queries",
    ),
}
FALLBACK_CONS = (
    "May require additional integration effort",
    "Performance depends on network conditions",
)
LOW_RATE_LIMIT = 1000


def _features(option: Option) -> tuple[str, ...]:
    return tuple(option.get("detected_features") or option.features or ())


def _api_type(option: Option) -> str:
    return option.get("api_type") or detect_api_type(str(option.get("endpoint") or ""))


def _is_available(option: Option) -> bool:
    health = option.get("health")
    return isinstance(health, Mapping) and bool(health.get("available"))


def _at_least(evaluated: EvaluatedOption, criterion: str, threshold: float) -> bool:
    """True if the criterion, under its own name or an alias, scored >= threshold."""
    names = [criterion, *(alias for alias, target in CRITERION_ALIASES.items() if target == criterion)]
    for name in names:
        score = evaluated.scores.get(name)
        if score is not None and score.available:
            return score.raw >= threshold
    return False


class ReachableChecker(ConstraintChecker):
    """Only APIs that passed the health check can be recommended."""

    name = "reachable"

    def check(self, option, constraints) -> ConstraintCheckResult:
        health = option.get("health")
        if not isinstance(health, Mapping):
            return ConstraintCheckResult(self.name, False, "API health was not checked")
        if not health.get("available"):
            reason = health.get("error") or f"status {health.get('status_code')}"
            return ConstraintCheckResult(self.name, False, f"API unreachable: {reason}")
        return ConstraintCheckResult(self.name, True, "API responded to health check")


class ApiHealthScorer(DomainScorer):
    """Scores APIs from a live health probe plus their declared metadata.

    enrich() sends one GET per API; failures are recorded as an unhealthy
    probe rather than raised, so a dead endpoint scores low instead of
    being reported unavailable. It is still compared but never recommended.
    """

    default_criteria = (
        "performance",
        "reliability",
        "documentation",
        "rate_limits",
        "cost",
        "ease_of_integration",
    )
    checkers = (ReachableChecker(),)

    def __init__(self, client: httpx.AsyncClient | None = None, timeout: float | None = None):
        self._client = client
        self.timeout = timeout if timeout is not None else settings.health_probe_timeout_seconds

    async def enrich(self, option: Option) -> Option:
        endpoint = str(option.get("endpoint") or "")
        declared_type = option.get("type")
        api_type = "GraphQL" if str(declared_type).lower() == "graphql" else detect_api_type(endpoint)

        health = await self.check_health(endpoint, option.get("headers") or {})
        features = detect_features(option, api_type)
        enriched = option.with_attributes(health=health, api_type=api_type, detected_features=features)

        # pricing stands in for cost so maxCost applies to APIs too
        pricing = option.get("pricing") or {}
        cost = enriched.cost
        if cost is None and pricing:
            cost = 0.0 if pricing.get("free") else float(pricing.get("cost") or 0)

        return replace(
            enriched,
            cost=cost,
            features=enriched.features if enriched.features is not None else tuple(features),
        )

    async def check_health(self, endpoint: str, headers: dict) -> dict:
        """GET the endpoint and report availability, latency, and status code."""
        if not endpoint:
            return {"status": "unhealthy", "available": False, "status_code": 0,
                    "response_time_ms": None, "error": "no endpoint"}
        start = time.monotonic()
        try:
            if self._client is not None:
                response = await self._client.get(endpoint, headers=headers, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(endpoint, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.info(f"Health probe for {endpoint} returned {e.response.status_code}")
            return {"status": "unhealthy", "available": False,
                    "status_code": e.response.status_code,
                    "response_time_ms": None, "error": str(e)}
        except httpx.HTTPError as e:
            logger.info(f"Health probe for {endpoint} failed: {e}")
            return {"status": "unhealthy", "available": False, "status_code": 0,
                    "response_time_ms": None, "error": str(e) or type(e).__name__}

        elapsed_ms = round((time.monotonic() - start) * 1000)
        return {"status": "healthy", "available": True, "status_code": response.status_code,
                "response_time_ms": elapsed_ms, "error": None}

    async def score(self, option: Option, criterion: str, constraints: Constraints) -> RawScore:
        criterion = CRITERION_ALIASES.get(criterion, criterion)
        health = option.get("health") or {}
        api_type = option.get("api_type") or detect_api_type(str(option.get("endpoint") or ""))

        if criterion == "performance":
            if not health.get("available"):
                return RawScore(DOWN_SCORE, "API unavailable during testing")
            latency = health.get("response_time_ms") or 0
            raw = next((s for bound, s in LATENCY_BUCKETS if latency < bound), SLOW_SCORE)
            return RawScore(raw, f"Response time: {latency}ms")

        if criterion == "reliability":
            if not health.get("available"):
                return RawScore(2, "API experiencing issues")
            return RawScore(8 if health.get("status_code") == 200 else 6, "API responding normally")

        if criterion == "documentation":
            raw = {"GraphQL": 8, "REST": 7}.get(api_type, 6)
            quality = "excellent" if raw > 7 else "good"
            return RawScore(raw, f"{api_type} APIs typically have {quality} documentation")

        if criterion == "rate_limits":
            limits = option.get("rateLimits")
            if not limits:
                return RawScore(5, "Rate limits not specified")
            requests = limits.get("requests", 0)
            return RawScore(8 if requests > 1000 else 6,
                            f"{requests} requests per {limits.get('window', 'window')}")

        if criterion == "cost":
            pricing = option.get("pricing")
            if not pricing:
                return RawScore(6, "Pricing information not available")
            monthly = pricing.get("cost", 0)
            raw = 9 if pricing.get("free") else 7 if monthly < 50 else 5
            return RawScore(raw, f"${monthly}/month")

        if criterion == "ease_of_integration":
            raw = {"REST": 8, "GraphQL": 6}.get(api_type, 5)
            return RawScore(raw, f"{api_type} integration complexity")

        return RawScore(5, f"No API heuristic for {criterion}, neutral score")

    def describe(self, evaluated: EvaluatedOption) -> dict:
        return {
            "pros": self._pros(evaluated),
            "cons": self._cons(evaluated),
            "bestFor": self._best_for(evaluated),
        }

    def report(self, result: ComparisonResult, context: Mapping) -> dict:
        apis = result.comparison
        return {
            "useCaseRecommendations": {
                "High Traffic Applications": [
                    a.name for a in apis if _at_least(a, "performance", cfg.strong_score)
                ],
                "Budget Projects": [a.name for a in apis if _at_least(a, "cost", cfg.strong_score)],
                "Complex Data Requirements": [
                    a.name for a in apis if "graphql" in _features(a.option)
                ],
                "Real-time Features": [a.name for a in apis if "real_time" in _features(a.option)],
                "Quick Prototypes": [
                    a.name for a in apis if _at_least(a, "ease_of_integration", cfg.strong_score)
                ],
            }
        }

    @staticmethod
    def _pros(evaluated: EvaluatedOption) -> list[str]:
        option = evaluated.option
        pros = [
            f"Strong {label(criterion)}: {score.explanation}"
            for criterion, score in evaluated.scores.items()
            if score.available and score.raw >= cfg.strong_score
        ]
        features = _features(option)
        if "real_time" in features:
            pros.append("Real-time capabilities")
        if "graphql" in features:
            pros.append("Flexible query language")
        if _is_available(option):
            pros.append("Currently available and responsive")
        return unique(pros)

    @staticmethod
    def _cons(evaluated: EvaluatedOption) -> list[str]:
        option = evaluated.option
        cons = [
            f"Limited {label(criterion)}: {score.explanation}"
            for criterion, score in evaluated.scores.items()
            if score.raw <= cfg.weak_score
        ]
        if not _is_available(option):
            cons.append("API currently unavailable or experiencing issues")
        if "authentication_required" in _features(option):
            cons.append("Requires authentication setup and API key management")
        cons.extend(TYPE_CONS.get(_api_type(option), ()))

        limits = option.get("rateLimits")
        if isinstance(limits, Mapping):
            requests = limits.get("requests")
            if isinstance(requests, (int, float)) and requests < LOW_RATE_LIMIT:
                cons.append(f"Low rate limits: {requests} requests per {limits.get('window', 'window')}")

        pricing = option.get("pricing")
        if isinstance(pricing, Mapping) and pricing and not pricing.get("free"):
            cons.append(f"Paid service: ${pricing.get('cost', 0)}/month cost consideration")

        return unique(cons) or list(FALLBACK_CONS)

    @staticmethod
    def _best_for(evaluated: EvaluatedOption) -> list[str]:
        features = _features(evaluated.option)
        scenarios = []
        if _at_least(evaluated, "performance", cfg.standout_score):
            scenarios.append("High-performance applications")
        if _at_least(evaluated, "cost", cfg.standout_score):
            scenarios.append("Budget-conscious projects")
        if "graphql" in features:
            scenarios.append("Complex data fetching requirements")
        if "real_time" in features:
            scenarios.append("Real-time applications")
        if _at_least(evaluated, "ease_of_integration", cfg.strong_score):
            scenarios.append("Rapid prototyping")
        return scenarios
