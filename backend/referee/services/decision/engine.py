"""Decision engine — orchestrates scoring, filtering, ranking, and reporting.

Pipeline:
    validate_request → scorer fan-out (bounded, per-call timeout)
    → Aggregator + ConstraintFilter → Recommender / TradeoffAnalyzer /
    SummaryReporter → ComparisonResult

The engine keeps no state between calls. Every (option, criterion) score is
collected before an option's total is computed; a scorer that fails or times
out yields an explicit unavailable score instead of aborting the comparison.
"""

import asyncio
import logging
import math
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any

from referee.config import settings
from referee.services.decision.aggregator import Aggregator, aggregator as default_aggregator
from referee.services.decision.config import decision_config
from referee.services.decision.constraint_filter import (
    ConstraintFilter,
    constraint_filter as default_constraint_filter,
)
from referee.services.decision.errors import InputError, ScorerUnavailable
from referee.services.decision.models import (
    ComparisonResult,
    Constraints,
    CriterionScore,
    EvaluatedOption,
    Option,
    RawScore,
)
from referee.services.decision.recommender import recommender
from referee.services.decision.summary_reporter import summary_reporter
from referee.services.decision.tradeoff_analyzer import tradeoff_analyzer
from referee.services.scorers.base import DomainScorer
from referee.services.scorers.field_scorer import FieldScorer

logger = logging.getLogger(__name__)

cfg = decision_config


def validate_request(
    options: Sequence[Any],
    criteria: Sequence[Any],
    constraints: Constraints | Mapping | None = None,
) -> tuple[list[Option], list[str], Constraints]:
    """Normalize a comparison request or reject it with every problem found."""
    problems: list[str] = []

    if options is None or isinstance(options, (str, bytes, Mapping)):
        options = []
    if len(options) < cfg.min_options:
        problems.append(f"at least {cfg.min_options} options are required, got {len(options)}")

    parsed_options: list[Option] = []
    for i, raw in enumerate(options):
        if isinstance(raw, Option):
            parsed_options.append(raw)
            continue
        try:
            parsed_options.append(Option.from_dict(raw, index=i))
        except InputError as e:
            problems.extend(e.problems)

    parsed_criteria: list[str] = []
    if not criteria or isinstance(criteria, (str, bytes)):
        problems.append("at least one criterion is required")
    else:
        for criterion in criteria:
            name = str(criterion).strip() if criterion is not None else ""
            if not name:
                problems.append("criterion names must be non-empty")
            elif name in parsed_criteria:
                problems.append(f"duplicate criterion: {name}")
            else:
                parsed_criteria.append(name)

    if isinstance(constraints, Constraints):
        parsed_constraints = constraints
    else:
        try:
            parsed_constraints = Constraints.from_dict(constraints)
        except InputError as e:
            problems.extend(e.problems)
            parsed_constraints = Constraints()

    for criterion, weight in parsed_constraints.weights.items():
        if not 0.0 <= weight <= 1.0:
            problems.append(f"weight for {criterion} must be within [0, 1], got {weight:g}")
    if parsed_constraints.max_cost is not None and parsed_constraints.max_cost < 0:
        problems.append("maxCost must not be negative")

    if problems:
        raise InputError(problems)
    return parsed_options, parsed_criteria, parsed_constraints


class DecisionEngine:
    """Ranks options against weighted criteria and explains the trade-offs."""

    def __init__(
        self,
        scorer: DomainScorer | None = None,
        *,
        timeout: float | None = None,
        concurrency: int | None = None,
        aggregator: Aggregator | None = None,
        constraint_filter: ConstraintFilter | None = None,
    ):
        self.scorer = scorer or FieldScorer()
        self.timeout = timeout if timeout is not None else settings.scorer_timeout_seconds
        self.concurrency = concurrency or settings.scorer_concurrency
        self.aggregator = aggregator or default_aggregator
        self.constraint_filter = constraint_filter or default_constraint_filter

    async def evaluate(
        self,
        options: Sequence[Any],
        criteria: Sequence[str],
        constraints: Constraints | Mapping | None = None,
        scorer: DomainScorer | None = None,
    ) -> ComparisonResult:
        """Score every option on every criterion and build the comparison."""
        parsed_options, parsed_criteria, parsed_constraints = validate_request(
            options, criteria, constraints
        )
        scorer = scorer or self.scorer
        semaphore = asyncio.Semaphore(self.concurrency)

        logger.info(
            f"Evaluating {len(parsed_options)} options on {len(parsed_criteria)} criteria "
            f"with {type(scorer).__name__}"
        )

        evaluated = list(await asyncio.gather(*(
            self._evaluate_option(option, parsed_criteria, parsed_constraints, scorer, semaphore)
            for option in parsed_options
        )))
        return self.compose(evaluated)

    def compose(self, evaluated: Sequence[EvaluatedOption]) -> ComparisonResult:
        """Build the result from already-evaluated options."""
        evaluated = list(evaluated)
        recommendation = recommender.select(evaluated)
        result = ComparisonResult(
            comparison=evaluated,
            recommendation=recommendation,
            tradeoffs=tradeoff_analyzer.analyze(evaluated),
            summary=summary_reporter.summarize(evaluated),
        )
        if recommendation.choice is not None:
            logger.info(
                f"Recommended {recommendation.choice.name} "
                f"(score {recommendation.choice.total_score:.2f}, "
                f"confidence {recommendation.confidence:.2f})"
            )
        return result

    async def _evaluate_option(
        self,
        option: Option,
        criteria: list[str],
        constraints: Constraints,
        scorer: DomainScorer,
        semaphore: asyncio.Semaphore,
    ) -> EvaluatedOption:
        option = await self._enrich(option, scorer, semaphore)

        results = await asyncio.gather(*(
            self._score_one(option, criterion, len(criteria), constraints, scorer, semaphore)
            for criterion in criteria
        ))
        scores = self.aggregator.complete_scores(dict(zip(criteria, results)), criteria)
        total = self.aggregator.total(scores, criteria)
        self.aggregator.verify(option.name, scores, total)

        return EvaluatedOption(
            option=option,
            scores=MappingProxyType(scores),
            total_score=total,
            meets_constraints=self.constraint_filter.meets_constraints(
                option, constraints, extra=scorer.checkers
            ),
        )

    async def _enrich(
        self, option: Option, scorer: DomainScorer, semaphore: asyncio.Semaphore
    ) -> Option:
        try:
            async with semaphore:
                return await asyncio.wait_for(scorer.enrich(option), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Enrichment timed out for {option.name}, scoring without it")
        except Exception as e:
            logger.warning(f"Enrichment failed for {option.name}: {e}")
        return option

    async def _score_one(
        self,
        option: Option,
        criterion: str,
        criteria_count: int,
        constraints: Constraints,
        scorer: DomainScorer,
        semaphore: asyncio.Semaphore,
    ) -> CriterionScore:
        weight = constraints.weight_for(criterion, criteria_count)
        try:
            async with semaphore:
                raw = await asyncio.wait_for(
                    scorer.score(option, criterion, constraints), timeout=self.timeout
                )
        except asyncio.TimeoutError:
            logger.warning(f"Scorer timed out for {option.name}/{criterion} after {self.timeout:g}s")
            return CriterionScore.unavailable(f"scorer timed out after {self.timeout:g}s")
        except ScorerUnavailable as e:
            logger.warning(f"Scorer unavailable for {option.name}/{criterion}: {e.reason}")
            return CriterionScore.unavailable(e.reason)
        except Exception as e:
            logger.warning(f"Scorer failed for {option.name}/{criterion}: {e}")
            return CriterionScore.unavailable(str(e) or type(e).__name__)

        if not isinstance(raw, RawScore) or not math.isfinite(raw.raw):
            logger.warning(f"Scorer returned an unusable value for {option.name}/{criterion}: {raw!r}")
            return CriterionScore.unavailable("scorer returned no numeric score")
        return CriterionScore.from_raw(raw, weight)


decision_engine = DecisionEngine()


async def compare_options(
    options: Sequence[Any],
    criteria: Sequence[str],
    constraints: Constraints | Mapping | None = None,
    scorer: DomainScorer | None = None,
) -> ComparisonResult:
    """
    Compare options with the shared engine.

    Example:
        result = await compare_options(
            [{"name": "A", "performance": 8}, {"name": "B", "performance": 6}],
            ["performance"],
        )
        print(result.recommendation.choice.name)
    """
    return await decision_engine.evaluate(options, criteria, constraints, scorer=scorer)
