"""Domain scorer interface — one implementation per comparison domain."""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping

from referee.services.decision.constraint_filter import ConstraintChecker
from referee.services.decision.models import (
    ComparisonResult,
    Constraints,
    EvaluatedOption,
    Option,
    RawScore,
)


def clip(value: float, low: float = 0.0, high: float = 10.0) -> float:
    return max(low, min(high, value))


def label(key: str) -> str:
    """'ease_of_use' -> 'ease of use'"""
    return key.replace("_", " ")


def unique(items: Iterable[str]) -> list[str]:
    """Drop repeats, keeping first-seen order."""
    return list(dict.fromkeys(items))


class DomainScorer(ABC):
    """Scores one option on one criterion.

    The engine treats scorers as black boxes: it calls enrich() once per
    option, then score() once per (option, criterion), and applies weights
    itself. A scorer that cannot answer raises ScorerUnavailable.

    Scorers may also add hard requirements of their own (``checkers``,
    applied alongside the request constraints) and domain notes to the
    response (describe() per option, report() for the whole comparison).
    """

    default_criteria: tuple[str, ...] = ()
    checkers: tuple[ConstraintChecker, ...] = ()

    async def enrich(self, option: Option) -> Option:
        """Attach derived data to an option before scoring."""
        return option

    @abstractmethod
    async def score(self, option: Option, criterion: str, constraints: Constraints) -> RawScore:
        ...

    def describe(self, evaluated: EvaluatedOption) -> dict:
        """Extra fields for one evaluated option, e.g. pros and cons."""
        return {}

    def report(self, result: ComparisonResult, context: Mapping) -> dict:
        """Extra top-level sections; dict values merge into existing sections."""
        return {}

    def render(self, result: ComparisonResult, context: Mapping | None = None) -> dict:
        """Serialize a result with this domain's notes merged in."""
        notes = {id(o): self.describe(o) for o in result.comparison}
        body = result.to_dict()

        for entry, option in zip(body["comparison"], result.comparison):
            entry.update(notes[id(option)])
        recommendation = body["recommendation"]
        if result.recommendation.choice is not None:
            recommendation["choice"].update(notes.get(id(result.recommendation.choice), {}))
        for entry, option in zip(recommendation["alternatives"], result.recommendation.alternatives):
            entry.update(notes.get(id(option), {}))

        for key, value in self.report(result, context or {}).items():
            if isinstance(value, dict) and isinstance(body.get(key), dict):
                body[key].update(value)
            else:
                body[key] = value
        return body
