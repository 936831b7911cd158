"""Field scorer — reads raw scores straight off the option (deterministic)."""

import math
from collections.abc import Callable, Mapping
from numbers import Real

from referee.services.decision.errors import ScorerUnavailable
from referee.services.decision.models import Constraints, Option, RawScore
from referee.services.scorers.base import DomainScorer, clip

Transform = Callable[[Option], float]

# (excellent >7, good >5, otherwise) phrasing per criterion
EXPLANATIONS: dict[str, tuple[str, str, str]] = {
    "performance": (
        "Excellent response times and throughput",
        "Good performance for most use cases",
        "May have performance limitations",
    ),
    "cost": (
        "Very cost-effective solution",
        "Reasonable pricing for features offered",
        "Higher cost may impact budget",
    ),
    "ease_of_use": (
        "Intuitive and well-documented",
        "Moderate learning curve",
        "Complex setup and configuration",
    ),
    "scalability": (
        "Scales seamlessly with growth",
        "Handles moderate scale well",
        "Limited scalability options",
    ),
}


def explain(criterion: str, raw: float) -> str:
    phrases = EXPLANATIONS.get(criterion)
    if phrases is None:
        return f"Score: {raw:.1f}/10"
    excellent, good, weak = phrases
    if raw > 7:
        return excellent
    if raw > 5:
        return good
    return weak


class FieldScorer(DomainScorer):
    """Uses the option's own numbers as raw scores.

    By default the raw score for a criterion is the option field of the same
    name, or the entry in a nested ``scores`` mapping. Per-criterion
    transforms override that lookup, e.g. to turn a price into a 0-10 score.
    """

    def __init__(self, transforms: Mapping[str, Transform] | None = None):
        self.transforms = dict(transforms or {})

    async def score(self, option: Option, criterion: str, constraints: Constraints) -> RawScore:
        if criterion in self.transforms:
            try:
                value = self.transforms[criterion](option)
            except (TypeError, ValueError, KeyError, ZeroDivisionError) as e:
                raise ScorerUnavailable(option.name, criterion, f"transform failed: {e}") from e
        else:
            value = self._lookup(option, criterion)

        if not isinstance(value, Real) or isinstance(value, bool):
            raise ScorerUnavailable(option.name, criterion, "no numeric value for this criterion")
        if not math.isfinite(value):
            raise ScorerUnavailable(option.name, criterion, f"non-finite value {value!r} for this criterion")

        raw = clip(float(value))
        return RawScore(raw=raw, explanation=explain(criterion, raw))

    @staticmethod
    def _lookup(option: Option, criterion: str):
        nested = option.get("scores")
        if isinstance(nested, Mapping) and criterion in nested:
            return nested[criterion]
        return option.get(criterion)
