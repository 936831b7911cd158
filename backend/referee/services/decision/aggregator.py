"""Aggregator — sums weighted criterion scores into an option's total."""

import logging
import math
from collections.abc import Mapping, Sequence

from referee.services.decision.errors import ComputationInvariantError
from referee.services.decision.models import CriterionScore

logger = logging.getLogger(__name__)

MISSING_SCORE_REASON = "no score reported for this criterion"


class Aggregator:
    """Combines per-criterion scores into a total weighted score.

    No clamping and no normalization against other options: totals are
    comparable only because every raw score is on the same 0-10 scale.
    """

    def complete_scores(
        self,
        scores: Mapping[str, CriterionScore],
        criteria: Sequence[str],
    ) -> dict[str, CriterionScore]:
        """Scores for exactly the active criteria, in criteria order.

        A criterion with no score contributes zero and is flagged unavailable.
        """
        completed: dict[str, CriterionScore] = {}
        for criterion in criteria:
            score = scores.get(criterion)
            if score is None:
                logger.debug(f"Missing score for {criterion}, counting it as zero")
                score = CriterionScore.unavailable(MISSING_SCORE_REASON)
            completed[criterion] = score
        return completed

    def total(self, scores: Mapping[str, CriterionScore], criteria: Sequence[str]) -> float:
        """Arithmetic sum of the weighted values over the active criteria."""
        total = 0.0
        for criterion in criteria:
            score = scores.get(criterion)
            if score is not None:
                total += score.weighted
        return total

    def verify(self, name: str, scores: Mapping[str, CriterionScore], total: float) -> None:
        """Raise if a total does not match the sum of its weighted scores."""
        expected = math.fsum(s.weighted for s in scores.values())
        if not math.isclose(total, expected, rel_tol=1e-9, abs_tol=1e-9):
            raise ComputationInvariantError(
                f"total score for {name} is {total!r}, weighted scores sum to {expected!r}"
            )


aggregator = Aggregator()
