"""Recommender — picks the top valid option and says how decisive the win is."""

import logging
from collections.abc import Sequence

from referee.services.decision.config import decision_config
from referee.services.decision.models import EvaluatedOption, Recommendation

logger = logging.getLogger(__name__)

cfg = decision_config

NO_VALID_OPTIONS_REASON = "No options meet the specified constraints"


class Recommender:
    """Selects the highest-scoring option among those meeting constraints."""

    def select(self, evaluated: Sequence[EvaluatedOption]) -> Recommendation:
        valid = [o for o in evaluated if o.meets_constraints]

        if not valid:
            logger.info(f"No valid option among {len(evaluated)}")
            return Recommendation(
                choice=None,
                reason=NO_VALID_OPTIONS_REASON,
                confidence=None,
                alternatives=list(evaluated[: cfg.ranking.fallback_alternatives]),
            )

        choice = self._best(valid)
        runners_up = self._ranked([o for o in valid if o is not choice])

        return Recommendation(
            choice=choice,
            reason=self._reason(choice),
            confidence=self.confidence(choice, runners_up[0] if runners_up else None),
            alternatives=runners_up[: cfg.ranking.runner_up_alternatives],
        )

    def confidence(
        self, choice: EvaluatedOption, runner_up: EvaluatedOption | None
    ) -> float:
        """0.5 + gap / spread, capped at 1.0; exactly 1.0 with no competitor."""
        params = cfg.confidence
        if runner_up is None:
            return params.ceiling
        gap = choice.total_score - runner_up.total_score
        return max(params.floor, min(params.floor + gap / params.spread, params.ceiling))

    @staticmethod
    def _best(options: Sequence[EvaluatedOption]) -> EvaluatedOption:
        # strict > keeps the first occurrence on ties
        best = options[0]
        for option in options[1:]:
            if option.total_score > best.total_score:
                best = option
        return best

    @staticmethod
    def _ranked(options: Sequence[EvaluatedOption]) -> list[EvaluatedOption]:
        # sorted() is stable, so equal totals keep input order
        return sorted(options, key=lambda o: o.total_score, reverse=True)

    def _reason(self, choice: EvaluatedOption) -> str:
        strengths = [
            criterion
            for criterion, score in choice.scores.items()
            if score.raw >= cfg.ranking.strong_score
        ]
        if strengths:
            return (
                f"Best overall choice due to strong {', '.join(strengths)} "
                f"with total score of {choice.total_score:.2f}"
            )
        return f"Best overall choice with total score of {choice.total_score:.2f}"


recommender = Recommender()
