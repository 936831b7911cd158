"""Summary reporter — top choices and the set's strongest dimension."""

import logging
from collections.abc import Sequence

from referee.services.decision.config import decision_config
from referee.services.decision.models import EvaluatedOption, Summary, TopChoice

logger = logging.getLogger(__name__)

cfg = decision_config.ranking


class SummaryReporter:
    def summarize(self, evaluated: Sequence[EvaluatedOption]) -> Summary:
        if not evaluated:
            return Summary()

        valid = [o for o in evaluated if o.meets_constraints]
        top = sorted(valid, key=lambda o: o.total_score, reverse=True)[: cfg.top_choices]

        averages = self.criterion_averages(evaluated)
        strongest = self._first_max(averages)
        key_insight = ""
        if strongest is not None:
            key_insight = (
                f"Overall, options perform best in {strongest} "
                f"(avg: {averages[strongest]:.1f}/10)"
            )

        return Summary(
            total_options=len(evaluated),
            valid_options=len(valid),
            top_choices=[
                TopChoice(name=o.name, score=o.total_score, key_strength=self.key_strength(o))
                for o in top
            ],
            criterion_averages=averages,
            strongest_criterion=strongest,
            key_insight=key_insight,
        )

    def key_strength(self, option: EvaluatedOption) -> str | None:
        """Highest-raw criterion; the first seen wins ties."""
        return self._first_max({c: s.raw for c, s in option.scores.items()})

    @staticmethod
    def criterion_averages(evaluated: Sequence[EvaluatedOption]) -> dict[str, float]:
        """Mean raw score per criterion across all options, valid or not."""
        criteria: list[str] = []
        for option in evaluated:
            criteria.extend(c for c in option.scores if c not in criteria)
        return {
            c: sum(o.raw(c) for o in evaluated) / len(evaluated)
            for c in criteria
        }

    @staticmethod
    def _first_max(values: dict[str, float]) -> str | None:
        best: str | None = None
        for key, value in values.items():
            if best is None or value > values[best]:
                best = key
        return best


summary_reporter = SummaryReporter()
