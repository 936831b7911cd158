"""Trade-off analyzer — surfaces pairs of options that each win somewhere.

Every unordered pair is compared, valid or not. A criterion differentiates
the pair only when the raw scores differ by more than the margin. Pairs where
one side leads on every differentiating criterion are strict wins and are
left to the ranking.
"""

import logging
from collections.abc import Sequence

from referee.services.decision.config import decision_config
from referee.services.decision.models import EvaluatedOption, Tradeoff

logger = logging.getLogger(__name__)

cfg = decision_config.tradeoffs


class TradeoffAnalyzer:
    def analyze(self, evaluated: Sequence[EvaluatedOption]) -> list[Tradeoff]:
        tradeoffs: list[Tradeoff] = []
        for i, option_a in enumerate(evaluated):
            for option_b in evaluated[i + 1:]:
                tradeoff = self.compare_pair(option_a, option_b)
                if tradeoff is not None:
                    tradeoffs.append(tradeoff)
        logger.debug(f"{len(tradeoffs)} trade-offs across {len(evaluated)} options")
        return tradeoffs

    def compare_pair(
        self, option_a: EvaluatedOption, option_b: EvaluatedOption
    ) -> Tradeoff | None:
        """Trade-off between two options, or None if one strictly wins."""
        strengths_a, strengths_b = self.differentiators(option_a, option_b)
        if not strengths_a or not strengths_b:
            return None
        return Tradeoff(
            option_a=option_a.name,
            option_b=option_b.name,
            strengths_a=strengths_a,
            strengths_b=strengths_b,
        )

    def differentiators(
        self, option_a: EvaluatedOption, option_b: EvaluatedOption
    ) -> tuple[list[str], list[str]]:
        """Criteria where A leads and where B leads by more than the margin."""
        strengths_a: list[str] = []
        strengths_b: list[str] = []
        criteria = list(option_a.scores) + [c for c in option_b.scores if c not in option_a.scores]
        for criterion in criteria:
            diff = option_a.raw(criterion) - option_b.raw(criterion)
            if abs(diff) <= cfg.min_margin:
                continue
            if diff > 0:
                strengths_a.append(criterion)
            else:
                strengths_b.append(criterion)
        return strengths_a, strengths_b


tradeoff_analyzer = TradeoffAnalyzer()
