"""Random scorer — placeholder scores for demos and tests only.

Never the default: results change with the seed, so comparisons scored this
way are only reproducible for a fixed seed and request.
"""

import random

from referee.services.decision.models import Constraints, Option, RawScore
from referee.services.scorers.base import DomainScorer
from referee.services.scorers.field_scorer import explain


class RandomScorer(DomainScorer):
    def __init__(self, seed: int | None = 0):
        self.seed = seed

    async def score(self, option: Option, criterion: str, constraints: Constraints) -> RawScore:
        # seeded per (option, criterion) so fan-out order cannot change the value
        rng = random.Random(f"{self.seed}:{option.name}:{criterion}")
        raw = rng.uniform(0.0, 10.0)
        return RawScore(raw=raw, explanation=explain(criterion, raw))
