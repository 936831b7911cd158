"""Domain scorers — pluggable per-domain implementations of DomainScorer."""

from referee.config import settings
from referee.services.scorers.base import DomainScorer
from referee.services.scorers.field_scorer import FieldScorer
from referee.services.scorers.random_scorer import RandomScorer


def general_scorer() -> DomainScorer:
    """Scorer for general comparisons, chosen by settings.general_scorer."""
    if settings.general_scorer == "random":
        return RandomScorer(seed=settings.random_seed)
    return FieldScorer()
