"""
Pytest configuration and fixtures for referee tests.

Markers:
    @pytest.mark.asyncio - coroutine tests (pytest-asyncio)
"""

import asyncio
from types import MappingProxyType

import pytest

from referee.services.decision.models import (
    CriterionScore,
    EvaluatedOption,
    Option,
    RawScore,
)
from referee.services.scorers.base import DomainScorer


def _evaluated(name, raws, weights=None, meets=True, cost=None, features=None):
    weights = weights or {}
    default_weight = 1.0 / len(raws) if raws else 0.0
    scores = {
        criterion: CriterionScore.from_raw(
            RawScore(raw, f"{criterion} score"), weights.get(criterion, default_weight)
        )
        for criterion, raw in raws.items()
    }
    return EvaluatedOption(
        option=Option(name=name, cost=cost, features=features),
        scores=MappingProxyType(scores),
        total_score=sum(s.weighted for s in scores.values()),
        meets_constraints=meets,
    )


@pytest.fixture
def make_evaluated():
    """Factory for EvaluatedOption records with equal default weights."""
    return _evaluated


class TableScorer(DomainScorer):
    """Returns fixed raw scores from a {option: {criterion: raw}} table."""

    def __init__(self, table, delay=0.0):
        self.table = table
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0

    async def score(self, option, criterion, constraints):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            return RawScore(self.table[option.name][criterion], "fixed")
        finally:
            self.in_flight -= 1


@pytest.fixture
def table_scorer():
    """Factory for scorers backed by a fixed score table."""
    return TableScorer
