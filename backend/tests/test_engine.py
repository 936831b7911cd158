"""
Unit tests for the DecisionEngine
=================================
Tests cover:
1. End-to-end example with a fixed scorer (hand-computed totals)
2. Sum invariant and determinism
3. Input rejection before any scoring
4. Scorer failures and timeouts become unavailable scores
5. Bounded fan-out and caller data left untouched
"""

import asyncio
import copy
import json

import pytest

from referee.services.decision.engine import DecisionEngine, compare_options, validate_request
from referee.services.decision.errors import InputError, ScorerUnavailable
from referee.services.decision.models import Constraints, Option, RawScore
from referee.services.scorers.base import DomainScorer
from referee.services.scorers.field_scorer import FieldScorer

EXAMPLE_OPTIONS = [
    {"name": "A", "performance": 8, "cost": 100},
    {"name": "B", "performance": 6, "cost": 50},
    {"name": "C", "performance": 7, "cost": 70},
]
EXAMPLE_CONSTRAINTS = {"weights": {"performance": 0.5, "cost": 0.5}}


def example_scorer():
    # cost raw = 10 - cost / 25, clipped to [0, 10]
    return FieldScorer(transforms={"cost": lambda o: 10 - o.cost / 25})


class FlakyScorer(DomainScorer):
    """Fails for one (option, criterion) pair, scores 6 everywhere else."""

    def __init__(self, fail_on, error):
        self.fail_on = fail_on
        self.error = error

    async def score(self, option, criterion, constraints):
        if (option.name, criterion) == self.fail_on:
            raise self.error
        return RawScore(6.0, "steady")


class SlowScorer(DomainScorer):
    async def score(self, option, criterion, constraints):
        if criterion == "latency":
            await asyncio.sleep(5)
        return RawScore(7.0, "ok")


class TestEndToEnd:
    """Test the worked example from raw option fields to recommendation"""

    @pytest.mark.asyncio
    async def test_example_winner_and_totals(self):
        engine = DecisionEngine(example_scorer())
        result = await engine.evaluate(EXAMPLE_OPTIONS, ["performance", "cost"], EXAMPLE_CONSTRAINTS)

        totals = {o.name: o.total_score for o in result.comparison}
        assert totals["A"] == 0.5 * 8 + 0.5 * (10 - 100 / 25)
        assert totals["B"] == 0.5 * 6 + 0.5 * (10 - 50 / 25)
        assert totals["C"] == 0.5 * 7 + 0.5 * (10 - 70 / 25)
        assert totals["C"] == pytest.approx(7.1)

        rec = result.recommendation
        assert rec.choice.name == "C"
        assert rec.confidence == pytest.approx(0.51)
        assert rec.reason.startswith("Best overall choice due to strong performance, cost")

    @pytest.mark.asyncio
    async def test_example_tradeoffs_and_summary(self):
        engine = DecisionEngine(example_scorer())
        result = await engine.evaluate(EXAMPLE_OPTIONS, ["performance", "cost"], EXAMPLE_CONSTRAINTS)

        assert [(t.option_a, t.option_b) for t in result.tradeoffs] == [("A", "B")]
        assert result.tradeoffs[0].strengths_a == ["performance"]
        assert result.tradeoffs[0].strengths_b == ["cost"]

        summary = result.summary
        assert [t.name for t in summary.top_choices] == ["C", "A", "B"]
        assert summary.top_choices[0].key_strength == "cost"
        assert summary.strongest_criterion == "cost"

    @pytest.mark.asyncio
    async def test_steeper_cost_curve_ties_and_first_wins(self):
        # cost raw = 10 - cost / 20: B and C both total 6.75
        scorer = FieldScorer(transforms={"cost": lambda o: 10 - o.cost / 20})
        result = await DecisionEngine(scorer).evaluate(
            EXAMPLE_OPTIONS, ["performance", "cost"], EXAMPLE_CONSTRAINTS
        )
        totals = [o.total_score for o in result.comparison]
        assert totals == [6.5, 6.75, 6.75]
        assert result.recommendation.choice.name == "B"
        assert result.recommendation.confidence == 0.5

    @pytest.mark.asyncio
    async def test_comparison_keeps_input_order(self):
        result = await DecisionEngine(example_scorer()).evaluate(
            EXAMPLE_OPTIONS, ["performance", "cost"], EXAMPLE_CONSTRAINTS
        )
        assert [o.name for o in result.comparison] == ["A", "B", "C"]

    @pytest.mark.asyncio
    async def test_default_weights_are_equal(self):
        result = await DecisionEngine(example_scorer()).evaluate(
            EXAMPLE_OPTIONS, ["performance", "cost"]
        )
        for option in result.comparison:
            assert {s.weighted / s.raw for s in option.scores.values() if s.raw} == {0.5}


class TestInvariants:
    """Test properties that must hold for every evaluation"""

    @pytest.mark.asyncio
    async def test_total_equals_sum_of_weighted(self, table_scorer):
        table = {
            "A": {"x": 3.3, "y": 7.7, "z": 1.1},
            "B": {"x": 9.9, "y": 0.1, "z": 5.5},
        }
        result = await DecisionEngine(table_scorer(table)).evaluate(
            [{"name": "A"}, {"name": "B"}],
            ["x", "y", "z"],
            {"weights": {"x": 0.7, "y": 0.2}},
        )
        for option in result.comparison:
            assert option.total_score == pytest.approx(sum(s.weighted for s in option.scores.values()))

    @pytest.mark.asyncio
    async def test_deterministic_given_fixed_scorer(self):
        engine = DecisionEngine(example_scorer())
        first = await engine.evaluate(EXAMPLE_OPTIONS, ["performance", "cost"], EXAMPLE_CONSTRAINTS)
        second = await engine.evaluate(EXAMPLE_OPTIONS, ["performance", "cost"], EXAMPLE_CONSTRAINTS)
        assert json.dumps(first.to_dict()) == json.dumps(second.to_dict())

    @pytest.mark.asyncio
    async def test_invalid_options_stay_in_comparison(self):
        result = await DecisionEngine(example_scorer()).evaluate(
            EXAMPLE_OPTIONS, ["performance", "cost"], {"maxCost": 60}
        )
        assert [o.name for o in result.comparison] == ["A", "B", "C"]
        assert [o.meets_constraints for o in result.comparison] == [False, True, False]
        assert result.recommendation.choice.name == "B"
        assert result.recommendation.confidence == 1.0

    @pytest.mark.asyncio
    async def test_no_valid_options(self):
        result = await compare_options(
            [{"name": "A", "cost": 100}, {"name": "B", "cost": 200}],
            ["cost"],
            {"maxCost": 50},
        )
        assert result.recommendation.choice is None
        assert result.recommendation.confidence is None
        assert len(result.recommendation.alternatives) == 2
        assert result.to_dict()["recommendation"]["choice"] is None
        assert result.to_dict()["recommendation"]["confidence"] is None

    @pytest.mark.asyncio
    async def test_caller_data_not_mutated(self):
        options = copy.deepcopy(EXAMPLE_OPTIONS)
        options[0]["features"] = ["sso"]
        constraints = {"maxCost": 80, "weights": {"performance": 0.5, "cost": 0.5}}
        before = (copy.deepcopy(options), copy.deepcopy(constraints))
        await DecisionEngine(example_scorer()).evaluate(options, ["performance", "cost"], constraints)
        assert (options, constraints) == before


class TestInputValidation:
    """Test structured rejection before scoring"""

    def test_fewer_than_two_options(self):
        with pytest.raises(InputError) as exc:
            validate_request([{"name": "A"}], ["cost"])
        assert "at least 2 options are required, got 1" in exc.value.problems

    def test_empty_criteria(self):
        with pytest.raises(InputError) as exc:
            validate_request([{"name": "A"}, {"name": "B"}], [])
        assert "at least one criterion is required" in exc.value.problems

    def test_duplicate_criteria(self):
        with pytest.raises(InputError):
            validate_request([{"name": "A"}, {"name": "B"}], ["cost", "cost"])

    def test_weight_out_of_range(self):
        with pytest.raises(InputError):
            validate_request([{"name": "A"}, {"name": "B"}], ["cost"], {"weights": {"cost": 1.5}})

    def test_non_finite_option_value(self):
        with pytest.raises(InputError) as exc:
            validate_request(
                [{"name": "A", "performance": 8}, {"name": "B", "performance": float("nan")}],
                ["performance"],
            )
        assert exc.value.problems == ["option #1 (B) has a non-finite number in performance"]

    def test_malformed_required_features(self):
        with pytest.raises(InputError) as exc:
            validate_request([{"name": "A"}, {"name": "B"}], ["x"], {"requiredFeatures": 5})
        assert exc.value.problems == ["requiredFeatures must be a list"]

    def test_collects_every_problem(self):
        with pytest.raises(InputError) as exc:
            validate_request([{"cost": 1}], [], {"maxCost": -5})
        assert len(exc.value.problems) == 4
        assert exc.value.to_dict()["error"] == "invalid comparison request"

    def test_accepts_option_records(self):
        options, criteria, constraints = validate_request(
            [Option(name="A"), {"name": "B"}], [" cost "], Constraints(max_cost=5)
        )
        assert [o.name for o in options] == ["A", "B"]
        assert criteria == ["cost"]
        assert constraints.max_cost == 5

    @pytest.mark.asyncio
    async def test_nothing_scored_on_rejection(self, table_scorer):
        scorer = table_scorer({})
        with pytest.raises(InputError):
            await DecisionEngine(scorer).evaluate([{"name": "A"}], ["x"])
        assert scorer.max_in_flight == 0


class TestScorerFailures:
    """Test that one failing sub-score never aborts the comparison"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        ScorerUnavailable("B", "cost", "pricing feed down"),
        RuntimeError("boom"),
    ])
    async def test_failure_becomes_unavailable_score(self, error):
        engine = DecisionEngine(FlakyScorer(("B", "cost"), error))
        result = await engine.evaluate(
            [{"name": "A"}, {"name": "B"}], ["performance", "cost"]
        )
        failed = result.comparison[1].scores["cost"]
        assert not failed.available
        assert failed.raw == 0.0
        assert result.comparison[1].total_score == 3.0
        assert result.comparison[0].total_score == 6.0
        assert result.comparison[0].scores["cost"].available

    @pytest.mark.asyncio
    async def test_timeout_becomes_unavailable_score(self):
        engine = DecisionEngine(SlowScorer(), timeout=0.05)
        result = await engine.evaluate([{"name": "A"}, {"name": "B"}], ["latency", "cost"])
        for option in result.comparison:
            assert not option.scores["latency"].available
            assert "timed out" in option.scores["latency"].explanation
            assert option.scores["cost"].raw == 7.0

    @pytest.mark.asyncio
    async def test_missing_field_is_unavailable(self):
        result = await DecisionEngine(FieldScorer()).evaluate(
            [{"name": "A", "performance": 8}, {"name": "B"}], ["performance"]
        )
        assert result.comparison[1].scores["performance"].available is False
        assert result.recommendation.choice.name == "A"

    @pytest.mark.asyncio
    async def test_nan_field_is_unavailable_not_perfect(self):
        garbage = Option(name="B").with_attributes(performance=float("nan"))
        result = await DecisionEngine(FieldScorer()).evaluate(
            [Option.from_dict({"name": "A", "performance": 8}), garbage], ["performance"]
        )
        score = result.comparison[1].scores["performance"]
        assert score.available is False
        assert score.raw == 0.0
        assert result.comparison[1].total_score == 0.0
        assert result.recommendation.choice.name == "A"


class TestConcurrency:
    @pytest.mark.asyncio
    async def test_fan_out_is_bounded(self, table_scorer):
        table = {name: {c: 5.0 for c in "abcd"} for name in "ABCDE"}
        scorer = table_scorer(table, delay=0.01)
        engine = DecisionEngine(scorer, concurrency=3)
        await engine.evaluate([{"name": n} for n in "ABCDE"], list("abcd"))
        assert 1 < scorer.max_in_flight <= 3
