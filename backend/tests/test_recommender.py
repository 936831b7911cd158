"""
Unit tests for the Recommender
==============================
Tests cover:
1. Winner selection among valid options, first occurrence on ties
2. No-valid-options outcome
3. Confidence bounds and saturation
4. Reason text
"""

import pytest

from referee.services.decision.recommender import NO_VALID_OPTIONS_REASON, Recommender


class TestSelection:
    """Test choosing the top valid option"""

    def test_highest_total_wins(self, make_evaluated):
        options = [
            make_evaluated("A", {"performance": 5, "cost": 5}),
            make_evaluated("B", {"performance": 9, "cost": 8}),
            make_evaluated("C", {"performance": 6, "cost": 7}),
        ]
        rec = Recommender().select(options)
        assert rec.choice.name == "B"
        assert [a.name for a in rec.alternatives] == ["C", "A"]

    def test_invalid_option_never_chosen(self, make_evaluated):
        options = [
            make_evaluated("A", {"performance": 10}, meets=False),
            make_evaluated("B", {"performance": 4}),
        ]
        assert Recommender().select(options).choice.name == "B"

    def test_tie_goes_to_first_in_input_order(self, make_evaluated):
        options = [
            make_evaluated("First", {"performance": 7, "cost": 5}),
            make_evaluated("Second", {"performance": 5, "cost": 7}),
        ]
        assert options[0].total_score == options[1].total_score
        rec = Recommender().select(options)
        assert rec.choice.name == "First"
        assert rec.confidence == 0.5

    def test_no_valid_options(self, make_evaluated):
        options = [
            make_evaluated("A", {"cost": 5}, meets=False),
            make_evaluated("B", {"cost": 6}, meets=False),
            make_evaluated("C", {"cost": 7}, meets=False),
        ]
        rec = Recommender().select(options)
        assert rec.choice is None
        assert rec.reason == NO_VALID_OPTIONS_REASON
        assert rec.confidence is None
        assert [a.name for a in rec.alternatives] == ["A", "B"]


class TestConfidence:
    """Test confidence derived from the gap to the runner-up"""

    def test_single_valid_option_is_certain(self, make_evaluated):
        options = [
            make_evaluated("A", {"cost": 3}),
            make_evaluated("B", {"cost": 9}, meets=False),
        ]
        assert Recommender().select(options).confidence == 1.0

    def test_gap_over_spread(self, make_evaluated):
        options = [
            make_evaluated("A", {"cost": 8}, weights={"cost": 1.0}),
            make_evaluated("B", {"cost": 6}, weights={"cost": 1.0}),
        ]
        assert Recommender().select(options).confidence == pytest.approx(0.7)

    def test_saturates_at_one(self, make_evaluated):
        options = [
            make_evaluated("A", {"cost": 10}, weights={"cost": 1.0}),
            make_evaluated("B", {"cost": 2}, weights={"cost": 1.0}),
        ]
        assert Recommender().select(options).confidence == 1.0

    @pytest.mark.parametrize("raws", [(0, 0), (3, 2.9), (10, 0), (6, 1), (5, 5)])
    def test_bounds(self, make_evaluated, raws):
        options = [make_evaluated(str(i), {"x": r}, weights={"x": 1.0}) for i, r in enumerate(raws)]
        confidence = Recommender().select(options).confidence
        assert 0.5 <= confidence <= 1.0


class TestReason:
    def test_lists_strong_criteria(self, make_evaluated):
        options = [
            make_evaluated("A", {"performance": 9, "cost": 7, "security": 6.9}),
            make_evaluated("B", {"performance": 1, "cost": 1, "security": 1}),
        ]
        reason = Recommender().select(options).reason
        assert reason.startswith("Best overall choice due to strong performance, cost")
        assert "security" not in reason
        assert f"{options[0].total_score:.2f}" in reason

    def test_no_strong_criteria(self, make_evaluated):
        options = [make_evaluated("A", {"cost": 4}), make_evaluated("B", {"cost": 3})]
        assert Recommender().select(options).reason == "Best overall choice with total score of 4.00"
