"""
Unit tests for decision engine records
======================================
Tests cover:
1. Option parsing from request dicts (identifiers, cost, features, non-finite numbers)
2. Caller data is copied, never shared or mutated
3. Constraints parsing and default weights
4. Serialization to the canonical camelCase shape
"""

import pytest

from referee.services.decision.errors import InputError
from referee.services.decision.models import (
    Constraints,
    CriterionScore,
    Option,
    RawScore,
    Tradeoff,
)


class TestOptionFromDict:
    """Test building options from plain dicts"""

    def test_name_and_extra_fields(self):
        option = Option.from_dict({"name": "A", "cost": 100, "features": ["x"], "performance": 8})
        assert option.name == "A"
        assert option.cost == 100.0
        assert option.features == ("x",)
        assert option.attributes == {"performance": 8}

    def test_id_is_accepted_as_identifier(self):
        assert Option.from_dict({"id": 7}).name == "7"

    def test_missing_identifier_rejected(self):
        with pytest.raises(InputError) as exc:
            Option.from_dict({"cost": 100}, index=2)
        assert "option #2 has no name or id" in exc.value.problems

    def test_blank_name_rejected(self):
        with pytest.raises(InputError):
            Option.from_dict({"name": "   "})

    def test_non_numeric_cost_rejected(self):
        with pytest.raises(InputError):
            Option.from_dict({"name": "A", "cost": "cheap"})

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_non_finite_cost_rejected(self, value):
        with pytest.raises(InputError) as exc:
            Option.from_dict({"name": "A", "cost": value}, index=0)
        assert exc.value.problems == ["option #0 (A) has a non-finite cost"]

    def test_non_finite_field_rejected_even_when_nested(self):
        with pytest.raises(InputError) as exc:
            Option.from_dict({
                "name": "B",
                "performance": float("nan"),
                "scores": {"security": [1.0, float("-inf")]},
            }, index=1)
        assert exc.value.problems == [
            "option #1 (B) has a non-finite number in performance",
            "option #1 (B) has a non-finite number in scores",
        ]

    def test_set_features_are_sorted(self):
        option = Option.from_dict({"name": "A", "features": {"b", "a"}})
        assert option.features == ("a", "b")

    def test_nested_caller_data_is_copied(self):
        data = {"name": "A", "pricing": {"cost": 25}}
        option = Option.from_dict(data)
        data["pricing"]["cost"] = 99
        assert option.get("pricing") == {"cost": 25}

    def test_attributes_are_read_only(self):
        option = Option.from_dict({"name": "A", "performance": 8})
        with pytest.raises(TypeError):
            option.attributes["performance"] = 1

    def test_with_attributes_returns_new_option(self):
        option = Option.from_dict({"name": "A", "performance": 8})
        updated = option.with_attributes(health={"available": True})
        assert "health" not in option.attributes
        assert updated.get("health") == {"available": True}
        assert updated.get("performance") == 8

    def test_to_dict_round_trips_fields(self):
        data = {"name": "A", "cost": 100.0, "features": ["x"], "performance": 8}
        assert Option.from_dict(data).to_dict() == data


class TestConstraints:
    """Test constraint parsing and weight resolution"""

    def test_empty_means_no_constraints(self):
        constraints = Constraints.from_dict(None)
        assert constraints.max_cost is None
        assert constraints.required_features == ()
        assert dict(constraints.weights) == {}

    def test_camel_and_snake_case_keys(self):
        camel = Constraints.from_dict({"maxCost": 50, "requiredFeatures": ["sso"]})
        snake = Constraints.from_dict({"max_cost": 50, "required_features": ["sso"]})
        assert camel.max_cost == snake.max_cost == 50.0
        assert camel.required_features == snake.required_features == ("sso",)

    def test_unknown_keys_ignored(self):
        constraints = Constraints.from_dict({"maxLatency": 10})
        assert constraints.max_cost is None
        assert constraints.to_dict() == {}

    def test_bad_values_rejected(self):
        with pytest.raises(InputError) as exc:
            Constraints.from_dict({"maxCost": "lots", "weights": {"cost": "high"}})
        assert len(exc.value.problems) == 2

    @pytest.mark.parametrize("required", [5, 2.5, {"sso": True}, b"sso"])
    def test_required_features_must_be_a_list(self, required):
        with pytest.raises(InputError) as exc:
            Constraints.from_dict({"requiredFeatures": required})
        assert exc.value.problems == ["requiredFeatures must be a list"]

    def test_required_features_accepts_single_name_and_sets(self):
        assert Constraints.from_dict({"requiredFeatures": "sso"}).required_features == ("sso",)
        assert Constraints.from_dict({"requiredFeatures": {"b", "a"}}).required_features == ("a", "b")

    def test_non_finite_limits_rejected(self):
        with pytest.raises(InputError) as exc:
            Constraints.from_dict({"maxCost": float("inf"), "weights": {"cost": float("nan")}})
        assert exc.value.problems == [
            "maxCost must be a finite number",
            "weight for cost must be a finite number",
        ]

    def test_default_weight_is_equal_share(self):
        constraints = Constraints.from_dict({"weights": {"cost": 0.6}})
        assert constraints.weight_for("cost", 4) == 0.6
        assert constraints.weight_for("performance", 4) == 0.25

    def test_explicit_zero_weight_is_kept(self):
        constraints = Constraints.from_dict({"weights": {"cost": 0}})
        assert constraints.weight_for("cost", 2) == 0.0


class TestScores:
    """Test criterion score construction"""

    def test_weighted_is_raw_times_weight(self):
        score = CriterionScore.from_raw(RawScore(8.0, "fast"), 0.25)
        assert score.weighted == 2.0
        assert score.available

    def test_unavailable_is_lowest_and_flagged(self):
        score = CriterionScore.unavailable("timeout")
        assert score.raw == 0.0
        assert score.weighted == 0.0
        assert not score.available
        assert "timeout" in score.explanation


class TestTradeoffSerialization:
    def test_summary_text(self):
        tradeoff = Tradeoff("A", "B", ["performance"], ["cost", "security"])
        assert tradeoff.to_dict() == {
            "optionA": "A",
            "optionB": "B",
            "strengthsA": ["performance"],
            "strengthsB": ["cost", "security"],
            "summary": "A excels in performance while B is better for cost, security",
        }
