"""Decision engine records — inputs, derived scores, and the comparison result.

Inputs (Option, Constraints) are frozen and copied out of caller data, so an
evaluation never mutates what it was given. Derived records are built once per
evaluation and serialize to the canonical camelCase shape via to_dict().
"""

import copy
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from numbers import Real
from types import MappingProxyType
from typing import Any

from referee.services.decision.errors import InputError

_RESERVED_KEYS = ("name", "id", "cost", "features")


def _frozen_mapping(data: Mapping | None = None) -> Mapping:
    return MappingProxyType(dict(data or {}))


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _has_non_finite(value: Any) -> bool:
    """True if value, or anything nested in it, is NaN or infinite."""
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, Mapping):
        return any(_has_non_finite(v) for v in value.values())
    if isinstance(value, (list, tuple)):
        return any(_has_non_finite(v) for v in value)
    return False


# ---------- Inputs ----------


@dataclass(frozen=True)
class Option:
    """One candidate being compared."""

    name: str
    cost: float | None = None
    features: tuple[str, ...] | None = None
    attributes: Mapping[str, Any] = field(default_factory=_frozen_mapping)

    @classmethod
    def from_dict(cls, data: Any, index: int | None = None) -> "Option":
        """Build an option from a plain request dict.

        The identifier is taken from ``name`` (or ``id``); every other key
        except ``cost`` and ``features`` is kept in ``attributes``. NaN and
        infinite numbers are rejected wherever they appear.
        """
        label = f"option #{index}" if index is not None else "option"
        if not isinstance(data, Mapping):
            raise InputError([f"{label} must be an object"])

        name = data.get("name", data.get("id"))
        if name is None or not str(name).strip():
            raise InputError([f"{label} has no name or id"])

        problems: list[str] = []
        cost = data.get("cost")
        if cost is not None and not _is_number(cost):
            problems.append(f"{label} ({name}) has a non-numeric cost")
        elif cost is not None and not math.isfinite(cost):
            problems.append(f"{label} ({name}) has a non-finite cost")

        features = data.get("features")
        if features is not None:
            if isinstance(features, (str, bytes)) or not hasattr(features, "__iter__"):
                problems.append(f"{label} ({name}) features must be a list")
            else:
                if isinstance(features, (set, frozenset)):
                    features = sorted(features)
                features = tuple(str(f) for f in features)

        attributes = {
            key: copy.deepcopy(value)
            for key, value in data.items()
            if key not in _RESERVED_KEYS
        }
        for key, value in attributes.items():
            if _has_non_finite(value):
                problems.append(f"{label} ({name}) has a non-finite number in {key}")

        if problems:
            raise InputError(problems)
        return cls(
            name=str(name),
            cost=float(cost) if cost is not None else None,
            features=features,
            attributes=_frozen_mapping(attributes),
        )

    def with_attributes(self, **extra: Any) -> "Option":
        """Return a copy with extra attributes merged in."""
        return replace(self, attributes=_frozen_mapping({**self.attributes, **extra}))

    def get(self, key: str, default: Any = None) -> Any:
        if key == "name":
            return self.name
        if key == "cost":
            return self.cost if self.cost is not None else default
        if key == "features":
            return self.features if self.features is not None else default
        return self.attributes.get(key, default)

    def to_dict(self) -> dict:
        d = {"name": self.name, **self.attributes}
        if self.cost is not None:
            d["cost"] = self.cost
        if self.features is not None:
            d["features"] = list(self.features)
        return d


@dataclass(frozen=True)
class Constraints:
    """Hard filters plus optional per-criterion weights.

    Absent keys mean "no constraint" on that dimension.
    """

    max_cost: float | None = None
    required_features: tuple[str, ...] = ()
    weights: Mapping[str, float] = field(default_factory=_frozen_mapping)

    @classmethod
    def from_dict(cls, data: Mapping | None) -> "Constraints":
        """Accepts camelCase (wire) or snake_case keys; unknown keys are ignored."""
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise InputError(["constraints must be an object"])

        problems: list[str] = []
        max_cost = data.get("maxCost", data.get("max_cost"))
        if max_cost is not None and not _is_number(max_cost):
            problems.append("maxCost must be a number")
            max_cost = None
        elif max_cost is not None and not math.isfinite(max_cost):
            problems.append("maxCost must be a finite number")

        required = data.get("requiredFeatures", data.get("required_features")) or ()
        if isinstance(required, str):
            required = (required,)
        elif isinstance(required, (bytes, Mapping)) or not isinstance(required, Iterable):
            problems.append("requiredFeatures must be a list")
            required = ()
        elif isinstance(required, (set, frozenset)):
            required = sorted(str(f) for f in required)

        weights = data.get("weights") or {}
        if not isinstance(weights, Mapping):
            problems.append("weights must be an object")
            weights = {}
        for criterion, weight in weights.items():
            if not _is_number(weight):
                problems.append(f"weight for {criterion} must be a number")
            elif not math.isfinite(weight):
                problems.append(f"weight for {criterion} must be a finite number")
        if problems:
            raise InputError(problems)

        return cls(
            max_cost=float(max_cost) if max_cost is not None else None,
            required_features=tuple(str(f) for f in required),
            weights=_frozen_mapping({str(k): float(v) for k, v in weights.items()}),
        )

    def weight_for(self, criterion: str, criteria_count: int) -> float:
        """Explicit weight if given, else equal share across the active criteria."""
        if criterion in self.weights:
            return self.weights[criterion]
        return 1.0 / criteria_count if criteria_count else 0.0

    def to_dict(self) -> dict:
        d: dict = {}
        if self.max_cost is not None:
            d["maxCost"] = self.max_cost
        if self.required_features:
            d["requiredFeatures"] = list(self.required_features)
        if self.weights:
            d["weights"] = dict(self.weights)
        return d


# ---------- Scores ----------


@dataclass(frozen=True)
class RawScore:
    """What a domain scorer returns: an unweighted 0-10 value and why."""

    raw: float
    explanation: str


@dataclass(frozen=True)
class CriterionScore:
    """A raw score with its weight applied."""

    raw: float
    weighted: float
    explanation: str
    available: bool = True

    @classmethod
    def from_raw(cls, raw_score: RawScore, weight: float) -> "CriterionScore":
        return cls(
            raw=raw_score.raw,
            weighted=raw_score.raw * weight,
            explanation=raw_score.explanation,
        )

    @classmethod
    def unavailable(cls, reason: str) -> "CriterionScore":
        """Lowest possible score, flagged so it is never mistaken for a real 0."""
        return cls(raw=0.0, weighted=0.0, explanation=f"Score unavailable: {reason}", available=False)

    def to_dict(self) -> dict:
        return {
            "raw": self.raw,
            "weighted": self.weighted,
            "explanation": self.explanation,
            "available": self.available,
        }


@dataclass(frozen=True)
class EvaluatedOption:
    """An option with its per-criterion scores, total, and constraint verdict."""

    option: Option
    scores: Mapping[str, CriterionScore]
    total_score: float
    meets_constraints: bool

    @property
    def name(self) -> str:
        return self.option.name

    def raw(self, criterion: str) -> float:
        score = self.scores.get(criterion)
        return score.raw if score is not None else 0.0

    def to_dict(self) -> dict:
        return {
            **self.option.to_dict(),
            "scores": {c: s.to_dict() for c, s in self.scores.items()},
            "totalScore": self.total_score,
            "meetsConstraints": self.meets_constraints,
        }


# ---------- Outputs ----------


@dataclass
class Recommendation:
    """The winner (or None) with a reason and how decisive the win was.

    ``confidence`` lies in [0.5, 1.0] whenever there is a choice. With no
    valid option there is nothing to be confident about, so it is None
    (serialized as null) alongside ``choice``.
    """

    choice: EvaluatedOption | None
    reason: str
    confidence: float | None = None
    alternatives: list[EvaluatedOption] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "choice": self.choice.to_dict() if self.choice else None,
            "reason": self.reason,
            "confidence": self.confidence,
            "alternatives": [a.to_dict() for a in self.alternatives],
        }


@dataclass
class Tradeoff:
    """A pair where each option leads on a disjoint, non-empty set of criteria."""

    option_a: str
    option_b: str
    strengths_a: list[str]
    strengths_b: list[str]

    @property
    def summary(self) -> str:
        return (
            f"{self.option_a} excels in {', '.join(self.strengths_a)} "
            f"while {self.option_b} is better for {', '.join(self.strengths_b)}"
        )

    def to_dict(self) -> dict:
        return {
            "optionA": self.option_a,
            "optionB": self.option_b,
            "strengthsA": list(self.strengths_a),
            "strengthsB": list(self.strengths_b),
            "summary": self.summary,
        }


@dataclass
class TopChoice:
    name: str
    score: float
    key_strength: str | None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "score": round(self.score, 2),
            "keyStrength": self.key_strength,
        }


@dataclass
class Summary:
    """Distribution statistics across the whole option set."""

    total_options: int = 0
    valid_options: int = 0
    top_choices: list[TopChoice] = field(default_factory=list)
    criterion_averages: dict[str, float] = field(default_factory=dict)
    strongest_criterion: str | None = None
    key_insight: str = ""

    def to_dict(self) -> dict:
        return {
            "totalOptions": self.total_options,
            "validOptions": self.valid_options,
            "topChoices": [t.to_dict() for t in self.top_choices],
            "criterionAverages": {c: round(v, 2) for c, v in self.criterion_averages.items()},
            "strongestCriterion": self.strongest_criterion,
            "keyInsight": self.key_insight,
        }


@dataclass
class ComparisonResult:
    """Complete output of one evaluation."""

    comparison: list[EvaluatedOption]
    recommendation: Recommendation
    tradeoffs: list[Tradeoff]
    summary: Summary

    def to_dict(self) -> dict:
        return {
            "comparison": [o.to_dict() for o in self.comparison],
            "recommendation": self.recommendation.to_dict(),
            "tradeoffs": [t.to_dict() for t in self.tradeoffs],
            "summary": self.summary.to_dict(),
        }
