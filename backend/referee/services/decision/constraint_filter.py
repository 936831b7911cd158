"""Constraint filter — hard pass/fail predicates applied before ranking.

Each checker is an independent predicate; an option meets the constraints
only when every checker passes. A constraint that is not set passes
trivially.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from referee.services.decision.models import Constraints, Option

logger = logging.getLogger(__name__)


@dataclass
class ConstraintCheckResult:
    constraint: str
    passed: bool
    details: str


class ConstraintChecker(ABC):
    name: str = ""

    @abstractmethod
    def check(self, option: Option, constraints: Constraints) -> ConstraintCheckResult:
        ...


class MaxCostChecker(ConstraintChecker):
    name = "maxCost"

    def check(self, option, constraints) -> ConstraintCheckResult:
        if constraints.max_cost is None:
            return ConstraintCheckResult(self.name, True, "No cost limit")
        if option.cost is None:
            return ConstraintCheckResult(self.name, True, "Option has no cost to check")
        passed = option.cost <= constraints.max_cost
        return ConstraintCheckResult(
            self.name,
            passed,
            f"Cost {option.cost:g} {'within' if passed else 'exceeds'} limit {constraints.max_cost:g}",
        )


class RequiredFeaturesChecker(ConstraintChecker):
    name = "requiredFeatures"

    def check(self, option, constraints) -> ConstraintCheckResult:
        required = constraints.required_features
        if not required:
            return ConstraintCheckResult(self.name, True, "No required features")
        available = set(option.features or ())
        missing = [f for f in required if f not in available]
        if missing:
            return ConstraintCheckResult(self.name, False, f"Missing features: {', '.join(missing)}")
        return ConstraintCheckResult(self.name, True, "All required features present")


class ConstraintFilter:
    """Evaluates the conjunction of all constraint checkers for an option.

    ``extra`` checkers (a domain's own hard requirements) run after the
    configured ones.
    """

    def __init__(self, checkers: list[ConstraintChecker] | None = None):
        self.checkers = checkers or [MaxCostChecker(), RequiredFeaturesChecker()]

    def check_all(
        self, option: Option, constraints: Constraints, extra: Sequence[ConstraintChecker] = ()
    ) -> list[ConstraintCheckResult]:
        return [checker.check(option, constraints) for checker in [*self.checkers, *extra]]

    def meets_constraints(
        self, option: Option, constraints: Constraints, extra: Sequence[ConstraintChecker] = ()
    ) -> bool:
        failed = [r for r in self.check_all(option, constraints, extra) if not r.passed]
        for result in failed:
            logger.debug(f"{option.name} excluded by {result.constraint}: {result.details}")
        return not failed


constraint_filter = ConstraintFilter()
