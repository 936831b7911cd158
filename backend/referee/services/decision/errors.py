"""Decision engine errors.

InputError is a structured rejection raised before any scoring work.
ScorerUnavailable is raised by domain scorers and absorbed by the engine.
ComputationInvariantError signals a bug and is never caught.
"""


class DecisionError(Exception):
    """Base class for decision engine errors."""


class InputError(DecisionError):
    """The comparison request is malformed; nothing was scored."""

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))

    def to_dict(self) -> dict:
        return {"error": "invalid comparison request", "problems": self.problems}


class ScorerUnavailable(DecisionError):
    """A domain scorer could not produce a score for one (option, criterion)."""

    def __init__(self, option_name: str, criterion: str, reason: str):
        self.option_name = option_name
        self.criterion = criterion
        self.reason = reason
        super().__init__(f"{option_name}/{criterion}: {reason}")


class ComputationInvariantError(DecisionError):
    """A derived value disagrees with the values it was computed from."""
