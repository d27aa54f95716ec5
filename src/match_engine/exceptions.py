"""Custom exception hierarchy for the match engine."""

from __future__ import annotations


class MatchEngineError(Exception):
    """Base exception for all match_engine errors."""


class PlanStructureError(MatchEngineError):
    """A workout plan violates a structural precondition.

    ``problems`` lists every violation found, in plan order.
    """

    def __init__(self, message: str, problems: list[str] | None = None) -> None:
        super().__init__(message)
        self.problems = list(problems or [])


class ActivityDataError(MatchEngineError):
    """An activity payload is not a usable mapping."""
