"""Domain models."""

from .training import PlanSuggestion, TrainingSession, TrainingSet, User

__all__ = [
    "User",
    "TrainingSession",
    "TrainingSet",
    "PlanSuggestion",
]
