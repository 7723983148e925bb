"""Macro goal service."""

from dataclasses import dataclass, fields
from typing import Protocol
from uuid import UUID

from meal_prep.domain.goals import MacroGoal


class MacroGoalRepository(Protocol):
    """Persistence interface for macro goals."""

    def get_goals(self, user_id: UUID) -> MacroGoal | None:
        """Return the stored goals for a user."""

    def upsert_goals(self, user_id: UUID, goals: MacroGoal) -> None:
        """Create or replace a user's goals."""


@dataclass
class MacroGoalService:
    """Service for a user's daily macro targets."""

    repository: MacroGoalRepository

    def get_goals(self, user_id: UUID) -> MacroGoal:
        """Return the user's goals or the defaults if none are stored."""
        return self.repository.get_goals(user_id) or MacroGoal()

    def update_goals(self, user_id: UUID, goals: MacroGoal) -> MacroGoal:
        """Persist new goals for the user."""
        for goal_field in fields(goals):
            if getattr(goals, goal_field.name) < 0:
                raise ValueError(f"{goal_field.name} must be non-negative")
        self.repository.upsert_goals(user_id, goals)
        return goals
