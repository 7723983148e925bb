"""Macro goal domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MacroGoal:
    """Daily macro targets for a user."""

    daily_calories: int = 2000
    daily_protein: int = 150
    daily_carbs: int = 200
    daily_fats: int = 65
