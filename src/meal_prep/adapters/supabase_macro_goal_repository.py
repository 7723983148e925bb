"""Supabase repository for macro goals."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from meal_prep.adapters.supabase_errors import storage_errors
from meal_prep.domain.goals import MacroGoal
from meal_prep.services.goals import MacroGoalRepository


@dataclass
class SupabaseMacroGoalRepository(MacroGoalRepository):
    """Supabase implementation for macro goals."""

    client: Client

    def get_goals(self, user_id: UUID) -> MacroGoal | None:
        """Return the user's goals if a row exists."""
        with storage_errors():
            response = (
                self.client.table("macro_goals")
                .select("daily_calories, daily_protein, daily_carbs, daily_fats")
                .eq("user_id", str(user_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        row = response.data[0]
        return MacroGoal(
            daily_calories=int(row["daily_calories"]),
            daily_protein=int(row["daily_protein"]),
            daily_carbs=int(row["daily_carbs"]),
            daily_fats=int(row["daily_fats"]),
        )

    def upsert_goals(self, user_id: UUID, goals: MacroGoal) -> None:
        """Create or replace the goals row for the user."""
        with storage_errors():
            self.client.table("macro_goals").upsert(
                {
                    "user_id": str(user_id),
                    "daily_calories": goals.daily_calories,
                    "daily_protein": goals.daily_protein,
                    "daily_carbs": goals.daily_carbs,
                    "daily_fats": goals.daily_fats,
                },
                on_conflict="user_id",
            ).execute()
