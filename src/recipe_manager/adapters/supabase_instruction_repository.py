"""Supabase repository for recipe instructions."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from recipe_manager.adapters.supabase_rows import optional_float, string_list, to_row
from recipe_manager.domain.recipes import RecipeInstruction
from recipe_manager.services.recipes import InstructionRepository


@dataclass
class SupabaseInstructionRepository(InstructionRepository):
    """Supabase implementation for recipe instructions."""

    client: Client

    def create_instruction(self, payload: dict[str, object]) -> RecipeInstruction:
        """Create an instruction and return it."""
        response = (
            self.client.table("recipe_instructions").insert(to_row(payload)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create recipe instruction")
        return _parse_instruction(response.data[0])

    def get_instruction(self, instruction_id: UUID) -> RecipeInstruction | None:
        """Return an instruction by id, if present."""
        response = (
            self.client.table("recipe_instructions")
            .select("*")
            .eq("id", str(instruction_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_instruction(response.data[0])

    def update_instruction(
        self, instruction_id: UUID, payload: dict[str, object]
    ) -> RecipeInstruction:
        """Update an instruction and return it."""
        response = (
            self.client.table("recipe_instructions")
            .update(to_row(payload))
            .eq("id", str(instruction_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update recipe instruction")
        return _parse_instruction(response.data[0])

    def delete_instruction(self, instruction_id: UUID) -> None:
        """Delete an instruction."""
        self.client.table("recipe_instructions").delete().eq(
            "id", str(instruction_id)
        ).execute()

    def list_instructions(self, recipe_id: UUID) -> list[RecipeInstruction]:
        """Return instructions ordered by step number."""
        response = (
            self.client.table("recipe_instructions")
            .select("*")
            .eq("recipe_id", str(recipe_id))
            .order("step_number", desc=False)
            .execute()
        )
        return [_parse_instruction(row) for row in response.data or []]

    def delete_for_recipe(self, recipe_id: UUID) -> None:
        """Delete every instruction of a recipe."""
        self.client.table("recipe_instructions").delete().eq(
            "recipe_id", str(recipe_id)
        ).execute()


def _parse_instruction(row: dict[str, object]) -> RecipeInstruction:
    return RecipeInstruction(
        id=UUID(str(row["id"])),
        recipe_id=UUID(str(row["recipe_id"])),
        step_number=int(row["step_number"]),
        description=str(row.get("description", "")),
        title=row.get("title"),
        duration_minutes=optional_float(row.get("duration_minutes")),
        temperature_celsius=optional_float(row.get("temperature_celsius")),
        technique=row.get("technique"),
        equipment=string_list(row.get("equipment")),
        tips=string_list(row.get("tips")),
        warning=row.get("warning"),
        is_critical=bool(row.get("is_critical", False)),
        group_name=row.get("group_name"),
    )
