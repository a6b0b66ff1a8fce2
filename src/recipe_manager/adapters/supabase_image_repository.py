"""Supabase repository for recipe image metadata."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from recipe_manager.adapters.supabase_rows import optional_uuid, to_row
from recipe_manager.domain.recipes import RecipeImage
from recipe_manager.services.recipes import ImageRepository


@dataclass
class SupabaseImageRepository(ImageRepository):
    """Supabase implementation for recipe images."""

    client: Client

    def create_image(self, payload: dict[str, object]) -> RecipeImage:
        """Create an image record and return it."""
        response = self.client.table("recipe_images").insert(to_row(payload)).execute()
        if not response.data:
            raise RuntimeError("Failed to create recipe image")
        return _parse_image(response.data[0])

    def get_image(self, image_id: UUID) -> RecipeImage | None:
        """Return an image by id, if present."""
        response = (
            self.client.table("recipe_images")
            .select("*")
            .eq("id", str(image_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_image(response.data[0])

    def update_image(self, image_id: UUID, payload: dict[str, object]) -> RecipeImage:
        """Update an image record and return it."""
        response = (
            self.client.table("recipe_images")
            .update(to_row(payload))
            .eq("id", str(image_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update recipe image")
        return _parse_image(response.data[0])

    def delete_image(self, image_id: UUID) -> None:
        """Delete an image record."""
        self.client.table("recipe_images").delete().eq("id", str(image_id)).execute()

    def list_images(self, recipe_id: UUID) -> list[RecipeImage]:
        """Return images ordered by sort order."""
        response = (
            self.client.table("recipe_images")
            .select("*")
            .eq("recipe_id", str(recipe_id))
            .order("sort_order", desc=False)
            .execute()
        )
        return [_parse_image(row) for row in response.data or []]

    def delete_for_recipe(self, recipe_id: UUID) -> None:
        """Delete every image of a recipe."""
        self.client.table("recipe_images").delete().eq(
            "recipe_id", str(recipe_id)
        ).execute()


def _parse_image(row: dict[str, object]) -> RecipeImage:
    return RecipeImage(
        id=UUID(str(row["id"])),
        recipe_id=UUID(str(row["recipe_id"])),
        image_url=str(row.get("image_url", "")),
        image_type=str(row.get("image_type", "")),
        uploaded_by=str(row.get("uploaded_by", "")),
        instruction_id=optional_uuid(row.get("instruction_id")),
        title=row.get("title"),
        alt_text=row.get("alt_text"),
        is_primary=bool(row.get("is_primary", False)),
        sort_order=int(row.get("sort_order") or 0),
    )
