"""Typed failures raised by the recipe manager services."""


class RecipeManagerError(Exception):
    """Base class for domain failures surfaced to callers."""

    kind = "error"
    http_status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(RecipeManagerError):
    """A referenced recipe, food, category, ingredient or instruction is missing."""

    kind = "not_found"
    http_status = 404


class NotAuthorizedError(RecipeManagerError):
    """The caller does not own the resource being mutated."""

    kind = "not_authorized"
    http_status = 403


class ValidationFailedError(RecipeManagerError):
    """A required field is missing or a value is out of range."""

    kind = "validation_failed"
    http_status = 400

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class DuplicateSlugError(RecipeManagerError):
    """Category slug collision."""

    kind = "duplicate_slug"
    http_status = 409


class CircularReferenceError(RecipeManagerError):
    """Proposed parent is the category itself or one of its descendants."""

    kind = "circular_reference"
    http_status = 422


class MaxDepthExceededError(RecipeManagerError):
    """Category nesting would exceed the depth cap."""

    kind = "max_depth_exceeded"
    http_status = 422


class HasChildrenError(RecipeManagerError):
    """Category deletion blocked by subcategories."""

    kind = "has_children"
    http_status = 409


class InUseError(RecipeManagerError):
    """Category deletion blocked by recipes referencing it."""

    kind = "in_use"
    http_status = 409
