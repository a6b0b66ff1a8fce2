"""Recipe category tree: slugs, materialized paths and cycle checks."""

import logging
import re
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from recipe_manager.domain.categories import (
    MAX_CATEGORY_LEVEL,
    BreadcrumbEntry,
    CategoryFilters,
    CategoryNode,
    CategoryStats,
    RecipeCategory,
)
from recipe_manager.domain.errors import (
    CircularReferenceError,
    DuplicateSlugError,
    HasChildrenError,
    InUseError,
    MaxDepthExceededError,
    NotFoundError,
    ValidationFailedError,
)
from recipe_manager.domain.pagination import (
    Page,
    PageRequest,
    Pagination,
    validate_page_request,
)

if TYPE_CHECKING:
    from recipe_manager.services.recipes import RecipeRepository

_logger = logging.getLogger(__name__)

_COLOR_HEX = re.compile(r"^#[0-9A-Fa-f]{6}$")
_EDITABLE_FIELDS = frozenset(
    {
        "name",
        "slug",
        "description",
        "parent_id",
        "icon_name",
        "color_hex",
        "sort_order",
        "is_active",
    }
)


class CategoryRepository(Protocol):
    """Persistence interface for recipe categories."""

    def create_category(self, payload: dict[str, object]) -> RecipeCategory:
        """Create a category and return it."""

    def get_category(self, category_id: UUID) -> RecipeCategory | None:
        """Return a category by id, if present."""

    def get_by_slug(self, slug: str) -> RecipeCategory | None:
        """Return the category holding slug, if any."""

    def update_category(
        self, category_id: UUID, payload: dict[str, object]
    ) -> RecipeCategory:
        """Update a category and return it."""

    def delete_category(self, category_id: UUID) -> None:
        """Delete a category."""

    def list_children(
        self, parent_id: UUID | None, active_only: bool = True
    ) -> list[RecipeCategory]:
        """Return direct children ordered by sort order then name."""

    def count_children(self, parent_id: UUID) -> int:
        """Return how many categories have parent_id as parent."""

    def list_categories(self, active_only: bool = True) -> list[RecipeCategory]:
        """Return every category."""

    def search_categories(
        self, filters: CategoryFilters, page: PageRequest
    ) -> tuple[list[RecipeCategory], int]:
        """Return one page of matching categories and the total match count."""


def generate_slug(name: str) -> str:
    """Derive a URL-safe slug: 'Quick & Easy  Meals' -> 'quick-easy-meals'."""
    slug = name.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def child_path(parent_path: str, slug: str) -> str:
    """Return the materialized path of slug under parent_path."""
    return f"{parent_path}/{slug}"


@dataclass
class CategoryIndex:
    """Id-based view of the category tree built from flat records.

    Holds ids only in the adjacency map; records stay owned by the store.
    """

    by_id: dict[UUID, RecipeCategory] = field(default_factory=dict)
    children: dict[UUID | None, list[UUID]] = field(default_factory=dict)

    @classmethod
    def build(cls, categories: Iterable[RecipeCategory]) -> "CategoryIndex":
        """Index categories by id and by parent id."""
        index = cls()
        ordered = sorted(categories, key=lambda item: (item.sort_order, item.name))
        for category in ordered:
            index.by_id[category.id] = category
            index.children.setdefault(category.parent_id, []).append(category.id)
        return index

    def get(self, category_id: UUID) -> RecipeCategory | None:
        """Return an indexed category."""
        return self.by_id.get(category_id)

    def ancestors(self, category_id: UUID) -> list[RecipeCategory]:
        """Return the ancestors of a category, root first."""
        chain: list[RecipeCategory] = []
        current = self.by_id.get(category_id)
        steps = 0
        while current is not None and current.parent_id is not None:
            steps += 1
            if steps > len(self.by_id):
                raise CircularReferenceError(
                    f"Ancestor chain of category {category_id} does not terminate"
                )
            parent = self.by_id.get(current.parent_id)
            if parent is None:
                break
            chain.append(parent)
            current = parent
        chain.reverse()
        return chain

    def would_create_cycle(self, category_id: UUID, new_parent_id: UUID) -> bool:
        """Return whether parenting category_id under new_parent_id loops."""
        if category_id == new_parent_id:
            return True
        return any(
            ancestor.id == category_id for ancestor in self.ancestors(new_parent_id)
        )

    def descendants(self, category_id: UUID) -> list[RecipeCategory]:
        """Return all descendants breadth first, parents before children."""
        found: list[RecipeCategory] = []
        queue = deque(self.children.get(category_id, []))
        while queue:
            child_id = queue.popleft()
            found.append(self.by_id[child_id])
            queue.extend(self.children.get(child_id, []))
        return found

    def subtree_height(self, category_id: UUID) -> int:
        """Return how many levels sit below category_id (0 for a leaf)."""
        base = self.by_id[category_id].level
        return max(
            (item.level - base for item in self.descendants(category_id)), default=0
        )


def build_tree(categories: Iterable[RecipeCategory]) -> list[CategoryNode]:
    """Materialize active categories into nested nodes.

    One pass indexes every active node, a second attaches each node to its
    parent. Nodes whose parent is inactive or missing are left out.
    """
    active = sorted(
        (item for item in categories if item.is_active),
        key=lambda item: (item.level, item.sort_order, item.name),
    )
    nodes = {item.id: CategoryNode(category=item) for item in active}
    roots: list[CategoryNode] = []
    for item in active:
        node = nodes[item.id]
        if item.parent_id is None:
            roots.append(node)
            continue
        parent = nodes.get(item.parent_id)
        if parent is not None:
            parent.children.append(node)
    return roots


@dataclass
class CategoryService:
    """Maintains category slugs, levels and paths on every mutation."""

    repository: CategoryRepository
    recipe_repository: "RecipeRepository"
    max_page_limit: int = 100

    def create_category(self, payload: dict[str, object]) -> RecipeCategory:
        """Create a root or child category."""
        name = str(payload.get("name") or "").strip()
        if not name:
            raise ValidationFailedError("Category name is required")
        slug = _normalize_slug(payload.get("slug")) or generate_slug(name)
        if not slug:
            raise ValidationFailedError(f"Cannot derive a slug from name {name!r}")
        _validate_color(payload.get("color_hex"))
        if self.repository.get_by_slug(slug) is not None:
            raise DuplicateSlugError(f"A category with slug {slug!r} already exists")

        parent_id = _as_uuid(payload.get("parent_id"))
        path, level = f"/{slug}", 0
        if parent_id is not None:
            parent = self.repository.get_category(parent_id)
            if parent is None:
                raise NotFoundError(f"Parent category {parent_id} not found")
            if parent.level >= MAX_CATEGORY_LEVEL:
                raise MaxDepthExceededError(
                    f"Categories cannot be nested deeper than "
                    f"{MAX_CATEGORY_LEVEL + 1} levels"
                )
            path, level = child_path(parent.path, slug), parent.level + 1

        category = self.repository.create_category(
            {
                "name": name,
                "slug": slug,
                "description": payload.get("description"),
                "parent_id": parent_id,
                "icon_name": payload.get("icon_name"),
                "color_hex": payload.get("color_hex"),
                "sort_order": int(payload.get("sort_order") or 0),
                "is_active": payload.get("is_active") is not False,
                "path": path,
                "level": level,
            }
        )
        _logger.info("Created category %s at %s", category.id, category.path)
        return category

    def get_category(self, category_id: UUID) -> RecipeCategory:
        """Return a category or raise ``NotFoundError``."""
        category = self.repository.get_category(category_id)
        if category is None:
            raise NotFoundError(f"Category {category_id} not found")
        return category

    def get_by_slug(self, slug: str) -> RecipeCategory:
        """Return an active category by slug."""
        category = self.repository.get_by_slug(slug)
        if category is None or not category.is_active:
            raise NotFoundError(f"Category {slug!r} not found")
        return category

    def update_category(  # noqa: PLR0912
        self, category_id: UUID, payload: dict[str, object]
    ) -> RecipeCategory:
        """Update a category, re-deriving its path and its descendants' paths."""
        category = self.get_category(category_id)
        changes = {
            key: value for key, value in payload.items() if key in _EDITABLE_FIELDS
        }

        if "name" in changes:
            changes["name"] = str(changes["name"] or "").strip()
            if not changes["name"]:
                raise ValidationFailedError("Category name is required")
        if "color_hex" in changes:
            _validate_color(changes["color_hex"])

        new_slug = category.slug
        explicit_slug = _normalize_slug(changes.get("slug"))
        if explicit_slug:
            new_slug = explicit_slug
        elif "name" in changes and changes["name"] != category.name:
            new_slug = generate_slug(str(changes["name"])) or category.slug
        changes["slug"] = new_slug
        if new_slug != category.slug:
            existing = self.repository.get_by_slug(new_slug)
            if existing is not None and existing.id != category_id:
                raise DuplicateSlugError(
                    f"A category with slug {new_slug!r} already exists"
                )

        new_parent_id = category.parent_id
        if "parent_id" in changes:
            new_parent_id = _as_uuid(changes["parent_id"])
            changes["parent_id"] = new_parent_id
        parent_changed = new_parent_id != category.parent_id
        if not parent_changed and new_slug == category.slug:
            return self.repository.update_category(category_id, changes)

        index = CategoryIndex.build(self.repository.list_categories(active_only=False))
        if new_parent_id is None:
            parent_path, level = "", 0
        else:
            parent = index.get(new_parent_id)
            if parent is None:
                raise NotFoundError(f"Parent category {new_parent_id} not found")
            if parent_changed and index.would_create_cycle(category_id, new_parent_id):
                raise CircularReferenceError(
                    f"Category {category_id} cannot be moved under its own subtree"
                )
            parent_path, level = parent.path, parent.level + 1
        depth = level + index.subtree_height(category_id)
        if parent_changed and depth > MAX_CATEGORY_LEVEL:
            raise MaxDepthExceededError(
                f"Moving category {category_id} would exceed "
                f"{MAX_CATEGORY_LEVEL + 1} levels"
            )

        changes["path"] = child_path(parent_path, new_slug)
        changes["level"] = level
        updated = self.repository.update_category(category_id, changes)
        if updated.path != category.path or updated.level != category.level:
            self._cascade_paths(index, updated)
        return updated

    def delete_category(self, category_id: UUID) -> None:
        """Delete a category without children or recipes."""
        self.get_category(category_id)
        children = self.repository.count_children(category_id)
        if children > 0:
            raise HasChildrenError(
                f"Cannot delete category: it has {children} subcategories"
            )
        recipes = self.recipe_repository.count_by_category(category_id)
        if recipes > 0:
            raise InUseError(f"Cannot delete category: {recipes} recipes are using it")
        self.repository.delete_category(category_id)
        _logger.info("Deleted category %s", category_id)

    def get_tree(self) -> list[CategoryNode]:
        """Return the nested tree of active categories."""
        return build_tree(self.repository.list_categories(active_only=True))

    def get_roots(self) -> list[RecipeCategory]:
        """Return active root categories."""
        return self.repository.list_children(None, active_only=True)

    def get_with_children(self, category_id: UUID) -> CategoryNode:
        """Return a category with its active direct children."""
        category = self.get_category(category_id)
        children = self.repository.list_children(category_id, active_only=True)
        return CategoryNode(
            category=category,
            children=[CategoryNode(category=child) for child in children],
        )

    def get_breadcrumb(self, category_id: UUID) -> list[BreadcrumbEntry]:
        """Return the ancestors of a category, root first, followed by itself."""
        chain = [self.get_category(category_id)]
        while chain[-1].parent_id is not None:
            if len(chain) > MAX_CATEGORY_LEVEL:
                raise CircularReferenceError(
                    f"Ancestor chain of category {category_id} exceeds the depth cap"
                )
            parent = self.repository.get_category(chain[-1].parent_id)
            if parent is None:
                break
            chain.append(parent)
        return [
            BreadcrumbEntry(id=item.id, name=item.name, slug=item.slug, path=item.path)
            for item in reversed(chain)
        ]

    def search_categories(
        self, filters: CategoryFilters, page: PageRequest
    ) -> Page[RecipeCategory]:
        """Return a page of categories matching filters."""
        request = validate_page_request(page, self.max_page_limit)
        items, total = self.repository.search_categories(filters, request)
        return Page(items=items, pagination=Pagination.from_total(request, total))

    def reorder_categories(
        self, parent_id: UUID | None, orders: list[tuple[UUID, int]]
    ) -> list[RecipeCategory]:
        """Assign sort orders to siblings under parent_id."""
        siblings = {
            item.id
            for item in self.repository.list_children(parent_id, active_only=False)
        }
        unknown = [
            str(category_id) for category_id, _ in orders if category_id not in siblings
        ]
        if unknown:
            raise ValidationFailedError(
                "Only direct children of the parent can be reordered", details=unknown
            )
        return [
            self.repository.update_category(category_id, {"sort_order": sort_order})
            for category_id, sort_order in orders
        ]

    def refresh_recipe_count(self, category_id: UUID) -> int:
        """Store the number of public recipes in the category."""
        self.get_category(category_id)
        count = self.recipe_repository.count_by_category(category_id, public_only=True)
        self.repository.update_category(category_id, {"recipe_count": count})
        return count

    def get_stats(self, category_id: UUID) -> CategoryStats:
        """Return recipe and subcategory counts for a category."""
        category = self.get_category(category_id)
        return self._stats_for(category)

    def get_all_stats(self) -> list[CategoryStats]:
        """Return stats for every active category, by level then name."""
        stats = [
            self._stats_for(category)
            for category in self.repository.list_categories(active_only=True)
        ]
        return sorted(stats, key=lambda item: (item.level, item.name))

    def _stats_for(self, category: RecipeCategory) -> CategoryStats:
        children = self.repository.list_children(category.id, active_only=True)
        return CategoryStats(
            id=category.id,
            name=category.name,
            level=category.level,
            public_recipes=self.recipe_repository.count_by_category(
                category.id, public_only=True
            ),
            total_recipes=self.recipe_repository.count_by_category(category.id),
            subcategories=len(children),
        )

    def _cascade_paths(self, index: CategoryIndex, root: RecipeCategory) -> None:
        """Rewrite level and path of every descendant of root.

        Not atomic: a failure part way leaves deeper paths stale until the
        next structural update of their branch.
        """
        index.by_id[root.id] = root
        updated = 0
        for child in index.descendants(root.id):
            parent = index.by_id[child.parent_id]  # type: ignore[index]
            path = child_path(parent.path, child.slug)
            level = parent.level + 1
            if path == child.path and level == child.level:
                continue
            index.by_id[child.id] = self.repository.update_category(
                child.id, {"path": path, "level": level}
            )
            updated += 1
        _logger.info("Propagated path %s to %s descendants", root.path, updated)


def _normalize_slug(raw: object) -> str:
    if raw is None:
        return ""
    return str(raw).strip().lower()


def _validate_color(raw: object) -> None:
    if raw is not None and not _COLOR_HEX.match(str(raw)):
        raise ValidationFailedError("color_hex must look like #RRGGBB")


def _as_uuid(value: object) -> UUID | None:
    if value is None or value == "":
        return None
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationFailedError(f"Invalid id: {value!r}") from None
