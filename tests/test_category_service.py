"""Tests for the recipe category tree."""

from uuid import uuid4

import pytest

from recipe_manager.domain.categories import CategoryFilters
from recipe_manager.domain.errors import (
    CircularReferenceError,
    DuplicateSlugError,
    HasChildrenError,
    InUseError,
    MaxDepthExceededError,
    NotFoundError,
    ValidationFailedError,
)
from recipe_manager.domain.pagination import PageRequest
from recipe_manager.services.categories import generate_slug
from tests.conftest import OWNER


def _chain(category_service, depth: int) -> list:
    created = []
    parent_id = None
    for number in range(depth):
        category = category_service.create_category(
            {"name": f"Level {number}", "parent_id": parent_id}
        )
        created.append(category)
        parent_id = category.id
    return created


def test_generate_slug() -> None:
    assert generate_slug("Quick & Easy  Meals") == "quick-easy-meals"
    assert generate_slug("  Crème brûlée!  ") == "crme-brle"


def test_desserts_scenario(category_service) -> None:
    desserts = category_service.create_category({"name": "Desserts"})
    gateaux = category_service.create_category(
        {"name": "Gateaux", "parent_id": desserts.id}
    )

    assert desserts.path == "/desserts"
    assert (gateaux.path, gateaux.level) == ("/desserts/gateaux", 1)

    category_service.update_category(desserts.id, {"slug": "sweets"})

    moved = category_service.get_category(gateaux.id)
    assert moved.path == "/sweets/gateaux"
    assert moved.level == 1


def test_rename_without_slug_regenerates_slug(category_service) -> None:
    desserts = category_service.create_category({"name": "Desserts"})
    cakes = category_service.create_category(
        {"name": "Cakes", "parent_id": desserts.id}
    )

    category_service.update_category(desserts.id, {"name": "Sweet Things"})

    assert category_service.get_category(desserts.id).slug == "sweet-things"
    assert category_service.get_category(cakes.id).path == "/sweet-things/cakes"


def test_duplicate_slug_is_rejected_without_changes(
    category_service, category_repository
) -> None:
    category_service.create_category({"name": "Desserts"})
    soups = category_service.create_category({"name": "Soups"})
    writes = category_repository.writes

    with pytest.raises(DuplicateSlugError):
        category_service.create_category({"name": "Desserts"})
    with pytest.raises(DuplicateSlugError):
        category_service.update_category(soups.id, {"slug": "desserts"})

    assert category_repository.writes == writes
    assert category_service.get_category(soups.id).slug == "soups"


def test_create_validates_input(category_service) -> None:
    with pytest.raises(ValidationFailedError):
        category_service.create_category({"name": ""})
    with pytest.raises(ValidationFailedError):
        category_service.create_category({"name": "Red", "color_hex": "red"})
    with pytest.raises(NotFoundError):
        category_service.create_category({"name": "Orphan", "parent_id": uuid4()})


def test_max_depth_on_create(category_service) -> None:
    chain = _chain(category_service, 5)

    assert chain[-1].level == 4
    assert chain[-1].path == "/level-0/level-1/level-2/level-3/level-4"
    with pytest.raises(MaxDepthExceededError):
        category_service.create_category(
            {"name": "Too deep", "parent_id": chain[-1].id}
        )


def test_max_depth_on_move_counts_subtree(category_service) -> None:
    chain = _chain(category_service, 4)
    branch = category_service.create_category({"name": "Branch"})
    category_service.create_category({"name": "Leaf", "parent_id": branch.id})

    with pytest.raises(MaxDepthExceededError):
        category_service.update_category(branch.id, {"parent_id": chain[-1].id})


def test_reparenting_under_descendant_is_a_cycle(category_service) -> None:
    root, child, grandchild = _chain(category_service, 3)

    with pytest.raises(CircularReferenceError):
        category_service.update_category(root.id, {"parent_id": grandchild.id})
    with pytest.raises(CircularReferenceError):
        category_service.update_category(child.id, {"parent_id": child.id})

    assert category_service.get_category(root.id).parent_id is None


def test_move_to_root_and_back(category_service) -> None:
    root, child, grandchild = _chain(category_service, 3)

    moved = category_service.update_category(child.id, {"parent_id": None})

    assert (moved.path, moved.level) == ("/level-1", 0)
    below = category_service.get_category(grandchild.id)
    assert (below.path, below.level) == ("/level-1/level-2", 1)

    category_service.update_category(child.id, {"parent_id": root.id})
    assert category_service.get_category(grandchild.id).level == 2


def test_paths_follow_ancestor_slugs(category_service, category_repository) -> None:
    root, child, grandchild = _chain(category_service, 3)
    other = category_service.create_category({"name": "Other"})

    category_service.update_category(child.id, {"parent_id": other.id})

    categories = category_repository.categories
    for category in categories.values():
        slugs = [category.slug]
        parent_id = category.parent_id
        while parent_id is not None:
            parent = categories[parent_id]
            slugs.append(parent.slug)
            parent_id = parent.parent_id
        assert category.path == "/" + "/".join(reversed(slugs))
        assert category.level == len(slugs) - 1


def test_delete_requires_no_children(category_service) -> None:
    desserts = category_service.create_category({"name": "Desserts"})
    gateaux = category_service.create_category(
        {"name": "Gateaux", "parent_id": desserts.id}
    )

    with pytest.raises(HasChildrenError):
        category_service.delete_category(desserts.id)

    category_service.delete_category(gateaux.id)
    category_service.delete_category(desserts.id)

    with pytest.raises(NotFoundError):
        category_service.get_category(desserts.id)


def test_delete_requires_no_recipes(category_service, recipe_service) -> None:
    breads = category_service.create_category({"name": "Breads"})
    recipe_service.create_recipe(
        {"name": "Bread", "servings": 4, "category_id": breads.id}, OWNER
    )

    with pytest.raises(InUseError):
        category_service.delete_category(breads.id)


def test_tree_roots_and_breadcrumb(category_service) -> None:
    desserts = category_service.create_category({"name": "Desserts", "sort_order": 2})
    category_service.create_category({"name": "Appetizers", "sort_order": 1})
    cakes = category_service.create_category(
        {"name": "Cakes", "parent_id": desserts.id}
    )
    category_service.create_category(
        {"name": "Hidden", "parent_id": desserts.id, "is_active": False}
    )

    tree = category_service.get_tree()
    roots = category_service.get_roots()
    node = category_service.get_with_children(desserts.id)
    breadcrumb = category_service.get_breadcrumb(cakes.id)

    assert [item.category.name for item in tree] == ["Appetizers", "Desserts"]
    assert [item.category.name for item in tree[1].children] == ["Cakes"]
    assert [item.name for item in roots] == ["Appetizers", "Desserts"]
    assert [child.category.id for child in node.children] == [cakes.id]
    assert [entry.slug for entry in breadcrumb] == ["desserts", "cakes"]


def test_get_by_slug_only_returns_active(category_service) -> None:
    desserts = category_service.create_category({"name": "Desserts"})
    category_service.create_category({"name": "Archive", "is_active": False})

    with pytest.raises(NotFoundError):
        category_service.get_by_slug("archive")
    assert category_service.get_by_slug("desserts").id == desserts.id


def test_search_categories(category_service) -> None:
    desserts = category_service.create_category({"name": "Desserts"})
    category_service.create_category({"name": "Dessert Wines"})
    category_service.create_category({"name": "Cakes", "parent_id": desserts.id})

    page = category_service.search_categories(
        CategoryFilters(search="dessert"), PageRequest(sort_by="name")
    )
    roots = category_service.search_categories(
        CategoryFilters(filter_by_parent=True), PageRequest()
    )

    assert page.pagination.total_items == 2
    assert roots.pagination.total_items == 2


def test_search_categories_by_active_flag(category_service) -> None:
    category_service.create_category({"name": "Live"})
    category_service.create_category({"name": "Archive", "is_active": False})

    inactive = category_service.search_categories(
        CategoryFilters(is_active=False), PageRequest()
    )
    everything = category_service.search_categories(
        CategoryFilters(is_active=None), PageRequest()
    )

    assert [item.name for item in inactive.items] == ["Archive"]
    assert {item.name for item in everything.items} == {"Archive", "Live"}


def test_reorder_categories(category_service) -> None:
    first = category_service.create_category({"name": "First", "sort_order": 1})
    second = category_service.create_category({"name": "Second", "sort_order": 2})
    nested = category_service.create_category({"name": "Nested", "parent_id": first.id})

    category_service.reorder_categories(None, [(first.id, 5), (second.id, 0)])

    assert [item.name for item in category_service.get_roots()] == ["Second", "First"]
    with pytest.raises(ValidationFailedError):
        category_service.reorder_categories(None, [(nested.id, 1)])


def test_recipe_counts_and_stats(category_service, recipe_service) -> None:
    breads = category_service.create_category({"name": "Breads"})
    category_service.create_category({"name": "Flatbreads", "parent_id": breads.id})
    recipe_service.create_recipe(
        {"name": "Loaf", "servings": 4, "category_id": breads.id, "is_public": True},
        OWNER,
    )
    recipe_service.create_recipe(
        {"name": "Draft", "servings": 4, "category_id": breads.id}, OWNER
    )

    count = category_service.refresh_recipe_count(breads.id)
    stats = category_service.get_stats(breads.id)
    all_stats = category_service.get_all_stats()

    assert count == 1
    assert category_service.get_category(breads.id).recipe_count == 1
    assert (stats.public_recipes, stats.total_recipes, stats.subcategories) == (1, 2, 1)
    assert [item.name for item in all_stats] == ["Breads", "Flatbreads"]
