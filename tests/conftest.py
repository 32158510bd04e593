"""Shared pytest fixtures and configuration for all tests."""

import os

os.environ.setdefault("ENVIRONMENT", "test")

from datetime import UTC, datetime  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402

from menu_render_service.models.catalog import DEFAULT_CURRENCY, DEFAULT_TEMPLATE  # noqa: E402
from menu_render_service.models.menu_models import (  # noqa: E402
    LayoutMode,
    MenuCategory,
    MenuItem,
    MenuProject,
    MenuStyle,
    RestaurantInfo,
)

FIXED_TIME = datetime(2024, 1, 15, 10, 30, tzinfo=UTC)


@pytest.fixture
def sample_items() -> tuple[MenuItem, ...]:
    """Fixture providing two items, one with a description."""
    return (
        MenuItem(id="item_1", name="Shawarma", description="Chicken wrap", price=Decimal("25")),
        MenuItem(id="item_2", name="Falafel", price=Decimal("12.50")),
    )


@pytest.fixture
def sample_project(sample_items: tuple[MenuItem, ...]) -> MenuProject:
    """Fixture providing a grid project with one populated and one empty category."""
    return MenuProject(
        id="proj_123",
        name="Lunch",
        restaurant=RestaurantInfo(name="Test Kitchen", phone="0500000000", currency=DEFAULT_CURRENCY),
        template=DEFAULT_TEMPLATE,
        categories=(
            MenuCategory(id="cat_1", name="Mains", items=sample_items),
            MenuCategory(id="cat_2", name="Desserts"),
        ),
        style=MenuStyle(),
        created_at=FIXED_TIME,
        updated_at=FIXED_TIME,
    )


@pytest.fixture
def empty_project() -> MenuProject:
    """Fixture providing an unnamed project with no categories."""
    return MenuProject(
        id="proj_empty",
        restaurant=RestaurantInfo(currency=DEFAULT_CURRENCY),
        template=DEFAULT_TEMPLATE,
        style=MenuStyle(),
        created_at=FIXED_TIME,
        updated_at=FIXED_TIME,
    )


@pytest.fixture
def custom_project(sample_project: MenuProject) -> MenuProject:
    """Fixture providing the sample project switched to the custom layout."""
    return sample_project.model_copy(
        update={"style": sample_project.style.model_copy(update={"layout": LayoutMode.CUSTOM})}
    )
