"""Unit tests for project editing operations."""

from decimal import Decimal

import pytest

from menu_render_service.models.catalog import (
    BUILTIN_TEMPLATES,
    DEFAULT_CURRENCY,
    find_builtin_template,
    find_currency,
)
from menu_render_service.models.menu_models import (
    LayoutMode,
    MenuCategory,
    MenuItem,
    MenuProject,
    MenuStyle,
    MenuTemplate,
    StyleEffects,
)
from menu_render_service.services.menu_builder import (
    apply_template,
    capture_template_style,
    new_project,
    normalize_template_style,
    rename_project,
    replace_categories,
    replace_restaurant,
    replace_style,
)


@pytest.mark.unit
class TestNormalizeTemplateStyle:
    """Test suite for template style normalization."""

    def test_resets_derived_fields(self) -> None:
        style = MenuStyle(
            background_opacity=40,
            border_radius=20,
            spacing=30,
            shadow_intensity=9,
            effects=StyleEffects(blur=True, glow=True),
            primary_color="#123456",
            layout=LayoutMode.CARD,
        )

        normalized = normalize_template_style(style)

        assert normalized.background_opacity == 100
        assert normalized.border_radius == 8
        assert normalized.spacing == 16
        assert normalized.shadow_intensity == 2
        assert normalized.effects == StyleEffects()
        assert normalized.primary_color == "#123456"
        assert normalized.layout == LayoutMode.CARD


@pytest.mark.unit
class TestNewProject:
    """Test suite for new_project."""

    def test_defaults(self) -> None:
        project = new_project()

        assert project.template.id == "modern"
        assert project.restaurant.currency == DEFAULT_CURRENCY
        assert project.categories == ()
        assert project.has_cart is False
        assert project.created_at == project.updated_at

    def test_uses_given_template_and_currency(self) -> None:
        project = new_project(find_builtin_template("artistic"), find_currency("USD"), name="Brunch")

        assert project.name == "Brunch"
        assert project.restaurant.currency.code == "USD"
        assert project.style.effects == StyleEffects()
        assert project.style.shadow_intensity == 2


@pytest.mark.unit
class TestEditingOperations:
    """Test suite for whole-field replacements."""

    def test_apply_template_overwrites_and_normalizes(self, sample_project: MenuProject) -> None:
        template = find_builtin_template("premium")

        updated = apply_template(sample_project, template)

        assert updated.template == template
        assert updated.style.layout == LayoutMode.CARD
        assert updated.style.primary_color == template.style.primary_color
        assert updated.style.shadow_intensity == 2
        assert updated.categories == sample_project.categories
        assert updated.updated_at > sample_project.updated_at

    def test_input_project_untouched(self, sample_project: MenuProject) -> None:
        original_style = sample_project.style

        replace_style(sample_project, MenuStyle(layout=LayoutMode.LIST))

        assert sample_project.style == original_style

    def test_replace_categories(self, sample_project: MenuProject) -> None:
        category = MenuCategory(
            id="cat_9",
            name="Drinks",
            items=(MenuItem(id="item_9", name="Tea", price=Decimal("3")),),
        )

        updated = replace_categories(sample_project, [category])

        assert updated.categories == (category,)
        assert updated.item_count == 1

    def test_replace_restaurant_and_rename(self, sample_project: MenuProject) -> None:
        restaurant = sample_project.restaurant.model_copy(update={"name": "New Name"})

        updated = rename_project(replace_restaurant(sample_project, restaurant), "Dinner")

        assert updated.restaurant.name == "New Name"
        assert updated.name == "Dinner"
        assert updated.id == sample_project.id

    def test_capture_template_style_keeps_live_values(self, sample_project: MenuProject) -> None:
        project = replace_style(sample_project, MenuStyle(shadow_intensity=9, border_radius=20))

        captured = capture_template_style(project)

        assert captured.shadow_intensity == 9
        assert captured.border_radius == 20


@pytest.mark.unit
@pytest.mark.parametrize("template", BUILTIN_TEMPLATES, ids=lambda t: t.id)
def test_every_template_applies_normalized(template: MenuTemplate, sample_project: MenuProject) -> None:
    project = replace_style(
        sample_project,
        MenuStyle(
            background_opacity=5,
            border_radius=0,
            spacing=32,
            shadow_intensity=10,
            effects=StyleEffects(blur=True, glow=True),
        ),
    )

    style = apply_template(project, template).style

    assert style.background_opacity == 100
    assert style.border_radius == 8
    assert style.spacing == 16
    assert style.shadow_intensity == 2
    assert style.effects == StyleEffects(blur=False, glow=False)
