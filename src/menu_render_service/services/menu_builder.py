"""Editing operations on menu projects.

Every operation replaces a whole field and returns a new project snapshot
with ``updated_at`` bumped; the input project is never modified.
"""

import logging
import uuid
from collections.abc import Sequence
from datetime import UTC, datetime

from menu_render_service.models.catalog import DEFAULT_CURRENCY, DEFAULT_TEMPLATE
from menu_render_service.models.menu_models import (
    Currency,
    MenuCategory,
    MenuProject,
    MenuStyle,
    MenuTemplate,
    RestaurantInfo,
    StyleEffects,
)

logger = logging.getLogger(__name__)

TEMPLATE_STYLE_RESET = {
    "background_opacity": 100,
    "border_radius": 8,
    "spacing": 16,
    "shadow_intensity": 2,
    "effects": StyleEffects(blur=False, glow=False),
}


def normalize_template_style(style: MenuStyle) -> MenuStyle:
    """Reset opacity, radius, spacing, shadow and effects to their defaults."""
    return style.model_copy(update=TEMPLATE_STYLE_RESET)


def _touch(project: MenuProject, **changes) -> MenuProject:
    return project.model_copy(update={**changes, "updated_at": datetime.now(UTC)})


def new_project(
    template: MenuTemplate = DEFAULT_TEMPLATE,
    currency: Currency = DEFAULT_CURRENCY,
    name: str = "",
) -> MenuProject:
    """Create an empty project styled by ``template``."""
    now = datetime.now(UTC)
    return MenuProject(
        id=uuid.uuid4().hex,
        name=name,
        restaurant=RestaurantInfo(currency=currency),
        template=template,
        categories=(),
        style=normalize_template_style(template.style),
        created_at=now,
        updated_at=now,
        has_cart=False,
    )


def apply_template(project: MenuProject, template: MenuTemplate) -> MenuProject:
    """Overwrite the live style with the template's, normalizing derived fields."""
    logger.info(f"Applying template {template.id} to project {project.id}")
    return _touch(project, template=template, style=normalize_template_style(template.style))


def replace_style(project: MenuProject, style: MenuStyle) -> MenuProject:
    return _touch(project, style=style)


def replace_categories(project: MenuProject, categories: Sequence[MenuCategory]) -> MenuProject:
    """Replace all categories, e.g. after editing or a spreadsheet import."""
    return _touch(project, categories=tuple(categories))


def replace_restaurant(project: MenuProject, restaurant: RestaurantInfo) -> MenuProject:
    return _touch(project, restaurant=restaurant)


def rename_project(project: MenuProject, name: str) -> MenuProject:
    return _touch(project, name=name)


def capture_template_style(project: MenuProject) -> MenuStyle:
    """Snapshot of the live style for saving as a custom template."""
    return project.style.model_copy()
