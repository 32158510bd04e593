"""Template catalog service: built-in presets plus stored custom templates."""

import logging
import uuid
from collections.abc import Sequence

from menu_render_service.models.catalog import BUILTIN_TEMPLATES, DEFAULT_TEMPLATE
from menu_render_service.models.menu_models import (
    MenuProject,
    MenuStyle,
    MenuTemplate,
    TemplateFamily,
)
from menu_render_service.repositories.template_repository import CustomTemplateRepository

logger = logging.getLogger(__name__)


class TemplateService:
    """Service for listing, storing and resolving menu templates.

    Built-in templates are fixed; custom templates live in the repository.
    Listing returns built-ins first, then customs, without de-duplication.
    """

    def __init__(
        self,
        repository: CustomTemplateRepository,
        builtin_templates: Sequence[MenuTemplate] = BUILTIN_TEMPLATES,
    ) -> None:
        """Initialize the TemplateService.

        Args:
            repository: Repository for custom templates
            builtin_templates: Fixed preset catalog, the first entry is the default
        """
        self.repository = repository
        self.builtin_templates = tuple(builtin_templates)

    @property
    def default_template(self) -> MenuTemplate:
        return self.builtin_templates[0] if self.builtin_templates else DEFAULT_TEMPLATE

    async def list_templates(self) -> list[MenuTemplate]:
        return [*self.builtin_templates, *self.repository.list_templates()]

    async def get_template(self, template_id: str) -> MenuTemplate | None:
        """Look up a template by id, built-ins first.

        Returns:
            MenuTemplate if found, None otherwise
        """
        for template in self.builtin_templates:
            if template.id == template_id:
                return template
        return self.repository.get_template(template_id)

    async def save_custom_template(
        self,
        name: str,
        style: MenuStyle,
        description: str = "",
        preview: str = "",
        created_by: str | None = None,
    ) -> MenuTemplate | None:
        """Store ``style`` as a new custom template.

        Returns:
            The stored template, None if it could not be saved
        """
        template = MenuTemplate(
            id=f"custom-{uuid.uuid4().hex[:12]}",
            name=name,
            description=description,
            preview=preview,
            layout=TemplateFamily.CUSTOM,
            style=style,
            is_custom=True,
            created_by=created_by,
        )
        if not self.repository.save_template(template):
            return None

        logger.info(f"Saved custom template {template.id}")
        return template

    async def update_custom_template(
        self,
        template_id: str,
        name: str,
        style: MenuStyle,
        description: str = "",
        preview: str = "",
    ) -> MenuTemplate | None:
        """Replace the editable fields of an existing custom template.

        Returns:
            The updated template, None if it does not exist or could not be saved
        """
        existing = self.repository.get_template(template_id)
        if existing is None:
            return None

        updated = existing.model_copy(
            update={"name": name, "style": style, "description": description, "preview": preview}
        )
        if not self.repository.save_template(updated):
            return None
        return updated

    async def delete_custom_template(self, template_id: str) -> bool:
        """Delete a custom template, even if projects still reference it."""
        deleted = self.repository.delete_template(template_id)
        if deleted:
            logger.info(f"Deleted custom template {template_id}")
        return deleted

    async def reconcile_project(self, project: MenuProject) -> MenuProject:
        """Resolve a reference to a custom template that no longer exists.

        The template falls back to the default built-in; the live style is kept.
        Projects referencing built-ins or existing customs are returned as is.
        """
        template = project.template
        if not template.is_custom:
            return project
        if self.repository.get_template(template.id) is not None:
            return project

        logger.warning(
            f"Project {project.id} references missing custom template {template.id}, "
            f"falling back to {self.default_template.id}"
        )
        return project.model_copy(update={"template": self.default_template})
