"""FastAPI application exposing templates, projects, exports and previews."""

import logging
from enum import Enum

from fastapi import FastAPI, HTTPException, Response
from pydantic import BaseModel, Field

from menu_render_service.models.catalog import DEFAULT_CURRENCY, find_currency
from menu_render_service.models.export_models import ExportFormat, ExportRequest
from menu_render_service.models.menu_models import (
    MenuCategory,
    MenuProject,
    MenuStyle,
    MenuTemplate,
    RestaurantInfo,
)
from menu_render_service.models.preview_models import (
    PreviewEvent,
    PreviewRequest,
    PreviewResponse,
)
from menu_render_service.services.export_service import ExportService
from menu_render_service.services.menu_builder import (
    apply_template,
    capture_template_style,
    new_project,
    rename_project,
    replace_categories,
    replace_restaurant,
    replace_style,
)
from menu_render_service.services.preview_service import PreviewSessionStore
from menu_render_service.services.template_service import TemplateService

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


class NewProjectRequest(BaseModel):
    """Options for a fresh project."""

    name: str = ""
    template_id: str | None = Field(None, description="Template to start from, default built-in if omitted")
    currency_code: str | None = Field(None, description="Catalog currency code, default currency if omitted")


class ApplyTemplateRequest(BaseModel):
    project: MenuProject
    template_id: str


class TemplateRequest(BaseModel):
    """Custom template fields supplied by the editor."""

    name: str = Field(..., min_length=1)
    style: MenuStyle
    description: str = ""
    preview: str = ""
    created_by: str | None = None


class TemplateFromProjectRequest(BaseModel):
    """Save the live style of a project as a custom template."""

    project: MenuProject
    name: str = Field(..., min_length=1)
    description: str = ""
    preview: str = ""
    created_by: str | None = None


class StyleUpdate(BaseModel):
    project: MenuProject
    style: MenuStyle


class BackgroundKind(str, Enum):
    """Background media for the menu surface."""

    IMAGE = "image"
    VIDEO = "video"
    NONE = "none"


class BackgroundUpdate(BaseModel):
    """Switch the background; an image and a video are never kept together."""

    project: MenuProject
    kind: BackgroundKind
    ref: str | None = Field(None, description="Asset reference, required for image and video")


class CategoriesUpdate(BaseModel):
    """Full category list, e.g. from the editor or a spreadsheet import."""

    project: MenuProject
    categories: list[MenuCategory]


class RestaurantUpdate(BaseModel):
    project: MenuProject
    restaurant: RestaurantInfo


class RenameRequest(BaseModel):
    project: MenuProject
    name: str


def create_app(
    export_service: ExportService,
    template_service: TemplateService,
    preview_service: PreviewSessionStore,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        export_service: Service producing export artifacts
        template_service: Service for built-in and custom templates
        preview_service: Store of open preview sessions

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Menu Render Service",
        description="Renders menu projects to live previews, HTML documents, images and print surfaces",
        version="1.0.0",
    )

    app.state.export_service = export_service
    app.state.template_service = template_service
    app.state.preview_service = preview_service

    async def _require_template(template_id: str) -> MenuTemplate:
        template = await app.state.template_service.get_template(template_id)
        if template is None:
            raise HTTPException(status_code=404, detail=f"Template '{template_id}' not found")
        return template

    def _require_preview(session_id: str, handled: bool | None = None) -> PreviewResponse:
        response = app.state.preview_service.describe(session_id, handled)
        if response is None:
            raise HTTPException(status_code=404, detail=f"Preview session '{session_id}' not found")
        return response

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        return HealthResponse(status="healthy")

    @app.get("/templates", response_model=list[MenuTemplate], tags=["Templates"])
    async def list_templates() -> list[MenuTemplate]:
        """List built-in templates followed by custom templates."""
        templates: list[MenuTemplate] = await app.state.template_service.list_templates()
        return templates

    @app.post("/templates", response_model=MenuTemplate, status_code=201, tags=["Templates"])
    async def create_template(request: TemplateRequest) -> MenuTemplate:
        template = await app.state.template_service.save_custom_template(
            name=request.name,
            style=request.style,
            description=request.description,
            preview=request.preview,
            created_by=request.created_by,
        )
        if template is None:
            raise HTTPException(status_code=500, detail="Failed to save the custom template")
        return template

    @app.post(
        "/templates/from-project", response_model=MenuTemplate, status_code=201, tags=["Templates"]
    )
    async def create_template_from_project(request: TemplateFromProjectRequest) -> MenuTemplate:
        """Save the project's current style as a new custom template."""
        template = await app.state.template_service.save_custom_template(
            name=request.name,
            style=capture_template_style(request.project),
            description=request.description,
            preview=request.preview,
            created_by=request.created_by,
        )
        if template is None:
            raise HTTPException(status_code=500, detail="Failed to save the custom template")
        return template

    @app.put("/templates/{template_id}", response_model=MenuTemplate, tags=["Templates"])
    async def update_template(template_id: str, request: TemplateRequest) -> MenuTemplate:
        """Replace an existing custom template.

        Raises:
            HTTPException: 404 if the custom template does not exist
        """
        template = await app.state.template_service.update_custom_template(
            template_id,
            name=request.name,
            style=request.style,
            description=request.description,
            preview=request.preview,
        )
        if template is None:
            raise HTTPException(status_code=404, detail=f"Custom template '{template_id}' not found")
        return template

    @app.delete("/templates/{template_id}", status_code=204, tags=["Templates"])
    async def delete_template(template_id: str) -> Response:
        if not await app.state.template_service.delete_custom_template(template_id):
            raise HTTPException(status_code=404, detail=f"Custom template '{template_id}' not found")
        return Response(status_code=204)

    @app.post("/projects", response_model=MenuProject, status_code=201, tags=["Projects"])
    async def create_project(request: NewProjectRequest | None = None) -> MenuProject:
        """Create an empty project from a template and catalog currency.

        Raises:
            HTTPException: 404 if the template or currency is unknown
        """
        request = request or NewProjectRequest()
        template = app.state.template_service.default_template
        if request.template_id is not None:
            template = await _require_template(request.template_id)

        currency = DEFAULT_CURRENCY
        if request.currency_code is not None:
            currency = find_currency(request.currency_code)
            if currency is None:
                raise HTTPException(
                    status_code=404, detail=f"Currency '{request.currency_code}' not found"
                )

        return new_project(template=template, currency=currency, name=request.name)

    @app.post("/projects/apply-template", response_model=MenuProject, tags=["Projects"])
    async def apply_project_template(request: ApplyTemplateRequest) -> MenuProject:
        template = await _require_template(request.template_id)
        return apply_template(request.project, template)

    @app.post("/projects/reconcile", response_model=MenuProject, tags=["Projects"])
    async def reconcile_project(project: MenuProject) -> MenuProject:
        """Resolve a reference to a deleted custom template."""
        reconciled: MenuProject = await app.state.template_service.reconcile_project(project)
        return reconciled

    @app.post("/projects/style", response_model=MenuProject, tags=["Projects"])
    async def update_project_style(request: StyleUpdate) -> MenuProject:
        return replace_style(request.project, request.style)

    @app.post("/projects/background", response_model=MenuProject, tags=["Projects"])
    async def update_project_background(request: BackgroundUpdate) -> MenuProject:
        """Set a background image or video, or remove the background.

        Raises:
            HTTPException: 422 if an image or video is requested without a reference
        """
        style = request.project.style
        if request.kind == BackgroundKind.NONE:
            return replace_style(request.project, style.without_background())

        if not request.ref:
            raise HTTPException(
                status_code=422, detail=f"A {request.kind.value} background needs an asset reference"
            )
        if request.kind == BackgroundKind.IMAGE:
            return replace_style(request.project, style.with_background_image(request.ref))
        return replace_style(request.project, style.with_background_video(request.ref))

    @app.post("/projects/categories", response_model=MenuProject, tags=["Projects"])
    async def update_project_categories(request: CategoriesUpdate) -> MenuProject:
        return replace_categories(request.project, request.categories)

    @app.post("/projects/restaurant", response_model=MenuProject, tags=["Projects"])
    async def update_project_restaurant(request: RestaurantUpdate) -> MenuProject:
        return replace_restaurant(request.project, request.restaurant)

    @app.post("/projects/rename", response_model=MenuProject, tags=["Projects"])
    async def rename(request: RenameRequest) -> MenuProject:
        return rename_project(request.project, request.name)

    @app.post("/exports/{export_format}", tags=["Exports"])
    async def export_project(export_format: ExportFormat, request: ExportRequest) -> Response:
        """Export a project to a document, an image or the print surface.

        Raises:
            HTTPException: 500 with a single message if the export failed
        """
        result = await app.state.export_service.export(
            request.project, request.show_currency_flag, export_format
        )
        if not result.success:
            raise HTTPException(status_code=500, detail=result.error_message)

        return Response(
            content=result.content,
            media_type=result.media_type,
            headers={"Content-Disposition": result.content_disposition},
        )

    @app.post("/previews", response_model=PreviewResponse, status_code=201, tags=["Previews"])
    async def open_preview(request: PreviewRequest) -> PreviewResponse:
        session_id = app.state.preview_service.create(request.project, request.show_currency_flag)
        return _require_preview(session_id)

    @app.get("/previews/{session_id}", response_model=PreviewResponse, tags=["Previews"])
    async def get_preview(session_id: str) -> PreviewResponse:
        return _require_preview(session_id)

    @app.put("/previews/{session_id}/project", response_model=PreviewResponse, tags=["Previews"])
    async def replace_preview_project(session_id: str, request: PreviewRequest) -> PreviewResponse:
        """Re-render a session with a new project snapshot, keeping its transient state."""
        renderer = app.state.preview_service.replace_project(
            session_id, request.project, request.show_currency_flag
        )
        if renderer is None:
            raise HTTPException(status_code=404, detail=f"Preview session '{session_id}' not found")
        return _require_preview(session_id)

    @app.post("/previews/{session_id}/events", response_model=PreviewResponse, tags=["Previews"])
    async def send_preview_event(session_id: str, event: PreviewEvent) -> PreviewResponse:
        handled = app.state.preview_service.dispatch(session_id, event)
        if handled is None:
            raise HTTPException(status_code=404, detail=f"Preview session '{session_id}' not found")
        return _require_preview(session_id, handled)

    @app.delete("/previews/{session_id}", status_code=204, tags=["Previews"])
    async def close_preview(session_id: str) -> Response:
        if not app.state.preview_service.close(session_id):
            raise HTTPException(status_code=404, detail=f"Preview session '{session_id}' not found")
        return Response(status_code=204)

    return app
