"""Export request models."""

from enum import Enum

from pydantic import BaseModel, Field

from menu_render_service.models.menu_models import MenuProject


class ExportFormat(str, Enum):
    """Export surfaces."""

    DOCUMENT = "document"
    BITMAP = "bitmap"
    HARDCOPY = "hardcopy"


class ExportRequest(BaseModel):
    """Project snapshot to export."""

    project: MenuProject
    show_currency_flag: bool = Field(default=True, description="Prefix prices with the currency flag")
