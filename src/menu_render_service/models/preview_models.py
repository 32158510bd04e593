"""Request and response models for live preview sessions."""

from enum import Enum

from pydantic import BaseModel, Field

from menu_render_service.models.menu_models import MenuProject


class PreviewEventType(str, Enum):
    """Interaction events accepted by a preview session."""

    CLICK = "click"
    POINTER_DOWN = "pointer_down"
    POINTER_MOVE = "pointer_move"
    POINTER_UP = "pointer_up"
    SCALE_UP = "scale_up"
    SCALE_DOWN = "scale_down"
    RESET = "reset"
    ZOOM_IN = "zoom_in"
    ZOOM_OUT = "zoom_out"


class PreviewEvent(BaseModel):
    """One pointer or control event sent to a preview session."""

    type: PreviewEventType
    item_id: str | None = Field(None, description="Target item for click and pointer_down")
    x: float = Field(default=0.0, description="Pointer x position in px")
    y: float = Field(default=0.0, description="Pointer y position in px")


class PreviewRequest(BaseModel):
    """Project snapshot and currency flag supplied to a preview session."""

    project: MenuProject
    show_currency_flag: bool = True


class TransformModel(BaseModel):
    """Serialized transient transform of one item."""

    x: float
    y: float
    scale: float


class PreviewResponse(BaseModel):
    """Rendered preview plus its transient interaction state."""

    session_id: str
    state: str
    selected_item_id: str | None = None
    zoom: float
    transforms: dict[str, TransformModel] = Field(default_factory=dict)
    html: str
    handled: bool | None = None
