"""Menu document models.

These models describe one menu document: restaurant identity, categorized
items and the style configuration every renderer consumes. All models are
frozen; edits produce new snapshots via ``model_copy(update=...)``.
"""

import logging
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)


class LayoutMode(str, Enum):
    """Item arrangement modes supported by the renderers."""

    GRID = "grid"
    CARD = "card"
    LIST = "list"
    CUSTOM = "custom"


class LogoPosition(str, Enum):
    """Placement of the logo and header block."""

    TOP_LEFT = "top-left"
    TOP_CENTER = "top-center"
    TOP_RIGHT = "top-right"


class TemplateFamily(str, Enum):
    """Named template presets, plus ``custom`` for user-authored templates."""

    MODERN = "modern"
    CLASSIC = "classic"
    MINIMAL = "minimal"
    ELEGANT = "elegant"
    RUSTIC = "rustic"
    CONTEMPORARY = "contemporary"
    VINTAGE = "vintage"
    ARTISTIC = "artistic"
    DIGITAL = "digital"
    PREMIUM = "premium"
    CUSTOM = "custom"


class MenuItem(BaseModel):
    """Menu item model."""

    model_config = ConfigDict(frozen=True, json_encoders={Decimal: str})

    id: str = Field(..., description="Unique identifier for the menu item")
    name: str = Field(..., description="Item name")
    description: str = Field(default="", description="Item description")
    price: Decimal = Field(..., description="Item price", ge=0)
    image: str | None = Field(None, description="Reference to the item image")
    video: str | None = Field(None, description="Reference to the item video")
    icon: str | None = Field(None, description="Reference to the item icon")


class MenuCategory(BaseModel):
    """Menu category model. Item order is display order."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique identifier for the category")
    name: str = Field(..., description="Category display name")
    icon: str | None = Field(None, description="Optional category icon")
    items: tuple[MenuItem, ...] = Field(default=(), description="Items in display order")

    @field_validator("items")
    @classmethod
    def validate_unique_item_ids(cls, v: tuple[MenuItem, ...]) -> tuple[MenuItem, ...]:
        """Validate that item ids are unique within the category."""
        seen: set[str] = set()
        for item in v:
            if item.id in seen:
                raise ValueError(f"duplicate item id in category: {item.id}")
            seen.add(item.id)
        return v


class Currency(BaseModel):
    """Currency entry from the shared currency catalog."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., description="ISO currency code")
    symbol: str = Field(..., description="Display symbol appended to prices")
    name: str = Field(..., description="Display name")
    flag: str | None = Field(None, description="Optional flag glyph")


class RestaurantInfo(BaseModel):
    """Restaurant identity shown in the menu header."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Restaurant name")
    description: str = Field(default="", description="Short restaurant description")
    logo: str | None = Field(None, description="Reference to the logo image")
    logo_position: LogoPosition = Field(default=LogoPosition.TOP_CENTER)
    address: str | None = None
    phone: str | None = None
    website: str | None = None
    currency: Currency
    display_style: str | None = Field(
        None, description="Hint for the info layout picker, not used by renderers"
    )


class FontSizes(BaseModel):
    """Font sizes in px for each text role."""

    model_config = ConfigDict(frozen=True)

    title: int = 32
    category: int = 24
    item: int = 18
    price: int = 16


class StyleEffects(BaseModel):
    """Optional surface effects, independently toggleable."""

    model_config = ConfigDict(frozen=True)

    blur: bool = False
    glow: bool = False


class MenuStyle(BaseModel):
    """Style configuration consumed by every renderer."""

    model_config = ConfigDict(frozen=True)

    primary_color: str = "#1f2937"
    secondary_color: str = "#4b5563"
    accent_color: str = "#dc2626"
    background_color: str = "#ffffff"
    text_color: str = "#111827"
    font_family: str = "Inter"
    font_size: FontSizes = Field(default_factory=FontSizes)
    layout: LayoutMode = LayoutMode.GRID
    items_per_row: int = Field(default=2, description="Column count, meaningful for grid only")
    background_image: str | None = None
    background_video: str | None = None
    background_opacity: int = 100
    border_radius: int = 8
    spacing: int = 16
    shadow_intensity: int = 2
    effects: StyleEffects = Field(default_factory=StyleEffects)

    @field_validator("layout", mode="before")
    @classmethod
    def coerce_unknown_layout(cls, v: Any) -> Any:
        """Fall back to grid for layout values outside the supported set."""
        if isinstance(v, LayoutMode):
            return v
        try:
            return LayoutMode(v)
        except ValueError:
            logger.warning(f"Unknown layout mode {v!r}, falling back to grid")
            return LayoutMode.GRID

    @field_validator("effects", mode="before")
    @classmethod
    def default_missing_effects(cls, v: Any) -> Any:
        """Treat a null effects set as all effects off."""
        return StyleEffects() if v is None else v

    @model_validator(mode="before")
    @classmethod
    def keep_single_background(cls, data: Any) -> Any:
        """Keep only the image when both background kinds are supplied."""
        if isinstance(data, dict) and data.get("background_image") and data.get("background_video"):
            logger.warning("Style has both background image and video, dropping the video")
            data = {**data, "background_video": None}
        return data

    def with_background_image(self, ref: str) -> "MenuStyle":
        """Return a copy using ``ref`` as background image, clearing any video."""
        return self.model_copy(update={"background_image": ref, "background_video": None})

    def with_background_video(self, ref: str) -> "MenuStyle":
        """Return a copy using ``ref`` as background video, clearing any image."""
        return self.model_copy(update={"background_video": ref, "background_image": None})

    def without_background(self) -> "MenuStyle":
        """Return a copy with neither background image nor video."""
        return self.model_copy(update={"background_image": None, "background_video": None})


class MenuTemplate(BaseModel):
    """Template preset: a style snapshot plus catalog metadata."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique template identifier")
    name: str
    description: str = ""
    preview: str = Field(default="", description="Reference to the preview thumbnail")
    layout: TemplateFamily = Field(..., description="Template family tag")
    style: MenuStyle
    is_custom: bool = False
    created_by: str | None = None

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        item: dict[str, Any] = {
            "template_id": self.id,
            "name": self.name,
            "description": self.description,
            "preview": self.preview,
            "layout": self.layout.value,
            "style": self.style.model_dump_json(),
            "is_custom": self.is_custom,
        }

        if self.created_by is not None:
            item["created_by"] = self.created_by

        return item

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "MenuTemplate":
        """Create MenuTemplate from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            MenuTemplate: Parsed model instance
        """
        return cls(
            id=item["template_id"],
            name=item["name"],
            description=item.get("description", ""),
            preview=item.get("preview", ""),
            layout=TemplateFamily(item["layout"]),
            style=MenuStyle.model_validate_json(item["style"]),
            is_custom=bool(item.get("is_custom", True)),
            created_by=item.get("created_by"),
        )


class MenuProject(BaseModel):
    """Root of a menu document.

    ``style`` is the live style and may differ from ``template.style`` after
    direct edits.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    restaurant: RestaurantInfo
    template: MenuTemplate
    categories: tuple[MenuCategory, ...] = ()
    style: MenuStyle
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    has_cart: bool = Field(default=False, description="Reserved for ordering support")

    @property
    def item_count(self) -> int:
        """Total number of items across all categories."""
        return sum(len(category.items) for category in self.categories)
