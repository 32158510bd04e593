"""Style resolution shared by every renderer.

Each function maps style parameters to a concrete layout decision. The
preview, the static document and the bitmap exporter all call these so that
their output cannot drift apart. Malformed values never raise: they fall
back to the nearest safe value.
"""

import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from urllib.parse import quote

from menu_render_service.models.menu_models import (
    Currency,
    LayoutMode,
    LogoPosition,
    MenuStyle,
    StyleEffects,
)

logger = logging.getLogger(__name__)

DEFAULT_STYLE = MenuStyle()

FONT_SIZE_RANGE = (12, 48)
BORDER_RADIUS_RANGE = (0, 24)
SPACING_RANGE = (8, 32)
OPACITY_RANGE = (0, 100)

# Breakpoint min-widths in px
BREAKPOINTS = {"sm": 640, "md": 768, "lg": 1024, "xl": 1280}

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_FUNC_COLOR = re.compile(r"^rgba?\(\s*[0-9.%\s,/]+\)$")
_NAMED_COLOR = re.compile(r"^[a-zA-Z]{3,30}$")
_FONT_UNSAFE = re.compile(r"[^\w\s-]")


@dataclass(frozen=True)
class GridColumns:
    """Column count per breakpoint, mobile first."""

    base: int
    breakpoints: tuple[tuple[str, int], ...] = ()

    @property
    def max_columns(self) -> int:
        if not self.breakpoints:
            return self.base
        return self.breakpoints[-1][1]

    def to_css(self, selector: str) -> str:
        """Render the column table as literal CSS rules for ``selector``."""
        rules = [f"{selector}{{grid-template-columns:repeat({self.base},minmax(0,1fr));}}"]
        for name, columns in self.breakpoints:
            rules.append(
                f"@media (min-width:{BREAKPOINTS[name]}px){{"
                f"{selector}{{grid-template-columns:repeat({columns},minmax(0,1fr));}}}}"
            )
        return "".join(rules)


GRID_COLUMNS: dict[int, GridColumns] = {
    1: GridColumns(base=1),
    2: GridColumns(base=1, breakpoints=(("md", 2),)),
    3: GridColumns(base=1, breakpoints=(("md", 2), ("lg", 3))),
    4: GridColumns(base=1, breakpoints=(("md", 2), ("lg", 4))),
    5: GridColumns(base=1, breakpoints=(("md", 2), ("lg", 3), ("xl", 5))),
    6: GridColumns(base=1, breakpoints=(("md", 2), ("lg", 3), ("xl", 6))),
}


class ContainerFlow(str, Enum):
    """How a category's items are arranged."""

    GRID = "grid"
    STACK = "stack"
    FREE = "free"


@dataclass(frozen=True)
class LayoutContainer:
    """Container arrangement for one layout mode.

    Attributes:
        mode: Layout mode this container was resolved for
        flow: Grid, vertical stack or free positioning
        columns: Column table, grid flow only
        divider: Whether items are separated by a divider rule
        shadowed: Whether item surfaces carry the shadow tier
        padding: Item surface padding in px
    """

    mode: LayoutMode
    flow: ContainerFlow
    columns: GridColumns | None = None
    divider: bool = False
    shadowed: bool = True
    padding: int = 12


class ShadowTier(str, Enum):
    """Discrete shadow tiers, smallest to largest."""

    SM = "sm"
    MD = "md"
    LG = "lg"
    XL = "xl"
    XXL = "2xl"

    @property
    def css(self) -> str:
        """Literal box-shadow value for this tier."""
        return SHADOW_TIER_CSS[self]


SHADOW_TIER_CSS: dict[ShadowTier, str] = {
    ShadowTier.SM: "0 1px 2px 0 rgba(0,0,0,0.05)",
    ShadowTier.MD: "0 4px 6px -1px rgba(0,0,0,0.1), 0 2px 4px -2px rgba(0,0,0,0.1)",
    ShadowTier.LG: "0 10px 15px -3px rgba(0,0,0,0.1), 0 4px 6px -4px rgba(0,0,0,0.1)",
    ShadowTier.XL: "0 20px 25px -5px rgba(0,0,0,0.1), 0 8px 10px -6px rgba(0,0,0,0.1)",
    ShadowTier.XXL: "0 25px 50px -12px rgba(0,0,0,0.25)",
}


@dataclass(frozen=True)
class EffectModifiers:
    """Surface modifiers derived from the style effects set."""

    blur: bool = False
    glow: bool = False

    def declarations(self) -> tuple[str, ...]:
        """Literal CSS declarations for the enabled modifiers."""
        decls: list[str] = []
        if self.blur:
            decls.append("backdrop-filter:blur(4px)")
        if self.glow:
            decls.append("filter:drop-shadow(0 0 8px rgba(0,0,0,0.3))")
        return tuple(decls)


@dataclass(frozen=True)
class FontMetrics:
    """Resolved font sizes in px."""

    title: int
    category: int
    item: int
    price: int


@dataclass(frozen=True)
class StyleMetrics:
    """Every numeric and literal style value after fallback.

    Attributes:
        fonts: Font sizes per text role
        font_family: Literal-safe font family name
        border_radius: Corner radius in px
        spacing: Gap between items in px
        opacity: Background opacity as a 0-1 fraction
        primary_color: Title color
        secondary_color: Category title color
        accent_color: Price color
        background_color: Surface background color
        text_color: Body text color
    """

    fonts: FontMetrics
    font_family: str
    border_radius: int
    spacing: int
    opacity: float
    primary_color: str
    secondary_color: str
    accent_color: str
    background_color: str
    text_color: str


def resolve_grid_columns(items_per_row: int) -> GridColumns:
    """Map a column count to its column table.

    Values outside 1-6 get the two column table.
    """
    columns = GRID_COLUMNS.get(items_per_row)
    if columns is None:
        return GRID_COLUMNS[2]
    return columns


def resolve_layout_container(
    layout: LayoutMode | str, items_per_row: int = 2
) -> LayoutContainer:
    """Map a layout mode to its container arrangement.

    Unknown layout modes resolve like grid.
    """
    try:
        mode = LayoutMode(layout)
    except ValueError:
        logger.warning(f"Unknown layout mode {layout!r}, resolving as grid")
        mode = LayoutMode.GRID

    if mode == LayoutMode.CARD:
        return LayoutContainer(mode=mode, flow=ContainerFlow.STACK, padding=16)
    if mode == LayoutMode.LIST:
        return LayoutContainer(
            mode=mode, flow=ContainerFlow.STACK, divider=True, shadowed=False, padding=0
        )
    if mode == LayoutMode.CUSTOM:
        return LayoutContainer(mode=mode, flow=ContainerFlow.FREE)
    return LayoutContainer(
        mode=mode, flow=ContainerFlow.GRID, columns=resolve_grid_columns(items_per_row)
    )


def resolve_shadow_tier(intensity: float) -> ShadowTier:
    """Quantize a 0-10 shadow intensity into one of five tiers."""
    if intensity <= 2:
        return ShadowTier.SM
    if intensity <= 4:
        return ShadowTier.MD
    if intensity <= 6:
        return ShadowTier.LG
    if intensity <= 8:
        return ShadowTier.XL
    return ShadowTier.XXL


def resolve_effects(effects: StyleEffects | None) -> EffectModifiers:
    """Map the effects set to surface modifiers."""
    if effects is None:
        return EffectModifiers()
    return EffectModifiers(blur=bool(effects.blur), glow=bool(effects.glow))


def resolve_alignment(position: LogoPosition | str) -> str:
    """Header alignment (left, center or right) for a logo position."""
    value = position.value if isinstance(position, LogoPosition) else str(position)
    if "center" in value:
        return "center"
    if "right" in value:
        return "right"
    return "left"


def _clamp(value: int, bounds: tuple[int, int]) -> int:
    low, high = bounds
    return max(low, min(high, int(value)))


def resolve_color(value: str | None, fallback: str) -> str:
    """Return ``value`` when it is a usable color literal, else ``fallback``."""
    candidate = (value or "").strip()
    if _HEX_COLOR.match(candidate) or _FUNC_COLOR.match(candidate):
        return candidate
    if _NAMED_COLOR.match(candidate):
        return candidate.lower()
    if candidate:
        logger.warning(f"Unusable color {candidate!r}, using {fallback}")
    return fallback


def resolve_font_family(value: str | None) -> str:
    """Strip characters that cannot appear in a literal font family."""
    cleaned = _FONT_UNSAFE.sub("", value or "").strip()
    return cleaned or DEFAULT_STYLE.font_family


def resolve_metrics(style: MenuStyle) -> StyleMetrics:
    """Resolve every numeric and literal style value with fallbacks applied."""
    fonts = FontMetrics(
        title=_clamp(style.font_size.title, FONT_SIZE_RANGE),
        category=_clamp(style.font_size.category, FONT_SIZE_RANGE),
        item=_clamp(style.font_size.item, FONT_SIZE_RANGE),
        price=_clamp(style.font_size.price, FONT_SIZE_RANGE),
    )
    return StyleMetrics(
        fonts=fonts,
        font_family=resolve_font_family(style.font_family),
        border_radius=_clamp(style.border_radius, BORDER_RADIUS_RANGE),
        spacing=_clamp(style.spacing, SPACING_RANGE),
        opacity=_clamp(style.background_opacity, OPACITY_RANGE) / 100,
        primary_color=resolve_color(style.primary_color, DEFAULT_STYLE.primary_color),
        secondary_color=resolve_color(style.secondary_color, DEFAULT_STYLE.secondary_color),
        accent_color=resolve_color(style.accent_color, DEFAULT_STYLE.accent_color),
        background_color=resolve_color(style.background_color, DEFAULT_STYLE.background_color),
        text_color=resolve_color(style.text_color, DEFAULT_STYLE.text_color),
    )


def css_url(ref: str) -> str:
    """Percent-encode an asset reference for use inside CSS ``url("...")``."""
    return quote(ref, safe=":/?#[]@!$&*+,;=%-._~")


def format_price_value(price: Decimal) -> str:
    """Render a price without trailing zeros (``12.50`` -> ``12.5``)."""
    text = f"{price:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_price(price: Decimal, currency: Currency, show_currency_flag: bool) -> str:
    """Price fragment shared by all renderers: ``[<flag> ]<price> <symbol>``."""
    prefix = f"{currency.flag} " if show_currency_flag and currency.flag else ""
    return f"{prefix}{format_price_value(price)} {currency.symbol}"
