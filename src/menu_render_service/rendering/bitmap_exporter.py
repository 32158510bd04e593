"""Bitmap export.

The raster surface has no box model and no text wrapping, so vertical
placement is computed by hand: ``layout_bitmap`` walks the document once,
accumulating a cursor, and emits draw commands with explicit coordinates.
``rasterize`` then replays those commands with Pillow. Background images
and videos are not rasterized, and content past the canvas height is drawn
out of bounds rather than paginated.
"""

import io
import logging
from dataclasses import dataclass, field
from functools import lru_cache

from PIL import Image, ImageColor, ImageDraw, ImageFont

from menu_render_service.models.menu_models import MenuProject
from menu_render_service.rendering.style_resolver import format_price, resolve_metrics
from menu_render_service.rendering.templating import DEFAULT_TITLE

logger = logging.getLogger(__name__)

CANVAS_WIDTH = 800
CANVAS_HEIGHT = 1200

TITLE_Y = 80
CONTENT_START_Y = 150
CATEGORY_ADVANCE = 50
ITEM_NAME_ADVANCE = 30
DESCRIPTION_ADVANCE = 25
PRICE_ADVANCE = 40
CATEGORY_GAP = 20
DESCRIPTION_FONT_SIZE = 14

# Distinct (family, size, weight) fonts kept loaded
FONT_CACHE_SIZE = 64

FALLBACK_RGB = (0, 0, 0)


@dataclass(frozen=True)
class FillRect:
    x: int
    y: int
    width: int
    height: int
    color: str


@dataclass(frozen=True)
class DrawText:
    """Text centered horizontally on ``x`` with its baseline on ``y``."""

    text: str
    x: float
    y: float
    font_size: int
    color: str
    bold: bool = False


DrawCommand = FillRect | DrawText


@dataclass(frozen=True)
class BitmapLayout:
    """Canvas description plus the draw commands in paint order.

    Attributes:
        width: Canvas width in px
        height: Canvas height in px
        font_family: Font family used for every text command
        commands: Draw commands in paint order
        cursor: Vertical cursor after the last command
    """

    width: int
    height: int
    font_family: str
    commands: tuple[DrawCommand, ...] = field(default_factory=tuple)
    cursor: int = CONTENT_START_Y

    @property
    def texts(self) -> tuple[DrawText, ...]:
        return tuple(c for c in self.commands if isinstance(c, DrawText))


def layout_bitmap(project: MenuProject, show_currency_flag: bool) -> BitmapLayout:
    """Compute the draw commands for ``project`` without touching a surface."""
    metrics = resolve_metrics(project.style)
    fonts = metrics.fonts
    currency = project.restaurant.currency
    center = CANVAS_WIDTH / 2

    commands: list[DrawCommand] = [
        FillRect(0, 0, CANVAS_WIDTH, CANVAS_HEIGHT, metrics.background_color),
        DrawText(
            project.restaurant.name or DEFAULT_TITLE,
            center,
            TITLE_Y,
            fonts.title,
            metrics.primary_color,
            bold=True,
        ),
    ]

    y = CONTENT_START_Y
    for category in project.categories:
        commands.append(
            DrawText(category.name, center, y, fonts.category, metrics.secondary_color, bold=True)
        )
        y += CATEGORY_ADVANCE

        for item in category.items:
            commands.append(DrawText(item.name, center, y, fonts.item, metrics.text_color))
            y += ITEM_NAME_ADVANCE

            if item.description:
                commands.append(
                    DrawText(item.description, center, y, DESCRIPTION_FONT_SIZE, metrics.text_color)
                )
                y += DESCRIPTION_ADVANCE

            commands.append(
                DrawText(
                    format_price(item.price, currency, show_currency_flag),
                    center,
                    y,
                    fonts.price,
                    metrics.accent_color,
                    bold=True,
                )
            )
            y += PRICE_ADVANCE

        y += CATEGORY_GAP

    if y > CANVAS_HEIGHT:
        logger.info(f"Bitmap content extends to y={y}, past the {CANVAS_HEIGHT}px canvas")

    return BitmapLayout(
        width=CANVAS_WIDTH,
        height=CANVAS_HEIGHT,
        font_family=metrics.font_family,
        commands=tuple(commands),
        cursor=y,
    )


@lru_cache(maxsize=FONT_CACHE_SIZE)
def load_font(font_family: str, size: int, bold: bool = False) -> ImageFont.ImageFont:
    """Load a TrueType font for ``font_family``, or Pillow's default font at ``size``."""
    compact = font_family.replace(" ", "")
    candidates = [f"{compact}-Bold.ttf", f"{font_family} Bold.ttf"] if bold else []
    candidates += [font_family, f"{font_family}.ttf", f"{compact}.ttf"]
    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    logger.debug(f"Font {font_family!r} not found, using the default font")
    return ImageFont.load_default(size=size)


def to_rgb(color: str) -> tuple[int, ...]:
    try:
        return ImageColor.getrgb(color)
    except ValueError:
        logger.warning(f"Color {color!r} cannot be rasterized, using black")
        return FALLBACK_RGB


class RasterCanvas:
    """Imperative drawing surface over a Pillow image."""

    def __init__(self, image: Image.Image, font_family: str) -> None:
        self.image = image
        self.draw = ImageDraw.Draw(image)
        self.font_family = font_family

    @classmethod
    def for_layout(cls, layout: BitmapLayout) -> "RasterCanvas":
        return cls(Image.new("RGB", (layout.width, layout.height)), layout.font_family)

    def fill_rect(self, x0: int, y0: int, dx: int, dy: int, color: str) -> None:
        self.draw.rectangle((x0, y0, x0 + dx, y0 + dy), fill=to_rgb(color))

    def draw_text(self, x: float, y: float, text: str, size: int, color: str, bold: bool) -> None:
        font = load_font(self.font_family, size, bold)
        fill = to_rgb(color)
        if isinstance(font, ImageFont.FreeTypeFont):
            self.draw.text((x, y), text, font=font, fill=fill, anchor="ms")
        else:
            width = self.draw.textlength(text, font=font)
            self.draw.text((x - width / 2, y - size), text, font=font, fill=fill)

    def apply(self, command: DrawCommand) -> None:
        if isinstance(command, FillRect):
            self.fill_rect(command.x, command.y, command.width, command.height, command.color)
        else:
            self.draw_text(
                command.x, command.y, command.text, command.font_size, command.color, command.bold
            )


def rasterize(layout: BitmapLayout) -> Image.Image:
    """Replay a layout's draw commands onto a new image."""
    canvas = RasterCanvas.for_layout(layout)
    for command in layout.commands:
        canvas.apply(command)
    return canvas.image


def render_bitmap(project: MenuProject, show_currency_flag: bool) -> bytes:
    """Render ``project`` to PNG-encoded bytes."""
    image = rasterize(layout_bitmap(project, show_currency_flag))
    buffer = io.BytesIO()
    image.save(buffer, "PNG")
    return buffer.getvalue()
