"""Static document export.

Produces one self-contained HTML document with every style decision
inlined as literal CSS. The item grid is a fixed auto-fit grid instead of
the preview's column table so the document needs no script to lay out.
Rendering is deterministic: the same project always yields the same bytes.
"""

import logging
from dataclasses import dataclass

from markupsafe import Markup

from menu_render_service.models.menu_models import MenuProject
from menu_render_service.rendering.style_resolver import (
    css_url,
    format_price,
    resolve_alignment,
    resolve_effects,
    resolve_metrics,
    resolve_shadow_tier,
)
from menu_render_service.rendering.templating import fmt_px, render_template

logger = logging.getLogger(__name__)

MIN_ITEM_WIDTH = 300
DEFAULT_PRINT_SETTLE_DELAY_MS = 1000


@dataclass(frozen=True)
class DocumentItem:
    name: str
    description: str
    price_text: str
    image: str | None


@dataclass(frozen=True)
class DocumentCategory:
    name: str
    items: tuple[DocumentItem, ...]


def build_document_stylesheet(project: MenuProject) -> Markup:
    """Literal CSS for the exported document, derived through the style resolver."""
    style = project.style
    metrics = resolve_metrics(style)
    fonts = metrics.fonts
    shadow = resolve_shadow_tier(style.shadow_intensity)
    hover_shadow = resolve_shadow_tier(style.shadow_intensity + 2)
    effects = resolve_effects(style.effects)
    alignment = resolve_alignment(project.restaurant.logo_position)
    radius = f"{metrics.border_radius}px"

    body = [
        f"font-family:'{metrics.font_family}',sans-serif",
        f"background-color:{metrics.background_color}",
        f"color:{metrics.text_color}",
        "padding:20px",
        "line-height:1.6",
        "position:relative",
        "min-height:100vh",
    ]

    rules = [
        "*{margin:0;padding:0;box-sizing:border-box;}",
        f"body{{{';'.join(body)};}}",
        ".background{position:fixed;inset:0;width:100%;height:100%;z-index:0;"
        "background-size:cover;background-position:center;object-fit:cover;"
        f"opacity:{fmt_px(metrics.opacity)};}}",
        ".container{position:relative;z-index:1;max-width:1200px;margin:0 auto;}",
        f".header{{text-align:{alignment};margin-bottom:30px;}}",
        f".logo{{width:80px;height:80px;object-fit:contain;border-radius:{radius};}}",
        f".restaurant-name{{font-size:{fonts.title}px;color:{metrics.primary_color};"
        "font-weight:bold;margin:10px 0;}",
        ".category{margin-bottom:40px;}",
        f".category-title{{font-size:{fonts.category}px;color:{metrics.secondary_color};"
        "font-weight:bold;margin-bottom:20px;padding-bottom:10px;"
        f"border-bottom:2px solid {metrics.secondary_color};border-radius:{radius};}}",
        ".items{display:grid;"
        f"grid-template-columns:repeat(auto-fit,minmax({MIN_ITEM_WIDTH}px,1fr));"
        f"gap:{metrics.spacing}px;}}",
        f".item{{border:1px solid #ddd;border-radius:{radius};padding:15px;"
        f"background:rgba(255,255,255,0.9);box-shadow:{shadow.css};"
        "transition:transform 0.2s ease;}",
        f".item:hover{{transform:translateY(-2px);box-shadow:{hover_shadow.css};}}",
        f".item-image{{width:100%;height:150px;object-fit:cover;border-radius:{radius};margin-bottom:10px;}}",
        f".item-name{{font-size:{fonts.item}px;font-weight:bold;margin-bottom:5px;}}",
        ".item-description{font-size:14px;opacity:0.8;margin-bottom:10px;}",
        f".item-price{{font-size:{fonts.price}px;color:{metrics.accent_color};font-weight:bold;}}",
        ".placeholder{text-align:center;padding:48px 0;color:#6b7280;}",
        ".placeholder-items{font-size:14px;color:#6b7280;}",
    ]
    for declaration in effects.declarations():
        rules.append(f".item{{{declaration};}}")

    return Markup("".join(rules))


def _document_context(project: MenuProject, show_currency_flag: bool) -> dict:
    restaurant = project.restaurant
    style = project.style
    categories = tuple(
        DocumentCategory(
            name=category.name,
            items=tuple(
                DocumentItem(
                    name=item.name,
                    description=item.description,
                    price_text=format_price(item.price, restaurant.currency, show_currency_flag),
                    image=item.image,
                )
                for item in category.items
            ),
        )
        for category in project.categories
    )
    return {
        "restaurant": restaurant,
        "categories": categories,
        "stylesheet": build_document_stylesheet(project),
        "background_image": css_url(style.background_image) if style.background_image else None,
        "background_video": style.background_video,
    }


def render_document(project: MenuProject, show_currency_flag: bool) -> str:
    """Render ``project`` to a standalone HTML document string."""
    return render_template(
        "menu_document.html.j2", **_document_context(project, show_currency_flag)
    )


def render_print_document(
    project: MenuProject,
    show_currency_flag: bool,
    settle_delay_ms: int = DEFAULT_PRINT_SETTLE_DELAY_MS,
) -> str:
    """Render the static document wrapped for the print surface.

    The surface opens the platform print dialog once the document has loaded
    and ``settle_delay_ms`` has elapsed, then closes itself.
    """
    return render_template(
        "print_document.html.j2",
        settle_delay_ms=max(0, int(settle_delay_ms)),
        **_document_context(project, show_currency_flag),
    )
