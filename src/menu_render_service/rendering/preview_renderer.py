"""Live preview renderer.

Builds a view model from the menu document and the transient interaction
state, then renders it to HTML. Only the custom layout accepts item
manipulation; the zoom factor applies to the whole surface in every mode.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from markupsafe import Markup

from menu_render_service.models.menu_models import LayoutMode, MenuProject
from menu_render_service.models.preview_models import PreviewEvent, PreviewEventType
from menu_render_service.rendering.preview_interaction import (
    CustomLayoutInteraction,
    ItemTransform,
)
from menu_render_service.rendering.style_resolver import (
    ContainerFlow,
    EffectModifiers,
    LayoutContainer,
    ShadowTier,
    StyleMetrics,
    css_url,
    format_price,
    resolve_alignment,
    resolve_effects,
    resolve_layout_container,
    resolve_metrics,
    resolve_shadow_tier,
)
from menu_render_service.rendering.templating import fmt_px, render_template

logger = logging.getLogger(__name__)

JUSTIFY = {"left": "flex-start", "center": "center", "right": "flex-end"}


@dataclass(frozen=True)
class PreviewBackground:
    """Background layer: an image or a video, blended at ``opacity``."""

    kind: str
    ref: str
    opacity: float


@dataclass(frozen=True)
class PreviewItemView:
    id: str
    name: str
    description: str
    price_text: str
    image: str | None
    selected: bool = False
    transform: ItemTransform | None = None

    @property
    def transform_css(self) -> str:
        if self.transform is None:
            return ""
        t = self.transform
        return f"transform:translate({fmt_px(t.x)}px,{fmt_px(t.y)}px) scale({fmt_px(t.scale)});"


@dataclass(frozen=True)
class PreviewCategoryView:
    id: str
    name: str
    items: tuple[PreviewItemView, ...]


@dataclass(frozen=True)
class PreviewView:
    """Everything the preview template needs, fully resolved."""

    title: str
    description: str
    phone: str | None
    logo: str | None
    alignment: str
    background: PreviewBackground | None
    container: LayoutContainer
    shadow: ShadowTier
    effects: EffectModifiers
    metrics: StyleMetrics
    categories: tuple[PreviewCategoryView, ...]
    zoom: float
    stylesheet: Markup

    @property
    def custom_mode(self) -> bool:
        return self.container.mode == LayoutMode.CUSTOM

    @property
    def zoom_css(self) -> str:
        return f"transform:scale({fmt_px(self.zoom)});"


def build_preview_stylesheet(
    metrics: StyleMetrics,
    container: LayoutContainer,
    shadow: ShadowTier,
    effects: EffectModifiers,
    alignment: str,
) -> Markup:
    """Literal CSS for the preview surface.

    Every value is either numeric or passed through the resolver's
    literal-safe fallbacks, so the result can be emitted unescaped.
    """
    fonts = metrics.fonts
    radius = f"{metrics.border_radius}px"
    rules = [
        f".menu-preview{{position:relative;overflow:auto;background-color:{metrics.background_color};"
        f"color:{metrics.text_color};font-family:'{metrics.font_family}',sans-serif;}}",
        ".menu-surface{position:relative;z-index:1;transform-origin:top center;}",
        ".menu-background{position:absolute;inset:0;width:100%;height:100%;"
        "background-size:cover;background-position:center;background-repeat:no-repeat;"
        f"object-fit:cover;opacity:{fmt_px(metrics.opacity)};}}",
        f".menu-header{{display:flex;align-items:center;justify-content:{JUSTIFY[alignment]};"
        f"text-align:{alignment};margin-bottom:24px;}}",
        f".menu-logo{{width:64px;height:64px;object-fit:contain;border-radius:{radius};margin-inline-end:16px;}}",
        f".menu-title{{font-size:{fonts.title}px;color:{metrics.primary_color};font-weight:bold;}}",
        ".menu-info{font-size:14px;opacity:0.8;margin-top:4px;}",
        f".category-title{{font-size:{fonts.category}px;color:{metrics.secondary_color};"
        f"font-weight:bold;margin-bottom:16px;padding-bottom:8px;"
        f"border-bottom:1px solid {metrics.secondary_color};border-radius:{radius};}}",
        f".menu-items{{gap:{metrics.spacing}px;}}",
        f".item-name{{font-size:{fonts.item}px;color:{metrics.text_color};font-weight:600;}}",
        ".item-description{font-size:14px;opacity:0.8;}",
        f".item-price{{font-size:{fonts.price}px;color:{metrics.accent_color};font-weight:bold;}}",
        f".item-image{{width:100%;height:128px;object-fit:cover;border-radius:{radius};margin-bottom:12px;}}",
        ".menu-placeholder{text-align:center;padding:48px 0;color:#6b7280;}",
        ".menu-placeholder--items{text-align:start;padding:0;font-size:14px;}",
    ]

    item_decls = [f"border-radius:{radius}", f"padding:{container.padding}px"]
    if container.flow == ContainerFlow.GRID:
        rules.append(".menu-items{display:grid;}")
        rules.append(container.columns.to_css(".menu-items") if container.columns else "")
    elif container.flow == ContainerFlow.STACK:
        rules.append(".menu-items{display:flex;flex-direction:column;}")
    else:
        rules.append(".menu-items{position:relative;display:block;min-height:120px;}")
        rules.append(
            ".menu-items .menu-item{display:inline-block;vertical-align:top;"
            f"margin:{fmt_px(metrics.spacing / 2)}px;cursor:pointer;transform-origin:center;}}"
        )
        rules.append(f".menu-item--selected{{outline:2px solid {metrics.accent_color};cursor:move;}}")

    if container.divider:
        item_decls += [
            "display:flex",
            "align-items:center",
            "justify-content:space-between",
            "border-bottom:1px solid #e5e7eb",
            "padding-bottom:8px",
            "background-color:transparent",
        ]
        rules.append(
            f".item-image{{width:48px;height:48px;margin-bottom:0;border-radius:{radius};}}"
        )
    else:
        item_decls += ["border:1px solid #e5e7eb", "background-color:rgba(255,255,255,0.9)"]
    if container.shadowed:
        item_decls.append(f"box-shadow:{shadow.css}")
    item_decls += list(effects.declarations())
    rules.append(f".menu-item{{{';'.join(item_decls)};}}")

    return Markup("".join(rules))


def build_preview_view(
    project: MenuProject,
    show_currency_flag: bool,
    interaction: CustomLayoutInteraction | None = None,
) -> PreviewView:
    """Resolve a project plus transient state into a preview view model."""
    style = project.style
    restaurant = project.restaurant
    interaction = interaction or CustomLayoutInteraction()

    metrics = resolve_metrics(style)
    container = resolve_layout_container(style.layout, style.items_per_row)
    shadow = resolve_shadow_tier(style.shadow_intensity)
    effects = resolve_effects(style.effects)
    alignment = resolve_alignment(restaurant.logo_position)
    custom = container.mode == LayoutMode.CUSTOM

    background = None
    if style.background_image:
        background = PreviewBackground("image", css_url(style.background_image), metrics.opacity)
    elif style.background_video:
        background = PreviewBackground("video", style.background_video, metrics.opacity)

    categories = []
    for category in project.categories:
        items = []
        for item in category.items:
            transform = None
            if custom and item.id in interaction.transforms:
                transform = interaction.transforms[item.id]
            items.append(
                PreviewItemView(
                    id=item.id,
                    name=item.name,
                    description=item.description,
                    price_text=format_price(item.price, restaurant.currency, show_currency_flag),
                    image=item.image,
                    selected=custom and interaction.selected_item_id == item.id,
                    transform=transform,
                )
            )
        categories.append(PreviewCategoryView(id=category.id, name=category.name, items=tuple(items)))

    return PreviewView(
        title=restaurant.name,
        description=restaurant.description,
        phone=restaurant.phone,
        logo=restaurant.logo,
        alignment=alignment,
        background=background,
        container=container,
        shadow=shadow,
        effects=effects,
        metrics=metrics,
        categories=tuple(categories),
        zoom=interaction.zoom,
        stylesheet=build_preview_stylesheet(metrics, container, shadow, effects, alignment),
    )


class PreviewRenderer:
    """Live preview of one menu project.

    Owns the transient interaction state for as long as it lives. Replacing
    the project keeps that state, including positions of items that are no
    longer in the document.
    """

    def __init__(
        self,
        project: MenuProject,
        show_currency_flag: bool = True,
        on_project_change: Callable[[MenuProject], None] | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            project: Menu project to render
            show_currency_flag: Whether prices carry the currency flag
            on_project_change: Optional callback receiving whole-project replacements
        """
        self.project = project
        self.show_currency_flag = show_currency_flag
        self.on_project_change = on_project_change
        self.interaction = CustomLayoutInteraction()

    def update(self, project: MenuProject, show_currency_flag: bool | None = None) -> None:
        """Replace the rendered project, keeping transient state.

        An open drag does not survive a switch away from the custom layout.
        """
        self.project = project
        if project.style.layout != LayoutMode.CUSTOM:
            self.interaction.cancel_drag()
        if show_currency_flag is not None:
            self.show_currency_flag = show_currency_flag

    def publish_project(self, project: MenuProject) -> None:
        """Adopt ``project`` and hand it to the change callback, if any."""
        self.update(project)
        if self.on_project_change is not None:
            self.on_project_change(project)

    def handle_event(self, event: PreviewEvent) -> bool:
        """Apply one interaction event.

        Returns:
            True if the event changed or consumed state, False if ignored
        """
        layout = self.project.style.layout
        interaction = self.interaction

        if event.type == PreviewEventType.CLICK:
            return event.item_id is not None and interaction.click(event.item_id, layout)
        if event.type == PreviewEventType.POINTER_DOWN:
            if event.item_id is None:
                return False
            return interaction.pointer_down(event.item_id, event.x, event.y, layout)
        if event.type == PreviewEventType.POINTER_MOVE:
            return interaction.pointer_move(event.x, event.y, layout)
        if event.type == PreviewEventType.POINTER_UP:
            return interaction.pointer_up()
        if event.type == PreviewEventType.SCALE_UP:
            return interaction.scale_up(layout)
        if event.type == PreviewEventType.SCALE_DOWN:
            return interaction.scale_down(layout)
        if event.type == PreviewEventType.RESET:
            return interaction.reset(layout)
        if event.type == PreviewEventType.ZOOM_IN:
            return interaction.zoom_in()
        if event.type == PreviewEventType.ZOOM_OUT:
            return interaction.zoom_out()

        logger.warning(f"Unhandled preview event type: {event.type}")  # pragma: no cover
        return False

    def view(self) -> PreviewView:
        return build_preview_view(self.project, self.show_currency_flag, self.interaction)

    def render(self) -> str:
        """Render the current preview to HTML."""
        return render_template("preview.html.j2", view=self.view())
