"""Built-in currency and template catalogs."""

from menu_render_service.models.menu_models import (
    Currency,
    FontSizes,
    LayoutMode,
    MenuStyle,
    MenuTemplate,
    StyleEffects,
    TemplateFamily,
)

CURRENCIES: tuple[Currency, ...] = (
    Currency(code="SAR", symbol="ر.س", name="Saudi Riyal", flag="🇸🇦"),
    Currency(code="IQD", symbol="د.ع", name="Iraqi Dinar", flag="🇮🇶"),
    Currency(code="AED", symbol="د.إ", name="UAE Dirham", flag="🇦🇪"),
    Currency(code="KWD", symbol="د.ك", name="Kuwaiti Dinar", flag="🇰🇼"),
    Currency(code="QAR", symbol="ر.ق", name="Qatari Riyal", flag="🇶🇦"),
    Currency(code="EGP", symbol="ج.م", name="Egyptian Pound", flag="🇪🇬"),
    Currency(code="JOD", symbol="د.أ", name="Jordanian Dinar", flag="🇯🇴"),
    Currency(code="USD", symbol="$", name="US Dollar", flag="🇺🇸"),
    Currency(code="EUR", symbol="€", name="Euro", flag="🇪🇺"),
)

DEFAULT_CURRENCY = CURRENCIES[0]


def find_currency(code: str) -> Currency | None:
    """Look up a catalog currency by its ISO code."""
    for currency in CURRENCIES:
        if currency.code == code:
            return currency
    return None


def _preset(
    template_id: str,
    name: str,
    description: str,
    family: TemplateFamily,
    colors: tuple[str, str, str, str, str],
    font_family: str,
    font_size: tuple[int, int, int, int],
    layout: LayoutMode,
    items_per_row: int,
    shadow_intensity: int = 2,
    effects: StyleEffects | None = None,
) -> MenuTemplate:
    primary, secondary, accent, background, text = colors
    title, category, item, price = font_size
    return MenuTemplate(
        id=template_id,
        name=name,
        description=description,
        preview=f"templates/{template_id}.jpg",
        layout=family,
        style=MenuStyle(
            primary_color=primary,
            secondary_color=secondary,
            accent_color=accent,
            background_color=background,
            text_color=text,
            font_family=font_family,
            font_size=FontSizes(title=title, category=category, item=item, price=price),
            layout=layout,
            items_per_row=items_per_row,
            shadow_intensity=shadow_intensity,
            effects=effects or StyleEffects(),
        ),
    )


BUILTIN_TEMPLATES: tuple[MenuTemplate, ...] = (
    _preset(
        "modern",
        "Modern",
        "Clean grid with bold accents",
        TemplateFamily.MODERN,
        ("#1e40af", "#3b82f6", "#f59e0b", "#ffffff", "#1f2937"),
        "Inter",
        (32, 24, 18, 16),
        LayoutMode.GRID,
        2,
    ),
    _preset(
        "classic",
        "Classic",
        "Traditional serif list",
        TemplateFamily.CLASSIC,
        ("#7c2d12", "#92400e", "#b45309", "#fffbeb", "#292524"),
        "Georgia",
        (36, 26, 18, 18),
        LayoutMode.LIST,
        1,
    ),
    _preset(
        "minimal",
        "Minimal",
        "Quiet list with generous whitespace",
        TemplateFamily.MINIMAL,
        ("#111827", "#6b7280", "#111827", "#ffffff", "#374151"),
        "Helvetica",
        (28, 20, 16, 16),
        LayoutMode.LIST,
        1,
        shadow_intensity=0,
    ),
    _preset(
        "elegant",
        "Elegant",
        "Dark cards with gold pricing",
        TemplateFamily.ELEGANT,
        ("#d4af37", "#e5e7eb", "#d4af37", "#111111", "#f3f4f6"),
        "Times New Roman",
        (40, 28, 20, 18),
        LayoutMode.CARD,
        1,
        shadow_intensity=6,
    ),
    _preset(
        "rustic",
        "Rustic",
        "Warm earthy cards",
        TemplateFamily.RUSTIC,
        ("#78350f", "#a16207", "#15803d", "#fef3c7", "#451a03"),
        "Georgia",
        (34, 24, 18, 16),
        LayoutMode.CARD,
        1,
        shadow_intensity=4,
    ),
    _preset(
        "contemporary",
        "Contemporary",
        "Three column grid",
        TemplateFamily.CONTEMPORARY,
        ("#0f766e", "#14b8a6", "#f43f5e", "#f8fafc", "#0f172a"),
        "Roboto",
        (30, 22, 17, 16),
        LayoutMode.GRID,
        3,
    ),
    _preset(
        "vintage",
        "Vintage",
        "Sepia list with serif type",
        TemplateFamily.VINTAGE,
        ("#713f12", "#854d0e", "#9a3412", "#fefce8", "#422006"),
        "Times New Roman",
        (38, 26, 18, 18),
        LayoutMode.LIST,
        1,
    ),
    _preset(
        "artistic",
        "Artistic",
        "Colorful grid with glow",
        TemplateFamily.ARTISTIC,
        ("#7c3aed", "#db2777", "#f59e0b", "#fdf4ff", "#1e1b4b"),
        "Open Sans",
        (36, 24, 18, 16),
        LayoutMode.GRID,
        2,
        shadow_intensity=8,
        effects=StyleEffects(glow=True),
    ),
    _preset(
        "digital",
        "Digital",
        "Dense four column grid for screens",
        TemplateFamily.DIGITAL,
        ("#22d3ee", "#38bdf8", "#a3e635", "#0f172a", "#e2e8f0"),
        "Roboto",
        (30, 22, 16, 16),
        LayoutMode.GRID,
        4,
        shadow_intensity=4,
        effects=StyleEffects(blur=True),
    ),
    _preset(
        "premium",
        "Premium",
        "Spacious cards with deep shadows",
        TemplateFamily.PREMIUM,
        ("#1c1917", "#57534e", "#b91c1c", "#fafaf9", "#1c1917"),
        "Arial",
        (42, 28, 20, 20),
        LayoutMode.CARD,
        1,
        shadow_intensity=10,
    ),
)

DEFAULT_TEMPLATE = BUILTIN_TEMPLATES[0]


def find_builtin_template(template_id: str) -> MenuTemplate | None:
    """Look up a built-in template by id."""
    for template in BUILTIN_TEMPLATES:
        if template.id == template_id:
            return template
    return None
