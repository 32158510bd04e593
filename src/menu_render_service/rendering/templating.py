"""Jinja2 environment shared by the HTML renderers."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

TEMPLATE_DIR = Path(__file__).parent / "templates"

DEFAULT_TITLE = "اسم المطعم"
NO_CATEGORIES_TEXT = "لم يتم إضافة أصناف بعد"
NO_CATEGORIES_HINT = "ابدأ بإضافة الأصناف والعناصر لرؤية المنيو"
NO_ITEMS_TEXT = "لا توجد عناصر في هذا الصنف"

env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    undefined=StrictUndefined,
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)
env.globals.update(
    DEFAULT_TITLE=DEFAULT_TITLE,
    NO_CATEGORIES_TEXT=NO_CATEGORIES_TEXT,
    NO_CATEGORIES_HINT=NO_CATEGORIES_HINT,
    NO_ITEMS_TEXT=NO_ITEMS_TEXT,
)


def render_template(template_name: str, **variables) -> str:
    """Render a Jinja2 template with given variables."""
    return env.get_template(template_name).render(**variables)


def fmt_px(value: float) -> str:
    """Format a length without trailing zeros (``12.0`` -> ``12``)."""
    text = (f"{float(value):.4f}").rstrip("0").rstrip(".")
    return "0" if text == "-0" else text
