"""Context assembly, template rendering and page output for pagebuild."""

from .context import default_helpers, make_context
from .page_generator import generate_page, generate_pages
from .renderer import HtmlContentRenderer
from .templates import JinjaTemplateRenderer, TemplateRenderer
from .writer import save_page, save_pages

__all__ = [
    "HtmlContentRenderer",
    "JinjaTemplateRenderer",
    "TemplateRenderer",
    "default_helpers",
    "generate_page",
    "generate_pages",
    "make_context",
    "save_page",
    "save_pages",
]
