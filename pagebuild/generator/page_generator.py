"""Render documents into output pages with a template renderer.

:func:`generate_page` picks the layout template for a document, renders it
with the merged context from :func:`~pagebuild.generator.context.make_context`,
and returns a :class:`~pagebuild.documents.Page` whose path mirrors the
document's source path without its extension.

Example
-------
>>> from pagebuild.documents import Document
>>> from pagebuild.generator import generate_page
>>> renderers = {"jinja": lambda name, ctx: f"{name}:{ctx['title']}"}
>>> doc = Document({"source_path": "about.md", "layout": "page", "title": "Hi"})
>>> generate_page(doc, {}, {}, renderers)
Page(page_path='about', content='page.jinja:Hi')
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from pagebuild.documents import Page
from pagebuild.errors import ConfigurationError, MissingLayoutError
from pagebuild.urls import remove_extension

from .context import make_context

if typ.TYPE_CHECKING:
    from .templates import TemplateRenderer

logger = logging.getLogger(__name__)


def _select_renderer(
    renderers: cabc.Mapping[str, TemplateRenderer], template_extension: str | None
) -> tuple[str, TemplateRenderer]:
    """Return the extension and renderer used to render templates.

    Without an explicit ``template_extension`` the first registered renderer
    is used, so only one template engine takes part in a build.
    """
    if template_extension is None:
        try:
            return next(iter(renderers.items()))
        except StopIteration:
            msg = "No template renderers registered."
            raise ConfigurationError("renderers", msg) from None
    try:
        return template_extension, renderers[template_extension]
    except KeyError:
        msg = f"No template renderer registered for '{template_extension}'."
        raise ConfigurationError("template_extension", msg) from None


def generate_page(
    document: cabc.Mapping[str, typ.Any],
    config: cabc.Mapping[str, typ.Any],
    helpers: cabc.Mapping[str, typ.Any],
    renderers: cabc.Mapping[str, TemplateRenderer],
    *,
    template_extension: str | None = None,
) -> Page:
    """Render ``document`` with its layout template.

    Parameters
    ----------
    document : Mapping[str, Any]
        Document or listing page to render; must define ``layout`` and
        ``source_path``.
    config : Mapping[str, Any]
        Resolved site configuration, exposed to templates as ``config``.
    helpers : Mapping[str, Any]
        Helper values and functions merged into the context.
    renderers : Mapping[str, TemplateRenderer]
        Template renderers keyed by template file extension.
    template_extension : str, optional
        Extension of the renderer to use; defaults to the first entry of
        ``renderers``.

    Returns
    -------
    Page
        Output path (source path without extension) and rendered text.

    Raises
    ------
    MissingLayoutError
        If the document has no ``layout``.
    ConfigurationError
        If no suitable template renderer is registered.
    """
    source_path = document.get("source_path")
    layout = document.get("layout")
    if not layout:
        raise MissingLayoutError(source_path)

    extension, render = _select_renderer(renderers, template_extension)
    template_id = f"{layout}.{extension}"
    context = make_context(document, config, helpers)
    content = render(template_id, context)
    logger.debug("rendered %s with %s", source_path, template_id)
    return Page(page_path=remove_extension(str(source_path)), content=content)


def generate_pages(
    documents: cabc.Iterable[cabc.Mapping[str, typ.Any]],
    config: cabc.Mapping[str, typ.Any],
    helpers: cabc.Mapping[str, typ.Any],
    renderers: cabc.Mapping[str, TemplateRenderer],
    *,
    template_extension: str | None = None,
) -> list[Page]:
    """Render every document in ``documents``; see :func:`generate_page`."""
    return [
        generate_page(
            document,
            config,
            helpers,
            renderers,
            template_extension=template_extension,
        )
        for document in documents
    ]


__all__ = ["generate_page", "generate_pages"]
