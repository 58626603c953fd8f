"""High-level orchestration for a complete site build.

:class:`SiteBuilder` wires the pipeline together: it loads the configuration
folder, parses every source document, renders one page per document and per
configured listing page for each language, and writes the results to the
output folder.

Listings are declared in the site configuration::

    listings:
      - url_prefix: /blog
        documents_per_page: 10
        layout: list
        filter: {layout: post}
        order: [-date]
      - url_prefix: /tags
        documents_per_page: 10
        layout: tag
        filter: {layout: post}
        group_by: tags

Example
-------
>>> from pathlib import Path
>>> from pagebuild.build import BuildSettings, SiteBuilder
>>> settings = BuildSettings(
...     source_dir=Path("content"),
...     config_dir=Path("config"),
...     templates_dir=Path("templates"),
...     output_dir=Path("public"),
... )
>>> SiteBuilder(settings).run()  # doctest: +SKIP
[PosixPath('public/index.html'), ...]
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import re
import typing as typ
from pathlib import Path

from ._constants import BASE_CONFIG_NAME, DEFAULT_CUT_TAG
from .config import Config, load_config
from .documents import Document, ListingPage, Page
from .errors import ConfigurationError
from .fields import STANDARD_FIELD_PARSERS
from .generator import (
    HtmlContentRenderer,
    JinjaTemplateRenderer,
    default_helpers,
    generate_pages,
    save_pages,
)
from .paginator import paginate
from .parser import ParseOptions
from .query import filter_documents, group_documents, order_documents
from .sources import load_sources

logger = logging.getLogger(__name__)

PATTERN_PREFIX = "re:"
LANG_PLACEHOLDER = "{lang}"


@dc.dataclass(slots=True)
class BuildSettings:
    """Filesystem locations and parsing options for one build."""

    source_dir: Path
    config_dir: Path
    templates_dir: Path
    output_dir: Path
    extensions: tuple[str, ...] = ("md", "markdown", "html")
    cut_tag: str | None = DEFAULT_CUT_TAG
    pygments_style: str = "monokai"
    template_extension: str = "jinja"


@dc.dataclass(slots=True)
class ListingConfig:
    """A paginated listing declared under ``listings`` in the site config."""

    url_prefix: str
    documents_per_page: int
    layout: str
    criteria: dict[str, typ.Any] = dc.field(default_factory=dict)
    order: list[str] = dc.field(default_factory=list)
    group_by: str | None = None

    @classmethod
    def from_mapping(cls, data: cabc.Mapping[str, typ.Any]) -> ListingConfig:
        """Build a listing from its config mapping.

        Filter values written as ``"re:<pattern>"`` are compiled into regular
        expressions.

        Raises
        ------
        ConfigurationError
            If the entry is not a mapping, ``documents_per_page`` is not a
            positive integer, or a filter pattern is invalid.
        """
        if not isinstance(data, cabc.Mapping):
            msg = f"Listing entries must be mappings, got {type(data).__name__}."
            raise ConfigurationError("listings", msg)
        raw_filter = data.get("filter") or {}
        if not isinstance(raw_filter, cabc.Mapping):
            msg = "Listing \"filter\" must be a mapping of field to value."
            raise ConfigurationError("filter", msg)
        criteria: dict[str, typ.Any] = {}
        for field, value in raw_filter.items():
            if isinstance(value, str) and value.startswith(PATTERN_PREFIX):
                try:
                    value = re.compile(value.removeprefix(PATTERN_PREFIX))
                except re.error as exc:
                    msg = f"Invalid pattern for listing filter '{field}': {exc}"
                    raise ConfigurationError("filter", msg) from exc
            criteria[field] = value
        per_page = data.get("documents_per_page")
        if per_page is not None and (
            isinstance(per_page, bool) or not isinstance(per_page, int) or per_page < 1
        ):
            msg = f'"documents_per_page" must be a positive integer, got {per_page!r}.'
            raise ConfigurationError("documents_per_page", msg)
        return cls(
            url_prefix=data.get("url_prefix", ""),
            documents_per_page=per_page or 0,
            layout=data.get("layout", ""),
            criteria=criteria,
            order=list(data.get("order") or []),
            group_by=data.get("group_by"),
        )


def _group_segment(value: typ.Any) -> str:
    """Return ``value`` as a single URL path segment.

    Raises
    ------
    ConfigurationError
        If the value is empty, a dot segment, or contains a path separator.
    """
    segment = str(value)
    if segment in {"", ".", ".."} or "/" in segment or "\\" in segment:
        msg = f"Group value {value!r} cannot be used as a URL path segment."
        raise ConfigurationError("group_by", msg)
    return segment


def build_listing(
    documents: cabc.Sequence[Document], listing: ListingConfig
) -> list[ListingPage]:
    """Filter, order and paginate ``documents`` as ``listing`` describes.

    With ``group_by`` set, every group is paginated separately under
    ``{url_prefix}/{group value}``. Group values must be single path
    segments; ``"../x"`` or ``"a/b"`` raise :class:`ConfigurationError`.
    """
    selected = filter_documents(documents, listing.criteria)
    if listing.order:
        selected = order_documents(selected, listing.order)
    if not listing.group_by:
        return paginate(
            selected,
            url_prefix=listing.url_prefix,
            documents_per_page=listing.documents_per_page,
            layout=listing.layout,
        )
    pages: list[ListingPage] = []
    for value, group in group_documents(selected, listing.group_by).items():
        group_pages = paginate(
            group,
            url_prefix=f"{listing.url_prefix}/{_group_segment(value)}",
            documents_per_page=listing.documents_per_page,
            layout=listing.layout,
        )
        pages.extend(page.evolve(group=value) for page in group_pages)
    return pages


def localize_prefix(url_prefix: str, lang: str) -> str:
    """Expand the ``{lang}`` placeholder in ``url_prefix``.

    Examples
    --------
    >>> localize_prefix("/{lang}/blog", "en")
    '/en/blog'
    >>> localize_prefix("/{lang}/blog", "base")
    '/blog'
    """
    if lang == BASE_CONFIG_NAME:
        return url_prefix.replace(f"/{LANG_PLACEHOLDER}", "").replace(
            LANG_PLACEHOLDER, ""
        )
    return url_prefix.replace(LANG_PLACEHOLDER, lang)


class SiteBuilder:
    """Build every page of a site from content, config and templates."""

    def __init__(
        self,
        settings: BuildSettings,
        *,
        helpers: cabc.Mapping[str, typ.Any] | None = None,
    ) -> None:
        """Initialize renderers for ``settings``.

        Parameters
        ----------
        settings : BuildSettings
            Folders and parsing options for the build.
        helpers : Mapping[str, Any], optional
            Extra template helpers; they override the defaults from
            :func:`~pagebuild.generator.default_helpers`.
        """
        self.settings = settings
        self.body_renderer = HtmlContentRenderer(settings.pygments_style)
        self.template_renderers = {
            settings.template_extension: JinjaTemplateRenderer(settings.templates_dir)
        }
        self.helpers = {**default_helpers(self.body_renderer), **(helpers or {})}

    def parse_options(self) -> ParseOptions:
        """Return the options used to parse source documents."""
        return ParseOptions(
            renderers={
                "md": self.body_renderer.markdown,
                "markdown": self.body_renderer.markdown,
            },
            field_parsers=STANDARD_FIELD_PARSERS,
            cut_tag=self.settings.cut_tag,
        )

    def run(self) -> list[Path]:
        """Build the site and return the written paths in output order.

        Raises
        ------
        PageBuildError
            Any pipeline error aborts the build before any page is written,
            including two pages sharing an output path (see
            :func:`~pagebuild.generator.save_pages`).
        """
        configs = load_config(self.settings.config_dir)
        documents = load_sources(
            self.settings.source_dir, self.settings.extensions, self.parse_options()
        )
        self._warn_unrendered(configs, documents)
        pages: list[Page] = []
        for lang, config in configs.items():
            pages.extend(self.render_language(lang, config, documents))
        written = save_pages(pages, self.settings.output_dir)
        logger.info("wrote %d pages to %s", len(written), self.settings.output_dir)
        return written

    @staticmethod
    def _warn_unrendered(
        configs: cabc.Mapping[str, Config], documents: cabc.Sequence[Document]
    ) -> None:
        if BASE_CONFIG_NAME in configs:
            return
        for document in documents:
            lang = document.get("lang")
            if not isinstance(lang, str) or lang not in configs:
                logger.warning(
                    "skipping %s: no config for lang %r", document.source_path, lang
                )

    def render_language(
        self, lang: str, config: Config, documents: cabc.Sequence[Document]
    ) -> list[Page]:
        """Render the documents and listings belonging to ``lang``.

        A ``{lang}`` placeholder in a listing's ``url_prefix`` is replaced by
        the language, so listings declared once in ``base.yml`` get one URL
        space per language. The ``base`` build drops the placeholder.
        """
        if lang == BASE_CONFIG_NAME:
            selected = list(documents)
        else:
            selected = filter_documents(documents, {"lang": lang})
        logger.info("rendering %d documents for %s", len(selected), lang)

        listing_pages: list[ListingPage] = []
        for entry in config.get("listings") or []:
            listing = ListingConfig.from_mapping(entry)
            listing.url_prefix = localize_prefix(listing.url_prefix, lang)
            listing_pages.extend(build_listing(selected, listing))

        return generate_pages(
            [*selected, *listing_pages],
            config,
            self.helpers,
            self.template_renderers,
            template_extension=self.settings.template_extension,
        )


__all__ = [
    "BuildSettings",
    "ListingConfig",
    "SiteBuilder",
    "build_listing",
    "localize_prefix",
]
