"""Turn a source file's text into a :class:`~pagebuild.documents.Document`.

Parsing splits the YAML front matter from the body with python-frontmatter,
runs custom field parsers over the attributes, renders the body with the
renderer registered for the file's extension, and optionally cuts the rendered
content into an excerpt and the rest.

Example
-------
>>> from pagebuild.parser import ParseOptions, parse_document
>>> source = "---\\nlayout: post\\ntitle: Hello\\n---\\nIntro<!-- cut -->Rest"
>>> doc = parse_document(
...     source, "content", "blog/hello.md", ParseOptions(cut_tag="<!-- cut -->")
... )
>>> doc.url, doc["title"], doc.excerpt, doc.more
('/blog/hello', 'Hello', 'Intro', 'Rest')
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ

import frontmatter
import yaml

from .documents import Document
from .errors import MalformedFrontMatterError
from .fields import FieldParser, parse_fields
from .urls import derive_url, get_extension

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

BodyRenderer = cabc.Callable[[str], str]

_YAML_HANDLER = frontmatter.YAMLHandler()


@dc.dataclass(slots=True)
class ParseOptions:
    """Options controlling how source documents are parsed.

    Attributes
    ----------
    renderers : Mapping[str, BodyRenderer]
        Body renderers keyed by file extension (without the dot).
    field_parsers : Mapping[str, FieldParser]
        Custom front matter field parsers keyed by field name.
    cut_tag : str or None
        Marker separating the excerpt from the rest of the content.
    """

    renderers: cabc.Mapping[str, BodyRenderer] = dc.field(default_factory=dict)
    field_parsers: cabc.Mapping[str, FieldParser] = dc.field(default_factory=dict)
    cut_tag: str | None = None


def split_front_matter(
    raw_source: str, source_path: str
) -> tuple[dict[str, typ.Any], str]:
    """Return the front matter attributes and the body of ``raw_source``.

    Sources without a leading ``---`` block have no attributes and their whole
    text is the body. The body is stripped of surrounding whitespace either
    way.

    Raises
    ------
    MalformedFrontMatterError
        If the header block is unterminated, is not valid YAML, or does not
        describe a mapping.
    """
    text = raw_source.lstrip("\ufeff")
    if not _YAML_HANDLER.detect(text):
        return {}, text.strip()
    try:
        header, body = _YAML_HANDLER.split(text)
        attributes = _YAML_HANDLER.load(header)
    except (ValueError, yaml.YAMLError) as exc:
        raise MalformedFrontMatterError(source_path, str(exc)) from exc
    if attributes is None:
        attributes = {}
    if not isinstance(attributes, dict):
        reason = f"expected a mapping, got {type(attributes).__name__}"
        raise MalformedFrontMatterError(source_path, reason)
    return attributes, body.strip()


def render_by_type(
    source: str, source_path: str, renderers: cabc.Mapping[str, BodyRenderer]
) -> str:
    """Render ``source`` with the renderer registered for its file extension.

    Bodies whose extension has no renderer pass through unchanged.
    """
    render = renderers.get(get_extension(source_path))
    if render is None:
        return source
    return render(source)


def split_excerpt(content: str, cut_tag: str | None) -> tuple[str, str] | None:
    """Split ``content`` at the first ``cut_tag``; None when there is no cut."""
    if not cut_tag or cut_tag not in content:
        return None
    excerpt, more = content.split(cut_tag, 1)
    return excerpt, more


def parse_document(
    raw_source: str,
    source_folder: Path | str,
    relative_path: str,
    options: ParseOptions | None = None,
) -> Document:
    """Parse one source file into a Document.

    Parameters
    ----------
    raw_source : str
        Complete text of the source file, front matter included.
    source_folder : Path or str
        Folder the source was loaded from; used for diagnostics only.
    relative_path : str
        Path of the source relative to ``source_folder``. It becomes the
        document's ``source_path`` and drives its URL and body renderer.
    options : ParseOptions, optional
        Renderers, field parsers and cut marker; defaults to no renderers,
        no field parsers and no cut marker.

    Returns
    -------
    Document
        Front matter fields merged with ``source_path``, ``url`` and
        ``content`` (plus ``excerpt``/``more`` when the cut marker occurs).
        Structural fields win over front matter fields of the same name.

    Raises
    ------
    MalformedFrontMatterError
        If the front matter block cannot be parsed.
    FieldParseError
        If a custom field parser fails.
    """
    options = options or ParseOptions()
    attributes, body = split_front_matter(raw_source, relative_path)
    fields = parse_fields(attributes, options.field_parsers)
    content = render_by_type(body, relative_path, options.renderers)

    structural: dict[str, typ.Any] = {
        "source_path": relative_path,
        "url": derive_url(relative_path),
        "content": content,
    }
    cut = split_excerpt(content, options.cut_tag)
    if cut is not None:
        structural["excerpt"], structural["more"] = cut

    logger.debug("parsed %s from %s", relative_path, source_folder)
    return Document({**fields, **structural})


__all__ = [
    "BodyRenderer",
    "ParseOptions",
    "parse_document",
    "render_by_type",
    "split_excerpt",
    "split_front_matter",
]
