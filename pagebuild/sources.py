"""Discover source files on disk and parse them into documents."""

from __future__ import annotations

import collections.abc as cabc
import logging
from pathlib import Path

from .documents import Document
from .parser import ParseOptions, parse_document
from .urls import get_extension

logger = logging.getLogger(__name__)


def list_source_files(folder: Path, extensions: cabc.Iterable[str]) -> list[str]:
    """Return POSIX paths, relative to ``folder``, of files with ``extensions``.

    Extensions are given without a leading dot. Each matching file is listed
    once and the result is sorted so repeated builds see the same order.

    Raises
    ------
    FileNotFoundError
        If ``folder`` does not exist.
    """
    if not folder.is_dir():
        msg = f"Source folder '{folder}' not found."
        raise FileNotFoundError(msg)
    wanted = {extension.lstrip(".") for extension in extensions}
    matches = {
        path.relative_to(folder).as_posix()
        for path in folder.rglob("*")
        if path.is_file() and get_extension(path.name) in wanted
    }
    return sorted(matches)


def load_sources(
    folder: Path,
    extensions: cabc.Iterable[str],
    options: ParseOptions | None = None,
) -> list[Document]:
    """Load and parse every source file under ``folder``.

    Parameters
    ----------
    folder : Path
        Content folder to search recursively.
    extensions : Iterable[str]
        File extensions to include, for example ``("md", "html")``.
    options : ParseOptions, optional
        Renderers, field parsers and cut marker passed to
        :func:`~pagebuild.parser.parse_document`.

    Returns
    -------
    list[Document]
        A new list in discovery order. Callers that need a specific order
        should apply :func:`~pagebuild.query.order_documents`.
    """
    files = list_source_files(folder, extensions)
    logger.info("loading %d source files from %s", len(files), folder)
    documents: list[Document] = []
    for relative_path in files:
        source = (folder / relative_path).read_text(encoding="utf-8")
        documents.append(parse_document(source, folder, relative_path, options))
    return documents


__all__ = ["list_source_files", "load_sources"]
