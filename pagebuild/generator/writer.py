"""Persist generated pages to the output folder."""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from pagebuild._constants import OUTPUT_SUFFIX
from pagebuild.errors import OutputPathError

if typ.TYPE_CHECKING:
    from pathlib import Path

    from pagebuild.documents import Page

logger = logging.getLogger(__name__)


def output_path_for(page: Page, folder: Path) -> Path:
    """Return ``folder/<page_path>.html``.

    Raises
    ------
    OutputPathError
        If the path resolves outside ``folder``.
    """
    output_path = folder / f"{page.page_path}{OUTPUT_SUFFIX}"
    if not output_path.resolve().is_relative_to(folder.resolve()):
        msg = f"path escapes the output folder '{folder}'"
        raise OutputPathError(page.page_path, msg)
    return output_path


def save_page(page: Page, folder: Path) -> Path:
    """Write ``page`` to ``folder/<page_path>.html`` and return the path.

    Parent folders are created as needed.
    """
    output_path = output_path_for(page, folder)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(page.content, encoding="utf-8")
    logger.debug("wrote %s", output_path)
    return output_path


def save_pages(pages: cabc.Iterable[Page], folder: Path) -> list[Path]:
    """Write every page in ``pages`` under ``folder``.

    Every target is checked before the first write, so a bad path leaves
    ``folder`` untouched.

    Raises
    ------
    OutputPathError
        If a page escapes ``folder`` or two pages share an output path.
    """
    pages = list(pages)
    seen: dict[Path, str] = {}
    for page in pages:
        target = output_path_for(page, folder)
        if target in seen:
            msg = f"same output path as '{seen[target]}' ({target})"
            raise OutputPathError(page.page_path, msg)
        seen[target] = page.page_path
    return [save_page(page, folder) for page in pages]


__all__ = ["output_path_for", "save_page", "save_pages"]
