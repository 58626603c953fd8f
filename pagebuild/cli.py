"""Cyclopts CLI entrypoint for building a static site with pagebuild.

The ``pagebuild`` console script renders every document under the content
folder with the layouts in the templates folder and writes the resulting HTML
into the output folder. Options fall back to ``PAGEBUILD_*`` environment
variables, so CI jobs can configure a build without flags.

Examples
--------
Build the site using the default folders:

>>> from pagebuild.cli import main
>>> main()  # doctest: +SKIP

Build into a custom directory with verbose logging:

>>> from pagebuild.cli import app
>>> app(["build", "--output-dir", "dist", "--verbose"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from jinja2 import TemplateError

from ._constants import DEFAULT_CUT_TAG
from .build import BuildSettings, SiteBuilder
from .errors import PageBuildError

DEFAULT_SOURCE_DIR = Path("content")
DEFAULT_CONFIG_DIR = Path("config")
DEFAULT_TEMPLATES_DIR = Path("templates")
DEFAULT_OUTPUT_DIR = Path("public")

app = App(name="pagebuild", config=cyclopts.config.Env("PAGEBUILD_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command(help="Render content documents into static HTML pages.")
def build(
    *,
    source_dir: typ.Annotated[
        Path, Parameter(help="Folder containing content documents")
    ] = DEFAULT_SOURCE_DIR,
    config_dir: typ.Annotated[
        Path, Parameter(help="Folder containing base.yml and <lang>.yml files")
    ] = DEFAULT_CONFIG_DIR,
    templates_dir: typ.Annotated[
        Path, Parameter(help="Folder containing layout templates")
    ] = DEFAULT_TEMPLATES_DIR,
    output_dir: typ.Annotated[
        Path, Parameter(help="Folder receiving the generated HTML")
    ] = DEFAULT_OUTPUT_DIR,
    extensions: typ.Annotated[
        tuple[str, ...], Parameter(help="Content file extensions to load")
    ] = ("md", "markdown", "html"),
    cut_tag: typ.Annotated[
        str, Parameter(help="Marker separating excerpts from the rest")
    ] = DEFAULT_CUT_TAG,
    pygments_style: typ.Annotated[
        str, Parameter(help="Pygments style for code blocks")
    ] = "monokai",
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Build the site and print every written path.

    Parameters
    ----------
    source_dir : Path, optional
        Content folder searched recursively for documents.
    config_dir : Path, optional
        Folder holding the YAML configuration files.
    templates_dir : Path, optional
        Folder holding ``<layout>.jinja`` templates.
    output_dir : Path, optional
        Destination folder for generated pages.
    extensions : tuple[str, ...], optional
        Extensions of the content files to load.
    cut_tag : str, optional
        Marker splitting a document's excerpt from the rest of its content.
    pygments_style : str, optional
        Style used to highlight code blocks.
    verbose : bool, optional
        Log every parsed and rendered document.

    Raises
    ------
    SystemExit
        With status ``1`` when the build fails; the error is reported on
        stderr.
    """
    _configure_logging(verbose=verbose)
    settings = BuildSettings(
        source_dir=source_dir,
        config_dir=config_dir,
        templates_dir=templates_dir,
        output_dir=output_dir,
        extensions=extensions,
        cut_tag=cut_tag or None,
        pygments_style=pygments_style,
    )
    try:
        written = SiteBuilder(settings).run()
    except (PageBuildError, TemplateError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)
    for path in written:
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``pagebuild`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
