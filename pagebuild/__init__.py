"""Static site build pipeline.

This package turns a folder of content documents with YAML front matter into
static HTML pages. Documents are parsed, filtered, ordered, grouped and
paginated, then rendered with Jinja layouts using per-language configuration.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from pagebuild import main
>>> main()  # doctest: +SKIP
>>> from pagebuild import app
>>> app(["build", "--help"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
