"""Jinja-backed template renderer used to turn contexts into pages."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

if typ.TYPE_CHECKING:
    from pathlib import Path

TemplateRenderer = cabc.Callable[[str, cabc.Mapping[str, typ.Any]], str]


class JinjaTemplateRenderer:
    """Render named templates from a folder with a shared Jinja environment.

    Instances are callables matching :data:`TemplateRenderer`, so they can be
    registered in the template renderer mapping handed to
    :func:`~pagebuild.generator.generate_page`.
    """

    def __init__(self, templates_dir: Path, *, strict: bool = False) -> None:
        """Configure the Jinja environment for ``templates_dir``.

        Parameters
        ----------
        templates_dir : Path
            Folder containing the layout templates.
        strict : bool, optional
            Raise on undefined template variables instead of rendering them
            as empty strings.
        """
        self.templates_dir = templates_dir
        options: dict[str, typ.Any] = {}
        if strict:
            options["undefined"] = StrictUndefined
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
            **options,
        )

    def __call__(self, template_id: str, context: cabc.Mapping[str, typ.Any]) -> str:
        """Render ``template_id`` with ``context``.

        Raises
        ------
        jinja2.TemplateNotFound
            If no template named ``template_id`` exists.
        """
        template = self.env.get_template(template_id)
        return template.render(**context)


__all__ = ["JinjaTemplateRenderer", "TemplateRenderer"]
