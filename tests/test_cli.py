"""Tests for the ``pagebuild build`` command."""

from __future__ import annotations

import typing as typ

import pytest

from pagebuild import cli

if typ.TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def site(tmp_path: Path) -> dict[str, Path]:
    """Create a minimal site with one page and one template."""
    content = tmp_path / "content"
    config = tmp_path / "config"
    templates = tmp_path / "templates"
    for folder in (content, config, templates):
        folder.mkdir()
    (content / "index.md").write_text(
        "---\nlayout: page\ntitle: Home\n---\nHello **world**.", encoding="utf-8"
    )
    (config / "base.yml").write_text("title: Site\n", encoding="utf-8")
    (templates / "page.jinja").write_text(
        "<title>{{ title }} | {{ config.title }}</title>{{ content|safe }}",
        encoding="utf-8",
    )
    return {
        "content": content,
        "config": config,
        "templates": templates,
        "output": tmp_path / "public",
    }


def _run(site: dict[str, Path]) -> None:
    cli.build(
        source_dir=site["content"],
        config_dir=site["config"],
        templates_dir=site["templates"],
        output_dir=site["output"],
    )


def test_build_writes_pages(
    site: dict[str, Path], capsys: pytest.CaptureFixture[str]
) -> None:
    """A successful build writes HTML and reports each path."""
    _run(site)
    html = (site["output"] / "index.html").read_text(encoding="utf-8")
    assert "<title>Home | Site</title>" in html
    assert "<strong>world</strong>" in html
    out = capsys.readouterr().out
    assert "wrote " in out
    assert "index.html" in out


def test_build_reports_pipeline_errors(
    site: dict[str, Path], capsys: pytest.CaptureFixture[str]
) -> None:
    """Pipeline errors print the offending path and exit non-zero."""
    (site["content"] / "draft.md").write_text("No layout here.", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        _run(site)
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "error:" in err
    assert "draft.md" in err
    assert not (site["output"] / "index.html").exists(), "no partial output expected"


def test_build_reports_missing_templates(
    site: dict[str, Path], capsys: pytest.CaptureFixture[str]
) -> None:
    """A layout without a template is reported rather than crashing."""
    (site["templates"] / "page.jinja").unlink()
    with pytest.raises(SystemExit):
        _run(site)
    assert "page.jinja" in capsys.readouterr().err


def test_build_forwards_options(mocker: typ.Any) -> None:
    """The command forwards its options to the site builder."""
    builder_cls = mocker.patch("pagebuild.cli.SiteBuilder")
    builder_cls.return_value.run.return_value = []
    cli.build(cut_tag="", pygments_style="friendly")
    settings = builder_cls.call_args.args[0]
    assert settings.cut_tag is None
    assert settings.pygments_style == "friendly"
    assert settings.source_dir == cli.DEFAULT_SOURCE_DIR
