"""Behaviour tests for building a multilingual site end to end.

These pytest-bdd scenarios drive :class:`pagebuild.build.SiteBuilder` over a
small blog written in two languages. The feature file
``site_build.feature`` covers language overlays, paginated listings, tag
groups, and the fail-fast behaviour for documents without a layout.

Usage
-----
Run ``pytest tests/bdd/test_site_build.py -v``. The scenarios only touch
``tmp_path``, so no external services are required.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from pagebuild.build import BuildSettings, SiteBuilder
from pagebuild.errors import MissingLayoutError

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "site_build.feature"
scenarios(FEATURE_FILE)

POSTS = {
    "en/blog/first.md": ("First post", "2024-01-01", "python, sites"),
    "en/blog/second.md": ("Second post", "2024-02-01", "python"),
    "en/blog/third.md": ("Third post", "2024-03-01", "sites"),
    "ru/blog/first.md": ("Первый пост", "2024-01-01", "python"),
}


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


def _as_path(value: object) -> Path:
    assert isinstance(value, Path)
    return value


@given("a content folder with English and Russian posts")
def given_content(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Write posts and home pages for both languages."""
    content = tmp_path / "content"
    for relative, (title, date, tags) in POSTS.items():
        path = content / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        lang = relative.split("/", 1)[0]
        path.write_text(
            f"---\nlayout: post\nlang: {lang}\ntitle: {title}\n"
            f"date: {date}\ntags: {tags}\n---\n"
            f"Intro of {title}.\n\n<!-- cut -->\n\nRest of {title}.\n",
            encoding="utf-8",
        )
    for lang in ("en", "ru"):
        (content / lang / "index.md").write_text(
            f"---\nlayout: home\nlang: {lang}\ntitle: Home\n---\nWelcome.\n",
            encoding="utf-8",
        )
    scenario_state["content"] = content


@given("a config folder with a base config and two language overlays")
def given_config(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Write base.yml plus en.yml and ru.yml overlays."""
    config = tmp_path / "config"
    config.mkdir()
    (config / "base.yml").write_text(
        "title: Blog\nurl: https://example.com\n", encoding="utf-8"
    )
    (config / "en.yml").write_text(
        """
listings:
  - url_prefix: /en/blog
    documents_per_page: 2
    layout: list
    filter: {layout: post}
    order: [-date]
  - url_prefix: /en/tags
    documents_per_page: 10
    layout: list
    filter: {url: "re:^/en/blog/"}
    order: [date]
    group_by: tags
        """.strip()
        + "\n",
        encoding="utf-8",
    )
    (config / "ru.yml").write_text("title: Блог\n", encoding="utf-8")
    scenario_state["config"] = config


@given("layout templates for posts and listings")
def given_templates(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Write post, home and list layouts."""
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "post.jinja").write_text(
        "<title>{{ title }} | {{ config.title }}</title>\n"
        "<time>{{ format_date(date, '%Y-%m-%d') }}</time>\n"
        "<div class=\"excerpt\">{{ excerpt|safe }}</div>\n",
        encoding="utf-8",
    )
    (templates / "home.jinja").write_text(
        "<title>{{ config.title }}</title>{{ content|safe }}\n", encoding="utf-8"
    )
    (templates / "list.jinja").write_text(
        "<title>{{ config.title }}{% if group %} #{{ group }}{% endif %}</title>\n"
        "<ul>\n"
        "{% for doc in documents %}\n"
        "<li><a href=\"{{ doc.url }}\">{{ doc.title }}</a></li>\n"
        "{% endfor %}\n"
        "</ul>\n"
        "{% if next_url %}<a class=\"next\" href=\"{{ next_url }}\">Older</a>{% endif %}\n",
        encoding="utf-8",
    )
    scenario_state["templates"] = templates


@given("a draft without a layout")
def given_draft(scenario_state: dict[str, object]) -> None:
    """Add a document that lacks the layout field."""
    content = _as_path(scenario_state["content"])
    (content / "en" / "draft.md").write_text(
        "---\nlang: en\ntitle: Draft\n---\nUnfinished.\n", encoding="utf-8"
    )


def _builder(tmp_path: Path, scenario_state: dict[str, object]) -> SiteBuilder:
    output = tmp_path / "public"
    scenario_state["output"] = output
    settings = BuildSettings(
        source_dir=_as_path(scenario_state["content"]),
        config_dir=_as_path(scenario_state["config"]),
        templates_dir=_as_path(scenario_state["templates"]),
        output_dir=output,
    )
    return SiteBuilder(settings)


@when("I build the site")
def when_build(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Run the builder and keep the written paths."""
    scenario_state["written"] = _builder(tmp_path, scenario_state).run()


@when("I try to build the site")
def when_try_build(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Run the builder and keep the raised error."""
    with pytest.raises(MissingLayoutError) as excinfo:
        _builder(tmp_path, scenario_state).run()
    scenario_state["error"] = excinfo.value


@then("each post is written to its own page")
def then_posts_written(scenario_state: dict[str, object]) -> None:
    """Every post renders with its excerpt and parsed date."""
    output = _as_path(scenario_state["output"])
    soup = _soup(output / "en" / "blog" / "second.html")
    assert soup.title is not None
    assert soup.title.get_text() == "Second post | Blog"
    time = soup.select_one("time")
    assert time is not None and time.get_text() == "2024-02-01"
    excerpt = soup.select_one(".excerpt")
    assert excerpt is not None
    assert "Intro of Second post." in excerpt.get_text()
    assert "Rest of" not in excerpt.get_text()


@then("the English blog listing is paginated newest first")
def then_blog_listing(scenario_state: dict[str, object]) -> None:
    """Three English posts at two per page make two pages."""
    output = _as_path(scenario_state["output"])
    first = _soup(output / "en" / "blog" / "page" / "1.html")
    second = _soup(output / "en" / "blog" / "page" / "2.html")
    assert [a.get_text() for a in first.select("li a")] == ["Third post", "Second post"]
    assert [a.get_text() for a in second.select("li a")] == ["First post"]
    next_link = first.select_one("a.next")
    assert next_link is not None and next_link["href"] == "/en/blog/page/2"
    assert second.select_one("a.next") is None
    assert not (output / "en" / "blog" / "page" / "3.html").exists()


@then("the English tag pages list posts per tag")
def then_tag_pages(scenario_state: dict[str, object]) -> None:
    """Posts appear under every tag they carry, oldest first."""
    output = _as_path(scenario_state["output"])
    python = _soup(output / "en" / "tags" / "python" / "page" / "1.html")
    sites = _soup(output / "en" / "tags" / "sites" / "page" / "1.html")
    assert python.title is not None and python.title.get_text() == "Blog #python"
    assert [a.get_text() for a in python.select("li a")] == ["First post", "Second post"]
    assert [a.get_text() for a in sites.select("li a")] == ["First post", "Third post"]


@then("the Russian pages use the Russian site title")
def then_russian_pages(scenario_state: dict[str, object]) -> None:
    """The ru overlay wins over the base title and adds no listings."""
    output = _as_path(scenario_state["output"])
    home = _soup(output / "ru" / "index.html")
    assert home.title is not None and home.title.get_text() == "Блог"
    post = _soup(output / "ru" / "blog" / "first.html")
    assert post.title is not None and post.title.get_text() == "Первый пост | Блог"
    assert not (output / "ru" / "blog" / "page").exists()


@then("the build fails naming the draft")
def then_build_fails(scenario_state: dict[str, object]) -> None:
    """The error points at the offending document."""
    error = scenario_state["error"]
    assert isinstance(error, MissingLayoutError)
    assert error.source_path == "en/draft.md"


@then("no pages are written")
def then_nothing_written(scenario_state: dict[str, object]) -> None:
    """Fail-fast builds leave no partial output behind."""
    output = _as_path(scenario_state["output"])
    assert not output.exists()
