"""Unit tests for splitting documents into listing pages."""

from __future__ import annotations

import pytest

from pagebuild.documents import Document, ListingPage
from pagebuild.errors import ConfigurationError
from pagebuild.paginator import paginate


def _docs(count: int) -> list[Document]:
    return [Document({"url": f"/posts/{n}", "title": f"Post {n}"}) for n in range(count)]


def test_no_documents_no_pages() -> None:
    """An empty collection produces zero pages, not one empty page."""
    assert paginate([], url_prefix="/blog", documents_per_page=5, layout="list") == []


def test_pages_link_to_neighbours() -> None:
    """Five documents at two per page give three linked pages."""
    docs = _docs(5)
    pages = paginate(docs, url_prefix="/blog", documents_per_page=2, layout="list")

    assert len(pages) == 3
    assert all(isinstance(page, ListingPage) for page in pages)
    first, second, last = pages
    assert first.url == "/blog/page/1"
    assert first.previous_url is None
    assert first.next_url == "/blog/page/2"
    assert second.previous_url == "/blog/page/1"
    assert second.next_url == "/blog/page/3"
    assert last.previous_url == "/blog/page/2"
    assert last.next_url is None
    assert last.documents == [docs[4]]
    assert [len(page.documents) for page in pages] == [2, 2, 1]


def test_pages_carry_source_path_layout_and_numbers() -> None:
    """Pages are renderable like documents."""
    pages = paginate(_docs(3), url_prefix="/en/blog", documents_per_page=3, layout="list")
    (page,) = pages
    assert page.source_path == "en/blog/page/1"
    assert page.layout == "list"
    assert page.page_number == 1
    assert page["total_pages"] == 1
    assert page.previous_url is None
    assert page.next_url is None


def test_slices_are_contiguous_and_input_untouched() -> None:
    """Every document appears once, in order, and the input list is unchanged."""
    docs = _docs(7)
    before = list(docs)
    pages = paginate(docs, url_prefix="/blog", documents_per_page=3, layout="list")
    flattened = [doc for page in pages for doc in page.documents]
    assert flattened == docs
    assert docs == before


@pytest.mark.parametrize(
    ("options", "missing"),
    [
        ({"documents_per_page": 2, "layout": "list"}, "url_prefix"),
        ({"url_prefix": "/blog", "layout": "list"}, "documents_per_page"),
        (
            {"url_prefix": "/blog", "documents_per_page": 0, "layout": "list"},
            "documents_per_page",
        ),
        ({"url_prefix": "/blog", "documents_per_page": 2}, "layout"),
        ({"url_prefix": "", "documents_per_page": 2, "layout": "list"}, "url_prefix"),
    ],
)
def test_missing_options_raise(options: dict[str, object], missing: str) -> None:
    """Every option is required and must be truthy."""
    with pytest.raises(ConfigurationError) as excinfo:
        paginate(_docs(1), **options)  # type: ignore[arg-type]
    assert excinfo.value.option == missing
    assert missing in str(excinfo.value)


@pytest.mark.parametrize("per_page", ["10", -2, 2.5, True])
def test_documents_per_page_must_be_positive_int(per_page: object) -> None:
    """Strings, negatives, floats and booleans are rejected as configuration."""
    with pytest.raises(ConfigurationError) as excinfo:
        paginate(
            _docs(3),
            url_prefix="/blog",
            documents_per_page=per_page,  # type: ignore[arg-type]
            layout="list",
        )
    assert excinfo.value.option == "documents_per_page"
