"""Tests for the validation of configured sites."""
from __future__ import annotations

import pytest

from wirescout.domain import MissingField, SiteSelectors, SiteSpec, validate_site


def _site(url: str = "https://www.fca.org.uk/news", **selectors) -> SiteSpec:
    values = {"container": "li.content-list-item", "title": "span.content-item__title"}
    values.update(selectors)
    return SiteSpec(name="FCA News", url=url, selectors=SiteSelectors(**values))


def test_validate_site_accepts_minimal_site() -> None:
    assert validate_site(_site()) is None


def test_validate_site_accepts_optional_selectors() -> None:
    site = _site(link="a", date="time", summary="p.summary")

    assert validate_site(site) is None


@pytest.mark.parametrize(
    ("selectors", "expected"),
    [
        ({"container": ""}, "container"),
        ({"container": "   "}, "container"),
        ({"title": ""}, "title"),
    ],
)
def test_validate_site_reports_missing_mandatory_selector(selectors, expected) -> None:
    problem = validate_site(_site(**selectors))

    assert isinstance(problem, MissingField)
    assert problem.name == expected


@pytest.mark.parametrize("url", ["", "/news", "www.example.com/news", "news.html"])
def test_validate_site_requires_absolute_url(url: str) -> None:
    problem = validate_site(_site(url=url))

    assert problem is not None
    assert problem.name == "url"


def test_missing_field_str_names_field_and_reason() -> None:
    assert str(MissingField("url", "not an absolute URL")) == "url: not an absolute URL"


def test_link_base_prefers_base_url() -> None:
    site = SiteSpec(
        name="x",
        url="https://example.com/news/list",
        selectors=SiteSelectors(container="li", title="h3"),
        base_url="https://cdn.example.com/",
    )

    assert site.link_base == "https://cdn.example.com/"
    assert _site().link_base == "https://www.fca.org.uk/news"
