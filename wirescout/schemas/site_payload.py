"""Pydantic models validating the site configuration."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from wirescout.domain import SiteSelectors, SiteSpec


def _optional(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


class SelectorsPayload(BaseModel):
    """Selectors of a site as written in the configuration."""

    #: Selector of every article block; required by ``validate_site``.
    container: str = ""
    #: Selector of the title inside a block; required by ``validate_site``.
    title: str = ""
    #: Optional selectors; an empty string means "not configured".
    link: str | None = None
    date: str | None = None
    summary: str | None = None

    def to_domain(self) -> SiteSelectors:
        return SiteSelectors(
            container=self.container.strip(),
            title=self.title.strip(),
            link=_optional(self.link),
            date=_optional(self.date),
            summary=_optional(self.summary),
        )


class SitePayload(BaseModel):
    """Intermediate structure validating one configured site.

    Only the structure is checked here. Missing names, URLs and selectors are
    accepted so that ``validate_site`` reports them as a failure of that site
    alone instead of rejecting the whole configuration.
    """

    model_config = ConfigDict(populate_by_name=True)

    #: Name shown as the source of every article of the site.
    name: str = ""
    #: Listing page fetched on every run.
    url: str = ""
    #: Base for relative links, accepted as ``baseUrl`` as well.
    base_url: str | None = Field(default=None, alias="baseUrl")
    #: Extraction rules of the listing page.
    selectors: SelectorsPayload = Field(default_factory=SelectorsPayload)
    #: Extra HTTP headers sent with the request.
    headers: dict[str, str] = Field(default_factory=dict)

    def to_domain(self) -> SiteSpec:
        """Convert the validated data into a ``SiteSpec`` entity.

        A site without a name is labelled with its URL.
        """

        url = self.url.strip()
        return SiteSpec(
            name=self.name.strip() or url or "unnamed site",
            url=url,
            selectors=self.selectors.to_domain(),
            base_url=_optional(self.base_url),
            headers=dict(self.headers),
        )


__all__ = ["SelectorsPayload", "SitePayload"]
