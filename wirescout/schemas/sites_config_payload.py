"""The list of sites as stored in ``SITES_CONFIG`` or a sites file."""
from __future__ import annotations

import json
from typing import Any, List

from pydantic import RootModel, ValidationError

from wirescout.domain import ConfigurationError, SiteSpec

from .site_payload import SitePayload


class SitesConfigPayload(RootModel[List[SitePayload]]):
    """Top-level JSON array of site objects."""

    def to_domain(self) -> List[SiteSpec]:
        return [payload.to_domain() for payload in self.root]

    def to_json(self, *, indent: int | None = None) -> str:
        """Serialize back to the configuration format, aliases included."""

        data = self.model_dump(by_alias=True, exclude_none=True, exclude_defaults=True)
        if indent is None:
            return json.dumps(data, ensure_ascii=False, separators=(",", ":"))
        return json.dumps(data, ensure_ascii=False, indent=indent)


def parse_sites_config(raw: str | bytes | List[Any]) -> SitesConfigPayload:
    """Validate a sites configuration given as JSON text or decoded data.

    Raises:
        ConfigurationError: When the text is not JSON or does not describe a
            list of site objects.
    """

    try:
        if isinstance(raw, (str, bytes)):
            return SitesConfigPayload.model_validate_json(raw)
        return SitesConfigPayload.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid sites configuration: {exc}") from exc


def load_sites(raw: str | bytes | List[Any]) -> List[SiteSpec]:
    """Shortcut returning the ``SiteSpec`` entities of a configuration."""

    return parse_sites_config(raw).to_domain()


__all__ = ["SitesConfigPayload", "load_sites", "parse_sites_config"]
