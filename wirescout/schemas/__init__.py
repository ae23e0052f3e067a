"""Input schemas used to read the Wirescout configuration."""

from .site_payload import SelectorsPayload, SitePayload
from .sites_config_payload import SitesConfigPayload, load_sites, parse_sites_config

__all__ = [
    "SelectorsPayload",
    "SitePayload",
    "SitesConfigPayload",
    "load_sites",
    "parse_sites_config",
]
