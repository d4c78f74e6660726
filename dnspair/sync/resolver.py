"""Hosted zone name resolution."""

import logging

from dnspair.errors import ProviderError, ZoneNameMismatch, ZoneNotFound
from dnspair.providers.dns.base import ZoneProvider

logger = logging.getLogger(__name__)


def normalize_zone_name(name: str) -> str:
    """Strip one trailing dot so "example.com" and "example.com." compare equal."""
    return name[:-1] if name.endswith(".") else name


class ZoneResolver:
    """Resolves zone names to provider zone ids."""

    def __init__(self, provider: ZoneProvider):
        self.provider = provider

    def resolve(self, zone_name: str) -> str:
        """Return the zone id for ``zone_name``.

        The provider answers with its closest match, so the returned zone's
        name is checked against the one asked for.
        """
        try:
            zone = self.provider.list_zones_by_name(zone_name, max_items=1)
        except ProviderError as e:
            raise ZoneNotFound(zone_name) from e

        if zone is None:
            raise ZoneNotFound(zone_name)

        if normalize_zone_name(zone.name) != normalize_zone_name(zone_name):
            raise ZoneNameMismatch(expected=zone_name, actual=zone.name)

        logger.debug("Resolved zone %s to %s", zone_name, zone.id)
        return zone.id
