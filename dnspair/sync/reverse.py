"""Reverse (PTR) zone selection by CIDR."""

import ipaddress
import logging
from collections.abc import Iterable

from dnspair.config import ReverseZoneConfig
from dnspair.errors import ConfigError, ReverseZoneNotFound
from dnspair.sync.models import ReverseZoneEntry
from dnspair.sync.resolver import ZoneResolver

logger = logging.getLogger(__name__)


def reverse_name(ip: str) -> str:
    """Return the in-addr.arpa name of an IPv4 address.

    >>> reverse_name("192.168.0.1")
    '1.0.168.192.in-addr.arpa.'
    """
    return ipaddress.IPv4Address(ip).reverse_pointer + "."


class ReverseZoneIndex:
    """Ordered CIDR to reverse-zone table.

    Lookups are first-match in configuration order, not longest-prefix: with
    overlapping networks the entry listed first wins.
    """

    def __init__(self, entries: list[ReverseZoneEntry]):
        self.entries = list(entries)

    @classmethod
    def build(
        cls, entries: Iterable[ReverseZoneConfig], resolver: ZoneResolver
    ) -> "ReverseZoneIndex":
        """Parse every CIDR and resolve every zone name.

        Any malformed CIDR or unresolvable zone fails the whole build.
        """
        built = []
        for entry in entries:
            try:
                network = ipaddress.ip_network(entry.cidr, strict=False)
            except ValueError as e:
                raise ConfigError(f"invalid CIDR {entry.cidr!r}: {e}") from e

            zone_id = resolver.resolve(entry.zone_name)
            built.append(
                ReverseZoneEntry(network=network, zone_name=entry.zone_name, zone_id=zone_id)
            )
            logger.debug("Reverse zone %s (%s) covers %s", entry.zone_name, zone_id, network)

        return cls(built)

    def lookup(self, ip: str) -> str:
        """Return the zone id of the first entry whose network contains ``ip``."""
        try:
            address = ipaddress.ip_address(ip)
        except ValueError as e:
            raise ReverseZoneNotFound(ip) from e

        for entry in self.entries:
            if address in entry.network:
                return entry.zone_id

        raise ReverseZoneNotFound(ip)
