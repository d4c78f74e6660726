"""Exact record lookup."""

import logging

from dnspair.errors import AmbiguousResult, NameMismatch, RecordNotFound
from dnspair.providers.dns.base import ZoneProvider
from dnspair.sync.models import Record

logger = logging.getLogger(__name__)


class RecordLookup:
    """Fetches the single record stored under a hostname."""

    def __init__(self, provider: ZoneProvider):
        self.provider = provider

    def find_exact(self, hostname: str, zone_id: str) -> Record:
        """Return the record named exactly ``hostname``.

        The provider lists from a lexicographic start position, so the first
        record returned is the nearest name at or after ``hostname``. Names
        are compared byte for byte; no trailing-dot normalization happens
        here.
        """
        page = self.provider.list_record_sets(zone_id, start_name=hostname, max_items=1)

        if page.truncated:
            raise AmbiguousResult(hostname)

        if not page.records:
            raise RecordNotFound(hostname)

        record = page.records[0]
        if record.name != hostname:
            raise NameMismatch(expected=hostname, actual=record.name)

        logger.debug("Found %s record %s -> %s in %s", record.type, record.name, record.value, zone_id)
        return record
