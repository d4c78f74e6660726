"""Paged record listing for the list command."""

from collections.abc import Iterator

from dnspair.providers.dns.base import ZoneProvider
from dnspair.sync.models import Record, RecordPage


class RecordPages:
    """Every page of a zone's records.

    Iterating fetches pages lazily and stops after the first page that is
    not truncated. Each new iteration starts again from the top of the zone.
    """

    def __init__(self, provider: ZoneProvider, zone_id: str, page_size: int | None = None):
        self.provider = provider
        self.zone_id = zone_id
        self.page_size = page_size

    def __iter__(self) -> Iterator[RecordPage]:
        start_name = None
        start_type = None

        while True:
            page = self.provider.list_record_sets(
                self.zone_id,
                start_name=start_name,
                start_type=start_type,
                max_items=self.page_size,
            )
            yield page

            if not page.truncated or page.next_name is None:
                return
            start_name = page.next_name
            start_type = page.next_type

    def records(self) -> Iterator[Record]:
        for page in self:
            yield from page.records
