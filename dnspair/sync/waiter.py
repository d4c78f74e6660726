"""Submit a change batch and block until it has propagated."""

import logging

from dnspair.providers.dns.base import ZoneProvider
from dnspair.sync.models import Change

logger = logging.getLogger(__name__)


class ChangeWaiter:
    """Submits one single-zone change batch and waits for it to be in sync.

    No timeout or polling happens here; the provider's wait call decides how
    long to block and its errors surface unchanged.
    """

    def __init__(self, provider: ZoneProvider, dry_run: bool = False):
        self.provider = provider
        self.dry_run = dry_run

    def submit_and_wait(self, zone_id: str, changes: list[Change]) -> None:
        for change in changes:
            record = change.record
            logger.info(
                "%s%s %s %s -> %s (ttl %s) in %s",
                "[dry-run] " if self.dry_run else "",
                change.action.value,
                record.type,
                record.name,
                ", ".join(record.values) or record.value,
                record.ttl,
                zone_id,
            )

        if self.dry_run:
            return

        change_id = self.provider.change_record_sets(zone_id, changes)
        self.provider.wait_for_change(change_id)
        logger.info("Change %s is in sync", change_id)
