"""Paired forward/reverse record changes with rollback.

Route 53 has no transaction spanning two hosted zones, so an A record and its
PTR record are changed one after the other. When the second change fails the
first one is undone, and the caller learns whether the undo worked.
"""

import logging
from collections.abc import Iterable

from dnspair.config import ReverseZoneConfig
from dnspair.errors import (
    RecordNotFound,
    RollbackError,
    SyncError,
    UnsupportedRecordType,
)
from dnspair.providers.dns.base import ZoneProvider
from dnspair.sync.lookup import RecordLookup
from dnspair.sync.models import (
    DEFAULT_TTL,
    Change,
    ChangeAction,
    ChangeOutcome,
    ChangeRequest,
    ChangeState,
    Operation,
    Record,
    RecordType,
)
from dnspair.sync.resolver import ZoneResolver
from dnspair.sync.reverse import ReverseZoneIndex, reverse_name
from dnspair.sync.waiter import ChangeWaiter

logger = logging.getLogger(__name__)


class ChangeOrchestrator:
    """Runs record changes one blocking step at a time.

    ``state`` reflects the progress of the operation currently (or most
    recently) running.
    """

    def __init__(
        self,
        provider: ZoneProvider,
        reverse_index: ReverseZoneIndex,
        resolver: ZoneResolver | None = None,
        lookup: RecordLookup | None = None,
        waiter: ChangeWaiter | None = None,
    ):
        self.provider = provider
        self.reverse_index = reverse_index
        self.resolver = resolver or ZoneResolver(provider)
        self.lookup = lookup or RecordLookup(provider)
        self.waiter = waiter or ChangeWaiter(provider)
        self.state = ChangeState.IDLE

    def apply(self, request: ChangeRequest) -> ChangeOutcome:
        """Carry out a request and report how far it got.

        Engine errors end up in the outcome rather than being raised.
        """
        self.state = ChangeState.IDLE
        try:
            zone_id = self.resolver.resolve(request.zone_name)
            if request.operation == Operation.ADD:
                self._add(request, zone_id)
            else:
                self._remove(request, zone_id)
        except SyncError as e:
            return ChangeOutcome(request=request, state=self.state, error=e)

        return ChangeOutcome(request=request, state=self.state)

    def add_a(self, hostname: str, ip: str, zone_id: str) -> None:
        """Create an A record and its PTR record."""
        self.state = ChangeState.IDLE
        reverse_zone_id = self.reverse_index.lookup(ip)

        forward = Record(name=hostname, type=RecordType.A.value, value=ip)
        ptr = Record(name=reverse_name(ip), type=RecordType.PTR.value, value=hostname)

        self._submit_forward(zone_id, [Change(action=ChangeAction.CREATE, record=forward)])
        try:
            self._submit_reverse(
                reverse_zone_id, [Change(action=ChangeAction.CREATE, record=ptr)]
            )
        except SyncError as e:
            self._roll_back(e, lambda: self._delete_existing(hostname, zone_id))
            raise

        self.state = ChangeState.COMMITTED

    def remove_a(self, hostname: str, zone_id: str, record: Record | None = None) -> None:
        """Delete an A record and its PTR record.

        ``record`` is looked up when not supplied; its value is the IP whose
        PTR record is removed.
        """
        self.state = ChangeState.IDLE
        if record is None:
            record = self.lookup.find_exact(hostname, zone_id)
        if record.type != RecordType.A.value:
            raise UnsupportedRecordType(hostname, record.type)

        ip = record.value
        reverse_zone_id = self.reverse_index.lookup(ip)

        self._submit_forward(zone_id, [Change(action=ChangeAction.DELETE, record=record)])
        try:
            ptr = self.lookup.find_exact(reverse_name(ip), reverse_zone_id)
            self._submit_reverse(
                reverse_zone_id, [Change(action=ChangeAction.DELETE, record=ptr)]
            )
        except SyncError as e:
            restored = Record(name=hostname, type=RecordType.A.value, value=ip, ttl=DEFAULT_TTL)
            self._roll_back(
                e,
                lambda: self.waiter.submit_and_wait(
                    zone_id, [Change(action=ChangeAction.CREATE, record=restored)]
                ),
            )
            raise

        self.state = ChangeState.COMMITTED

    def add_cname(self, hostname: str, target: str, zone_id: str) -> None:
        self.state = ChangeState.IDLE
        record = Record(name=hostname, type=RecordType.CNAME.value, value=target)
        self._submit_forward(zone_id, [Change(action=ChangeAction.CREATE, record=record)])
        self.state = ChangeState.COMMITTED

    def remove_cname(self, hostname: str, zone_id: str, record: Record | None = None) -> None:
        self.state = ChangeState.IDLE
        if record is None:
            record = self.lookup.find_exact(hostname, zone_id)
        if record.type != RecordType.CNAME.value:
            raise UnsupportedRecordType(hostname, record.type)

        self._submit_forward(zone_id, [Change(action=ChangeAction.DELETE, record=record)])
        self.state = ChangeState.COMMITTED

    def _add(self, request: ChangeRequest, zone_id: str) -> None:
        if request.record_kind == RecordType.A:
            self.add_a(request.hostname, request.ip, zone_id)
        else:
            self.add_cname(request.hostname, request.cname, zone_id)

    def _remove(self, request: ChangeRequest, zone_id: str) -> None:
        record = self.lookup.find_exact(request.hostname, zone_id)
        if request.record_kind is not None and record.type != request.record_kind.value:
            raise RecordNotFound(request.hostname)

        if record.type == RecordType.A.value:
            self.remove_a(request.hostname, zone_id, record=record)
        elif record.type == RecordType.CNAME.value:
            self.remove_cname(request.hostname, zone_id, record=record)
        else:
            raise UnsupportedRecordType(request.hostname, record.type)

    def _submit_forward(self, zone_id: str, changes: list[Change]) -> None:
        self.state = ChangeState.FORWARD_SUBMITTED
        self.waiter.submit_and_wait(zone_id, changes)
        self.state = ChangeState.FORWARD_CONFIRMED

    def _submit_reverse(self, zone_id: str, changes: list[Change]) -> None:
        self.state = ChangeState.REVERSE_SUBMITTED
        self.waiter.submit_and_wait(zone_id, changes)

    def _delete_existing(self, hostname: str, zone_id: str) -> None:
        record = self.lookup.find_exact(hostname, zone_id)
        self.waiter.submit_and_wait(zone_id, [Change(action=ChangeAction.DELETE, record=record)])

    def _roll_back(self, original: SyncError, compensate) -> None:
        """Undo the forward change; raise RollbackError if that fails too."""
        logger.warning("Reverse change failed (%s), rolling back forward change", original)
        try:
            compensate()
        except Exception as e:
            self.state = ChangeState.COMPENSATION_FAILED
            logger.error("Rollback failed: %s", e)
            raise RollbackError(original=original, compensation=e) from e

        self.state = ChangeState.COMPENSATED
        logger.info("Rolled back forward change")


def build_orchestrator(
    provider: ZoneProvider,
    reverse_zones: Iterable[ReverseZoneConfig],
    dry_run: bool = False,
) -> ChangeOrchestrator:
    """Wire up an orchestrator with a freshly built reverse-zone index."""
    resolver = ZoneResolver(provider)
    reverse_index = ReverseZoneIndex.build(reverse_zones, resolver)
    return ChangeOrchestrator(
        provider,
        reverse_index,
        resolver=resolver,
        lookup=RecordLookup(provider),
        waiter=ChangeWaiter(provider, dry_run=dry_run),
    )
