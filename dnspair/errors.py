"""Error types raised by dnspair.

Every error is a dataclass so two instances compare equal when they are the
same kind and carry the same fields.
"""

from dataclasses import dataclass


class DnspairError(Exception):
    """Base class for all dnspair errors."""


@dataclass(eq=True)
class ConfigError(DnspairError):
    """Configuration could not be turned into a usable reverse-zone table."""

    message: str

    def __str__(self) -> str:
        return self.message


class SyncError(DnspairError):
    """Base class for errors raised by the synchronization engine."""


@dataclass(eq=True)
class ZoneNotFound(SyncError):
    zone_name: str

    def __str__(self) -> str:
        return f"hosted zone not found: {self.zone_name}"


@dataclass(eq=True)
class ZoneNameMismatch(SyncError):
    """The provider's closest match is a different zone than requested."""

    expected: str
    actual: str

    def __str__(self) -> str:
        return (
            f"unexpected hosted zone name: expected {self.expected}, "
            f"actual {self.actual}"
        )


@dataclass(eq=True)
class ReverseZoneNotFound(SyncError):
    """No configured reverse zone covers the address."""

    ip: str

    def __str__(self) -> str:
        return f"no reverse zone covers {self.ip}"


@dataclass(eq=True)
class AmbiguousResult(SyncError):
    """The record listing came back truncated."""

    hostname: str

    def __str__(self) -> str:
        return f"unexpected response for {self.hostname}: response is truncated"


@dataclass(eq=True)
class RecordNotFound(SyncError):
    hostname: str

    def __str__(self) -> str:
        return f"record not found: {self.hostname}"


@dataclass(eq=True)
class NameMismatch(SyncError):
    expected: str
    actual: str

    def __str__(self) -> str:
        return f"hostname mismatch: input {self.expected}, response {self.actual}"


@dataclass(eq=True)
class UnsupportedRecordType(SyncError):
    hostname: str
    record_type: str

    def __str__(self) -> str:
        return f"{self.hostname} is a {self.record_type} record, only A and CNAME are managed"


@dataclass(eq=True)
class ProviderError(SyncError):
    """A remote or transport failure reported by the zone provider."""

    operation: str
    message: str

    def __str__(self) -> str:
        return f"{self.operation} failed: {self.message}"


@dataclass(eq=True)
class RollbackError(SyncError):
    """A compensating change failed after the primary change failed.

    Carries both causes; neither is dropped.
    """

    original: Exception
    compensation: Exception

    def __str__(self) -> str:
        return (
            f"{self.original} (rollback also failed: {self.compensation})"
        )
