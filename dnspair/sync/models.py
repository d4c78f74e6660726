"""Values passed through the synchronization engine."""

import ipaddress
from dataclasses import dataclass
from enum import Enum
from ipaddress import IPv4Network, IPv6Network

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_TTL = 600


class RecordType(str, Enum):
    A = "A"
    CNAME = "CNAME"
    PTR = "PTR"


class ChangeAction(str, Enum):
    CREATE = "CREATE"
    DELETE = "DELETE"


class Operation(str, Enum):
    ADD = "add"
    REMOVE = "remove"


class ChangeState(str, Enum):
    """Progress of one orchestrated operation."""

    IDLE = "idle"
    FORWARD_SUBMITTED = "forward-submitted"
    FORWARD_CONFIRMED = "forward-confirmed"
    REVERSE_SUBMITTED = "reverse-submitted"
    COMMITTED = "committed"
    COMPENSATED = "compensated"
    COMPENSATION_FAILED = "compensation-failed"


class Zone(BaseModel):
    """A hosted zone as reported by the provider."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class ReverseZoneEntry(BaseModel):
    """A reverse zone and the network it covers."""

    model_config = ConfigDict(frozen=True)

    network: IPv4Network | IPv6Network
    zone_name: str
    zone_id: str


class AliasTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    hosted_zone_id: str
    dns_name: str
    evaluate_target_health: bool = False


class Record(BaseModel):
    """A resource record set.

    Records the engine creates hold one value and may be built with
    ``value=``. Sets read from the provider keep every value, or the alias
    target and no TTL for alias sets, so they can be deleted exactly as read.

    Record types outside ``RecordType`` (NS, SOA, MX...) only ever come back
    from listings, so ``type`` is a plain string.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    values: tuple[str, ...] = ()
    ttl: int | None = DEFAULT_TTL
    alias_target: AliasTarget | None = None

    @model_validator(mode="before")
    @classmethod
    def single_value(cls, data):
        if isinstance(data, dict) and "value" in data:
            data = dict(data)
            data.setdefault("values", (data.pop("value"),))
        return data

    @property
    def value(self) -> str:
        """The first value, or the alias target's DNS name."""
        if self.values:
            return self.values[0]
        if self.alias_target is not None:
            return self.alias_target.dns_name
        return ""


class Change(BaseModel):
    model_config = ConfigDict(frozen=True)

    action: ChangeAction
    record: Record


class RecordPage(BaseModel):
    """One page of a record listing."""

    model_config = ConfigDict(frozen=True)

    records: list[Record] = Field(default_factory=list)
    truncated: bool = False
    next_name: str | None = None
    next_type: str | None = None


class ChangeRequest(BaseModel):
    """What the caller wants done to one hostname."""

    model_config = ConfigDict(frozen=True)

    operation: Operation
    hostname: str
    zone_name: str
    record_kind: RecordType | None = None
    ip: str | None = None
    cname: str | None = None

    @model_validator(mode="after")
    def check_target(self) -> "ChangeRequest":
        if self.record_kind == RecordType.PTR:
            raise ValueError("PTR records are managed together with their A record")

        if self.operation == Operation.REMOVE:
            if self.ip or self.cname:
                raise ValueError("remove takes neither ip nor cname")
            return self

        if bool(self.ip) == bool(self.cname):
            raise ValueError("choose ip or cname")

        if self.ip:
            if self.record_kind != RecordType.A:
                raise ValueError("an ip can only be used with an A record")
            ipaddress.IPv4Address(self.ip)
        elif self.record_kind != RecordType.CNAME:
            raise ValueError("a cname can only be used with a CNAME record")

        return self


@dataclass
class ChangeOutcome:
    """Result of ``ChangeOrchestrator.apply``."""

    request: ChangeRequest
    state: ChangeState
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def compensated(self) -> bool | None:
        """Whether the rollback succeeded, or None when none was needed."""
        if self.state == ChangeState.COMPENSATED:
            return True
        if self.state == ChangeState.COMPENSATION_FAILED:
            return False
        return None
