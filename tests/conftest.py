"""Shared test fixtures for dnspair tests."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import yaml
from typer.testing import CliRunner

from dnspair.config import ReverseZoneConfig
from dnspair.errors import ProviderError
from dnspair.providers.dns.base import ZoneProvider
from dnspair.sync.models import Change, ChangeAction, Record, RecordPage, Zone
from dnspair.sync.resolver import normalize_zone_name


# ============================================================================
# In-memory provider
# ============================================================================


class InMemoryZoneProvider(ZoneProvider):
    """Zone provider keeping records in dicts.

    Failures are injected per (zone id, action) through ``fail_on`` and per
    zone id through ``fail_wait``.
    """

    def __init__(self, zones: dict[str, str]):
        # zone name -> zone id
        self.zones = sorted(
            (Zone(id=zone_id, name=name) for name, zone_id in zones.items()),
            key=lambda zone: normalize_zone_name(zone.name),
        )
        self.records: dict[str, dict[tuple[str, str], Record]] = {
            zone.id: {} for zone in self.zones
        }
        self.fail_on: dict[tuple[str, ChangeAction], ProviderError] = {}
        self.fail_wait: dict[str, ProviderError] = {}
        self.fail_list_zones: ProviderError | None = None
        self.submitted: list[tuple[str, list[Change]]] = []
        self.waited: list[str] = []
        self._change_zones: dict[str, str] = {}

    def add_record(self, zone_id: str, record: Record) -> None:
        self.records[zone_id][(record.name, record.type)] = record

    def records_in(self, zone_id: str) -> list[Record]:
        return [self.records[zone_id][key] for key in sorted(self.records[zone_id])]

    def list_zones_by_name(self, name: str, max_items: int = 1) -> Zone | None:
        if self.fail_list_zones is not None:
            raise self.fail_list_zones
        wanted = normalize_zone_name(name)
        for zone in self.zones:
            if normalize_zone_name(zone.name) >= wanted:
                return zone
        return None

    def list_record_sets(
        self,
        zone_id: str,
        start_name: str | None = None,
        start_type: str | None = None,
        max_items: int | None = None,
    ) -> RecordPage:
        start = (start_name or "", start_type or "")
        keys = [key for key in sorted(self.records[zone_id]) if key >= start]
        size = max_items or 100
        page, rest = keys[:size], keys[size:]
        return RecordPage(
            records=[self.records[zone_id][key] for key in page],
            truncated=bool(rest),
            next_name=rest[0][0] if rest else None,
            next_type=rest[0][1] if rest else None,
        )

    def change_record_sets(self, zone_id: str, changes: list[Change]) -> str:
        for change in changes:
            error = self.fail_on.get((zone_id, change.action))
            if error is not None:
                raise error

        self.submitted.append((zone_id, changes))
        for change in changes:
            key = (change.record.name, change.record.type)
            if change.action == ChangeAction.CREATE:
                if key in self.records[zone_id]:
                    raise ProviderError("ChangeResourceRecordSets", f"{key} already exists")
                self.records[zone_id][key] = change.record
            else:
                if self.records[zone_id].get(key) != change.record:
                    raise ProviderError("ChangeResourceRecordSets", f"{key} not found")
                del self.records[zone_id][key]

        change_id = f"C{len(self.submitted)}"
        self._change_zones[change_id] = zone_id
        return change_id

    def wait_for_change(self, change_id: str) -> None:
        error = self.fail_wait.get(self._change_zones[change_id])
        if error is not None:
            raise error
        self.waited.append(change_id)


# ============================================================================
# Provider Fixtures
# ============================================================================


@pytest.fixture
def provider() -> InMemoryZoneProvider:
    """Provide a provider with one forward and one reverse zone."""
    return InMemoryZoneProvider(
        {
            "example.com.": "XYZ789",
            "10.in-addr.arpa.": "ABC123",
        }
    )


@pytest.fixture
def reverse_zones() -> list[ReverseZoneConfig]:
    """Provide the reverse-zone table matching the provider fixture."""
    return [ReverseZoneConfig(cidr="10.0.0.0/8", zone_name="10.in-addr.arpa.")]


@pytest.fixture
def ptr_failure() -> ProviderError:
    """Provide the error used to simulate a failing PTR change."""
    return ProviderError("ChangeResourceRecordSets", "Throttling: Rate exceeded")


# ============================================================================
# CLI Fixtures
# ============================================================================


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch) -> Path:
    """Create a temporary project directory with dnspair.yaml."""
    config_data = {
        "reverse_zones": [
            {"cidr": "10.0.0.0/8", "zone_name": "10.in-addr.arpa."},
        ],
    }

    config_file = tmp_path / "dnspair.yaml"
    with open(config_file, "w") as f:
        yaml.dump(config_data, f)

    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def mock_zone_provider(provider: InMemoryZoneProvider):
    """Route the CLI to the in-memory provider."""
    with patch(
        "dnspair.commands.records.get_zone_provider", return_value=provider
    ) as mock:
        yield mock


# ============================================================================
# Mock Fixtures - boto3/Route 53
# ============================================================================


@pytest.fixture
def mock_route53():
    """Mock boto3.Session for Route 53 operations."""
    with patch("boto3.Session") as mock_session_class:
        mock_client = MagicMock()
        mock_session_class.return_value.client.return_value = mock_client
        yield mock_client
