"""Tests for submitting and waiting on changes."""

from unittest.mock import MagicMock, call

import pytest

from dnspair.errors import ProviderError
from dnspair.sync.models import Change, ChangeAction, Record
from dnspair.sync.waiter import ChangeWaiter


@pytest.fixture
def changes() -> list[Change]:
    return [
        Change(
            action=ChangeAction.CREATE,
            record=Record(name="host.example.com.", type="A", value="10.1.2.3"),
        )
    ]


class TestSubmitAndWait:
    """Tests for ChangeWaiter.submit_and_wait()."""

    def test_submits_then_waits(self, changes):
        """Test the change is submitted and its id waited on."""
        provider = MagicMock()
        provider.change_record_sets.return_value = "/change/C1"

        ChangeWaiter(provider).submit_and_wait("XYZ789", changes)

        assert provider.mock_calls == [
            call.change_record_sets("XYZ789", changes),
            call.wait_for_change("/change/C1"),
        ]

    def test_submit_error_skips_wait(self, changes):
        """Test a failed submit is surfaced and nothing is waited on."""
        provider = MagicMock()
        provider.change_record_sets.side_effect = ProviderError("ChangeResourceRecordSets", "denied")

        with pytest.raises(ProviderError):
            ChangeWaiter(provider).submit_and_wait("XYZ789", changes)

        provider.wait_for_change.assert_not_called()

    def test_wait_error_surfaces(self, changes):
        """Test a failed wait is surfaced unchanged."""
        error = ProviderError("GetChange", "Max attempts exceeded")
        provider = MagicMock()
        provider.wait_for_change.side_effect = error

        with pytest.raises(ProviderError) as exc_info:
            ChangeWaiter(provider).submit_and_wait("XYZ789", changes)

        assert exc_info.value is error

    def test_dry_run(self, changes, caplog):
        """Test dry run logs the change without touching the provider."""
        provider = MagicMock()

        with caplog.at_level("INFO", logger="dnspair.sync.waiter"):
            ChangeWaiter(provider, dry_run=True).submit_and_wait("XYZ789", changes)

        provider.change_record_sets.assert_not_called()
        provider.wait_for_change.assert_not_called()
        assert "[dry-run] CREATE A host.example.com. -> 10.1.2.3" in caplog.text
