"""Abstract base class for zone providers."""

from abc import ABC, abstractmethod

from dnspair.sync.models import Change, RecordPage, Zone


class ZoneProvider(ABC):
    """Hosted-zone DNS provider interface.

    Implementations report every remote or transport failure as
    ``dnspair.errors.ProviderError``.
    """

    @abstractmethod
    def list_zones_by_name(self, name: str, max_items: int = 1) -> Zone | None:
        """Return the zone whose name best matches ``name``.

        Args:
            name: The zone name (e.g., "example.com.")
            max_items: Maximum number of candidates to request

        Returns:
            The closest zone, which may not be the one asked for, or None
            when the provider has no zone at or after ``name``
        """
        pass

    @abstractmethod
    def list_record_sets(
        self,
        zone_id: str,
        start_name: str | None = None,
        start_type: str | None = None,
        max_items: int | None = None,
    ) -> RecordPage:
        """List record sets in a zone starting at a name.

        Args:
            zone_id: The provider zone id
            start_name: First record name to return (lexicographic position)
            start_type: First record type to return at ``start_name``
            max_items: Page size; None lets the provider choose

        Returns:
            One page of records
        """
        pass

    @abstractmethod
    def change_record_sets(self, zone_id: str, changes: list[Change]) -> str:
        """Submit a batch of creations/deletions to one zone.

        Args:
            zone_id: The provider zone id
            changes: The changes, applied atomically by the provider

        Returns:
            The provider change id
        """
        pass

    @abstractmethod
    def wait_for_change(self, change_id: str) -> None:
        """Block until the change has fully propagated.

        Args:
            change_id: The id returned by ``change_record_sets``
        """
        pass
