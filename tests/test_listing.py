"""Tests for paged record listing."""

from dnspair.listing import RecordPages
from dnspair.sync.models import Record


def seed(provider, count: int) -> list[Record]:
    records = [
        Record(name=f"host{i:02d}.example.com.", type="A", value=f"10.0.0.{i}")
        for i in range(count)
    ]
    for record in records:
        provider.add_record("XYZ789", record)
    return records


class TestRecordPages:
    """Tests for RecordPages."""

    def test_follows_pages(self, provider):
        """Test pages are followed until one is not truncated."""
        records = seed(provider, 5)

        pages = list(RecordPages(provider, "XYZ789", page_size=2))

        assert [len(page.records) for page in pages] == [2, 2, 1]
        assert [page.truncated for page in pages] == [True, True, False]
        assert list(RecordPages(provider, "XYZ789", page_size=2).records()) == records

    def test_lazy(self, provider):
        """Test only the pages consumed are fetched."""
        seed(provider, 5)
        calls = []
        original = provider.list_record_sets

        def spy(*args, **kwargs):
            calls.append(kwargs)
            return original(*args, **kwargs)

        provider.list_record_sets = spy
        first = next(iter(RecordPages(provider, "XYZ789", page_size=2)))

        assert len(first.records) == 2
        assert len(calls) == 1

    def test_restartable(self, provider):
        """Test iterating twice lists the zone twice from the top."""
        seed(provider, 3)
        pages = RecordPages(provider, "XYZ789", page_size=2)

        assert list(pages.records()) == list(pages.records())

    def test_empty_zone(self, provider):
        """Test an empty zone yields one empty page."""
        pages = list(RecordPages(provider, "XYZ789"))

        assert len(pages) == 1
        assert pages[0].records == []
