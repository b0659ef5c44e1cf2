import pytest

from stubs import StubStore, make_item
from event_supervisor.errors import ScanError
from event_supervisor.scanner import scan_unfetched
from event_supervisor.schemas import GroupKey, RunSummary


def test_scan_follows_every_page():
    """Three pages of 5, 5 and 2 records all end up grouped."""
    pages = [
        [make_item(i, 9, "create", f"A{i}") for i in range(0, 5)],
        [make_item(i, 9, "create", f"A{i}") for i in range(5, 10)],
        [make_item(i, 9, "create", f"A{i}") for i in range(10, 12)],
    ]
    store = StubStore(pages)
    summary = RunSummary()

    groups = scan_unfetched(store, summary)

    assert sum(len(records) for records in groups.values()) == 12
    assert len(groups) == 12
    assert summary.pages == 3
    assert summary.records == 12
    assert store.start_keys == [None, {'page': {'N': '1'}}, {'page': {'N': '2'}}]


def test_groups_span_pages_in_encounter_order():
    pages = [
        [make_item(1, 9, "create", "A1")],
        [make_item(1, 9, "update", "A2"), make_item(2, 9, "create", "B1")],
    ]
    groups = scan_unfetched(StubStore(pages))

    assert [r.archive_id for r in groups[GroupKey(1, 9)]] == ["A1", "A2"]
    assert [r.archive_id for r in groups[GroupKey(2, 9)]] == ["B1"]


def test_scan_error_aborts():
    pages = [[make_item(1, 9, "create")], [make_item(2, 9, "create")], [make_item(3, 9, "create")]]
    store = StubStore(pages, fail_on_page=2)

    with pytest.raises(ScanError):
        scan_unfetched(store)
    assert len(store.start_keys) == 2


def test_empty_table():
    summary = RunSummary()
    assert scan_unfetched(StubStore([[]]), summary) == {}
    assert summary.pages == 1
    assert summary.groups == 0


def test_malformed_records_are_skipped_and_counted():
    broken = make_item(1, 9, "create")
    del broken['owner_id']
    not_a_number = make_item(1, 9, "create")
    not_a_number['object_id'] = {'N': 'abc'}
    pages = [[broken, make_item(2, 9, "create", "B1"), not_a_number]]
    summary = RunSummary()

    groups = scan_unfetched(StubStore(pages), summary)

    assert list(groups) == [GroupKey(2, 9)]
    assert summary.rejected == 2
    assert summary.records == 1


@pytest.mark.parametrize("page", [{'Items': None}, {'Items': "oops"}, {'Count': 0}])
def test_malformed_page_is_a_scan_error(page):
    class MalformedStore:
        def scan_unfetched(self, exclusive_start_key=None):
            return page

    with pytest.raises(ScanError):
        scan_unfetched(MalformedStore())
