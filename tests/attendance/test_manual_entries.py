from __future__ import annotations

from datetime import datetime

from src.timeclock.timeclock.core.constants import ADMIN_EDIT_NOTE
from src.timeclock.timeclock.core.enums import EntryOrigin, ResultKind
from src.timeclock.timeclock.reports.service import ReportService


def test_manual_entry_is_tagged_manual(service, store):
    result = service.add_manual_time_entry("w1", "Mario Rossi", "2024-02-10", "08:00", "12:30")

    assert result.success
    entry = store.entries.get(result.entry_id)
    assert entry.origin == EntryOrigin.MANUAL_ENTRY
    assert entry.is_manual_entry
    assert not entry.is_auto_close
    assert entry.check_in == "08:00:00"
    assert entry.check_out == "12:30:00"
    assert entry.hours_worked == 4.5


def test_second_manual_entry_same_day_is_rejected(service, store):
    service.add_manual_time_entry("w1", "Mario Rossi", "2024-02-10", "08:00", "12:00")

    result = service.add_manual_time_entry("w1", "Mario Rossi", "2024-02-10", "14:00", "18:00")

    assert not result.success
    assert result.kind == ResultKind.DUPLICATE_ENTRY
    assert "Esiste già" in result.message
    assert len(store.entries.list_all()) == 1


def test_manual_entry_for_other_worker_same_day_is_allowed(service):
    service.add_manual_time_entry("w1", "Mario Rossi", "2024-02-10", "08:00", "12:00")

    result = service.add_manual_time_entry("w2", "Giulia Bianchi", "2024-02-10", "08:00", "12:00")

    assert result.success


def test_manual_entry_rejects_empty_or_negative_range(service, store):
    same = service.add_manual_time_entry("w1", "Mario Rossi", "2024-02-10", "09:00", "09:00")
    reversed_ = service.add_manual_time_entry("w1", "Mario Rossi", "2024-02-10", "17:00", "09:00")

    assert same.kind == ResultKind.INVALID_TIME_RANGE
    assert reversed_.kind == ResultKind.INVALID_TIME_RANGE
    assert store.entries.list_all() == []


def test_manual_entry_validates_formats(service):
    bad_date = service.add_manual_time_entry("w1", "Mario Rossi", "10/02/2024", "08:00", "12:00")
    bad_time = service.add_manual_time_entry("w1", "Mario Rossi", "2024-02-10", "8h", "12:00")

    assert bad_date.kind == ResultKind.VALIDATION
    assert bad_time.kind == ResultKind.VALIDATION


def test_manual_entry_blocks_later_check_in_that_day(service):
    service.add_manual_time_entry("w1", "Mario Rossi", "2024-03-01", "06:00", "08:00")

    result = service.check_in("w1", now=datetime(2024, 3, 1, 9, 0))

    assert result.kind == ResultKind.DUPLICATE_ENTRY


def test_update_entry_recomputes_hours_and_stamps_note(service, store):
    created = service.add_manual_time_entry("w1", "Mario Rossi", "2024-02-10", "08:00", "12:00")

    result = service.update_time_entry(created.entry_id, "07:30", "16:45", "2024-02-11")

    assert result.success
    entry = store.entries.get(created.entry_id)
    assert (entry.date, entry.check_in, entry.check_out) == ("2024-02-11", "07:30:00", "16:45:00")
    assert entry.hours_worked == 9.25
    assert entry.origin == EntryOrigin.ADMIN_EDITED
    assert entry.notes == ADMIN_EDIT_NOTE
    assert store.entries.exists_for_worker_and_date("w1", "2024-02-11")
    assert not store.entries.exists_for_worker_and_date("w1", "2024-02-10")


def test_update_unknown_entry(service):
    result = service.update_time_entry("nope", "08:00", "12:00", "2024-02-10")

    assert not result.success
    assert result.kind == ResultKind.NOT_FOUND


def test_update_rejects_invalid_range(service, store):
    created = service.add_manual_time_entry("w1", "Mario Rossi", "2024-02-10", "08:00", "12:00")

    result = service.update_time_entry(created.entry_id, "12:00", "12:00", "2024-02-10")

    assert result.kind == ResultKind.INVALID_TIME_RANGE
    assert store.entries.get(created.entry_id).check_out == "12:00:00"
    assert store.entries.get(created.entry_id).check_in == "08:00:00"


def test_update_moving_date_onto_existing_day_is_permitted(service, store):
    """Editing does not re-check the one-entry-per-day rule.

    Pinned on purpose: moving an entry onto a day that already has one leaves
    the worker with two entries for that day.
    """
    service.add_manual_time_entry("w1", "Mario Rossi", "2024-02-10", "08:00", "12:00")
    other = service.add_manual_time_entry("w1", "Mario Rossi", "2024-02-11", "08:00", "12:00")

    result = service.update_time_entry(other.entry_id, "13:00", "17:00", "2024-02-10")

    assert result.success
    same_day = [e for e in store.entries.list_all() if e.worker_id == "w1" and e.date == "2024-02-10"]
    assert len(same_day) == 2


def test_delete_entry(service, store):
    created = service.add_manual_time_entry("w1", "Mario Rossi", "2024-02-10", "08:00", "12:00")

    assert service.delete_time_entry(created.entry_id) is True
    assert service.delete_time_entry(created.entry_id) is False
    assert not service.has_entry_for_day("w1", "2024-02-10")


def test_entries_read_back_unchanged(service, store, workers_repo, fixed_now):
    service.check_in("w1", now=fixed_now)
    service.check_out("w1", now=datetime(2024, 3, 1, 17, 0))
    service.check_in("w2", now=fixed_now)
    service.auto_close_sessions(now=datetime(2024, 3, 2, 8, 0))
    manual = service.add_manual_time_entry("w1", "Mario Rossi", "2024-03-04", "08:00", "12:00")
    service.check_in("w2", now=datetime(2024, 3, 5, 8, 0))
    service.force_close_all_sessions(now=datetime(2024, 3, 5, 11, 0))

    reports = ReportService(store.entries, workers_repo)
    stored = store.entries.list_all()
    assert manual.entry_id in {e.entry_id for e in stored}
    assert len(stored) == 4
    for entry in stored:
        assert reports.get_time_entries(entry.date, entry.date, entry.worker_id) == [entry]
