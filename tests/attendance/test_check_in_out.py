from __future__ import annotations

from datetime import datetime

import pytest
import pytz

from src.timeclock.timeclock.attendance.model import TimeEntry
from src.timeclock.timeclock.core.enums import EntryOrigin, ResultKind
from src.timeclock.timeclock.core.exceptions import StoreUnavailableError


def test_check_in_creates_one_active_session(service, store, fixed_now):
    result = service.check_in("w1", now=fixed_now)

    assert result.success
    assert result.kind == ResultKind.OK
    sessions = store.sessions.list_all()
    assert len(sessions) == 1
    assert sessions[0].worker_id == "w1"
    assert sessions[0].worker_name == "Mario Rossi"
    assert sessions[0].check_in == "09:00:00"
    assert sessions[0].date == "2024-03-01"
    # No entry until the session is closed.
    assert store.entries.list_all() == []


def test_check_in_unknown_worker_fails(service, store, fixed_now):
    result = service.check_in("missing", now=fixed_now)

    assert not result.success
    assert result.kind == ResultKind.NOT_FOUND
    assert store.sessions.list_all() == []


def test_check_in_fails_when_entry_exists_for_today(service, store, fixed_now):
    service.check_in("w1", now=fixed_now)
    service.check_out("w1", now=datetime(2024, 3, 1, 12, 0))

    result = service.check_in("w1", now=datetime(2024, 3, 1, 14, 0))

    assert not result.success
    assert result.kind == ResultKind.DUPLICATE_ENTRY
    assert "oggi" in result.message
    assert store.sessions.list_all() == []


def test_check_in_next_day_after_entry_succeeds(service, fixed_now):
    service.check_in("w1", now=fixed_now)
    service.check_out("w1", now=datetime(2024, 3, 1, 17, 0))

    result = service.check_in("w1", now=datetime(2024, 3, 2, 9, 0))

    assert result.success


def test_second_check_in_while_active_keeps_single_session(service, store, fixed_now):
    service.check_in("w1", now=fixed_now)

    result = service.check_in("w1", now=datetime(2024, 3, 1, 10, 0))

    assert not result.success
    assert result.kind == ResultKind.ALREADY_ACTIVE
    sessions = store.sessions.list_all()
    assert len(sessions) == 1
    assert sessions[0].check_in == "09:00:00"


def test_check_out_writes_normal_entry_and_removes_session(service, store, fixed_now):
    service.check_in("w1", now=fixed_now)

    result = service.check_out("w1", now=datetime(2024, 3, 1, 17, 30))

    assert result.success
    assert store.sessions.get("w1") is None
    entries = store.entries.list_all()
    assert len(entries) == 1
    entry = entries[0]
    assert entry.entry_id == result.entry_id
    assert entry.date == "2024-03-01"
    assert entry.check_in == "09:00:00"
    assert entry.check_out == "17:30:00"
    assert entry.hours_worked == 8.5
    assert entry.origin == EntryOrigin.NORMAL
    assert not entry.is_auto_close
    assert not entry.is_manual_entry


def test_check_out_rounds_hours_to_two_decimals(service, store):
    service.check_in("w1", now=datetime(2024, 3, 1, 9, 0, 0))
    service.check_out("w1", now=datetime(2024, 3, 1, 9, 20, 0))

    # 20 minutes = 0.3333... h
    assert store.entries.list_all()[0].hours_worked == 0.33


def test_check_out_without_session_is_noop(service, store, fixed_now):
    result = service.check_out("w1", now=fixed_now)

    assert not result.success
    assert result.kind == ResultKind.NO_SESSION
    assert store.entries.list_all() == []


def test_check_out_twice_writes_single_entry(service, store, fixed_now):
    service.check_in("w1", now=fixed_now)
    service.check_out("w1", now=datetime(2024, 3, 1, 17, 0))
    service.check_out("w1", now=datetime(2024, 3, 1, 17, 5))

    assert len(store.entries.list_all()) == 1


def test_check_out_keeps_name_captured_at_check_in(service, store, workers_repo, fixed_now):
    service.check_in("w1", now=fixed_now)
    workers_repo.delete_by_id("w1")

    result = service.check_out("w1", now=datetime(2024, 3, 1, 17, 0))

    assert result.success
    assert store.entries.list_all()[0].worker_name == "Mario Rossi"


def test_check_out_next_day_is_floored_at_zero(service, store, fixed_now):
    service.check_in("w1", now=fixed_now)

    service.check_out("w1", now=datetime(2024, 3, 2, 8, 0))

    entry = store.entries.list_all()[0]
    assert entry.date == "2024-03-01"
    assert entry.hours_worked == 0.0


def test_today_is_computed_in_fixed_zone(service, store):
    # 23:30 UTC on March 1st is already March 2nd in Rome.
    now = datetime(2024, 3, 1, 23, 30, tzinfo=pytz.utc)

    service.check_in("w1", now=now)

    session = store.sessions.get("w1")
    assert session.date == "2024-03-02"
    assert session.check_in == "00:30:00"


class FailingEntries:
    def append(self, entry: TimeEntry) -> str:
        raise StoreUnavailableError("down")

    def exists_for_worker_and_date(self, worker_id, date):
        return False


def test_failed_entry_write_restores_session(store, workers_repo, clock, fixed_now):
    from src.timeclock.timeclock.attendance.service import AttendanceService

    svc = AttendanceService(store.sessions, FailingEntries(), store.settings, workers_repo, clock=clock)
    svc.check_in("w1", now=fixed_now)

    with pytest.raises(StoreUnavailableError):
        svc.check_out("w1", now=datetime(2024, 3, 1, 17, 0))

    assert store.sessions.get("w1") is not None
