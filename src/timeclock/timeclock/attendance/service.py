from __future__ import annotations

import logging
import threading
from collections import defaultdict
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import ZoneClock, normalize_time_of_day, parse_time_of_day
from ..common.validators import require_flag, require_iso_date, require_non_empty, require_time_of_day
from ..core.constants import ADMIN_EDIT_NOTE
from ..core.enums import EntryOrigin, ResultKind
from ..core.exceptions import (
    DomainError,
    DuplicateEntryError,
    InvalidTimeRangeError,
    NotFoundError,
    ValidationError,
)
from ..workers.repository import WorkerRepository
from .factory import CloseStrategyFactory
from .model import ActiveSession, AutoCloseSettings, SessionResult, SweepResult, TimeEntry
from .repository import ActiveSessionRepository, SettingsRepository, TimeEntryRepository
from .strategies.base import CloseDecision

logger = logging.getLogger(__name__)

_KIND_BY_ERROR = {
    ValidationError: ResultKind.VALIDATION,
    DuplicateEntryError: ResultKind.DUPLICATE_ENTRY,
    InvalidTimeRangeError: ResultKind.INVALID_TIME_RANGE,
    NotFoundError: ResultKind.NOT_FOUND,
}


def _failure(error: DomainError) -> SessionResult:
    kind = _KIND_BY_ERROR.get(type(error), ResultKind.VALIDATION)
    return SessionResult.fail(kind, str(error))


def _close_time(value: str) -> str:
    """'18:00' / '18:00:00' -> '18:00'"""
    return parse_time_of_day(require_time_of_day(value, "Orario di chiusura")).strftime("%H:%M")


class AttendanceService:
    """Session engine: check-in/out, auto-close, force-close and entry edits.

    Business outcomes (duplicates, bad time ranges, unknown ids) come back as
    SessionResult / SweepResult; only store failures raise.
    """

    def __init__(
        self,
        sessions: ActiveSessionRepository,
        entries: TimeEntryRepository,
        settings: SettingsRepository,
        workers: WorkerRepository,
        *,
        clock: ZoneClock | None = None,
        strategy_factory: CloseStrategyFactory | None = None,
        default_settings: AutoCloseSettings | None = None,
    ):
        self._sessions = sessions
        self._entries = entries
        self._settings = settings
        self._workers = workers
        self._clock = clock or ZoneClock()
        self._factory = strategy_factory or CloseStrategyFactory()
        self._default_settings = default_settings or AutoCloseSettings()
        self._locks_guard = threading.Lock()
        self._worker_locks: defaultdict[str, threading.Lock] = defaultdict(threading.Lock)

    @contextmanager
    def _worker_lock(self, worker_id: str):
        # Serializes check-then-write sequences on one worker within this process.
        with self._locks_guard:
            lock = self._worker_locks[str(worker_id)]
        with lock:
            yield

    # queries

    def has_entry_for_day(self, worker_id: str, date: str) -> bool:
        return self._entries.exists_for_worker_and_date(str(worker_id), date)

    def get_active_sessions(self) -> Sequence[ActiveSession]:
        return self._sessions.list_all()

    def get_auto_close_settings(self) -> AutoCloseSettings:
        return self._settings.get_auto_close() or self._default_settings

    def update_auto_close_settings(self, time: str, enabled: Any) -> SessionResult:
        try:
            settings = AutoCloseSettings(time=_close_time(time), enabled=require_flag(enabled, "Abilitazione"))
        except DomainError as e:
            return _failure(e)
        self._settings.save_auto_close(settings)
        logger.info("Auto-close settings updated: %s (enabled=%s)", settings.time, settings.enabled)
        return SessionResult.ok("Impostazioni salvate con successo")

    # worker actions

    def check_in(self, worker_id: str, *, now: datetime | None = None) -> SessionResult:
        worker = self._workers.get_by_id(str(worker_id))
        if not worker:
            return SessionResult.fail(ResultKind.NOT_FOUND, "Lavoratore non trovato")

        local = self._clock.to_local(now)
        today = self._clock.today(local)

        with self._worker_lock(worker.worker_id):
            if self.has_entry_for_day(worker.worker_id, today):
                return SessionResult.fail(
                    ResultKind.DUPLICATE_ENTRY,
                    f"{worker.name} ha già registrato una presenza oggi",
                )

            session = ActiveSession(
                worker_id=worker.worker_id,
                worker_name=worker.name,
                check_in=self._clock.time_str(local),
                date=today,
            )
            if not self._sessions.create_if_absent(session):
                return SessionResult.fail(ResultKind.ALREADY_ACTIVE, f"{worker.name} è già in servizio")

        logger.info("Check-in: %s (%s) on %s at %s", worker.name, worker.worker_id, today, session.check_in)
        return SessionResult.ok(f"Check-in effettuato per {worker.name} alle {session.check_in[:5]}")

    def check_out(self, worker_id: str, *, now: datetime | None = None) -> SessionResult:
        session = self._sessions.take(str(worker_id))
        if session is None:
            # Already closed (e.g. by the sweep): nothing to do.
            return SessionResult.fail(ResultKind.NO_SESSION, "Nessuna sessione attiva per questo lavoratore")

        check_out = self._clock.time_str(now)
        hours = max(0.0, self._clock.hours_between(session.date, session.check_in, check_out))
        entry = TimeEntry(
            worker_id=session.worker_id,
            worker_name=session.worker_name,
            date=session.date,
            check_in=session.check_in,
            check_out=check_out,
            hours_worked=hours,
            origin=EntryOrigin.NORMAL,
        )
        entry_id = self._persist_close(session, entry)

        logger.info("Check-out: %s on %s, %.2f h", session.worker_name, session.date, hours)
        return SessionResult.ok(f"Check-out effettuato per {session.worker_name}", entry_id=entry_id)

    # sweeps

    def auto_close_sessions(self, custom_close_time: str | None = None, *, now: datetime | None = None) -> SweepResult:
        sessions = self._sessions.list_all()
        if not sessions:
            return SweepResult(closed=0, message="Nessuna sessione attiva da chiudere")

        settings = self.get_auto_close_settings()
        if not settings.enabled and not custom_close_time:
            return SweepResult(closed=0, message="Chiusura automatica disabilitata")

        try:
            close_time = _close_time(custom_close_time or settings.time)
        except DomainError as e:
            return SweepResult(closed=0, message=str(e))

        local = self._clock.to_local(now)
        today = self._clock.today(local)
        now_time = self._clock.time_str(local)

        closed, failed, entry_ids = 0, 0, []
        for session in sessions:
            strategy = self._factory.for_sweep(session=session, today=today, now_time=now_time, close_time=close_time)
            decision = strategy.decide(session=session, now_time=now_time, close_time=close_time)
            if not decision.should_close:
                continue
            try:
                entry_id = self._close_session(session, decision)
            except Exception:
                failed += 1
                logger.exception("Auto-close failed for worker %s; left open for the next pass", session.worker_id)
                continue
            if entry_id is not None:
                closed += 1
                entry_ids.append(entry_id)

        if closed > 0:
            message = f"{closed} sessioni chiuse automaticamente alle {close_time}"
        else:
            message = f"Nessuna sessione da chiudere (orario di chiusura {close_time}, ora attuale {now_time[:5]})"
        if failed:
            message += f"; {failed} sessioni non chiuse per errore"
        logger.info("Auto-close sweep: closed=%s failed=%s cutoff=%s", closed, failed, close_time)
        return SweepResult(closed=closed, message=message, failed=failed, entry_ids=tuple(entry_ids))

    def force_close_all_sessions(self, close_time: str | None = None, *, now: datetime | None = None) -> SweepResult:
        sessions = self._sessions.list_all()
        if not sessions:
            return SweepResult(closed=0, message="Nessuna sessione attiva")

        try:
            explicit = _close_time(close_time) if close_time else None
        except DomainError as e:
            return SweepResult(closed=0, message=str(e))

        now_time = self._clock.time_str(now)
        strategy = self._factory.for_force_close(close_time=explicit)

        closed, failed, entry_ids = 0, 0, []
        for session in sessions:
            decision = strategy.decide(session=session, now_time=now_time, close_time=explicit or now_time[:5])
            try:
                entry_id = self._close_session(session, decision)
            except Exception:
                failed += 1
                logger.exception("Force close failed for worker %s", session.worker_id)
                continue
            if entry_id is not None:
                closed += 1
                entry_ids.append(entry_id)

        message = f"{closed} sessioni chiuse manualmente"
        if failed:
            message += f"; {failed} sessioni non chiuse per errore"
        logger.warning("Force close: closed=%s failed=%s", closed, failed)
        return SweepResult(closed=closed, message=message, failed=failed, entry_ids=tuple(entry_ids))

    def _close_session(self, session: ActiveSession, decision: CloseDecision) -> Optional[str]:
        """Turn one listed session into a time entry; None if someone else closed it first."""
        taken = self._sessions.take(session.worker_id)
        if taken is None:
            return None
        if taken != session:
            # Replaced by a newer check-in since it was listed.
            self._sessions.restore(taken)
            return None

        hours = self._clock.hours_between(
            session.date, session.check_in, decision.check_out, roll_forward=decision.roll_forward
        )
        entry = TimeEntry(
            worker_id=session.worker_id,
            worker_name=session.worker_name,
            date=session.date,
            check_in=session.check_in,
            check_out=decision.check_out,
            hours_worked=max(0.0, hours),
            origin=decision.origin,
            notes=decision.note,
            auto_close_time=decision.auto_close_time,
        )
        entry_id = self._persist_close(session, entry)
        logger.info(
            "Session closed (%s): %s on %s at %s, %.2f h",
            decision.origin.value,
            session.worker_name,
            session.date,
            decision.check_out,
            entry.hours_worked,
        )
        return entry_id

    def _persist_close(self, session: ActiveSession, entry: TimeEntry) -> str:
        try:
            return self._entries.append(entry)
        except Exception:
            self._sessions.restore(session)
            raise

    # admin entry management

    def add_manual_time_entry(
        self,
        worker_id: str,
        worker_name: str,
        date: str,
        check_in: str,
        check_out: str,
    ) -> SessionResult:
        try:
            worker_id = require_non_empty(worker_id, "Lavoratore")
            worker_name = require_non_empty(worker_name, "Nome del lavoratore")
            date = require_iso_date(date)
            check_in = normalize_time_of_day(require_time_of_day(check_in, "Orario di entrata"))
            check_out = normalize_time_of_day(require_time_of_day(check_out, "Orario di uscita"))

            with self._worker_lock(worker_id):
                if self.has_entry_for_day(worker_id, date):
                    raise DuplicateEntryError(f"Esiste già una registrazione per {worker_name} in data {date}")

                hours = self._clock.hours_between(date, check_in, check_out)
                if hours <= 0:
                    raise InvalidTimeRangeError("L'orario di uscita deve essere successivo all'orario di entrata")

                entry_id = self._entries.append(
                    TimeEntry(
                        worker_id=worker_id,
                        worker_name=worker_name,
                        date=date,
                        check_in=check_in,
                        check_out=check_out,
                        hours_worked=hours,
                        origin=EntryOrigin.MANUAL_ENTRY,
                        notes="Aggiunto manualmente dall'amministratore",
                    )
                )
        except DomainError as e:
            return _failure(e)

        logger.info("Manual entry %s added for %s on %s", entry_id, worker_name, date)
        return SessionResult.ok("Registrazione aggiunta con successo", entry_id=entry_id)

    def update_time_entry(self, entry_id: str, check_in: str, check_out: str, date: str) -> SessionResult:
        """Overwrite times/date of an entry.

        The one-entry-per-day rule is not re-checked here: moving an entry to a
        date that already has one leaves two entries on that date.
        """
        try:
            entry = self._entries.get(str(entry_id))
            if entry is None:
                raise NotFoundError("Registrazione non trovata")

            date = require_iso_date(date)
            check_in = normalize_time_of_day(require_time_of_day(check_in, "Orario di entrata"))
            check_out = normalize_time_of_day(require_time_of_day(check_out, "Orario di uscita"))

            hours = self._clock.hours_between(date, check_in, check_out)
            if hours <= 0:
                raise InvalidTimeRangeError("L'orario di uscita deve essere successivo all'orario di entrata")

            updated = replace(
                entry,
                date=date,
                check_in=check_in,
                check_out=check_out,
                hours_worked=hours,
                origin=EntryOrigin.ADMIN_EDITED,
                notes=ADMIN_EDIT_NOTE,
            )
            if not self._entries.update(updated):
                raise NotFoundError("Registrazione non trovata")
        except DomainError as e:
            return _failure(e)

        logger.info("Entry %s edited by admin: %s %s-%s", entry_id, date, check_in, check_out)
        return SessionResult.ok("Registrazione modificata con successo", entry_id=str(entry_id))

    def delete_time_entry(self, entry_id: str) -> bool:
        deleted = self._entries.delete(str(entry_id))
        if deleted:
            logger.info("Entry %s deleted", entry_id)
        return deleted
