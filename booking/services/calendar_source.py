"""
calendar_source.py
------------------
External calendar busy time (Google, Outlook, ...), seen from the engine.

A CalendarSource answers "what is this staff member busy with on this
date?". Sources are network-bound and unreliable, so the engine never calls
them directly: CalendarFetcher runs the lookups on a bounded thread pool,
enforces a per-lookup timeout and turns any failure into "no external
events" for that one staff member.
"""

import logging
import time
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait

from .conflicts import to_busy_intervals

logger = logging.getLogger(__name__)


class CalendarSource:
    """Interface: busy intervals for (staff_id, date). May raise."""

    def pull_external_events(self, staff_id, day):
        raise NotImplementedError


class NullCalendarSource(CalendarSource):
    """No calendars connected."""

    def pull_external_events(self, staff_id, day):
        return []


class StaticCalendarSource(CalendarSource):
    """
    In-memory source keyed by (staff_id, date); handy for tests and demos.
    """

    def __init__(self, events=None):
        self.events = dict(events or {})

    def add(self, staff_id, day, start_time, end_time):
        self.events.setdefault((staff_id, day), []).append(
            {"start_time": start_time, "end_time": end_time}
        )

    def pull_external_events(self, staff_id, day):
        return list(self.events.get((staff_id, day), []))


class CompositeCalendarSource(CalendarSource):
    """
    Union of several providers. An error from any provider propagates; the
    fetcher then treats the whole lookup for that staff member as empty.
    """

    def __init__(self, sources):
        self.sources = list(sources)

    def pull_external_events(self, staff_id, day):
        events = []
        for source in self.sources:
            events.extend(source.pull_external_events(staff_id, day))
        return events


class CalendarFetcher:
    """
    Fan-out of calendar lookups with a timeout and fail-open semantics.

    Each lookup gets `timeout_seconds` counted from when a worker picks it
    up, so lookups queued behind others are not charged for the wait. The
    whole fan-out is capped at one budget per round of workers plus one; a
    lookup still running past its budget, one still queued at the cap, or
    one that raised counts as "no external events" for its staff member.
    """

    def __init__(self, source: CalendarSource, timeout_seconds: float, max_workers: int):
        self.source = source
        self.timeout_seconds = timeout_seconds
        self.max_workers = max_workers

    def fetch_all(self, staff_ids, day) -> dict:
        """
        Busy intervals per staff id. Never raises for calendar problems.
        """
        staff_ids = list(staff_ids)
        if not staff_ids:
            return {}
        workers = min(self.max_workers, len(staff_ids))
        started = {}
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="calendar-source")
        try:
            pending = {
                sid: executor.submit(self._pull, sid, day, started)
                for sid in staff_ids
            }
            rounds = -(-len(staff_ids) // workers)
            self._wait(pending, started, rounds)
            return {sid: self._collect(future, sid, day) for sid, future in pending.items()}
        finally:
            # Do not block the request on lookups that missed their budget
            executor.shutdown(wait=False, cancel_futures=True)

    def _pull(self, staff_id, day, started):
        started[staff_id] = time.monotonic()
        return self.source.pull_external_events(staff_id, day)

    def _wait(self, pending, started, rounds):
        give_up_at = time.monotonic() + self.timeout_seconds * (rounds + 1)
        while True:
            now = time.monotonic()
            if now >= give_up_at:
                return
            deadlines = []
            for sid, future in pending.items():
                if future.done():
                    continue
                began = started.get(sid)
                if began is None:
                    # Queued; re-check once it has had a budget's worth of time
                    deadlines.append(now + self.timeout_seconds)
                elif began + self.timeout_seconds > now:
                    deadlines.append(began + self.timeout_seconds)
            if not deadlines:
                return
            running = [f for f in pending.values() if not f.done()]
            wait(running, timeout=min(min(deadlines), give_up_at) - now,
                 return_when=FIRST_COMPLETED)

    def _collect(self, future, staff_id, day):
        if not future.done():
            logger.warning(
                "External calendar lookup timed out for staff %s on %s after %.1fs; "
                "treating as no external events",
                staff_id, day, self.timeout_seconds,
            )
            return []
        try:
            return to_busy_intervals(future.result() or [])
        except Exception as e:
            logger.warning(
                "Failed to pull external events for staff %s on %s: %s; "
                "treating as no external events",
                staff_id, day, e,
            )
            return []
