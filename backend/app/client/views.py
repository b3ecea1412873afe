"""Derived views over fetched resource lists.

Everything here is a pure function of the list it is given plus a reference
time, so the dashboard can recompute it on every render. `now` defaults to
the current time in the configured timezone.
"""

import math
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional

from app.core.config import settings
from app.core.constants import (
    GOAL_BUCKETS,
    GOAL_SOON_DAYS,
    JOB_FOLLOW_UP_DAYS,
    NOTE_UNCATEGORIZED,
)
from app.core.time_utils import as_utc, local_now, sunday_week_bounds, week_label

JOB_VIEWS = ("all", "active", "responded", "rejected", "overdue")
GOAL_VIEWS = ("all", "active", "completed", "overdue", "soon")

ONE_DAY = timedelta(days=1)


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else local_now(settings.timezone)


def _local_date(dt: datetime, now: datetime) -> date:
    # Stored times are UTC; "local" is whatever zone `now` is expressed in
    return as_utc(dt).astimezone(now.tzinfo or timezone.utc).date()


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

def upcoming_events(events: Iterable, now: Optional[datetime] = None) -> list:
    """Events starting today or tomorrow (local calendar), earliest first."""
    now = _now(now)
    today = now.date()
    days = {today, today + ONE_DAY}
    keep = [e for e in events if _local_date(e.start, now) in days]
    return sorted(keep, key=lambda e: as_utc(e.start))


# ---------------------------------------------------------------------------
# Jobs
# ---------------------------------------------------------------------------

def days_since(when: datetime, now: Optional[datetime] = None) -> int:
    """Whole days elapsed, floored."""
    return (as_utc(_now(now)) - as_utc(when)) // ONE_DAY


def is_job_overdue(job, now: Optional[datetime] = None) -> bool:
    """No follow-up sent and at least 7 full days since applying."""
    if job.follow_up_sent:
        return False
    elapsed = as_utc(_now(now)) - as_utc(job.applied_date)
    return elapsed >= timedelta(days=JOB_FOLLOW_UP_DAYS)


def applied_ago(applied: datetime, now: Optional[datetime] = None) -> str:
    days = days_since(applied, now)
    if days <= 0:
        return "today"
    if days == 1:
        return "1d ago"
    if days < 7:
        return f"{days}d ago"
    weeks = days // 7
    return "1w ago" if weeks == 1 else f"{weeks}w ago"


def sort_jobs(jobs: Iterable) -> list:
    """Most recently applied first."""
    return sorted(jobs, key=lambda j: as_utc(j.applied_date), reverse=True)


def job_status(job, now: Optional[datetime] = None) -> str:
    """Single state for a job card: rejected, responded, overdue or active."""
    if job.rejected:
        return "rejected"
    if job.responded:
        return "responded"
    if is_job_overdue(job, now):
        return "overdue"
    return "active"


def _job_matches(job, query: str) -> bool:
    if not query:
        return True
    text = f"{job.title} {job.company or ''} {job.link or ''}".lower()
    return query in text


def filter_jobs(jobs: Iterable, view: str = "all", query: str = "", now: Optional[datetime] = None) -> list:
    """
    Jobs visible under a filter tab plus a free-text search over
    title, company and link.

      all        every job
      active     neither responded nor rejected
      responded  responded
      rejected   rejected
      overdue    see is_job_overdue
    """
    if view not in JOB_VIEWS:
        raise ValueError(f"Unknown job view {view!r}")
    q = query.strip().lower()
    now = _now(now)

    out = []
    for job in jobs:
        if not _job_matches(job, q):
            continue
        if view == "active" and (job.rejected or job.responded):
            continue
        if view == "responded" and not job.responded:
            continue
        if view == "rejected" and not job.rejected:
            continue
        if view == "overdue" and not is_job_overdue(job, now):
            continue
        out.append(job)
    return out


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------

def _today(today: Optional[date]) -> date:
    return today if today is not None else local_now(settings.timezone).date()


def days_left(goal, today: Optional[date] = None) -> Optional[int]:
    if goal.due_date is None:
        return None
    return (goal.due_date - _today(today)).days


def is_goal_overdue(goal, today: Optional[date] = None) -> bool:
    left = days_left(goal, today)
    return left is not None and left < 0 and not goal.completed


def is_goal_soon(goal, today: Optional[date] = None) -> bool:
    left = days_left(goal, today)
    return left is not None and 0 <= left <= GOAL_SOON_DAYS and not goal.completed


def goal_bucket(goal, today: Optional[date] = None) -> str:
    left = days_left(goal, today)
    if left is None:
        return "No Due Date"
    if left < 0:
        return "Overdue"
    if left == 0:
        return "Today"
    if left <= GOAL_SOON_DAYS:
        return "This Week"
    return "Later"


def sort_goals(goals: Iterable) -> list:
    """Earliest due first, undated last; incomplete before completed on ties."""
    return sorted(
        goals,
        key=lambda g: (g.due_date is None, g.due_date or date.max, bool(g.completed)),
    )


def filter_goals(goals: Iterable, view: str = "active", query: str = "", today: Optional[date] = None) -> list:
    if view not in GOAL_VIEWS:
        raise ValueError(f"Unknown goal view {view!r}")
    q = query.strip().lower()
    today = _today(today)

    out = []
    for goal in goals:
        if q and q not in goal.title.lower():
            continue
        if view == "active" and goal.completed:
            continue
        if view == "completed" and not goal.completed:
            continue
        if view == "overdue" and not is_goal_overdue(goal, today):
            continue
        if view == "soon" and not is_goal_soon(goal, today):
            continue
        out.append(goal)
    return out


def bucket_goals(goals: Iterable, today: Optional[date] = None) -> list[tuple[str, list]]:
    """Non-empty (bucket, goals) pairs in the fixed display order."""
    today = _today(today)
    grouped: dict[str, list] = {}
    for goal in goals:
        grouped.setdefault(goal_bucket(goal, today), []).append(goal)
    return [(name, grouped[name]) for name in GOAL_BUCKETS if name in grouped]


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------

def _note_time(note) -> datetime:
    return as_utc(note.updated_at or note.created_at)


def sort_notes(notes: Iterable) -> list:
    """Pinned first, then most recently touched."""
    newest_first = sorted(notes, key=_note_time, reverse=True)
    return sorted(newest_first, key=lambda n: not n.pinned)


def note_sections(notes: Iterable) -> list[str]:
    sections = {(n.section or "").strip() for n in notes}
    sections.discard("")
    return ["all", *sorted(sections)]


def filter_notes(notes: Iterable, section: str = "all", query: str = "") -> list:
    q = query.strip().lower()
    return [
        n for n in notes
        if (section == "all" or (n.section or "") == section)
        and (not q or q in (n.content or "").lower())
    ]


def group_notes(notes: Iterable) -> tuple[list, list[tuple[str, list]]]:
    """Pinned notes (across all sections), then the rest grouped by section."""
    notes = list(notes)
    pins = [n for n in notes if n.pinned]
    by_section: dict[str, list] = {}
    for n in notes:
        if n.pinned:
            continue
        by_section.setdefault(n.section or NOTE_UNCATEGORIZED, []).append(n)
    groups = sorted(by_section.items(), key=lambda kv: kv[0].lower())
    return pins, groups


# ---------------------------------------------------------------------------
# Weekly favorites / completion
# ---------------------------------------------------------------------------

def current_week_label(now: Optional[datetime] = None) -> str:
    """Display label for the Sunday–Saturday week holding `now`."""
    start, end = sunday_week_bounds(_now(now))
    return week_label(start.date(), end.date())


def completed_goal_count(goals: Iterable) -> int:
    return sum(1 for g in goals if g.completed)


def clamp_non_negative_int(value, fallback: int = 0) -> int:
    try:
        n = float(value)
    except (TypeError, ValueError):
        return fallback
    if math.isnan(n) or math.isinf(n):
        return fallback
    return max(0, math.floor(n + 0.5))


def completion_percent(value: int, target: int) -> int:
    """Progress toward a weekly target, 0..100 (target floored at 1)."""
    safe_target = max(1, clamp_non_negative_int(target, 1))
    return max(0, min(100, math.floor(value / safe_target * 100 + 0.5)))
