from datetime import date, datetime, time, timedelta, timezone


def current_week_key(d: date | datetime | None = None) -> str:
    """
    ISO-8601 week identifier for a date, e.g. '2025-W02'.

    Computed on the UTC calendar date so the server timezone never shifts a
    week: aware datetimes are converted to UTC, naive ones are taken as UTC.
    Week 1 is the week holding the year's first Thursday; weeks start Monday.
    """
    if d is None:
        d = datetime.now(timezone.utc)
    if isinstance(d, datetime):
        if d.tzinfo is not None:
            d = d.astimezone(timezone.utc)
        d = d.date()

    iso_year, iso_week, _ = d.isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def _zone(tz_name: str | None):
    if tz_name and tz_name != "local":
        from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
        try:
            return ZoneInfo(tz_name)
        except ZoneInfoNotFoundError:
            return None
    return None


def to_local_datetime(dt: datetime, tz_name: str | None = None) -> datetime:
    """Convert a datetime (assume UTC if naive) to local or given tz.

    - If `tz_name` is 'local' or None: use system local timezone.
    - If `tz_name` is IANA tz name (e.g., 'America/New_York'): use that.
    - Unknown tz names fall back to the system local timezone.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(_zone(tz_name))


def local_now(tz_name: str | None = None) -> datetime:
    return datetime.now(timezone.utc).astimezone(_zone(tz_name))


def as_utc(dt: datetime) -> datetime:
    """Aware UTC datetime; naive values (sqlite) are taken as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def sunday_week_bounds(now: datetime) -> tuple[datetime, datetime]:
    """Sunday 00:00 through Saturday 23:59:59.999999 of the week holding `now`.

    Display weeks run Sunday to Saturday in the caller's local time, unlike the
    ISO week keys used for storage.
    """
    days_back = (now.weekday() + 1) % 7  # Sunday = 0
    start_day = now.date() - timedelta(days=days_back)
    start = datetime.combine(start_day, time.min, tzinfo=now.tzinfo)
    end = datetime.combine(start_day + timedelta(days=6), time.max, tzinfo=now.tzinfo)
    return start, end


def _month_day(d: date) -> str:
    return f"{d.strftime('%b')} {d.day}"


def week_label(start: date, end: date) -> str:
    """
    Human label for a date range.
    Examples: 'Jan 5–Jan 11, 2025', 'Jan 26 – Feb 1, 2025',
              'Dec 28, 2025 – Jan 3, 2026'
    """
    if start.year != end.year:
        return f"{_month_day(start)}, {start.year} – {_month_day(end)}, {end.year}"
    if start.month != end.month:
        return f"{_month_day(start)} – {_month_day(end)}, {start.year}"
    return f"{_month_day(start)}–{_month_day(end)}, {start.year}"
