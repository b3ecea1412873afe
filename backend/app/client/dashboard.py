#!/usr/bin/env python3
"""
Print the dashboard cards as plain text.

Usage examples:
  - Against a local server:
      lifeboard-dashboard
  - Only some cards, against another host:
      lifeboard-dashboard --base-url http://<HOST>:4000 --card goals --card jobs
"""

import argparse
from datetime import datetime
from typing import Optional

from app.client.api import ApiError, DashboardClient
from app.client.lastfm import LastFmClient, load_weekly_favorites
from app.client.state import ResourceStore
from app.client import views
from app.core.config import settings
from app.core.constants import COMPLETION_DEFAULT_TARGET
from app.core.time_utils import as_utc, local_now, sunday_week_bounds
from app.schemas.feature import FeatureKind

CARDS = ("events", "journal", "jobs", "goals", "notes", "favorites", "completion")


def _when(dt: datetime, now: datetime) -> str:
    return as_utc(dt).astimezone(now.tzinfo).strftime("%a %H:%M")


def render_events(store: ResourceStore, now: datetime) -> list[str]:
    lines = ["Upcoming"]
    if store.error:
        return lines + [f"  {store.error}"]
    upcoming = views.upcoming_events(store.items, now)
    if not upcoming:
        lines.append("  Nothing today or tomorrow.")
    for e in upcoming:
        when = "all day" if e.all_day else _when(e.start, now)
        lines.append(f"  {when:<10} {e.title}")
    return lines


def render_journal(store: ResourceStore, now: datetime) -> list[str]:
    lines = ["Journal"]
    if store.error:
        return lines + [f"  {store.error}"]
    if not store.items:
        return lines + ["  No entries yet."]
    latest = store.items[0]
    heading = latest.title or as_utc(latest.entry_date).astimezone(now.tzinfo).strftime("%b %d, %Y")
    lines.append(f"  {heading}")
    lines.append(f"  {latest.content.splitlines()[0] if latest.content else ''}")
    return lines


def render_jobs(store: ResourceStore, now: datetime) -> list[str]:
    lines = ["Job Applications"]
    if store.error:
        return lines + [f"  {store.error}"]
    jobs = views.sort_jobs(store.items)
    overdue = views.filter_jobs(jobs, "overdue", now=now)
    lines.append(f"  {len(jobs)} tracked, {len(overdue)} need a follow-up")
    for j in jobs[:3]:
        company = f" @ {j.company}" if j.company else ""
        chips = []
        if j.responded:
            chips.append("Responded")
        if j.follow_up_sent:
            chips.append("Follow-up")
        if views.is_job_overdue(j, now):
            chips.append("Overdue")
        chip_text = f" [{', '.join(chips)}]" if chips else ""
        lines.append(f"  {j.title}{company} ({views.applied_ago(j.applied_date, now)}){chip_text}")
    return lines


def render_goals(store: ResourceStore, now: datetime) -> list[str]:
    lines = ["Goals"]
    if store.error:
        return lines + [f"  {store.error}"]
    today = now.date()
    active = views.filter_goals(store.items, "active", today=today)
    buckets = views.bucket_goals(views.sort_goals(active), today)
    if not buckets:
        lines.append("  All caught up.")
    for name, goals in buckets:
        lines.append(f"  {name}")
        for g in goals:
            left = views.days_left(g, today)
            if left is None:
                due = ""
            elif left < 0:
                due = f" ({abs(left)}d overdue)"
            elif left == 0:
                due = " (due today)"
            else:
                due = f" ({left}d left)"
            lines.append(f"    - {g.title}{due}")
    return lines


def render_notes(store: ResourceStore, now: datetime) -> list[str]:
    lines = ["Notes"]
    if store.error:
        return lines + [f"  {store.error}"]
    pins, groups = views.group_notes(views.sort_notes(store.items))
    for n in pins:
        lines.append(f"  * {n.content}")
    for section, notes in groups:
        lines.append(f"  {section}: {len(notes)} note(s)")
    if len(lines) == 1:
        lines.append("  No notes.")
    return lines


def render_favorites(client: DashboardClient, now: datetime, lastfm: Optional[LastFmClient]) -> list[str]:
    lines = [f"Weekly Favorites ({views.current_week_label(now)})"]
    try:
        fav = load_weekly_favorites(client, lastfm, now)
    except ApiError:
        return lines + ["  Couldn't load weekly favorites."]

    song = fav.get("song")
    if song and song.get("name"):
        lines.append(f"  Song:   {song['name']} by {song.get('artist', '')}")
    recipe = fav.get("recipe")
    if recipe:
        lines.append(f"  Recipe: {recipe.get('name', '')}")
    watch = fav.get("watch")
    if watch:
        platform = f" ({watch['platform']})" if watch.get("platform") else ""
        lines.append(f"  Watch:  {watch.get('title', '')}{platform}")
    read = fav.get("read")
    if read:
        by = f" by {read['author']}" if read.get("author") else ""
        lines.append(f"  Read:   {read.get('title', '')}{by}")
    if fav.get("photo"):
        lines.append("  Photo:  set")
    if len(lines) == 1:
        lines.append("  Nothing picked this week.")
    return lines


def render_completion(client: DashboardClient, goals: ResourceStore, jobs: ResourceStore, now: datetime) -> list[str]:
    lines = ["This Week – Completion"]
    if goals.error or jobs.error:
        return lines + ["  Couldn't load goals or jobs."]
    try:
        doc = client.features.current(FeatureKind.completion)
    except ApiError:
        doc = None
    saved = doc.payload if doc else {}

    done_goals = views.completed_goal_count(goals.items)
    week_start, _ = sunday_week_bounds(now)
    applied = sum(1 for j in jobs.items if as_utc(j.applied_date) >= as_utc(week_start))

    goal_target = views.clamp_non_negative_int(
        saved.get("goal_target"), max(done_goals, COMPLETION_DEFAULT_TARGET)
    )
    jobs_target = views.clamp_non_negative_int(
        saved.get("jobs_target"), max(applied, COMPLETION_DEFAULT_TARGET)
    )
    lines.append(f"  Goals {done_goals}/{goal_target} ({views.completion_percent(done_goals, goal_target)}%)")
    lines.append(f"  Jobs  {applied}/{jobs_target} ({views.completion_percent(applied, jobs_target)}%)")
    return lines


def build_dashboard(
    client: DashboardClient,
    cards=CARDS,
    now: Optional[datetime] = None,
    lastfm: Optional[LastFmClient] = None,
) -> str:
    now = now or local_now(settings.timezone)
    stores = {
        "events": ResourceStore(client.events),
        "journal": ResourceStore(client.journal),
        "jobs": ResourceStore(client.jobs, sort=views.sort_jobs),
        "goals": ResourceStore(client.goals, sort=views.sort_goals),
        "notes": ResourceStore(client.notes, sort=views.sort_notes),
    }
    needed = set(cards)
    if "completion" in needed:
        needed |= {"goals", "jobs"}
    for name, store in stores.items():
        if name in needed:
            store.load()

    renderers = {
        "events": lambda: render_events(stores["events"], now),
        "journal": lambda: render_journal(stores["journal"], now),
        "jobs": lambda: render_jobs(stores["jobs"], now),
        "goals": lambda: render_goals(stores["goals"], now),
        "notes": lambda: render_notes(stores["notes"], now),
        "favorites": lambda: render_favorites(client, now, lastfm),
        "completion": lambda: render_completion(client, stores["goals"], stores["jobs"], now),
    }
    blocks = [f"DASHBOARD  {now.strftime('%a %b %d, %Y')}"]
    for card in cards:
        blocks.append("\n".join(renderers[card]()))
    return "\n\n".join(blocks)


def save_completion_targets(client: DashboardClient, goal_target, jobs_target) -> dict:
    """Store this week's completion targets (kind "completion")."""
    payload = {
        "goal_target": views.clamp_non_negative_int(goal_target, 0),
        "jobs_target": views.clamp_non_negative_int(jobs_target, 0),
    }
    return client.features.upsert_current(FeatureKind.completion, payload).payload


def main(argv=None) -> None:
    ap = argparse.ArgumentParser(description="Print the life dashboard")
    ap.add_argument("--base-url", default=settings.api_base_url, help="API base URL (default from API_BASE_URL)")
    ap.add_argument("--card", action="append", choices=CARDS, help="Card to show (repeatable, default all)")
    ap.add_argument("--no-lastfm", action="store_true", help="Skip the live Last.fm song lookup")
    ap.add_argument(
        "--targets",
        nargs=2,
        type=int,
        metavar=("GOALS", "JOBS"),
        help="Set this week's completion targets before printing",
    )
    args = ap.parse_args(argv)

    lastfm = None if args.no_lastfm else LastFmClient()
    with DashboardClient(base_url=args.base_url) as client:
        if args.targets:
            save_completion_targets(client, *args.targets)
        print(build_dashboard(client, args.card or CARDS, lastfm=lastfm))


if __name__ == "__main__":
    main()
