from datetime import date, datetime, timedelta, timezone
import random

from app.core.time_utils import current_week_key
from app.db import Base, SessionLocal, engine
from app.models.event import Event
from app.models.goal import Goal
from app.models.job import Job
from app.models.journal_entry import JournalEntry
from app.models.note import Note
from app.models.weekly_feature import WeeklyFeature


def clear_demo_data(db) -> None:
    """Delete every row so we can reseed cleanly."""
    for model in (Event, Goal, Job, JournalEntry, Note, WeeklyFeature):
        db.query(model).delete()
    db.commit()


def seed_demo_data(db) -> None:
    """Insert a small, realistic dashboard: a few of everything."""
    now = datetime.now(timezone.utc)
    today = date.today()

    rows = [
        Event(title="Dentist", start=now.replace(hour=15, minute=0, second=0, microsecond=0)),
        Event(title="Team offsite", start=now + timedelta(days=1), all_day=True),
        Event(title="Book club", start=now + timedelta(days=5), description="Chapter 4-6"),
        Goal(title="Finish portfolio site", due_date=today + timedelta(days=3)),
        Goal(title="Read 2 books", due_date=today + timedelta(days=20), target=2),
        Goal(title="Renew passport", due_date=today - timedelta(days=2)),
        Goal(title="Meal prep Sunday", completed=True),
        JournalEntry(title="Sunday", content="Long walk, cleaned the desk, planned the week."),
        Note(content="Call mom on Thursday", pinned=True),
        Note(content="Try the ramen place on 5th", section="Food"),
        Note(content="Look into standing desks", section="Home", color="#DBEAFE"),
    ]

    # Applications spread over the last three weeks
    for title, company in [
        ("Backend Engineer", "Acme"),
        ("Data Engineer", "Globex"),
        ("Platform Engineer", "Initech"),
        ("Python Developer", "Umbrella"),
    ]:
        applied = now - timedelta(days=random.randint(0, 21))
        rows.append(
            Job(
                title=title,
                company=company,
                link=f"https://jobs.example.com/{company.lower()}",
                applied_date=applied,
                responded=random.random() < 0.25,
            )
        )

    week = current_week_key()
    rows += [
        WeeklyFeature(kind="recipe", week=week, payload={"name": "Shakshuka", "url": "https://example.com/shakshuka"}),
        WeeklyFeature(kind="watch", week=week, payload={"title": "Severance", "platform": "Apple TV"}),
        WeeklyFeature(kind="read", week=week, payload={"title": "Piranesi", "author": "Susanna Clarke", "percent": 40}),
    ]

    db.add_all(rows)
    db.commit()

    print(f"Seeded {len(rows)} demo rows")


def main():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        clear_demo_data(db)
        seed_demo_data(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
