from app.api.crud import crud_router
from app.models.event import Event
from app.models.goal import Goal
from app.models.job import Job
from app.models.journal_entry import JournalEntry
from app.models.note import Note
from app.schemas.event import EventCreate, EventRead, EventUpdate
from app.schemas.goal import GoalCreate, GoalRead, GoalUpdate
from app.schemas.job import JobCreate, JobRead, JobUpdate
from app.schemas.journal import JournalEntryCreate, JournalEntryRead, JournalEntryUpdate
from app.schemas.note import NoteCreate, NoteRead, NoteUpdate


events_router = crud_router("events", Event, EventCreate, EventUpdate, EventRead)
goals_router = crud_router("goals", Goal, GoalCreate, GoalUpdate, GoalRead)
jobs_router = crud_router("jobs", Job, JobCreate, JobUpdate, JobRead)
journal_router = crud_router(
    "journal", JournalEntry, JournalEntryCreate, JournalEntryUpdate, JournalEntryRead
)
notes_router = crud_router("notes", Note, NoteCreate, NoteUpdate, NoteRead)

routers = [events_router, goals_router, jobs_router, journal_router, notes_router]
