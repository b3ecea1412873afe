from datetime import date, datetime, timezone

import pytest

from app.client import views
from app.client.api import ApiError
from app.client.state import ResourceStore
from app.schemas.goal import GoalRead

NOW = datetime(2025, 1, 8, 12, 0, tzinfo=timezone.utc)


def _goal(id, title, **kw):
    return GoalRead(id=id, title=title, created_at=NOW, updated_at=NOW, **kw)


class FakeGoalsApi:
    """In-memory stand-in for ResourceApi that can be told to fail."""

    resource = "goals"

    def __init__(self, items):
        self.rows = {g.id: g for g in items}
        self.fail = False
        self.calls = []

    def _maybe_fail(self, op):
        self.calls.append(op)
        if self.fail:
            raise ApiError(f"{op} failed", 500)

    def list(self):
        self._maybe_fail("list")
        return list(self.rows.values())

    def create(self, data):
        self._maybe_fail("create")
        new_id = max(self.rows, default=0) + 1
        row = _goal(new_id, **data)
        self.rows[new_id] = row
        return row

    def update(self, item_id, data):
        self._maybe_fail("update")
        row = self.rows[item_id].model_copy(update={**data, "updated_at": datetime.now(timezone.utc)})
        self.rows[item_id] = row
        return row

    def delete(self, item_id):
        self._maybe_fail("delete")
        del self.rows[item_id]


@pytest.fixture
def api():
    return FakeGoalsApi([_goal(1, "Read"), _goal(2, "Run", completed=True), _goal(3, "Cook")])


@pytest.fixture
def store(api):
    s = ResourceStore(api, sort=views.sort_goals)
    assert s.load()
    return s


def test_load_failure_sets_error_and_keeps_items(api):
    s = ResourceStore(api, label="goals")
    api.fail = True
    assert s.load() is False
    assert s.items == []
    assert s.error == "Couldn't load goals."


def test_toggle_success_uses_server_version(store, api):
    updated = store.toggle(1, "completed")
    assert updated.completed is True
    assert store.error is None
    assert next(g for g in store.items if g.id == 1) is updated


def test_failed_toggle_restores_previous_state(store, api):
    before = list(store.items)
    api.fail = True

    assert store.toggle(1, "completed") is None
    assert store.items == before
    assert next(g for g in store.items if g.id == 1).completed is False
    assert store.error == "Update failed."


def test_failed_delete_restores_previous_state(store, api):
    before = list(store.items)
    api.fail = True

    assert store.remove(3) is False
    assert store.items == before
    assert store.error == "Delete failed."


def test_delete_success(store, api):
    assert store.remove(3) is True
    assert [g.id for g in store.items] == [1, 2]
    assert 3 not in api.rows


def test_add_prepends_server_item(store, api):
    created = store.add({"title": "Swim"})
    assert created.id == 4
    assert created in store.items

    api.fail = True
    assert store.add({"title": "Nope"}) is None
    assert store.error == "Couldn't add to goals."
    assert len(store.items) == 4


def test_error_clears_on_next_success(store, api):
    api.fail = True
    store.toggle(1, "completed")
    assert store.error

    api.fail = False
    store.toggle(1, "completed")
    assert store.error is None


def test_remove_where_clears_completed(store, api):
    assert store.remove_where(lambda g: g.completed) == 1
    assert [g.id for g in store.items] == [1, 3]
    assert set(api.rows) == {1, 3}


def test_remove_where_failure_restores(store, api):
    before = list(store.items)
    api.fail = True
    assert store.remove_where(lambda g: g.completed) == 0
    assert store.items == before


def test_edit_unknown_id_raises(store):
    with pytest.raises(KeyError):
        store.edit(42, {"title": "x"})


# ---------------------------------------------------------------------------
# Date edits over the real API
# ---------------------------------------------------------------------------

def test_edit_goal_due_date_from_string_keeps_sort_working(dashboard):
    first = dashboard.goals.create({"title": "Taxes", "due_date": "2025-04-15"})
    second = dashboard.goals.create({"title": "Passport", "due_date": "2025-03-01"})
    store = ResourceStore(dashboard.goals, sort=views.sort_goals)
    store.load()

    updated = store.edit(first.id, {"due_date": "2025-02-01"})
    assert updated.due_date == date(2025, 2, 1)
    assert store.error is None
    assert [g.id for g in store.items] == [first.id, second.id]


def test_edit_goal_due_date_from_date_object(dashboard):
    goal = dashboard.goals.create({"title": "Taxes"})
    store = ResourceStore(dashboard.goals, sort=views.sort_goals)
    store.load()

    updated = store.edit(goal.id, {"due_date": date(2025, 4, 1)})
    assert updated.due_date == date(2025, 4, 1)
    assert dashboard.goals.list()[0].due_date == date(2025, 4, 1)


def test_edit_job_applied_date_keeps_sort_working(dashboard):
    older = dashboard.jobs.create({"title": "SRE", "applied_date": "2025-01-05T09:00:00Z"})
    newer = dashboard.jobs.create({"title": "Analyst", "applied_date": "2025-01-06T09:00:00Z"})
    store = ResourceStore(dashboard.jobs, sort=views.sort_jobs)
    store.load()
    assert [j.id for j in store.items] == [newer.id, older.id]

    store.edit(older.id, {"applied_date": "2025-01-07T09:00:00Z"})
    assert store.error is None
    assert [j.id for j in store.items] == [older.id, newer.id]


def test_unexpected_failure_still_restores_snapshot(store, api):
    before = list(store.items)

    def explode(item_id, data):
        raise RuntimeError("boom")

    api.update = explode
    with pytest.raises(RuntimeError):
        store.edit(1, {"due_date": date(2025, 4, 1)})
    assert store.items == before
    assert next(g for g in store.items if g.id == 1).due_date is None
