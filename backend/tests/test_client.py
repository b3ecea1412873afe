import httpx
import pytest

import app.api.features as features_api
from app.client.api import ApiError, ConflictError, DashboardClient, NotFoundError
from app.schemas.goal import GoalRead


def test_resource_round_trip(dashboard):
    created = dashboard.goals.create({"title": "Run 10k", "due_date": "2025-02-01"})
    assert isinstance(created, GoalRead)
    assert created.completed is False

    updated = dashboard.goals.update(created.id, {"completed": True})
    assert updated.completed is True
    assert [g.id for g in dashboard.goals.list()] == [created.id]

    dashboard.goals.delete(created.id)
    assert dashboard.goals.list() == []


def test_missing_item_raises_not_found(dashboard):
    with pytest.raises(NotFoundError) as excinfo:
        dashboard.notes.update(999, {"pinned": True})
    assert excinfo.value.status_code == 404
    assert excinfo.value.detail == "Note not found"

    with pytest.raises(NotFoundError):
        dashboard.notes.delete(999)


def test_validation_error_carries_detail(dashboard):
    with pytest.raises(ApiError) as excinfo:
        dashboard.events.create({"title": "No start"})
    assert excinfo.value.status_code == 400
    assert "start" in excinfo.value.detail


def test_conflict_is_reported(dashboard, monkeypatch):
    dashboard.features.upsert_current("song", {"name": "first"})
    monkeypatch.setattr(features_api, "_find_feature", lambda *args: None)

    with pytest.raises(ConflictError) as excinfo:
        dashboard.features.upsert_current("song", {"name": "second"})
    assert excinfo.value.status_code == 409


def test_features_current_and_history(dashboard):
    assert dashboard.features.current("recipe") is None

    doc = dashboard.features.upsert_current("recipe", {"name": "Ramen"})
    assert doc.kind == "recipe"
    assert dashboard.features.current("recipe").payload == {"name": "Ramen"}
    assert [d.id for d in dashboard.features.history("recipe")] == [doc.id]


def test_unknown_kind_fails_before_request(dashboard):
    with pytest.raises(ValueError):
        dashboard.features.current("podcast")


def test_photo_upload_and_fetch(dashboard):
    assert dashboard.features.photo_meta().exists is False
    with pytest.raises(NotFoundError):
        dashboard.features.photo_raw()

    uploaded = dashboard.features.upload_photo(b"jpeg-bytes", "me.jpg", "image/jpeg")
    assert uploaded.ok is True

    content, content_type = dashboard.features.photo_raw()
    assert content == b"jpeg-bytes"
    assert content_type == "image/jpeg"
    assert dashboard.features.photo_meta().exists is True


def test_transport_failure_becomes_api_error():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(base_url="http://lifeboard.test", transport=httpx.MockTransport(refuse))
    with DashboardClient(http=http) as client:
        with pytest.raises(ApiError) as excinfo:
            client.jobs.list()
    assert excinfo.value.status_code is None


def test_plain_text_error_body():
    def boom(request):
        return httpx.Response(502, text="Bad Gateway")

    http = httpx.Client(base_url="http://lifeboard.test", transport=httpx.MockTransport(boom))
    client = DashboardClient(http=http)
    with pytest.raises(ApiError) as excinfo:
        client.events.list()
    assert excinfo.value.status_code == 502
    assert excinfo.value.detail == "Bad Gateway"
