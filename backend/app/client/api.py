"""HTTP data-access layer for the dashboard.

One small wrapper per resource translating the REST calls into pydantic read
models. Every failure surfaces as an `ApiError`; nothing is retried.
"""

import logging
from typing import Any, Optional

import httpx
from fastapi.encoders import jsonable_encoder

from app.core.config import settings
from app.schemas.event import EventRead
from app.schemas.feature import FeatureKind, FeatureRead, PhotoMeta, PhotoUploaded
from app.schemas.goal import GoalRead
from app.schemas.job import JobRead
from app.schemas.journal import JournalEntryRead
from app.schemas.note import NoteRead

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A request to the dashboard API failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = message


class NotFoundError(ApiError):
    pass


class ConflictError(ApiError):
    pass


def _raise_for_status(resp: httpx.Response) -> None:
    if resp.status_code < 400:
        return
    try:
        body = resp.json()
    except ValueError:
        body = None
    detail = body.get("detail") if isinstance(body, dict) else None
    detail = str(detail or resp.text or resp.reason_phrase)
    if resp.status_code == 404:
        raise NotFoundError(detail, resp.status_code)
    if resp.status_code == 409:
        raise ConflictError(detail, resp.status_code)
    raise ApiError(detail, resp.status_code)


class _Endpoint:
    def __init__(self, http: httpx.Client):
        self._http = http

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            resp = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(f"{method} {path} failed: {exc}") from exc
        if resp.status_code >= 400:
            logger.warning("%s %s -> HTTP %s", method, path, resp.status_code)
        _raise_for_status(resp)
        return resp


class ResourceApi(_Endpoint):
    """list/create/update/delete for one /api/{resource} collection."""

    def __init__(self, http: httpx.Client, resource: str, read_model):
        super().__init__(http)
        self.resource = resource
        self.read_model = read_model
        self._path = f"/api/{resource}"

    def list(self) -> list:
        resp = self._request("GET", self._path)
        return [self.read_model.model_validate(item) for item in resp.json()]

    def create(self, data: dict[str, Any]):
        resp = self._request("POST", self._path, json=jsonable_encoder(data))
        return self.read_model.model_validate(resp.json())

    def update(self, item_id: int, data: dict[str, Any]):
        resp = self._request("PUT", f"{self._path}/{item_id}", json=jsonable_encoder(data))
        return self.read_model.model_validate(resp.json())

    def delete(self, item_id: int) -> None:
        self._request("DELETE", f"{self._path}/{item_id}")


class FeaturesApi(_Endpoint):
    """Weekly features and the stored photo."""

    _path = "/api/features"

    def current(self, kind: FeatureKind | str) -> Optional[FeatureRead]:
        kind = FeatureKind(kind)
        resp = self._request("GET", f"{self._path}/{kind.value}/current")
        data = resp.json()
        return FeatureRead.model_validate(data) if data else None

    def upsert_current(self, kind: FeatureKind | str, payload: dict[str, Any]) -> FeatureRead:
        kind = FeatureKind(kind)
        body = {"payload": jsonable_encoder(payload)}
        resp = self._request("PUT", f"{self._path}/{kind.value}/current", json=body)
        return FeatureRead.model_validate(resp.json())

    def history(self, kind: FeatureKind | str, limit: int = 10) -> list[FeatureRead]:
        kind = FeatureKind(kind)
        resp = self._request("GET", f"{self._path}/{kind.value}/history", params={"limit": limit})
        return [FeatureRead.model_validate(item) for item in resp.json()]

    def upload_photo(
        self, content: bytes, filename: str = "photo.jpg", content_type: str = "image/jpeg"
    ) -> PhotoUploaded:
        files = {"photo": (filename, content, content_type)}
        resp = self._request("POST", f"{self._path}/photo", files=files)
        return PhotoUploaded.model_validate(resp.json())

    def photo_raw(self) -> tuple[bytes, str]:
        resp = self._request("GET", f"{self._path}/photo/raw")
        return resp.content, resp.headers.get("content-type", "application/octet-stream")

    def photo_meta(self) -> PhotoMeta:
        resp = self._request("GET", f"{self._path}/photo/meta")
        return PhotoMeta.model_validate(resp.json())


class DashboardClient:
    """Entry point bundling every resource wrapper over one httpx client.

    Pass `http` to reuse an existing client (tests hand in FastAPI's
    TestClient); otherwise one is created against `base_url`.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        http: Optional[httpx.Client] = None,
        timeout: float = 30,
    ):
        self._owns_http = http is None
        self.http = http or httpx.Client(base_url=base_url or settings.api_base_url, timeout=timeout)

        self.events = ResourceApi(self.http, "events", EventRead)
        self.goals = ResourceApi(self.http, "goals", GoalRead)
        self.jobs = ResourceApi(self.http, "jobs", JobRead)
        self.journal = ResourceApi(self.http, "journal", JournalEntryRead)
        self.notes = ResourceApi(self.http, "notes", NoteRead)
        self.features = FeaturesApi(self.http)

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
