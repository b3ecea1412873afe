import logging
from typing import Any, Callable, Optional

from app.client.api import ApiError, ResourceApi

logger = logging.getLogger(__name__)


class ResourceStore:
    """Local copy of one resource list with optimistic mutations.

    Every mutation snapshots `items`, applies the change locally, then calls
    the API. A failed call restores the snapshot wholesale and records a
    transient `error`; a successful one swaps in the server's version of the
    item. Nothing is retried.
    """

    def __init__(self, api: ResourceApi, label: Optional[str] = None, sort: Optional[Callable] = None):
        self.api = api
        self.label = label or api.resource
        self.sort = sort
        self.items: list = []
        self.error: Optional[str] = None

    def _set(self, items: list) -> None:
        self.items = self.sort(items) if self.sort else list(items)

    def _replace(self, item) -> None:
        self._set([item if x.id == item.id else x for x in self.items])

    def _find(self, item_id: int):
        for x in self.items:
            if x.id == item_id:
                return x
        raise KeyError(item_id)

    def _attempt(self, local: list, call: Callable[[], Any], failure: str):
        snapshot = self.items
        try:
            self._set(local)
            result = call()
        except ApiError as exc:
            logger.warning("%s: %s (%s)", self.label, failure, exc)
            self.items = snapshot
            self.error = failure
            return None
        except Exception:
            self.items = snapshot
            raise
        self.error = None
        return result

    def load(self) -> bool:
        try:
            items = self.api.list()
        except ApiError as exc:
            logger.warning("Could not load %s: %s", self.label, exc)
            self.error = f"Couldn't load {self.label}."
            return False
        self._set(items)
        self.error = None
        return True

    def add(self, data: dict[str, Any]):
        try:
            created = self.api.create(data)
        except ApiError as exc:
            logger.warning("Could not add to %s: %s", self.label, exc)
            self.error = f"Couldn't add to {self.label}."
            return None
        self._set([created, *self.items])
        self.error = None
        return created

    def edit(self, item_id: int, patch: dict[str, Any]):
        current = self._find(item_id)
        # Validated so date strings become dates before the list is re-sorted
        optimistic = type(current).model_validate({**current.model_dump(), **patch})
        local = [optimistic if x.id == item_id else x for x in self.items]
        updated = self._attempt(local, lambda: self.api.update(item_id, patch), "Update failed.")
        if updated is not None:
            self._replace(updated)
        return updated

    def toggle(self, item_id: int, field: str):
        current = self._find(item_id)
        return self.edit(item_id, {field: not getattr(current, field)})

    def remove(self, item_id: int) -> bool:
        local = [x for x in self.items if x.id != item_id]
        result = self._attempt(local, lambda: self.api.delete(item_id) or True, "Delete failed.")
        return bool(result)

    def remove_where(self, predicate: Callable[[Any], bool], failure: str = "Delete failed.") -> int:
        """Delete every matching item (e.g. clear completed goals)."""
        doomed = [x.id for x in self.items if predicate(x)]
        if not doomed:
            return 0
        local = [x for x in self.items if not predicate(x)]

        def call():
            for item_id in doomed:
                self.api.delete(item_id)
            return len(doomed)

        return self._attempt(local, call, failure) or 0
