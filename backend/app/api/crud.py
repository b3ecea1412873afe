import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from app.db import get_db

logger = logging.getLogger(__name__)


def _to_columns(data: dict) -> dict:
    # Aware datetimes are stored as UTC; sqlite would otherwise drop the offset
    return {
        key: value.astimezone(timezone.utc)
        if isinstance(value, datetime) and value.tzinfo is not None
        else value
        for key, value in data.items()
    }


def crud_router(resource: str, model, create_schema, update_schema, read_schema) -> APIRouter:
    """
    Build list/create/update/delete endpoints for one resource:

      GET    /api/{resource}         newest-created first
      POST   /api/{resource}         201 with the stored row
      PUT    /api/{resource}/{id}    merge of the supplied fields only
      DELETE /api/{resource}/{id}    204, or 404 if the id is unknown

    Filtering and sorting beyond creation order is left to the client.
    """
    router = APIRouter(prefix=f"/api/{resource}", tags=[resource])
    label = model.__name__

    def _get_or_404(db: Session, item_id: int):
        row = db.get(model, item_id)
        if row is None:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return row

    @router.get("", response_model=list[read_schema])
    def list_items(db: Session = Depends(get_db)):
        return (
            db.query(model)
            .order_by(model.created_at.desc(), model.id.desc())
            .all()
        )

    @router.post("", response_model=read_schema, status_code=201)
    def create_item(payload: create_schema, db: Session = Depends(get_db)):
        # Omitted values fall back to the column defaults (e.g. applied_date = now)
        row = model(**_to_columns(payload.model_dump(exclude_none=True)))
        db.add(row)
        db.commit()
        db.refresh(row)
        logger.info("Created %s id=%s", resource, row.id)
        return row

    @router.put("/{item_id}", response_model=read_schema)
    def update_item(item_id: int, payload: update_schema, db: Session = Depends(get_db)):
        row = _get_or_404(db, item_id)

        # Only what the client sent; untouched fields keep their stored values
        changes = _to_columns(payload.model_dump(exclude_unset=True))
        for key, value in changes.items():
            column = model.__table__.columns.get(key)
            if value is None and column is not None and not column.nullable:
                raise HTTPException(status_code=400, detail=f"{key}: may not be null")

        for key, value in changes.items():
            setattr(row, key, value)

        db.commit()
        db.refresh(row)
        return row

    @router.delete("/{item_id}", status_code=204)
    def delete_item(item_id: int, db: Session = Depends(get_db)):
        row = _get_or_404(db, item_id)
        db.delete(row)
        db.commit()
        logger.info("Deleted %s id=%s", resource, item_id)
        return Response(status_code=204)

    return router
