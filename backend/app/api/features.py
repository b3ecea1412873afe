import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.constants import (
    HISTORY_DEFAULT_LIMIT,
    HISTORY_MAX_LIMIT,
    PHOTO_ID,
    PHOTO_MAX_BYTES,
)
from app.core.time_utils import current_week_key
from app.db import get_db
from app.models.photo import PhotoBlob
from app.models.weekly_feature import WeeklyFeature
from app.schemas.feature import (
    FeatureKind,
    FeatureRead,
    FeatureUpsert,
    PhotoMeta,
    PhotoUploaded,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/features", tags=["features"])


# ---------------------------------------------------------------------------
# Single stored photo (raw bytes, separate from the weekly documents)
# ---------------------------------------------------------------------------

@router.post("/photo", response_model=PhotoUploaded)
def upload_photo(photo: Optional[UploadFile] = File(None), db: Session = Depends(get_db)):
    """Upload/replace the single stored photo. Form field: "photo"."""
    if photo is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    data = photo.file.read(PHOTO_MAX_BYTES + 1)
    if len(data) > PHOTO_MAX_BYTES:
        raise HTTPException(status_code=413, detail="Photo exceeds 10 MB")

    row = db.get(PhotoBlob, PHOTO_ID)
    if row is None:
        row = PhotoBlob(id=PHOTO_ID)
        db.add(row)
    row.data = data
    row.content_type = photo.content_type or "application/octet-stream"
    db.commit()
    logger.info("Stored photo (%d bytes, %s)", len(data), row.content_type)

    # Cache-busted URL the client can use directly as an image source
    return PhotoUploaded(ok=True, url=f"/api/features/photo/raw?ts={int(time.time() * 1000)}")


@router.get("/photo/raw")
def get_photo_raw(db: Session = Depends(get_db)):
    row = db.get(PhotoBlob, PHOTO_ID)
    if row is None:
        raise HTTPException(status_code=404, detail="No photo")
    return Response(
        content=row.data,
        media_type=row.content_type or "application/octet-stream",
        headers={"Cache-Control": "no-store"},  # always latest
    )


@router.get("/photo/meta", response_model=PhotoMeta)
def get_photo_meta(db: Session = Depends(get_db)):
    row = db.get(PhotoBlob, PHOTO_ID)
    if row is None:
        return PhotoMeta(exists=False, updated_at=None)
    return PhotoMeta(exists=True, updated_at=row.updated_at)


# ---------------------------------------------------------------------------
# Weekly features: one document per (kind, ISO week)
# ---------------------------------------------------------------------------

def _find_feature(db: Session, kind: FeatureKind, week: str) -> Optional[WeeklyFeature]:
    return (
        db.query(WeeklyFeature)
        .filter(WeeklyFeature.kind == kind.value)
        .filter(WeeklyFeature.week == week)
        .first()
    )


@router.get("/{kind}/current", response_model=Optional[FeatureRead])
def get_current_feature(kind: FeatureKind, db: Session = Depends(get_db)):
    """Current week's document for `kind`, or null."""
    return _find_feature(db, kind, current_week_key())


@router.put("/{kind}/current", response_model=FeatureRead)
def upsert_current_feature(
    kind: FeatureKind,
    body: Optional[FeatureUpsert] = None,
    db: Session = Depends(get_db),
):
    """Create this week's document for `kind` or replace its payload.

    Two writers creating the same week at once collide on the (kind, week)
    unique constraint; the loser gets a 409 and must re-read before retrying.
    """
    week = current_week_key()
    payload = body.payload if body is not None else {}

    row = _find_feature(db, kind, week)
    if row is None:
        row = WeeklyFeature(kind=kind.value, week=week, payload=payload)
        db.add(row)
    else:
        row.payload = payload

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Concurrent create of %s feature for %s", kind.value, week)
        raise HTTPException(
            status_code=409,
            detail=f"{kind.value} for {week} was created concurrently; reload and retry",
        )

    db.refresh(row)
    logger.info("Saved %s feature for %s", kind.value, week)
    return row


@router.get("/{kind}/history", response_model=list[FeatureRead])
def get_feature_history(
    kind: FeatureKind,
    limit: int = Query(HISTORY_DEFAULT_LIMIT, ge=1),
    db: Session = Depends(get_db),
):
    """Most recent weeks for `kind`, newest first (at most 50)."""
    return (
        db.query(WeeklyFeature)
        .filter(WeeklyFeature.kind == kind.value)
        .order_by(WeeklyFeature.created_at.desc(), WeeklyFeature.id.desc())
        .limit(min(limit, HISTORY_MAX_LIMIT))
        .all()
    )
