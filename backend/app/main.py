import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.features import router as features_router
from app.api.resources import routers as resource_routers
from app.core.config import settings
from app.db import Base, engine
# import ensures tables are registered
from app.models.event import Event  # noqa: F401
from app.models.goal import Goal  # noqa: F401
from app.models.job import Job  # noqa: F401
from app.models.journal_entry import JournalEntry  # noqa: F401
from app.models.note import Note  # noqa: F401
from app.models.photo import PhotoBlob  # noqa: F401
from app.models.weekly_feature import WeeklyFeature  # noqa: F401

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(title="Lifeboard")

# Allow CORS for local frontend
origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _describe(errors) -> str:
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "path", "query")]
        field = ".".join(loc) or "request"
        parts.append(f"{field}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Missing/invalid fields are client errors: 400 with a readable message
    return JSONResponse(status_code=400, content={"detail": _describe(exc.errors())})


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Store error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Create DB tables on startup (alembic handles real migrations)
Base.metadata.create_all(bind=engine)

for router in resource_routers:
    app.include_router(router)
app.include_router(features_router)

logger.info("Lifeboard API ready (%s)", engine.url.render_as_string(hide_password=True))


@app.get("/")
def root():
    return {"message": "Lifeboard backend is running"}


def run():
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
