"""collabboard FastAPI application"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from collabboard import models  # noqa: F401  (registers the tables on Base.metadata)
from collabboard.api.v1 import kanban, projects
from collabboard.config import settings
from collabboard.database import Base, engine
from collabboard.exceptions import CollabError
from collabboard.logging_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("%s %s started (position policy: %s)", settings.APP_NAME, settings.APP_VERSION, settings.POSITION_POLICY)
    yield


app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, debug=settings.DEBUG, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CollabError)
async def collab_error_handler(_: Request, exc: CollabError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


app.include_router(projects.router, prefix="/api/v1")
app.include_router(kanban.router, prefix="/api/v1")


@app.get("/health", include_in_schema=False)
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("collabboard.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
