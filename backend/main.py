import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portal.api.v1.api import api_router
from portal.core.config import settings
from portal.core.errors import register_exception_handlers
from portal.core.logging import configure_logging
from portal.db.session import engine
from portal.models import Base

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def create_schema() -> None:
    if not settings.AUTO_CREATE_SCHEMA:
        return
    Base.metadata.create_all(bind=engine)
    logger.info("schema_ready backend=%s", engine.dialect.name)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_schema()
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Same routes at the bare path used by the web client and under the versioned prefix
app.include_router(api_router)
app.include_router(api_router, prefix=settings.API_V1_STR, include_in_schema=False)


@app.get("/healthz")
def healthz():
    return {"status": "ok"}
