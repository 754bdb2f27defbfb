from sqlalchemy import create_engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from portal.core.config import settings

engine_kwargs: dict = {"pool_pre_ping": True, "echo": settings.DB_ECHO}
connect_args: dict = {}

try:
    url = make_url(settings.DATABASE_URL)
    if url.get_backend_name() in {"postgresql", "postgres"}:
        # psycopg2/libpq option flag
        connect_args.setdefault("options", "-c client_encoding=UTF8")
except ArgumentError:
    # Keep defaults if URL parsing fails; create_engine raises the real error below.
    pass

if settings.DATABASE_URL.startswith("sqlite"):
    connect_args = {**connect_args, "check_same_thread": False}
    if ":memory:" in settings.DATABASE_URL:
        engine_kwargs["poolclass"] = StaticPool

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args, **engine_kwargs)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
