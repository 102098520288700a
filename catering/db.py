from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from catering.core.settings import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # needed for SQLite with FastAPI threads
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
