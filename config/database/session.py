import os
import urllib.parse

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

load_dotenv()


def _build_database_url() -> str:
    # DATABASE_URL wins; otherwise compose a PostgreSQL URL from SQL_USER, SQL_PASSWORD, SQL_HOST, SQL_PORT, SQL_DATABASE
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    password = urllib.parse.quote_plus(os.getenv("SQL_PASSWORD", ""))
    return (
        f"postgresql+psycopg2://{os.getenv('SQL_USER','postgres')}:{password}"
        f"@{os.getenv('SQL_HOST','localhost')}:{os.getenv('SQL_PORT','5432')}/{os.getenv('SQL_DATABASE','playlist_timeline')}"
    )


DATABASE_URL = _build_database_url()

if DATABASE_URL.startswith("sqlite"):
    # a single shared connection keeps in-memory databases alive across sessions
    engine = create_engine(
        DATABASE_URL,
        echo=os.getenv("SQL_ECHO", "false").lower() == "true",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    engine = create_engine(
        DATABASE_URL,
        echo=os.getenv("SQL_ECHO", "false").lower() == "true",
        pool_pre_ping=True,
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db_schema():
    """
    Create missing tables at startup so the first request does not hit an undefined table.
    """
    Base.metadata.create_all(bind=engine)
