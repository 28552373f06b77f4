# barbershop/db.py

from sqlmodel import SQLModel, create_engine, Session

from barbershop.config import settings

DATABASE_URL = settings.database.url

# check_same_thread is a SQLite-only connect arg
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

# Engine = connection to the database
engine = create_engine(
    DATABASE_URL,
    echo=settings.database.echo,
    connect_args=connect_args,
)


def create_db_and_tables(bind=None):
    # importing models registers the tables on SQLModel.metadata
    from barbershop import models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)


# Dependency: one session per request
def get_session():
    with Session(engine) as session:
        yield session
