from sqlalchemy.engine import Engine
from sqlmodel import create_engine, SQLModel

# Table definitions must be imported before create_all
import models  # noqa: F401


def build_engine(connection_string: str, echo: bool = False) -> Engine:
    """Create the engine every repository opens its per-call connections from"""
    connect_args = {}
    if connection_string.startswith("sqlite"):
        # Route handlers run in a thread pool
        connect_args["check_same_thread"] = False
    return create_engine(connection_string, echo=echo, connect_args=connect_args)


def create_db_and_tables(engine: Engine) -> None:
    """Create all tables in the database"""
    SQLModel.metadata.create_all(engine)
