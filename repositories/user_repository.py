import uuid
from typing import Optional

from sqlalchemy import String, Uuid, bindparam, text
from sqlalchemy.engine import Engine, RowMapping
from sqlalchemy.exc import SQLAlchemyError

from context import AppContext
from models import User

_RESULT_TYPES = dict(Id=Uuid, Name=String, Email=String, PasswordHash=String)

SELECT_BY_ID = (
    text('SELECT "Id", "Name", "Email", "PasswordHash" FROM "Users" WHERE "Id" = :Id')
    .bindparams(bindparam("Id", type_=Uuid))
    .columns(**_RESULT_TYPES)
)

SELECT_BY_EMAIL = (
    text('SELECT "Id", "Name", "Email", "PasswordHash" FROM "Users" WHERE "Email" = :Email')
    .bindparams(bindparam("Email", type_=String))
    .columns(**_RESULT_TYPES)
)

INSERT = text(
    'INSERT INTO "Users" ("Id", "Name", "Email", "PasswordHash") '
    "VALUES (:Id, :Name, :Email, :PasswordHash)"
).bindparams(
    bindparam("Id", type_=Uuid),
    bindparam("Name", type_=String),
    bindparam("Email", type_=String),
    bindparam("PasswordHash", type_=String),
)


def _row_to_user(row: RowMapping) -> User:
    return User(
        id=row["Id"],
        name=row["Name"] or "",
        email=row["Email"],
        password_hash=row["PasswordHash"],
    )


class UserRepository:
    """Parameterized SQL access to the Users table, one connection per call"""

    def __init__(self, engine: Engine, context: AppContext):
        self._engine = engine
        self._logger = context.get_logger("repositories.user")

    def _fetch_one(self, statement, params: dict, what: str) -> Optional[User]:
        try:
            with self._engine.connect() as conn:
                row = conn.execute(statement, params).mappings().first()
        except SQLAlchemyError:
            self._logger.exception("Database error occurred while retrieving user by %s", what)
            raise

        if row is None:
            self._logger.info("No user found by %s", what)
            return None
        return _row_to_user(row)

    def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        self._logger.debug("Executing get_by_id query for user %s", user_id)
        return self._fetch_one(SELECT_BY_ID, {"Id": user_id}, f"id {user_id}")

    def get_by_email(self, email: str) -> Optional[User]:
        self._logger.debug("Executing get_by_email query for %s", email)
        return self._fetch_one(SELECT_BY_EMAIL, {"Email": email}, f"email {email}")

    def insert(self, user: User) -> None:
        self._logger.debug("Executing insert for user %s", user.id)
        params = {
            "Id": user.id,
            "Name": user.name,
            "Email": user.email,
            "PasswordHash": user.password_hash,
        }
        try:
            with self._engine.begin() as conn:
                conn.execute(INSERT, params)
        except SQLAlchemyError:
            self._logger.exception("Database error occurred while adding user %s", user.id)
            raise
        self._logger.info("Inserted user %s", user.id)
