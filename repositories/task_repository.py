import uuid
from typing import List, Optional

from sqlalchemy import DateTime, Integer, String, Uuid, bindparam, text
from sqlalchemy.engine import Engine, RowMapping
from sqlalchemy.exc import SQLAlchemyError

from context import AppContext
from models import Task, TaskStatus, to_naive_utc

_RESULT_TYPES = dict(
    Id=Uuid, Title=String, Description=String, DueDate=DateTime, Status=Integer, UserId=Uuid
)

_WRITE_PARAMS = (
    bindparam("Id", type_=Uuid),
    bindparam("Title", type_=String),
    bindparam("Description", type_=String),
    bindparam("DueDate", type_=DateTime),
    bindparam("Status", type_=Integer),
    bindparam("UserId", type_=Uuid),
)

SELECT_ALL = text(
    'SELECT "Id", "Title", "Description", "DueDate", "Status", "UserId" FROM "Tasks"'
).columns(**_RESULT_TYPES)

SELECT_BY_ID = (
    text(
        'SELECT "Id", "Title", "Description", "DueDate", "Status", "UserId" '
        'FROM "Tasks" WHERE "Id" = :Id'
    )
    .bindparams(bindparam("Id", type_=Uuid))
    .columns(**_RESULT_TYPES)
)

INSERT = text(
    'INSERT INTO "Tasks" ("Id", "Title", "Description", "DueDate", "Status", "UserId") '
    "VALUES (:Id, :Title, :Description, :DueDate, :Status, :UserId)"
).bindparams(*_WRITE_PARAMS)

UPDATE = text(
    'UPDATE "Tasks" SET "Title" = :Title, "Description" = :Description, '
    '"DueDate" = :DueDate, "Status" = :Status, "UserId" = :UserId '
    'WHERE "Id" = :Id'
).bindparams(*_WRITE_PARAMS)

DELETE_BY_ID = text('DELETE FROM "Tasks" WHERE "Id" = :Id').bindparams(
    bindparam("Id", type_=Uuid)
)


def _row_to_task(row: RowMapping) -> Task:
    return Task(
        id=row["Id"],
        title=row["Title"],
        description=row["Description"] or "",
        due_date=row["DueDate"],
        status=TaskStatus(row["Status"]),
        user_id=row["UserId"],
    )


def _task_params(task: Task) -> dict:
    return {
        "Id": task.id,
        "Title": task.title,
        "Description": task.description or "",
        "DueDate": to_naive_utc(task.due_date),
        "Status": int(task.status),
        "UserId": task.user_id,
    }


class TaskRepository:
    """
    Parameterized SQL access to the Tasks table

    Every call opens its own connection and releases it before returning.
    Database errors are logged and re-raised unchanged.
    """

    def __init__(self, engine: Engine, context: AppContext):
        self._engine = engine
        self._logger = context.get_logger("repositories.task")

    def list(self) -> List[Task]:
        self._logger.debug("Executing list query")
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(SELECT_ALL).mappings().all()
        except SQLAlchemyError:
            self._logger.exception("Database error occurred while retrieving all tasks")
            raise

        tasks = [_row_to_task(row) for row in rows]
        self._logger.info("Retrieved %d tasks from database", len(tasks))
        return tasks

    def get_by_id(self, task_id: uuid.UUID) -> Optional[Task]:
        self._logger.debug("Executing get_by_id query for task %s", task_id)
        try:
            with self._engine.connect() as conn:
                row = conn.execute(SELECT_BY_ID, {"Id": task_id}).mappings().first()
        except SQLAlchemyError:
            self._logger.exception("Database error occurred while retrieving task %s", task_id)
            raise

        if row is None:
            self._logger.info("No task found with id %s", task_id)
            return None
        return _row_to_task(row)

    def insert(self, task: Task) -> None:
        self._logger.debug("Executing insert for task %s", task.id)
        try:
            with self._engine.begin() as conn:
                conn.execute(INSERT, _task_params(task))
        except SQLAlchemyError:
            self._logger.exception("Database error occurred while adding task %s", task.id)
            raise
        self._logger.info("Inserted task %s", task.id)

    def update(self, task: Task) -> int:
        """Overwrite every column of the row; returns rows affected (0 when the id is unknown)"""
        self._logger.debug("Executing update for task %s", task.id)
        try:
            with self._engine.begin() as conn:
                rowcount = conn.execute(UPDATE, _task_params(task)).rowcount
        except SQLAlchemyError:
            self._logger.exception("Database error occurred while updating task %s", task.id)
            raise

        if rowcount:
            self._logger.info("Updated task %s", task.id)
        else:
            self._logger.warning("No task found to update with id %s", task.id)
        return rowcount

    def delete_by_id(self, task_id: uuid.UUID) -> int:
        self._logger.debug("Executing delete for task %s", task_id)
        try:
            with self._engine.begin() as conn:
                rowcount = conn.execute(DELETE_BY_ID, {"Id": task_id}).rowcount
        except SQLAlchemyError:
            self._logger.exception("Database error occurred while deleting task %s", task_id)
            raise

        if rowcount:
            self._logger.info("Deleted task %s", task_id)
        else:
            self._logger.warning("No task found to delete with id %s", task_id)
        return rowcount
