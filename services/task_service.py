import uuid
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from context import AppContext
from models import Task
from repositories.task_repository import TaskRepository
from services.result import ServiceResult

TITLE_REQUIRED = "Title is required"


class TaskService:
    """Validation and orchestration for task operations"""

    def __init__(self, repository: TaskRepository, context: AppContext):
        self._repository = repository
        self._logger = context.get_logger("services.task")

    def list_all(self) -> ServiceResult[List[Task]]:
        try:
            tasks = self._repository.list()
        except SQLAlchemyError:
            self._logger.error("Failed to list tasks")
            return ServiceResult.infrastructure()
        self._logger.info("Retrieved %d tasks", len(tasks))
        return ServiceResult.success(tasks)

    def get_by_id(self, task_id: uuid.UUID) -> ServiceResult[Task]:
        try:
            task = self._repository.get_by_id(task_id)
        except SQLAlchemyError:
            self._logger.error("Failed to retrieve task %s", task_id)
            return ServiceResult.infrastructure()
        if task is None:
            self._logger.warning("Task %s not found", task_id)
            return ServiceResult.not_found()
        return ServiceResult.success(task)

    def add(self, task: Task) -> ServiceResult[Task]:
        if not task.title or not task.title.strip():
            self._logger.warning("Attempted to add task with empty title")
            return ServiceResult.validation(TITLE_REQUIRED)

        self._logger.info("Adding new task with title: %s", task.title)
        try:
            self._repository.insert(task)
        except SQLAlchemyError:
            self._logger.error("Failed to add task %s", task.id)
            return ServiceResult.infrastructure()
        return ServiceResult.success(task)

    def update(self, task: Task) -> ServiceResult[Task]:
        """Persist every field of the task; NOT_FOUND when no row has its id"""
        if not task.title or not task.title.strip():
            self._logger.warning("Attempted to update task %s with empty title", task.id)
            return ServiceResult.validation(TITLE_REQUIRED)

        try:
            rowcount = self._repository.update(task)
        except SQLAlchemyError:
            self._logger.error("Failed to update task %s", task.id)
            return ServiceResult.infrastructure()
        if not rowcount:
            return ServiceResult.not_found()
        return ServiceResult.success(task)

    def delete_by_id(self, task_id: uuid.UUID) -> ServiceResult[None]:
        try:
            self._repository.delete_by_id(task_id)
        except SQLAlchemyError:
            self._logger.error("Failed to delete task %s", task_id)
            return ServiceResult.infrastructure()
        return ServiceResult.success()
