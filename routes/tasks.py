import uuid
from fastapi import APIRouter, Depends, Request, Response, status
from typing import List
from models import Task
from schemas import TaskCreate, TaskUpdate, TaskResponse
from middleware.auth import verify_jwt_middleware
from routes.responses import error_response
from services.task_service import TaskService

router = APIRouter(dependencies=[Depends(verify_jwt_middleware)])


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


@router.get("/tasks", response_model=List[TaskResponse])
def list_tasks(service: TaskService = Depends(get_task_service)):
    """
    Get all tasks

    Returns:
        List of tasks, possibly empty
    """
    result = service.list_all()
    if not result.ok:
        return error_response(result.error)
    return [TaskResponse.model_validate(task) for task in result.value]


@router.get("/tasks/{task_id}", response_model=TaskResponse)
def get_task(task_id: uuid.UUID, service: TaskService = Depends(get_task_service)):
    """
    Get task details

    Args:
        task_id: Task ID

    Returns:
        The task, or 404 with an empty body
    """
    result = service.get_by_id(task_id)
    if not result.ok:
        return error_response(result.error)
    return TaskResponse.model_validate(result.value)


@router.post("/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    request: Request,
    response: Response,
    service: TaskService = Depends(get_task_service),
):
    """
    Create a new task

    Args:
        task_data: Task creation data; the id is generated when omitted

    Returns:
        The created task, with a Location header pointing at it
    """
    task = Task(**task_data.model_dump())
    result = service.add(task)
    if not result.ok:
        return error_response(result.error)

    response.headers["Location"] = str(request.url_for("get_task", task_id=str(task.id)))
    return TaskResponse.model_validate(result.value)


@router.put("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_task(
    task_id: uuid.UUID,
    task_data: TaskUpdate,
    service: TaskService = Depends(get_task_service),
):
    """
    Overwrite an existing task

    Args:
        task_id: Task ID
        task_data: New values for every field

    Returns:
        204, or 404 when the task does not exist
    """
    existing = service.get_by_id(task_id)
    if not existing.ok:
        return error_response(existing.error)

    task = existing.value.model_copy(update=task_data.model_dump())
    result = service.update(task)
    if not result.ok:
        return error_response(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: uuid.UUID, service: TaskService = Depends(get_task_service)):
    """
    Delete a task

    Succeeds whether or not the task existed.
    """
    result = service.delete_by_id(task_id)
    if not result.ok:
        return error_response(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
