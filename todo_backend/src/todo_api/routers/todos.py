from __future__ import annotations

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Path, Request, Response, status

from ..errors import InvalidTodoError, TodoNotFoundError
from ..models import TodoEntity
from ..repositories import Repository, get_repository
from ..schemas import TodoIn, TodoOut
from ..utils import get_now, start_of_day

router = APIRouter(
    prefix="/api/todo",
    tags=["todos"],
)

MAX_PERCENTAGE = 100


def _get_repo(repo: Repository = Depends(get_repository)) -> Repository:
    """
    Dependency wrapper for repository to keep signatures clean.
    """
    return repo


def _require(repo: Repository, todo_id: int) -> TodoEntity:
    item = repo.get(todo_id)
    if item is None:
        raise TodoNotFoundError(todo_id)
    return item


def _check_percentage(percentage: int) -> None:
    if not 0 <= percentage <= MAX_PERCENTAGE:
        raise InvalidTodoError("percentageOfCompletion must be between 0 and 100", "percentageOfCompletion")


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=List[TodoOut],
    summary="List Todos",
    description="Return every Todo item in store order.",
)
def list_todos(repo: Repository = Depends(_get_repo)) -> List[TodoOut]:
    return [TodoOut(**it) for it in repo.list_all()]


# PUBLIC_INTERFACE
@router.get(
    "/mark_done/{todo_id}",
    response_model=TodoOut,
    summary="Mark Todo done",
    description="Set a Todo's completion percentage to 100.",
    responses={
        200: {"description": "Todo marked as done"},
        404: {"description": "Todo not found"},
    },
)
def mark_todo_done(todo_id: int, repo: Repository = Depends(_get_repo)) -> TodoOut:
    updated = repo.mark_done(todo_id)
    if updated is None:
        raise TodoNotFoundError(todo_id)
    return TodoOut(**updated)


# PUBLIC_INTERFACE
@router.get(
    "/incoming/{days}",
    response_model=List[TodoOut],
    summary="List incoming Todos",
    description=(
        "List todos expiring between now and the end of today plus `days` days.\n\n"
        "- 0: the rest of today\n"
        "- 1: up to the end of tomorrow, and so on; fractional values are allowed"
    ),
)
def list_incoming_todos(
    days: float = Path(..., allow_inf_nan=False),
    repo: Repository = Depends(_get_repo),
    now: datetime = Depends(get_now),
) -> List[TodoOut]:
    try:
        items = repo.list_incoming(days, now)
    except ValueError as e:
        raise InvalidTodoError(str(e), "days") from e
    return [TodoOut(**it) for it in items]


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}/percentage={percentage}",
    response_model=TodoOut,
    summary="Change Todo percentage",
    description="Set a Todo's completion percentage (0..100).",
    responses={
        200: {"description": "Percentage updated"},
        400: {"description": "Percentage out of range"},
        404: {"description": "Todo not found"},
    },
)
def change_todo_percentage(todo_id: int, percentage: int, repo: Repository = Depends(_get_repo)) -> TodoOut:
    """
    Existence is checked before the range, so an unknown id is always a 404.
    """
    _require(repo, todo_id)
    _check_percentage(percentage)
    updated = repo.set_percentage(todo_id, percentage)
    if updated is None:
        raise TodoNotFoundError(todo_id)
    return TodoOut(**updated)


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={
        200: {"description": "Todo found"},
        404: {"description": "Todo not found"},
    },
)
def get_todo(todo_id: int, repo: Repository = Depends(_get_repo)) -> TodoOut:
    return TodoOut(**_require(repo, todo_id))


# PUBLIC_INTERFACE
@router.post(
    "/",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item and return the created resource with its location.",
    responses={
        201: {"description": "Todo created successfully"},
        400: {"description": "Empty title, past expiration date or percentage out of range"},
    },
)
def create_todo(
    payload: TodoIn,
    request: Request,
    response: Response,
    repo: Repository = Depends(_get_repo),
    now: datetime = Depends(get_now),
) -> TodoOut:
    """
    Create a new Todo. The id in the body, if any, is ignored.
    """
    if not payload.title:
        raise InvalidTodoError("title is required", "title")
    if payload.expiration_date < start_of_day(now):
        raise InvalidTodoError("expirationDate must not be before today", "expirationDate")
    _check_percentage(payload.percentage_of_completion)

    created = repo.create(payload)
    response.headers["Location"] = str(request.url_for("get_todo", todo_id=created["id"]))
    return TodoOut(**created)


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Replace Todo",
    description=(
        "Replace every field of a Todo item. The body id must match the path id. "
        "No existence check is made; replacing an unknown id changes nothing."
    ),
    responses={
        200: {"description": "Todo replaced"},
        400: {"description": "Id mismatch or percentage out of range"},
    },
)
def replace_todo(todo_id: int, payload: TodoIn, repo: Repository = Depends(_get_repo)) -> TodoOut:
    if payload.id != todo_id:
        raise InvalidTodoError("body id does not match path id", "id")
    _check_percentage(payload.percentage_of_completion)
    return TodoOut(**repo.replace(todo_id, payload))


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    summary="Delete Todo",
    description="Delete a Todo item by ID.",
    responses={
        200: {"description": "Todo deleted"},
        404: {"description": "Todo not found"},
    },
)
def delete_todo(todo_id: int, repo: Repository = Depends(_get_repo)) -> Response:
    """
    Delete a Todo. Returns 200 with an empty body, 404 if not found.
    """
    _require(repo, todo_id)
    repo.delete(todo_id)
    return Response(status_code=status.HTTP_200_OK)
