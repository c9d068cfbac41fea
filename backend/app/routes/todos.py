"""
Todo Backend: Todo Route Handlers
===================================

What:  Binds the six todo operations under the /api/todos prefix.
How:   Each route pulls path/query/body values, calls TodoService with the
       request's database session, and builds the response: JSON arrays for
       reads, short plain-text confirmations for writes.
Who:   Mounted by create_app() in app.main.

Route table:
    GET    /api/todos/            list (optional ?category=)
    POST   /api/todos/            create
    GET    /api/todos/search      search (?query=&category=)
    PUT    /api/todos/{todo_id}   update
    DELETE /api/todos/{todo_id}   delete
    GET    /api/todos/categories  distinct categories

Store failures surface as DatabaseError and are answered by the global
handler in main.py; no route catches them.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.todo import FetchFilter, SearchFilter, TodoPayload, TodoResponse
from app.services.todo_service import TodoService, get_todo_service

router = APIRouter(prefix="/api/todos", tags=["Todos"])

_SERVER_ERROR = {500: {"description": "Store failure (plain text)"}}


@router.get(
    "/",
    response_model=List[TodoResponse],
    responses=_SERVER_ERROR,
    summary="List todos",
)
async def get_all_todos(
    category: Optional[str] = Query(
        default=None,
        description="Only return todos in this category; 'all' or omitted returns everything",
    ),
    db: AsyncSession = Depends(get_db_session),
    service: TodoService = Depends(get_todo_service),
) -> List[TodoResponse]:
    return await service.list_todos(db, FetchFilter(category=category))


@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    response_class=PlainTextResponse,
    responses=_SERVER_ERROR,
    summary="Create a todo",
)
async def create_todo(
    payload: TodoPayload,
    db: AsyncSession = Depends(get_db_session),
    service: TodoService = Depends(get_todo_service),
) -> PlainTextResponse:
    """Insert a todo. An empty category is stored as the default label."""
    await service.create_todo(db, payload)
    return PlainTextResponse("Todo created successfully", status_code=status.HTTP_201_CREATED)


@router.get(
    "/search",
    response_model=List[TodoResponse],
    responses=_SERVER_ERROR,
    summary="Search todos by title",
)
async def search_todos(
    query: str = Query(description="Substring to look for in titles"),
    category: Optional[str] = Query(
        default=None,
        description="Only search this category; 'all' or omitted searches everything",
    ),
    db: AsyncSession = Depends(get_db_session),
    service: TodoService = Depends(get_todo_service),
) -> List[TodoResponse]:
    return await service.search_todos(db, SearchFilter(query=query, category=category))


@router.get(
    "/categories",
    response_model=List[str],
    responses=_SERVER_ERROR,
    summary="List distinct categories",
)
async def get_all_categories(
    db: AsyncSession = Depends(get_db_session),
    service: TodoService = Depends(get_todo_service),
) -> List[str]:
    return await service.list_categories(db)


@router.put(
    "/{todo_id}",
    response_class=PlainTextResponse,
    responses=_SERVER_ERROR,
    summary="Update a todo",
)
async def update_todo(
    todo_id: int,
    payload: TodoPayload,
    db: AsyncSession = Depends(get_db_session),
    service: TodoService = Depends(get_todo_service),
) -> PlainTextResponse:
    """
    Overwrite title, completed and category of a todo.

    An unknown id updates nothing and still answers 200.
    """
    await service.update_todo(db, todo_id, payload)
    return PlainTextResponse("Todo updated successfully")


@router.delete(
    "/{todo_id}",
    response_class=PlainTextResponse,
    responses=_SERVER_ERROR,
    summary="Delete a todo",
)
async def delete_todo(
    todo_id: int,
    db: AsyncSession = Depends(get_db_session),
    service: TodoService = Depends(get_todo_service),
) -> PlainTextResponse:
    """Delete a todo. Deleting an unknown id answers 200."""
    await service.delete_todo(db, todo_id)
    return PlainTextResponse("Todo deleted successfully")
