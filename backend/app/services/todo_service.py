"""
Todo Backend: Todo Service (Request Handlers)
===============================================

What:  The six todo operations: create, list, update, delete, search and
       list categories.
How:   Each method issues exactly one SQL statement on the AsyncSession it
       is given, commits writes immediately, and converts the result into
       plain Python / Pydantic values.
Who:   Called by the route functions in app.routes.todos.

Error Handling:
    Any store error is logged at DEBUG with its traceback and re-raised as
    DatabaseError carrying the operation's fixed failure text. Nothing else
    is raised.
    Update and delete do not check that the row exists; a statement that
    touches zero rows is a success. The affected row count is returned so
    callers and tests can observe it.
"""

import logging
from typing import List

from fastapi import Request
from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError
from app.models.todo import Todo
from app.schemas.todo import FetchFilter, SearchFilter, TodoPayload, TodoResponse

logger = logging.getLogger(__name__)

# Store errors the service converts to DatabaseError.
# OSError covers drivers that surface refused connections unwrapped.
STORE_ERRORS = (SQLAlchemyError, OSError)


class TodoService:
    """
    Stateless handler layer for todo records.

    Holds only read-only options taken from settings at startup:
        default_category:   label stored when create receives ""
        escape_wildcards:   match '%' and '_' in search queries literally
    """

    def __init__(self, default_category: str = "default", escape_wildcards: bool = False):
        self.default_category = default_category
        self.escape_wildcards = escape_wildcards

    def _store_failure(self, message: str, exc: Exception, **context) -> DatabaseError:
        # The exception handler in main.py logs the failure at ERROR
        logger.debug("%s: %s", message, exc, exc_info=True)
        context["error_type"] = type(exc).__name__
        return DatabaseError(message=message, context=context)

    async def create_todo(self, db: AsyncSession, payload: TodoPayload) -> None:
        """
        Insert one todo.

        An empty category is replaced by the default label. `payload.id` is
        ignored and the assigned id is not returned.

        Raises:
            DatabaseError: "Failed to create todo"
        """
        category = payload.category or self.default_category
        stmt = insert(Todo).values(
            title=payload.title,
            completed=payload.completed,
            category=category,
        )
        try:
            await db.execute(stmt)
            await db.commit()
        except STORE_ERRORS as e:
            raise self._store_failure("Failed to create todo", e, title=payload.title)

        logger.info("Todo created (category=%s)", category)

    async def list_todos(self, db: AsyncSession, filters: FetchFilter) -> List[TodoResponse]:
        """
        Return every todo, or only those in one category.

        Rows come back in storage order; there is no ORDER BY.

        Raises:
            DatabaseError: "Failed to fetch todos"
        """
        stmt = select(Todo)
        category = filters.effective_category
        if category is not None:
            stmt = stmt.where(Todo.category == category)

        try:
            result = await db.execute(stmt)
            todos = list(result.scalars().all())
        except STORE_ERRORS as e:
            raise self._store_failure("Failed to fetch todos", e, category=category)

        return [TodoResponse.model_validate(todo) for todo in todos]

    async def update_todo(self, db: AsyncSession, todo_id: int, payload: TodoPayload) -> int:
        """
        Overwrite title, completed and category of the row with `todo_id`.

        The category is stored as given (no default substitution).

        Returns:
            Number of rows affected: 0 when the id does not exist, which is
            still reported to the client as success.

        Raises:
            DatabaseError: "Failed to update todo"
        """
        stmt = (
            update(Todo)
            .where(Todo.id == todo_id)
            .values(
                title=payload.title,
                completed=payload.completed,
                category=payload.category,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = await db.execute(stmt)
            await db.commit()
        except STORE_ERRORS as e:
            raise self._store_failure("Failed to update todo", e, todo_id=todo_id)

        affected = result.rowcount
        logger.debug("Update of todo %s affected %s row(s)", todo_id, affected)
        return affected

    async def delete_todo(self, db: AsyncSession, todo_id: int) -> int:
        """
        Delete the row with `todo_id`.

        Returns:
            Number of rows affected; 0 for a missing id. Deleting twice is
            therefore harmless.

        Raises:
            DatabaseError: "Failed to delete todo"
        """
        stmt = (
            delete(Todo)
            .where(Todo.id == todo_id)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await db.execute(stmt)
            await db.commit()
        except STORE_ERRORS as e:
            raise self._store_failure("Failed to delete todo", e, todo_id=todo_id)

        affected = result.rowcount
        logger.debug("Delete of todo %s affected %s row(s)", todo_id, affected)
        return affected

    async def search_todos(self, db: AsyncSession, filters: SearchFilter) -> List[TodoResponse]:
        """
        Return todos whose title contains `filters.query`.

        Matching is a LIKE '%query%' pattern, so case sensitivity follows
        the store's collation. Unless escape_wildcards is set, '%' and '_'
        inside the query keep their wildcard meaning.

        Raises:
            DatabaseError: "Failed to search todos"
        """
        if self.escape_wildcards:
            condition = Todo.title.contains(filters.query, autoescape=True)
        else:
            condition = Todo.title.like(f"%{filters.query}%")

        stmt = select(Todo).where(condition)
        category = filters.effective_category
        if category is not None:
            stmt = stmt.where(Todo.category == category)

        try:
            result = await db.execute(stmt)
            todos = list(result.scalars().all())
        except STORE_ERRORS as e:
            raise self._store_failure(
                "Failed to search todos", e, query=filters.query, category=category
            )

        return [TodoResponse.model_validate(todo) for todo in todos]

    async def list_categories(self, db: AsyncSession) -> List[str]:
        """
        Return the distinct category labels present in the table.

        Order is whatever the store returns.

        Raises:
            DatabaseError: "Failed to fetch categories"
        """
        stmt = select(Todo.category).distinct()
        try:
            result = await db.execute(stmt)
            categories = list(result.scalars().all())
        except STORE_ERRORS as e:
            raise self._store_failure("Failed to fetch categories", e)

        return categories


def get_todo_service(request: Request) -> TodoService:
    """FastAPI dependency returning the service instance built by create_app()."""
    return request.app.state.todo_service
