"""
Todo Backend: Todo SQLAlchemy Model
=====================================

What:  ORM model for the `todo` table.
Who:   Queried and written by TodoService; created by init_models().

Table Design:
    - id: integer primary key assigned by the store on insert
    - title: free text, not validated beyond NOT NULL
    - completed: Boolean, which MySQL and SQLite store as integer 0/1
    - category: free text label; no foreign key or enumerated domain, so the
      set of categories is whatever distinct values the rows hold
"""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Todo(Base):
    """
    One todo record.

    Lifecycle:
        Created by POST, read by list/search, fully overwritten by PUT,
        removed by DELETE. No soft-delete, versioning or audit columns.
    """

    __tablename__ = "todo"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # create_constraint=False: no CHECK (completed IN (0, 1)) on integer backends
    completed: Mapped[bool] = mapped_column(
        Boolean(create_constraint=False),
        nullable=False,
        default=False,
    )

    category: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<Todo(id={self.id}, title='{self.title}', "
            f"completed={self.completed}, category='{self.category}')>"
        )
