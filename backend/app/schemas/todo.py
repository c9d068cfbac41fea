"""
Todo Backend: Pydantic Request/Response Schemas
=================================================

What:  Pydantic models defining the API contract for todo records.
How:   FastAPI validates request bodies against TodoPayload and serializes
       responses through TodoResponse. The filter models wrap the query
       string parameters of the list and search endpoints.

Schemas are separate from the SQLAlchemy model so the wire shape can stay
fixed while the table evolves.
"""

from typing import Optional

from pydantic import BaseModel, Field


# Category filter value meaning "do not filter"
ALL_CATEGORIES = "all"


def _effective_category(category: Optional[str]) -> Optional[str]:
    if category is None or category == ALL_CATEGORIES:
        return None
    return category


# ══════════════════════════════════════════════════════════════════════════
# Record Models
# ══════════════════════════════════════════════════════════════════════════


class TodoPayload(BaseModel):
    """
    What:  Request body for create (POST) and update (PUT).

    `id` is accepted for symmetry with TodoResponse but ignored: the store
    assigns it on create, and update takes it from the path. Titles and
    categories are not validated; an empty category on create is replaced
    by the configured default label.
    """
    id: Optional[int] = Field(default=None, description="Ignored on input")
    title: str = Field(description="Short task label")
    completed: bool = Field(description="Completion flag")
    category: str = Field(description="Category label; empty on create means the default label")


class TodoResponse(BaseModel):
    """
    What:  One persisted todo as returned by list and search.

    Example:
        {"id": 3, "title": "Buy milk", "completed": false, "category": "home"}
    """
    id: Optional[int] = Field(description="Store-assigned identifier")
    title: str
    completed: bool
    category: str

    model_config = {"from_attributes": True}


# ══════════════════════════════════════════════════════════════════════════
# Query Parameter Models
# ══════════════════════════════════════════════════════════════════════════


class FetchFilter(BaseModel):
    """
    What:  Query parameters of GET /api/todos/.

    category: exact category to keep. Absent or "all" disables filtering.
    """
    category: Optional[str] = Field(default=None, description="Category, or 'all'")

    @property
    def effective_category(self) -> Optional[str]:
        """The category to filter on, or None when unfiltered."""
        return _effective_category(self.category)


class SearchFilter(BaseModel):
    """
    What:  Query parameters of GET /api/todos/search.

    query:    substring to look for in titles (required)
    category: same "all"-means-unfiltered rule as FetchFilter
    """
    query: str = Field(description="Substring to match against titles")
    category: Optional[str] = Field(default=None, description="Category, or 'all'")

    @property
    def effective_category(self) -> Optional[str]:
        return _effective_category(self.category)


# ══════════════════════════════════════════════════════════════════════════
# Health
# ══════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseModel):
    """
    What:  Health check response for monitoring and load balancer probes.
    Who:   Returned by GET /health.
    """
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
