"""ORM models for the todo backend."""
