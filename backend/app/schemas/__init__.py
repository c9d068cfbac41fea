"""Pydantic request/response schemas for the todo backend."""
