"""
Domain errors raised by the todo endpoints.

Each error carries a machine-readable code and the HTTP status it maps to; the
handlers in error_handlers.py turn them into responses.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class TodoError(Exception):
    """Base exception for all todo API errors."""

    def __init__(self, message: str, code: str, http_status: int = 500) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status

    def to_response(self) -> Optional[Dict[str, Any]]:
        """Return the JSON body for this error, or None for an empty response."""
        return {"detail": self.message}


class TodoNotFoundError(TodoError):
    """Requested todo does not exist."""

    def __init__(self, todo_id: int) -> None:
        super().__init__("Todo not found", "TODO_NOT_FOUND", 404)
        self.todo_id = todo_id


class InvalidTodoError(TodoError):
    """A todo field failed a business rule. Rendered as a bare 400."""

    def __init__(self, message: str, field: str) -> None:
        super().__init__(message, "INVALID_TODO", 400)
        self.field = field

    def to_response(self) -> Optional[Dict[str, Any]]:
        return None
