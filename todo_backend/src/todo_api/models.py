from __future__ import annotations

from datetime import datetime
from typing import Optional, TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    Storage-level representation of a Todo item shared by all repository
    backends.

    Fields:
    - id: Unique integer identifier assigned by the store
    - title: Title text; required non-empty on creation only
    - description: Optional detailed description
    - expiration_date: Naive local datetime the todo expires at
    - percentage_of_completion: 0..100, where 100 means done
    """

    id: int
    title: Optional[str]
    description: Optional[str]
    expiration_date: datetime
    percentage_of_completion: int
