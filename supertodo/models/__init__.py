"""Model exports for SQLAlchemy/SQLModel metadata discovery."""

from supertodo.models.tags import Tag
from supertodo.models.todo_tags import TodoTag
from supertodo.models.todos import Todo
from supertodo.models.users import User

__all__ = [
    "Tag",
    "Todo",
    "TodoTag",
    "User",
]
