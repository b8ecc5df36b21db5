"""Public schema exports shared across API route modules."""

from supertodo.schemas.common import DeleteResponse
from supertodo.schemas.stats import PriorityBreakdown, TodoStats
from supertodo.schemas.tags import TagCreate, TagRead
from supertodo.schemas.todos import TodoCreate, TodoRead, TodoUpdate, TodoWithTagsRead
from supertodo.schemas.users import UserRead

__all__ = [
    "DeleteResponse",
    "PriorityBreakdown",
    "TagCreate",
    "TagRead",
    "TodoCreate",
    "TodoRead",
    "TodoStats",
    "TodoUpdate",
    "TodoWithTagsRead",
    "UserRead",
]
