from .task import TaskAccepted, TaskCreate, TaskRecord, TaskStatus
from .user import Pagination, UserCreate, UserListResponse, UserRead

__all__ = [
    "Pagination",
    "TaskAccepted",
    "TaskCreate",
    "TaskRecord",
    "TaskStatus",
    "UserCreate",
    "UserListResponse",
    "UserRead",
]
