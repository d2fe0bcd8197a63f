"""
Task Use Cases
"""

from .create_task_use_case import CreateTaskUseCase
from .dtos import TaskListResponse, TaskResponse
from .get_task_use_case import GetTaskUseCase
from .list_tasks_use_case import ListTasksUseCase

__all__ = [
    "CreateTaskUseCase",
    "GetTaskUseCase",
    "ListTasksUseCase",
    "TaskListResponse",
    "TaskResponse",
]
