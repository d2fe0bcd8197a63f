"""
Task Use Case DTOs
"""

from typing import List, Optional
from pydantic import BaseModel

from src.domain.entities import Task


class TaskResponse(BaseModel):
    """Single task"""

    id: str
    tenant_id: str
    project_id: Optional[str]
    title: str
    visibility: str
    created_by: Optional[str]
    created_at: str

    @classmethod
    def from_entity(cls, task: Task) -> "TaskResponse":
        return cls(
            id=str(task.id),
            tenant_id=str(task.tenant_id),
            project_id=str(task.project_id) if task.project_id else None,
            title=task.title,
            visibility=task.visibility.value,
            created_by=str(task.created_by) if task.created_by else None,
            created_at=task.created_at.isoformat() + "Z",
        )


class TaskListResponse(BaseModel):
    """Tasks visible to the caller"""

    tasks: List[TaskResponse]
