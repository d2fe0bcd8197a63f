"""
Project Use Case DTOs
"""

from typing import List, Optional
from pydantic import BaseModel

from src.domain.entities import Project


class ProjectResponse(BaseModel):
    """Single project"""

    id: str
    tenant_id: str
    workspace_id: Optional[str]
    name: str
    visibility: str
    created_by: Optional[str]
    created_at: str

    @classmethod
    def from_entity(cls, project: Project) -> "ProjectResponse":
        return cls(
            id=str(project.id),
            tenant_id=str(project.tenant_id),
            workspace_id=str(project.workspace_id) if project.workspace_id else None,
            name=project.name,
            visibility=project.visibility.value,
            created_by=str(project.created_by) if project.created_by else None,
            created_at=project.created_at.isoformat() + "Z",
        )


class ProjectListResponse(BaseModel):
    """Projects visible to the caller"""

    projects: List[ProjectResponse]
