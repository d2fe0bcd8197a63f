"""
Project Use Cases
"""

from .create_project_use_case import CreateProjectUseCase
from .dtos import ProjectListResponse, ProjectResponse
from .get_project_use_case import GetProjectUseCase
from .list_projects_use_case import ListProjectsUseCase

__all__ = [
    "CreateProjectUseCase",
    "GetProjectUseCase",
    "ListProjectsUseCase",
    "ProjectListResponse",
    "ProjectResponse",
]
