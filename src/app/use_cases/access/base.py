"""
Shared steps of the access grant use cases.

Every grant operation runs the same preamble: load the resource, check it is
in the effective tenant, then check the caller's permission on it.
"""

from typing import Any, Dict, Optional, Tuple, Union
from uuid import UUID

from src.app.repositories.access_grant_repository import AccessGrant, IAccessGrantRepository
from src.app.services.access_control import AccessControlResolver
from src.app.services.audit import record_tenant_audit_event
from src.app.services.request_context import RequestContext
from src.app.services.tenancy_guard import TenancyGuard
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.visibility import PrivacyFeatures
from src.domain.entities import Project, ResourceType, Task, User
from src.libs.result import Error
from .dtos import GrantResponse

NOT_FOUND_CODES = {
    ResourceType.task: "TASK_NOT_FOUND",
    ResourceType.project: "PROJECT_NOT_FOUND",
}


class AccessGrantUseCase:
    def __init__(
        self,
        uow: UnitOfWork,
        guard: TenancyGuard,
        resource_type: ResourceType,
        features: PrivacyFeatures = PrivacyFeatures(),
    ):
        self.uow = uow
        self.guard = guard
        self.resource_type = ResourceType(resource_type)
        self.features = features

    @property
    def grants(self) -> IAccessGrantRepository:
        if self.resource_type == ResourceType.task:
            return self.uow.task_access
        return self.uow.project_access

    @property
    def table_name(self) -> str:
        return f"{self.resource_type.value}_access"

    async def _load_resource(self, resource_id: UUID) -> Optional[Union[Task, Project]]:
        if self.resource_type == ResourceType.task:
            return await self.uow.tasks.get_by_id(resource_id)
        return await self.uow.projects.get_by_id(resource_id)

    async def _authorize(
        self, context: RequestContext, tenant_id: UUID, resource_id: UUID, manage: bool
    ) -> Tuple[Optional[Union[Task, Project]], Optional[Error]]:
        """Resource + None on success, None + Error otherwise. Cross-tenant access raises."""
        resource = await self._load_resource(resource_id)
        if resource is None:
            return None, Error(
                NOT_FOUND_CODES[self.resource_type],
                f"{self.resource_type.value.capitalize()} not found",
            )

        self.guard.assert_tenant_scoped_read(
            resource.tenant_id, tenant_id, self.resource_type.value, resource_id
        )

        resolver = AccessControlResolver(self.uow, self.features)
        if manage:
            allowed = await resolver.can_manage_access(
                self.resource_type, tenant_id, resource_id, context.acting_user_id
            )
        else:
            allowed = await resolver.can_view(
                self.resource_type, tenant_id, resource_id, context.acting_user_id
            )
        if not allowed:
            return None, Error("ACCESS_DENIED", "Access denied")

        return resource, None

    def _to_response(self, grant: AccessGrant, user: Optional[User] = None) -> GrantResponse:
        return GrantResponse(
            resource_type=self.resource_type.value,
            resource_id=str(grant.resource_id),
            user_id=str(grant.user_id),
            email=user.email if user else None,
            name=user.name if user else None,
            role=grant.role.value,
            invited_by_user_id=str(grant.invited_by_user_id) if grant.invited_by_user_id else None,
            created_at=grant.created_at.isoformat() + "Z",
        )

    async def _audit(
        self,
        context: RequestContext,
        tenant_id: UUID,
        event_type: str,
        message: str,
        metadata: Dict[str, Any],
    ) -> None:
        metadata = {"resource_type": self.resource_type.value, **metadata}
        if context.is_impersonating:
            metadata["real_user_id"] = str(context.real_user_id)
        await record_tenant_audit_event(
            self.uow,
            tenant_id=tenant_id,
            event_type=event_type,
            message=message,
            actor_user_id=context.acting_user_id,
            metadata=metadata,
        )
