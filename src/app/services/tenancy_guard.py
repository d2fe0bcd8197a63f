"""
Tenancy Guard

Assertion primitives every route and use case calls before trusting
tenant-scoped data.

Invariants:
- Every tenant-owned row carries tenant_id on insert
- Every read/write is scoped by tenant_id, never by workspace
- Tenant id comes from the authenticated session, never from client input
- Chat rooms are tenant-namespaced and membership-gated

Cross-tenant mismatches are always fatal. Everything else follows the
configured modes:

- mode "off": violations are ignored
- mode "throw", or the test environment: violations raise
- mode "warn": violations are logged
- enforcement "strict": missing tenant ids and client-supplied tenant ids raise
- enforcement "soft": ignored client-supplied tenant ids are reported back
  to the caller, which sends them in the X-Tenancy-Warn response header
"""

import logging
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Type
from uuid import UUID

logger = logging.getLogger(__name__)


TENANT_OWNED_TABLES = (
    "projects",
    "tasks",
    "task_access",
    "project_access",
    "workspaces",
    "clients",
    "time_entries",
    "comments",
    "chat_channels",
    "chat_messages",
    "chat_dm_threads",
    "activity_log",
)

CLIENT_TENANT_ID_KEYS = ("tenant_id", "tenantId")


class GuardMode(str, Enum):
    warn = "warn"
    throw = "throw"
    off = "off"


class EnforcementMode(str, Enum):
    off = "off"
    soft = "soft"
    strict = "strict"


class TenancyGuardError(Exception):
    """Base class of every tenancy guard failure"""

    code = "TENANCY_VIOLATION"

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)


class TenancyViolation(TenancyGuardError):
    code = "TENANCY_VIOLATION"


class TenantContextMissing(TenancyGuardError):
    code = "TENANT_CONTEXT_MISSING"


class CrossTenantViolation(TenancyGuardError):
    code = "CROSS_TENANT_ACCESS_DENIED"


class MissingTenantId(TenancyGuardError):
    code = "TENANT_ID_MISSING"


class ClientTenantIdRejected(TenancyGuardError):
    code = "CLIENT_TENANT_ID_REJECTED"


class ChatMembershipRequired(TenancyGuardError):
    code = "CHAT_MEMBERSHIP_REQUIRED"


def _tenant_id_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _payload_tenant_id(payload: Mapping[str, Any]) -> Optional[str]:
    if payload is None:
        return None
    for key in CLIENT_TENANT_ID_KEYS:
        if payload.get(key):
            return _tenant_id_str(payload[key])
    return None


def tenant_room(kind: str, tenant_id: UUID, thread_id: UUID) -> str:
    """Real-time room name for a chat thread, e.g. channel:<tenant>:<channel>"""
    return f"{kind}:{tenant_id}:{thread_id}"


class TenancyGuard:
    def __init__(
        self,
        mode: GuardMode = GuardMode.warn,
        enforcement: EnforcementMode = EnforcementMode.off,
        environment: str = "development",
    ):
        self.mode = GuardMode(mode)
        self.enforcement = EnforcementMode(enforcement)
        self.environment = environment.lower()

    @classmethod
    def from_config(cls, config) -> "TenancyGuard":
        """Build from ApplicationConfig; unknown values fall back to the defaults."""
        try:
            mode = GuardMode(config.guard_mode())
        except ValueError:
            logger.warning(f"[TenancyGuard] Unknown guard mode {config.guard_mode()!r}, using warn")
            mode = GuardMode.warn
        try:
            enforcement = EnforcementMode(config.enforcement_mode())
        except ValueError:
            enforcement = EnforcementMode.off
        return cls(mode=mode, enforcement=enforcement, environment=config.environment())

    @property
    def is_test(self) -> bool:
        return self.environment == "test"

    @property
    def is_strict(self) -> bool:
        return self.enforcement == EnforcementMode.strict

    @property
    def is_soft(self) -> bool:
        return self.enforcement == EnforcementMode.soft

    def _violation(
        self,
        message: str,
        error_cls: Type[TenancyGuardError] = TenancyViolation,
        **context: Any,
    ) -> None:
        if self.mode == GuardMode.off:
            return

        full_message = f"[TenancyGuard] {message}"
        if self.mode == GuardMode.throw or self.is_test:
            raise error_cls(full_message, context)

        logger.warning(f"{full_message} Context: {context}")

    def require_tenant_context(self, context: Any, request_id: Optional[str] = None) -> UUID:
        """
        Return the effective tenant id of the request context.

        Raises:
            TenantContextMissing: always, when the context carries no tenant
        """
        tenant_id = getattr(context, "tenant_id", None) if context is not None else None
        if not tenant_id:
            self._violation(
                "Tenant context required but not available",
                TenantContextMissing,
                request_id=request_id,
                has_user=context is not None,
            )
            raise TenantContextMissing("Tenant context required")
        return tenant_id

    def assert_tenant_id_on_insert(
        self, payload: Mapping[str, Any], table_name: str, request_id: Optional[str] = None
    ) -> None:
        if _payload_tenant_id(payload):
            return

        message = f"Missing tenant_id in insert to {table_name}"
        if self.is_strict:
            raise MissingTenantId(
                f"[TenancyGuard:STRICT] {message}. Blocked: strict mode forbids tenant-less writes.",
                {"table": table_name},
            )

        self._violation(message, MissingTenantId, request_id=request_id, table=table_name)

        if self.is_test:
            raise MissingTenantId(f"[TenancyGuard] {message}", {"table": table_name})

    def assert_tenant_scoped_read(
        self,
        entity_tenant_id: Any,
        expected_tenant_id: Any,
        entity_type: str,
        entity_id: Any,
        request_id: Optional[str] = None,
    ) -> None:
        entity_tenant = _tenant_id_str(entity_tenant_id)
        expected = _tenant_id_str(expected_tenant_id)

        if entity_tenant is None:
            message = f"{entity_type}:{entity_id} has NULL tenant_id - data integrity issue"
            if self.is_strict:
                raise TenancyViolation(f"[TenancyGuard:STRICT] {message}")
            self._violation(
                message, request_id=request_id, entity_type=entity_type, entity_id=str(entity_id)
            )
            return

        if entity_tenant != expected:
            raise CrossTenantViolation(
                f"[TenancyGuard] Cross-tenant read blocked: {entity_type}:{entity_id} "
                f"belongs to tenant {entity_tenant}, not {expected}",
                {"entity_type": entity_type, "entity_id": str(entity_id)},
            )

    def assert_tenant_scoped_write(
        self,
        payload: Mapping[str, Any],
        expected_tenant_id: Any,
        table_name: str,
        request_id: Optional[str] = None,
    ) -> None:
        payload_tenant = _payload_tenant_id(payload)
        expected = _tenant_id_str(expected_tenant_id)

        if payload_tenant is None:
            message = f"Write to {table_name} without tenant_id"
            if self.is_strict:
                raise MissingTenantId(f"[TenancyGuard:STRICT] {message}. Blocked.", {"table": table_name})
            self._violation(message, MissingTenantId, request_id=request_id, table=table_name)
            return

        if payload_tenant != expected:
            raise CrossTenantViolation(
                f"[TenancyGuard] Cross-tenant write blocked: payload tenant_id {payload_tenant} "
                f"does not match expected {expected} for {table_name}",
                {"table": table_name},
            )

    def assert_no_client_tenant_id(
        self,
        body: Optional[Mapping[str, Any]],
        query: Optional[Mapping[str, Any]],
        context: str,
        request_id: Optional[str] = None,
    ) -> Optional[str]:
        """
        Reject tenant ids supplied by the client.

        Raises in the test environment and in strict enforcement; otherwise
        the violation is logged and the field is ignored by the caller.

        Returns:
            Warning for the X-Tenancy-Warn header under soft enforcement,
            else None
        """
        has_body_tenant_id = bool(body) and any(key in body for key in CLIENT_TENANT_ID_KEYS)
        has_query_tenant_id = bool(query) and any(key in query for key in CLIENT_TENANT_ID_KEYS)

        if not (has_body_tenant_id or has_query_tenant_id):
            return None

        source = "body" if has_body_tenant_id else "query"
        self._violation(
            f"Client-supplied tenant_id detected in {context}. "
            "Use the effective tenant from the session instead.",
            ClientTenantIdRejected,
            request_id=request_id,
            context=context,
            source=source,
        )

        if self.is_test or self.is_strict:
            raise ClientTenantIdRejected(
                f"[TenancyGuard] Client-supplied tenant_id in {context}", {"source": source}
            )

        if self.is_soft:
            message = f"Client-supplied tenant_id in {source} ignored"
            logger.warning(f"[TenancyGuard:SOFT] {context}: {message}")
            return message
        return None

    def warn_if_workspace_visibility(self, context: str, request_id: Optional[str] = None) -> None:
        self._violation(
            f"Potential workspace-based visibility in: {context}. Use tenant_id instead.",
            request_id=request_id,
            context=context,
        )

    def assert_tenant_ownership(
        self,
        entity_tenant_id: Any,
        expected_tenant_id: Any,
        entity_type: str,
        entity_id: Any,
        request_id: Optional[str] = None,
    ) -> None:
        entity_tenant = _tenant_id_str(entity_tenant_id)
        expected = _tenant_id_str(expected_tenant_id)

        if entity_tenant != expected:
            self._violation(
                f"Cross-tenant access attempt: {entity_type} {entity_id} belongs to tenant "
                f"{entity_tenant}, not {expected}",
                CrossTenantViolation,
                request_id=request_id,
                entity_type=entity_type,
                entity_id=str(entity_id),
            )
            raise CrossTenantViolation("Forbidden: Cross-tenant access denied")

    def assert_chat_membership(
        self,
        is_member: bool,
        user_id: Any,
        thread_type: str,
        thread_id: Any,
        request_id: Optional[str] = None,
    ) -> None:
        if is_member:
            return
        self._violation(
            f"Chat membership required: user {user_id} is not a member of {thread_type} {thread_id}",
            ChatMembershipRequired,
            request_id=request_id,
            thread_type=thread_type,
        )
        raise ChatMembershipRequired("Not a member of this chat")

    def assert_tenant_scoped_room(
        self, room_name: str, expected_tenant_id: Any, request_id: Optional[str] = None
    ) -> None:
        expected = _tenant_id_str(expected_tenant_id)
        if expected is None or expected not in room_name.split(":"):
            self._violation(
                f"Socket room not tenant-scoped: {room_name} should include {expected}",
                request_id=request_id,
                room_name=room_name,
            )
