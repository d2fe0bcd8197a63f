import time
from typing import Callable, Dict, Optional, Tuple
from uuid import UUID

from src.app.services.workspace_cache import IWorkspaceCache


class InMemoryWorkspaceCache(IWorkspaceCache):
    """Process-local TTL map. Entries expire ttl_seconds after being set."""

    def __init__(self, ttl_seconds: float = 60, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[UUID, Tuple[UUID, float]] = {}

    def get(self, tenant_id: UUID) -> Optional[UUID]:
        entry = self._entries.get(tenant_id)
        if entry is None:
            return None
        workspace_id, expires_at = entry
        if self._clock() >= expires_at:
            self._entries.pop(tenant_id, None)
            return None
        return workspace_id

    def set(self, tenant_id: UUID, workspace_id: UUID) -> None:
        self._entries[tenant_id] = (workspace_id, self._clock() + self.ttl_seconds)

    def invalidate(self, tenant_id: Optional[UUID] = None) -> None:
        if tenant_id is None:
            self._entries.clear()
        else:
            self._entries.pop(tenant_id, None)

    def __len__(self) -> int:
        return len(self._entries)
