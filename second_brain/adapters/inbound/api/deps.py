"""FastAPI dependency injection for Second Brain."""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import Header, HTTPException

from ....composition.container import Container, get_container
from ....core.domain import GateState
from ....core.services import UploadGate

logger = logging.getLogger(__name__)


class GateRegistry:
    """One upload gate per owner; owners never share a gate.

    Gates are only kept while a request is using them or while an upload
    waits for a decision. An idle gate holds no state worth keeping and is
    dropped when its last request finishes.
    """

    def __init__(self, container: Container) -> None:
        self.container = container
        self._gates: dict[str, UploadGate] = {}
        self._users: dict[str, int] = {}
        self._lock = threading.Lock()

    def owners(self) -> list[str]:
        """Owners whose gate is currently held."""
        with self._lock:
            return list(self._gates)

    @contextmanager
    def checkout(self, owner_id: str) -> Iterator[UploadGate]:
        """Lend the owner's gate to one request."""
        with self._lock:
            gate = self._gates.get(owner_id)
            if gate is None:
                logger.debug("Creating upload gate for owner %s", owner_id)
                gate = self.container.upload_gate(owner_id)
                self._gates[owner_id] = gate
            self._users[owner_id] = self._users.get(owner_id, 0) + 1
        try:
            yield gate
        finally:
            with self._lock:
                self._users[owner_id] -= 1
                if self._users[owner_id] == 0 and gate.state is GateState.IDLE:
                    del self._users[owner_id]
                    del self._gates[owner_id]
                    logger.debug("Dropped idle upload gate for owner %s", owner_id)


_registry: GateRegistry | None = None
_registry_lock = threading.Lock()


def get_gate_registry() -> GateRegistry:
    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = GateRegistry(get_container())
        return _registry


def get_owner_id(x_user_id: str | None = Header(default=None)) -> str:
    """Owner id supplied by the authenticating proxy."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="X-User-Id header is required")
    return x_user_id.strip()
