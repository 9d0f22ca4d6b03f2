"""In-memory store of solving sessions."""

from __future__ import annotations

import logging
import uuid
from collections import OrderedDict

from ..solver.controller import SolveController

_LOGGER = logging.getLogger(__name__)


class SessionStore:
    """Small LRU store mapping session ids to their controllers."""

    def __init__(self, max_size: int):
        self.max_size = max(1, int(max_size))
        self._store: OrderedDict[str, SolveController] = OrderedDict()

    def __len__(self) -> int:
        return len(self._store)

    def create(self, controller: SolveController) -> str:
        session_id = uuid.uuid4().hex
        self._store[session_id] = controller
        while len(self._store) > self.max_size:
            evicted, _ = self._store.popitem(last=False)
            _LOGGER.info("Evicted session %s", evicted)
        return session_id

    def get(self, session_id: str) -> SolveController | None:
        if session_id not in self._store:
            return None
        self._store.move_to_end(session_id)
        return self._store[session_id]

    def delete(self, session_id: str) -> bool:
        return self._store.pop(session_id, None) is not None

    def clear(self) -> None:
        self._store.clear()
