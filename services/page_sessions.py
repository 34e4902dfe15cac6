from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple
import logging
import threading
import uuid
import time

from products_api import ProductsApiClient
from services.product_sync import ProductPage

logger = logging.getLogger("page_sessions")
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
logger.setLevel(logging.INFO)

@dataclass
class PageSession:
    id: str
    products: ProductPage
    creator: ProductPage
    created_at: float = 0.0
    updated_at: float = 0.0

    def close(self) -> None:
        self.products.api.close()
        self.creator.api.close()

def _now() -> float:
    return time.time()

class PageSessionStore:
    """
    In-memory page sessions, one per visitor cookie.

    Each page of a session owns its own API client, built by `make_api` when
    the session opens and closed when the session is cleared.
    """

    def __init__(self, idle_seconds: int = 3600):
        self.idle_seconds = idle_seconds
        self._sessions: Dict[str, PageSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: Optional[str]) -> Optional[PageSession]:
        return self._sessions.get(session_id) if session_id else None

    def open(self, session_id: Optional[str], make_api: Callable[[], ProductsApiClient]) -> Tuple[PageSession, bool]:
        """Returns the visitor's session and whether it was created by this call."""
        self.clear_idle(self.idle_seconds)
        with self._lock:
            s = self._sessions.get(session_id) if session_id else None
            if s:
                s.updated_at = _now()
                return s, False
            s = PageSession(
                id=uuid.uuid4().hex,
                products=ProductPage(make_api()),
                creator=ProductPage(make_api(), with_list=False),
                created_at=_now(),
                updated_at=_now(),
            )
            self._sessions[s.id] = s
            return s, True

    def clear_idle(self, older_than_seconds: int = 3600) -> int:
        now = _now()
        with self._lock:
            to_delete = [k for k, s in self._sessions.items() if (now - s.updated_at) >= older_than_seconds]
            dropped = [self._sessions.pop(k) for k in to_delete]
        for s in dropped:
            s.close()
        if dropped:
            logger.info("Cleared %d idle page session(s)", len(dropped))
        return len(dropped)
