import logging
import threading
from typing import Callable, Dict, List

from cardduel.models import Notification
from .registry import RoomRegistry
from .session import Phase, RoomSession

logger = logging.getLogger(__name__)

Dispatch = Callable[[List[Notification]], None]


class RevealScheduler:
    """Delayed turn resolution, one pending reveal per room.

    - Runs inline in TESTING unless DEFER_REVEAL_IN_TESTS is set
    - Otherwise sleeps REVEAL_DELAY_SEC on a Socket.IO background task
    - On fire, re-validates the room before resolving: same session still
      registered, not closed, still resolving the same reveal. Anything else
      is dropped without touching state or notifying anyone
    """

    def __init__(self, app, registry: RoomRegistry, dispatch: Dispatch, socketio=None):
        self.app = app
        self.registry = registry
        self.dispatch = dispatch
        self.socketio = socketio
        self._lock = threading.Lock()
        self._pending: Dict[str, int] = {}
        registry.on_remove(self.cancel)

    @property
    def delay(self) -> float:
        return float(self.app.config.get('REVEAL_DELAY_SEC', 2))

    def schedule(self, session: RoomSession) -> None:
        code, token = session.code, session.reveal_token
        with self._lock:
            self._pending[code] = token
        logger.info("[reveal-set] code=%s token=%s delay=%ss", code, token, self.delay)

        if self.app.config.get('TESTING') and not self.app.config.get('DEFER_REVEAL_IN_TESTS'):
            self.fire(code, session, token)
        else:
            self.socketio.start_background_task(self._worker, code, session, token)

    def cancel(self, code: str) -> None:
        with self._lock:
            if self._pending.pop(code, None) is not None:
                logger.info("[reveal-cancel] code=%s", code)

    def is_pending(self, code: str) -> bool:
        with self._lock:
            return code in self._pending

    def _worker(self, code: str, session: RoomSession, token: int) -> None:
        self.socketio.sleep(self.delay)
        self.fire(code, session, token)

    def fire(self, code: str, session: RoomSession, token: int) -> bool:
        """Resolve the pending reveal if it is still current. Returns whether it ran."""
        with session.lock:
            with self._lock:
                expected = self._pending.get(code)
                if expected == token:
                    del self._pending[code]
            if (
                expected != token
                or session.closed
                or self.registry.get(code) is not session
                or session.phase is not Phase.RESOLVING
                or session.reveal_token != token
            ):
                logger.info("[reveal-abort] code=%s token=%s", code, token)
                return False
            logger.info("[reveal-fire] code=%s token=%s", code, token)
            self.dispatch(session.resolve_turn())
        return True
