"""In-memory preview sessions.

A session is one mounted preview: a ``PreviewRenderer`` plus its transient
interaction state. Sessions live only in process memory. They are discarded
when closed, when left idle past the TTL, or when the store is full and a
new session needs room (oldest first).
"""

import logging
import time
import uuid
from collections.abc import Callable
from typing import Any

from cachetools import TTLCache

from menu_render_service.models.menu_models import MenuProject
from menu_render_service.models.preview_models import (
    PreviewEvent,
    PreviewResponse,
    TransformModel,
)
from menu_render_service.observability.metrics import record_preview_session_change
from menu_render_service.rendering.preview_renderer import PreviewRenderer

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 1000
DEFAULT_SESSION_TTL_SECONDS = 1800.0


class SessionCache(TTLCache):
    """TTL cache reporting every eviction to the active-sessions gauge."""

    def popitem(self) -> tuple[str, PreviewRenderer]:
        key, value = super().popitem()
        record_preview_session_change(-1)
        logger.info(f"Evicted preview session {key} to make room")
        return key, value

    def expire(self, now: Any = None) -> list[tuple[str, PreviewRenderer]]:
        expired = super().expire(now)
        for key, _ in expired:
            record_preview_session_change(-1)
            logger.info(f"Expired idle preview session {key}")
        return expired


class PreviewSessionStore:
    """Registry of open preview sessions keyed by session id.

    Every lookup refreshes the session's idle timer.
    """

    def __init__(
        self,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        idle_ttl_seconds: float = DEFAULT_SESSION_TTL_SECONDS,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the store.

        Args:
            max_sessions: Sessions kept before the oldest is evicted
            idle_ttl_seconds: Seconds a session may go untouched before it expires
            timer: Clock used for idle expiry
        """
        self.sessions: SessionCache = SessionCache(
            maxsize=max_sessions, ttl=idle_ttl_seconds, timer=timer
        )

    def _lookup(self, session_id: str) -> PreviewRenderer | None:
        renderer = self.sessions.get(session_id)
        if renderer is not None:
            # Re-insert to restart the idle timer
            self.sessions[session_id] = renderer
        return renderer

    def create(self, project: MenuProject, show_currency_flag: bool = True) -> str:
        """Open a session for ``project`` and return its id."""
        session_id = uuid.uuid4().hex
        self.sessions[session_id] = PreviewRenderer(project, show_currency_flag)
        record_preview_session_change(1)
        logger.info(f"Opened preview session {session_id} for project {project.id}")
        return session_id

    def get(self, session_id: str) -> PreviewRenderer | None:
        return self._lookup(session_id)

    def replace_project(
        self, session_id: str, project: MenuProject, show_currency_flag: bool | None = None
    ) -> PreviewRenderer | None:
        """Swap the session's project, keeping its transient state.

        Returns:
            The session's renderer, None if the session does not exist
        """
        renderer = self._lookup(session_id)
        if renderer is None:
            return None
        renderer.update(project, show_currency_flag)
        return renderer

    def dispatch(self, session_id: str, event: PreviewEvent) -> bool | None:
        """Apply one event to a session.

        Returns:
            Whether the event was handled, None if the session does not exist
        """
        renderer = self._lookup(session_id)
        if renderer is None:
            return None
        return renderer.handle_event(event)

    def close(self, session_id: str) -> bool:
        if self.sessions.pop(session_id, None) is None:
            return False
        record_preview_session_change(-1)
        logger.info(f"Closed preview session {session_id}")
        return True

    def describe(self, session_id: str, handled: bool | None = None) -> PreviewResponse | None:
        """Render a session and its transient state.

        Returns:
            PreviewResponse, None if the session does not exist
        """
        renderer = self._lookup(session_id)
        if renderer is None:
            return None

        interaction = renderer.interaction
        return PreviewResponse(
            session_id=session_id,
            state=interaction.state.value,
            selected_item_id=interaction.selected_item_id,
            zoom=interaction.zoom,
            transforms={
                item_id: TransformModel(x=t.x, y=t.y, scale=t.scale)
                for item_id, t in interaction.transforms.items()
            },
            html=renderer.render(),
            handled=handled,
        )
