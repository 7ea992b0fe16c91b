"""In-memory progress registry for long-running analyses.

Clients poll ``get_progress`` while the pipeline reports each stage.
Sessions are terminal once completed (successfully or with an error) and
are removed either by a one-shot timer armed at completion (grace period
for the final poll) or by the periodic ``cleanup`` sweep that drops any
session older than the max age, whatever its state.

All methods run on the event loop thread; the registry is process-local.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Callable, Optional

from tenant_research.domain.errors import SessionNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_GRACE_SECONDS = 2 * 60
DEFAULT_MAX_AGE_SECONDS = 30 * 60

STEPS_WITH_AI_SCORING = 4
STEPS_WITHOUT_AI_SCORING = 3


@dataclass
class SessionProgress:
    total_steps: int
    step: int = 0
    current_task: str = "Initializing..."
    details: str = ""
    completed: bool = False
    error: Optional[str] = None
    result: Any = None

    def snapshot(self) -> dict:
        return {
            "step": self.step,
            "total_steps": self.total_steps,
            "current_task": self.current_task,
            "details": self.details,
            "completed": self.completed,
            "error": self.error,
            "result": self.result,
        }


@dataclass
class ProgressSession:
    session_id: str
    created_at: float
    progress: SessionProgress
    cleanup_handle: Optional[asyncio.TimerHandle] = field(default=None, repr=False)


class ProgressTracker:
    """Session registry keyed by caller-supplied session id.

    Args:
        grace_seconds: Delay between completion/error and automatic removal.
        max_age_seconds: Age beyond which ``cleanup`` removes a session.
        clock: Monotonic time source in seconds.
    """

    def __init__(
        self,
        grace_seconds: float = DEFAULT_GRACE_SECONDS,
        max_age_seconds: float = DEFAULT_MAX_AGE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.grace_seconds = grace_seconds
        self.max_age_seconds = max_age_seconds
        self._clock = clock
        self._sessions: dict[str, ProgressSession] = {}

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def create_session(self, session_id: str, use_ai_scoring: bool = False) -> SessionProgress:
        """Register a session; an existing entry with the same id is replaced."""
        if session_id in self._sessions:
            logger.warning("Progress session %s already exists, replacing it", session_id)
            self.remove_session(session_id)

        total_steps = STEPS_WITH_AI_SCORING if use_ai_scoring else STEPS_WITHOUT_AI_SCORING
        session = ProgressSession(
            session_id=session_id,
            created_at=self._clock(),
            progress=SessionProgress(total_steps=total_steps),
        )
        self._sessions[session_id] = session
        logger.info("Progress session created: %s with %d steps", session_id, total_steps)
        return session.progress

    def update_progress(
        self,
        session_id: str,
        step: int,
        current_task: str,
        details: str = "",
    ) -> None:
        """Record the stage about to run. Never marks the session completed."""
        session = self._sessions.get(session_id)
        if session is None:
            logger.warning("Session not found for progress update: %s", session_id)
            return

        progress = session.progress
        if progress.completed:
            logger.warning("Ignoring progress update for completed session %s", session_id)
            return
        if step < progress.step:
            logger.warning(
                "Ignoring backwards progress update for %s: step %d < %d",
                session_id,
                step,
                progress.step,
            )
            return

        progress.step = min(step, progress.total_steps)
        progress.current_task = current_task
        progress.details = details
        logger.info(
            "Progress updated for %s: step %d/%d - %s",
            session_id,
            progress.step,
            progress.total_steps,
            current_task,
        )

    def complete_session(self, session_id: str, result: Any = None) -> None:
        session = self._sessions.get(session_id)
        if session is None:
            return
        progress = session.progress
        if progress.completed:
            logger.warning("Session %s already completed, ignoring completion", session_id)
            return

        progress.completed = True
        progress.step = progress.total_steps
        progress.current_task = "Analysis complete"
        progress.details = "All AI calls were processed"
        progress.result = result

        logger.info("Progress session completed: %s", session_id)
        self._arm_cleanup(session)

    def error_session(self, session_id: str, error: str) -> None:
        session = self._sessions.get(session_id)
        if session is None:
            return
        progress = session.progress
        if progress.completed:
            logger.warning("Session %s already completed, ignoring error: %s", session_id, error)
            return

        progress.error = error
        progress.current_task = "Analysis failed"
        progress.completed = True

        logger.error("Progress session failed: %s - %s", session_id, error)
        self._arm_cleanup(session)

    def remove_session(self, session_id: str) -> bool:
        """Cancel any pending timer and delete the session. Idempotent."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        if session.cleanup_handle is not None:
            session.cleanup_handle.cancel()
        logger.info("Progress session removed: %s", session_id)
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_progress(self, session_id: str) -> Optional[dict]:
        session = self._sessions.get(session_id)
        return session.progress.snapshot() if session else None

    def require_progress(self, session_id: str) -> dict:
        snapshot = self.get_progress(session_id)
        if snapshot is None:
            raise SessionNotFoundError(session_id)
        return snapshot

    def get_stats(self) -> dict:
        return {
            "active_sessions": len(self._sessions),
            "sessions": list(self._sessions),
        }

    # ------------------------------------------------------------------
    # Expiry
    # ------------------------------------------------------------------

    def cleanup(self) -> int:
        """Remove every session older than the max age. Returns the count."""
        now = self._clock()
        expired = [
            sid for sid, session in self._sessions.items()
            if now - session.created_at > self.max_age_seconds
        ]
        for sid in expired:
            age_minutes = int((now - self._sessions[sid].created_at) / 60)
            self.remove_session(sid)
            logger.warning(
                "Emergency cleanup of expired session: %s (created %d minutes ago)",
                sid,
                age_minutes,
            )

        if expired:
            logger.warning(
                "Emergency cleanup removed %d orphaned sessions", len(expired)
            )
        else:
            logger.debug("Cleanup check: %d active sessions", len(self._sessions))
        return len(expired)

    def _arm_cleanup(self, session: ProgressSession) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Outside the event loop only the periodic sweep can remove it
            logger.debug("No running loop, session %s left to the sweep", session.session_id)
            return
        if session.cleanup_handle is not None:
            session.cleanup_handle.cancel()
        session.cleanup_handle = loop.call_later(
            self.grace_seconds, self.remove_session, session.session_id
        )


async def session_sweep_loop(tracker: ProgressTracker, interval_seconds: float) -> None:
    """Run ``tracker.cleanup`` every *interval_seconds* for the life of the process."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            removed = tracker.cleanup()
            if removed:
                logger.info("Session sweep: removed %d sessions", removed)
        except Exception as e:
            logger.error("Session sweep error: %s", e)


@lru_cache
def get_progress_tracker() -> ProgressTracker:
    """Return the process-wide tracker configured from settings."""
    from tenant_research.app.config import get_settings

    settings = get_settings()
    return ProgressTracker(
        grace_seconds=settings.session_grace_seconds,
        max_age_seconds=settings.session_max_age_seconds,
    )
