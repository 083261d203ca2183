"""
Completion Dispatcher

Single exit point of a transit. Whatever triggers completion (last imperative
tick, host transitionend, timer, or several of those at once), the
application callback runs at most once and the transient visual is disposed
exactly once.
"""

from typing import Callable, Optional

from flyfx.models.enums import LogCategory
from flyfx.models.motion import AnimationSession
from flyfx.utils.logger import get_logger

log = get_logger().for_category(LogCategory.COMPLETION)


class CompletionDispatcher:
    """
    Exactly-once completion for one AnimationSession

    Flow of the first complete() call:
        1. Session → COMPLETED
        2. callback() inside a guard (exceptions logged, never propagated)
        3. cleanup() (handle disposal), unconditionally

    Every later call is a no-op.
    """

    def __init__(
        self,
        session: AnimationSession,
        callback: Optional[Callable[[], None]] = None,
        cleanup: Optional[Callable[[], None]] = None,
    ):
        self.session = session
        self.callback = callback
        self.cleanup = cleanup
        self._dispatched = False
        self.duplicate_calls = 0

    @property
    def dispatched(self) -> bool:
        return self._dispatched

    def complete(self, *_event) -> bool:
        """
        Complete the session.

        Accepts and ignores positional arguments so it can be registered
        directly as an event listener or timer callback.

        Returns:
            True for the call that dispatched, False for every duplicate
        """
        if self._dispatched:
            self.duplicate_calls += 1
            log.debug(
                "Duplicate completion ignored",
                session=self.session.id,
                duplicates=self.duplicate_calls,
            )
            return False

        self._dispatched = True
        self.session.finish()

        try:
            if self.callback is not None:
                self.callback()
        except Exception as e:
            log.error(
                f"Error in completion callback: {e}",
                session=self.session.id,
                exc_info=True,
            )
        finally:
            if self.cleanup is not None:
                self.cleanup()

        log.debug("Session completed", session=self.session.id, frames=self.session.frames)
        return True
