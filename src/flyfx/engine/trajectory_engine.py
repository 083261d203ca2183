"""
Trajectory Engine

Builds one AnimationSession per transit, picks the scheduling strategy,
wires the completion dispatcher to the visual handle and keeps track of
what is still running.
"""

import asyncio
from typing import Callable, Dict, Optional

from flyfx.engine.completion import CompletionDispatcher
from flyfx.engine.frame_clock import FrameClock
from flyfx.engine.handle import TransitionDriver, VisualHandle
from flyfx.engine.scheduler import (
    DeclarativeScheduler,
    ImperativeScheduler,
    MotionScheduler,
    select_strategy,
)
from flyfx.errors import ConfigurationError
from flyfx.models.enums import LogCategory, SchedulingStrategy
from flyfx.models.motion import AnimationSession, MotionConfig
from flyfx.models.transition import EaseFunction
from flyfx.utils.logger import get_logger

log = get_logger().for_category(LogCategory.ENGINE)


class TrajectoryEngine:
    """
    Entry point of the core.

    Example:
        clock = FrameClock(fps=60)
        engine = TrajectoryEngine(clock, TransitionHost(clock))
        session = engine.launch(config, handle)
        await clock.start()
        await engine.wait_for_idle()
    """

    def __init__(self, clock: FrameClock, transition_driver: Optional[TransitionDriver] = None):
        self.clock = clock
        self.transition_driver = transition_driver

        # running schedulers: session id → scheduler
        self.schedulers: Dict[int, MotionScheduler] = {}
        self.completed_sessions = 0

    # ============================================================
    # Core control
    # ============================================================

    def launch(
        self,
        config: MotionConfig,
        handle: VisualHandle,
        ease_function: Optional[EaseFunction] = None,
        on_disposed: Optional[Callable[[], None]] = None,
    ) -> AnimationSession:
        """
        Start a transit.

        Args:
            config: Validated motion parameters
            handle: Visual handle receiving the computed frames
            ease_function: Host easing for declarative transits
            on_disposed: Extra cleanup run right after the handle is disposed

        Raises:
            ConfigurationError: before anything is scheduled (the handle is
                disposed, so no transient visual is left behind)
        """
        if handle is None:
            raise ConfigurationError("A visual handle is required")

        session = AnimationSession(config)
        strategy = select_strategy(config)

        def cleanup():
            try:
                handle.dispose()
                if on_disposed is not None:
                    on_disposed()
            finally:
                self.schedulers.pop(session.id, None)
                self.completed_sessions += 1

        dispatcher = CompletionDispatcher(session, callback=config.on_complete, cleanup=cleanup)

        try:
            if strategy is SchedulingStrategy.IMPERATIVE:
                scheduler: MotionScheduler = ImperativeScheduler(session, handle, self.clock, dispatcher)
            else:
                scheduler = DeclarativeScheduler(
                    session, handle, self.clock, dispatcher,
                    driver=self.transition_driver,
                    ease_function=ease_function,
                )
            self.schedulers[session.id] = scheduler
            scheduler.start()
        except Exception as ex:
            # the handle belongs to the engine once launch() is called
            self.schedulers.pop(session.id, None)
            handle.dispose()
            log.error(f"Launch failed: {ex}", session=session.id, strategy=strategy.name)
            raise

        log.info(
            f"Launched session {session.id}",
            strategy=strategy.name,
            duration=f"{config.duration}s",
            active=len(self.schedulers),
        )
        return session

    # ------------------------------------------------------------
    # Runtime helpers
    # ------------------------------------------------------------

    def is_running(self, session_id: Optional[int] = None) -> bool:
        """
        If session_id is None → check whether ANY session is running.
        Otherwise → check that one session.
        """
        if session_id is not None:
            return session_id in self.schedulers
        return bool(self.schedulers)

    def get_scheduler(self, session_id: int) -> Optional[MotionScheduler]:
        return self.schedulers.get(session_id)

    async def wait_for_idle(self, poll_interval: float = 0.01) -> None:
        """Wait until every launched session has completed"""
        while self.schedulers:
            await asyncio.sleep(poll_interval)
