"""
Animation Schedulers

Two implementations of one MotionScheduler capability:

  DeclarativeScheduler  computes the final {position, scale} once and lets the
                        host transition primitive interpolate; completes on
                        the host's transition-end signal (or a timer when
                        there is nothing to interpolate)
  ImperativeScheduler   samples trajectory, scale curve and heading on every
                        frame tick from elapsed time; completes on the tick
                        that reaches the full duration

select_strategy() picks one from the MotionConfig: acceleration or heading
tracking needs per-frame integration, everything else can be delegated.
"""

from abc import ABC, abstractmethod
from typing import Optional

from flyfx.engine.completion import CompletionDispatcher
from flyfx.engine.frame_clock import FrameClock
from flyfx.engine.handle import TransitionDriver, TransitionTarget, VisualHandle
from flyfx.engine.rotation import RotationEstimator
from flyfx.engine.scale_curve import ScaleCurve
from flyfx.engine.trajectory import TrajectoryModel
from flyfx.errors import ConfigurationError
from flyfx.models.enums import LogCategory, SchedulingStrategy, SessionPhase
from flyfx.models.frame import MotionFrame
from flyfx.models.motion import AnimationSession, MotionConfig
from flyfx.models.transition import EaseFunction, TransitionConfig, ease_linear
from flyfx.utils.logger import get_logger

log = get_logger().for_category(LogCategory.SCHEDULER)


def select_strategy(config: MotionConfig) -> SchedulingStrategy:
    """Imperative when the transit needs acceleration or heading, else declarative"""
    if config.requires_integration:
        return SchedulingStrategy.IMPERATIVE
    return SchedulingStrategy.DECLARATIVE


class MotionScheduler(ABC):
    """
    Drives one AnimationSession from IDLE to COMPLETED.

    Subclasses implement _start(); the base class owns the shared state
    machine, the motion models and the push to the visual handle.
    """

    strategy: SchedulingStrategy

    def __init__(
        self,
        session: AnimationSession,
        handle: VisualHandle,
        clock: FrameClock,
        dispatcher: CompletionDispatcher,
    ):
        if handle is None:
            raise ConfigurationError("A visual handle is required", details={"session": session.id})

        self.session = session
        self.config = session.config
        self.handle = handle
        self.clock = clock
        self.dispatcher = dispatcher

        self.trajectory = TrajectoryModel(self.config)
        self.scale_curve = ScaleCurve(self.config.target_scale)

    @property
    def phase(self) -> SessionPhase:
        return self.session.phase

    def start(self) -> None:
        """IDLE → RUNNING and arm the first completion source"""
        self.session.begin()
        log.debug(
            f"{self.strategy.name.lower()} session started",
            session=self.session.id,
            duration=f"{self.config.duration}s",
            x=self.trajectory.x.model.name,
            y=self.trajectory.y.model.name,
        )
        self._start()

    @abstractmethod
    def _start(self) -> None:
        ...

    def _push(self, frame: MotionFrame) -> None:
        self.handle.set_position(frame.position)
        self.handle.set_scale(frame.scale)
        if frame.rotation_deg is not None:
            self.handle.set_rotation(frame.rotation_deg)
        self.session.frames += 1

    def __repr__(self) -> str:
        return f"{type(self).__name__}(session={self.session.id}, phase={self.phase.name})"


class ImperativeScheduler(MotionScheduler):
    """
    Explicit frame-by-frame integration.

    Every tick is a pure recomputation from elapsed time, so a late or missed
    tick corrects itself on the next one.
    """

    strategy = SchedulingStrategy.IMPERATIVE

    def __init__(
        self,
        session: AnimationSession,
        handle: VisualHandle,
        clock: FrameClock,
        dispatcher: CompletionDispatcher,
    ):
        super().__init__(session, handle, clock, dispatcher)
        self.rotation: Optional[RotationEstimator] = None
        if self.config.track_heading:
            self.rotation = RotationEstimator(self.trajectory, self.config.base_rotation_deg)
        self._frame_handle: Optional[int] = None

    def _start(self) -> None:
        self._frame_handle = self.clock.request_frame(self.on_tick)

    def sample(self, elapsed: float) -> MotionFrame:
        """Position, scale and (optionally) rotation at a clamped elapsed time"""
        progress = elapsed / self.config.duration
        return MotionFrame(
            position=self.trajectory.position(elapsed),
            scale=self.scale_curve.scale(progress),
            rotation_deg=self.rotation.heading(elapsed) if self.rotation else None,
            elapsed=elapsed,
        )

    def on_tick(self, timestamp: float) -> None:
        if not self.session.is_running:
            log.debug("Tick after completion ignored", session=self.session.id)
            return

        elapsed = self.session.elapsed_at(timestamp)
        self._push(self.sample(elapsed))

        if elapsed < self.config.duration:
            self._frame_handle = self.clock.request_frame(self.on_tick)
            return

        self._frame_handle = None
        self.dispatcher.complete()


class DeclarativeScheduler(MotionScheduler):
    """
    Delegates interpolation to the host transition primitive.

    Only the final {position, scale} is computed; rotation is not supported.
    """

    strategy = SchedulingStrategy.DECLARATIVE

    def __init__(
        self,
        session: AnimationSession,
        handle: TransitionTarget,
        clock: FrameClock,
        dispatcher: CompletionDispatcher,
        driver: TransitionDriver,
        ease_function: Optional[EaseFunction] = None,
    ):
        if session.config.track_heading:
            raise ConfigurationError(
                "Declarative scheduling cannot track heading",
                details={"session": session.id},
            )
        if driver is None:
            raise ConfigurationError(
                "Declarative scheduling needs a transition driver",
                details={"session": session.id},
            )
        if handle is not None and not isinstance(handle, TransitionTarget):
            raise ConfigurationError(
                "Declarative scheduling needs a handle with transition hooks",
                details={"session": session.id, "handle": type(handle).__name__},
            )
        super().__init__(session, handle, clock, dispatcher)
        self.driver = driver
        self.ease_function = ease_function or ease_linear
        self.transition = None
        self._timer: Optional[int] = None

    def target_frame(self) -> MotionFrame:
        return MotionFrame(
            position=self.trajectory.final_position(),
            scale=self.config.target_scale,
            elapsed=self.config.duration,
        )

    def _start(self) -> None:
        self.session.start_clock_time = self.clock.now()
        self.handle.add_transition_end_listener(self.dispatcher.complete)

        self.transition = self.driver.animate(
            self.handle,
            self.target_frame(),
            TransitionConfig(self.config.duration, self.ease_function),
        )

        if self.transition is None:
            # Nothing to interpolate: completion still honours the duration
            log.debug("No host transition, completing on timer", session=self.session.id)
            self._timer = self.clock.call_later(self.config.duration, self.dispatcher.complete)
