"""
Transition Host

The stage's declarative transition primitive. Given a handle and a target
frame it interpolates position and scale on the FrameClock with the requested
easing, lands exactly on the target and then fires "transitionend" on the
handle.

One transition per handle: starting a new one replaces the running one.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from flyfx.engine.frame_clock import FrameClock
from flyfx.engine.handle import TransitionTarget
from flyfx.models.enums import LogCategory
from flyfx.models.frame import MotionFrame
from flyfx.models.transition import TransitionConfig, easing_name
from flyfx.stage.transform import format_number
from flyfx.utils.logger import get_logger

log = get_logger().for_category(LogCategory.TRANSITION)


@dataclass
class HostTransition:
    """One running interpolation"""
    handle: TransitionTarget
    origin: MotionFrame
    target: MotionFrame
    config: TransitionConfig
    start_time: Optional[float] = None
    frames: int = 0
    finished: bool = False
    cancelled: bool = False

    def progress_at(self, timestamp: float) -> float:
        # first frame pins the start
        if self.start_time is None:
            self.start_time = timestamp
        return min(1.0, (timestamp - self.start_time) / self.config.duration)

    def frame_at(self, progress: float) -> MotionFrame:
        if progress >= 1.0:
            return self.target
        return self.origin.lerp(self.target, self.config.ease_function(progress))


class TransitionHost:
    """
    Interpolates handles towards target frames.

    Example:
        host = TransitionHost(clock)
        host.animate(proxy, MotionFrame(Point(300, 0), 0.1), TransitionConfig(0.4, ease))
    """

    def __init__(self, clock: FrameClock):
        self.clock = clock
        self._active: Dict[int, HostTransition] = {}

    def is_active(self, handle: Optional[TransitionTarget] = None) -> bool:
        if handle is None:
            return bool(self._active)
        return id(handle) in self._active

    def animate(
        self,
        handle: TransitionTarget,
        target: MotionFrame,
        config: TransitionConfig,
    ) -> Optional[HostTransition]:
        """
        Start interpolating handle towards target.

        Returns:
            The running HostTransition, or None when the handle already shows
            the target (no transitionend will follow)
        """
        origin = handle.current_frame()
        if origin.position == target.position and origin.scale == target.scale:
            log.debug("Target equals current frame, nothing to interpolate")
            return None

        previous = self._active.pop(id(handle), None)
        if previous is not None:
            previous.cancelled = True
            log.debug("Replacing running transition")

        transition = HostTransition(handle, origin, target, config)
        self._active[id(handle)] = transition
        easing = easing_name(config.ease_function)
        handle.set_transition(f"transform {format_number(config.duration)}s {easing}")
        self.clock.request_frame(lambda ts: self._step(transition, ts))

        log.debug(
            "Transition started",
            duration=f"{config.duration}s",
            easing=easing,
            to=target.position.to_tuple(),
            scale=target.scale,
        )
        return transition

    def _step(self, transition: HostTransition, timestamp: float) -> None:
        if transition.cancelled:
            return

        progress = transition.progress_at(timestamp)
        frame = transition.frame_at(progress)
        transition.handle.set_position(frame.position)
        transition.handle.set_scale(frame.scale)
        transition.frames += 1

        if progress < 1.0:
            self.clock.request_frame(lambda ts: self._step(transition, ts))
            return

        transition.finished = True
        self._active.pop(id(transition.handle), None)
        log.debug("Transition finished", frames=transition.frames)
        transition.handle.dispatch_transition_end()
