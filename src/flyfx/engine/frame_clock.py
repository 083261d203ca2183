"""
FrameClock - host frame clock driving every scheduler and host transition.

Architecture:
  - One-shot frame callbacks (request_frame), run once on the next tick
  - One-shot timers (call_later), run on the first tick at or after their due time
  - tick() runs one host frame: due timers first, then frame callbacks
  - An asyncio render loop calls tick() at the target FPS

Callbacks requested while a tick is running are deferred to the next tick,
so a scheduler that re-requests itself gets exactly one call per frame.
Timestamps are seconds from the time source and never decrease.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import time
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Tuple

from flyfx.models.enums import LogCategory
from flyfx.utils.logger import get_logger

log = get_logger().for_category(LogCategory.SYSTEM)

FrameCallback = Callable[[float], None]
TimerCallback = Callable[[], None]


class ManualTimeSource:
    """
    Time source advanced explicitly, for deterministic frame stepping
    (tests, offline frame export).
    """

    def __init__(self, start: float = 0.0):
        self.value = start

    def advance(self, seconds: float) -> float:
        self.value += seconds
        return self.value

    def __call__(self) -> float:
        return self.value


class FrameClock:
    """
    Host frame clock.

    Manages:
    - Pending frame callbacks (ordered by request)
    - Timer heap (ordered by due time, then by registration)
    - Render loop lifecycle (start/stop)
    - Basic metrics (ticks, actual FPS, callback errors)
    """

    def __init__(self, fps: int = 60, time_source: Callable[[], float] = time.perf_counter):
        """
        Initialize FrameClock.

        Args:
            fps: Target tick frequency for the render loop (1-240, default 60)
            time_source: Returns the current time in seconds
        """
        self.fps = max(1, min(fps, 240))
        self.time_source = time_source

        self._handles = itertools.count(1)
        self._frame_callbacks: Dict[int, FrameCallback] = {}
        self._timers: List[Tuple[float, int, TimerCallback]] = []
        self._cancelled_timers: set = set()

        # Runtime state
        self.running = False
        self.render_task: Optional[asyncio.Task] = None
        self.current_time: Optional[float] = None

        # Metrics
        self.ticks = 0
        self.callback_errors = 0
        self.tick_times: Deque[float] = deque(maxlen=300)

    # === Scheduling API ===

    def now(self) -> float:
        return self.time_source()

    def request_frame(self, callback: FrameCallback) -> int:
        """Run callback(timestamp) once, on the next tick. Returns a handle."""
        handle = next(self._handles)
        self._frame_callbacks[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> bool:
        return self._frame_callbacks.pop(handle, None) is not None

    def call_later(self, delay: float, callback: TimerCallback) -> int:
        """Run callback() once, on the first tick at or after now + delay."""
        handle = next(self._handles)
        heapq.heappush(self._timers, (self.now() + max(0.0, delay), handle, callback))
        return handle

    def cancel_timer(self, handle: int) -> bool:
        """Cancel a pending timer. Returns False if it already ran or is unknown."""
        if handle in self._cancelled_timers or all(h != handle for _, h, _ in self._timers):
            return False
        self._cancelled_timers.add(handle)
        return True

    @property
    def pending_frames(self) -> int:
        return len(self._frame_callbacks)

    @property
    def pending_timers(self) -> int:
        return sum(1 for _, h, _ in self._timers if h not in self._cancelled_timers)

    def has_pending_work(self) -> bool:
        return bool(self._frame_callbacks) or self.pending_timers > 0

    # === Frame execution ===

    def tick(self, timestamp: Optional[float] = None) -> int:
        """
        Run one host frame.

        Args:
            timestamp: Frame time in seconds (defaults to time_source())

        Returns:
            Number of callbacks executed
        """
        if timestamp is None:
            timestamp = self.now()
        if self.current_time is not None and timestamp < self.current_time:
            timestamp = self.current_time
        self.current_time = timestamp

        executed = 0

        while self._timers and self._timers[0][0] <= timestamp:
            _, handle, callback = heapq.heappop(self._timers)
            if handle in self._cancelled_timers:
                self._cancelled_timers.discard(handle)
                continue
            self._run_guarded(callback)
            executed += 1

        callbacks = self._frame_callbacks
        self._frame_callbacks = {}
        for callback in callbacks.values():
            self._run_guarded(callback, timestamp)
            executed += 1

        self.ticks += 1
        self.tick_times.append(timestamp)
        return executed

    def _run_guarded(self, callback: Callable, *args) -> None:
        try:
            callback(*args)
        except Exception as e:
            self.callback_errors += 1
            log.error(f"Frame callback error: {e}", exc_info=True)

    # === Lifecycle ===

    async def start(self) -> None:
        """Start the render loop."""
        if self.running:
            log.warn("FrameClock already running")
            return

        self.running = True
        self.render_task = asyncio.create_task(self._render_loop())
        log.info(f"FrameClock render loop started @ {self.fps} FPS")

    async def stop(self) -> None:
        """Stop the render loop."""
        if not self.running:
            return
        self.running = False
        if self.render_task:
            self.render_task.cancel()
            try:
                await self.render_task
            except asyncio.CancelledError:
                pass
            self.render_task = None

        log.info("FrameClock stopped", ticks=self.ticks, callback_errors=self.callback_errors)

    async def _render_loop(self) -> None:
        """Main loop @ target FPS."""
        frame_delay = 1.0 / self.fps
        while self.running:
            self.tick()
            await asyncio.sleep(frame_delay)

    async def run_until_idle(self, timeout: Optional[float] = None) -> bool:
        """
        Tick at the target FPS until no frame callbacks or timers remain.

        For callers that don't run the render loop. Returns False on timeout.
        """
        frame_delay = 1.0 / self.fps
        deadline = None if timeout is None else self.now() + timeout
        while self.has_pending_work():
            if deadline is not None and self.now() >= deadline:
                return False
            self.tick()
            await asyncio.sleep(frame_delay)
        return True

    # === Metrics ===

    def get_actual_fps(self) -> float:
        """Measured tick rate over recent ticks."""
        if len(self.tick_times) < 2:
            return 0.0
        duration = self.tick_times[-1] - self.tick_times[0]
        if duration <= 0:
            return 0.0
        return (len(self.tick_times) - 1) / duration

    def __repr__(self) -> str:
        return (
            f"FrameClock(fps={self.get_actual_fps():.1f}/{self.fps}, "
            f"ticks={self.ticks}, pending={self.pending_frames}+{self.pending_timers})"
        )
