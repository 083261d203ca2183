import pytest

from flyfx.engine.frame_clock import FrameClock, ManualTimeSource
from flyfx.engine.trajectory_engine import TrajectoryEngine
from flyfx.models.frame import MotionFrame
from flyfx.models.geometry import Point, Rect
from flyfx.services.effect_service import EffectService
from flyfx.stage.stage import Stage
from flyfx.stage.transition_host import TransitionHost
from flyfx.utils.logger import configure_logger, get_logger


START_RECT = Rect(100, 100, 100, 100)
TARGET_RECT = Rect(300, 300, 100, 100)


@pytest.fixture
def time_source():
    return ManualTimeSource(start=10.0)


@pytest.fixture
def clock(time_source):
    return FrameClock(fps=60, time_source=time_source)


@pytest.fixture
def advance(clock, time_source):
    """
    Move time forward and run one tick at the new time.

        advance(0.5)            # one frame half a second later
        advance(1.0, frames=60) # sixty evenly spaced frames
    """
    def _advance(seconds: float = 0.0, frames: int = 1):
        step = seconds / frames
        for _ in range(frames):
            time_source.advance(step)
            clock.tick()
    return _advance


@pytest.fixture
def stage():
    """Stage with the standard 'start' and 'target' boxes"""
    stage = Stage(1280, 720)
    stage.create_element("start", START_RECT)
    stage.create_element("target", TARGET_RECT)
    return stage


@pytest.fixture
def transition_host(clock):
    return TransitionHost(clock)


@pytest.fixture
def engine(clock, transition_host):
    return TrajectoryEngine(clock, transition_host)


@pytest.fixture
def effect_service(stage, engine):
    return EffectService(stage, engine)


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    configure_logger()
    get_logger().set_sink(None)


@pytest.fixture
def log_records():
    """Capture log records as (level, category, message) tuples"""
    records = []
    logger = get_logger()
    logger.set_sink(lambda ts, level, category, message: records.append((level, category, message)))
    yield records
    logger.set_sink(None)


class RecordingHandle:
    """Handle with transition hooks that records every push"""

    def __init__(self, start: Point = Point(150, 150)):
        self.position = start
        self.scale = 1.0
        self.rotation = None
        self.positions = []
        self.scales = []
        self.rotations = []
        self.listeners = []
        self.transitions = []
        self.dispose_calls = 0

    def set_position(self, position):
        self.position = position
        self.positions.append(position)

    def set_scale(self, scale):
        self.scale = scale
        self.scales.append(scale)

    def set_rotation(self, degrees):
        self.rotation = degrees
        self.rotations.append(degrees)

    def current_frame(self):
        return MotionFrame(self.position, self.scale, self.rotation)

    def add_transition_end_listener(self, callback):
        self.listeners.append(callback)

    def set_transition(self, description):
        self.transitions.append(description)

    def dispatch_transition_end(self):
        for callback in list(self.listeners):
            callback(object())
        return len(self.listeners)

    fire_transition_end = dispatch_transition_end

    def dispose(self):
        self.dispose_calls += 1


@pytest.fixture
def handle():
    return RecordingHandle()


@pytest.fixture
def make_handle():
    return RecordingHandle
