import logging

from runtime import MutableState, current_composer
from spring import Spring, SpringSpec

logger = logging.getLogger(__name__)


class FrameClock:
    """Drives running animations from the host loop's frame ticks."""

    def __init__(self):
        self._running = []

    @property
    def running(self) -> bool:
        return bool(self._running)

    def schedule(self, animation):
        if animation not in self._running:
            self._running.append(animation)

    def cancel(self, animation):
        if animation in self._running:
            self._running.remove(animation)

    def tick(self, now: float) -> bool:
        for animation in list(self._running):
            animation.on_frame(now)
            if not animation.is_running:
                self.cancel(animation)
        return self.running


class AnimatedValue:
    def __init__(self, initial: float, spec: SpringSpec, clock=None):
        self.spring = Spring(spec, initial)
        self.clock = clock
        self._state = MutableState(float(initial))
        self._last_frame = None
        self._running = False

    @property
    def value(self) -> float:
        return self._state.value

    @property
    def clamped_value(self) -> float:
        # layout cannot take a negative extent; bouncy springs overshoot past 0
        return max(0.0, self.value)

    @property
    def target(self) -> float:
        return self.spring.target

    @property
    def velocity(self) -> float:
        return self.spring.velocity

    @property
    def is_running(self) -> bool:
        return self._running

    def animate_to(self, target: float):
        target = float(target)
        if target == self.spring.target and (self._running or self.spring.is_settled):
            return
        self.spring.retarget(target)
        if self.clock is None:
            self.snap_to(target)
            return
        if not self._running:
            self._last_frame = None
            self._running = True
        self.clock.schedule(self)

    def snap_to(self, value: float):
        self.spring.snap_to(value)
        self._state.value = self.spring.value
        self._stop()

    def on_frame(self, now: float):
        if not self._running:
            return
        dt = 0.0 if self._last_frame is None else now - self._last_frame
        self._last_frame = now
        self.spring.step(dt)
        self._state.value = self.spring.value
        if self.spring.is_settled:
            self._stop()

    def _stop(self):
        self._running = False
        self._last_frame = None
        if self.clock is not None:
            self.clock.cancel(self)

    def dispose(self):
        self._stop()


def animate_as_state(target: float, spec: SpringSpec) -> AnimatedValue:
    composer = current_composer()
    animated = composer.remember(
        lambda: AnimatedValue(target, spec, composer.frame_clock)
    )
    animated.animate_to(target)
    return animated
