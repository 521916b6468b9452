import math
from dataclasses import dataclass

# stiffness presets
STIFFNESS_HIGH = 10_000.0
STIFFNESS_MEDIUM = 1_500.0
STIFFNESS_MEDIUM_LOW = 400.0
STIFFNESS_LOW = 200.0
STIFFNESS_VERY_LOW = 50.0

# damping ratio presets
DAMPING_RATIO_HIGH_BOUNCY = 0.2
DAMPING_RATIO_MEDIUM_BOUNCY = 0.5
DAMPING_RATIO_LOW_BOUNCY = 0.75
DAMPING_RATIO_NO_BOUNCY = 1.0

VISIBILITY_THRESHOLD = 0.1


@dataclass(frozen=True)
class SpringSpec:
    damping_ratio: float = DAMPING_RATIO_NO_BOUNCY
    stiffness: float = STIFFNESS_MEDIUM
    visibility_threshold: float = VISIBILITY_THRESHOLD

    def __post_init__(self):
        if self.stiffness <= 0:
            raise ValueError("spring stiffness must be positive")
        if self.damping_ratio < 0:
            raise ValueError("spring damping ratio must not be negative")
        if self.visibility_threshold <= 0:
            raise ValueError("visibility threshold must be positive")


class Spring:
    """Damped harmonic oscillator with unit mass.

    Each step solves the motion in closed form from the current value and
    velocity, so arbitrary frame gaps stay stable and a retarget mid-flight
    continues from wherever the value currently is.
    """

    def __init__(self, spec: SpringSpec, value: float = 0.0, target=None):
        self.spec = spec
        self.value = float(value)
        self.velocity = 0.0
        self.target = float(value if target is None else target)

    def retarget(self, target: float):
        # value and velocity carry over
        self.target = float(target)

    def snap_to(self, value: float):
        self.value = float(value)
        self.target = float(value)
        self.velocity = 0.0

    @property
    def is_settled(self) -> bool:
        threshold = self.spec.visibility_threshold
        return (
            abs(self.value - self.target) < threshold
            and abs(self.velocity) < threshold
        )

    def step(self, dt: float) -> float:
        if dt <= 0:
            return self.value
        if self.is_settled:
            self.snap_to(self.target)
            return self.value

        x, v = _solve(
            self.spec.damping_ratio,
            math.sqrt(self.spec.stiffness),
            self.value - self.target,
            self.velocity,
            dt,
        )
        self.value = self.target + x
        self.velocity = v
        if self.is_settled:
            self.snap_to(self.target)
        return self.value


def _solve(zeta, omega, x0, v0, t):
    """Displacement and velocity after ``t`` seconds."""
    if zeta > 1.0:
        root = math.sqrt(zeta * zeta - 1.0)
        r1 = -omega * (zeta - root)
        r2 = -omega * (zeta + root)
        c2 = (r1 * x0 - v0) / (r1 - r2)
        c1 = x0 - c2
        e1 = math.exp(r1 * t)
        e2 = math.exp(r2 * t)
        return c1 * e1 + c2 * e2, c1 * r1 * e1 + c2 * r2 * e2

    if zeta == 1.0:
        a = x0
        b = v0 + omega * x0
        decay = math.exp(-omega * t)
        return (a + b * t) * decay, (b - omega * (a + b * t)) * decay

    damped = omega * math.sqrt(1.0 - zeta * zeta)
    a = x0
    b = (v0 + zeta * omega * x0) / damped
    decay = math.exp(-zeta * omega * t)
    cos_t = math.cos(damped * t)
    sin_t = math.sin(damped * t)
    x = decay * (a * cos_t + b * sin_t)
    v = decay * (
        cos_t * (b * damped - zeta * omega * a)
        + sin_t * (-a * damped - zeta * omega * b)
    )
    return x, v
