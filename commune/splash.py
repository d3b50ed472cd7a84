"""Timers and the fading splash screen shown at startup."""

from __future__ import annotations

from dataclasses import dataclass, field

SPLASH_BACKGROUND_COLOR = (0.157, 0.157, 0.157)
SPLASH_DURATION_SECS = 1.8
SPLASH_FADE_DURATION_SECS = 0.6
SPLASH_IMAGE = "images/splash.png"


class Timer:
    """Counts elapsed seconds toward a duration, once or repeatedly."""

    def __init__(self, duration: float, repeating: bool = False) -> None:
        if duration < 0:
            raise ValueError("timer duration must not be negative")
        self.duration = duration
        self.repeating = repeating
        self.elapsed = 0.0
        self.finished = False
        self.times_finished_this_tick = 0

    @property
    def just_finished(self) -> bool:
        """True if the timer completed during the latest tick."""
        return self.times_finished_this_tick > 0

    def tick(self, delta: float) -> "Timer":
        """Advance by ``delta`` seconds."""
        if self.finished and not self.repeating:
            self.times_finished_this_tick = 0
            return self
        self.elapsed += delta
        self.finished = self.elapsed >= self.duration
        if not self.finished:
            self.times_finished_this_tick = 0
        elif not self.repeating:
            self.times_finished_this_tick = 1
            self.elapsed = self.duration
        elif self.duration == 0:
            self.times_finished_this_tick = 1
            self.elapsed = 0.0
        else:
            self.times_finished_this_tick = int(self.elapsed // self.duration)
            self.elapsed %= self.duration
        return self

    def reset(self) -> None:
        self.elapsed = 0.0
        self.finished = False
        self.times_finished_this_tick = 0


@dataclass
class FadeInOut:
    """Trapezoid opacity curve: fade in, hold fully visible, fade out."""

    total_duration: float
    fade_duration: float
    t: float = 0.0

    def alpha(self) -> float:
        t = min(max(self.t / self.total_duration, 0.0), 1.0)
        fade = self.fade_duration / self.total_duration
        return min((1.0 - abs(2.0 * t - 1.0)) / fade, 1.0)

    def tick(self, dt: float) -> None:
        self.t += dt


@dataclass
class _SplashState:
    timer: Timer = field(default_factory=lambda: Timer(SPLASH_DURATION_SECS))
    fade: FadeInOut = field(
        default_factory=lambda: FadeInOut(SPLASH_DURATION_SECS, SPLASH_FADE_DURATION_SECS)
    )


class SplashScreen:
    """The splash image fading in and out for a fixed time."""

    background = SPLASH_BACKGROUND_COLOR
    image = SPLASH_IMAGE

    def __init__(self) -> None:
        state = _SplashState()
        self.timer = state.timer
        self.fade = state.fade

    @property
    def alpha(self) -> float:
        return self.fade.alpha()

    def update(self, dt: float) -> bool:
        """Advance the animation; True on the frame the splash ends."""
        self.fade.tick(dt)
        self.timer.tick(dt)
        return self.timer.just_finished