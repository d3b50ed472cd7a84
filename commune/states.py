"""Application states and a small state machine with enter/exit hooks."""

from __future__ import annotations

import enum
from collections import defaultdict
from typing import Callable, Dict, Generic, Hashable, List, TypeVar

S = TypeVar("S", bound=Hashable)

Callback = Callable[[], None]

_NOTHING = object()


class Screen(enum.Enum):
    """The game's main screens. The first one is shown at startup."""

    SPLASH = "splash"
    TITLE = "title"
    LOADING = "loading"
    GAMEPLAY = "gameplay"


class Menu(enum.Enum):
    """The menu shown on top of the current screen, if any."""

    NONE = "none"
    MAIN = "main"
    CREDITS = "credits"
    SETTINGS = "settings"
    PAUSE = "pause"


class AppSystems(enum.IntEnum):
    """Phases of a frame update, in the order they run."""

    TICK_TIMERS = 1
    RECORD_INPUT = 2
    UPDATE = 3


class StateMachine(Generic[S]):
    """Holds one state value and applies queued changes on demand.

    Changes requested with :meth:`set` take effect only when
    :meth:`apply_transition` runs, at which point the exit hooks of the
    old state and the enter hooks of the new one are called. The enter
    hooks of the initial state run on the first call.
    """

    def __init__(self, initial: S) -> None:
        self._current: S = initial
        self._pending: object = _NOTHING
        self._started = False
        self._on_enter: Dict[S, List[Callback]] = defaultdict(list)
        self._on_exit: Dict[S, List[Callback]] = defaultdict(list)

    @property
    def current(self) -> S:
        """The state currently in effect."""
        return self._current

    @property
    def pending(self) -> S | None:
        """The state queued for the next transition, or None."""
        return None if self._pending is _NOTHING else self._pending  # type: ignore[return-value]

    def set(self, state: S) -> None:
        """Queue a change to ``state``; the latest request wins."""
        self._pending = state

    def is_in(self, state: S) -> bool:
        return self._current == state

    def on_enter(self, state: S, callback: Callback) -> Callback:
        """Register ``callback`` to run whenever ``state`` is entered."""
        self._on_enter[state].append(callback)
        return callback

    def on_exit(self, state: S, callback: Callback) -> Callback:
        """Register ``callback`` to run whenever ``state`` is left."""
        self._on_exit[state].append(callback)
        return callback

    def apply_transition(self) -> bool:
        """Apply a queued change. Returns True if any hooks were run."""
        changed = False
        if not self._started:
            self._started = True
            self._run(self._on_enter, self._current)
            changed = True
        if self._pending is not _NOTHING:
            target = self._pending
            self._pending = _NOTHING
            if target != self._current:
                self._run(self._on_exit, self._current)
                self._current = target  # type: ignore[assignment]
                self._run(self._on_enter, self._current)
                changed = True
        return changed

    @staticmethod
    def _run(hooks: Dict[S, List[Callback]], state: S) -> None:
        for callback in list(hooks.get(state, ())):
            callback()

    def __repr__(self) -> str:
        return f"StateMachine(current={self._current!r}, pending={self.pending!r})"