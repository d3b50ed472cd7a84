"""Settings menu rules: master volume steps and where Back leads."""

from __future__ import annotations

from commune.states import Menu, Screen

MIN_VOLUME = 0.0
MAX_VOLUME = 3.0
VOLUME_STEP = 0.1


def lower_volume(volume: float) -> float:
    """One step quieter, never below the minimum."""
    return max(volume - VOLUME_STEP, MIN_VOLUME)


def raise_volume(volume: float) -> float:
    """One step louder, never above the maximum."""
    return min(volume + VOLUME_STEP, MAX_VOLUME)


def volume_label(volume: float) -> str:
    """The volume as a whole percentage, right-aligned in three places."""
    return f"{100.0 * volume:3.0f}%"


def back_menu(screen: Screen) -> Menu:
    """Menu that Back returns to from the settings on ``screen``."""
    return Menu.MAIN if screen is Screen.TITLE else Menu.PAUSE