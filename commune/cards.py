"""Draggable cards on the gameplay table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Tuple

Color = Tuple[float, float, float]

GAME_HEIGHT = 800.0
"""Height of the visible world in world units, whatever the window size."""

CARD_SIZE = 80.0
RESTING_Z = 1.0
DRAGGING_Z = 3.0
DROPPED_Z = 2.0

WHITE: Color = (1.0, 1.0, 1.0)
CRIMSON: Color = (0.86, 0.08, 0.24)
GREEN: Color = (0.0, 0.5, 0.0)


@dataclass(eq=False)
class Card:
    """A square card with a world position and the tray that holds it.

    Cards compare by identity, so two cards at the same spot stay distinct.
    """

    color: Color
    x: float
    y: float
    z: float = RESTING_Z
    size: float = CARD_SIZE
    name: str = "Card"
    dragging: bool = False
    tray: Any = None

    def drag(self, dx: float, dy: float, window_height: float) -> None:
        """Move by a pointer delta given in window pixels.

        The window's y axis points down while the world's points up, and
        the delta is scaled so the card follows the pointer exactly.
        """
        scale = GAME_HEIGHT / window_height
        self.dragging = True
        self.x += dx * scale
        self.y -= dy * scale
        self.z = DRAGGING_Z

    def drop(self) -> None:
        """End a drag, leaving the card above resting cards."""
        self.dragging = False
        self.z = DROPPED_Z

    def contains(self, x: float, y: float) -> bool:
        """True if the world point lies on the card."""
        half = self.size / 2.0
        return abs(x - self.x) <= half and abs(y - self.y) <= half


def spawn_cards() -> List[Card]:
    """The cards laid out at the start of a game."""
    return [
        Card(WHITE, -100.0, 0.0),
        Card(CRIMSON, 0.0, 0.0),
        Card(GREEN, 100.0, 0.0),
    ]