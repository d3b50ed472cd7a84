"""Trays that hold an ordered row of cards."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from commune.cards import Card, Color

CARD_GAP = 90.0
"""Distance between the centres of neighbouring cards in a tray."""

TRAY_WIDTH = 320.0
TRAY_HEIGHT = 200.0
BLACK: Color = (0.0, 0.0, 0.0)
SETTLE_RATE = 10.0


@dataclass(eq=False)
class Tray:
    """A rectangle that lines up the cards dropped onto it."""

    x: float
    y: float
    width: float = TRAY_WIDTH
    height: float = TRAY_HEIGHT
    color: Color = BLACK
    name: str = "Tray"
    cards: List[Card] = field(default_factory=list)

    def contains(self, x: float, y: float) -> bool:
        """True if the world point lies on the tray."""
        return abs(x - self.x) <= self.width / 2.0 and abs(y - self.y) <= self.height / 2.0

    def insert_index(self, hit_x: float) -> int:
        """Slot a card dropped at ``hit_x`` goes into."""
        count = len(self.cards)
        start_x = self.x - count * CARD_GAP * 0.5
        return next(
            (
                index
                for index in range(count)
                if hit_x < start_x + index * CARD_GAP + CARD_GAP * 0.5
            ),
            count,
        )

    def add_card(self, card: Card, hit_x: float) -> bool:
        """Move ``card`` into this tray at the slot under ``hit_x``.

        The card leaves the tray that held it before. Anything that is not
        a card is ignored and False is returned.
        """
        if not isinstance(card, Card):
            return False
        previous = card.tray
        if isinstance(previous, Tray):
            previous.cards = [other for other in previous.cards if other is not card]
        card.tray = self
        self.cards.insert(self.insert_index(hit_x), card)
        return True

    def slot_position(self, index: int) -> Tuple[float, float]:
        """World position the card in slot ``index`` settles at."""
        span = max(len(self.cards) - 1, 0) * -CARD_GAP
        return (self.x + span * 0.5 + index * CARD_GAP, self.y)

    def update_cards(self, dt: float) -> None:
        """Ease every card not being dragged toward its slot."""
        t = SETTLE_RATE * dt
        for index, card in enumerate(self.cards):
            if card.dragging:
                continue
            dest_x, dest_y = self.slot_position(index)
            card.x += (dest_x - card.x) * t
            card.y += (dest_y - card.y) * t


def spawn_trays() -> List[Tray]:
    """The trays laid out at the start of a game."""
    return [Tray(0.0, -200.0), Tray(0.0, 200.0)]