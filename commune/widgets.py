"""Reusable UI widgets, their colours and pointer interaction."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, Union

import pygame

Color = Tuple[float, float, float]
Action = Callable[[], None]

LABEL_TEXT: Color = (0.867, 0.827, 0.412)
HEADER_TEXT: Color = (0.988, 0.984, 0.800)
BUTTON_TEXT: Color = (0.925, 0.925, 0.925)
BUTTON_BACKGROUND: Color = (0.275, 0.400, 0.750)
BUTTON_HOVERED_BACKGROUND: Color = (0.384, 0.600, 0.820)
BUTTON_PRESSED_BACKGROUND: Color = (0.239, 0.286, 0.600)

HEADER_FONT_SIZE = 40
LABEL_FONT_SIZE = 24
BUTTON_FONT_SIZE = 40

BUTTON_WIDTH = 380.0
BUTTON_HEIGHT = 80.0
SMALL_BUTTON_SIZE = 30.0

ROOT_ROW_GAP = 20.0
GRID_ROW_GAP = 10.0
GRID_COLUMN_GAP = 30.0
GRID_COLUMN_WIDTH = 400.0
RUN_GAP = 10.0


def to_rgb255(color: Color) -> Tuple[int, int, int]:
    """Convert a colour with 0..1 channels to 0..255 integers."""
    r, g, b = (round(channel * 255) for channel in color)
    return (r, g, b)


@lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.Font(None, size)


def _rect(x: float, y: float, width: float, height: float) -> pygame.Rect:
    return pygame.Rect(round(x), round(y), round(width), round(height))


class Interaction(enum.Enum):
    """How the pointer currently relates to a widget."""

    NONE = "none"
    HOVERED = "hovered"
    PRESSED = "pressed"


class PointerEvent(enum.Enum):
    """What a pointer update did to a button."""

    OVER = "over"
    CLICK = "click"


@dataclass(frozen=True)
class InteractionPalette:
    """Background colours for each interaction state."""

    none: Color
    hovered: Color
    pressed: Color

    def color_for(self, interaction: Interaction) -> Color:
        return {
            Interaction.NONE: self.none,
            Interaction.HOVERED: self.hovered,
            Interaction.PRESSED: self.pressed,
        }[interaction]


BUTTON_PALETTE = InteractionPalette(
    none=BUTTON_BACKGROUND,
    hovered=BUTTON_HOVERED_BACKGROUND,
    pressed=BUTTON_PRESSED_BACKGROUND,
)


@dataclass(eq=False)
class Label:
    """A line of text."""

    text: str
    font_size: int = LABEL_FONT_SIZE
    color: Color = LABEL_TEXT
    name: str = "Label"
    rect: pygame.Rect = field(default_factory=lambda: pygame.Rect(0, 0, 0, 0))

    def measure(self) -> Tuple[float, float]:
        return (len(self.text) * self.font_size * 0.5, self.font_size * 1.2)

    def place(self, x: float, y: float) -> None:
        self.rect = _rect(x, y, *self.measure())

    def draw(self, surface: pygame.Surface) -> None:
        if not self.text:
            return
        image = _font(self.font_size).render(self.text, True, to_rgb255(self.color))
        surface.blit(image, image.get_rect(center=self.rect.center))


@dataclass(eq=False)
class Button:
    """A clickable box with text that runs ``action`` when clicked."""

    text: str
    action: Action
    width: float = BUTTON_WIDTH
    height: float = BUTTON_HEIGHT
    rounded: bool = False
    palette: InteractionPalette = BUTTON_PALETTE
    interaction: Interaction = Interaction.NONE
    name: str = "Button"
    rect: pygame.Rect = field(default_factory=lambda: pygame.Rect(0, 0, 0, 0))

    @property
    def color(self) -> Color:
        return self.palette.color_for(self.interaction)

    def measure(self) -> Tuple[float, float]:
        return (self.width, self.height)

    def place(self, x: float, y: float) -> None:
        self.rect = _rect(x, y, self.width, self.height)

    def _hit(self, pos: Tuple[float, float]) -> bool:
        x, y = pos
        return (
            self.rect.left <= x < self.rect.right
            and self.rect.top <= y < self.rect.bottom
        )

    def handle_pointer(
        self, pos: Tuple[float, float], pressed: bool, clicked: bool
    ) -> Optional[PointerEvent]:
        """Update the interaction state; run the action on a click inside."""
        inside = self._hit(pos)
        previous = self.interaction
        if not inside:
            self.interaction = Interaction.NONE
            return None
        self.interaction = Interaction.PRESSED if pressed else Interaction.HOVERED
        if clicked:
            self.action()
            return PointerEvent.CLICK
        if previous is Interaction.NONE:
            return PointerEvent.OVER
        return None

    def draw(self, surface: pygame.Surface) -> None:
        radius = self.rect.height // 2 if self.rounded else 0
        pygame.draw.rect(surface, to_rgb255(self.color), self.rect, border_radius=radius)
        if self.text:
            image = _font(BUTTON_FONT_SIZE).render(self.text, True, to_rgb255(BUTTON_TEXT))
            surface.blit(image, image.get_rect(center=self.rect.center))


Leaf = Union[Label, Button]
Cell = Union[Leaf, Sequence[Leaf]]


@dataclass(eq=False)
class Grid:
    """Cells laid out in fixed-width columns, filled row by row.

    Cells in even columns hug the right edge of their column, cells in
    odd columns the left edge. A cell may be a sequence of widgets laid
    out side by side.
    """

    cells: List[Cell]
    columns: int = 2
    column_width: float = GRID_COLUMN_WIDTH
    row_gap: float = GRID_ROW_GAP
    column_gap: float = GRID_COLUMN_GAP
    name: str = "Grid"
    rect: pygame.Rect = field(default_factory=lambda: pygame.Rect(0, 0, 0, 0))

    @staticmethod
    def _parts(cell: Cell) -> Sequence[Leaf]:
        return cell if isinstance(cell, (list, tuple)) else (cell,)

    def _cell_size(self, cell: Cell) -> Tuple[float, float]:
        sizes = [part.measure() for part in self._parts(cell)]
        width = sum(w for w, _ in sizes) + RUN_GAP * max(len(sizes) - 1, 0)
        height = max((h for _, h in sizes), default=0.0)
        return (width, height)

    def _rows(self) -> List[List[Cell]]:
        return [self.cells[i : i + self.columns] for i in range(0, len(self.cells), self.columns)]

    def _row_height(self, row: List[Cell]) -> float:
        return max((self._cell_size(cell)[1] for cell in row), default=0.0)

    def measure(self) -> Tuple[float, float]:
        rows = self._rows()
        width = self.columns * self.column_width + (self.columns - 1) * self.column_gap
        height = sum(self._row_height(row) for row in rows) + self.row_gap * max(len(rows) - 1, 0)
        return (width, height)

    def place(self, x: float, y: float) -> None:
        self.rect = _rect(x, y, *self.measure())
        row_y = y
        for row in self._rows():
            row_height = self._row_height(row)
            for column, cell in enumerate(row):
                width, height = self._cell_size(cell)
                column_x = x + column * (self.column_width + self.column_gap)
                cell_x = column_x + self.column_width - width if column % 2 == 0 else column_x
                cell_y = row_y + (row_height - height) / 2.0
                for part in self._parts(cell):
                    part_width, part_height = part.measure()
                    part.place(cell_x, cell_y + (height - part_height) / 2.0)
                    cell_x += part_width + RUN_GAP
            row_y += row_height + self.row_gap

    def iter_widgets(self) -> Iterator[Leaf]:
        for cell in self.cells:
            yield from self._parts(cell)

    def draw(self, surface: pygame.Surface) -> None:
        for widget in self.iter_widgets():
            widget.draw(surface)


Widget = Union[Label, Button, Grid]


def header(text: str) -> Label:
    """A large heading."""
    return Label(text, HEADER_FONT_SIZE, HEADER_TEXT, name="Header")


def label(text: str) -> Label:
    """A plain text label."""
    return Label(text, LABEL_FONT_SIZE, LABEL_TEXT, name="Label")


def button(text: str, action: Action) -> Button:
    """A large rounded button."""
    return Button(text, action, BUTTON_WIDTH, BUTTON_HEIGHT, rounded=True)


def button_small(text: str, action: Action) -> Button:
    """A small square button."""
    return Button(text, action, SMALL_BUTTON_SIZE, SMALL_BUTTON_SIZE)


class UiRoot:
    """A full-window column of widgets, centred both ways."""

    def __init__(self, name: str, children: Sequence[Widget]) -> None:
        self.name = name
        self.children: List[Widget] = list(children)
        self.row_gap = ROOT_ROW_GAP
        self.rect = pygame.Rect(0, 0, 0, 0)

    def layout(self, width: float, height: float) -> None:
        """Position every widget for a window of the given size."""
        self.rect = _rect(0, 0, width, height)
        sizes = [child.measure() for child in self.children]
        total = sum(h for _, h in sizes) + self.row_gap * max(len(sizes) - 1, 0)
        y = (height - total) / 2.0
        for child, (child_width, child_height) in zip(self.children, sizes):
            child.place((width - child_width) / 2.0, y)
            y += child_height + self.row_gap

    def _leaves(self) -> Iterator[Leaf]:
        for child in self.children:
            if isinstance(child, Grid):
                yield from child.iter_widgets()
            else:
                yield child

    def buttons(self) -> List[Button]:
        return [w for w in self._leaves() if isinstance(w, Button)]

    def labels(self) -> List[Label]:
        return [w for w in self._leaves() if isinstance(w, Label)]

    def draw(self, surface: pygame.Surface) -> None:
        for child in self.children:
            child.draw(surface)

    def handle_pointer(
        self, pos: Tuple[float, float], pressed: bool, clicked: bool
    ) -> List[Tuple[Button, PointerEvent]]:
        """Pass the pointer to every button; return the events it caused."""
        events: List[Tuple[Button, PointerEvent]] = []
        for widget in self.buttons():
            event = widget.handle_pointer(pos, pressed, clicked)
            if event is not None:
                events.append((widget, event))
        return events