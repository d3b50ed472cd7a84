"""A pygame card table with trays, drag-and-drop cards, menus and a splash screen."""

__version__ = "0.1.0"