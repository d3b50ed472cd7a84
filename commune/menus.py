"""The game's menus and the transitions between them."""

from __future__ import annotations

from functools import partial
from typing import Any, Callable, List, Optional, Sequence, Tuple

import pygame

from commune.assets import ResourceHandles
from commune.audio import AudioInstance, AudioMixer, music, sound_effect
from commune.settings import back_menu, lower_volume, raise_volume, volume_label
from commune.states import Menu, Screen, StateMachine
from commune.widgets import (
    Button,
    Grid,
    Label,
    PointerEvent,
    UiRoot,
    button,
    button_small,
    header,
    label,
)

CREDITS_ASSETS = "credits_assets"
"""Resource name of a mapping holding the credits ``"music"`` sound."""

INTERACTION_ASSETS = "interaction_assets"
"""Resource name of a mapping holding the ``"hover"`` and ``"click"`` sounds."""

CREDITS_MUSIC = "audio/music/Monkeys Spinning Monkeys.ogg"
BUTTON_HOVER_SOUND = "audio/sound_effects/button_hover.ogg"
BUTTON_CLICK_SOUND = "audio/sound_effects/button_click.ogg"

Row = Tuple[str, str]

_CREATED_BY: Tuple[Row, ...] = (
    ("Joe Shmoe", "Implemented alligator wrestling AI"),
    ("Jane Doe", "Made the music for the alien invasion"),
)
_ASSETS: Tuple[Row, ...] = (
    ("Ducky sprite", "CC0 by Caz Creates Games"),
    ("Button SFX", "CC0 by Jaszunio15"),
    ("Music", "CC BY 3.0 by Kevin MacLeod"),
)


def credits_rows() -> List[Tuple[str, Tuple[Row, ...]]]:
    """The credits as titled sections of (item, credit) rows."""
    return [("Created by", _CREATED_BY), ("Assets", _ASSETS)]


def _grid(rows: Sequence[Row]) -> Grid:
    return Grid([label(text) for row in rows for text in row])


class MenuController:
    """Builds the UI for the current menu and reacts to its input."""

    def __init__(
        self,
        menu_state: StateMachine[Menu],
        screen_state: StateMachine[Screen],
        resources: ResourceHandles,
        mixer: AudioMixer,
        on_exit: Optional[Callable[[], None]] = None,
    ) -> None:
        self.menu_state = menu_state
        self.screen_state = screen_state
        self.resources = resources
        self.mixer = mixer
        self.on_exit = on_exit
        self.root: Optional[UiRoot] = None
        self._volume_label: Optional[Label] = None
        self._credits_music: Optional[AudioInstance] = None
        for menu in Menu:
            menu_state.on_enter(menu, partial(self._enter, menu))
        menu_state.on_exit(Menu.CREDITS, self._stop_credits_music)

    def _enter(self, menu: Menu) -> None:
        self.root = self.build(menu)
        if menu is Menu.CREDITS:
            self._start_credits_music()

    def build(self, menu: Menu) -> Optional[UiRoot]:
        """The UI for ``menu``, or None when no menu is shown."""
        self._volume_label = None
        builders = {
            Menu.MAIN: self._main_menu,
            Menu.CREDITS: self._credits_menu,
            Menu.SETTINGS: self._settings_menu,
            Menu.PAUSE: self._pause_menu,
        }
        builder = builders.get(menu)
        return builder() if builder is not None else None

    def _main_menu(self) -> UiRoot:
        children = [
            button("Play", self._enter_loading_or_gameplay),
            button("Settings", partial(self.menu_state.set, Menu.SETTINGS)),
            button("Credits", partial(self.menu_state.set, Menu.CREDITS)),
        ]
        if self.on_exit is not None:
            children.append(button("Exit", self.on_exit))
        return UiRoot("Main Menu", children)

    def _credits_menu(self) -> UiRoot:
        children: List[Any] = []
        for title, rows in credits_rows():
            children.extend([header(title), _grid(rows)])
        children.append(button("Back", partial(self.menu_state.set, Menu.MAIN)))
        return UiRoot("Credits Menu", children)

    def _settings_menu(self) -> UiRoot:
        self._volume_label = label("")
        self._refresh_volume_label()
        grid = Grid(
            [
                label("Master Volume"),
                (
                    button_small("-", self._lower_volume),
                    self._volume_label,
                    button_small("+", self._raise_volume),
                ),
            ]
        )
        return UiRoot(
            "Settings Menu",
            [header("Settings"), grid, button("Back", self._settings_back)],
        )

    def _pause_menu(self) -> UiRoot:
        return UiRoot(
            "Pause Menu",
            [
                header("Game paused"),
                button("Continue", partial(self.menu_state.set, Menu.NONE)),
                button("Settings", partial(self.menu_state.set, Menu.SETTINGS)),
                button("Quit to title", partial(self.screen_state.set, Screen.TITLE)),
            ],
        )

    def _enter_loading_or_gameplay(self) -> None:
        target = Screen.GAMEPLAY if self.resources.is_all_done() else Screen.LOADING
        self.screen_state.set(target)

    def _settings_back(self) -> None:
        self.menu_state.set(back_menu(self.screen_state.current))

    def _lower_volume(self) -> None:
        self.mixer.set_global_volume(lower_volume(self.mixer.global_volume))
        self._refresh_volume_label()

    def _raise_volume(self) -> None:
        self.mixer.set_global_volume(raise_volume(self.mixer.global_volume))
        self._refresh_volume_label()

    def _refresh_volume_label(self) -> None:
        if self._volume_label is not None:
            self._volume_label.text = volume_label(self.mixer.global_volume)

    def _start_credits_music(self) -> None:
        if CREDITS_ASSETS in self.resources:
            sound = self.resources.get(CREDITS_ASSETS)["music"]
            self._credits_music = self.mixer.play(music(sound))

    def _stop_credits_music(self) -> None:
        instance, self._credits_music = self._credits_music, None
        if instance is not None and instance.channel is not None:
            instance.channel.stop()

    def handle_key(self, key: int) -> bool:
        """Escape steps back out of the open menu. True if handled."""
        if key != pygame.K_ESCAPE:
            return False
        current = self.menu_state.current
        if current is Menu.CREDITS:
            self.menu_state.set(Menu.MAIN)
        elif current is Menu.PAUSE:
            self.menu_state.set(Menu.NONE)
        elif current is Menu.SETTINGS:
            self.menu_state.set(back_menu(self.screen_state.current))
        else:
            return False
        return True

    def handle_pointer(
        self, pos: Tuple[float, float], pressed: bool, clicked: bool
    ) -> List[Tuple[Button, PointerEvent]]:
        """Pass the pointer to the open menu and play interaction sounds."""
        if self.root is None:
            return []
        events = self.root.handle_pointer(pos, pressed, clicked)
        if events and INTERACTION_ASSETS in self.resources:
            sounds = self.resources.get(INTERACTION_ASSETS)
            for _, event in events:
                key = "hover" if event is PointerEvent.OVER else "click"
                self.mixer.play(sound_effect(sounds[key]))
        return events