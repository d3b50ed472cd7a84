"""The main screens and the transitions between them."""

from __future__ import annotations

from functools import partial
from typing import Optional

import pygame

from commune.assets import ResourceHandles
from commune.splash import SplashScreen
from commune.states import Menu, Screen, StateMachine
from commune.widgets import UiRoot, label

LOADING_TEXT = "Loading..."
PAUSE_KEYS = (pygame.K_p, pygame.K_ESCAPE)


class ScreenController:
    """Drives the splash, title, loading and gameplay screens.

    It also owns the pause state while in gameplay: P or Escape pauses
    and opens the pause menu, P closes any open menu, and closing the
    menus during gameplay unpauses.
    """

    def __init__(
        self,
        screen_state: StateMachine[Screen],
        menu_state: StateMachine[Menu],
        pause_state: StateMachine[bool],
        resources: ResourceHandles,
    ) -> None:
        self.screen_state = screen_state
        self.menu_state = menu_state
        self.pause_state = pause_state
        self.resources = resources
        self.root: Optional[UiRoot] = None
        self.splash: Optional[SplashScreen] = None

        screen_state.on_enter(Screen.SPLASH, self._enter_splash)
        screen_state.on_exit(Screen.SPLASH, self._exit_splash)
        screen_state.on_enter(Screen.TITLE, partial(menu_state.set, Menu.MAIN))
        screen_state.on_exit(Screen.TITLE, partial(menu_state.set, Menu.NONE))
        screen_state.on_enter(Screen.LOADING, self._enter_loading)
        screen_state.on_exit(Screen.LOADING, self._exit_loading)
        screen_state.on_exit(Screen.GAMEPLAY, self._leave_gameplay)
        menu_state.on_enter(Menu.NONE, self._menus_closed)

    @property
    def pause_overlay(self) -> bool:
        """True while the dimming overlay over gameplay is shown."""
        return bool(self.pause_state.current)

    def _enter_splash(self) -> None:
        self.splash = SplashScreen()

    def _exit_splash(self) -> None:
        self.splash = None

    def _enter_loading(self) -> None:
        self.root = UiRoot("Loading Screen", [label(LOADING_TEXT)])

    def _exit_loading(self) -> None:
        self.root = None

    def _leave_gameplay(self) -> None:
        self.menu_state.set(Menu.NONE)
        self.pause_state.set(False)

    def _menus_closed(self) -> None:
        if self.screen_state.is_in(Screen.GAMEPLAY):
            self.pause_state.set(False)

    def handle_key(self, key: int) -> bool:
        """React to a key press. True if it caused a change."""
        screen = self.screen_state.current
        if screen is Screen.SPLASH and key == pygame.K_ESCAPE:
            self.screen_state.set(Screen.TITLE)
            return True
        if screen is not Screen.GAMEPLAY:
            return False
        if self.menu_state.is_in(Menu.NONE):
            if key in PAUSE_KEYS:
                self.pause_state.set(True)
                self.menu_state.set(Menu.PAUSE)
                return True
            return False
        if key == pygame.K_p:
            self.menu_state.set(Menu.NONE)
            return True
        return False

    def update(self, dt: float) -> None:
        """Advance the splash and leave the loading screen when ready."""
        screen = self.screen_state.current
        if screen is Screen.SPLASH and self.splash is not None:
            if self.splash.update(dt):
                self.screen_state.set(Screen.TITLE)
        elif screen is Screen.LOADING and self.resources.is_all_done():
            self.screen_state.set(Screen.GAMEPLAY)