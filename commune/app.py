"""The application: window, frame loop and the gameplay table."""

from __future__ import annotations

import argparse
import logging
from functools import partial
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pygame

from commune.assets import ResourceHandles
from commune.audio import AudioMixer
from commune.cards import GAME_HEIGHT, Card, spawn_cards
from commune.menus import (
    BUTTON_CLICK_SOUND,
    BUTTON_HOVER_SOUND,
    CREDITS_ASSETS,
    CREDITS_MUSIC,
    INTERACTION_ASSETS,
    MenuController,
)
from commune.screens import ScreenController
from commune.splash import SPLASH_BACKGROUND_COLOR, SPLASH_IMAGE
from commune.states import Menu, Screen, StateMachine
from commune.tray import Tray, spawn_trays
from commune.widgets import to_rgb255

log = logging.getLogger(__name__)

WINDOW_TITLE = "Commune"
DEFAULT_SIZE = (1280, 720)
LEVEL_ASSETS = "level_assets"
LEVEL_MUSIC = "audio/music/Fluffing A Duck.ogg"
ASSET_DIR = Path("assets")
TOGGLE_DEBUG_KEY = pygame.K_BACKQUOTE
PAUSE_OVERLAY_ALPHA = 0.8
SPLASH_IMAGE_WIDTH = 0.7
FPS = 60
_MAX_TRANSITION_ROUNDS = 8


class _SilentSound:
    """Stands in for a sound whose file is missing or cannot play."""

    def __init__(self, path: str) -> None:
        self.path = path

    def play(self, loops: int = 0) -> None:
        return None


class App:
    """The game window and everything that runs in it."""

    def __init__(self, size: Tuple[int, int] = DEFAULT_SIZE) -> None:
        pygame.init()
        self._audio = self._init_audio()
        pygame.display.set_caption(WINDOW_TITLE)
        self.screen = pygame.display.set_mode(size, pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.running = True
        self.dev = False
        self.debug_ui = False
        self.asset_dir = ASSET_DIR
        self.max_frames: Optional[int] = None

        self.cards: List[Card] = []
        self.trays: List[Tray] = []
        self._held: List[Card] = []
        self._dragged = False
        self._splash_image: Optional[pygame.Surface] = None
        self._splash_image_loaded = False

        self.screen_state: StateMachine[Screen] = StateMachine(Screen.SPLASH)
        self.menu_state: StateMachine[Menu] = StateMachine(Menu.NONE)
        self.pause_state: StateMachine[bool] = StateMachine(False)
        self.resources = ResourceHandles()
        self.mixer = AudioMixer()

        self.resources.load_resource(
            LEVEL_ASSETS, partial(self._load_sounds, {"music": LEVEL_MUSIC})
        )
        self.resources.load_resource(
            CREDITS_ASSETS, partial(self._load_sounds, {"music": CREDITS_MUSIC})
        )
        self.resources.load_resource(
            INTERACTION_ASSETS,
            partial(
                self._load_sounds,
                {"hover": BUTTON_HOVER_SOUND, "click": BUTTON_CLICK_SOUND},
            ),
        )

        self.screens = ScreenController(
            self.screen_state, self.menu_state, self.pause_state, self.resources
        )
        self.menus = MenuController(
            self.menu_state,
            self.screen_state,
            self.resources,
            self.mixer,
            on_exit=self._request_exit,
        )
        self.screen_state.on_enter(Screen.GAMEPLAY, self._spawn_level)
        self.screen_state.on_exit(Screen.GAMEPLAY, self._despawn_level)
        for screen in Screen:
            self.screen_state.on_enter(screen, partial(self._log_transition, "entered", screen))
            self.screen_state.on_exit(screen, partial(self._log_transition, "left", screen))

    @staticmethod
    def _init_audio() -> bool:
        try:
            pygame.mixer.init()
        except pygame.error:
            return False
        return True

    def _load_sound(self, path: str) -> Any:
        full = Path(self.asset_dir) / path
        if self._audio and full.is_file():
            try:
                return pygame.mixer.Sound(str(full))
            except pygame.error:
                log.warning("could not load sound %s", full)
        return _SilentSound(path)

    def _load_sounds(self, paths: Dict[str, str]) -> Dict[str, Any]:
        return {key: self._load_sound(path) for key, path in paths.items()}

    def _log_transition(self, verb: str, screen: Screen) -> None:
        if self.dev:
            log.info("screen %s: %s", verb, screen.name)

    def _request_exit(self) -> None:
        self.running = False

    def _spawn_level(self) -> None:
        # The level's music is loaded but deliberately not played.
        self.cards = spawn_cards()
        self.trays = spawn_trays()

    def _despawn_level(self) -> None:
        self.cards = []
        self.trays = []
        self._held = []
        self._dragged = False

    # Coordinates -------------------------------------------------------

    def _scale(self) -> float:
        return self.screen.get_height() / GAME_HEIGHT

    def _screen_to_world(self, pos: Sequence[float]) -> Tuple[float, float]:
        width, height = self.screen.get_size()
        scale = self._scale()
        return ((pos[0] - width / 2.0) / scale, (height / 2.0 - pos[1]) / scale)

    def _world_rect(self, x: float, y: float, w: float, h: float) -> pygame.Rect:
        width, height = self.screen.get_size()
        scale = self._scale()
        rect = pygame.Rect(0, 0, round(w * scale), round(h * scale))
        rect.center = (round(width / 2.0 + x * scale), round(height / 2.0 - y * scale))
        return rect

    # Input -------------------------------------------------------------

    def _table_active(self) -> bool:
        return (
            self.screen_state.is_in(Screen.GAMEPLAY)
            and self.menu_state.is_in(Menu.NONE)
            and not self.pause_state.current
        )

    def handle_event(self, event: pygame.event.Event) -> None:
        """Dispatch one pygame event."""
        if event.type == pygame.QUIT:
            self._request_exit()
        elif event.type == pygame.KEYDOWN:
            self._handle_key(event.key)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.menus.handle_pointer(event.pos, True, False)
            self._press(event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.menus.handle_pointer(event.pos, False, True)
            self._release()
        elif event.type == pygame.MOUSEMOTION:
            self.menus.handle_pointer(event.pos, bool(event.buttons[0]), False)
            self._motion(event.pos, event.rel)

    def _handle_key(self, key: int) -> None:
        if self.dev and key == TOGGLE_DEBUG_KEY:
            self.debug_ui = not self.debug_ui
        self.menus.handle_key(key)
        self.screens.handle_key(key)

    def _press(self, pos: Sequence[float]) -> None:
        self._dragged = False
        if not self._table_active():
            self._held = []
            return
        x, y = self._screen_to_world(pos)
        # Cards do not block what lies beneath, so every card hit is picked up.
        self._held = [card for card in self.cards if card.contains(x, y)]

    def _motion(self, pos: Sequence[float], rel: Sequence[float]) -> None:
        if not self._held or not self._table_active():
            return
        height = self.screen.get_height()
        for card in self._held:
            card.drag(rel[0], rel[1], height)
        self._dragged = True
        x, y = self._screen_to_world(pos)
        for tray in self.trays:
            if tray.contains(x, y):
                for card in self._held:
                    tray.add_card(card, x)

    def _release(self) -> None:
        if self._dragged:
            for card in self._held:
                card.drop()
        self._held = []
        self._dragged = False

    # Frame -------------------------------------------------------------

    def _apply_transitions(self) -> None:
        machines = (self.screen_state, self.menu_state, self.pause_state)
        for _ in range(_MAX_TRANSITION_ROUNDS):
            if not any([machine.apply_transition() for machine in machines]):
                break

    def update(self, dt: float) -> None:
        """Advance the game by ``dt`` seconds."""
        self.resources.update()
        self._apply_transitions()
        self.screens.update(dt)
        if self.screen_state.is_in(Screen.GAMEPLAY):
            for tray in self.trays:
                tray.update_cards(dt)
        self.mixer.remove_finished()
        width, height = self.screen.get_size()
        for root in (self.screens.root, self.menus.root):
            if root is not None:
                root.layout(width, height)

    def draw(self) -> pygame.Surface:
        """Render the current frame to the window surface and return it."""
        surface = self.screen
        surface.fill(to_rgb255(SPLASH_BACKGROUND_COLOR))
        if self.screen_state.is_in(Screen.GAMEPLAY):
            self._draw_table(surface)
        if self.screens.pause_overlay:
            overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
            overlay.fill((0, 0, 0, round(PAUSE_OVERLAY_ALPHA * 255)))
            surface.blit(overlay, (0, 0))
        for root in (self.screens.root, self.menus.root):
            if root is not None:
                root.draw(surface)
        if self.screens.splash is not None:
            self._draw_splash(surface)
        if self.debug_ui:
            self._draw_debug(surface)
        return surface

    def _draw_table(self, surface: pygame.Surface) -> None:
        for tray in self.trays:
            rect = self._world_rect(tray.x, tray.y, tray.width, tray.height)
            pygame.draw.rect(surface, to_rgb255(tray.color), rect)
        for card in sorted(self.cards, key=lambda c: c.z):
            rect = self._world_rect(card.x, card.y, card.size, card.size)
            pygame.draw.rect(surface, to_rgb255(card.color), rect)

    def _draw_splash(self, surface: pygame.Surface) -> None:
        if not self._splash_image_loaded:
            self._splash_image_loaded = True
            path = Path(self.asset_dir) / SPLASH_IMAGE
            if path.is_file():
                try:
                    self._splash_image = pygame.image.load(str(path))
                except pygame.error:
                    log.warning("could not load image %s", path)
        image = self._splash_image
        if image is None or image.get_width() == 0:
            return
        width, height = surface.get_size()
        target_w = round(width * SPLASH_IMAGE_WIDTH)
        target_h = round(image.get_height() * target_w / image.get_width())
        scaled = pygame.transform.smoothscale(image, (target_w, target_h))
        scaled.set_alpha(round(self.screens.splash.alpha * 255))
        surface.blit(scaled, scaled.get_rect(center=(width // 2, height // 2)))

    def _draw_debug(self, surface: pygame.Surface) -> None:
        for root in (self.screens.root, self.menus.root):
            if root is None:
                continue
            for widget in [*root.buttons(), *root.labels()]:
                pygame.draw.rect(surface, (255, 0, 0), widget.rect, 1)

    def run(self) -> int:
        """Run the frame loop until exit; return the number of frames."""
        frames = 0
        while self.running:
            for event in pygame.event.get():
                self.handle_event(event)
            dt = self.clock.tick(FPS) / 1000.0
            self.update(dt)
            self.draw()
            pygame.display.flip()
            frames += 1
            if self.max_frames is not None and frames >= self.max_frames:
                break
        return frames


def main(argv: Optional[List[str]] = None) -> int:
    """Start the game."""
    parser = argparse.ArgumentParser(prog="commune", description="Play Commune.")
    parser.add_argument("--dev", action="store_true", help="enable development tools")
    parser.add_argument("--assets", default=str(ASSET_DIR), help="asset directory")
    parser.add_argument("--width", type=int, default=DEFAULT_SIZE[0])
    parser.add_argument("--height", type=int, default=DEFAULT_SIZE[1])
    parser.add_argument("--frames", type=int, default=None, help="stop after N frames")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.dev else logging.WARNING)
    app = App((args.width, args.height))
    app.dev = args.dev
    app.asset_dir = Path(args.assets)
    app.max_frames = args.frames
    try:
        app.run()
    finally:
        pygame.display.quit()
    return 0