import pygame
import pytest

from commune.assets import ResourceHandles
from commune.audio import AudioMixer, Category
from commune.menus import (
    CREDITS_ASSETS,
    INTERACTION_ASSETS,
    MenuController,
    credits_rows,
)
from commune.settings import lower_volume, raise_volume, volume_label
from commune.states import Menu, Screen, StateMachine
from commune.widgets import PointerEvent


class FakeChannel:
    def __init__(self):
        self.volume = None
        self.stopped = False

    def set_volume(self, volume):
        self.volume = volume

    def get_busy(self):
        return not self.stopped

    def stop(self):
        self.stopped = True


class FakeSound:
    def __init__(self, name):
        self.name = name
        self.plays = []
        self.channel = None

    def play(self, loops=0):
        self.plays.append(loops)
        self.channel = FakeChannel()
        return self.channel


class Recorder:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


def make(on_exit=None, resources=None, screen=Screen.TITLE):
    menu_state = StateMachine(Menu.NONE)
    screen_state = StateMachine(screen)
    if resources is None:
        resources = ResourceHandles()
    mixer = AudioMixer()
    controller = MenuController(menu_state, screen_state, resources, mixer, on_exit)
    return controller, menu_state, screen_state, resources, mixer


def open_menu(menu_state, target):
    menu_state.set(target)
    menu_state.apply_transition()


def find(controller, text):
    root = controller.root
    root.layout(1280, 800)
    return next(b for b in root.buttons() if b.text == text)


def click(controller, text):
    btn = find(controller, text)
    return controller.handle_pointer(btn.rect.center, False, True)


def test_credits_rows_sections():
    sections = credits_rows()
    assert [title for title, _ in sections] == ["Created by", "Assets"]
    for _, rows in sections:
        assert rows
        assert all(len(row) == 2 and all(isinstance(t, str) for t in row) for row in rows)


def test_no_menu_builds_nothing():
    controller, *_ = make()
    assert controller.build(Menu.NONE) is None


def test_main_menu_buttons_with_exit():
    exit_hook = Recorder()
    controller, menu_state, *_ = make(on_exit=exit_hook)
    open_menu(menu_state, Menu.MAIN)
    assert [b.text for b in controller.root.buttons()] == ["Play", "Settings", "Credits", "Exit"]
    click(controller, "Exit")
    assert exit_hook.calls == 1


def test_main_menu_without_exit():
    controller, menu_state, *_ = make()
    open_menu(menu_state, Menu.MAIN)
    assert [b.text for b in controller.root.buttons()] == ["Play", "Settings", "Credits"]


def test_play_goes_to_loading_while_assets_pending():
    resources = ResourceHandles()
    resources.load_resource("slow", lambda: None)
    controller, menu_state, screen_state, *_ = make(resources=resources)
    open_menu(menu_state, Menu.MAIN)
    click(controller, "Play")
    assert screen_state.pending is Screen.LOADING


def test_play_goes_to_gameplay_when_loaded():
    controller, menu_state, screen_state, *_ = make()
    open_menu(menu_state, Menu.MAIN)
    click(controller, "Play")
    assert screen_state.pending is Screen.GAMEPLAY


@pytest.mark.parametrize("text, target", [("Settings", Menu.SETTINGS), ("Credits", Menu.CREDITS)])
def test_main_menu_navigation(text, target):
    controller, menu_state, *_ = make()
    open_menu(menu_state, Menu.MAIN)
    click(controller, text)
    menu_state.apply_transition()
    assert menu_state.current is target
    assert controller.root.name.lower().startswith(target.value)


def test_pause_menu_buttons():
    controller, menu_state, screen_state, *_ = make(screen=Screen.GAMEPLAY)
    open_menu(menu_state, Menu.PAUSE)
    assert [b.text for b in controller.root.buttons()] == ["Continue", "Settings", "Quit to title"]
    click(controller, "Quit to title")
    assert screen_state.pending is Screen.TITLE
    click(controller, "Continue")
    menu_state.apply_transition()
    assert menu_state.current is Menu.NONE
    assert controller.root is None


@pytest.mark.parametrize(
    "screen, menu, expected",
    [
        (Screen.TITLE, Menu.CREDITS, Menu.MAIN),
        (Screen.GAMEPLAY, Menu.PAUSE, Menu.NONE),
        (Screen.TITLE, Menu.SETTINGS, Menu.MAIN),
        (Screen.GAMEPLAY, Menu.SETTINGS, Menu.PAUSE),
    ],
)
def test_escape_goes_back(screen, menu, expected):
    controller, menu_state, *_ = make(screen=screen)
    open_menu(menu_state, menu)
    assert controller.handle_key(pygame.K_ESCAPE) is True
    menu_state.apply_transition()
    assert menu_state.current is expected


def test_escape_ignored_in_main_menu_and_other_keys():
    controller, menu_state, *_ = make()
    open_menu(menu_state, Menu.MAIN)
    assert controller.handle_key(pygame.K_ESCAPE) is False
    open_menu(menu_state, Menu.CREDITS)
    assert controller.handle_key(pygame.K_a) is False
    assert menu_state.pending is None


@pytest.mark.parametrize("screen, expected", [(Screen.TITLE, Menu.MAIN), (Screen.GAMEPLAY, Menu.PAUSE)])
def test_settings_back_button(screen, expected):
    controller, menu_state, *_ = make(screen=screen)
    open_menu(menu_state, Menu.SETTINGS)
    click(controller, "Back")
    assert menu_state.pending is expected


def _volume_text(controller):
    return next(lbl.text for lbl in controller.root.labels() if lbl.text.endswith("%"))


def test_settings_volume_buttons():
    controller, menu_state, _, _, mixer = make()
    open_menu(menu_state, Menu.SETTINGS)
    start = mixer.global_volume
    assert _volume_text(controller) == volume_label(start)
    click(controller, "+")
    assert mixer.global_volume == raise_volume(start)
    assert _volume_text(controller) == volume_label(mixer.global_volume)
    click(controller, "-")
    click(controller, "-")
    assert mixer.global_volume == lower_volume(lower_volume(raise_volume(start)))
    assert _volume_text(controller) == volume_label(mixer.global_volume)


def test_credits_music_plays_and_stops():
    sound = FakeSound("credits")
    resources = ResourceHandles()
    resources.load_resource(CREDITS_ASSETS, lambda: {"music": sound})
    resources.update()
    controller, menu_state, _, _, mixer = make(resources=resources)
    open_menu(menu_state, Menu.CREDITS)
    assert sound.plays == [-1]
    assert [i.category for i in mixer.instances] == [Category.MUSIC]
    open_menu(menu_state, Menu.MAIN)
    assert sound.channel.stopped is True


def test_interaction_sounds():
    hover, click_sound = FakeSound("hover"), FakeSound("click")
    resources = ResourceHandles()
    resources.load_resource(INTERACTION_ASSETS, lambda: {"hover": hover, "click": click_sound})
    resources.update()
    controller, menu_state, *_ = make(resources=resources)
    open_menu(menu_state, Menu.MAIN)
    btn = find(controller, "Settings")
    events = controller.handle_pointer(btn.rect.center, False, False)
    assert events == [(btn, PointerEvent.OVER)]
    assert hover.plays == [0] and click_sound.plays == []
    controller.handle_pointer(btn.rect.center, False, True)
    assert click_sound.plays == [0]


def test_pointer_without_menu_is_ignored():
    controller, *_ = make()
    assert controller.handle_pointer((10, 10), False, True) == []