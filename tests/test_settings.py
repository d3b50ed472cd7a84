import pytest

from commune.settings import (
    MAX_VOLUME,
    MIN_VOLUME,
    back_menu,
    lower_volume,
    raise_volume,
    volume_label,
)
from commune.states import Menu, Screen


def test_lower_clamps_at_minimum():
    assert lower_volume(MIN_VOLUME) == MIN_VOLUME
    assert lower_volume(0.05) == MIN_VOLUME


def test_raise_clamps_at_maximum():
    assert raise_volume(MAX_VOLUME) == MAX_VOLUME
    assert raise_volume(MAX_VOLUME - 0.05) == MAX_VOLUME


def test_raise_then_lower_round_trips():
    assert lower_volume(raise_volume(1.0)) == pytest.approx(1.0)
    assert raise_volume(1.0) > 1.0 > lower_volume(1.0)


def test_repeated_raises_stay_in_range():
    volume = MIN_VOLUME
    for _ in range(100):
        volume = raise_volume(volume)
    assert volume == MAX_VOLUME


def test_volume_labels():
    assert volume_label(1.0) == "100%"
    assert volume_label(0.0) == "  0%"
    assert volume_label(0.5) == " 50%"


def test_label_width_fixed_below_full():
    assert all(len(volume_label(v / 10)) == 4 for v in range(10))


@pytest.mark.parametrize(
    "screen, menu",
    [
        (Screen.TITLE, Menu.MAIN),
        (Screen.GAMEPLAY, Menu.PAUSE),
        (Screen.LOADING, Menu.PAUSE),
        (Screen.SPLASH, Menu.PAUSE),
    ],
)
def test_back_menu(screen, menu):
    assert back_menu(screen) is menu