import pytest

from commune.states import AppSystems, Menu, Screen, StateMachine


def test_set_takes_effect_only_after_apply():
    machine = StateMachine(Screen.SPLASH)
    machine.set(Screen.TITLE)
    assert machine.current is Screen.SPLASH
    assert machine.pending is Screen.TITLE
    machine.apply_transition()
    assert machine.current is Screen.TITLE
    assert machine.pending is None


def test_initial_enter_hooks_run_once():
    machine = StateMachine(Screen.SPLASH)
    calls = []
    machine.on_enter(Screen.SPLASH, lambda: calls.append("enter"))
    assert machine.apply_transition() is True
    assert machine.apply_transition() is False
    assert calls == ["enter"]


def test_exit_runs_before_enter():
    machine = StateMachine(Menu.NONE)
    machine.apply_transition()
    calls = []
    machine.on_exit(Menu.NONE, lambda: calls.append(("exit", Menu.NONE)))
    machine.on_enter(Menu.MAIN, lambda: calls.append(("enter", Menu.MAIN)))
    machine.set(Menu.MAIN)
    machine.apply_transition()
    assert calls == [("exit", Menu.NONE), ("enter", Menu.MAIN)]
    assert machine.is_in(Menu.MAIN)
    assert not machine.is_in(Menu.NONE)


def test_setting_same_state_runs_no_hooks():
    machine = StateMachine(Menu.PAUSE)
    machine.apply_transition()
    calls = []
    machine.on_exit(Menu.PAUSE, lambda: calls.append("exit"))
    machine.on_enter(Menu.PAUSE, lambda: calls.append("enter"))
    machine.set(Menu.PAUSE)
    assert machine.apply_transition() is False
    assert calls == []


def test_last_request_wins():
    machine = StateMachine(Screen.SPLASH)
    machine.apply_transition()
    machine.set(Screen.LOADING)
    machine.set(Screen.GAMEPLAY)
    machine.apply_transition()
    assert machine.current is Screen.GAMEPLAY


def test_request_from_hook_is_deferred():
    machine = StateMachine(Screen.SPLASH)
    machine.apply_transition()
    machine.on_enter(Screen.TITLE, lambda: machine.set(Screen.LOADING))
    machine.set(Screen.TITLE)
    machine.apply_transition()
    assert machine.current is Screen.TITLE
    assert machine.pending is Screen.LOADING
    machine.apply_transition()
    assert machine.current is Screen.LOADING


def test_hooks_can_drive_another_machine():
    screens = StateMachine(Screen.SPLASH)
    menus = StateMachine(Menu.NONE)
    screens.on_enter(Screen.TITLE, lambda: menus.set(Menu.MAIN))
    screens.on_exit(Screen.TITLE, lambda: menus.set(Menu.NONE))
    screens.set(Screen.TITLE)
    screens.apply_transition()
    menus.apply_transition()
    assert menus.current is Menu.MAIN
    screens.set(Screen.GAMEPLAY)
    screens.apply_transition()
    menus.apply_transition()
    assert menus.current is Menu.NONE


def test_boolean_states():
    paused = StateMachine(False)
    entered = []
    paused.on_enter(True, lambda: entered.append(True))
    paused.set(True)
    paused.apply_transition()
    assert paused.is_in(True)
    assert entered == [True]


def test_on_enter_returns_callback():
    machine = StateMachine(Screen.SPLASH)

    def hook():
        pass

    assert machine.on_enter(Screen.TITLE, hook) is hook
    assert machine.on_exit(Screen.TITLE, hook) is hook


@pytest.mark.parametrize(
    "shuffled",
    [
        [AppSystems.UPDATE, AppSystems.TICK_TIMERS, AppSystems.RECORD_INPUT],
        [AppSystems.RECORD_INPUT, AppSystems.UPDATE, AppSystems.TICK_TIMERS],
    ],
)
def test_app_systems_order(shuffled):
    ordered = sorted(AppSystems(member.value) for member in shuffled)
    assert ordered == [
        AppSystems.TICK_TIMERS,
        AppSystems.RECORD_INPUT,
        AppSystems.UPDATE,
    ]
    assert ordered == list(AppSystems)