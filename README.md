# Commune

Commune is a small desktop card table built on pygame. Three coloured cards
sit between two trays. Drag a card over a tray and it goes into a slot there.
Each tray keeps its cards in a row and eases them into place.

## Installing

```
pip install .
```

## Playing

```
commune
```

Options:

- `--dev` turns on development tools. Screen changes are logged, and the
  backquote key (`` ` ``) outlines every button and label on the open menu.
- `--assets DIR` sets the directory that sounds and images load from. The
  default is `assets`.
- `--width N` and `--height N` set the window size. The default is 1280x720.
- `--frames N` stops the game after N frames.

The game opens on a splash screen that fades in and out for 1.8 seconds. Press
Escape to skip it. The title screen shows the main menu:

- **Play** starts the game. If the sounds are still loading, a "Loading..."
  screen shows first.
- **Settings** sets the master volume from 0% to 300%, in steps of 10%.
- **Credits** lists who made the game and where the assets come from.
- **Exit** closes the game.

During play:

- Press the left mouse button on a card and drag it. Every card under the
  pointer moves together. Move the pointer over a tray to put the card in the
  slot nearest the pointer. If the card was in another tray, it leaves that
  tray.
- Press `P` or `Escape` to pause. The table dims and the pause menu opens,
  with **Continue**, **Settings** and **Quit to title**. Press `P` again to
  close any open menu and play on.
- In the credits and settings menus, `Escape` goes back. From settings that
  means the main menu on the title screen and the pause menu during play.

## Assets

Sounds and the splash image load from the asset directory:

- `audio/music/Fluffing A Duck.ogg` (loaded for the level, but not played)
- `audio/music/Monkeys Spinning Monkeys.ogg` (plays while the credits are open)
- `audio/sound_effects/button_hover.ogg` and `button_click.ogg` (menu buttons)
- `images/splash.png` (the splash screen)

A missing or unreadable sound stays silent, and a missing splash image leaves
the splash screen blank. The game still runs in both cases.

## Using the parts

The game logic can be used without a window:

- `commune.states.StateMachine` holds one state. Changes queued with `set`
  take effect on `apply_transition`, which runs the `on_enter` and `on_exit`
  hooks.
- `commune.cards.Card` and `commune.tray.Tray` hold the table. `Tray.add_card`
  inserts a card at the slot under an x position, and `Tray.update_cards`
  eases cards toward their slots.
- `commune.settings` has the volume steps (`lower_volume`, `raise_volume`),
  the percentage label (`volume_label`) and `back_menu`.
- `commune.assets.ResourceHandles` polls loaders until each resource is
  ready.

## What it does not do

There are no game rules. There is no scoring, no turn order and no dealing.
Nothing is saved between runs, and the volume setting resets to 100% on each
start.

## Running the tests

```
pip install .[test]
pytest
```