"""Categorised audio playback with a global volume."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, List


class PlaybackMode(enum.Enum):
    """How an instance behaves when its sound ends."""

    LOOP = "loop"
    DESPAWN = "despawn"


class Category(enum.Enum):
    """Organisational group a sound belongs to."""

    MUSIC = "music"
    SOUND_EFFECT = "sound_effect"


@dataclass
class AudioInstance:
    """A sound together with how and where it plays.

    ``sound`` is anything with ``play(loops=...)`` returning a channel
    that offers ``set_volume`` and ``get_busy``, such as a pygame Sound.
    """

    sound: Any
    mode: PlaybackMode
    category: Category
    volume: float = 1.0
    channel: Any = field(default=None, compare=False)


def music(sound: Any) -> AudioInstance:
    """A looping instance in the music category."""
    return AudioInstance(sound, PlaybackMode.LOOP, Category.MUSIC)


def sound_effect(sound: Any) -> AudioInstance:
    """A one-shot instance in the sound-effect category."""
    return AudioInstance(sound, PlaybackMode.DESPAWN, Category.SOUND_EFFECT)


class AudioMixer:
    """Plays instances and keeps them in step with the global volume."""

    def __init__(self, global_volume: float = 1.0) -> None:
        self.global_volume = global_volume
        self._instances: List[AudioInstance] = []

    @property
    def instances(self) -> List[AudioInstance]:
        return list(self._instances)

    def play(self, instance: AudioInstance) -> AudioInstance:
        """Start ``instance`` and keep track of it."""
        loops = -1 if instance.mode is PlaybackMode.LOOP else 0
        instance.channel = instance.sound.play(loops=loops)
        self._apply_volume(instance)
        self._instances.append(instance)
        return instance

    def set_global_volume(self, volume: float) -> None:
        """Change the global volume and apply it to running instances."""
        self.global_volume = volume
        for instance in self._instances:
            self._apply_volume(instance)

    def remove_finished(self) -> List[AudioInstance]:
        """Drop one-shot instances that stopped playing; return them."""
        finished = [
            inst
            for inst in self._instances
            if inst.mode is PlaybackMode.DESPAWN
            and (inst.channel is None or not inst.channel.get_busy())
        ]
        self._instances = [inst for inst in self._instances if inst not in finished]
        return finished

    def _apply_volume(self, instance: AudioInstance) -> None:
        if instance.channel is not None:
            instance.channel.set_volume(self.global_volume * instance.volume)