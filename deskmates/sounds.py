"""Playback of a mascot's sound effects, one at a time."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Protocol

log = logging.getLogger(__name__)


class SoundEffect(Protocol):
    """A loaded sound that can be started and stopped."""

    def play(self) -> None: ...

    def stop(self) -> None: ...

    def is_playing(self) -> bool: ...


EffectFactory = Callable[[Path], SoundEffect]


class SoundEffectManager:
    """Finds sound files in search paths, caches them and plays one at a time.

    Without a ``backend`` there is no audio output: playing does nothing and
    the manager always reports that a sound is playing.
    """

    def __init__(
        self,
        search_paths: Iterable[str | os.PathLike[str]] = (),
        backend: EffectFactory | None = None,
    ) -> None:
        self.search_paths: list[Path] = [Path(p) for p in search_paths]
        self._backend = backend
        self._loaded: dict[str, SoundEffect] = {}
        self._active: SoundEffect | None = None

    def resolve(self, name: str) -> Path | None:
        """Return the first existing file called ``name`` in the search paths."""
        for directory in self.search_paths:
            candidate = Path(os.path.normpath(directory / name))
            if candidate.exists():
                return candidate
        return None

    def play(self, name: str) -> bool:
        """Stop the current sound and start ``name``; return whether it started."""
        if self._backend is None:
            return False
        effect = self._loaded.get(name)
        if effect is None:
            path = self.resolve(name)
            if path is None:
                log.warning("Could not load effect: %s", name)
                return False
            effect = self._backend(path)
            self._loaded[name] = effect
        self.stop()
        effect.play()
        self._active = effect
        return True

    def playing(self) -> bool:
        if self._backend is None:
            return True
        return self._active is not None and self._active.is_playing()

    def stop(self) -> None:
        if self._active is not None:
            self._active.stop()
            self._active = None