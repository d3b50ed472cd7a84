"""Tracking of resources that become available once their assets load."""

from __future__ import annotations

from collections import deque
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple

Loader = Callable[[], Optional[Any]]


class ResourceHandles:
    """Queue of named resources waiting for their assets.

    A loader is polled on each :meth:`update`; it returns the finished
    resource, or None while its assets are still loading. A resource is
    available through :meth:`get` only once its loader has produced it.
    """

    def __init__(self) -> None:
        self._waiting: Deque[Tuple[str, Loader]] = deque()
        self._finished: List[str] = []
        self._resources: Dict[str, Any] = {}

    @property
    def waiting(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self._waiting)

    @property
    def finished(self) -> Tuple[str, ...]:
        return tuple(self._finished)

    def load_resource(self, name: str, loader: Loader) -> "ResourceHandles":
        """Queue ``loader`` to produce the resource called ``name``."""
        self._waiting.append((name, loader))
        return self

    def update(self) -> List[str]:
        """Poll every waiting loader once; return names that finished now."""
        done: List[str] = []
        for _ in range(len(self._waiting)):
            name, loader = self._waiting.popleft()
            value = loader()
            if value is None:
                self._waiting.append((name, loader))
            else:
                self._resources[name] = value
                self._finished.append(name)
                done.append(name)
        return done

    def is_all_done(self) -> bool:
        """True once every requested resource has been loaded."""
        return not self._waiting

    def get(self, name: str) -> Any:
        """Return a loaded resource; raise KeyError if it is not ready."""
        try:
            return self._resources[name]
        except KeyError:
            raise KeyError(f"resource {name!r} is not loaded") from None

    def __contains__(self, name: object) -> bool:
        return name in self._resources