"""
Named-component registry used for diversity mechanisms and kernel backends.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Callable, Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")


def normalize_key(name: str) -> str:
    """Canonical form of a component name: lowercase, words joined by underscores.

    ``"Crowding Distance"``, ``"crowding-distance"`` and ``"crowding_distance"``
    all map to ``"crowding_distance"``.
    """
    return "_".join(name.strip().lower().replace("-", " ").replace("_", " ").split())


class Registry(Generic[T]):
    """
    Registry mapping canonical names to items.

    Keys are normalized with :func:`normalize_key` on registration and lookup,
    so callers may use spaced or hyphenated spellings. Supports decorator usage.
    """

    def __init__(self, name: str = "Registry") -> None:
        self._name = name
        self._items: dict[str, T] = {}

    @property
    def name(self) -> str:
        return self._name

    def register(self, key: str, item: T | None = None, *, override: bool = False) -> Callable[[T], T] | T:
        """
        Register an item with the given key.

        Args:
            key: The unique name for the item.
            item: The item to register. If None, returns a decorator.
            override: If True, overwrite existing key. If False, raise ValueError on duplicate.

        Returns:
            The registered item (if passed) or a decorator (if item is None).
        """
        canonical = normalize_key(key)

        def _do_register(obj: T) -> T:
            if canonical in self._items and not override:
                raise ValueError(f"Key '{canonical}' already exists in registry '{self._name}'")
            self._items[canonical] = obj
            return obj

        if item is None:
            return _do_register
        return _do_register(item)

    def get(self, key: str) -> T:
        """Retrieve an item by key, raising KeyError with close matches when missing."""
        canonical = normalize_key(key)
        if canonical not in self._items:
            hints = self.suggest(key)
            hint = f" Did you mean '{hints[0]}'?" if hints else ""
            raise KeyError(f"Key '{key}' not found in registry '{self._name}'.{hint}")
        return self._items[canonical]

    def suggest(self, key: str, n: int = 3) -> list[str]:
        """Return registered keys that look like ``key``."""
        return get_close_matches(normalize_key(key), list(self._items), n=n, cutoff=0.6)

    def list(self) -> list[str]:
        """Return a sorted list of registered keys."""
        return sorted(self._items.keys())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and normalize_key(key) in self._items

    def __getitem__(self, key: str) -> T:
        return self.get(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def items(self) -> Iterable[tuple[str, T]]:
        return self._items.items()


__all__ = ["Registry", "normalize_key"]
