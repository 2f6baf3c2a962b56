"""
Header-derived column names, keyed by 1-based field position.

Filled once while the header row is parsed, then frozen.  Lookups for a
position without a name return ``None`` so the caller simply omits the
``column`` attribute.
"""

from __future__ import annotations

from csvsax.configs.exceptions import RegistryError


class ColumnNameRegistry:
    def __init__(self) -> None:
        self._names: dict[int, str] = {}
        self._frozen = False

    def bind(self, position: int, name: str) -> None:
        """
        Record ``name`` for ``position``.

        Raises:
            RegistryError: If the registry is frozen or ``position`` already
                           has a name.
        """
        if self._frozen:
            raise RegistryError(
                f"Column registry is frozen; cannot bind position {position}."
            )
        if position in self._names:
            raise RegistryError(f"Column position {position} is already bound.")
        self._names[position] = name

    def get(self, position: int) -> str | None:
        return self._names.get(position)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def names(self) -> list[str]:
        """Column names in header order."""
        return [self._names[p] for p in sorted(self._names)]

    def clear(self) -> None:
        """Forget every name and unfreeze (used when the generator is recycled)."""
        self._names.clear()
        self._frozen = False

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, position: object) -> bool:
        return position in self._names

    def __repr__(self) -> str:
        return f"ColumnNameRegistry({self._names!r}, frozen={self._frozen})"
