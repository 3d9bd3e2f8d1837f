"""
Ledger of the targets generated during one run.

The ledger is shared by reference between a top-level generation and every
embedded generation it triggers. Entries are ordered by invocation: a slot is
reserved when a render starts and its target becomes visible once the render
has succeeded, so an outer target precedes the targets its template generated.
A failed render never becomes visible. Visible entries are never removed or
reordered.
"""

from __future__ import annotations

from typing import Iterator

from .target import Target


class _Pending:
    __slots__ = ("target",)

    def __init__(self, target: Target):
        self.target = target


class _Abandoned:
    __slots__ = ()


_ABANDONED = _Abandoned()


class Ledger:

    def __init__(self, targets=()):
        self._slots: list = list(targets)

    # --- slot protocol used by the generator ---------------------------------

    def reserve(self, target: Target) -> int:
        self._slots.append(_Pending(target))
        return len(self._slots) - 1

    def commit(self, slot: int) -> Target:
        entry = self._slots[slot]
        if not isinstance(entry, _Pending):
            raise RuntimeError(f"ledger slot {slot} is not pending")
        self._slots[slot] = entry.target
        return entry.target

    def abandon(self, slot: int) -> None:
        if isinstance(self._slots[slot], _Pending):
            self._slots[slot] = _ABANDONED

    def append(self, target: Target) -> None:
        self._slots.append(target)

    # --- read access ---------------------------------------------------------

    def _visible(self) -> list[Target]:
        return [entry for entry in self._slots if isinstance(entry, Target)]

    def __iter__(self) -> Iterator[Target]:
        return iter(self._visible())

    def __len__(self):
        return len(self._visible())

    def __getitem__(self, index):
        return self._visible()[index]

    def __repr__(self):
        return f"Ledger({len(self)} targets)"

    @property
    def destinations(self) -> list:
        return [t.destination for t in self._visible()]
