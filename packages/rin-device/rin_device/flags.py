"""FlagBank - a named set of boolean instrument flags."""
from __future__ import annotations

from collections.abc import Hashable

from rin import canonical


def _key(flag: Hashable) -> Hashable:
    return canonical(flag) if isinstance(flag, str) else flag


class FlagBank:
    """Status bits, digital I/O or setpoint outputs.

    String flags are matched like state names (any case or spacing).
    ``all_set`` is the query a :class:`~rin_fsm.StateMachine` uses for its
    ``status``, ``io`` and ``setpoint`` guards; the bank itself is callable
    as a shorthand for it.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._active: set[Hashable] = set()

    @property
    def name(self) -> str:
        return self._name

    def set(self, *flags: Hashable) -> None:
        for flag in flags:
            self._active.add(_key(flag))

    def clear(self, *flags: Hashable) -> None:
        for flag in flags:
            self._active.discard(_key(flag))

    def assign(self, flag: Hashable, value: bool) -> None:
        if value:
            self.set(flag)
        else:
            self.clear(flag)

    def reset(self) -> None:
        """Clear every flag."""
        self._active.clear()

    def is_set(self, flag: Hashable) -> bool:
        return _key(flag) in self._active

    def all_set(self, *flags: Hashable) -> bool:
        """True iff every flag given is set. No flags is vacuously true."""
        return all(_key(flag) in self._active for flag in flags)

    __call__ = all_set

    def active(self) -> frozenset[Hashable]:
        return frozenset(self._active)

    def __repr__(self) -> str:
        return f"FlagBank({self._name!r}, active={sorted(map(str, self._active))})"
