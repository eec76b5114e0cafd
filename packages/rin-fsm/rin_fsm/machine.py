"""StateMachine - definition, evaluation and execution of a finite state machine."""
from __future__ import annotations

import logging
import os
import time
from collections.abc import Iterable
from typing import Any, Callable, TextIO

from rin import canonical
from rin_fsm.config import MachineConfig
from rin_fsm.graph import DotRenderer, Graph, Renderer, build_graph
from rin_fsm.guards import find_transition
from rin_fsm.types import (
    ALL,
    DefinitionError,
    FlagQuery,
    Flags,
    Phase,
    State,
    Transition,
    noop,
)

logger = logging.getLogger(__name__)

DisplayWrite = Callable[[str, str], Any]


class StateMachine:
    """A finite state machine driven one tick at a time.

    States and transitions are added with chained calls::

        fsm = (
            StateMachine("weigh")
            .add_state("idle", enter=show_idle)
            .add_state("run")
            .add_transition("idle", "run", event="start")
            .add_transition("all", "idle", event="reset")
        )

    and the application loop calls ``fsm.run()`` once per tick.

    The first state added becomes current straight away and its ``enter``
    callback runs during ``add_state``.  Transitions are tried in the order
    they were added and the first one whose guards all hold is taken.

    A transition from ``"all"`` is copied onto every state that exists *when
    the transition is added*, except its destination.  States added later do
    not get it, so define every state before any ``"all"`` transition.

    ``enter``, ``leave`` and ``activate`` callbacks cannot raise or clear
    events.  To do that from a callback, defer it, e.g.
    ``scheduler.defer(fsm.raise_event, "done")``.

    Definition mistakes raise :class:`DefinitionError`.  Mistakes at run time
    (unknown events or states, events changed from a callback) are logged and
    the call returns False without changing anything.
    """

    def __init__(
        self,
        name: str = "FSM",
        config: MachineConfig | None = None,
        *,
        now: Callable[[], float] = time.monotonic,
        status: FlagQuery | None = None,
        io: FlagQuery | None = None,
        setpoint: FlagQuery | None = None,
        display: DisplayWrite | None = None,
    ) -> None:
        self._name = name
        self._config = config or MachineConfig()
        self._now = now
        self._queries: dict[str, FlagQuery | None] = {
            "status": status,
            "io": io,
            "setpoint": setpoint,
        }
        self._display = display

        self._states: list[State] = []
        self._index: dict[str, int] = {}
        self._events: dict[str, int] = {}
        self._event_names: list[str] = []
        self._raised: set[int] = set()
        self._current: int | None = None
        self._phase = Phase.IDLE
        self._warned_no_state = False

        if self._config.show_state and display is None:
            logger.warning(
                "FSM (%s): show_state is set but there is no display", name
            )

    def __repr__(self) -> str:
        return f"StateMachine({self._name!r}, state={self.get_state()!r})"

    # --- Properties ---

    @property
    def name(self) -> str:
        return self._name

    @property
    def config(self) -> MachineConfig:
        return self._config

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def states(self) -> tuple[State, ...]:
        """All states in definition order."""
        return tuple(self._states)

    @property
    def initial(self) -> State | None:
        return self._states[0] if self._states else None

    @property
    def current(self) -> State | None:
        return None if self._current is None else self._states[self._current]

    @property
    def events(self) -> tuple[str, ...]:
        """Canonical names of every event used by a transition."""
        return tuple(self._event_names)

    @property
    def raised(self) -> frozenset[str]:
        return frozenset(self._event_names[h] for h in self._raised)

    def state(self, name: str) -> State | None:
        """Look up a state by name (any case or spacing)."""
        handle = self._index.get(canonical(name))
        return None if handle is None else self._states[handle]

    def event_name(self, handle: int) -> str:
        return self._event_names[handle]

    def _ename(self, op: str) -> str:
        return f"FSM {op} ({self._name}):"

    # --- Definition ---

    def add_state(
        self,
        name: str,
        *,
        short: str | None = None,
        enter: Callable[[str | None], Any] | None = None,
        leave: Callable[[str], Any] | None = None,
        run: Callable[[], Any] | None = None,
    ) -> StateMachine:
        """Add a state. The first state added becomes current immediately.

        ``enter(previous)`` is called when the state becomes current,
        ``leave(next)`` when it stops being current and ``run()`` on every
        tick while it is current.  ``short`` is the label shown on the
        display and defaults to the upper-cased name.
        """
        if name is None or not str(name).strip():
            raise DefinitionError(f"{self._ename('state')} a state needs a name")
        name = str(name)
        ref = canonical(name)
        if ref == ALL:
            raise DefinitionError(f"{self._ename('state')} state '{name}' is reserved")
        if ref in self._index:
            raise DefinitionError(f"{self._ename('state')} state '{name}' already defined")

        state = State(
            name=name,
            ref=ref,
            handle=len(self._states),
            short=name.upper() if short is None else str(short),
            enter=self._callback("state", name, "enter", enter),
            leave=self._callback("state", name, "leave", leave),
            run=self._callback("state", name, "run", run),
        )
        self._states.append(state)
        self._index[ref] = state.handle

        if self._current is None:
            self._change(state, None)
        return self

    def add_transition(
        self,
        source: str,
        dest: str,
        *,
        name: str | None = None,
        cond: Callable[[], bool] | None = None,
        cond_name: str | None = None,
        time: float | None = None,
        event: str | None = None,
        status: Any = None,
        io: Any = None,
        setpoint: Any = None,
        activate: Callable[[str | None], Any] | None = None,
    ) -> StateMachine:
        """Add a transition from ``source`` (a state or ``"all"``) to ``dest``.

        Guards, all of which must hold:

        - ``cond``: zero-argument predicate.
        - ``time``: seconds the source state must have been current.
        - ``event``: an event that must have been raised.
        - ``status``, ``io``, ``setpoint``: one flag or a list of flags that
          must all be set, checked through the machine's flag queries.

        ``activate(previous)`` runs once the machine is in ``dest`` but
        before ``dest``'s ``enter``.

        Raises :class:`DefinitionError` for an unknown ``source`` or ``dest``,
        a negative ``time``, a non-callable ``cond`` or ``activate``, and for
        flag guards of a family the machine was built without a query for.
        """
        src_ref = canonical(source)
        dest_ref = canonical(dest)
        if name is None:
            name = f"{source}-{dest}"

        if src_ref != ALL and src_ref not in self._index:
            raise DefinitionError(f"{self._ename('trans')} unknown from state for {name}")
        if dest_ref not in self._index:
            raise DefinitionError(
                f"{self._ename('trans')} unknown destination state for {name}"
            )
        if time is not None and time < 0:
            raise DefinitionError(f"{self._ename('trans')} negative time for {name}")

        requirements = {
            "status": _as_flags(status),
            "io": _as_flags(io),
            "setpoint": _as_flags(setpoint),
        }
        for family, flags in requirements.items():
            if flags and self._queries[family] is None:
                raise DefinitionError(
                    f"{self._ename('trans')} {name} needs {family} flags "
                    f"but the machine has no {family} source"
                )

        if cond is not None and not callable(cond):
            raise DefinitionError(f"{self._ename('trans')} cond for {name} is not callable")

        t = Transition(
            name=name,
            dest=self._index[dest_ref],
            cond=cond,
            cond_name=cond_name,
            time=time,
            event=None if event is None else self._register_event(event),
            activate=self._callback("trans", name, "activate", activate),
            **requirements,
        )

        if src_ref == ALL:
            for state in self._states:
                if state.handle != t.dest:
                    state.transitions.append(t)
        else:
            self._states[self._index[src_ref]].transitions.append(t)
        return self

    def _callback(
        self, op: str, owner: str, kind: str, fn: Callable[..., Any] | None
    ) -> Callable[..., Any]:
        if fn is None:
            return noop
        if not callable(fn):
            raise DefinitionError(f"{self._ename(op)} {kind} for {owner} is not callable")
        return fn

    def _register_event(self, event: str) -> int:
        ref = canonical(event)
        if ref not in self._events:
            self._events[ref] = len(self._event_names)
            self._event_names.append(ref)
        return self._events[ref]

    # --- Execution ---

    def _call(self, phase: Phase, fn: Callable[..., Any], *args: Any) -> None:
        previous = self._phase
        self._phase = phase
        try:
            fn(*args)
        finally:
            self._phase = previous

    def _show(self, text: str) -> None:
        if self._display is None:
            return
        try:
            self._display(self._config.display_field, text)
        except Exception:
            logger.warning(
                "%s cannot show state '%s'", self._ename("display"), text, exc_info=True
            )

    def _change(self, dest: State, between: Callable[[str | None], Any] | None) -> None:
        if self._config.trace:
            logger.info("%s state = %s", self._name, dest.name)
        self._raised.clear()

        previous = None
        if self._current is not None:
            old = self._states[self._current]
            previous = old.name
            self._call(Phase.LEAVING, old.leave, dest.name)

        self._current = dest.handle
        dest.activated_at = self._now()
        if self._config.show_state:
            self._show(dest.short)

        if between is not None:
            self._call(Phase.ACTIVATING, between, previous)
        self._call(Phase.ENTERING, dest.enter, previous)

    def run(self) -> bool:
        """Advance one tick. Returns True if a transition was taken.

        Runs the current state's ``run`` callback, then takes the first
        transition whose guards hold.  Exceptions from callbacks propagate.
        """
        if self._current is None:
            if not self._warned_no_state:
                logger.error("%s No current state", self._ename("run"))
                self._warned_no_state = True
            return False

        self._states[self._current].run()
        # run may have changed state
        state = self._states[self._current]
        t = find_transition(state, self._now(), self._raised, self._queries)
        if t is None:
            return False
        if self._config.trace:
            logger.info("%s trans %s", self._name, t.name)
        self._change(self._states[t.dest], t.activate)
        return True

    def get_state(self) -> str | None:
        """Name of the current state, as it was defined, or None."""
        current = self.current
        return None if current is None else current.name

    def set_state(self, name: str) -> bool:
        """Jump straight to a state, ignoring transitions.

        ``leave`` and ``enter`` are still called and raised events are
        cleared.
        """
        handle = self._index.get(canonical(name))
        if handle is None:
            logger.error("%s Unknown state %s", self._ename("setState"), name)
            return False
        self._change(self._states[handle], None)
        return True

    def reset(self) -> bool:
        """Return to the first state defined, as :meth:`set_state` does."""
        if not self._states:
            logger.error("%s No states defined", self._ename("reset"))
            return False
        self._change(self._states[0], None)
        return True

    # --- Events ---

    def _event_handle(self, op: str, verb: str, event: str) -> int | None:
        if self._phase is not Phase.IDLE:
            logger.error(
                "%s Event '%s' cannot be %s within activate, enter or leave",
                self._ename(self._phase.value), event, verb,
            )
            return None
        handle = self._events.get(canonical(event))
        if handle is None:
            logger.error("%s Event '%s' is not defined", self._ename(op), event)
            return None
        return handle

    def raise_event(self, event: str) -> bool:
        """Raise an event. It stays raised until cleared or the state changes."""
        handle = self._event_handle("raise", "raised", event)
        if handle is None:
            return False
        self._raised.add(handle)
        return True

    def clear_event(self, event: str) -> bool:
        handle = self._event_handle("clear", "cleared", event)
        if handle is None:
            return False
        self._raised.discard(handle)
        return True

    def is_raised(self, event: str) -> bool:
        handle = self._events.get(canonical(event))
        return handle is not None and handle in self._raised

    # --- Export ---

    def graph(self, show_current: bool = False) -> Graph:
        return build_graph(self, show_current)

    def dump(
        self,
        sink: str | os.PathLike[str] | TextIO,
        show_current: bool = False,
        renderer: Renderer | None = None,
    ) -> StateMachine:
        """Write the machine as a Graphviz DOT graph (or via ``renderer``).

        ``sink`` is a path or a writable text stream.  Render a file with
        ``dot -Tpdf machine.dot > machine.pdf``.
        """
        text = (renderer or DotRenderer()).render(self.graph(show_current))
        if isinstance(sink, (str, os.PathLike)):
            with open(sink, "w", encoding="utf-8") as f:
                f.write(text)
        else:
            sink.write(text)
        return self


def _as_flags(value: Any) -> Flags:
    """Normalise a flag requirement: None, one flag, or an iterable of flags."""
    if value is None:
        return ()
    if isinstance(value, (str, bytes, int)) or not isinstance(value, Iterable):
        return (value,)
    return tuple(value)
