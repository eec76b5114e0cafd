"""Graph export - a renderer-neutral model of a machine and a DOT renderer."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from rin_fsm.machine import StateMachine


@dataclass(frozen=True)
class Node:
    ref: str
    label: str
    initial: bool = False
    current: bool = False


@dataclass(frozen=True)
class Guard:
    """One guard on an edge. ``kind`` is time, event, cond, status, io or setpoint."""

    kind: str
    text: str


@dataclass(frozen=True)
class Edge:
    source: str
    dest: str
    name: str
    guards: tuple[Guard, ...] = ()


@dataclass(frozen=True)
class Graph:
    name: str
    nodes: tuple[Node, ...]
    edges: tuple[Edge, ...]


class Renderer(Protocol):
    def render(self, graph: Graph) -> str: ...


_FLAG_PREFIX = {"status": "", "io": "IO ", "setpoint": "SP "}


def build_graph(machine: StateMachine, show_current: bool = False) -> Graph:
    """Describe every state and transition of ``machine`` in definition order."""
    initial, current = machine.initial, machine.current
    states = machine.states
    nodes = tuple(
        Node(
            ref=s.ref,
            label=s.name,
            initial=s is initial,
            current=show_current and s is current,
        )
        for s in states
    )

    edges: list[Edge] = []
    for s in states:
        for t in s.transitions:
            guards: list[Guard] = []
            if t.time:
                guards.append(Guard("time", f"t={t.time:g}"))
            if t.event is not None:
                guards.append(Guard("event", machine.event_name(t.event)))
            if t.cond is not None:
                guards.append(Guard("cond", t.cond_name or "Cond"))
            for family, flags in t.flag_requirements():
                guards.extend(Guard(family, f"{_FLAG_PREFIX[family]}{f}") for f in flags)
            edges.append(Edge(s.ref, states[t.dest].ref, t.name, tuple(guards)))

    return Graph(machine.name, nodes, tuple(edges))


class DotRenderer:
    """Graphviz DOT output, ``dot -Tpdf machine.dot > machine.pdf``."""

    # Colour-blind safe palette
    INITIAL = "#F0E442"
    COLORS: dict[str, str] = {
        "time": "#009E73",
        "event": "#D55E00",
        "cond": "#0072B2",
        "status": "#CC79A7",
        "io": "#56B4E9",
        "setpoint": "#E69F00",
    }

    def render(self, graph: Graph) -> str:
        lines = [
            f"digraph {_quote(graph.name)} {{",
            f" graph [label={_quote(graph.name)}, labelloc=t, fontsize=20];",
        ]
        for node in graph.nodes:
            label = _escape(node.label) + ("\\ncurrent" if node.current else "")
            attrs = f'label="{label}"'
            if node.initial:
                attrs += f' style=filled color="{self.INITIAL}"'
            lines.append(f" {_quote(node.ref)} [{attrs} fontsize=14];")

        for edge in graph.edges:
            line = f"  {_quote(edge.source)} -> {_quote(edge.dest)}"
            if edge.guards:
                colors: list[str] = []
                for g in edge.guards:
                    color = self.COLORS.get(g.kind)
                    if color and color not in colors:
                        colors.append(color)
                label = "\\n".join(_escape(g.text) for g in edge.guards)
                line += (
                    f' [color="{":".join(colors)}" label="{label}" fontsize=10]'
                )
            lines.append(line + ";")
        lines.append("}")
        return "\n".join(lines) + "\n"


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _quote(text: str) -> str:
    return '"' + _escape(text) + '"'
