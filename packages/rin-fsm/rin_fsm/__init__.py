"""rin-fsm - Finite state machines for instrument applications."""
from __future__ import annotations

from rin_fsm.config import MachineConfig
from rin_fsm.graph import DotRenderer, Edge, Graph, Guard, Node, Renderer, build_graph
from rin_fsm.machine import StateMachine
from rin_fsm.systems import make_fsm_system
from rin_fsm.types import ALL, DefinitionError, FSMError, Phase, State, Transition

__all__ = [
    "ALL",
    "StateMachine",
    "MachineConfig",
    "State",
    "Transition",
    "Phase",
    "FSMError",
    "DefinitionError",
    "Graph",
    "Node",
    "Edge",
    "Guard",
    "Renderer",
    "DotRenderer",
    "build_graph",
    "make_fsm_system",
]
