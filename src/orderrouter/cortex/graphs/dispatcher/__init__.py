"""Message dispatcher graph."""

from .builder import build_dispatcher_graph, compile_dispatcher_graph
from .nodes import DispatcherNodes, fallback_text
from .state import DispatchState, initial_state

__all__ = [
    "DispatchState",
    "DispatcherNodes",
    "build_dispatcher_graph",
    "compile_dispatcher_graph",
    "fallback_text",
    "initial_state",
]
