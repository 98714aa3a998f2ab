"""Builder for the message dispatcher graph.

    checkout → [end|navigation]
    navigation → [end|checkout_trigger]
    checkout_trigger → [end|responder]
    responder → END
"""

from __future__ import annotations

import logging
from typing import Any

from langgraph.graph import END, StateGraph

from .nodes import DispatcherNodes
from .routing import after_checkout, after_checkout_trigger, after_navigation
from .state import DispatchState

logger = logging.getLogger(__name__)


def build_dispatcher_graph(nodes: DispatcherNodes) -> StateGraph:
    """Wire the routing priority: checkout, navigation, checkout trigger, responder."""
    workflow = StateGraph(DispatchState)

    workflow.add_node("checkout", nodes.checkout)
    workflow.add_node("navigation", nodes.navigation)
    workflow.add_node("checkout_trigger", nodes.checkout_trigger)
    workflow.add_node("responder", nodes.responder)

    workflow.set_entry_point("checkout")
    workflow.add_conditional_edges(
        "checkout",
        after_checkout,
        {"end": END, "navigation": "navigation"},
    )
    workflow.add_conditional_edges(
        "navigation",
        after_navigation,
        {"end": END, "checkout_trigger": "checkout_trigger"},
    )
    workflow.add_conditional_edges(
        "checkout_trigger",
        after_checkout_trigger,
        {"end": END, "responder": "responder"},
    )
    workflow.add_edge("responder", END)

    return workflow


def compile_dispatcher_graph(nodes: DispatcherNodes) -> Any:
    """Compile and return the dispatcher graph."""
    graph = build_dispatcher_graph(nodes).compile()
    logger.debug("Dispatcher graph compiled")
    return graph


__all__ = ["build_dispatcher_graph", "compile_dispatcher_graph"]
