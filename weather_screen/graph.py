from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Optional, TypedDict
import asyncio
import logging

from langgraph.graph import END, StateGraph

from .weather import (
    TRANSPORT_FAILURE_MESSAGE,
    TransportError,
    ValidationError,
    WeatherAPIError,
    WeatherClient,
    parse_temperature,
    validate_city,
)


logger = logging.getLogger(__name__)


class FetchState(TypedDict, total=False):
    """State carried through one run of the request routine."""

    query: str
    request_id: int
    route: Literal["fetch", "rejected"]
    payload: Optional[dict]
    temperature: Optional[float]
    error: Optional[str]
    outcome: Literal["rejected", "success", "failed"]


@dataclass
class AppResources:
    """Collaborators the nodes need (weather client, loading hook)."""

    weather_client: WeatherClient
    on_request_start: Callable[[int], None]


def router_node(state: FetchState) -> FetchState:
    """Reject blank queries before anything touches the network."""
    try:
        validate_city(state.get("query"))
    except ValidationError as e:
        state["route"] = "rejected"
        state["outcome"] = "rejected"
        state["error"] = str(e)
        return state

    state["route"] = "fetch"
    return state


def start_node(resources: AppResources):
    async def _node(state: FetchState) -> FetchState:
        # Runs on the event loop so the screen state is only touched from there.
        resources.on_request_start(state["request_id"])
        return state

    return _node


def fetch_node(resources: AppResources):
    async def _node(state: FetchState) -> FetchState:
        try:
            payload = await asyncio.to_thread(
                resources.weather_client.fetch_payload, state["query"]
            )
        except Exception as e:  # transport, configuration and anything the client lets through
            logger.warning("Weather fetch for %r failed: %s", state["query"], e)
            state["payload"] = None
            state["outcome"] = "failed"
            state["error"] = TRANSPORT_FAILURE_MESSAGE
            return state

        state["payload"] = payload
        return state

    return _node


def interpret_node(state: FetchState) -> FetchState:
    try:
        temperature = parse_temperature(state.get("payload"))
    except WeatherAPIError as e:
        logger.info("Weather API rejected %r (cod=%s): %s", state["query"], e.code, e.message)
        state["outcome"] = "failed"
        state["error"] = e.message
        return state
    except TransportError as e:
        logger.warning("Malformed weather payload for %r: %s", state["query"], e)
        state["outcome"] = "failed"
        state["error"] = TRANSPORT_FAILURE_MESSAGE
        return state

    state["temperature"] = temperature
    state["outcome"] = "success"
    state["error"] = None
    return state


def build_graph(resources: AppResources):
    """Build and return the request routine as a compiled LangGraph workflow."""
    workflow = StateGraph(FetchState)
    workflow.add_node("router", router_node)
    workflow.add_node("start", start_node(resources))
    workflow.add_node("fetch", fetch_node(resources))
    workflow.add_node("interpret", interpret_node)
    workflow.set_entry_point("router")

    def route_decision(state: FetchState) -> str:
        return state["route"]

    def fetch_decision(state: FetchState) -> str:
        return "done" if state.get("outcome") == "failed" else "interpret"

    workflow.add_conditional_edges("router", route_decision, {"fetch": "start", "rejected": END})
    workflow.add_edge("start", "fetch")
    workflow.add_conditional_edges("fetch", fetch_decision, {"interpret": "interpret", "done": END})
    workflow.add_edge("interpret", END)

    return workflow.compile()
