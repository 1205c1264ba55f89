"""State and controller for the single weather screen.

``WeatherScreen`` owns a ``ScreenState`` and mutates it only through the
request routine. The routine itself runs as the LangGraph workflow from
``graph.py``; this module decides which results are allowed to land.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import asyncio
import logging

from .graph import AppResources, FetchState, build_graph
from .weather import TRANSPORT_FAILURE_MESSAGE, WeatherClient


TITLE = "🌤️ Simple Weather App"
INPUT_PLACEHOLDER = "Enter city name"
ACTION_LABEL = "GET WEATHER"

logger = logging.getLogger(__name__)


@dataclass
class ScreenState:
    """Transient UI state, recreated every time the screen is mounted."""

    city_query: str = ""
    temperature: Optional[float] = None
    is_loading: bool = False
    error_message: str = ""
    # City the current temperature belongs to, so typing doesn't relabel it.
    result_city: str = ""


@dataclass(frozen=True)
class ScreenView:
    """What the screen should draw, derived from ``ScreenState``."""

    error_text: Optional[str]
    city_text: Optional[str]
    temperature_text: Optional[str]


def format_temperature(temperature: float) -> str:
    return f"{temperature}°C"


def render_view(state: ScreenState) -> ScreenView:
    has_result = state.temperature is not None
    return ScreenView(
        error_text=state.error_message or None,
        city_text=state.result_city if has_result else None,
        temperature_text=format_temperature(state.temperature) if has_result else None,
    )


class WeatherScreen:
    """Controller behind the weather screen.

    Every trigger gets a request id. Only the latest id may write its result;
    older responses that arrive late are dropped. ``is_loading`` is cleared
    by the request that set it, so a stale completion cannot hide a newer
    request that is still in flight.
    """

    def __init__(self, client: WeatherClient | None = None) -> None:
        self.state = ScreenState()
        self.client = client or WeatherClient()
        self._graph = build_graph(
            AppResources(weather_client=self.client, on_request_start=self._begin_request)
        )
        self._latest_request = 0
        self._loading_request: int | None = None

    def set_city_query(self, text: str | None) -> None:
        self.state.city_query = text or ""

    def view(self) -> ScreenView:
        return render_view(self.state)

    async def get_weather(self) -> None:
        """Run the request routine for the current ``city_query``."""
        self._latest_request += 1
        request_id = self._latest_request
        query = self.state.city_query

        try:
            final = await self._graph.ainvoke({"query": query, "request_id": request_id})
            self._apply(request_id, query, final)
        finally:
            self._end_request(request_id)

    def get_weather_sync(self) -> None:
        """Drive ``get_weather`` from synchronous callers such as Streamlit."""
        asyncio.run(self.get_weather())

    def _begin_request(self, request_id: int) -> None:
        if request_id != self._latest_request:
            logger.debug("Request #%s superseded before it started", request_id)
            return
        self._loading_request = request_id
        self.state.is_loading = True
        self.state.error_message = ""
        self.state.temperature = None

    def _apply(self, request_id: int, query: str, final: FetchState) -> None:
        if request_id != self._latest_request:
            logger.debug("Discarding stale weather response #%s for %r", request_id, query)
            return

        outcome = final.get("outcome")
        if outcome == "success":
            self.state.temperature = final["temperature"]
            self.state.error_message = ""
            self.state.result_city = query.strip()
            return

        self.state.error_message = final.get("error") or TRANSPORT_FAILURE_MESSAGE
        if outcome == "failed":
            self.state.temperature = None

    def _end_request(self, request_id: int) -> None:
        if self._loading_request == request_id:
            self._loading_request = None
            self.state.is_loading = False
