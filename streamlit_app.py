from __future__ import annotations

import logging
import streamlit as st

# Note: assuming the repository root is on the Python path
from weather_screen.config import settings
from weather_screen.screen import (
    ACTION_LABEL,
    INPUT_PLACEHOLDER,
    TITLE,
    WeatherScreen,
)


logging.basicConfig(level=settings.log_level, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

if not settings.openweather_api_key:
    logger.warning("OPENWEATHER_API_KEY is not set; every lookup will fail.")


def _get_screen() -> WeatherScreen:
    # One screen per browser session; that is the "mount".
    if "weather_screen" not in st.session_state:
        st.session_state["weather_screen"] = WeatherScreen()
    return st.session_state["weather_screen"]


def main() -> None:
    st.set_page_config(page_title="Simple Weather App", page_icon="🌤️")
    st.title(TITLE)

    screen = _get_screen()

    # Enter inside the form submits it, same as pressing the button; blur does not.
    with st.form("weather_form"):
        city = st.text_input(
            "City",
            placeholder=INPUT_PLACEHOLDER,
            key="city_query",
            label_visibility="collapsed",
        )
        submitted = st.form_submit_button(ACTION_LABEL, use_container_width=True)

    if submitted:
        screen.set_city_query(city)
        with st.spinner("Fetching weather..."):
            screen.get_weather_sync()

    view = screen.view()

    if view.error_text:
        st.error(view.error_text)

    if view.temperature_text is not None:
        with st.container(border=True):
            st.subheader(view.city_text)
            st.metric("Temperature", view.temperature_text)


if __name__ == "__main__":
    main()
