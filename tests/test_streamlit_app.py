from __future__ import annotations

from unittest.mock import patch

from streamlit.testing.v1 import AppTest

from weather_screen.weather import EMPTY_CITY_MESSAGE, WeatherClient


APP_PATH = "../streamlit_app.py"

PAYLOADS = {
    "London": {"cod": 200, "main": {"temp": 18.5}},
    "Paris": {"cod": 200, "main": {"temp": 25}},
    "Zzzzz": {"cod": "404", "message": "city not found"},
}


def _app() -> AppTest:
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.run()
    return at


def _submit(at: AppTest, city: str | None = None) -> None:
    # Enter in the field and the button both submit the same form.
    if city is not None:
        at.text_input(key="city_query").input(city)
    at.button[0].click().run()


def test_page_renders_without_result():
    with patch.object(WeatherClient, "fetch_payload", side_effect=PAYLOADS.get) as mock_fetch:
        at = _app()

    assert not at.exception
    assert at.button[0].label == "GET WEATHER"
    assert len(at.error) == 0
    assert len(at.metric) == 0
    mock_fetch.assert_not_called()


def test_submit_shows_city_and_temperature():
    with patch.object(WeatherClient, "fetch_payload", side_effect=PAYLOADS.get) as mock_fetch:
        at = _app()
        _submit(at, "London")

    assert not at.exception
    mock_fetch.assert_called_once_with("London")
    assert at.subheader[0].value == "London"
    assert at.metric[0].value == "18.5°C"
    assert len(at.error) == 0


def test_submitting_same_city_again_fetches_again():
    with patch.object(WeatherClient, "fetch_payload", side_effect=PAYLOADS.get) as mock_fetch:
        at = _app()
        _submit(at, "London")
        _submit(at)

    assert [c.args[0] for c in mock_fetch.call_args_list] == ["London", "London"]


def test_editing_without_submit_does_not_fetch_or_replace_result():
    with patch.object(WeatherClient, "fetch_payload", side_effect=PAYLOADS.get) as mock_fetch:
        at = _app()
        _submit(at, "London")
        at.text_input(key="city_query").input("Paris").run()

    assert [c.args[0] for c in mock_fetch.call_args_list] == ["London"]
    assert at.subheader[0].value == "London"
    assert at.metric[0].value == "18.5°C"


def test_blank_submit_shows_validation_error_without_fetching():
    with patch.object(WeatherClient, "fetch_payload", side_effect=PAYLOADS.get) as mock_fetch:
        at = _app()
        _submit(at, "   ")

    mock_fetch.assert_not_called()
    assert at.error[0].value == EMPTY_CITY_MESSAGE
    assert len(at.metric) == 0


def test_api_error_is_shown_instead_of_result():
    with patch.object(WeatherClient, "fetch_payload", side_effect=PAYLOADS.get):
        at = _app()
        _submit(at, "London")
        _submit(at, "Zzzzz")

    assert at.error[0].value == "city not found"
    assert len(at.metric) == 0
