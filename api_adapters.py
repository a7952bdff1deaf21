# Contains the adapter classes for communicating with external directions and weather APIs.

import requests
import os
from abc import ABC, abstractmethod
from dotenv import load_dotenv

from api_structures import (
    Coordinates, ErrorKind, FetchResult, RouteResult, TravelMode, WeatherSummary)
from polyline_codec import decode

# --- API Configuration ---
# Keys are read from environment variables for security.
load_dotenv()
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")
OPENWEATHER_API_KEY = os.getenv("OPENWEATHER_API_KEY")
WEATHER_LANG = os.getenv("WEATHER_LANG", "en")

# Seconds to wait for any single API response.
REQUEST_TIMEOUT_SEC = 10

# Maps OpenWeather's condition category ('weather[0].main') to a glyph.
WEATHER_EMOJI = {
    "Clear": "☀️",
    "Clouds": "☁️",
    "Rain": "🌧️",
    "Snow": "❄️",
    "Thunderstorm": "⛈️",
    "Drizzle": "🌦️",
    "Mist": "🌫️",
    "Fog": "🌫️",
    "Haze": "🌫️",
}
DEFAULT_WEATHER_EMOJI = "🌈"


def get_weather_emoji(category: str) -> str:
    """Returns the emoji for a weather category, or the default for anything unmapped."""
    return WEATHER_EMOJI.get(category, DEFAULT_WEATHER_EMOJI)


class DirectionsAdapter(ABC):
    """
    Abstract Base Class (blueprint) for directions clients.
    """
    @abstractmethod
    def get_route(self, origin: Coordinates, destination: str, mode: TravelMode) -> FetchResult[RouteResult]:
        """Calculates a route to a free-text destination and returns our standard RouteResult."""
        pass


class WeatherAdapter(ABC):
    """
    Abstract Base Class (blueprint) for weather clients.
    """
    @abstractmethod
    def get_current_weather(self, coords: Coordinates) -> FetchResult[WeatherSummary]:
        """Fetches the current conditions and returns our standard WeatherSummary."""
        pass


class GoogleDirectionsAdapter(DirectionsAdapter):
    """The adapter for the Google Directions API."""
    DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"

    def __init__(self, api_key: str | None = None, verbose: bool = False):
        self.api_key = api_key or GOOGLE_API_KEY
        self.verbose = verbose
        if not self.api_key:
            raise ValueError(
                "FATAL ERROR: The GOOGLE_API_KEY environment variable is not set.")

    def get_route(self, origin: Coordinates, destination: str, mode: TravelMode) -> FetchResult[RouteResult]:
        params = {
            'origin': origin.as_query(),
            'destination': destination,
            'mode': mode.value,
            'key': self.api_key
        }
        if self.verbose:
            print(
                f"   > [Google] GET {self.DIRECTIONS_URL} origin={params['origin']} "
                f"destination='{destination}' mode={mode.value}")
        try:
            response = requests.get(
                self.DIRECTIONS_URL, params=params, timeout=REQUEST_TIMEOUT_SEC)
            response.raise_for_status()
            data = response.json()
            if not data.get('routes'):
                print(
                    f"   > [Google] No route found to '{destination}'. Status: {data.get('status')}")
                return FetchResult.failure(ErrorKind.NO_ROUTE_FOUND)

            route = data['routes'][0]
            leg = route['legs'][0]
            end_location = leg['end_location']
            # *** NORMALIZATION to our standard RouteResult object ***
            return FetchResult.success(RouteResult(
                duration_text=leg['duration']['text'],
                path=decode(route['overview_polyline']['points']),
                destination=Coordinates(
                    lat=end_location['lat'], lon=end_location['lng']),
                travel_mode=mode,
            ))
        except requests.exceptions.RequestException as e:
            print(f"   > [Google] A network error occurred for route calculation: {e}")
            return FetchResult.failure(ErrorKind.NETWORK_OR_PARSE_ERROR)
        except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
            # ValueError covers invalid JSON and a malformed polyline; AttributeError a non-object body.
            print(
                f"   > [Google] Error parsing Directions API response for '{destination}': {e!r}")
            return FetchResult.failure(ErrorKind.NETWORK_OR_PARSE_ERROR)


class OpenWeatherAdapter(WeatherAdapter):
    """The adapter for the OpenWeather current weather API."""
    WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(self, api_key: str | None = None, lang: str | None = None, verbose: bool = False):
        self.api_key = api_key or OPENWEATHER_API_KEY
        self.lang = lang or WEATHER_LANG
        self.verbose = verbose
        if not self.api_key:
            raise ValueError(
                "FATAL ERROR: The OPENWEATHER_API_KEY environment variable is not set.")

    def get_current_weather(self, coords: Coordinates) -> FetchResult[WeatherSummary]:
        params = {
            'lat': coords.lat,
            'lon': coords.lon,
            'appid': self.api_key,
            'units': 'metric',
            'lang': self.lang
        }
        if self.verbose:
            print(
                f"   > [OpenWeather] GET {self.WEATHER_URL} lat={coords.lat} lon={coords.lon} lang={self.lang}")
        try:
            response = requests.get(
                self.WEATHER_URL, params=params, timeout=REQUEST_TIMEOUT_SEC)
            response.raise_for_status()
            data = response.json()
            condition = data['weather'][0]
            # *** NORMALIZATION to our standard WeatherSummary object ***
            return FetchResult.success(WeatherSummary(
                emoji=get_weather_emoji(condition['main']),
                description=condition['description'],
                temperature_c=float(data['main']['temp']),
            ))
        except requests.exceptions.RequestException as e:
            print(f"   > [OpenWeather] A network error occurred fetching the weather: {e}")
            return FetchResult.failure(ErrorKind.NETWORK_OR_PARSE_ERROR)
        except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
            print(f"   > [OpenWeather] Error parsing weather response: {e!r}")
            return FetchResult.failure(ErrorKind.NETWORK_OR_PARSE_ERROR)
