# Screen controllers: each owns the state one screen renders and runs the
# fetch sequence behind it.

from api_adapters import DirectionsAdapter, WeatherAdapter
from api_structures import (
    Coordinates, ErrorKind, FetchResult, FetchState, RouteResult, TravelMode)
from location_provider import LocationProvider

UNKNOWN_ADDRESS = "Unknown location"

ROUTE_ERROR_MESSAGES = {
    ErrorKind.PERMISSION_DENIED: "Location permission is required.",
    ErrorKind.LOCATION_UNAVAILABLE: "Could not determine your current location.",
    ErrorKind.NO_ROUTE_FOUND: "No route could be found.",
    ErrorKind.NETWORK_OR_PARSE_ERROR: "An error occurred while fetching the route.",
}

WEATHER_PERMISSION_MESSAGE = "Location permission is required."
WEATHER_ERROR_MESSAGE = "Failed to fetch data."


class _SingleFlight:
    """
    Hands out a generation token per request. Only the completion holding the
    latest token may update screen state; older ones are stale.
    """

    def __init__(self):
        self._generation = 0

    def begin(self) -> int:
        self._generation += 1
        return self._generation

    def is_current(self, token: int) -> bool:
        return token == self._generation


class TravelTimeScreen:
    """State and actions behind the travel-time screen."""

    def __init__(self, location_provider: LocationProvider, directions: DirectionsAdapter):
        self.location_provider = location_provider
        self.directions = directions

        self.location: Coordinates | None = None
        self.destination = ""
        self.travel_mode = TravelMode.DRIVING
        self.route: RouteResult | None = None
        self.state = FetchState.IDLE
        self.error: ErrorKind | None = None
        self._flight = _SingleFlight()

    def locate(self) -> bool:
        """Obtains the current location. Returns True once a fix is known."""
        if not self.location_provider.request_permission():
            self._fail(ErrorKind.PERMISSION_DENIED)
            return False

        coords = self.location_provider.get_current_coordinates()
        if coords is None:
            self._fail(ErrorKind.LOCATION_UNAVAILABLE)
            return False

        self.location = coords
        return True

    def set_destination(self, destination: str):
        self.destination = destination

    def set_travel_mode(self, mode: TravelMode | str):
        self.travel_mode = mode if isinstance(mode, TravelMode) else TravelMode.parse(mode)

    def get_route(self) -> FetchResult[RouteResult] | None:
        """
        Fetches the route to the current destination with the current travel
        mode. Does nothing and returns None while the location is unknown or
        the destination is blank.

        A successful result replaces duration, path and destination together.
        A failure records the error and keeps the previously shown route.
        A result that completes after a newer request started is discarded.
        """
        destination = self.destination.strip()
        if self.location is None or not destination:
            return None

        token = self._flight.begin()
        self.state = FetchState.LOADING
        try:
            result = self.directions.get_route(self.location, destination, self.travel_mode)

            if not self._flight.is_current(token):
                print(f"   > Discarding stale route result for '{destination}'.")
                return result

            if result.ok:
                self.route = result.value
                self.state = FetchState.SUCCESS
                self.error = None
            else:
                self._fail(result.error)
            return result
        finally:
            # An exception escaping the fetch must not leave the screen loading.
            if self._flight.is_current(token) and self.state is FetchState.LOADING:
                self._fail(ErrorKind.NETWORK_OR_PARSE_ERROR)

    @property
    def status_message(self) -> str | None:
        if self.error is None:
            return None
        return ROUTE_ERROR_MESSAGES[self.error]

    def _fail(self, error: ErrorKind):
        self.state = FetchState.ERROR
        self.error = error


class WeatherScreen:
    """State and actions behind the weather screen."""

    def __init__(self, location_provider: LocationProvider, weather: WeatherAdapter):
        self.location_provider = location_provider
        self.weather = weather

        self.address_text = ""
        self.weather_text = ""
        self.loading = False
        self.refreshing = False
        self.state = FetchState.IDLE
        self.error: ErrorKind | None = None
        self._flight = _SingleFlight()

    def load(self) -> FetchResult[str]:
        """Runs the full sequence behind the loading indicator."""
        return self._run(refreshing=False)

    def refresh(self) -> FetchResult[str]:
        """Runs the full sequence again behind the refresh indicator."""
        return self._run(refreshing=True)

    @property
    def error_message(self) -> str | None:
        if self.error is None:
            return None
        if self.error is ErrorKind.PERMISSION_DENIED:
            return WEATHER_PERMISSION_MESSAGE
        return WEATHER_ERROR_MESSAGE

    def _run(self, refreshing: bool) -> FetchResult[str]:
        token = self._flight.begin()
        if refreshing:
            self.refreshing = True
        else:
            self.loading = True
        self.state = FetchState.LOADING
        self.error = None

        try:
            address_text, result = self._fetch()

            if not self._flight.is_current(token):
                print("   > Discarding stale weather result.")
                return result

            if address_text is not None:
                self.address_text = address_text
            if result.ok:
                self.weather_text = result.value
                self.state = FetchState.SUCCESS
            else:
                self.state = FetchState.ERROR
                self.error = result.error
            return result
        finally:
            if self._flight.is_current(token):
                if self.state is FetchState.LOADING:
                    self.state = FetchState.ERROR
                    self.error = ErrorKind.NETWORK_OR_PARSE_ERROR
                self.loading = False
                self.refreshing = False

    def _fetch(self) -> tuple[str | None, FetchResult[str]]:
        """Returns the address text (None if never reached) and the weather text."""
        if not self.location_provider.request_permission():
            return None, FetchResult.failure(ErrorKind.PERMISSION_DENIED)

        coords = self.location_provider.get_current_coordinates()
        if coords is None:
            return None, FetchResult.failure(ErrorKind.LOCATION_UNAVAILABLE)

        address = self.location_provider.reverse_geocode(coords)
        if not address.ok:
            return None, FetchResult.failure(address.error)
        address_text = (address.value.format() if address.value else "") or UNKNOWN_ADDRESS

        summary = self.weather.get_current_weather(coords)
        if not summary.ok:
            return address_text, FetchResult.failure(summary.error)
        return address_text, FetchResult.success(summary.value.format())
