# Defines the standardized, internal data structures for the application.

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Coordinates:
    """A standardized representation of geographic coordinates."""
    lat: float
    lon: float

    def as_query(self) -> str:
        """Formats the coordinates as the 'lat,lon' string the Google APIs expect."""
        return f"{self.lat},{self.lon}"


class TravelMode(Enum):
    DRIVING = "driving"
    WALKING = "walking"

    @classmethod
    def parse(cls, value: str) -> "TravelMode":
        """Accepts the wire value in any case, e.g. 'Walking'."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(mode.value for mode in cls)
            raise ValueError(
                f"Unknown travel mode '{value}'. Choose one of: {choices}.") from None


@dataclass
class RouteResult:
    """A standardized representation of a fetched route."""
    duration_text: str
    path: list[Coordinates]
    destination: Coordinates
    travel_mode: TravelMode = TravelMode.DRIVING


@dataclass
class WeatherSummary:
    emoji: str
    description: str
    temperature_c: float

    def format(self) -> str:
        return f"{self.emoji} {self.description} ({self.temperature_c:.1f}°C)"


@dataclass
class AddressComponents:
    """The parts of a reverse-geocoded address the weather screen shows."""
    region: str | None = None
    city: str | None = None
    street: str | None = None

    def format(self) -> str:
        # Region, city and street run together without separators.
        return f"{self.region or ''}{self.city or ''}{self.street or ''}"


class ErrorKind(Enum):
    PERMISSION_DENIED = "permission_denied"
    LOCATION_UNAVAILABLE = "location_unavailable"
    NO_ROUTE_FOUND = "no_route_found"
    NETWORK_OR_PARSE_ERROR = "network_or_parse_error"


class FetchState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class FetchResult(Generic[T]):
    """
    The outcome of a single fetch: either a value or the kind of error that
    prevented it. The rendering layer decides how to present the error.
    """
    value: T | None = None
    error: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "FetchResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind) -> "FetchResult[T]":
        return cls(error=error)
