# Supplies the current location and its address to the screens.

import requests
from abc import ABC, abstractmethod

from api_adapters import GOOGLE_API_KEY, REQUEST_TIMEOUT_SEC
from api_structures import AddressComponents, Coordinates, ErrorKind, FetchResult


class LocationProvider(ABC):
    """
    Abstract Base Class (blueprint) for location sources.
    """
    @abstractmethod
    def request_permission(self) -> bool:
        """Asks for permission to use the location. True means granted."""
        pass

    @abstractmethod
    def get_current_coordinates(self) -> Coordinates | None:
        """Returns the current position, or None if no fix could be obtained."""
        pass

    @abstractmethod
    def reverse_geocode(self, coords: Coordinates) -> FetchResult[AddressComponents | None]:
        """
        Returns the address at the coordinates. A successful result holds None
        when there is no address there; a failed one means the lookup broke.
        """
        pass


class GoogleLocationProvider(LocationProvider):
    """
    Locates the user with the Google Geolocation API and reverse geocodes
    with the Google Geocoding API.

    Permission is asked on the console the first time it is needed and the
    answer is remembered. Passing `consent` answers it up front. Passing
    `fixed_coords` skips the Geolocation lookup entirely.
    """
    GEOLOCATION_URL = "https://www.googleapis.com/geolocation/v1/geolocate"
    GEOCODING_URL = "https://maps.googleapis.com/maps/api/geocode/json"

    # Geocoding component type -> AddressComponents field.
    COMPONENT_FIELDS = {
        'administrative_area_level_1': 'region',
        'locality': 'city',
        'route': 'street',
    }

    def __init__(self, api_key: str | None = None, consent: bool | None = None,
                 fixed_coords: Coordinates | None = None, verbose: bool = False):
        self.api_key = api_key or GOOGLE_API_KEY
        self.consent = consent
        self.fixed_coords = fixed_coords
        self.verbose = verbose
        if not self.api_key:
            raise ValueError(
                "FATAL ERROR: The GOOGLE_API_KEY environment variable is not set.")

    def request_permission(self) -> bool:
        if self.consent is None:
            answer = input("Allow this app to use your location? [Y/n]: ") or "y"
            self.consent = answer.strip().lower() in ("y", "yes")
        return self.consent

    def get_current_coordinates(self) -> Coordinates | None:
        if self.fixed_coords:
            return self.fixed_coords

        if self.verbose:
            print(f"   > [Google] POST {self.GEOLOCATION_URL} considerIp=true")
        try:
            response = requests.post(
                self.GEOLOCATION_URL,
                params={'key': self.api_key},
                json={'considerIp': True},
                timeout=REQUEST_TIMEOUT_SEC)
            response.raise_for_status()
            location = response.json()['location']
            return Coordinates(lat=location['lat'], lon=location['lng'])
        except requests.exceptions.RequestException as e:
            print(f"   > [Google] Error connecting to Geolocation API: {e}")
            return None
        except (AttributeError, KeyError, TypeError, ValueError):
            print("   > [Google] Error parsing Geolocation API response.")
            return None

    def reverse_geocode(self, coords: Coordinates) -> FetchResult[AddressComponents | None]:
        params = {
            'latlng': coords.as_query(),
            'key': self.api_key
        }
        if self.verbose:
            print(f"   > [Google] GET {self.GEOCODING_URL} latlng={params['latlng']}")
        try:
            response = requests.get(
                self.GEOCODING_URL, params=params, timeout=REQUEST_TIMEOUT_SEC)
            response.raise_for_status()
            data = response.json()
            status = data.get('status')
            if status == 'ZERO_RESULTS' or (status == 'OK' and not data.get('results')):
                print(f"   > [Google] No address found for {coords.as_query()}.")
                return FetchResult.success(None)
            if status != 'OK':
                print(
                    f"   > [Google] Geocoding API refused the request for {coords.as_query()}. Status: {status}")
                return FetchResult.failure(ErrorKind.NETWORK_OR_PARSE_ERROR)

            address = AddressComponents()
            for component in data['results'][0]['address_components']:
                for component_type in component['types']:
                    field_name = self.COMPONENT_FIELDS.get(component_type)
                    if field_name and getattr(address, field_name) is None:
                        setattr(address, field_name, component['long_name'])
            return FetchResult.success(address)
        except requests.exceptions.RequestException as e:
            print(f"   > [Google] Error connecting to Google Geocoding API: {e}")
            return FetchResult.failure(ErrorKind.NETWORK_OR_PARSE_ERROR)
        except (AttributeError, KeyError, IndexError, TypeError, ValueError):
            print(
                f"   > [Google] Error parsing Google Geocoding API response for: {coords.as_query()}")
            return FetchResult.failure(ErrorKind.NETWORK_OR_PARSE_ERROR)
