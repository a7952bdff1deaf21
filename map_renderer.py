# Draws the travel-time map: markers plus an optional route overlay, saved as HTML.

from dataclasses import dataclass

import folium

from api_structures import Coordinates

# Roughly a 0.05 degree window around the center.
DEFAULT_ZOOM = 13


@dataclass
class MapMarker:
    coords: Coordinates
    label: str


@dataclass
class PathStyle:
    color: str = "blue"
    weight: int = 5


def build_route_map(center: Coordinates, markers: list[MapMarker],
                    path: list[Coordinates] | None = None,
                    style: PathStyle | None = None,
                    zoom: int = DEFAULT_ZOOM) -> folium.Map:
    """Builds a folium map centered on `center` with the given markers and path."""
    m = folium.Map(location=[center.lat, center.lon], zoom_start=zoom)

    for marker in markers:
        folium.Marker(
            [marker.coords.lat, marker.coords.lon],
            tooltip=marker.label,
            popup=marker.label,
        ).add_to(m)

    if path:
        style = style or PathStyle()
        folium.PolyLine(
            [[point.lat, point.lon] for point in path],
            color=style.color,
            weight=style.weight,
        ).add_to(m)

    return m


def render_travel_map(screen) -> folium.Map | None:
    """
    Builds the map for a TravelTimeScreen: the current location, the
    destination once a route was fetched, and the route itself.
    Returns None while the current location is unknown.
    """
    if screen.location is None:
        return None

    markers = [MapMarker(screen.location, "Current location")]
    path = None
    if screen.route:
        markers.append(MapMarker(screen.route.destination, "Destination"))
        path = screen.route.path
    return build_route_map(screen.location, markers, path)


def save_route_map(m: folium.Map, output_path: str) -> str:
    m.save(output_path)
    return output_path
