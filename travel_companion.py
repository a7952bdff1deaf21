# Main script: a console host for the travel-time and weather screens.

import os
import argparse
from dotenv import load_dotenv

from api_adapters import GoogleDirectionsAdapter, OpenWeatherAdapter
from api_structures import Coordinates
from location_provider import GoogleLocationProvider
from map_renderer import render_travel_map, save_route_map
from screens import TravelTimeScreen, WeatherScreen


def display_route(screen: TravelTimeScreen):
    """Prints the travel time, or the error message from the last fetch."""
    if screen.status_message:
        print(f"\n! {screen.status_message}")
    if screen.route:
        print(f"\nTravel time ({screen.route.travel_mode.value}): {screen.route.duration_text}")


def display_weather(screen: WeatherScreen):
    if screen.error_message:
        print(f"\n! {screen.error_message}")
        return
    print(f"\n{screen.address_text}")
    print(screen.weather_text)


# --- Screens ---

def run_travel_time(screen: TravelTimeScreen, map_output: str):
    """Asks for destinations until an empty one is entered."""
    print("\nLocating you...")
    if not screen.locate():
        print(f"! {screen.status_message}")
        return
    print(f"Current location: {screen.location.lat:.5f}, {screen.location.lon:.5f}")

    while True:
        destination = input("\nEnter a destination (leave empty to quit): ").strip()
        if not destination:
            break
        screen.set_destination(destination)

        mode_input = input(
            f"Travel mode [driving/walking] [Default: {screen.travel_mode.value}]: ").strip()
        if mode_input:
            try:
                screen.set_travel_mode(mode_input)
            except ValueError as e:
                print(e)
                continue

        result = screen.get_route()
        display_route(screen)

        if result and result.ok:
            saved = save_route_map(render_travel_map(screen), map_output)
            print(f"Map with the route saved to {saved}")


def run_weather(screen: WeatherScreen):
    """Shows the weather, refreshing on Enter until 'q' is entered."""
    print("\nLoading...")
    screen.load()
    display_weather(screen)

    while True:
        choice = input("\nPress Enter to refresh or 'q' to quit: ").strip().lower()
        if choice == "q":
            break
        print("Refreshing...")
        screen.refresh()
        display_weather(screen)


if __name__ == '__main__':
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Travel Companion: travel times and current weather for where you are.")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help="Enable verbose mode to see the exact API calls being made.")
    parser.add_argument('--lat', type=float,
                        help="Use this latitude instead of looking up your location.")
    parser.add_argument('--lon', type=float,
                        help="Use this longitude instead of looking up your location.")
    parser.add_argument('-y', '--yes', action='store_true',
                        help="Grant location permission without asking.")
    parser.add_argument('--map-out', default=os.getenv("MAP_OUTPUT", "route_map.html"),
                        help="HTML file the route map is written to.")
    args = parser.parse_args()

    if (args.lat is None) != (args.lon is None):
        parser.error("--lat and --lon must be given together.")
    fixed_coords = None
    if args.lat is not None:
        fixed_coords = Coordinates(lat=args.lat, lon=args.lon)

    print("Welcome to Travel Companion.")
    print("Check how long it takes to get somewhere, or what the weather is like right here.\n")

    print("Select a screen:")
    print("1. Travel Time (Default)")
    print("2. Weather")
    screen_choice = input("Enter your choice [1]: ") or "1"

    try:
        location_provider = GoogleLocationProvider(
            consent=True if args.yes else None,
            fixed_coords=fixed_coords,
            verbose=args.verbose)
        if screen_choice == '2':
            weather_screen = WeatherScreen(
                location_provider, OpenWeatherAdapter(verbose=args.verbose))
        else:
            if screen_choice != '1':
                print("Invalid choice. Showing Travel Time by default.")
            travel_screen = TravelTimeScreen(
                location_provider, GoogleDirectionsAdapter(verbose=args.verbose))
    except ValueError as e:
        print(e)
        exit()

    if screen_choice == '2':
        run_weather(weather_screen)
    else:
        run_travel_time(travel_screen, args.map_out)
