# Encodes and decodes Google's encoded polyline format.
#
# Each coordinate is scaled by 10**precision, stored as a delta from the
# previous point, zig-zag signed and written as 5-bit chunks offset by 63.
# Every chunk except the last of a value carries the 0x20 continuation bit.

from api_structures import Coordinates

_OFFSET = 63
_CHUNK_BITS = 5
_CHUNK_MASK = 0x1F
_CONTINUATION = 0x20


class DecodeError(ValueError):
    """Raised when an encoded polyline string is malformed."""
    pass


def _decode_values(encoded: str) -> list[int]:
    values = []
    result = 0
    shift = 0
    in_value = False
    for index, char in enumerate(encoded):
        chunk = ord(char) - _OFFSET
        if chunk < 0 or chunk > 0x3F:
            raise DecodeError(
                f"Invalid character {char!r} at position {index} of encoded polyline.")
        result |= (chunk & _CHUNK_MASK) << shift
        shift += _CHUNK_BITS
        in_value = True
        if not chunk & _CONTINUATION:
            # Undo the zig-zag sign encoding.
            values.append(~(result >> 1) if result & 1 else result >> 1)
            result = 0
            shift = 0
            in_value = False
    if in_value:
        raise DecodeError("Encoded polyline ends in the middle of a value.")
    return values


def decode(encoded: str, precision: int = 5) -> list[Coordinates]:
    """
    Decodes an encoded polyline into an ordered list of Coordinates.
    Raises DecodeError on malformed input instead of returning a partial path.
    """
    values = _decode_values(encoded)
    if len(values) % 2:
        raise DecodeError(
            "Encoded polyline holds an odd number of values; a longitude is missing.")

    factor = 10 ** precision
    coordinates = []
    lat = 0
    lon = 0
    for i in range(0, len(values), 2):
        lat += values[i]
        lon += values[i + 1]
        point = Coordinates(lat=lat / factor, lon=lon / factor)
        if abs(point.lat) > 90 or abs(point.lon) > 180:
            raise DecodeError(
                f"Point {i // 2} of encoded polyline is out of range: {point.lat}, {point.lon}.")
        coordinates.append(point)
    return coordinates


def _encode_value(value: int) -> str:
    value = ~(value << 1) if value < 0 else value << 1
    chunks = []
    while value >= _CONTINUATION:
        chunks.append(chr((_CONTINUATION | (value & _CHUNK_MASK)) + _OFFSET))
        value >>= _CHUNK_BITS
    chunks.append(chr(value + _OFFSET))
    return "".join(chunks)


def encode(coordinates: list[Coordinates], precision: int = 5) -> str:
    """Encodes Coordinates into the polyline format understood by decode()."""
    factor = 10 ** precision
    output = []
    prev_lat = 0
    prev_lon = 0
    for point in coordinates:
        lat = round(point.lat * factor)
        lon = round(point.lon * factor)
        output.append(_encode_value(lat - prev_lat))
        output.append(_encode_value(lon - prev_lon))
        prev_lat, prev_lon = lat, lon
    return "".join(output)
