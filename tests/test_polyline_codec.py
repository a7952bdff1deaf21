import pytest

from api_structures import Coordinates
from polyline_codec import DecodeError, decode, encode

REFERENCE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"


def test_decode_reference_polyline() -> None:
    assert decode(REFERENCE) == [
        Coordinates(lat=38.5, lon=-120.2),
        Coordinates(lat=40.7, lon=-120.95),
        Coordinates(lat=43.252, lon=-126.453),
    ]


def test_decode_empty_string_is_empty_path() -> None:
    assert decode("") == []


def test_encode_reference_points() -> None:
    points = [
        Coordinates(lat=38.5, lon=-120.2),
        Coordinates(lat=40.7, lon=-120.95),
        Coordinates(lat=43.252, lon=-126.453),
    ]
    assert encode(points) == REFERENCE


def test_round_trip_within_precision() -> None:
    points = [
        Coordinates(lat=35.681236, lon=139.767125),
        Coordinates(lat=35.689487, lon=139.691706),
        Coordinates(lat=-33.868820, lon=151.209296),
        Coordinates(lat=0.0, lon=0.0),
    ]
    decoded = decode(encode(points))
    assert len(decoded) == len(points)
    for original, result in zip(points, decoded):
        assert result.lat == pytest.approx(original.lat, abs=1e-5)
        assert result.lon == pytest.approx(original.lon, abs=1e-5)


def test_decode_with_higher_precision() -> None:
    points = [Coordinates(lat=47.1234567, lon=8.7654321)]
    decoded = decode(encode(points, precision=6), precision=6)
    assert decoded[0].lat == pytest.approx(47.123457, abs=1e-6)
    assert decoded[0].lon == pytest.approx(8.765432, abs=1e-6)


def test_decode_rejects_character_outside_alphabet() -> None:
    with pytest.raises(DecodeError):
        decode("_p~iF ~ps|U")


def test_decode_rejects_truncated_value() -> None:
    # Dropping the final '@' leaves '`' with its continuation bit set.
    with pytest.raises(DecodeError):
        decode(REFERENCE[:-1])


def test_decode_rejects_missing_longitude() -> None:
    with pytest.raises(DecodeError):
        decode("_p~iF")


def test_decode_error_is_a_value_error() -> None:
    assert issubclass(DecodeError, ValueError)


def test_decode_rejects_latitude_out_of_range() -> None:
    encoded = encode([Coordinates(lat=12.5, lon=3.0), Coordinates(lat=95.0, lon=3.0)])
    with pytest.raises(DecodeError, match="out of range"):
        decode(encoded)


def test_decode_rejects_longitude_out_of_range() -> None:
    encoded = encode([Coordinates(lat=0.0, lon=-181.0)])
    with pytest.raises(DecodeError, match="out of range"):
        decode(encoded)


def test_decode_accepts_poles_and_antimeridian() -> None:
    points = [Coordinates(lat=90.0, lon=180.0), Coordinates(lat=-90.0, lon=-180.0)]
    assert decode(encode(points)) == points
