import pytest

from navproxy.exceptions import MalformedRequestError
from navproxy.models.domain import Geopoint
from navproxy.services.routing.translator import (
    get_destination,
    get_origin,
    parse_waypoints,
    translate_path,
)

CLIENT_PATH = (
    "/directions/v5/mapbox/driving/13.388860,52.517037;13.397634,52.529407;13.428555,52.523219"
    "?alternatives=true&geometries=polyline6&steps=true&access_token=pk.abc"
)


def test_translate_path_rewrites_prefix_and_replaces_query():
    assert translate_path(CLIENT_PATH) == (
        "/route/v1/driving/13.388860,52.517037;13.397634,52.529407;13.428555,52.523219"
        "?steps=true&annotations=true&overview=full&continue_straight=true"
    )


def test_translate_path_without_query():
    assert translate_path("/directions/v5/mapbox/walking/1,2;3,4") == (
        "/route/v1/walking/1,2;3,4?steps=true&annotations=true&overview=full&continue_straight=true"
    )


def test_translate_path_passes_unknown_prefix_through():
    assert translate_path("/other/thing?x=1") == (
        "/other/thing?steps=true&annotations=true&overview=full&continue_straight=true"
    )


def test_translate_path_custom_account():
    assert translate_path("/directions/v5/acme/driving/1,2;3,4", account="acme").startswith("/route/v1/driving/")


def test_parse_waypoints_origin_and_final_destination():
    waypoints = parse_waypoints(CLIENT_PATH)

    assert len(waypoints) == 3
    assert get_origin(CLIENT_PATH) == Geopoint(latitude=52.517037, longitude=13.388860)
    assert get_destination(CLIENT_PATH) == Geopoint(latitude=52.523219, longitude=13.428555)


@pytest.mark.parametrize(
    "path",
    [
        "/directions/v5/mapbox/driving/13.388860,52.517037",
        "/directions/v5/mapbox/driving/",
        "directions",
        "/directions/v5/mapbox/driving/13.38;52.51",
        "/directions/v5/mapbox/driving/abc,def;1,2",
    ],
)
def test_parse_waypoints_rejects_malformed_paths(path):
    with pytest.raises(MalformedRequestError):
        parse_waypoints(path)
