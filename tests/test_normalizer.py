from navproxy.services.routing.normalizer import normalize_result

import payloads


def test_normalize_result_adds_uuid_and_strips_annotations():
    original = payloads.response(
        [
            payloads.route([payloads.leg([payloads.step([payloads.intersection(13.4, 52.5)])], annotation=True)]),
            payloads.route([payloads.leg([payloads.step([payloads.intersection(13.5, 52.6)])], annotation=True)]),
        ]
    )

    normalized = normalize_result(original)

    assert normalized["uuid"]
    assert all("annotation" not in leg for route in normalized["routes"] for leg in route["legs"])
    # the engine payload is left untouched
    assert "uuid" not in original
    assert all("annotation" in leg for route in original["routes"] for leg in route["legs"])


def test_normalize_result_uses_given_request_id():
    assert normalize_result({"code": "Ok", "routes": []}, request_id="abc")["uuid"] == "abc"


def test_normalize_result_gives_each_response_its_own_uuid():
    first = normalize_result({"code": "Ok", "routes": []})
    second = normalize_result({"code": "Ok", "routes": []})
    assert first["uuid"] != second["uuid"]


def test_normalize_result_keeps_legs_without_annotation():
    original = payloads.response([payloads.route([payloads.leg([payloads.step([payloads.intersection(13.4, 52.5)])])])])

    normalized = normalize_result(original)

    assert normalized["routes"] == original["routes"]
    assert normalized["code"] == "Ok"
