import pytest

from ethermine import ApiError, UnknownApiError, normalize_response


def test_marked_error_raises_api_error():
    with pytest.raises(ApiError) as excinfo:
        normalize_response({"error": ["Einvalid_nonce"]})
    assert excinfo.value.codes == ["invalid_nonce"]
    assert str(excinfo.value) == "invalid_nonce"
    assert excinfo.value.code == "API_ERROR"


def test_multiple_codes_are_joined_and_unmarked_entries_dropped():
    with pytest.raises(ApiError) as excinfo:
        normalize_response({"error": ["EGeneral:Invalid", "Wwarning", "EAPI:Rate limit"]})
    assert excinfo.value.codes == ["General:Invalid", "API:Rate limit"]
    assert str(excinfo.value) == "General:Invalid, API:Rate limit"


def test_unmarked_errors_raise_unknown_api_error():
    with pytest.raises(UnknownApiError) as excinfo:
        normalize_response({"error": ["foo"]})
    assert excinfo.value.errors == ["foo"]
    assert excinfo.value.code == "UNKNOWN_API_ERROR"


@pytest.mark.parametrize(
    "payload",
    [
        {"error": [], "result": {"a": 1}},
        {"status": "OK", "data": {"hashrate": 1}},
        {"error": None},
        [1, 2, 3],
        "plain",
    ],
)
def test_success_payload_is_returned_unchanged(payload):
    assert normalize_response(payload) is payload
