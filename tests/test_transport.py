import httpx
import pytest

from ethermine import NetworkError, ParseError
from ethermine.transport import Transport

from .conftest import Recorder, json_reply


def make_transport(recorder: Recorder) -> Transport:
    return Transport(timeout=1.0, user_agent="test-agent", client=recorder.client())


@pytest.mark.asyncio
async def test_get_sends_params_as_query():
    recorder = Recorder(json_reply({"data": 1}))
    result = await make_transport(recorder).request(
        "https://pool.test/poolStats", {"b": 2, "a": "x y"}, "GET"
    )
    assert result == {"data": 1}
    request = recorder.requests[0]
    assert request.method == "GET"
    assert str(request.url) == "https://pool.test/poolStats?a=x%20y&b=2"
    assert request.headers["User-Agent"] == "test-agent"
    assert request.content == b""


@pytest.mark.asyncio
async def test_post_sends_form_body_and_headers():
    recorder = Recorder(json_reply({"data": 1}))
    await make_transport(recorder).request(
        "https://pool.test/account", {"nonce": 5}, "POST", {"API-Key": "k"}
    )
    request = recorder.requests[0]
    assert request.method == "POST"
    assert request.content == b"nonce=5"
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert request.headers["API-Key"] == "k"
    assert request.headers["User-Agent"] == "test-agent"


@pytest.mark.asyncio
async def test_timeout_becomes_network_error():
    def reply(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(NetworkError) as excinfo:
        await make_transport(Recorder(reply)).request("https://pool.test/poolStats")
    assert excinfo.value.timeout is True
    assert isinstance(excinfo.value.__cause__, httpx.ReadTimeout)


@pytest.mark.asyncio
async def test_connection_failure_becomes_network_error():
    def reply(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError) as excinfo:
        await make_transport(Recorder(reply)).request("https://pool.test/poolStats")
    assert excinfo.value.timeout is False
    assert excinfo.value.code == "NETWORK_ERROR"


@pytest.mark.asyncio
async def test_non_json_body_raises_parse_error():
    recorder = Recorder(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
    with pytest.raises(ParseError) as excinfo:
        await make_transport(recorder).request("https://pool.test/poolStats")
    assert excinfo.value.body == "<html>oops</html>"


@pytest.mark.asyncio
async def test_server_error_without_error_list_raises_network_error():
    recorder = Recorder(lambda request: httpx.Response(502, content=b"Bad Gateway"))
    with pytest.raises(NetworkError) as excinfo:
        await make_transport(recorder).request("https://pool.test/poolStats")
    assert excinfo.value.status_code == 502


@pytest.mark.asyncio
async def test_error_status_with_error_list_is_returned_for_normalizing():
    recorder = Recorder(json_reply({"error": ["EAPI:Invalid key"]}, status_code=403))
    payload = await make_transport(recorder).request("https://pool.test/account", verb="POST")
    assert payload == {"error": ["EAPI:Invalid key"]}


@pytest.mark.asyncio
async def test_unsupported_verb():
    with pytest.raises(ValueError):
        await make_transport(Recorder(json_reply({}))).request("https://pool.test/x", verb="PUT")


@pytest.mark.asyncio
async def test_injected_client_is_not_closed():
    client = Recorder(json_reply({})).client()
    transport = Transport(client=client)
    await transport.close()
    assert not client.is_closed
    await client.aclose()


@pytest.mark.asyncio
async def test_pre_encoded_body_is_sent_verbatim():
    recorder = Recorder(json_reply({}))
    await make_transport(recorder).request(
        "https://pool.test/account", {"ignored": 1}, "POST", encoded="z=1&a=2"
    )
    assert recorder.requests[0].content == b"z=1&a=2"
