import json
from typing import Any, Callable, List

import httpx
import pytest

from ethermine import EthermineClient

SECRET = "c2VjcmV0LWtleS1mb3ItdGVzdHM="
WALLET = "0xabc123"


class Recorder:
    """Collects requests seen by a mock transport and replies with a canned response."""

    def __init__(self, reply: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []
        self.reply = reply

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.reply(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def json_reply(payload: Any, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    def reply(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=json.dumps(payload).encode())
    return reply


@pytest.fixture
def recorder() -> Recorder:
    return Recorder(json_reply({"status": "OK", "data": {"hashrate": 42}}))


@pytest.fixture
def make_client(recorder: Recorder):
    def factory(wallet: str = WALLET, **kwargs: Any) -> EthermineClient:
        return EthermineClient(wallet, http_client=recorder.client(), **kwargs)
    return factory
