"""Shared fixtures: an in-memory Port API behind httpx.MockTransport."""

import json

import httpx
import pytest

from portai.models import Credentials
from portai.port_client import PortClient

SAMPLE_SSE = (
    "event: invocationIdentifier\n"
    "data: abc-123\n"
    "\n"
    "event: execution\n"
    "data: step 1 done\n"
    "\n"
    "event: done\n"
    'data: {"ok":true}\n'
    "\n"
)


class FakePortAPI:
    """Records every request and answers like the Port API would."""

    def __init__(self):
        self.requests = []
        self.token = "tok-123"
        self.token_status = 200
        self.token_payload = None
        self.token_raw = None
        self.token_error = None
        self.invoke_status = 200
        self.sse_body = SAMPLE_SSE
        self.invocation = {"status": "completed", "response": "All good"}
        self.invocation_raw = None
        self.invoke_error = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/v1/auth/access_token":
            if self.token_error is not None:
                raise self.token_error
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"message": "invalid credentials"})
            if self.token_raw is not None:
                return httpx.Response(200, text=self.token_raw)
            payload = self.token_payload if self.token_payload is not None else {"accessToken": self.token}
            return httpx.Response(200, json=payload)

        if self.invoke_error is not None:
            raise self.invoke_error

        if self.invoke_status != 200:
            return httpx.Response(self.invoke_status, text="upstream exploded")

        if request.method == "GET":
            if self.invocation_raw is not None:
                return httpx.Response(200, text=self.invocation_raw)
            return httpx.Response(200, json=self.invocation)

        return httpx.Response(200, text=self.sse_body, headers={"content-type": "text/event-stream"})

    def client(self) -> PortClient:
        return PortClient(transport=httpx.MockTransport(self.handler))

    @property
    def invocation_requests(self):
        return [r for r in self.requests if r.url.path != "/v1/auth/access_token"]

    @staticmethod
    def body(request: httpx.Request):
        return json.loads(request.content) if request.content else None


@pytest.fixture
def fake_api():
    return FakePortAPI()


@pytest.fixture
def credentials():
    return Credentials(clientId="client-id", clientSecret="client-secret", baseUrl="https://api.example.com/v1/")
