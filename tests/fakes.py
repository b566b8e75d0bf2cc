#Description: Recording fake HTTP transport for adapter and service tests.

import json

import httpx


class Recorder:
    """Answers every request with one canned response and keeps what it saw."""

    def __init__(self, status: int = 200, payload=None, text: str | None = None):
        self.status = status
        self.text = text if text is not None else json.dumps(
            {"code": "0", "msg": "", "data": payload if payload is not None else []}
        )
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, text=self.text)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)
