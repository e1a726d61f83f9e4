"""Shared test helpers for cpanel_uploader tests."""

from __future__ import annotations

from typing import Any

import httpx


def api2_success(data: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    """Build an API2 envelope reporting success."""
    return {"cpanelresult": {"event": {"result": 1}, "data": data or []}}


def api2_failure(reason: str) -> dict[str, Any]:
    """Build an API2 envelope reporting failure with a reason."""
    return {
        "cpanelresult": {
            "event": {"result": 0},
            "data": [{"result": 0, "reason": reason}],
        }
    }


def uapi_success() -> dict[str, Any]:
    return {"status": 1, "errors": None, "messages": None, "data": {"succeeded": 1}}


def uapi_failure(*errors: str) -> dict[str, Any]:
    return {"status": 0, "errors": list(errors), "messages": None, "data": None}


class FakeCpanel:
    """Mock cPanel server recording every request it receives.

    Responses are queued per endpoint key: "mkdir", "fileop" or "upload".
    A queued value may be a dict (JSON body), an httpx.Response, or an
    exception instance to raise.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: dict[str, list[Any]] = {"mkdir": [], "fileop": [], "upload": []}

    def queue(self, key: str, *responses: Any) -> None:
        self.responses[key].extend(responses)

    def _key(self, request: httpx.Request) -> str:
        if request.url.path == "/execute/Fileman/upload_files":
            return "upload"
        return request.url.params.get("cpanel_jsonapi_func", "")

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = self._key(request)
        queued = self.responses.get(key)
        if not queued:
            default = uapi_success() if key == "upload" else api2_success()
            return httpx.Response(200, json=default)
        response = queued.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, httpx.Response):
            return response
        return httpx.Response(200, json=response)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, key: str) -> list[httpx.Request]:
        return [r for r in self.requests if self._key(r) == key]
