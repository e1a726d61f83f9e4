"""httpx wrapper that speaks to the cPanel API2 and UAPI endpoints."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from cpanel_uploader._version import __version__
from cpanel_uploader.exceptions import ApplicationError, HttpStatusError, TransportError
from cpanel_uploader.models import Credentials

logger = logging.getLogger(__name__)

JSON_API_PATH = "/json-api/cpanel"
API2_VERSION = "2"
DEFAULT_USER_AGENT = f"cpanel-uploader/{__version__}"


class CpanelTransport:
    """Authenticated HTTP session against one cPanel host.

    Every failure is raised as one of TransportError, HttpStatusError or
    ApplicationError (for bodies that are not JSON).
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        timeout: float,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._credentials = credentials
        self._client = httpx.Client(
            base_url=credentials.host_base_url,
            headers={
                "Authorization": credentials.authorization_header,
                "User-Agent": DEFAULT_USER_AGENT,
            },
            timeout=timeout,
            transport=transport,
        )

    def api2(self, module: str, function: str, params: dict[str, str]) -> Any:
        """Call an API2 function through the JSON-RPC style endpoint."""
        query = {
            "cpanel_jsonapi_user": self._credentials.username,
            "cpanel_jsonapi_apiversion": API2_VERSION,
            "cpanel_jsonapi_module": module,
            "cpanel_jsonapi_func": function,
            **params,
        }
        return self._send("GET", JSON_API_PATH, params=query)

    def uapi_post(
        self,
        module: str,
        function: str,
        *,
        data: dict[str, str] | None = None,
        files: list[tuple[str, tuple[str, bytes, str]]] | None = None,
    ) -> Any:
        """POST to a UAPI function, multipart when files are given."""
        return self._send("POST", f"/execute/{module}/{function}", data=data, files=files)

    def _send(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self._credentials.host_base_url}{path}"
        logger.debug(f"{method} {url}")
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.TransportError as e:
            raise TransportError(f"Network error: {e}", url=url) from e

        if not response.is_success:
            raise HttpStatusError(response.status_code, response.reason_phrase, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise ApplicationError(
                f"Response from {path} was not valid JSON", payload=response.text
            ) from e

    def close(self) -> None:
        self._client.close()
