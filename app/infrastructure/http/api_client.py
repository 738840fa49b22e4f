from __future__ import annotations

import logging
from typing import Any

import httpx

from app.application.exceptions import OnboardingApiError, UnauthorizedError
from app.application.ports.key_value_store import KeyValueStorePort
from app.core.config import settings

DEFAULT_ERROR_MESSAGE = "Something went wrong"


class ApiClient:
    """
    JSON client for the platform REST API.

    Injects the bearer token kept in local storage, unwraps the
    ``{success, statusCode, message, data}`` envelope and turns failures into
    OnboardingApiError(message, status). A 401 clears the stored credentials
    before raising UnauthorizedError.
    """

    def __init__(
        self,
        local_storage: KeyValueStorePort,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._local_storage = local_storage
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            timeout=timeout if timeout is not None else settings.API_TIMEOUT_SECONDS,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )
        self._logger = logging.getLogger(__name__)

    async def get(self, path: str) -> Any:
        return await self.request("GET", path)

    async def post(self, path: str, payload: dict[str, Any] | None = None) -> Any:
        return await self.request("POST", path, payload)

    async def request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        headers = {}
        token = self._local_storage.get(settings.ACCESS_TOKEN_KEY)
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            resp = await self._client.request(method, path, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            self._logger.error("API request timed out", extra={"error": f"{method} {path}"})
            raise OnboardingApiError("Request timed out") from e
        except httpx.HTTPError as e:
            self._logger.error("API request failed", extra={"error": str(e)})
            raise OnboardingApiError(DEFAULT_ERROR_MESSAGE) from e

        if resp.status_code >= 400:
            self._raise_for_response(resp)

        body = _json_or_none(resp)
        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body

    def _raise_for_response(self, resp: httpx.Response) -> None:
        body = _json_or_none(resp)
        message = None
        if isinstance(body, dict):
            message = body.get("message") or body.get("detail")
        if not isinstance(message, str) or not message:
            message = DEFAULT_ERROR_MESSAGE

        self._logger.warning(
            "API request rejected",
            extra={"status": resp.status_code, "error": message},
        )

        if resp.status_code == 401:
            self._local_storage.delete(settings.ACCESS_TOKEN_KEY)
            self._local_storage.delete(settings.USER_KEY)
            raise UnauthorizedError(message, resp.status_code)
        raise OnboardingApiError(message, resp.status_code)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _json_or_none(resp: httpx.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return None
