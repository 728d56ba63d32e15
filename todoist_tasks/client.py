"""
Todoist Client - Thin async wrapper around the Todoist REST API v2

Every call:
- sends "Authorization: Bearer <token>" and "Content-Type: application/json"
- raises TodoistApiError on status >= 400 (the body is never parsed)
- raises TodoistTransportError on network failures
- raises MalformedResponseError when a success body has the wrong shape

No retries, no pagination and no timeout override: httpx defaults apply.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from .constants import DEFAULT_BASE_URL
from .errors import MalformedResponseError, TodoistApiError, TodoistTransportError

logger = logging.getLogger(__name__)


class TodoistClient:
    """
    Todoist REST client used by all task shims.

    A fresh httpx.AsyncClient is opened per call, so one TodoistClient can be
    built per task run and thrown away afterwards.

    Example:
        client = TodoistClient(api_token="...")
        task = await client.post("/tasks", {"content": "Review pull requests"})
        projects = await client.get_list("/projects")
    """

    def __init__(
        self,
        api_token: str,
        base_url: str = DEFAULT_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_token = api_token
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    def _get_headers(self) -> dict:
        """Get authorization headers for API requests."""
        return {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json",
        }

    async def _send(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        content: Optional[str] = None,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        logger.debug(f"Todoist {method} {path}")

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.request(
                    method,
                    url,
                    headers=self._get_headers(),
                    params=params,
                    content=content,
                )
        except httpx.TransportError as e:
            raise TodoistTransportError(f"Todoist {method} {path} failed: {e}") from e

        logger.debug(f"Todoist {method} {path} -> {response.status_code}")

        if response.status_code >= 400:
            raise TodoistApiError(response.status_code, response.text)

        return response

    @staticmethod
    def _parse_json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Todoist returned a non-JSON body: {e}", body=response.text
            ) from e

    async def post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """POST a JSON body and return the created/updated object."""
        response = await self._send("POST", path, content=json.dumps(body))
        data = self._parse_json(response)
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Expected a JSON object from POST {path}", body=response.text
            )
        return data

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """GET a single object."""
        response = await self._send("GET", path, params=params)
        data = self._parse_json(response)
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Expected a JSON object from GET {path}", body=response.text
            )
        return data

    async def get_list(
        self, path: str, params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """GET an endpoint that returns a JSON array."""
        response = await self._send("GET", path, params=params)
        data = self._parse_json(response)
        if not isinstance(data, list):
            raise MalformedResponseError(
                f"Expected a JSON array from GET {path}", body=response.text
            )
        return data

    async def delete(self, path: str) -> None:
        """DELETE a resource. Todoist answers 204 with no body."""
        await self._send("DELETE", path)

    async def post_empty(self, path: str) -> None:
        """POST with an empty body, for state transitions like close/reopen."""
        await self._send("POST", path, content="")
