"""HTTP client for the hosted record service."""

from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from taskflow.config import BackendConfig
from taskflow.exceptions import RecordServiceError
from taskflow.utils.logger import get_logger


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class RecordServiceClient:
    """Client for the record service CRUD and auth endpoints.

    Constructed by the application entry point and injected into the
    repositories that need it; call :meth:`close` (or use ``async with``)
    when done.
    """

    def __init__(
        self,
        endpoint: str,
        client_id: str,
        *,
        token: Optional[str] = None,
        timeout: float = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = endpoint.rstrip("/")
        self.client_id = client_id
        self.token = token
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_config(
        cls, backend: BackendConfig, token: Optional[str] = None
    ) -> "RecordServiceClient":
        return cls(
            backend.endpoint,
            backend.client_id,
            token=token,
            timeout=backend.timeout,
        )

    def _get_headers(self, skip_auth: bool = False) -> dict[str, str]:
        """Get HTTP headers with the client id and session token."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "X-Client-Id": self.client_id,
        }
        if self.token and not skip_auth:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "RecordServiceClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[dict[str, Any]] = None,
        skip_auth: bool = False,
    ) -> dict[str, Any]:
        """Make a request and return the decoded JSON body.

        A single attempt is made; every failure is reported as
        :class:`RecordServiceError`.
        """
        client = self._get_client()
        url = path if path.startswith("/") else f"/{path}"
        get_logger("api").debug("%s %s", method, url)

        try:
            response = await client.request(
                method,
                url,
                json=json,
                headers=self._get_headers(skip_auth=skip_auth),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RecordServiceError(
                _error_message(e.response), status_code=e.response.status_code
            ) from e
        except httpx.RequestError as e:
            raise RecordServiceError(f"Could not reach record service: {e}") from e

        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError as e:
            raise RecordServiceError(
                "Record service returned invalid JSON", status_code=response.status_code
            ) from e
        return body if isinstance(body, dict) else {"data": body}

    def _records_path(self, collection: str, record_id: Optional[str] = None) -> str:
        path = f"/collections/{collection}/records"
        if record_id is not None:
            path = f"{path}/{record_id}"
        return path

    async def fetch_records(
        self,
        collection: str,
        *,
        fields: Optional[list[str]] = None,
        order_by: Optional[list[dict[str, str]]] = None,
    ) -> list[dict[str, Any]]:
        """Query a collection."""
        query: dict[str, Any] = {}
        if fields:
            query["fields"] = fields
        if order_by:
            query["orderBy"] = order_by
        body = await self.request(
            "POST", f"{self._records_path(collection)}/query", json=query
        )
        return body.get("data") or []

    async def create_record(
        self, collection: str, record: dict[str, Any]
    ) -> dict[str, Any]:
        """Create a record, stamping createdAt and updatedAt."""
        now = _timestamp()
        payload = {**record, "createdAt": now, "updatedAt": now}
        body = await self.request(
            "POST", self._records_path(collection), json={"record": payload}
        )
        return body.get("data") or {}

    async def update_record(
        self, collection: str, record_id: str, record: dict[str, Any]
    ) -> dict[str, Any]:
        """Replace a record, refreshing updatedAt."""
        payload = {**record, "updatedAt": _timestamp()}
        body = await self.request(
            "PUT",
            self._records_path(collection, record_id),
            json={"record": payload},
        )
        return body.get("data") or {}

    async def delete_record(self, collection: str, record_id: str) -> dict[str, Any]:
        """Delete a record."""
        body = await self.request("DELETE", self._records_path(collection, record_id))
        return body.get("data") or {}

    async def login(self, email: str, password: str) -> dict[str, Any]:
        """Sign in with email and password."""
        return await self.request(
            "POST",
            "/auth/login",
            json={"email": email, "password": password},
            skip_auth=True,
        )

    async def signup(
        self, email: str, password: str, first_name: Optional[str] = None
    ) -> dict[str, Any]:
        """Create an account and sign in."""
        data: dict[str, Any] = {"email": email, "password": password}
        if first_name:
            data["firstName"] = first_name
        return await self.request("POST", "/auth/signup", json=data, skip_auth=True)


def _error_message(response: httpx.Response) -> str:
    """Best-effort human readable message from an error response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            if isinstance(body.get(key), str):
                return body[key]
    return f"Record service returned HTTP {response.status_code}"
