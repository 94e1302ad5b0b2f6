"""HTTP client for the graph widget data endpoint."""

from typing import Optional

import httpx

from . import __version__
from .exceptions import GraphWidgetAPIError
from .models import Period, Record

DATA_PATH = "/graph-widget/v1/data"


class GraphWidgetClient:
    """HTTP client for fetching record windows from the widget API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Base URL of the server (e.g., http://127.0.0.1:8000)
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used to stub the server in tests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "User-Agent": f"GraphWidget/{__version__}",
                    "Accept": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_window(self, period: Period) -> list[Record]:
        """Get the records that fall in a period.

        Args:
            period: Trailing window to fetch

        Returns:
            Records in the order the server returned them

        Raises:
            GraphWidgetAPIError: On transport failure, non-2xx status or a malformed body
        """
        client = await self._get_client()

        try:
            response = await client.get(DATA_PATH, params={"period": period.value})
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise GraphWidgetAPIError(
                f"Request for period {period.value} failed with status {e.response.status_code}"
            )
        except httpx.HTTPError as e:
            raise GraphWidgetAPIError(f"Request for period {period.value} failed: {e}")

        try:
            data = response.json()
        except ValueError:
            raise GraphWidgetAPIError("Failed to parse data response")

        return self._parse_records(data)

    def _parse_records(self, data: object) -> list[Record]:
        """Parse the JSON array of records."""
        if not isinstance(data, list):
            raise GraphWidgetAPIError(f"Expected a list of records, got {type(data).__name__}")

        records = []
        for index, item in enumerate(data):
            try:
                records.append(Record.from_dict(item))
            except ValueError as e:
                raise GraphWidgetAPIError(f"Malformed record at index {index}: {e}")
        return records
