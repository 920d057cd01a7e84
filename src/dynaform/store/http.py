"""
HTTP descriptor store.

Talks to a descriptor API (such as dynaform.server) over httpx:
GET {api_url}/api/form returns the list, POST replaces it.
"""

import logging
from typing import Any

import httpx

from dynaform.config import get_config
from dynaform.errors import DescriptorError, FetchError, SubmitError
from dynaform.models.field_descriptor import (
    FieldDescriptor,
    dump_descriptors,
    parse_descriptors,
)

logger = logging.getLogger("dynaform.store")

FORM_PATH = "/api/form"


class HttpDescriptorStore:
    """
    Descriptor store client for a remote descriptor API.

    Args:
        api_url: Base URL of the API. If None, uses config.api_url.
        timeout: Request timeout in seconds. If None, uses config.request_timeout.
        transport: Optional httpx transport (e.g. httpx.MockTransport in tests).
    """

    def __init__(
        self,
        api_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        config = get_config()
        self.api_url = (api_url or config.api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config.request_timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.api_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def fetch(self) -> list[FieldDescriptor]:
        logger.debug(f"GET {self.api_url}{FORM_PATH}")
        try:
            async with self._client() as client:
                response = await client.get(FORM_PATH)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch form fields: {type(e).__name__}: {e}")
            raise FetchError(
                "Failed to fetch form fields",
                details={"url": f"{self.api_url}{FORM_PATH}", "cause": str(e)},
            ) from e
        except ValueError as e:
            raise FetchError("Descriptor API returned invalid JSON", details={"cause": str(e)}) from e

        try:
            return parse_descriptors(data)
        except DescriptorError as e:
            raise FetchError("Descriptor API returned an invalid form", details=e.details) from e

    async def replace(self, descriptors: list[FieldDescriptor]) -> dict[str, Any]:
        logger.info(f"POST {self.api_url}{FORM_PATH} ({len(descriptors)} fields)")
        try:
            async with self._client() as client:
                response = await client.post(FORM_PATH, json=dump_descriptors(descriptors))
                response.raise_for_status()
                return response.json()
        except httpx.HTTPError as e:
            logger.error(f"Form submission failed: {type(e).__name__}: {e}")
            raise SubmitError(
                "Form submission failed",
                details={"url": f"{self.api_url}{FORM_PATH}", "cause": str(e)},
            ) from e
        except ValueError as e:
            raise SubmitError("Descriptor API returned invalid JSON", details={"cause": str(e)}) from e
