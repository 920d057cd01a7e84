"""
Descriptor cache.

Wraps a DescriptorStore with a freshness window and a fetch retry
policy. Reads inside the window reuse the cached list; invalidate()
forces the next read to hit the store.
"""

import asyncio
import logging
import time
from collections.abc import Callable

from dynaform.config import get_config
from dynaform.errors import FetchError
from dynaform.models.field_descriptor import FieldDescriptor
from dynaform.store.base import DescriptorStore

logger = logging.getLogger("dynaform.store")


class DescriptorCache:
    """
    Cached, retrying reader for a descriptor store.

    Args:
        store: The underlying descriptor store.
        stale_time: Freshness window in seconds. If None, uses config.stale_time_seconds.
        retries: Extra fetch attempts after a failure. If None, uses config.fetch_retries.
        retry_delay: Base delay between attempts, doubled each time.
            If None, uses config.retry_delay.
        clock: Monotonic time source.
    """

    def __init__(
        self,
        store: DescriptorStore,
        stale_time: float | None = None,
        retries: int | None = None,
        retry_delay: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        config = get_config()
        self.store = store
        self.stale_time = stale_time if stale_time is not None else config.stale_time_seconds
        self.retries = retries if retries is not None else config.fetch_retries
        self.retry_delay = retry_delay if retry_delay is not None else config.retry_delay
        self._clock = clock
        self._data: list[FieldDescriptor] | None = None
        self._fetched_at: float | None = None

    @property
    def is_fresh(self) -> bool:
        if self._data is None or self._fetched_at is None:
            return False
        return self._clock() - self._fetched_at < self.stale_time

    async def get(self) -> list[FieldDescriptor]:
        """
        Return the descriptor list, fetching only when stale.

        Raises:
            FetchError: If every attempt failed.
        """
        if self.is_fresh:
            logger.debug("Using cached descriptor list")
            return [d.model_copy(deep=True) for d in self._data]

        attempts = self.retries + 1
        last_error: FetchError | None = None
        for attempt in range(attempts):
            try:
                descriptors = await self.store.fetch()
            except FetchError as e:
                last_error = e
                logger.warning(f"Fetch attempt {attempt + 1}/{attempts} failed: {e.message}")
                if attempt + 1 < attempts and self.retry_delay > 0:
                    await asyncio.sleep(self.retry_delay * 2**attempt)
                continue

            self._data = descriptors
            self._fetched_at = self._clock()
            logger.info(f"Fetched {len(descriptors)} field descriptors")
            return [d.model_copy(deep=True) for d in descriptors]

        raise FetchError(
            "Failed to fetch form fields",
            details={"attempts": attempts, "cause": last_error.message if last_error else None},
        ) from last_error

    def invalidate(self) -> None:
        """Drop the cached list so the next get() refetches."""
        self._fetched_at = None
