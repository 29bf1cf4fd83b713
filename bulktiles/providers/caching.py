"""
Caches for the byte length of bulk responses.
"""

from abc import ABC, abstractmethod

import structlog
from cachetools import LFUCache
from pydantic import BaseModel, ConfigDict
from structlog.types import FilteringBoundLogger


class CacheKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_id: str
    zoom: int
    x: int
    y: int
    ext: str

    @property
    def hash(self) -> str:
        return f"{self.source_id}/{self.zoom}/{self.x}/{self.y}.{self.ext}"


class SizeCache(ABC):
    logger: FilteringBoundLogger

    def __init__(self):
        self.logger = structlog.get_logger()

    @abstractmethod
    def get(self, key: CacheKey) -> int | None:
        raise NotImplementedError

    @abstractmethod
    def put(self, key: CacheKey, length: int) -> None:
        raise NotImplementedError


class PassThroughSizeCache(SizeCache):
    def get(self, key: CacheKey) -> int | None:
        """
        A cache that does nothing. It is used when caching is disabled.
        """
        self.logger.debug("size_cache.passthrough.get", key=key.hash)
        return None

    def put(self, key: CacheKey, length: int) -> None:
        """
        A cache that does nothing. It is used when caching is disabled.
        """
        self.logger.debug("size_cache.passthrough.put", key=key.hash)


class InMemorySizeCache(SizeCache):
    """
    Process-wide mapping of response identity to response length.

    Without a `max_entries` bound the mapping is never evicted and never
    invalidated, so it grows for the life of the process. With a bound,
    the least frequently used entries are dropped first.
    """

    cache: dict[str, int] | LFUCache

    def __init__(self, max_entries: int | None = None):
        self.cache = {} if max_entries is None else LFUCache(maxsize=max_entries)
        super().__init__()

    def __len__(self) -> int:
        return len(self.cache)

    def get(self, key: CacheKey) -> int | None:
        log = self.logger.bind(key=key.hash)

        length = self.cache.get(key.hash, None)

        if length is None:
            log.debug("size_cache.miss")
            return None

        log.debug("size_cache.hit", length=length)
        return length

    def put(self, key: CacheKey, length: int) -> None:
        self.cache[key.hash] = length
        self.logger.debug("size_cache.put", key=key.hash, length=length)
