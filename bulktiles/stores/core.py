"""
Core (abstract) tile store.
"""

from abc import ABC, abstractmethod

import structlog
from pydantic import BaseModel, ConfigDict, model_validator
from structlog.types import FilteringBoundLogger


class TileNotFoundError(Exception):
    pass


class StoreError(Exception):
    """Raised when a tile store cannot be opened or read."""

    pass


class TileCoordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    zoom: int
    x: int
    y: int

    @model_validator(mode="after")
    def check_bounds(self) -> "TileCoordinate":
        if self.zoom < 0:
            raise ValueError(f"zoom must be non-negative, got {self.zoom}")

        extent = 1 << self.zoom

        if not (0 <= self.x < extent and 0 <= self.y < extent):
            raise ValueError(f"tile {self.name} lies outside the zoom {self.zoom} grid")

        return self

    @property
    def name(self) -> str:
        return f"{self.zoom}/{self.x}/{self.y}"


class StoreMetadata(BaseModel):
    name: str | None = None
    format: str | None = None
    scheme: str | None = None
    bounds: list[float] | None = None
    minzoom: int
    maxzoom: int


class TileStore(ABC):
    path: str
    logger: FilteringBoundLogger

    def __init__(self, path: str):
        self.path = path
        self.logger = structlog.get_logger()

    @abstractmethod
    def get_metadata(self) -> StoreMetadata:
        raise NotImplementedError

    @abstractmethod
    def get_tile(self, zoom: int, x: int, y: int) -> bytes:
        """
        Return the stored bytes for a tile. Raises TileNotFoundError if
        there is no such tile and StoreError on any other failure.
        """
        raise NotImplementedError

    def close(self):
        return
