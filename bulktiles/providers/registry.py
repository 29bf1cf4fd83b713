"""
Registry of the tile sources served by this process.
"""

from pathlib import Path

import structlog
from structlog.types import FilteringBoundLogger

from bulktiles.errors import SourceNotFoundError
from bulktiles.metadata.core import SourcesConfiguration
from bulktiles.stores.core import StoreError, StoreMetadata, TileStore
from bulktiles.stores.mbtiles import MBTilesStore

DEFAULT_SOURCE_ID = "default"


class StartupFailure(Exception):
    """Raised when a configured store cannot be opened or described."""

    pass


class SourceDescriptor:
    source_id: str
    store: TileStore
    metadata: StoreMetadata

    def __init__(self, source_id: str, store: TileStore, metadata: StoreMetadata):
        self.source_id = source_id
        self.store = store
        self.metadata = metadata

    @property
    def max_zoom(self) -> int:
        return self.metadata.maxzoom


def open_store(source_id: str, path: Path) -> SourceDescriptor:
    """
    Open the store at `path` and read its metadata. Any failure is
    reported as a StartupFailure naming the source.
    """
    try:
        store = MBTilesStore(path)
    except StoreError as e:
        raise StartupFailure(f"Could not open source '{source_id}': {e}") from e

    try:
        metadata = store.get_metadata()
    except StoreError as e:
        store.close()
        raise StartupFailure(
            f"Could not read metadata for source '{source_id}': {e}"
        ) from e

    return SourceDescriptor(source_id=source_id, store=store, metadata=metadata)


class SourceRegistry:
    sources: dict[str, SourceDescriptor]
    logger: FilteringBoundLogger

    def __init__(self):
        self.sources = {}
        self.logger = structlog.get_logger()

    def __contains__(self, source_id: str) -> bool:
        return source_id in self.sources

    def __iter__(self):
        return iter(self.sources.values())

    def __len__(self) -> int:
        return len(self.sources)

    def add(self, descriptor: SourceDescriptor):
        if (previous := self.sources.get(descriptor.source_id)) is not None:
            previous.store.close()

        self.sources[descriptor.source_id] = descriptor

        self.logger.info(
            "registry.source_added",
            source_id=descriptor.source_id,
            store_path=descriptor.store.path,
            minzoom=descriptor.metadata.minzoom,
            maxzoom=descriptor.metadata.maxzoom,
        )

    def resolve(self, source_id: str) -> SourceDescriptor:
        try:
            return self.sources[source_id]
        except KeyError:
            raise SourceNotFoundError(source_id)

    def close(self):
        for descriptor in self.sources.values():
            descriptor.store.close()

        self.sources = {}

    @classmethod
    def from_configuration(
        cls,
        mbtiles: Path | None = None,
        config: SourcesConfiguration | None = None,
    ) -> "SourceRegistry":
        """
        Build the registry eagerly. The single store (if any) is served as
        'default'; entries from the configuration follow and may replace it.
        """
        registry = cls()

        try:
            if mbtiles is not None:
                registry.add(open_store(DEFAULT_SOURCE_ID, mbtiles))

            if config is not None:
                for source_id, source in config.sources.items():
                    registry.add(open_store(source_id, source.path))
        except StartupFailure:
            registry.close()
            raise

        return registry
