"""
Drives a single bulk request: validation, fetching, packing, compression,
and bookkeeping in the size cache.
"""

from time import perf_counter
from typing import NamedTuple

import structlog
from pydantic import BaseModel
from structlog.types import FilteringBoundLogger

from bulktiles.archive.compression import create_compressor
from bulktiles.archive.formats import ArchiveFormat, resolve_format
from bulktiles.archive.packer import ArchiveEntry, TarPacker
from bulktiles.errors import ZoomTooLowError
from bulktiles.providers.caching import CacheKey, SizeCache
from bulktiles.providers.registry import SourceDescriptor, SourceRegistry
from bulktiles.stores.core import TileCoordinate

from .descendants import enumerate_descendants
from .fetch import fetch_tiles


class BulkRequest(BaseModel):
    source_id: str
    zoom: int
    x: int
    y: int
    ext: str

    @property
    def cache_key(self) -> CacheKey:
        return CacheKey(
            source_id=self.source_id, zoom=self.zoom, x=self.x, y=self.y, ext=self.ext
        )

    def root(self, max_zoom: int) -> TileCoordinate | None:
        """
        The requested tile, or None if it is deeper than `max_zoom` or lies
        outside the grid for its zoom level (either way it can have no
        stored descendants).
        """
        if self.zoom > max_zoom:
            return None

        extent = 1 << self.zoom

        if not (0 <= self.x < extent and 0 <= self.y < extent):
            return None

        return TileCoordinate(zoom=self.zoom, x=self.x, y=self.y)


class BundleResult(NamedTuple):
    format: ArchiveFormat
    length: int
    content: bytes | None


class Bundler:
    registry: SourceRegistry
    sizes: SizeCache
    min_zoom: int
    fetch_concurrency: int
    archive_mtime: int
    logger: FilteringBoundLogger

    def __init__(
        self,
        registry: SourceRegistry,
        sizes: SizeCache,
        min_zoom: int,
        fetch_concurrency: int = 1,
        archive_mtime: int = 0,
    ):
        self.registry = registry
        self.sizes = sizes
        self.min_zoom = min_zoom
        self.fetch_concurrency = fetch_concurrency
        self.archive_mtime = archive_mtime
        self.logger = structlog.get_logger()

    def validate(self, request: BulkRequest) -> tuple[SourceDescriptor, ArchiveFormat]:
        descriptor = self.registry.resolve(request.source_id)

        if request.zoom < self.min_zoom:
            raise ZoomTooLowError(self.min_zoom)

        return descriptor, resolve_format(request.ext)

    async def build(
        self,
        descriptor: SourceDescriptor,
        root: TileCoordinate | None,
        archive_format: ArchiveFormat,
    ) -> bytes:
        """
        Fetch every stored tile at and below `root`, pack them in canonical
        order, and compress the result.
        """
        packer = TarPacker(mtime=self.archive_mtime)
        compressor = create_compressor(archive_format.encoding)
        chunks = []

        if root is not None:
            coordinates = enumerate_descendants(root, descriptor.max_zoom)

            async for record in fetch_tiles(
                descriptor.store, coordinates, concurrency=self.fetch_concurrency
            ):
                chunks.append(
                    compressor.compress(packer.add(ArchiveEntry.from_record(record)))
                )

        chunks.append(compressor.compress(packer.finalize()))
        chunks.append(compressor.flush())

        self.logger.debug(
            "bundle.packed", source_id=descriptor.source_id, entries=packer.entries
        )

        return b"".join(chunks)

    async def run(self, request: BulkRequest, metadata_only: bool = False) -> BundleResult:
        """
        Serve one request. Metadata-only requests are answered from the size
        cache when possible; everything else runs the full pipeline and
        records the resulting length.
        """
        log = self.logger.bind(
            source_id=request.source_id,
            tile=f"{request.zoom}/{request.x}/{request.y}",
            ext=request.ext,
        )

        descriptor, archive_format = self.validate(request)
        key = request.cache_key

        if metadata_only and (length := self.sizes.get(key)) is not None:
            log.debug("bundle.size_cached", length=length)
            return BundleResult(format=archive_format, length=length, content=None)

        start = perf_counter()
        content = await self.build(
            descriptor, request.root(descriptor.max_zoom), archive_format
        )
        self.sizes.put(key, len(content))

        log.info(
            "bundle.built",
            length=len(content),
            elapsed=perf_counter() - start,
            metadata_only=metadata_only,
        )

        return BundleResult(
            format=archive_format,
            length=len(content),
            content=None if metadata_only else content,
        )
