"""
Resolution of tile coordinates into stored tile bytes.
"""

import asyncio
import itertools
from typing import AsyncIterator, Iterable, NamedTuple

import structlog

from bulktiles.stores.core import TileCoordinate, TileNotFoundError, TileStore


class TileRecord(NamedTuple):
    coordinate: TileCoordinate
    payload: bytes


async def fetch_tile(store: TileStore, coordinate: TileCoordinate) -> TileRecord | None:
    """
    Read one tile. Absent tiles and store faults both come back as None so
    the caller can move on; only the log tells them apart.
    """
    try:
        payload = await asyncio.to_thread(
            store.get_tile, coordinate.zoom, coordinate.x, coordinate.y
        )
    except TileNotFoundError:
        structlog.get_logger().debug("fetch.tile_missing", tile=coordinate.name)
        return None
    except Exception as e:
        # Any other failure reading a single tile only drops that tile.
        structlog.get_logger().warning(
            "fetch.store_fault",
            tile=coordinate.name,
            store_path=store.path,
            error=str(e),
            error_type=type(e).__name__,
        )
        return None

    return TileRecord(coordinate=coordinate, payload=payload)


async def fetch_tiles(
    store: TileStore,
    coordinates: Iterable[TileCoordinate],
    concurrency: int = 1,
) -> AsyncIterator[TileRecord]:
    """
    Yield a record for every coordinate that has a stored tile, in the
    order the coordinates were given. Up to `concurrency` reads are in
    flight at once.
    """
    coordinates = iter(coordinates)

    while window := list(itertools.islice(coordinates, max(concurrency, 1))):
        if len(window) == 1:
            results = [await fetch_tile(store, window[0])]
        else:
            results = await asyncio.gather(
                *(fetch_tile(store, coordinate) for coordinate in window)
            )

        for record in results:
            if record is not None:
                yield record
