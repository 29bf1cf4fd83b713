"""
Enumeration of the descendants of a tile in the pyramid.
"""

from typing import Iterator

from bulktiles.stores.core import TileCoordinate


def descendant_count(root_zoom: int, max_zoom: int) -> int:
    """
    Number of coordinates `enumerate_descendants` yields, including the
    root itself: (4^(levels) - 1) / 3.
    """
    if max_zoom < root_zoom:
        return 0

    return (4 ** (max_zoom - root_zoom + 1) - 1) // 3


def enumerate_descendants(
    root: TileCoordinate, max_zoom: int
) -> Iterator[TileCoordinate]:
    """
    Yield the root and every descendant down to `max_zoom` inclusive, in
    ascending (zoom, x, y) order. Nothing is yielded if the root is deeper
    than `max_zoom`.
    """
    for zoom in range(root.zoom, max_zoom + 1):
        span = 1 << (zoom - root.zoom)

        for x in range(root.x * span, (root.x + 1) * span):
            for y in range(root.y * span, (root.y + 1) * span):
                yield TileCoordinate.model_construct(zoom=zoom, x=x, y=y)
