import pytest

from bulktiles.processing.descendants import descendant_count, enumerate_descendants
from bulktiles.stores.core import TileCoordinate


def is_descendant(tile: TileCoordinate, root: TileCoordinate) -> bool:
    shift = tile.zoom - root.zoom
    return shift >= 0 and (tile.x >> shift, tile.y >> shift) == (root.x, root.y)


@pytest.mark.parametrize(
    "root,max_zoom",
    [
        (TileCoordinate(zoom=0, x=0, y=0), 3),
        (TileCoordinate(zoom=10, x=5, y=5), 12),
        (TileCoordinate(zoom=4, x=15, y=0), 6),
        (TileCoordinate(zoom=7, x=3, y=100), 7),
    ],
)
def test_count_order_and_containment(root, max_zoom):
    tiles = list(enumerate_descendants(root, max_zoom))

    assert len(tiles) == (4 ** (max_zoom - root.zoom + 1) - 1) // 3
    assert len(tiles) == descendant_count(root.zoom, max_zoom)
    assert tiles[0] == root
    assert [(t.zoom, t.x, t.y) for t in tiles] == sorted(
        (t.zoom, t.x, t.y) for t in tiles
    )
    assert len(set(tiles)) == len(tiles)
    assert all(is_descendant(t, root) for t in tiles)


def test_first_level_children():
    tiles = list(enumerate_descendants(TileCoordinate(zoom=1, x=1, y=0), 2))

    assert [t.name for t in tiles] == ["1/1/0", "2/2/0", "2/2/1", "2/3/0", "2/3/1"]


def test_root_deeper_than_max_zoom_is_empty():
    root = TileCoordinate(zoom=12, x=1, y=1)

    assert list(enumerate_descendants(root, 10)) == []
    assert descendant_count(12, 10) == 0


def test_enumeration_is_lazy():
    tiles = enumerate_descendants(TileCoordinate(zoom=0, x=0, y=0), 30)

    assert next(tiles).name == "0/0/0"
    assert next(tiles).name == "1/0/0"


def test_coordinate_rejects_out_of_grid():
    with pytest.raises(ValueError):
        TileCoordinate(zoom=2, x=4, y=0)

    with pytest.raises(ValueError):
        TileCoordinate(zoom=-1, x=0, y=0)
