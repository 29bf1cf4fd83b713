import json
import sqlite3
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine

from bulktiles.orm import MetadataItem, Tile
from bulktiles.server import create_app
from bulktiles.settings import Settings


def write_mbtiles(
    path: Path,
    tiles: dict[tuple[int, int, int], bytes],
    metadata: dict[str, str] | None = None,
) -> Path:
    """
    Write an MBTiles file holding `tiles`, keyed by XYZ coordinates.
    """
    engine = create_engine(f"sqlite:///{path}")
    SQLModel.metadata.create_all(
        engine, tables=[Tile.__table__, MetadataItem.__table__]
    )

    with Session(engine) as session:
        for name, value in (metadata or {}).items():
            session.add(MetadataItem(name=name, value=value))

        for (zoom, x, y), data in tiles.items():
            session.add(
                Tile(
                    zoom_level=zoom,
                    tile_column=x,
                    tile_row=(1 << zoom) - 1 - y,
                    tile_data=data,
                )
            )

        session.commit()

    engine.dispose()

    return path


@pytest.fixture
def single_tile_mbtiles(tmp_path: Path) -> Path:
    return write_mbtiles(
        tmp_path / "single.mbtiles",
        {(10, 5, 5): b"tile-10-5-5"},
        metadata={"name": "single", "format": "pbf", "minzoom": "10", "maxzoom": "10"},
    )


@pytest.fixture
def pyramid_mbtiles(tmp_path: Path) -> Path:
    tiles = {
        (10, 5, 5): b"root",
        (11, 10, 10): b"child-a",
        (11, 11, 11): b"child-d",
        (12, 20, 21): b"grandchild",
        # Outside the (10, 5, 5) pyramid.
        (11, 12, 12): b"cousin",
    }

    return write_mbtiles(
        tmp_path / "pyramid.mbtiles",
        tiles,
        metadata={"name": "pyramid", "minzoom": "10", "maxzoom": "12"},
    )


@pytest.fixture
def settings(single_tile_mbtiles: Path) -> Settings:
    return Settings(mbtiles=single_tile_mbtiles, min_zoom=10)


@pytest.fixture
def client(settings: Settings):
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture
def sources_config(tmp_path: Path, pyramid_mbtiles: Path) -> Path:
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"sources": {"pyramid": {"path": str(pyramid_mbtiles)}}}))
    return config


@pytest.fixture
def mixed_mbtiles(tmp_path: Path) -> Path:
    """
    A (10, 5, 5) pyramid holding a zero-length tile and a row whose
    tile_data is TEXT rather than a blob.
    """
    path = write_mbtiles(
        tmp_path / "mixed.mbtiles",
        {(10, 5, 5): b"root", (11, 10, 10): b""},
        metadata={"minzoom": "10", "maxzoom": "11"},
    )

    with sqlite3.connect(path) as conn:
        conn.execute(
            "INSERT INTO tiles (zoom_level, tile_column, tile_row, tile_data) "
            "VALUES (11, 11, ?, 'text-not-blob')",
            ((1 << 11) - 1 - 11,),
        )

    return path
