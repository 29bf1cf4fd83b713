"""
Tile store that reads from an MBTiles (SQLite) file.
"""

from pathlib import Path

from sqlalchemy import Engine, func, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, create_engine, select

from bulktiles.orm import MetadataItem, Tile

from .core import StoreError, StoreMetadata, TileNotFoundError, TileStore

REQUIRED_TABLES = {"tiles", "metadata"}


class MBTilesStore(TileStore):
    """
    Read-only access to an MBTiles file. Tiles are addressed with XYZ
    coordinates; the flip to the TMS rows used on disk happens here.
    """

    engine: Engine

    def __init__(self, path: str | Path):
        super().__init__(path=str(path))

        if not Path(path).is_file():
            raise StoreError(f"MBTiles file {path} does not exist")

        self.engine = create_engine(f"sqlite:///{Path(path).resolve()}")

        try:
            inspector = inspect(self.engine)
            available = set(inspector.get_table_names()) | set(
                inspector.get_view_names()
            )
        except SQLAlchemyError as e:
            self.engine.dispose()
            raise StoreError(f"Unable to open {path}: {e}") from e

        if missing := REQUIRED_TABLES - available:
            self.engine.dispose()
            raise StoreError(
                f"{path} is not an MBTiles file (missing {', '.join(sorted(missing))})"
            )

        self.logger = self.logger.bind(store_path=self.path)

    def get_metadata(self) -> StoreMetadata:
        try:
            with Session(self.engine) as session:
                values = {
                    item.name: item.value
                    for item in session.exec(select(MetadataItem)).all()
                }

                if values.get("minzoom") is None or values.get("maxzoom") is None:
                    low, high = session.exec(
                        select(func.min(Tile.zoom_level), func.max(Tile.zoom_level))
                    ).one()
                    if values.get("minzoom") is None:
                        values["minzoom"] = low
                    if values.get("maxzoom") is None:
                        values["maxzoom"] = high
        except SQLAlchemyError as e:
            raise StoreError(f"Unable to read metadata from {self.path}: {e}") from e

        if values["maxzoom"] is None:
            raise StoreError(f"{self.path} has no maxzoom and contains no tiles")

        bounds = values.get("bounds")

        try:
            metadata = StoreMetadata(
                name=values.get("name"),
                format=values.get("format"),
                scheme=values.get("scheme"),
                bounds=[float(b) for b in bounds.split(",")] if bounds else None,
                minzoom=int(values["minzoom"] if values["minzoom"] is not None else 0),
                maxzoom=int(values["maxzoom"]),
            )
        except ValueError as e:
            raise StoreError(f"Invalid metadata in {self.path}: {e}") from e

        self.logger.debug(
            "mbtiles.metadata", minzoom=metadata.minzoom, maxzoom=metadata.maxzoom
        )

        return metadata

    def get_tile(self, zoom: int, x: int, y: int) -> bytes:
        tile_row = (1 << zoom) - 1 - y

        try:
            with Session(self.engine) as session:
                data = session.exec(
                    select(Tile.tile_data).where(
                        Tile.zoom_level == zoom,
                        Tile.tile_column == x,
                        Tile.tile_row == tile_row,
                    )
                ).first()
        except (SQLAlchemyError, TypeError, ValueError) as e:
            raise StoreError(f"Unable to read tile {zoom}/{x}/{y}: {e}") from e

        if data is None:
            raise TileNotFoundError(f"Tile {zoom}/{x}/{y} does not exist")

        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise StoreError(
                f"Tile {zoom}/{x}/{y} holds {type(data).__name__}, not a blob"
            )

        return bytes(data)

    def close(self):
        self.engine.dispose()
