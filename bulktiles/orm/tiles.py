"""
Spec for the MBTiles tiles table.

Rows are indexed by (zoom_level, tile_column, tile_row), with tile_row
counted from the bottom of the grid (TMS order).
"""

from sqlmodel import Field, SQLModel


class Tile(SQLModel, table=True):
    __tablename__ = "tiles"

    # MBTiles only guarantees a unique index over these three columns, and
    # the table may be a view. The mapping treats them as the primary key.
    zoom_level: int = Field(primary_key=True, description="The zoom level of this tile.")
    tile_column: int = Field(primary_key=True, description="The x coordinate of this tile.")
    tile_row: int = Field(primary_key=True, description="The TMS y coordinate of this tile.")

    tile_data: bytes | None = Field(description="The encoded tile payload.")
