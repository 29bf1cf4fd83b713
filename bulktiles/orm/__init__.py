"""
ORM mappings for the MBTiles tables.
"""

from .metadata import MetadataItem
from .tiles import Tile

__all__ = (Tile, MetadataItem)
