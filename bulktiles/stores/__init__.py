"""
Tile stores: the persistence layer mapping (zoom, x, y) to tile bytes.
"""
