"""
Bulk downloads of tile pyramids over HTTP.
"""
