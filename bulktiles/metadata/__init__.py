"""
Configuration describing the tile sources to serve.
"""
