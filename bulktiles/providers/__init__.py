"""
Process-wide services shared by every request: the source registry and
the response size cache.
"""
