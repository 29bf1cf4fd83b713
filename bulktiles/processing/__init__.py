"""
The bulk pipeline: descendant enumeration, tile fetching, and bundling.
"""
