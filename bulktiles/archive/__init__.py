"""
Archive assembly: tar packing, compression, and the supported formats.
"""
