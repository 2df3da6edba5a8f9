"""State/store layer.

This package is the single owner of the last-known accessory state that
poll cycles write and characteristic handlers read.
"""
