"""Output emitters for processed tables.

This package serializes post-pipeline rows into the canonical output
format and wraps the bytes in a seekable stream.
"""
