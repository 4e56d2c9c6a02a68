"""Table ingestion pipeline.

This package decodes compressed inputs, parses tabular formats, and runs
the per-row preprocess and validate pipeline against a compiled schema.
"""
