"""Record schema compilation.

This package turns annotated record types into immutable field rules.
It owns column naming, tag grammar parsing, and schema file loading.
"""
