"""
Document browser core package.

This package currently focuses on the content control subsystem. It exposes
dataclasses for items and parsed content, a directory-backed item source,
content-type resolution, pluggable parse engines and the `Control` state
machine that drives an item from slug to parsed tree.
"""
