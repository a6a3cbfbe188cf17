"""Resolve gaodun course catalogs into downloadable media descriptors."""

__version__ = "0.1.0"
