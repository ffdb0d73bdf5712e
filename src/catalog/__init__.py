"""Catalog API.

A small REST backend exposing category and product resources, backed by
either an in-memory store or a relational database.
"""

__version__ = "0.1.0"
