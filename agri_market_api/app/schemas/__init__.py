"""
Pydantic schema definitions for API payloads and stored records.

Each entity (users, products, services, orders, reviews, testimonials)
defines its own models: ``XCreate`` for insert payloads, ``XUpdate``
for partial updates and ``XRead`` for materialized records returned
by the storage layer.  All of them derive from ``CamelModel`` so the
JSON exchanged with the browser client uses camelCase keys while
Python code uses snake_case attributes.
"""

from .base import CamelModel

__all__ = ["CamelModel"]
