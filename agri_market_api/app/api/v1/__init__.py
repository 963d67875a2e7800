"""
Version 1 of the API.

This subpackage bundles all endpoints for the first public version of
the marketplace API.  It is mounted under ``/api``, the prefix the
browser client uses.  Breaking changes should go into a new version
subpackage (e.g. ``v2``).
"""
