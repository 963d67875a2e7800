"""
Top-level package for the Agri Market API.

A marketplace connecting farmers, buyers and agricultural service
providers.  All functionality lives in submodules under ``app``.
"""

__version__ = "1.0.0"

__all__ = []
