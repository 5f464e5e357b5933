"""
Tooling cost engine.

Shorthand measurement text → measurement set → volume formula → weight,
plus a dated price history → unit price, combined into a rounded total.
Pure functions only; catalogs and price histories are handed in already fetched.
"""

__version__ = "1.0.0"
