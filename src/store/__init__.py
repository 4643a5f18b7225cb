"""Session and memoization layer.

This module holds the currently loaded datasets and caches derived views
so the SDK only recomputes what an input change invalidated.
"""
