"""
In-memory world module.

Rectangular grid of market participants paired with a price history,
satisfying the read surface the transition rule depends on.
"""
