"""
Market data module.

Candle bars and the rolling price history the transition rule reads its
latest close from.
"""
