"""Correlated-dimension selection."""

from .zscore import ZScoreDimensionSelector, average_spread, spread_zscores

__all__ = [
    'ZScoreDimensionSelector',
    'average_spread',
    'spread_zscores'
]
